"""
Authentication API endpoints.

Provides signup, login, and current-officer endpoints for the dashboard.
"""

import logging
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from backend.app.db.session import get_db
from backend.app.models.enums import OfficerRole
from backend.app.schemas.auth import (
    SignupRequest, LoginRequest, OfficerResponse, SignupData, LoginData, LoginUser,
    PermissionsData, NavItemResponse, OfficerListData
)
from backend.app.schemas.common import ApiResponse, ok
from backend.app.core.security import get_password_hash, hash_password_async, verify_password_async
from backend.app.core.jwt import create_officer_token
from backend.app.core.dependencies import CurrentOfficer, get_current_officer
from backend.app.core.exceptions import ConflictError, InvalidCredentialsError, ResourceNotFoundError
from backend.app.core.guards import require_role
from backend.app.core.permissions import get_role_permissions, navigation_items_for
from backend.app.core.roles import format_role
from backend.app.services import officers as officer_service
from backend.app.services.audit import log_auth_event, AuditAction

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger("fleet.auth")

# Checked against when the email is unknown so both failure paths cost one bcrypt round
_UNKNOWN_OFFICER_HASH = get_password_hash("unknown-officer-placeholder")


def _client_ip(request: Request):
    return request.client.host if request.client else None


@router.post("/signup", response_model=ApiResponse[SignupData], status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new officer.

    - All fields are required; role must be a known role (400 otherwise).
    - Email must be unused (409 otherwise).
    - The response never includes the password hash.
    """
    existing = await officer_service.get_officer_by_email(db, payload.email)
    if existing:
        raise ConflictError("Email already registered")

    password_hash = await hash_password_async(payload.password)
    officer = await officer_service.create_officer(
        db,
        full_name=payload.full_name,
        email=payload.email,
        password_hash=password_hash,
        role=payload.role,
    )

    await log_auth_event(
        db=db,
        action=AuditAction.OFFICER_CREATED,
        officer_id=officer.id,
        email=officer.email,
        ip_address=_client_ip(request),
        metadata={"role": officer.role.value}
    )
    logger.info("Officer %s registered with role %s", officer.id, officer.role.value)

    return ok(
        "Officer registered successfully",
        {"officer": OfficerResponse.model_validate(officer)}
    )


@router.post("/login", response_model=ApiResponse[LoginData])
async def login(
    credentials: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Login officer and return JWT token.

    Unknown email and wrong password produce the same 401 response.
    The reason is only recorded in the audit trail.
    """
    officer = await officer_service.get_officer_by_email(db, credentials.email)

    if not officer:
        await verify_password_async(credentials.password, _UNKNOWN_OFFICER_HASH)
        await log_auth_event(
            db=db,
            action=AuditAction.LOGIN_FAILED,
            officer_id=None,
            email=credentials.email,
            ip_address=_client_ip(request),
            metadata={"reason": "Officer not found"}
        )
        raise InvalidCredentialsError()

    if not await verify_password_async(credentials.password, officer.password_hash):
        await log_auth_event(
            db=db,
            action=AuditAction.LOGIN_FAILED,
            officer_id=officer.id,
            email=officer.email,
            ip_address=_client_ip(request),
            metadata={"reason": "Invalid password"}
        )
        raise InvalidCredentialsError()

    token = create_officer_token(officer.id, officer.role)

    await log_auth_event(
        db=db,
        action=AuditAction.LOGIN_SUCCESS,
        officer_id=officer.id,
        email=officer.email,
        ip_address=_client_ip(request)
    )

    return ok(
        "Login successful",
        {
            "token": token,
            "user": LoginUser(id=officer.id, full_name=officer.full_name, role=officer.role),
        }
    )


@router.get("/me", response_model=ApiResponse[OfficerResponse])
async def get_current_officer_info(
    current: CurrentOfficer = Depends(get_current_officer),
    db: AsyncSession = Depends(get_db)
):
    """
    Get current authenticated officer information.

    Raises:
        404: If the officer in the token no longer exists
    """
    officer = await officer_service.get_officer_by_id(db, current.id)
    if not officer:
        raise ResourceNotFoundError("Officer", current.id)

    return ok("Current officer", OfficerResponse.model_validate(officer))


@router.get("/me/permissions", response_model=ApiResponse[PermissionsData])
async def get_current_permissions(current: CurrentOfficer = Depends(get_current_officer)):
    """
    Permissions and navigation for the token's role.

    Computed from the same table the server guards use, so the dashboard
    never keeps its own copy.
    """
    permissions = sorted(p.value for p in get_role_permissions(current.role))
    navigation = [
        NavItemResponse(to=item.to, label=item.label, icon=item.icon, permission=item.permission.value)
        for item in navigation_items_for(current.role)
    ]
    return ok(
        "Role permissions",
        PermissionsData(
            role=current.role,
            label=format_role(current.role),
            permissions=permissions,
            navigation=navigation,
        )
    )


@router.get("/officers", response_model=ApiResponse[OfficerListData])
async def list_officers(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page"),
    current: CurrentOfficer = Depends(require_role([OfficerRole.FLEET_MANAGER])),
    db: AsyncSession = Depends(get_db)
):
    """List all officers (fleet managers only)."""
    officers, total = await officer_service.list_officers(db, offset=(page - 1) * page_size, limit=page_size)
    return ok(
        "Officers",
        OfficerListData(
            officers=[OfficerResponse.model_validate(o) for o in officers],
            total=total,
            page=page,
            page_size=page_size,
        )
    )
