"""
==============================================================================
Authentication Endpoints
==============================================================================

Operator registration, login, token refresh, and password management.

==============================================================================
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.db.models import Operator
from dashboard.core.dependencies import get_current_operator
from dashboard.services.auth_service import AuthService
from dashboard.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    RefreshRequest,
    ChangePasswordRequest,
    OperatorInfo,
    CurrentOperatorResponse,
    CurrentOperatorInfo,
)
from dashboard.schemas.common import MessageResponse


router = APIRouter(prefix="/auth", tags=["Authentication"])


class AuthController:
    """Controller for authentication operations."""

    def __init__(self, db: Session):
        self._service = AuthService(db)

    def _token_response(self, operator: Operator, access_token: str, refresh_token: str) -> TokenResponse:
        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._service.get_token_expiry_seconds(),
            operator=OperatorInfo.model_validate(operator)
        )

    def register(self, request: RegisterRequest) -> TokenResponse:
        """Create an operator account and sign it in."""
        return self._token_response(*self._service.register(
            request.email,
            request.password,
            request.display_name
        ))

    def login(self, request: LoginRequest) -> TokenResponse:
        """Authenticate operator and generate tokens."""
        return self._token_response(*self._service.authenticate(
            request.email,
            request.password
        ))

    def refresh(self, request: RefreshRequest) -> TokenResponse:
        """Refresh tokens."""
        return self._token_response(*self._service.refresh_tokens(request.refresh_token))

    def change_password(self, operator: Operator, request: ChangePasswordRequest) -> MessageResponse:
        """Change operator password."""
        self._service.change_password(operator, request.current_password, request.new_password)
        return MessageResponse(message="Password changed successfully")


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Register a new operator account."""
    controller = AuthController(db)
    return controller.register(request)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate operator and get tokens."""
    controller = AuthController(db)
    return controller.login(request)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(request: RefreshRequest, db: Session = Depends(get_db)):
    """Refresh access token using refresh token."""
    controller = AuthController(db)
    return controller.refresh(request)


@router.post("/logout", response_model=MessageResponse)
async def logout(operator: Operator = Depends(get_current_operator)):
    """
    Sign out.

    Tokens are stateless; the client discards them.
    """
    return MessageResponse(message="Signed out")


@router.get("/me", response_model=CurrentOperatorResponse)
async def get_current_operator_info(operator: Operator = Depends(get_current_operator)):
    """Get current authenticated operator information."""
    return CurrentOperatorResponse(operator=CurrentOperatorInfo.model_validate(operator))


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    operator: Operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Change current operator's password."""
    controller = AuthController(db)
    return controller.change_password(operator, request)
