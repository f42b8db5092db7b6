"""
==============================================================================
Authentication Service Module
==============================================================================

Operator registration, login and token management.

Authentication Flow:
-------------------
    ┌─────────────┐
    │   Login     │
    │  Request    │
    └──────┬──────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │Find Operator│────▶│  Not Found  │ → INVALID_CREDENTIALS
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │  Verify     │────▶│  Password   │ → INVALID_CREDENTIALS
    │  Password   │     │   Wrong     │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐     ┌─────────────┐
    │   Check     │────▶│  Account    │ → ACCOUNT_DISABLED
    │   Active    │     │  Disabled   │
    └──────┬──────┘     └─────────────┘
           │
    ┌──────▼──────┐
    │  Generate   │
    │   Tokens    │
    └─────────────┘

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from dashboard.config import get_settings
from dashboard.db.models import Operator
from dashboard.core import exceptions
from dashboard.core.security import SecurityManager, get_security_manager


# Module logger
logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service for operator accounts.

    Example:
        >>> auth_service = AuthService(db_session)
        >>> operator, access, refresh = auth_service.authenticate("ops@shop.rw", "pass123")
        >>> operator, access, refresh = auth_service.refresh_tokens(refresh)
    """

    def __init__(
        self,
        db: Session,
        security: Optional[SecurityManager] = None
    ) -> None:
        self._db = db
        self._security = security or get_security_manager()
        self._settings = get_settings()

    # =========================================================================
    # ACCOUNT CREATION
    # =========================================================================

    def register(
        self,
        email: str,
        password: str,
        display_name: Optional[str] = None
    ) -> Tuple[Operator, str, str]:
        """
        Create an operator account and sign it in.

        Returns:
            Tuple of (Operator, access_token, refresh_token)

        Raises:
            AppException: REGISTRATION_DISABLED when self-registration is off
            AppException: EMAIL_EXISTS if the email is already registered
        """
        if not self._settings.allow_registration:
            raise exceptions.registration_disabled()

        normalized_email = email.lower().strip()

        existing = self._db.query(Operator).filter(
            Operator.email == normalized_email
        ).first()
        if existing:
            logger.warning(f"Registration failed: email exists - {normalized_email}")
            raise exceptions.email_exists(normalized_email)

        operator = Operator(
            email=normalized_email,
            display_name=(display_name or "").strip() or None,
            password_hash=self._security.hash_password(password),
            is_active=True,
        )
        self._db.add(operator)
        self._db.commit()
        self._db.refresh(operator)

        logger.info(f"✅ Operator registered: {operator.email}")

        access_token, refresh_token = self._generate_tokens(operator)
        return operator, access_token, refresh_token

    # =========================================================================
    # AUTHENTICATION METHODS
    # =========================================================================

    def authenticate(self, email: str, password: str) -> Tuple[Operator, str, str]:
        """
        Authenticate an operator with email and password.

        Returns:
            Tuple of (Operator, access_token, refresh_token)

        Raises:
            AppException: INVALID_CREDENTIALS if not found or password wrong
            AppException: ACCOUNT_DISABLED if the account is inactive
        """
        normalized_email = email.lower().strip()

        operator = self._db.query(Operator).filter(
            Operator.email == normalized_email
        ).first()

        if not operator:
            logger.warning(f"Login failed: operator not found - {normalized_email}")
            raise exceptions.invalid_credentials()

        if not self._security.verify_password(password, operator.password_hash):
            logger.warning(f"Login failed: invalid password - {normalized_email}")
            raise exceptions.invalid_credentials()

        if not operator.is_active:
            logger.warning(f"Login failed: account disabled - {normalized_email}")
            raise exceptions.account_disabled()

        access_token, refresh_token = self._generate_tokens(operator)

        logger.info(f"✅ Operator authenticated: {operator.email}")

        return operator, access_token, refresh_token

    def refresh_tokens(self, refresh_token: str) -> Tuple[Operator, str, str]:
        """
        Issue a new token pair from a valid refresh token.

        Raises:
            AppException: TOKEN_EXPIRED if the refresh token is expired or invalid
            AppException: TOKEN_INVALID if the token has no subject
            AppException: OPERATOR_NOT_FOUND if the operator no longer exists
            AppException: ACCOUNT_DISABLED if the operator is inactive
        """
        payload = self._security.verify_token(refresh_token, "refresh")

        if not payload:
            logger.warning("Token refresh failed: invalid or expired token")
            raise exceptions.token_expired()

        operator_id = payload.get("sub")

        if not operator_id:
            raise exceptions.token_invalid()

        operator = self._db.query(Operator).filter(Operator.id == operator_id).first()

        if not operator:
            raise exceptions.operator_not_found(operator_id)

        if not operator.is_active:
            raise exceptions.account_disabled()

        access_token, new_refresh_token = self._generate_tokens(operator)

        logger.info(f"✅ Tokens refreshed for: {operator.email}")

        return operator, access_token, new_refresh_token

    # =========================================================================
    # PASSWORD MANAGEMENT
    # =========================================================================

    def change_password(
        self,
        operator: Operator,
        current_password: str,
        new_password: str
    ) -> Operator:
        """
        Change an operator's password after verifying the current one.

        Raises:
            AppException: INVALID_CREDENTIALS if current password is wrong
        """
        if not self._security.verify_password(current_password, operator.password_hash):
            logger.warning(f"Password change failed: invalid current password - {operator.email}")
            raise exceptions.invalid_credentials()

        operator.password_hash = self._security.hash_password(new_password)

        self._db.commit()
        self._db.refresh(operator)

        logger.info(f"✅ Password changed for: {operator.email}")

        return operator

    # =========================================================================
    # TOKEN GENERATION
    # =========================================================================

    def _generate_tokens(self, operator: Operator) -> Tuple[str, str]:
        token_data = {
            "sub": operator.id,
            "email": operator.email,
        }

        access_token = self._security.create_access_token(token_data)
        refresh_token = self._security.create_refresh_token(token_data)

        return access_token, refresh_token

    def get_token_expiry_seconds(self) -> int:
        return self._settings.access_token_expire_seconds
