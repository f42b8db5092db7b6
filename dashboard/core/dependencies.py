"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for authentication and shared application services.

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │   get_db()      │
                    └────────┬────────┘
                             │
                  ┌──────────▼──────────┐
                  │get_current_operator │
                  └──────────┬──────────┘
                             │
                  ┌──────────▼──────────┐
                  │get_operator_context │
                  └─────────────────────┘

    get_catalog_feed / get_image_storage read the instances held on
    app.state, so every request shares them without module globals.

Usage Examples:
--------------
    @router.get("/profile")
    async def profile(operator: Operator = Depends(get_current_operator)):
        return {"email": operator.email}

    @router.post("/products")
    async def create(actor: OperatorContext = Depends(get_operator_context)):
        ...

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.db.models import Operator
from dashboard.core import exceptions
from dashboard.core.context import OperatorContext
from dashboard.core.security import SecurityManager, get_security_manager
from dashboard.catalog.feed import CatalogFeed
from dashboard.storage.images import ImageStorage


# Module logger
logger = logging.getLogger(__name__)

# HTTP Bearer security scheme for Swagger UI
security_scheme = HTTPBearer(auto_error=False)


class AuthenticationManager:
    """
    Resolves the authenticated operator from a bearer token.

    Example:
        >>> auth = AuthenticationManager(security_manager, db_session)
        >>> operator = auth.authenticate_from_token(token)
    """

    def __init__(self, security: SecurityManager, db: Session) -> None:
        self._security = security
        self._db = db

    def extract_token_from_header(
        self,
        credentials: Optional[HTTPAuthorizationCredentials]
    ) -> str:
        """
        Extract JWT token from HTTP Authorization header.

        Raises:
            AppException: If no credentials provided
        """
        if not credentials:
            logger.debug("No authorization credentials provided")
            raise exceptions.token_invalid()

        return credentials.credentials

    def authenticate_from_token(self, token: Optional[str], token_type: str = "access") -> Operator:
        """
        Authenticate an operator from a JWT token.

        1. Verifies the token signature and expiration
        2. Extracts the operator ID from the token payload
        3. Loads the operator from the database
        4. Validates the account is active

        Raises:
            AppException: If token is invalid, expired, or operator not found
        """
        if not token:
            raise exceptions.token_invalid()

        payload = self._security.verify_token(token, token_type)

        if not payload:
            raise exceptions.token_expired()

        operator_id = payload.get("sub")

        if not operator_id:
            logger.warning("Token payload missing 'sub' claim")
            raise exceptions.token_invalid()

        operator = self._db.query(Operator).filter(Operator.id == operator_id).first()

        if not operator:
            logger.warning(f"Operator not found for token: {operator_id}")
            raise exceptions.operator_not_found(operator_id)

        if not operator.is_active:
            logger.warning(f"Disabled operator attempted access: {operator.email}")
            raise exceptions.account_disabled()

        return operator

    def get_current_operator(
        self,
        credentials: Optional[HTTPAuthorizationCredentials]
    ) -> Operator:
        token = self.extract_token_from_header(credentials)
        return self.authenticate_from_token(token, "access")


# =============================================================================
# FASTAPI DEPENDENCY FUNCTIONS
# =============================================================================

async def get_current_operator(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db)
) -> Operator:
    """
    FastAPI dependency to get the current authenticated operator.

    Raises:
        AppException: If authentication fails
    """
    auth_manager = AuthenticationManager(get_security_manager(), db)
    return auth_manager.get_current_operator(credentials)


async def get_operator_context(
    operator: Operator = Depends(get_current_operator)
) -> OperatorContext:
    """Explicit identity of the acting operator for service calls."""
    return OperatorContext.from_operator(operator)


def get_catalog_feed(request: Request) -> CatalogFeed:
    """The application's CatalogFeed."""
    return request.app.state.catalog_feed


def get_image_storage(request: Request) -> ImageStorage:
    """The application's ImageStorage."""
    return request.app.state.image_storage
