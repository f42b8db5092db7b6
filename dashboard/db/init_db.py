"""
==============================================================================
Database Initialization Module
==============================================================================

Database initialization and setup utilities.

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. Create the default operator account if no operator exists
3. Verify the connection

Usage:
------
    from dashboard.db import init_db
    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from dashboard.config import get_settings
from dashboard.db.database import DatabaseManager
from dashboard.db.models import Operator
from dashboard.core.security import get_security_manager


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        self._db_manager = db_manager or DatabaseManager()
        self._security = get_security_manager()
        self._settings = get_settings()
        self._session = session

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        logger.info("Creating database tables...")
        self._db_manager.create_tables()

    # =========================================================================
    # OPERATOR ACCOUNT OPERATIONS
    # =========================================================================

    def create_default_operator(self) -> Optional[Operator]:
        """
        Create the default operator account if no operator exists yet.

        Credentials come from DEFAULT_ADMIN_EMAIL / DEFAULT_ADMIN_PASSWORD.

        Returns:
            Created Operator, or None if an operator already exists
        """
        session = self._get_session()

        try:
            if session.query(Operator).first() is not None:
                logger.debug("Operator accounts already exist, skipping default operator")
                return None

            operator = Operator(
                email=self._settings.default_admin_email.lower().strip(),
                display_name="Administrator",
                password_hash=self._security.hash_password(
                    self._settings.default_admin_password
                ),
                is_active=True,
            )

            session.add(operator)
            session.commit()
            session.refresh(operator)

            logger.info(f"✅ Default operator created: {operator.email}")
            logger.warning("⚠️ Please change the default operator password immediately!")

            return operator

        except Exception as e:
            session.rollback()
            logger.error(f"Failed to create default operator: {e}")
            raise
        finally:
            if self._session is None:
                session.close()

    # =========================================================================
    # INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """Create tables and the default operator, then verify the connection."""
        logger.info("=" * 60)
        logger.info("Initializing database...")

        self.create_tables()
        self.create_default_operator()

        if self._db_manager.verify_connection():
            logger.info("✅ Database connection verified")
        else:
            logger.warning("⚠️ Database connection check failed")

        logger.info("=" * 60)


def init_db() -> None:
    """Initialize the database at application startup."""
    DatabaseInitializer().initialize()
