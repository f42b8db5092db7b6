"""
==============================================================================
Preferences Service Module
==============================================================================

Per-operator display settings: notifications, dark mode, language and
currency.

==============================================================================
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from dashboard.core import exceptions
from dashboard.db.models import Operator
from dashboard.schemas.preferences import PreferencesDetail, PreferencesUpdate


# Module logger
logger = logging.getLogger(__name__)


TOGGLEABLE = ("notifications", "dark_mode")


class PreferencesService:
    """
    Reads and writes the preferences stored on an Operator row.

    Example:
        >>> service = PreferencesService(db)
        >>> service.toggle(operator, "dark_mode").dark_mode
        True
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, operator: Operator) -> PreferencesDetail:
        return PreferencesDetail.model_validate(operator)

    def update(self, operator: Operator, changes: PreferencesUpdate) -> PreferencesDetail:
        """Apply the supplied settings; absent ones are left unchanged."""
        values = changes.model_dump(exclude_none=True)

        for name, value in values.items():
            setattr(operator, name, value)

        if values:
            self._db.commit()
            self._db.refresh(operator)
            logger.info(f"⚙️ Settings updated for {operator.email}: {values}")

        return self.get(operator)

    def toggle(self, operator: Operator, name: str) -> PreferencesDetail:
        """
        Flip a boolean setting.

        Raises:
            AppException: INVALID_PREFERENCE for anything but notifications
                or dark_mode
        """
        if name not in TOGGLEABLE:
            raise exceptions.invalid_preference(name)

        return self.update(
            operator, PreferencesUpdate(**{name: not getattr(operator, name)})
        )
