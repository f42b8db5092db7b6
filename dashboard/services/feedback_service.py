"""
==============================================================================
Feedback Service Module
==============================================================================

Suggestions from the help page and advertisement campaigns.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from dashboard.core import exceptions
from dashboard.core.context import OperatorContext
from dashboard.db.models import Advertisement, Suggestion
from dashboard.schemas.feedback import AdvertisementCreate


# Module logger
logger = logging.getLogger(__name__)


class FeedbackService:
    """
    Stores operator suggestions and advertisement campaigns.

    Example:
        >>> service = FeedbackService(db)
        >>> service.submit_suggestion(actor, "Add a dark theme")
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # SUGGESTIONS
    # =========================================================================

    def submit_suggestion(self, actor: OperatorContext, text: str) -> Suggestion:
        """
        Raises:
            AppException: EMPTY_SUGGESTION for blank text
        """
        text = (text or "").strip()
        if not text:
            raise exceptions.empty_suggestion()

        suggestion = Suggestion(text=text, submitted_by=actor.email)
        self._db.add(suggestion)
        self._db.commit()
        self._db.refresh(suggestion)

        logger.info(f"💡 Suggestion #{suggestion.id} submitted by {actor}")
        return suggestion

    # =========================================================================
    # ADVERTISEMENTS
    # =========================================================================

    def create_advertisement(
        self,
        actor: OperatorContext,
        data: AdvertisementCreate
    ) -> Advertisement:
        """
        Raises:
            AppException: INVALID_ADVERTISEMENT for a blank title, a negative
                budget, or an end date before the start date
        """
        title = data.title.strip()
        if not title:
            raise exceptions.invalid_advertisement("title is required")

        if data.budget < 0:
            raise exceptions.invalid_advertisement("budget must be non-negative")

        if data.start_date and data.end_date and data.end_date < data.start_date:
            raise exceptions.invalid_advertisement("end date is before start date")

        advertisement = Advertisement(
            title=title,
            description=data.description.strip(),
            image_url=data.image_url,
            target_audience=data.target_audience,
            start_date=data.start_date,
            end_date=data.end_date,
            budget=data.budget,
            created_by=actor.email,
        )
        self._db.add(advertisement)
        self._db.commit()
        self._db.refresh(advertisement)

        logger.info(f"📣 Advertisement created: {advertisement.title} by {actor}")
        return advertisement

    def list_advertisements(self) -> List[Advertisement]:
        """Campaigns, newest first."""
        return self._db.query(Advertisement).order_by(
            Advertisement.created_at.desc(), Advertisement.id.desc()
        ).all()
