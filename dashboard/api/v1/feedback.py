"""
==============================================================================
Feedback Endpoints
==============================================================================

Help-page suggestions and advertisement campaigns.

==============================================================================
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.core.context import OperatorContext
from dashboard.core.dependencies import get_operator_context
from dashboard.services.feedback_service import FeedbackService
from dashboard.schemas.feedback import (
    AdvertisementCreate,
    AdvertisementDetail,
    AdvertisementListResponse,
    AdvertisementResponse,
    SuggestionCreate,
    SuggestionDetail,
    SuggestionResponse,
)


router = APIRouter(prefix="/feedback", tags=["Feedback"])


@router.post(
    "/suggestions",
    response_model=SuggestionResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_suggestion(
    request: SuggestionCreate,
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Leave a suggestion for the dashboard's maintainers."""
    suggestion = FeedbackService(db).submit_suggestion(actor, request.text)
    return SuggestionResponse(suggestion=SuggestionDetail.model_validate(suggestion))


@router.post(
    "/advertisements",
    response_model=AdvertisementResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_advertisement(
    request: AdvertisementCreate,
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Create an advertisement campaign."""
    advertisement = FeedbackService(db).create_advertisement(actor, request)
    return AdvertisementResponse(
        advertisement=AdvertisementDetail.model_validate(advertisement)
    )


@router.get("/advertisements", response_model=AdvertisementListResponse)
async def list_advertisements(
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """List advertisement campaigns, newest first."""
    advertisements = FeedbackService(db).list_advertisements()
    return AdvertisementListResponse(
        total=len(advertisements),
        advertisements=[AdvertisementDetail.model_validate(ad) for ad in advertisements]
    )
