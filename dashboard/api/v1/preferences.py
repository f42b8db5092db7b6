"""
==============================================================================
Settings Endpoints
==============================================================================

Per-operator display settings.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.db.models import Operator
from dashboard.core.dependencies import get_current_operator
from dashboard.services.preferences_service import PreferencesService
from dashboard.schemas.preferences import PreferencesResponse, PreferencesUpdate


router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("", response_model=PreferencesResponse)
async def get_settings(
    operator: Operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Current operator's settings."""
    return PreferencesResponse(settings=PreferencesService(db).get(operator))


@router.put("", response_model=PreferencesResponse)
async def update_settings(
    changes: PreferencesUpdate,
    operator: Operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Update any of notifications, dark_mode, language and currency."""
    return PreferencesResponse(settings=PreferencesService(db).update(operator, changes))


@router.post("/toggle/{name}", response_model=PreferencesResponse)
async def toggle_setting(
    name: str,
    operator: Operator = Depends(get_current_operator),
    db: Session = Depends(get_db)
):
    """Flip notifications or dark_mode."""
    return PreferencesResponse(settings=PreferencesService(db).toggle(operator, name))
