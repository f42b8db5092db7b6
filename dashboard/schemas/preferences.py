"""
==============================================================================
Preferences Schemas Module
==============================================================================

Operator display settings.

==============================================================================
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Language = Literal["en", "es", "fr"]
Currency = Literal["RWF", "USD"]


class PreferencesDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    notifications: bool
    dark_mode: bool
    language: Language
    currency: Currency


class PreferencesUpdate(BaseModel):
    notifications: Optional[bool] = None
    dark_mode: Optional[bool] = None
    language: Optional[Language] = None
    currency: Optional[Currency] = None


class PreferencesResponse(BaseModel):
    success: bool = Field(default=True)
    settings: PreferencesDetail
