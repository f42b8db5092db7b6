"""
==============================================================================
Feedback Schemas Module
==============================================================================

Suggestions from the help page and advertisement campaigns.

==============================================================================
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SuggestionCreate(BaseModel):
    text: str = Field(..., max_length=5000)


class SuggestionDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    submitted_by: Optional[str] = None
    created_at: datetime


class SuggestionResponse(BaseModel):
    success: bool = Field(default=True)
    message: str = Field(default="Thank you for your suggestion!")
    suggestion: SuggestionDetail


class AdvertisementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="")
    image_url: Optional[str] = Field(default=None, max_length=500)
    target_audience: Optional[str] = Field(default=None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: float = Field(default=0.0)


class AdvertisementDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    image_url: Optional[str] = None
    target_audience: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    budget: float
    created_by: Optional[str] = None
    created_at: datetime


class AdvertisementResponse(BaseModel):
    success: bool = Field(default=True)
    advertisement: AdvertisementDetail


class AdvertisementListResponse(BaseModel):
    success: bool = Field(default=True)
    total: int
    advertisements: List[AdvertisementDetail]
