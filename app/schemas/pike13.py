"""
Pydantic models for the updater's inbound requests and JSON responses.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class MembershipUpdateRequest(BaseModel):
    """Body of ``POST /update-membership``; presence is checked by the route."""

    person_id: Optional[int] = Field(None, description="Pike13 person identifier.")
    value: Any = Field(
        None, description="USA Fencing membership number to store."
    )


class LocationUpdateRequest(BaseModel):
    """Body of ``POST /update-location``."""

    person_id: Optional[int] = Field(None, description="Pike13 person identifier.")
    location_id: Optional[int] = Field(
        None, description="Identifier of the new home location."
    )


class FieldSummary(BaseModel):
    id: Any
    name: str


class MembershipUpdateResponse(BaseModel):
    success: bool
    method_used: int = Field(..., description="1 = map form, 2 = array form.")
    field: FieldSummary
    person_id: int
    value: Any
    result_value: Any = None
    before_custom_fields: List[Dict[str, Any]] = Field(default_factory=list)
    after_custom_fields: List[Dict[str, Any]] = Field(default_factory=list)


class LocationUpdateResponse(BaseModel):
    success: bool
    person_id: int
    location_id: int
    before_location_id: Any = None
    after_location_id: Any = None


class LocationSummary(BaseModel):
    id: Any
    name: Optional[str] = None
    address: Any = None


class LocationListResponse(BaseModel):
    count: int
    locations: List[LocationSummary]


__all__ = [
    "FieldSummary",
    "LocationListResponse",
    "LocationSummary",
    "LocationUpdateRequest",
    "LocationUpdateResponse",
    "MembershipUpdateRequest",
    "MembershipUpdateResponse",
]
