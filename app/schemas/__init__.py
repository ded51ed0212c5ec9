"""Public schema exports."""

from .pike13 import (
    FieldSummary,
    LocationListResponse,
    LocationSummary,
    LocationUpdateRequest,
    LocationUpdateResponse,
    MembershipUpdateRequest,
    MembershipUpdateResponse,
)

__all__ = [
    "FieldSummary",
    "LocationListResponse",
    "LocationSummary",
    "LocationUpdateRequest",
    "LocationUpdateResponse",
    "MembershipUpdateRequest",
    "MembershipUpdateResponse",
]
