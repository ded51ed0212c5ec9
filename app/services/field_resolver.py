"""
Locate the USA Fencing membership-number custom field.

Pike13 exposes no stable semantic tag for custom fields, so the field is found
either by an operator-configured exact display name or by scoring every
field's display name against a fixed set of rules.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from app.clients.pike13 import Pike13Client

CustomField = Dict[str, Any]

_NAME_ATTRIBUTES = ("name", "label", "title")


def display_name(field: CustomField) -> str:
    """First non-empty of ``name``, ``label`` and ``title``."""
    for attribute in _NAME_ATTRIBUTES:
        value = field.get(attribute)
        if value:
            return value
    return ""


def score_field_name(name: Optional[str]) -> int:
    n = (name or "").lower()
    if not n:
        return 0
    score = 0
    if n == "usa fencing membership number":
        score += 10
    if n == "usfa number":
        score += 8
    if "usa" in n and "fenc" in n:
        score += 5
    if "usfa" in n:
        score += 4
    if "membership" in n:
        score += 3
    if "member" in n:
        score += 2
    if "number" in n or "no" in n or "id" in n:
        score += 1
    return score


def find_by_name(fields: Iterable[CustomField], name: str) -> Optional[CustomField]:
    """Exact, case-sensitive display-name match; first wins."""
    return next((field for field in fields if display_name(field) == name), None)


def best_scoring_field(fields: Sequence[CustomField]) -> Optional[CustomField]:
    """Highest-scoring field, earliest on ties, or ``None`` when nothing scores."""
    best: Optional[CustomField] = None
    best_score = -1
    for field in fields:
        score = score_field_name(display_name(field))
        if score > best_score:
            best = field
            best_score = score
    return best if best_score > 0 else None


class FieldResolver:
    """Resolve the membership field against the live custom-field list."""

    def __init__(self, client: "Pike13Client") -> None:
        self._client = client

    async def resolve(
        self, access_token: str, preferred_name: Optional[str] = None
    ) -> Optional[CustomField]:
        if preferred_name:
            fields = await self._client.list_custom_fields(access_token)
            match = find_by_name(fields, preferred_name)
            if match is not None:
                return match

        fields = await self._client.list_custom_fields(access_token)
        return best_scoring_field(fields)


__all__ = [
    "CustomField",
    "FieldResolver",
    "best_scoring_field",
    "display_name",
    "find_by_name",
    "score_field_name",
]
