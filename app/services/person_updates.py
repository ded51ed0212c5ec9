"""
Person-record updates with verify-by-reread.

Pike13 accepts custom field writes in two shapes and neither is reliably
documented, so every write is followed by a fresh read of the person and the
outcome is judged on the value observed there, not on the PATCH response.

Method numbering matches the diagnostic endpoints:

* method 1 -- ``custom_fields`` as a map keyed by field id
* method 2 -- ``custom_fields`` as a list of ``{id, value}`` entries (primary)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from app.core.errors import Pike13APIError

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from app.clients.pike13 import Pike13Client

logger = logging.getLogger(__name__)

MAP_METHOD = 1
ARRAY_METHOD = 2

FIELD_METHOD_DESCRIPTIONS = {
    MAP_METHOD: "custom_fields as object with field ID as key",
    ARRAY_METHOD: "custom_fields as array with id and value (PRIMARY - MOST RELIABLE)",
}

LOCATION_METHOD_DESCRIPTIONS = {
    1: "Update location_id directly",
    2: "Update home_location_id",
}

LOCATION_ATTRIBUTES = (
    "location_id",
    "address",
    "street_address",
    "city",
    "state_code",
    "postal_code",
    "country_code",
)


@dataclass(slots=True)
class UpdateResult:
    method: int
    success: bool
    result_value: Any
    person: Optional[Dict[str, Any]]


def values_match(observed: Any, requested: Any) -> bool:
    """Equality without cross-type coercion, so ``"1"`` never matches ``1``."""
    return type(observed) is type(requested) and observed == requested


def location_matches(observed: Any, requested: Any) -> bool:
    if observed is None or requested is None:
        return False
    return str(observed) == str(requested)


def custom_field_entries(person: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return (person or {}).get("custom_fields") or []


def location_snapshot(person: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    person = person or {}
    return {attribute: person.get(attribute) for attribute in LOCATION_ATTRIBUTES}


def map_payload(field_id: Any, value: Any) -> Dict[str, Any]:
    return {"person": {"custom_fields": {str(field_id): value}}}


def array_payload(field_id: Any, value: Any) -> Dict[str, Any]:
    return {"person": {"custom_fields": [{"id": field_id, "value": value}]}}


def location_payload(method: int, location_id: int) -> Dict[str, Any]:
    key = "location_id" if method == 1 else "home_location_id"
    return {"person": {key: location_id}}


class PersonUpdateService:
    """Write custom fields and home locations on Pike13 people."""

    def __init__(self, client: "Pike13Client") -> None:
        self._client = client

    async def get_person(self, access_token: str, person_id: int | str) -> Optional[Dict[str, Any]]:
        return await self._client.get_person(access_token, person_id)

    async def _write_and_verify(
        self,
        method: int,
        payload: Dict[str, Any],
        access_token: str,
        person_id: int | str,
        field_id: Any,
        value: Any,
    ) -> UpdateResult:
        await self._client.patch(f"/people/{person_id}", access_token, payload)
        after = await self._client.get_person(access_token, person_id)
        match = next(
            (
                entry
                for entry in custom_field_entries(after)
                if entry.get("custom_field_id") == field_id
            ),
            None,
        )
        observed = match.get("value") if match else None
        return UpdateResult(
            method=method,
            success=values_match(observed, value),
            result_value=observed or None,
            person=after,
        )

    async def update_custom_field_map(
        self, access_token: str, person_id: int | str, field_id: Any, value: Any
    ) -> UpdateResult:
        return await self._write_and_verify(
            MAP_METHOD, map_payload(field_id, value), access_token, person_id, field_id, value
        )

    async def update_custom_field_array(
        self, access_token: str, person_id: int | str, field_id: Any, value: Any
    ) -> UpdateResult:
        return await self._write_and_verify(
            ARRAY_METHOD, array_payload(field_id, value), access_token, person_id, field_id, value
        )

    async def update_custom_field(
        self, access_token: str, person_id: int | str, field_id: Any, value: Any
    ) -> UpdateResult:
        """
        Array form first, map form only if the array write raised.

        A verified mismatch from the array form is returned as-is; the map
        form is not attempted in that case.
        """
        try:
            return await self.update_custom_field_array(access_token, person_id, field_id, value)
        except Pike13APIError as exc:
            logger.warning("Method 2 failed, trying Method 1: %s", exc)

        return await self.update_custom_field_map(access_token, person_id, field_id, value)

    async def compare_custom_field_methods(
        self, access_token: str, person_id: int | str, field_id: Any, value: Any
    ) -> List[Dict[str, Any]]:
        """Run both encodings independently and report each outcome."""
        attempts = (
            (MAP_METHOD, self.update_custom_field_map),
            (ARRAY_METHOD, self.update_custom_field_array),
        )
        outcomes: List[Dict[str, Any]] = []
        for method, update in attempts:
            entry: Dict[str, Any] = {
                "method": method,
                "description": FIELD_METHOD_DESCRIPTIONS[method],
            }
            try:
                result = await update(access_token, person_id, field_id, value)
            except Pike13APIError as exc:
                entry["error"] = exc.detail
            else:
                entry["success"] = result.success
                entry["result_value"] = result.result_value
            outcomes.append(entry)
        return outcomes

    async def update_location(
        self, access_token: str, person_id: int | str, location_id: int
    ) -> Dict[str, Any]:
        """Set ``location_id`` directly; there is no fallback encoding."""
        before = await self._client.get_person(access_token, person_id)
        await self._client.patch(
            f"/people/{person_id}", access_token, location_payload(1, location_id)
        )
        after = await self._client.get_person(access_token, person_id)
        after_location_id = (after or {}).get("location_id")
        return {
            "success": location_matches(after_location_id, location_id),
            "before_location_id": (before or {}).get("location_id"),
            "after_location_id": after_location_id,
        }

    async def compare_location_methods(
        self, access_token: str, person_id: int | str, location_id: Optional[int]
    ) -> Dict[str, Any]:
        before = await self._client.get_person(access_token, person_id)
        report: Dict[str, Any] = {
            "person_id": person_id,
            "before": location_snapshot(before),
            "methods": [],
        }
        if location_id is None:
            return report

        for method, description in LOCATION_METHOD_DESCRIPTIONS.items():
            payload = location_payload(method, location_id)
            entry: Dict[str, Any] = {"method": method, "description": description}
            try:
                await self._client.patch(f"/people/{person_id}", access_token, payload)
                after = await self._client.get_person(access_token, person_id)
            except Pike13APIError as exc:
                entry["error"] = exc.detail
            else:
                observed = (after or {}).get("location_id")
                entry.update(
                    payload=payload,
                    success=location_matches(observed, location_id),
                    result_location_id=observed,
                )
            report["methods"].append(entry)

        after = await self._client.get_person(access_token, person_id)
        report["after"] = location_snapshot(after)
        return report


__all__ = [
    "ARRAY_METHOD",
    "MAP_METHOD",
    "PersonUpdateService",
    "UpdateResult",
    "array_payload",
    "map_payload",
    "values_match",
]
