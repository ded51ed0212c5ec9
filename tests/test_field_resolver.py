try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from app.services.field_resolver import (
    FieldResolver,
    best_scoring_field,
    display_name,
    find_by_name,
    score_field_name,
)


class StubPike13Client:
    def __init__(self, fields: list[dict]) -> None:
        self.fields = fields
        self.calls = 0

    async def list_custom_fields(self, access_token: str) -> list[dict]:
        self.calls += 1
        return self.fields


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("USA Fencing Membership Number", 10 + 5 + 3 + 2 + 1),
        ("USFA Number", 8 + 4 + 1),
        ("USA Fencing", 5),
        ("Membership", 3 + 2),
        ("Member ID", 2 + 1),
        ("Notes", 1),  # "no" is a substring of "notes"
        ("Emergency Contact", 0),
        ("", 0),
        (None, 0),
    ],
)
def test_score_field_name_rules(name, expected) -> None:
    assert score_field_name(name) == expected


def test_display_name_prefers_first_non_empty_attribute() -> None:
    assert display_name({"id": 1, "name": "", "label": "Label", "title": "Title"}) == "Label"
    assert display_name({"id": 1, "title": "Title"}) == "Title"
    assert display_name({"id": 1}) == ""


def test_best_scoring_field_picks_highest_score() -> None:
    fields = [
        {"id": 1, "name": "Emergency Contact"},
        {"id": 2, "name": "USFA Number"},
        {"id": 3, "name": "USA Fencing Membership Number"},
    ]
    assert best_scoring_field(fields)["id"] == 3


def test_best_scoring_field_keeps_first_on_ties() -> None:
    fields = [
        {"id": 10, "name": "Member"},
        {"id": 11, "label": "member"},
    ]
    assert best_scoring_field(fields)["id"] == 10


def test_best_scoring_field_requires_positive_score() -> None:
    fields = [{"id": 1, "name": "Emergency Contact"}, {"id": 2, "name": "Shirt Size"}]
    assert best_scoring_field(fields) is None
    assert best_scoring_field([]) is None


def test_find_by_name_is_exact_and_case_sensitive() -> None:
    fields = [{"id": 1, "name": "fencing id"}, {"id": 2, "title": "Fencing ID"}]
    assert find_by_name(fields, "Fencing ID")["id"] == 2
    assert find_by_name(fields, "FENCING ID") is None


@pytest.mark.anyio
async def test_resolver_uses_heuristic_without_preferred_name() -> None:
    client = StubPike13Client(
        [
            {"id": 101, "name": "USA Fencing Membership Number"},
            {"id": 102, "name": "USFA Number"},
            {"id": 103, "name": "Notes"},
        ]
    )

    field = await FieldResolver(client).resolve("token")

    assert field["id"] == 101
    assert client.calls == 1


@pytest.mark.anyio
async def test_resolver_exact_name_overrides_scores() -> None:
    client = StubPike13Client(
        [
            {"id": 101, "name": "USA Fencing Membership Number"},
            {"id": 104, "name": "Club Card"},
        ]
    )

    field = await FieldResolver(client).resolve("token", preferred_name="Club Card")

    assert field["id"] == 104


@pytest.mark.anyio
async def test_resolver_falls_back_when_preferred_name_missing() -> None:
    client = StubPike13Client(
        [
            {"id": 101, "name": "Shirt Size"},
            {"id": 102, "name": "USFA Number"},
        ]
    )

    field = await FieldResolver(client).resolve("token", preferred_name="Club Card")

    assert field["id"] == 102
    assert client.calls == 2


@pytest.mark.anyio
async def test_resolver_reports_not_found() -> None:
    client = StubPike13Client([{"id": 1, "name": "Shirt Size"}])

    assert await FieldResolver(client).resolve("token") is None
