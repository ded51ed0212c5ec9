"""
FastAPI routes for the Pike13 membership updater.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from app.dependencies import (
    get_field_resolver,
    get_person_update_service,
    get_pike13_client,
    get_preferred_field_name,
    get_session_credentials,
)
from app.schemas import (
    FieldSummary,
    LocationListResponse,
    LocationSummary,
    LocationUpdateRequest,
    LocationUpdateResponse,
    MembershipUpdateRequest,
    MembershipUpdateResponse,
)
from app.services.field_resolver import CustomField, display_name
from app.services.person_updates import custom_field_entries

router = APIRouter()
logger = logging.getLogger(__name__)


async def require_access_token(
    request: Request,
    credentials: Annotated[Any, Depends(get_session_credentials)],
) -> str:
    """Resolve the caller's Pike13 token or reject the request."""
    access_token = credentials.resolve(request)
    if not access_token:
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail="Not authorized. Visit /auth first.",
        )
    return access_token


AccessToken = Annotated[str, Depends(require_access_token)]


def _parse_location_id(raw: Optional[str]) -> Optional[int]:
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="location_id must be an integer",
        ) from exc


async def _resolve_membership_field(
    resolver: Any, access_token: str, preferred_name: Optional[str]
) -> CustomField:
    field = await resolver.resolve(access_token, preferred_name)
    if field is None:
        raise HTTPException(
            status_code=HTTPStatus.NOT_FOUND,
            detail="USA Fencing custom field not found.",
        )
    return field


@router.get("/", response_class=PlainTextResponse)
async def index() -> str:
    return "Pike13 Custom Field Updater. Visit /auth to authenticate."


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth")
async def start_pike13_oauth_flow(
    client: Annotated[Any, Depends(get_pike13_client)],
) -> RedirectResponse:
    """Send the operator to the Pike13 consent screen."""
    return RedirectResponse(
        url=client.build_authorization_url(),
        status_code=HTTPStatus.TEMPORARY_REDIRECT,
    )


@router.get("/auth/pike13/callback", response_class=PlainTextResponse)
async def handle_pike13_oauth_callback(
    client: Annotated[Any, Depends(get_pike13_client)],
    credentials: Annotated[Any, Depends(get_session_credentials)],
    code: Optional[str] = Query(None, description="Authorization code from Pike13."),
    error: Optional[str] = Query(None),
    error_description: Optional[str] = Query(None),
) -> PlainTextResponse:
    """Exchange the authorization code and remember the resulting token."""
    if error:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail=f"OAuth error: {error} {error_description or ''}".rstrip(),
        )
    if not code:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail="Missing code")

    token_payload = await client.exchange_authorization_code(code)
    logger.info("Pike13 authorization completed")

    response = PlainTextResponse("Authorized! You can now use the API endpoints.")
    credentials.remember(response, token_payload)
    return response


@router.post("/update-membership", response_model=MembershipUpdateResponse)
async def update_membership(
    access_token: AccessToken,
    resolver: Annotated[Any, Depends(get_field_resolver)],
    updates: Annotated[Any, Depends(get_person_update_service)],
    preferred_name: Annotated[Optional[str], Depends(get_preferred_field_name)],
    payload: Optional[MembershipUpdateRequest] = None,
) -> MembershipUpdateResponse:
    """Write the USA Fencing membership number onto a person."""
    payload = payload or MembershipUpdateRequest()
    if not payload.person_id or not payload.value:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="Provide person_id and value"
        )

    field = await _resolve_membership_field(resolver, access_token, preferred_name)
    before = await updates.get_person(access_token, payload.person_id)
    result = await updates.update_custom_field(
        access_token, payload.person_id, field["id"], payload.value
    )

    return MembershipUpdateResponse(
        success=result.success,
        method_used=result.method,
        field=FieldSummary(id=field["id"], name=display_name(field)),
        person_id=payload.person_id,
        value=payload.value,
        result_value=result.result_value,
        before_custom_fields=custom_field_entries(before),
        after_custom_fields=custom_field_entries(result.person),
    )


@router.get("/test-methods")
async def compare_field_update_methods(
    access_token: AccessToken,
    resolver: Annotated[Any, Depends(get_field_resolver)],
    updates: Annotated[Any, Depends(get_person_update_service)],
    preferred_name: Annotated[Optional[str], Depends(get_preferred_field_name)],
    person_id: Optional[str] = Query(None),
    value: Optional[str] = Query(None, description="Test value to write."),
) -> dict:
    """Try both custom field encodings and report what each one did."""
    if not person_id or not value:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST, detail="Provide person_id and value"
        )

    field = await _resolve_membership_field(resolver, access_token, preferred_name)
    methods = await updates.compare_custom_field_methods(
        access_token, person_id, field["id"], value
    )
    return {
        "field": {"id": field["id"], "name": display_name(field)},
        "person_id": person_id,
        "test_value": value,
        "methods": methods,
    }


@router.get("/test-location")
async def compare_location_update_methods(
    access_token: AccessToken,
    updates: Annotated[Any, Depends(get_person_update_service)],
    person_id: Optional[str] = Query(None),
    location_id: Optional[str] = Query(None),
) -> dict:
    """Try both home-location encodings and report before/after snapshots."""
    if not person_id:
        raise HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail="Provide person_id")

    parsed_location_id = _parse_location_id(location_id)
    return await updates.compare_location_methods(
        access_token, person_id, parsed_location_id
    )


@router.get("/locations", response_model=LocationListResponse)
async def list_locations(
    access_token: AccessToken,
    client: Annotated[Any, Depends(get_pike13_client)],
) -> LocationListResponse:
    locations = [
        LocationSummary(
            id=location.get("id"),
            name=location.get("name"),
            address=location.get("address"),
        )
        for location in await client.list_locations(access_token)
    ]
    return LocationListResponse(count=len(locations), locations=locations)


@router.post("/update-location", response_model=LocationUpdateResponse)
async def update_location(
    access_token: AccessToken,
    updates: Annotated[Any, Depends(get_person_update_service)],
    payload: Optional[LocationUpdateRequest] = None,
) -> LocationUpdateResponse:
    """Set a person's home location."""
    payload = payload or LocationUpdateRequest()
    if not payload.person_id or not payload.location_id:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail="Provide person_id and location_id",
        )

    outcome = await updates.update_location(
        access_token, payload.person_id, payload.location_id
    )
    return LocationUpdateResponse(
        person_id=payload.person_id,
        location_id=payload.location_id,
        **outcome,
    )


__all__ = ["router", "require_access_token"]
