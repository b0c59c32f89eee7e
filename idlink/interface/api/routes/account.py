"""Account linking and preference routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Cookie, Query, status
from fastapi.responses import RedirectResponse

from idlink.application.usecase.account import (
    GetPreferencesUseCase,
    InitiateLinkUseCase,
    UpdatePreferencesUseCase,
)
from idlink.application.usecase.account.get_preferences import (
    GetPreferencesRequest,
    PreferencesResponse,
)
from idlink.application.usecase.account.initiate_link import InitiateLinkRequest
from idlink.application.usecase.account.update_preferences import (
    UpdatePreferencesRequest,
    UpdatePreferencesResponse,
)
from idlink.domain.error import DomainError
from idlink.domain.service import JWTService
from idlink.interface.api.session import require_account_id
from idlink.interface.error import to_http_exception

router = APIRouter(prefix="/account", tags=["account"], route_class=DishkaRoute)


@router.get("/link-oauth")
async def link_oauth(
    initiate_link_use_case: FromDishka[InitiateLinkUseCase],
    jwt_service: FromDishka[JWTService],
    provider: str = Query(...),
    auth_token: str | None = Cookie(default=None),
) -> RedirectResponse:
    """Start linking another provider to the signed-in account.

    Example:
        GET /account/link-oauth?provider=github
        Cookie: auth_token=...

        -> 303 Location: https://github.com/login/oauth/authorize?client_id=...
    """
    account_id = require_account_id(auth_token, jwt_service)

    try:
        response = await initiate_link_use_case.execute(
            InitiateLinkRequest(account_id=account_id, provider=provider)
        )
    except DomainError as e:
        raise to_http_exception(e) from e

    return RedirectResponse(
        url=response.authorization_url, status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(
    get_preferences_use_case: FromDishka[GetPreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PreferencesResponse:
    """Get the profile source and primary provider."""
    account_id = require_account_id(auth_token, jwt_service)

    try:
        return await get_preferences_use_case.execute(
            GetPreferencesRequest(account_id=account_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/preferences", response_model=UpdatePreferencesResponse)
async def update_preferences(
    update_preferences_use_case: FromDishka[UpdatePreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    payload: Any = Body(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UpdatePreferencesResponse:
    """Change the profile source and/or primary provider.

    Example:
        POST /account/preferences
        {"profileSource": "nostr", "primaryProvider": "github"}

    Invalid payloads are rejected with 400 and the field errors; nothing
    is stored in that case.
    """
    account_id = require_account_id(auth_token, jwt_service)

    try:
        return await update_preferences_use_case.execute(
            UpdatePreferencesRequest(account_id=account_id, payload=payload)
        )
    except DomainError as e:
        raise to_http_exception(e) from e
