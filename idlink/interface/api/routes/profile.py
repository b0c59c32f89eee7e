"""Profile routes."""

from typing import Any

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Body, Cookie
from pydantic import BaseModel

from idlink.application.usecase.profile import (
    ConfirmProfileUpdateUseCase,
    GetAggregatedProfileUseCase,
    PrepareProfileUpdateUseCase,
)
from idlink.application.usecase.profile.confirm_profile_update import (
    ConfirmProfileUpdateRequest,
    ConfirmProfileUpdateResponse,
)
from idlink.application.usecase.profile.get_aggregated_profile import (
    GetAggregatedProfileRequest,
    GetAggregatedProfileResponse,
)
from idlink.application.usecase.profile.prepare_profile_update import (
    PrepareProfileUpdateRequest,
    PrepareProfileUpdateResponse,
)
from idlink.domain.error import DomainError
from idlink.domain.service import JWTService
from idlink.interface.api.session import require_account_id
from idlink.interface.error import to_http_exception

router = APIRouter(prefix="/profile", tags=["profile"], route_class=DishkaRoute)


class ConfirmProfileUpdateAPIRequest(BaseModel):
    """API request carrying the prepared event and its signed counterpart."""

    unsigned_event: dict[str, Any]
    signed_event: dict[str, Any]


@router.get("/aggregated", response_model=GetAggregatedProfileResponse)
async def get_aggregated_profile(
    get_aggregated_profile_use_case: FromDishka[GetAggregatedProfileUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetAggregatedProfileResponse:
    """Get the merged profile of the signed-in account.

    Each attribute carries the provider it was taken from. Attributes no
    linked provider defines are absent.
    """
    account_id = require_account_id(auth_token, jwt_service)

    try:
        return await get_aggregated_profile_use_case.execute(
            GetAggregatedProfileRequest(account_id=account_id)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/nostr/prepare", response_model=PrepareProfileUpdateResponse)
async def prepare_nostr_profile_update(
    prepare_profile_update_use_case: FromDishka[PrepareProfileUpdateUseCase],
    jwt_service: FromDishka[JWTService],
    changes: dict[str, Any] = Body(...),
    auth_token: str | None = Cookie(default=None),
) -> PrepareProfileUpdateResponse:
    """Build the kind-0 event for the client's signer.

    Example:
        POST /profile/nostr/prepare
        {"nip05": null, "lud16": " alice@getalby.com "}

        nip05 is removed, lud16 is set (trimmed), banner is left as is.
    """
    account_id = require_account_id(auth_token, jwt_service)

    try:
        return await prepare_profile_update_use_case.execute(
            PrepareProfileUpdateRequest(account_id=account_id, changes=changes)
        )
    except DomainError as e:
        raise to_http_exception(e) from e


@router.post("/nostr/confirm", response_model=ConfirmProfileUpdateResponse)
async def confirm_nostr_profile_update(
    request: ConfirmProfileUpdateAPIRequest,
    confirm_profile_update_use_case: FromDishka[ConfirmProfileUpdateUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ConfirmProfileUpdateResponse:
    """Accept the event signed by the client's NIP-07 signer and store it."""
    account_id = require_account_id(auth_token, jwt_service)

    try:
        return await confirm_profile_update_use_case.execute(
            ConfirmProfileUpdateRequest(
                account_id=account_id,
                unsigned_event=request.unsigned_event,
                signed_event=request.signed_event,
            )
        )
    except DomainError as e:
        raise to_http_exception(e) from e
