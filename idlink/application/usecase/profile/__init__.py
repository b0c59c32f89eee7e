"""Profile use cases."""

from .confirm_profile_update import ConfirmProfileUpdateUseCase
from .get_aggregated_profile import GetAggregatedProfileUseCase
from .prepare_profile_update import PrepareProfileUpdateUseCase

__all__ = [
    "ConfirmProfileUpdateUseCase",
    "GetAggregatedProfileUseCase",
    "PrepareProfileUpdateUseCase",
]
