"""Account use cases."""

from .get_preferences import GetPreferencesUseCase
from .initiate_link import InitiateLinkUseCase
from .update_preferences import UpdatePreferencesUseCase

__all__ = ["GetPreferencesUseCase", "InitiateLinkUseCase", "UpdatePreferencesUseCase"]
