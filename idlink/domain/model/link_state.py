"""Account link state.

Short-lived state that survives the redirect round-trip to an OAuth
provider while a signed-in user links an additional identity. It is
never persisted.
"""

from pydantic import ConfigDict, Field

from idlink.domain.model.common import DomainModel
from idlink.domain.value import AccountId, LinkAction, ProviderKind


class LinkState(DomainModel):
    """Decoded link state.

    Field aliases are the wire names used inside the encoded token.
    """

    account_id: AccountId = Field(alias="userId")
    action: LinkAction
    target_provider_kind: ProviderKind = Field(alias="provider")

    model_config = ConfigDict(populate_by_name=True)
