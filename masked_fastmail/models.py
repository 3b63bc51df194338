"""
Masked alias models.

Pydantic models for Fastmail MaskedEmail objects plus the state priority
table used to pick between several aliases for the same site.
"""
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AliasState(str, Enum):
    """Lifecycle state of a masked alias (JMAP wire values)"""
    ENABLED = "enabled"
    PENDING = "pending"
    DISABLED = "disabled"
    DELETED = "deleted"

    def __str__(self) -> str:
        return self.value


# Lower value = preferred when several aliases match
STATE_PRIORITY: Dict[AliasState, int] = {
    AliasState.ENABLED: 0,
    AliasState.PENDING: 1,
    AliasState.DISABLED: 2,
    AliasState.DELETED: 3,
}

_missing = set(AliasState) - set(STATE_PRIORITY)
if _missing:
    raise RuntimeError(f"STATE_PRIORITY is missing states: {sorted(s.value for s in _missing)}")

# Unknown states rank after every known one
UNKNOWN_STATE_PRIORITY = max(STATE_PRIORITY.values()) + 1


def is_known_state(state: Union[AliasState, str]) -> bool:
    """Check whether a state is one of the four AliasState values."""
    return state in STATE_PRIORITY


def state_priority(state: Union[AliasState, str]) -> int:
    """Return the selection priority of a state (UNKNOWN_STATE_PRIORITY if unrecognized)."""
    return STATE_PRIORITY.get(state, UNKNOWN_STATE_PRIORITY)


class MaskedAliasInfo(BaseModel):
    """One masked address known to the provider."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="JMAP MaskedEmail id")
    email: str = Field(description="Provider-assigned address")
    # Unrecognized states are kept as plain strings instead of failing validation
    state: Union[AliasState, str] = Field(description="Lifecycle state")
    for_domain: str = Field("", alias="forDomain", description="Website origin the alias belongs to")
    description: str = Field("", description="Free-form description")
    created_at: Optional[str] = Field(None, alias="createdAt", description="Creation time (as sent by the API)")
    last_message_at: Optional[str] = Field(
        None, alias="lastMessageAt", description="Time the last message was received"
    )

    @field_validator("state", mode="before")
    @classmethod
    def _coerce_state(cls, value: Any) -> Any:
        try:
            return AliasState(value)
        except ValueError:
            return value

    @classmethod
    def from_jmap(cls, data: Dict[str, Any]) -> "MaskedAliasInfo":
        """
        Build from a JMAP MaskedEmail object.

        Null properties are dropped so optional fields take their defaults;
        a null id, email or state fails validation.
        """
        if not isinstance(data, dict):
            return cls.model_validate(data)
        cleaned = {k: v for k, v in data.items() if v is not None}
        return cls.model_validate(cleaned)

    def with_state(self, state: AliasState) -> "MaskedAliasInfo":
        """Return a copy carrying a new state."""
        return self.model_copy(update={"state": state})

    def __str__(self) -> str:
        return f"{self.email} (state: {self.state})"
