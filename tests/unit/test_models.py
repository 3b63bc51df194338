"""
Test alias models (Pydantic validation) and the state priority table.
"""
import pytest
from pydantic import ValidationError

from masked_fastmail.models import (
    STATE_PRIORITY,
    UNKNOWN_STATE_PRIORITY,
    AliasState,
    MaskedAliasInfo,
    is_known_state,
    state_priority,
)


class TestStatePriority:
    """Test the state priority table"""

    def test_priority_order(self):
        assert state_priority(AliasState.ENABLED) == 0
        assert state_priority(AliasState.PENDING) == 1
        assert state_priority(AliasState.DISABLED) == 2
        assert state_priority(AliasState.DELETED) == 3

    def test_table_covers_every_state(self):
        assert set(STATE_PRIORITY) == set(AliasState)

    def test_wire_strings_map_like_enum_members(self):
        assert state_priority("pending") == 1
        assert is_known_state("deleted")

    def test_unknown_state_ranks_last(self):
        assert not is_known_state("archived")
        assert state_priority("archived") == UNKNOWN_STATE_PRIORITY
        assert UNKNOWN_STATE_PRIORITY > max(STATE_PRIORITY.values())


class TestMaskedAliasInfo:
    """Test MaskedAliasInfo"""

    def test_from_jmap(self):
        alias = MaskedAliasInfo.from_jmap({
            "id": "me123",
            "email": "shop.4821@fastmail.com",
            "state": "disabled",
            "forDomain": "https://shop.example",
            "description": None,
            "createdAt": "2024-01-15T10:00:00Z",
            "url": None,
            "emailPrefix": "shop",
        })

        assert alias.id == "me123"
        assert alias.state is AliasState.DISABLED
        assert alias.for_domain == "https://shop.example"
        assert alias.description == ""
        assert alias.created_at == "2024-01-15T10:00:00Z"

    def test_unknown_state_kept_as_string(self):
        alias = MaskedAliasInfo.from_jmap({"id": "me1", "email": "a@fastmail.com", "state": "archived"})

        assert alias.state == "archived"
        assert not isinstance(alias.state, AliasState)

    def test_missing_email_rejected(self):
        with pytest.raises(ValidationError):
            MaskedAliasInfo.from_jmap({"id": "me1", "state": "enabled"})

    def test_is_immutable(self):
        alias = MaskedAliasInfo(id="me1", email="a@fastmail.com", state=AliasState.ENABLED)

        with pytest.raises(ValidationError):
            alias.state = AliasState.DELETED

    def test_with_state_returns_copy(self):
        alias = MaskedAliasInfo(id="me1", email="a@fastmail.com", state=AliasState.ENABLED)

        updated = alias.with_state(AliasState.DISABLED)

        assert updated.state is AliasState.DISABLED
        assert alias.state is AliasState.ENABLED
        assert updated.email == alias.email

    def test_str(self):
        alias = MaskedAliasInfo(id="me1", email="a@fastmail.com", state=AliasState.PENDING)

        assert str(alias) == "a@fastmail.com (state: pending)"
