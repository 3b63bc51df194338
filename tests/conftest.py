"""
Shared fixtures: alias factory, in-memory provider and clean environment.
"""
import itertools

import pytest

from masked_fastmail.exceptions import AliasNotFoundError
from masked_fastmail.models import AliasState, MaskedAliasInfo
from masked_fastmail.providers.base import BaseAliasProvider


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep real credentials and .env files out of tests."""
    for name in ("FASTMAIL_ACCOUNT_ID", "FASTMAIL_API_KEY", "FASTMAIL_API_URL",
                 "FASTMAIL_TIMEOUT", "FASTMAIL_ALIAS_DESCRIPTION", "FASTMAIL_NEW_ALIAS_STATE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def make_alias():
    """Factory for MaskedAliasInfo with sequential ids/addresses."""
    counter = itertools.count(1)

    def _make(state=AliasState.ENABLED, for_domain="https://example.com", email=None):
        n = next(counter)
        return MaskedAliasInfo(
            id=f"me{n}",
            email=email or f"alias.{n}@fastmail.com",
            state=state,
            for_domain=for_domain,
        )

    return _make


class FakeProvider(BaseAliasProvider):
    """In-memory provider recording every call."""

    def __init__(self, aliases=None):
        self.aliases = list(aliases or [])
        self.calls = []
        self.updates = []
        self.failures = {}  # method name -> exception to raise

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failures:
            raise self.failures[name]

    def lookup_by_address(self, address):
        self._record("lookup_by_address", address)
        for alias in self.aliases:
            if alias.email == address:
                return alias
        raise AliasNotFoundError(f"no alias found with address {address}")

    def search_by_identifier(self, identifier):
        self._record("search_by_identifier", identifier)
        return [alias for alias in self.aliases if alias.for_domain == identifier]

    def create(self, identifier):
        self._record("create", identifier)
        alias = MaskedAliasInfo(
            id=f"created{len(self.aliases) + 1}",
            email=f"new.{len(self.aliases) + 1}@fastmail.com",
            state=AliasState.ENABLED,
            for_domain=identifier,
        )
        self.aliases.append(alias)
        return alias

    def update_state(self, alias, state):
        self._record("update_state", alias.id, state)
        self.updates.append((alias.id, state))

    def method_calls(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_provider():
    return FakeProvider()
