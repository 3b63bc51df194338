"""
Base Alias Provider Interface

Defines the abstract interface the alias commands work against, so they
can run on the Fastmail client or on an in-memory fake in tests.
"""

from abc import ABC, abstractmethod
from typing import List

from masked_fastmail.models import AliasState, MaskedAliasInfo


class BaseAliasProvider(ABC):
    """
    Base interface for masked alias providers.

    Implementations raise subclasses of MaskedFastmailError on failure.
    """

    @abstractmethod
    def lookup_by_address(self, address: str) -> MaskedAliasInfo:
        """
        Find the alias with the given address.

        Raises:
            AliasNotFoundError: if no alias has this address
        """
        pass

    @abstractmethod
    def search_by_identifier(self, identifier: str) -> List[MaskedAliasInfo]:
        """Return all aliases belonging to a site, in provider order (may be empty)."""
        pass

    @abstractmethod
    def create(self, identifier: str) -> MaskedAliasInfo:
        """Create a new alias for a site and return it."""
        pass

    @abstractmethod
    def update_state(self, alias: MaskedAliasInfo, state: AliasState) -> None:
        """Request a state transition for an existing alias."""
        pass

    def close(self) -> None:
        """Release any resources held by the provider."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
