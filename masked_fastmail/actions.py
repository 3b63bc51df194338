"""
Alias commands.

Two flows, chosen per invocation:
- state change (enable / disable / delete) of an existing alias, looked up
  by its address
- lookup of the best alias for a site, creating one if none exists, and
  copying its address to the clipboard

Provider failures are re-raised as AliasOperationError naming the stage
that failed, e.g. "failed to get alias: ...".
"""
import logging
from enum import Enum
from typing import Optional

from masked_fastmail.clipboard import copy_to_clipboard
from masked_fastmail.domains import looks_like_address
from masked_fastmail.exceptions import AliasOperationError, ClipboardError, MaskedFastmailError
from masked_fastmail.models import AliasState, MaskedAliasInfo
from masked_fastmail.providers.base import BaseAliasProvider
from masked_fastmail.selection import select_preferred

logger = logging.getLogger(__name__)


class AliasAction(str, Enum):
    """What the user asked for; NONE means get or create."""
    NONE = "none"
    ENABLE = "enable"
    DISABLE = "disable"
    DELETE = "delete"

    @property
    def target_state(self) -> Optional[AliasState]:
        return _TARGET_STATES.get(self)


# Pending is only ever observed, never requested
_TARGET_STATES = {
    AliasAction.ENABLE: AliasState.ENABLED,
    AliasAction.DISABLE: AliasState.DISABLED,
    AliasAction.DELETE: AliasState.DELETED,
}


def update_alias_state(
    provider: BaseAliasProvider,
    identifier: str,
    action: AliasAction
) -> MaskedAliasInfo:
    """
    Move the alias with address `identifier` to the action's target state.

    Exactly one update request is issued, and only if the lookup succeeded.

    Returns:
        The alias carrying its new state

    Raises:
        ValueError: if the action has no target state
        AliasOperationError: if the lookup or the update fails
    """
    new_state = action.target_state
    if new_state is None:
        raise ValueError(f"action {action.value!r} does not change alias state")

    try:
        alias = provider.lookup_by_address(identifier)
    except MaskedFastmailError as e:
        raise AliasOperationError(f"failed to get alias: {e}") from e

    try:
        provider.update_state(alias, new_state)
    except MaskedFastmailError as e:
        raise AliasOperationError(f"failed to update alias status: {e}") from e

    updated = alias.with_state(new_state)
    report_state_change(alias, updated)
    return updated


def get_or_create_alias(provider: BaseAliasProvider, identifier: str) -> MaskedAliasInfo:
    """
    Find the preferred alias for a site, creating one if there is none.

    An alias address is looked up directly and never triggers a create.
    """
    if looks_like_address(identifier):
        try:
            return provider.lookup_by_address(identifier)
        except MaskedFastmailError as e:
            raise AliasOperationError(f"failed to get alias: {e}") from e

    try:
        aliases = provider.search_by_identifier(identifier)
    except MaskedFastmailError as e:
        raise AliasOperationError(f"failed to get aliases: {e}") from e

    selected = select_preferred(aliases)

    if selected is None:
        print(f"No alias found for {identifier}, creating new one...")
        try:
            selected = provider.create(identifier)
        except MaskedFastmailError as e:
            raise AliasOperationError(f"failed to create alias: {e}") from e
    elif len(aliases) > 1:
        print(f"Found {len(aliases)} aliases for {identifier}:")
        for alias in aliases:
            print(f"- {alias}")
        print("\nSelected alias:")

    return selected


def report_state_change(before: MaskedAliasInfo, after: MaskedAliasInfo) -> None:
    """Print an alias state transition."""
    print(f"{after.email} (state: {before.state} -> {after.state})")


def present_alias(alias: MaskedAliasInfo) -> bool:
    """
    Print the alias and copy its address to the clipboard.

    A clipboard failure is only a warning.

    Returns:
        True if the address was copied
    """
    try:
        copy_to_clipboard(alias.email)
    except ClipboardError as e:
        print(alias)
        logger.warning(f"Could not copy to clipboard: {e}")
        return False

    print(f"{alias} (copied to clipboard)")
    return True


def run(
    provider: BaseAliasProvider,
    identifier: str,
    action: AliasAction = AliasAction.NONE
) -> MaskedAliasInfo:
    """Run one command: a state change if an action is given, else get-or-create."""
    if action is not AliasAction.NONE:
        return update_alias_state(provider, identifier, action)

    alias = get_or_create_alias(provider, identifier)
    present_alias(alias)
    return alias
