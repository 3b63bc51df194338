"""
Alias selection.

When several aliases exist for one site, prefer the one most likely to be
in use: enabled > pending > disabled > deleted.
"""
import logging
from typing import Optional, Sequence

from masked_fastmail.models import MaskedAliasInfo, is_known_state, state_priority

logger = logging.getLogger(__name__)


def select_preferred(aliases: Sequence[MaskedAliasInfo]) -> Optional[MaskedAliasInfo]:
    """
    Pick the alias with the best state.

    Ties keep the earliest alias. Aliases in an unknown state rank after all
    known states and are reported with a warning.

    Returns:
        One of the given aliases, or None if the sequence is empty
    """
    if not aliases:
        return None

    for alias in aliases:
        if not is_known_state(alias.state):
            logger.warning(f"unknown alias state: {alias.state} ({alias.email})")

    selected = aliases[0]
    selected_priority = state_priority(selected.state)
    for alias in aliases[1:]:
        priority = state_priority(alias.state)
        if priority < selected_priority:
            selected = alias
            selected_priority = priority

    return selected
