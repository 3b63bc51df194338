"""
Fastmail Masked Email CLI

Finds, creates, enables, disables and deletes Fastmail masked email
aliases from the command line.

Architecture:
    CLI → actions (selection / state changes) → FastmailClient → JMAP API

The commands only talk to BaseAliasProvider, so they can run against a
fake provider without network access.
"""
# Build metadata; commit and build date are stamped by release builds
__version__ = "0.1.0"
__commit__ = "none"
__build_date__ = "unknown"

from masked_fastmail.actions import AliasAction, run
from masked_fastmail.models import AliasState, MaskedAliasInfo
from masked_fastmail.providers import BaseAliasProvider, FastmailClient
from masked_fastmail.selection import select_preferred

__all__ = [
    'AliasAction',
    'AliasState',
    'BaseAliasProvider',
    'FastmailClient',
    'MaskedAliasInfo',
    'run',
    'select_preferred',
]
