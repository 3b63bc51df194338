"""
Alias Provider Abstraction Layer

Provides a common interface for masked alias backends (Fastmail JMAP).
"""

from .base import BaseAliasProvider
from .fastmail import FastmailClient

__all__ = [
    'BaseAliasProvider',
    'FastmailClient',
]
