"""
Exceptions raised by masked-fastmail.

Everything derives from MaskedFastmailError so the CLI can report any
failure with a single handler.
"""


class MaskedFastmailError(Exception):
    """Base error for masked-fastmail"""
    pass


class ConfigurationError(MaskedFastmailError):
    """Missing or invalid credentials/settings"""
    pass


class FastmailAPIError(MaskedFastmailError):
    """A request to the Fastmail JMAP API failed"""
    pass


class AliasNotFoundError(FastmailAPIError):
    """No masked alias matches the requested address"""
    pass


class AliasOperationError(MaskedFastmailError):
    """A command stage failed; the message names the stage"""
    pass


class ClipboardError(MaskedFastmailError):
    """Copying to the system clipboard failed"""
    pass


class InvalidIdentifierError(MaskedFastmailError):
    """The identifier is not a usable domain, URL or address"""
    pass
