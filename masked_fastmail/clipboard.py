"""System clipboard access via pyperclip."""
import pyperclip

from masked_fastmail.exceptions import ClipboardError


def copy_to_clipboard(text: str) -> None:
    """
    Copy text to the system clipboard.

    Raises:
        ClipboardError: if no clipboard mechanism is available or the copy fails
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"clipboard operation failed: {e}") from e
