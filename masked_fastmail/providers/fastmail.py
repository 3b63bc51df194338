"""
Fastmail JMAP Provider

HTTP client for Fastmail's masked email API (MaskedEmail/get and
MaskedEmail/set over JMAP, RFC 8620).

Authentication uses an API token sent as a Bearer header. The account id
and token come from FASTMAIL_ACCOUNT_ID / FASTMAIL_API_KEY unless passed
explicitly.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from masked_fastmail.config import ENV_ACCOUNT_ID, ENV_API_KEY, Settings, get_settings
from masked_fastmail.domains import looks_like_address, normalize_origin, site_key
from masked_fastmail.exceptions import (
    AliasNotFoundError,
    ConfigurationError,
    FastmailAPIError,
    InvalidIdentifierError,
)
from masked_fastmail.models import AliasState, MaskedAliasInfo

from .base import BaseAliasProvider

logger = logging.getLogger(__name__)

# JMAP capabilities
JMAP_CORE = "urn:ietf:params:jmap:core"
JMAP_MASKED_EMAIL = "https://www.fastmail.com/dev/maskedemail"
JMAP_USING = [JMAP_CORE, JMAP_MASKED_EMAIL]

# Creation id used in MaskedEmail/set create requests
CREATE_ID = "new"


def _alias_site_key(alias: MaskedAliasInfo) -> Optional[str]:
    if not alias.for_domain:
        return None
    try:
        return site_key(alias.for_domain)
    except ValueError:
        logger.debug(f"Ignoring alias {alias.email} with unparseable forDomain {alias.for_domain!r}")
        return None


def _parse_alias(data: Any) -> MaskedAliasInfo:
    try:
        return MaskedAliasInfo.from_jmap(data)
    except ValidationError as e:
        raise FastmailAPIError(f"invalid MaskedEmail object: {e}") from e


def _set_error(action: str, error: Dict[str, Any]) -> str:
    """Format a JMAP SetError for humans."""
    message = f"could not {action} alias: {error.get('type', 'unknown error')}"
    if error.get("description"):
        message = f"{message} ({error['description']})"
    return message


class FastmailClient(BaseAliasProvider):
    """
    HTTP client for the Fastmail masked email API.

    One httpx.Client is kept for the lifetime of the object; use it as a
    context manager or call close().
    """

    def __init__(
        self,
        account_id: str = None,
        api_key: str = None,
        api_url: str = None,
        timeout: float = None,
        settings: Settings = None,
        transport: httpx.BaseTransport = None
    ):
        """
        Initialize the client.

        Args:
            account_id: JMAP account id (default: FASTMAIL_ACCOUNT_ID)
            api_key: API token (default: FASTMAIL_API_KEY)
            api_url: JMAP API endpoint (default: FASTMAIL_API_URL or Fastmail's)
            timeout: Request timeout in seconds
            settings: Pre-loaded settings (loaded from the environment if omitted)
            transport: Custom httpx transport (used by tests)

        Raises:
            ConfigurationError: if credentials are missing or settings are invalid
        """
        if settings is None:
            try:
                settings = get_settings()
            except ValidationError as e:
                raise ConfigurationError(f"invalid Fastmail settings: {e}") from e
        self.settings = settings

        self.account_id = account_id or settings.account_id
        self.api_key = api_key or settings.api_key
        if not self.account_id or not self.api_key:
            raise ConfigurationError(
                f"{ENV_ACCOUNT_ID} and {ENV_API_KEY} environment variables must be set"
            )

        self.api_url = api_url or settings.api_url
        self.timeout = timeout if timeout is not None else settings.timeout

        self._client = httpx.Client(
            timeout=self.timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
        )
        logger.debug(f"FastmailClient initialized: {self.api_url} (account {self.account_id})")

    def close(self) -> None:
        self._client.close()

    def _call(self, method: str, arguments: Dict[str, Any], call_id: str = "0") -> Dict[str, Any]:
        """
        Make a single JMAP method call and return its arguments object.

        Raises:
            FastmailAPIError: on HTTP, transport or JMAP method errors
        """
        request_body = {
            "using": JMAP_USING,
            "methodCalls": [[method, {"accountId": self.account_id, **arguments}, call_id]],
        }
        logger.debug(f"JMAP call: {method}")

        try:
            response = self._client.post(self.api_url, json=request_body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.debug(f"API error {e.response.status_code}: {e.response.text}")
            raise FastmailAPIError(
                f"API error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise FastmailAPIError(f"request failed: {e}") from e
        except ValueError as e:
            raise FastmailAPIError(f"invalid JSON in API response: {e}") from e

        if not isinstance(payload, dict):
            raise FastmailAPIError(f"unexpected API response: expected a JSON object, got {type(payload).__name__}")

        for entry in payload.get("methodResponses") or []:
            if not isinstance(entry, list) or len(entry) != 3 or not isinstance(entry[1], dict):
                raise FastmailAPIError(f"malformed method response in API reply: {entry!r:.200}")
            name, result, response_id = entry
            if response_id != call_id:
                continue
            if name == "error":
                message = f"{method} failed: {result.get('type', 'unknown error')}"
                if result.get("description"):
                    message = f"{message} ({result['description']})"
                raise FastmailAPIError(message)
            return result

        raise FastmailAPIError(f"no response to {method} in API reply")

    def list_aliases(self) -> List[MaskedAliasInfo]:
        """Fetch every masked alias on the account."""
        result = self._call("MaskedEmail/get", {"ids": None})
        aliases = [_parse_alias(item) for item in result.get("list") or []]
        logger.debug(f"Fetched {len(aliases)} aliases")
        return aliases

    def lookup_by_address(self, address: str) -> MaskedAliasInfo:
        if not looks_like_address(address):
            raise InvalidIdentifierError(f"{address!r} is not an alias address")

        target = address.strip().lower()
        for alias in self.list_aliases():
            if alias.email.lower() == target:
                return alias
        raise AliasNotFoundError(f"no alias found with address {address}")

    def search_by_identifier(self, identifier: str) -> List[MaskedAliasInfo]:
        try:
            key = site_key(identifier)
        except ValueError as e:
            raise InvalidIdentifierError(str(e)) from e

        matches = [alias for alias in self.list_aliases() if _alias_site_key(alias) == key]
        logger.debug(f"{len(matches)} aliases match {key}")
        return matches

    def create(self, identifier: str) -> MaskedAliasInfo:
        if looks_like_address(identifier):
            raise InvalidIdentifierError(f"{identifier!r} is an alias address, not a website")

        try:
            origin = normalize_origin(identifier)
        except ValueError as e:
            raise InvalidIdentifierError(str(e)) from e

        fields = {
            "forDomain": origin,
            "state": self.settings.new_alias_state.value,
        }
        if self.settings.alias_description:
            fields["description"] = self.settings.alias_description

        result = self._call("MaskedEmail/set", {"create": {CREATE_ID: fields}})

        not_created = (result.get("notCreated") or {}).get(CREATE_ID)
        if not_created:
            raise FastmailAPIError(_set_error("create", not_created))
        created = (result.get("created") or {}).get(CREATE_ID)
        if not created or not isinstance(created, dict):
            raise FastmailAPIError("MaskedEmail/set did not return the created alias")

        # Server only returns the properties it set (id, email, ...)
        alias = _parse_alias({**fields, **created})
        logger.info(f"Created alias {alias.email} for {origin}")
        return alias

    def update_state(self, alias: MaskedAliasInfo, state: AliasState) -> None:
        state = AliasState(state)
        result = self._call(
            "MaskedEmail/set",
            {"update": {alias.id: {"state": state.value}}},
        )

        not_updated = (result.get("notUpdated") or {}).get(alias.id)
        if not_updated:
            raise FastmailAPIError(_set_error("update", not_updated))
        if alias.id not in (result.get("updated") or {}):
            raise FastmailAPIError(f"update of alias {alias.email} was not confirmed")
        logger.info(f"Alias {alias.email}: {alias.state} -> {state}")
