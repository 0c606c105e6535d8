"""Resolved, read-only gate configuration."""

from typing import NamedTuple, Optional, Sequence, Iterable, List
import logging

from .exceptions import ConfigurationError
from .store import SecretStore

logger = logging.getLogger(__name__)

HEADER = 'header'
"""Gate variant: bearer token in the ``Authorization`` header."""

SESSION = 'session'
"""Gate variant: one-time query token upgraded to a session cookie."""

VARIANTS = (HEADER, SESSION)

BEARER_PREFIX = 'Bearer '
AUTHORIZATION_HEADER = 'Authorization'
DEFAULT_TOKEN_PARAM = 'ta_token'
DEFAULT_COOKIE_NAME = 'ta_session_token'
DEFAULT_NAME = 'tokenauth'


class BearerConfig(NamedTuple):
    """Configuration for the ``Authorization`` header gate."""

    name: str
    """Identifies the gate instance in log records."""

    store: SecretStore
    """Full expected header values, i.e. ``"Bearer <token>"``."""

    header: str = AUTHORIZATION_HEADER

    @property
    def variant(self) -> str:
        return HEADER


class SessionConfig(NamedTuple):
    """Configuration for the query-token/session-cookie gate."""

    name: str
    """Identifies the gate instance in log records."""

    store: SecretStore
    """Raw token values, compared without any prefix."""

    token_param: str = DEFAULT_TOKEN_PARAM
    """Name of the query parameter that carries the one-time token."""

    cookie_name: str = DEFAULT_COOKIE_NAME
    """Name of the session cookie set after a successful upgrade."""

    @property
    def variant(self) -> str:
        return SESSION


def _clean_tokens(allowed_tokens: Optional[Iterable[str]]) -> List[str]:
    tokens = []
    for token in allowed_tokens or []:
        if not isinstance(token, str):
            raise ConfigurationError(
                f'Allowed tokens must be strings, not {type(token).__name__}'
            )
        if token.strip():
            tokens.append(token)
        else:
            logger.warning('Discarding blank entry in allowed tokens')
    return tokens


def resolve_bearer_config(allowed_tokens: Optional[Sequence[str]] = None,
                          name: str = '') -> BearerConfig:
    """
    Build the configuration for the header gate.

    Parameters
    ----------
    allowed_tokens : list
        Raw secrets, without the ``Bearer`` scheme. If empty, every request
        will be rejected.
    name : str
        Name of the gate instance.

    Returns
    -------
    :class:`BearerConfig`

    Raises
    ------
    :class:`ConfigurationError`
        If any configured token is not a string.

    """
    store = SecretStore(_clean_tokens(allowed_tokens), prefix=BEARER_PREFIX)
    return BearerConfig(name=name or DEFAULT_NAME, store=store)


def resolve_session_config(allowed_tokens: Optional[Sequence[str]] = None,
                           token_param: str = '',
                           cookie_name: str = '',
                           name: str = '') -> SessionConfig:
    """
    Build the configuration for the session gate.

    Empty ``token_param`` and ``cookie_name`` fall back to
    :data:`DEFAULT_TOKEN_PARAM` and :data:`DEFAULT_COOKIE_NAME`.
    """
    store = SecretStore(_clean_tokens(allowed_tokens))
    return SessionConfig(name=name or DEFAULT_NAME,
                         store=store,
                         token_param=token_param or DEFAULT_TOKEN_PARAM,
                         cookie_name=cookie_name or DEFAULT_COOKIE_NAME)


def split_tokens(raw: Optional[str]) -> List[str]:
    """Split a comma-separated list of tokens, as found in the environment."""
    if not raw:
        return []
    return [token.strip() for token in raw.split(',') if token.strip()]
