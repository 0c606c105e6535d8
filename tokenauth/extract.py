"""Pull candidate credentials off of a request."""

from typing import NamedTuple, Optional

from werkzeug.wrappers import Request

from .domain import AUTHORIZATION_HEADER


class SessionCredentials(NamedTuple):
    """The two independent candidates carried by a session-gate request."""

    cookie: Optional[str]
    """Value of the session cookie, or ``None`` if it was not sent."""

    token: Optional[str]
    """Value of the token query parameter, or ``None`` if it was not sent."""


def bearer_credential(request: Request,
                      header: str = AUTHORIZATION_HEADER) -> str:
    """
    Get the raw ``Authorization`` header value.

    The value is returned verbatim, scheme included. If the header is absent
    the result is an empty string, which will never match a stored secret.
    """
    return request.headers.get(header, '')


def session_credentials(request: Request, cookie_name: str,
                        token_param: str) -> SessionCredentials:
    """
    Get the session cookie and the query token from ``request``.

    These are kept apart: the cookie and the token are validated separately,
    and the outcome of one does not affect how the other is read. If the
    token parameter is repeated, the first value is used.
    """
    return SessionCredentials(cookie=request.cookies.get(cookie_name),
                              token=request.args.get(token_param))
