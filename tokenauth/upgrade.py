"""
Exchange a validated one-time query token for a session cookie.

The token arrives in the URL, where it would otherwise end up in server logs,
browser history and ``Referer`` headers. Once it has been validated we set it
as an ``HttpOnly`` cookie and send the client back to the same URL with the
token parameter removed. The upstream application never sees the tokenized
URL.
"""

from urllib.parse import quote, unquote_plus

from werkzeug.utils import redirect
from werkzeug.wrappers import Request, Response

from .domain import SessionConfig

TEMPORARY_REDIRECT = 307
"""Unlike 302, clients must repeat the request with the same method/body."""

QUERY_SAFE = "&=+%;/?:@,$!~*'()[]"


def scrub_query(query_string: str, param: str) -> str:
    """
    Remove every occurrence of ``param`` from a raw query string.

    All other parameters are kept in their original order and with their
    original encoding; nothing is decoded and re-encoded except the keys,
    which are decoded only for comparison.

    Parameters
    ----------
    query_string : str
        The raw query string, without the leading ``?``.
    param : str
        Name of the parameter to remove.

    Returns
    -------
    str
        The query string without ``param``. Empty if nothing remains.

    """
    if not query_string:
        return ''
    kept = [pair for pair in query_string.split('&')
            if unquote_plus(pair.partition('=')[0]) != param]
    return '&'.join(kept)


def redirect_target(request: Request, param: str) -> str:
    """
    Build the URL of ``request`` with ``param`` scrubbed from the query.

    Raw non-ASCII bytes are percent-encoded first, so that keys decode as
    UTF-8 the same way they do in ``request.args``. Existing escapes and
    delimiters are left alone.
    """
    raw = quote(request.query_string, safe=QUERY_SAFE)
    query = scrub_query(raw, param)
    if query:
        return f'{request.base_url}?{query}'
    return request.base_url


def upgrade(request: Request, config: SessionConfig, token: str) -> Response:
    """
    Generate the response that upgrades ``token`` to a session.

    ``token`` must already have been validated against ``config.store``.
    The response sets the session cookie and redirects to the scrubbed URL;
    the request is not forwarded.
    """
    response = redirect(redirect_target(request, config.token_param),
                        code=TEMPORARY_REDIRECT)
    response.set_cookie(config.cookie_name, token, path='/', httponly=True,
                        secure=True, samesite='Strict')
    return response
