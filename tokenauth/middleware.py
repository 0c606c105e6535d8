"""
WSGI middleware that gates requests on a shared secret.

A gate wraps a downstream WSGI application and is itself a WSGI application.
Per request it extracts a credential, validates it against the configured
:class:`.store.SecretStore`, and then either hands the untouched ``environ``
to the downstream app, rejects the request with a 401, or (session gate only)
upgrades a query token to a session cookie and redirects.

.. code-block:: python

   from flask import Flask
   from tokenauth.middleware import create_gate, wrap

   app = Flask('someapp')
   wrap(app, [lambda wsgi_app: create_gate(wsgi_app, 'header',
                                           allowed_tokens=['s3cr3t'])])

"""

from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional, Sequence, Union
import logging

from werkzeug.wrappers import Request, Response

from . import domain
from .domain import BearerConfig, SessionConfig
from .exceptions import (AuthorizationError, ConfigurationError,
                         InvalidCredential, MissingCredential)
from .extract import bearer_credential, session_credentials
from .upgrade import upgrade

logger = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable], Iterable[bytes]]

UNAUTHORIZED = 401
BEARER_CHALLENGE = 'Bearer realm="Restricted"'


class GateMiddleware(ABC):
    """
    Base class for authorization gates.

    Subclasses implement :meth:`authorize`, which either returns ``None`` to
    forward the request, returns a :class:`Response` to short-circuit it, or
    raises an :class:`.AuthorizationError` to reject it.
    """

    def __init__(self, wsgi_app: WSGIApp,
                 config: Union[BearerConfig, SessionConfig]) -> None:
        self.app = wsgi_app
        self.config = config
        if len(config.store) == 0:
            logger.warning('%s: no tokens configured; all requests will be'
                           ' rejected', config.name)
        logger.info('%s: %s gate ready with %i token(s)', config.name,
                    config.variant, len(config.store))

    @property
    def name(self) -> str:
        return self.config.name

    @abstractmethod
    def authorize(self, request: Request) -> Optional[Response]:
        """Forward (``None``), short-circuit, or raise to reject."""

    def reject(self, error: AuthorizationError) -> Response:
        """Generate the 401 response for a failed authorization."""
        return Response('Unauthorized', status=UNAUTHORIZED,
                        mimetype='text/plain')

    def __call__(self, environ: dict, start_response: Callable) \
            -> Iterable[bytes]:
        # Shallow, so that the request body is never consumed here.
        request = Request(environ, shallow=True)
        try:
            response = self.authorize(request)
        except AuthorizationError as e:
            logger.debug('%s: rejected %s %s: %s', self.name, request.method,
                         request.path, type(e).__name__)
            response = self.reject(e)
        if response is None:
            logger.debug('%s: forwarding %s %s', self.name, request.method,
                         request.path)
            return self.app(environ, start_response)
        return response(environ, start_response)


class BearerTokenMiddleware(GateMiddleware):
    """Requires ``Authorization: Bearer <token>`` with an accepted token."""

    def authorize(self, request: Request) -> Optional[Response]:
        credential = bearer_credential(request, self.config.header)
        # An empty header goes through the same comparison as a wrong one.
        if self.config.store.contains(credential):
            return None
        if not credential:
            raise MissingCredential('No authorization header')
        raise InvalidCredential('Authorization header not accepted')

    def reject(self, error: AuthorizationError) -> Response:
        response = super(BearerTokenMiddleware, self).reject(error)
        response.headers['WWW-Authenticate'] = BEARER_CHALLENGE
        return response


class SessionTokenMiddleware(GateMiddleware):
    """
    Accepts a session cookie, or upgrades a one-time query token to one.

    A valid session cookie always takes precedence: the request is forwarded
    as-is, even if it also carries a token parameter. Otherwise a valid query
    token is exchanged for a session cookie, and the client is redirected to
    the same URL without the token.
    """

    def authorize(self, request: Request) -> Optional[Response]:
        store = self.config.store
        credentials = session_credentials(request, self.config.cookie_name,
                                          self.config.token_param)
        cookie = credentials.cookie
        if cookie is not None and store.contains(cookie):
            return None

        if not credentials.token:
            raise MissingCredential('No session cookie or token')
        if not store.contains(credentials.token):
            raise InvalidCredential('Token not accepted')
        logger.debug('%s: upgrading token to session for %s', self.name,
                     request.path)
        return upgrade(request, self.config, credentials.token)

    def reject(self, error: AuthorizationError) -> Response:
        if isinstance(error, InvalidCredential):
            return Response('Invalid token', status=UNAUTHORIZED,
                            mimetype='text/plain')
        return super(SessionTokenMiddleware, self).reject(error)


def create_gate(wsgi_app: WSGIApp, variant: str = domain.HEADER,
                allowed_tokens: Optional[Sequence[str]] = None,
                token_param: str = '', cookie_name: str = '',
                name: str = '') -> GateMiddleware:
    """
    Resolve configuration and wrap ``wsgi_app`` in the requested gate.

    Parameters
    ----------
    wsgi_app : callable
        The downstream WSGI application.
    variant : str
        Either :data:`.domain.HEADER` or :data:`.domain.SESSION`.
    allowed_tokens : list
        Accepted secrets. If empty, every request is rejected.
    token_param : str
        Session gate only. Defaults to ``ta_token``.
    cookie_name : str
        Session gate only. Defaults to ``ta_session_token``.
    name : str
        Name of the gate, used in log records.

    Returns
    -------
    :class:`GateMiddleware`

    Raises
    ------
    :class:`.ConfigurationError`
        If ``variant`` is not recognized.

    """
    if variant == domain.HEADER:
        return BearerTokenMiddleware(
            wsgi_app,
            domain.resolve_bearer_config(allowed_tokens, name=name)
        )
    if variant == domain.SESSION:
        return SessionTokenMiddleware(
            wsgi_app,
            domain.resolve_session_config(allowed_tokens,
                                          token_param=token_param,
                                          cookie_name=cookie_name,
                                          name=name)
        )
    raise ConfigurationError(f'Unknown gate variant: {variant!r}; expected'
                             f' one of {", ".join(domain.VARIANTS)}')


def wrap(app, middlewares: Sequence[Callable[[WSGIApp], WSGIApp]]):
    """
    Wrap a Flask app's WSGI callable in each of ``middlewares``, in order.

    The last middleware in the list is the outermost, and so sees the request
    first.
    """
    for middleware in middlewares:
        app.wsgi_app = middleware(app.wsgi_app)
    return app
