"""
Shared-secret authorization gate for WSGI applications.

Two gates are provided (see :mod:`tokenauth.middleware`):

- :class:`.BearerTokenMiddleware` checks the ``Authorization`` header for
  ``Bearer <token>`` on every request.
- :class:`.SessionTokenMiddleware` accepts a session cookie, or exchanges a
  one-time ``?ta_token=...`` query parameter for that cookie and redirects to
  the same URL without the token.

Accepted tokens are compared in constant time (see :mod:`tokenauth.store`).
Nothing is persisted server-side.

For a Flask application, :class:`TokenAuth` resolves the gate from the app
config and installs it around ``app.wsgi_app``:

.. code-block:: python

   from flask import Flask
   from tokenauth import TokenAuth


   def create_web_app() -> Flask:
      app = Flask('someapp')
      app.config['TOKENAUTH_VARIANT'] = 'session'
      app.config['TOKENAUTH_ALLOWED_TOKENS'] = ['abc123']
      TokenAuth(app)
      return app

"""

from typing import Optional

from flask import Flask

from . import domain
from .middleware import (GateMiddleware, BearerTokenMiddleware,
                         SessionTokenMiddleware, create_gate, wrap)


class TokenAuth(object):
    """Installs a token gate around a Flask app."""

    def __init__(self, app: Optional[Flask] = None) -> None:
        self.gate: Optional[GateMiddleware] = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """
        Resolve the gate configuration and wrap ``app.wsgi_app``.

        ``TOKENAUTH_ALLOWED_TOKENS`` may be a list, or a comma-separated
        string as read from the environment.

        Parameters
        ----------
        app : :class:`Flask`

        """
        app.config.setdefault('TOKENAUTH_VARIANT', domain.HEADER)
        app.config.setdefault('TOKENAUTH_ALLOWED_TOKENS', [])
        app.config.setdefault('TOKENAUTH_TOKEN_PARAM',
                              domain.DEFAULT_TOKEN_PARAM)
        app.config.setdefault('TOKENAUTH_COOKIE_NAME',
                              domain.DEFAULT_COOKIE_NAME)
        app.config.setdefault('TOKENAUTH_NAME', domain.DEFAULT_NAME)

        tokens = app.config['TOKENAUTH_ALLOWED_TOKENS']
        if isinstance(tokens, str):
            tokens = domain.split_tokens(tokens)

        def _gate(wsgi_app):
            return create_gate(
                wsgi_app,
                variant=app.config['TOKENAUTH_VARIANT'],
                allowed_tokens=tokens,
                token_param=app.config['TOKENAUTH_TOKEN_PARAM'],
                cookie_name=app.config['TOKENAUTH_COOKIE_NAME'],
                name=app.config['TOKENAUTH_NAME']
            )

        wrap(app, [_gate])
        self.gate = app.wsgi_app
        app.extensions['tokenauth'] = self
