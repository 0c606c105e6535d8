from typing import Optional

from flask import Flask

from . import routes
from .app_logging import setup_logger
from .middleware import WSGIApp
from . import TokenAuth


def create_app(upstream: Optional[WSGIApp] = None) -> Flask:
    """
    Initialize the gate application.

    Parameters
    ----------
    upstream : callable
        A WSGI application to protect. If not provided, the app serves the
        endpoints in :mod:`.routes` behind the gate.

    """
    app = Flask('tokenauth')
    app.config.from_object('tokenauth.config')
    setup_logger(app.config['LOGLEVEL'], app.config['LOG_JSON'])

    if upstream is None:
        app.register_blueprint(routes.blueprint)
    else:
        app.wsgi_app = upstream

    TokenAuth(app)
    return app
