"""Web Server Gateway Interface entry-point."""

from tokenauth.factory import create_app

# Built once, before any request is served.
application = create_app()
