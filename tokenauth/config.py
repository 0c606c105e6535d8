"""Flask configuration for the token gate."""

import os

TOKENAUTH_VARIANT = os.environ.get('TOKENAUTH_VARIANT', 'header')
"""Either ``header`` (bearer token) or ``session`` (query token + cookie)."""

TOKENAUTH_ALLOWED_TOKENS = os.environ.get('TOKENAUTH_ALLOWED_TOKENS', '')
"""Comma-separated accepted tokens. If empty, all requests are rejected."""

TOKENAUTH_TOKEN_PARAM = os.environ.get('TOKENAUTH_TOKEN_PARAM', 'ta_token')
TOKENAUTH_COOKIE_NAME = os.environ.get('TOKENAUTH_COOKIE_NAME',
                                       'ta_session_token')
TOKENAUTH_NAME = os.environ.get('TOKENAUTH_NAME', 'tokenauth')

LOGLEVEL = os.environ.get('LOGLEVEL', 'INFO')
LOG_JSON = os.environ.get('LOG_JSON', '1') == '1'
