"""Tests for :class:`tokenauth.TokenAuth` and the application factory."""

from unittest import TestCase, mock
import json

from flask import Flask

import tokenauth
from tokenauth import factory, middleware


class TestTokenAuth(TestCase):
    """Tests for :class:`tokenauth.TokenAuth`."""

    def _app(self, **config):
        app = Flask('test_app')
        app.config.update(config)

        @app.route('/page')
        def page():
            return 'protected'

        return app

    def test_defaults(self):
        """With no configuration, the header gate rejects everything."""
        app = self._app()
        ext = tokenauth.TokenAuth(app)
        self.assertIsInstance(ext.gate, middleware.BearerTokenMiddleware)
        self.assertIs(app.extensions['tokenauth'], ext)
        self.assertEqual(app.config['TOKENAUTH_TOKEN_PARAM'], 'ta_token')
        self.assertEqual(app.config['TOKENAUTH_COOKIE_NAME'],
                         'ta_session_token')

        client = app.test_client(use_cookies=False)
        response = client.get('/page',
                              headers={'Authorization': 'Bearer anything'})
        self.assertEqual(response.status_code, 401)

    def test_header_gate(self):
        """A Flask app is protected by the header gate."""
        app = self._app(TOKENAUTH_ALLOWED_TOKENS=['secret1'])
        tokenauth.TokenAuth(app)
        client = app.test_client(use_cookies=False)

        response = client.get('/page',
                              headers={'Authorization': 'Bearer secret1'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_data(as_text=True), 'protected')

        response = client.get('/page')
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers['WWW-Authenticate'],
                         'Bearer realm="Restricted"')

    def test_session_gate(self):
        """A Flask app is protected by the session gate."""
        app = self._app(TOKENAUTH_VARIANT='session',
                        TOKENAUTH_ALLOWED_TOKENS='abc123, def456',
                        TOKENAUTH_COOKIE_NAME='sess')
        ext = tokenauth.TokenAuth()
        ext.init_app(app)
        self.assertIsInstance(ext.gate, middleware.SessionTokenMiddleware)
        client = app.test_client(use_cookies=False)

        response = client.get('/page?ta_token=def456&x=1')
        self.assertEqual(response.status_code, 307)
        self.assertTrue(response.headers['Set-Cookie'].startswith(
            'sess=def456;'
        ))

        response = client.get('/page', headers={'Cookie': 'sess=abc123'})
        self.assertEqual(response.status_code, 200)


class TestCreateApp(TestCase):
    """Tests for :func:`factory.create_app`."""

    @mock.patch('tokenauth.config.TOKENAUTH_ALLOWED_TOKENS', 'secret1')
    @mock.patch('tokenauth.config.TOKENAUTH_VARIANT', 'header')
    @mock.patch(f'{factory.__name__}.setup_logger')
    def test_status(self, mock_setup_logger):
        """The built-in status endpoint is behind the gate."""
        app = factory.create_app()
        self.assertEqual(mock_setup_logger.call_count, 1)
        client = app.test_client(use_cookies=False)

        response = client.get('/status')
        self.assertEqual(response.status_code, 401)

        response = client.get('/status',
                              headers={'Authorization': 'Bearer secret1'})
        self.assertEqual(response.status_code, 200)
        data = json.loads(response.data)
        self.assertEqual(data['status'], 'ok')
        self.assertEqual(data['gate'], 'tokenauth')

    @mock.patch('tokenauth.config.TOKENAUTH_ALLOWED_TOKENS', 'abc123')
    @mock.patch('tokenauth.config.TOKENAUTH_VARIANT', 'session')
    @mock.patch(f'{factory.__name__}.setup_logger')
    def test_upstream(self, mock_setup_logger):
        """A supplied WSGI app is protected instead of the status endpoint."""
        def upstream(environ, start_response):
            start_response('200 OK', [('Content-Type', 'text/plain')])
            return [b'upstream']

        app = factory.create_app(upstream)
        client = app.test_client(use_cookies=False)
        response = client.get(
            '/anything', headers={'Cookie': 'ta_session_token=abc123'}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, b'upstream')
        self.assertEqual(client.get('/anything').status_code, 401)
