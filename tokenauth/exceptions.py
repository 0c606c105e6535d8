"""Exceptions raised while authorizing a request."""


class AuthorizationError(RuntimeError):
    """The request could not be authorized."""


class MissingCredential(AuthorizationError):
    """No credential was presented on the request."""


class InvalidCredential(AuthorizationError):
    """A credential was presented, but it matches no accepted secret."""


class ConfigurationError(RuntimeError):
    """Raised when the gate is constructed with an unusable configuration."""
