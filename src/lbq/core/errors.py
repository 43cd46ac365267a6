"""Exceptions raised by lbq."""


class LbqError(Exception):
    """Base class for all lbq errors."""


class InvalidRegistrationError(LbqError, TypeError):
    """Raised by ``register()`` when its arguments do not form an action."""


class ConfigError(LbqError):
    """Raised when the commands file is missing or cannot provide ``install``."""

    def __init__(self, message: str, path: object = None) -> None:
        super().__init__(message)
        self.path = path
