"""
Errors raised by the service layer.

Each carries a human-readable message that the API layer passes straight
through to the caller.
"""


class FomsError(Exception):
    """Base class for service-layer failures."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class AuthorizationError(FomsError):
    """The operation needs a signed-in caller and there is none."""


class NotFoundError(FomsError):
    """The operation addressed a request that does not exist."""


class ValidationError(FomsError):
    """The operation's arguments break a business rule."""
