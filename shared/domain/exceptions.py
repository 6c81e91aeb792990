"""
Domain Errors

Every failure a use case can report to its caller. The API layer maps
each class to an HTTP status (see ``shared.infrastructure.exception_handler``);
nothing below knows about HTTP.

A signature mismatch on a payment callback is deliberately absent: it is an
expected outcome that moves a booking to cancelled/failed, not an error.
"""


class DomainError(Exception):
    """Base class for recoverable domain failures."""

    code = 'domain_error'
    default_message = 'Request could not be processed.'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(DomainError, ValueError):
    """Malformed or missing input, correctable by the user."""

    code = 'invalid'
    default_message = 'Invalid input.'


class NotFound(DomainError, LookupError):
    """A referenced entity does not exist."""

    code = 'not_found'
    default_message = 'Not found.'


class Forbidden(DomainError):
    """The actor lacks ownership or role for the action."""

    code = 'forbidden'
    default_message = 'You are not allowed to perform this action.'


class Conflict(DomainError):
    """The action collides with current state (overlap, duplicate, wrong state)."""

    code = 'conflict'
    default_message = 'The request conflicts with the current state.'


class UpstreamFailure(DomainError):
    """The payment gateway failed or timed out. Safe to retry."""

    code = 'upstream_failure'
    default_message = 'Payment service temporarily unavailable. Please retry.'
