"""
HTTP-facing errors raised by the controllers.

Each of these is a :class:`werkzeug.exceptions.HTTPException`, so it carries
its own status code and message. The error handlers in
:mod:`chatty.routes.auth` render them as ``{"message": ...}``.
"""

from werkzeug.exceptions import BadRequest, InternalServerError, Unauthorized


class ValidationError(BadRequest):
    """The request payload failed validation."""


class DuplicateUserError(BadRequest):
    """A user with the same username or email already exists."""

    description = 'User already exist. Try again.'


class InvalidCredentialsError(BadRequest):
    """
    Unknown username or wrong password.

    Both cases share one message so that usernames cannot be enumerated.
    """

    description = 'Invalid credentials'


class UploadError(BadRequest):
    """The avatar image could not be uploaded."""

    description = 'File upload: Error occurred. Try again.'


class NotAuthorizedError(Unauthorized):
    """The request does not carry a valid session token."""


class ServerError(InternalServerError):
    """An infrastructure fault; the cause is logged, never returned."""

    description = 'Something went wrong. Try again later.'
