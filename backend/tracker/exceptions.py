"""Typed domain exceptions raised by the tracker services.

Caught at the HTTP boundary and converted to JSON error responses.
"""


class TrackerError(Exception):
    """Base exception for tracker service failures."""


class NotFoundError(TrackerError):
    """The requested record does not exist."""


class ProfileNotFoundError(NotFoundError):
    """No profile exists with the requested id."""


class GameNotFoundError(NotFoundError):
    """No game exists with the requested id."""


class ConflictError(TrackerError):
    """Storage rejected a write (duplicate id or dangling profile reference)."""


class InvalidPictureError(TrackerError):
    """A game references a picture that was never stored."""
