"""Exceptions raised by lazy views."""


class ViewError(Exception):
    """Base class for every error raised by lazyviews."""
    pass


class PreconditionViolation(ViewError, ValueError):
    """Raised when a view or cursor is used against its contract.

    Reverse slice bounds, negative counts, dereferencing an end cursor or
    taking an owned value twice are programming errors: fix the call, do
    not retry it.
    """
    pass


class StaleIteratorError(ViewError, RuntimeError):
    """Raised when a shared sequence was reset under a live cursor."""
    pass
