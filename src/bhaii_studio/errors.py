"""Exception types raised inside bhaii_studio.

Gateway operations never let these escape; they are reported as result
values instead. Storage backends raise them to their callers.
"""


class BhaiiStudioError(Exception):
    """Base class for all bhaii_studio errors."""


class MissingCredentialError(BhaiiStudioError):
    """No API key could be resolved at call time."""


class StorageError(BhaiiStudioError):
    """A local storage backend was misused or failed."""
