"""Provides exceptions occurring with external services."""


class CacheWriteError(RuntimeError):
    """Failed to write a user to the user cache."""


class CacheReadError(RuntimeError):
    """Failed to read a user from the user cache."""


class QueueError(RuntimeError):
    """Failed to put a job on the job queue."""


class UploadFailed(RuntimeError):
    """The asset host rejected the upload, or could not be reached."""


class StoreUnavailable(IOError):
    """The authoritative store could not be reached."""


class EmailDeliveryFailed(RuntimeError):
    """The mail transport could not deliver a message."""
