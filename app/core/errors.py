"""DocCenter — Webhook Error Taxonomy.

Every failure on the webhook path is a ``WebhookError``. Components raise;
the handler catches them at the orchestration boundary and reports ``code``.
"""

from typing import Optional


class WebhookError(Exception):
    """Base class for all webhook processing errors."""

    @property
    def code(self) -> str:
        return type(self).__name__


class Unauthorized(WebhookError):
    """Missing, malformed, or wrong bearer token."""


class PersistenceError(WebhookError):
    """The webhook record could not be written to the store."""


class MissingField(WebhookError):
    """A required payload field is absent or empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} not provided in payload")


class InvalidDateFormat(WebhookError):
    """MESANO does not reduce to exactly six digits."""


class InvalidMonth(WebhookError):
    """MESANO month is outside 01–12."""


class ClientFolderNotFound(WebhookError):
    """No client folder name contains the given CNPJ."""


class DestinationNotFound(WebhookError):
    """The resolved destination directory does not exist."""


class DownloadFailed(WebhookError):
    """The file source answered with a non-success status or was unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DownloadTimeout(DownloadFailed):
    """The file source did not answer within the configured timeout."""


class FileWriteError(WebhookError):
    """The destination file could not be opened or written."""
