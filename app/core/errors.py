# app/core/errors.py
"""
Exception types shared by the sheet sync job and the API.

Sync pipeline errors all derive from SyncError so callers (CLI job,
HTTP handler) can catch a single type and report the message. The
orchestrator stamps `stage` with the step that was running.
"""


class SyncError(Exception):
    """Base error for the spreadsheet -> database sync."""

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.message = message
        self.stage = stage


class ConfigurationError(SyncError):
    """Missing or malformed credentials / environment values."""


class SheetsReadError(SyncError):
    """Google Sheets API call failed (transport or auth)."""


class DatabaseWriteError(SyncError):
    """Supabase fetch / delete / insert failed."""


class SyncEndpointError(Exception):
    """
    Error raised by the sync router.

    Rendered by the app-level handler as:
        {"success": false, "error": <error>}
    """

    def __init__(self, status_code: int, error: str):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
