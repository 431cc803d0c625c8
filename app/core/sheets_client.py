# app/core/sheets_client.py
"""
Read-only Google Sheets access for the product sync.

Two calls are made against the same range:
  - values.get  -> the displayed cell text (what the rows are built from)
  - spreadsheets.get(includeGridData=True) -> per-cell metadata, used only
    to recover hyperlinks. A cell can show friendly text ("Photo") while
    linking elsewhere, and values.get only returns the text.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from google.auth.exceptions import GoogleAuthError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.core.config import Settings
from app.core.errors import ConfigurationError, SheetsReadError
from app.core.google_credentials import load_credentials

logger = logging.getLogger(__name__)

# Header row excluded; rows 2..100 => at most 99 products.
SHEET_RANGE = "A2:J100"

# Columns G and H (zero-indexed) hold product image links.
IMAGE_COLUMNS: tuple[int, ...] = (6, 7)

HyperlinkOverlay = dict[tuple[int, int], str]


@dataclass
class SheetData:
    """Raw rows plus hyperlinks keyed by (row_index, col_index)."""

    rows: list[list[Any]] = field(default_factory=list)
    hyperlinks: HyperlinkOverlay = field(default_factory=dict)


def extract_hyperlinks(
    spreadsheet: dict[str, Any],
    columns: tuple[int, ...] = IMAGE_COLUMNS,
) -> HyperlinkOverlay:
    """
    Collect cell hyperlinks from a spreadsheets.get(includeGridData=True)
    response.

    row_index is relative to the first row of the requested range
    (0 == sheet row 2 for SHEET_RANGE).
    """
    hyperlinks: HyperlinkOverlay = {}

    sheets = spreadsheet.get("sheets") or []
    if not sheets:
        return hyperlinks
    grids = sheets[0].get("data") or []
    if not grids:
        return hyperlinks

    for row_index, row in enumerate(grids[0].get("rowData") or []):
        for col_index, cell in enumerate(row.get("values") or []):
            if col_index not in columns:
                continue
            link = (cell or {}).get("hyperlink")
            if link:
                hyperlinks[(row_index, col_index)] = link

    return hyperlinks


def build_sheets_service(settings: Settings):
    """
    Authenticate and build a Sheets v4 service object.
    """
    credentials = load_credentials(settings)
    try:
        return build("sheets", "v4", credentials=credentials, cache_discovery=False)
    except (HttpError, GoogleAuthError) as exc:
        raise SheetsReadError(f"Failed to initialize Google Sheets API: {exc}") from exc


class SheetsReader:
    """
    Fetches product rows + hyperlinks from one spreadsheet.

    `service` is anything exposing the googleapiclient call chain
    (spreadsheets().values().get(...).execute(), ...).
    """

    def __init__(self, spreadsheet_id: str, service, sheet_range: str = SHEET_RANGE):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self._service = service

    @classmethod
    def from_settings(cls, settings: Settings) -> "SheetsReader":
        if not settings.GOOGLE_SHEET_ID:
            raise ConfigurationError("GOOGLE_SHEET_ID environment variable is required")
        service = build_sheets_service(settings)
        logger.info("✅ Google Sheets API initialized")
        return cls(settings.GOOGLE_SHEET_ID, service)

    def read(self) -> SheetData:
        """
        Read values and hyperlinks for the configured range.

        Raises:
            SheetsReadError: if either call fails. Nothing is returned
            from a half-finished read.
        """
        logger.info("📖 Reading data from Google Sheets...")
        logger.info(f"   Sheet ID: {self.spreadsheet_id}")
        logger.info(f"   Range: {self.sheet_range}")

        spreadsheets = self._service.spreadsheets()
        try:
            values_response = (
                spreadsheets.values()
                .get(spreadsheetId=self.spreadsheet_id, range=self.sheet_range)
                .execute()
            )
            grid_response = spreadsheets.get(
                spreadsheetId=self.spreadsheet_id,
                ranges=[self.sheet_range],
                includeGridData=True,
            ).execute()
        except (HttpError, GoogleAuthError) as exc:
            raise SheetsReadError(f"Failed to read Google Sheet: {exc}") from exc

        rows = values_response.get("values") or []
        hyperlinks = extract_hyperlinks(grid_response)

        logger.info(f"   Found {len(rows)} rows")
        logger.info(f"   Found {len(hyperlinks)} hyperlinks in image columns")
        return SheetData(rows=rows, hyperlinks=hyperlinks)
