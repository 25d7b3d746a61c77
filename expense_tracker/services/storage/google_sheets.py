"""
Google Sheets Storage Implementation

DESIGN DECISION: Google Sheets is offered as a backend because:
1. The user can look at (and back up) their raw data directly in Sheets
2. No database setup required
3. The data survives a lost or replaced phone/laptop

TRADEOFFS:
- A single cell holds at most 50,000 characters, which caps how much
  history the `expenses` key can hold
- No transactions (the repositories assume a single writer anyway)
- Every get/set is an API round trip

The worksheet has two columns, key and value, one row per key.
API calls are retried with exponential backoff; that is this backend's
own failure contract, the repositories never retry.
"""

from typing import Optional

import gspread
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from expense_tracker.config import get_settings
from expense_tracker.services.storage.interface import (
    ConnectionError,
    KeyValueStore,
    StoreReadError,
    StoreWriteError,
)


STORE_COLUMNS = [
    "key",
    "value",
]

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

_API_RETRY = dict(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)


class GoogleSheetsClient:
    """
    Opens the configured spreadsheet and its key/value worksheet.

    The gspread client and spreadsheet handle are created on first use
    and reused afterwards.
    """

    def __init__(self):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = get_settings().google_sheets

    @retry(**_API_RETRY)
    def connect(self) -> gspread.Client:
        """Authorize with the service account key file."""
        if self._client is not None:
            return self._client

        key_file = self._settings.credentials_path
        try:
            credentials = Credentials.from_service_account_file(key_file, scopes=SCOPES)
            self._client = gspread.authorize(credentials)
        except FileNotFoundError:
            raise ConnectionError(f"No service account key at {key_file}")
        except Exception as e:
            raise ConnectionError(f"Could not authorize with Google Sheets: {e}")
        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        if self._spreadsheet is None:
            spreadsheet_id = self._settings.spreadsheet_id
            try:
                self._spreadsheet = self.connect().open_by_key(spreadsheet_id)
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"No spreadsheet with id {spreadsheet_id} is shared with the service account"
                )
        return self._spreadsheet

    def get_store_sheet(self) -> gspread.Worksheet:
        """The key/value worksheet, created with a header row if missing."""
        spreadsheet = self.get_spreadsheet()
        title = self._settings.worksheet_name
        try:
            return spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(title=title, rows=100, cols=len(STORE_COLUMNS))
            sheet.append_row(STORE_COLUMNS)
            return sheet


class GoogleSheetsStore(KeyValueStore):
    """
    KeyValueStore over one two-column worksheet.

    Row 1 is the header; every other row is [key, value].
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    @staticmethod
    def _find_row(rows: list[list[str]], key: str) -> Optional[int]:
        """1-based sheet row index holding key, skipping the header."""
        for idx, row in enumerate(rows[1:], start=2):
            if row and row[0] == key:
                return idx
        return None

    @retry(**_API_RETRY)
    async def get(self, key: str) -> Optional[str]:
        """Read a value from the worksheet."""
        try:
            sheet = self._client.get_store_sheet()
            rows = sheet.get_all_values()
        except Exception as e:
            raise StoreReadError(f"Failed to read '{key}': {e}")

        row_idx = self._find_row(rows, key)
        if row_idx is None:
            return None
        row = rows[row_idx - 1]
        return row[1] if len(row) > 1 else ""

    @retry(**_API_RETRY)
    async def set(self, key: str, value: str) -> None:
        """
        Write a value, updating the key's row or appending a new one.

        Both paths write RAW so Sheets never reinterprets the string.
        """
        try:
            sheet = self._client.get_store_sheet()
            rows = sheet.get_all_values()
            row_idx = self._find_row(rows, key)
            if row_idx is None:
                sheet.append_row([key, value], value_input_option="RAW")
            else:
                sheet.update(
                    values=[[value]],
                    range_name=f"B{row_idx}",
                    value_input_option="RAW",
                )
        except Exception as e:
            raise StoreWriteError(f"Failed to write '{key}': {e}")
