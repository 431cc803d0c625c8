from __future__ import annotations

import uuid
from typing import Any, Dict, List

import pytest
from postgrest.exceptions import APIError

from app.core.config import Settings, get_settings

ENV_VARS = (
    "GOOGLE_SHEET_ID",
    "GOOGLE_CREDENTIALS_JSON",
    "GOOGLE_CREDENTIALS_PATH",
    "SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SYNC_SECRET_KEY",
    "DATABASE_URL",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """No real env vars / .env files leak into tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_settings(**overrides: Any) -> Settings:
    return Settings(_env_file=None, **overrides)


# ---------------------------------------------------------------------------
# Google Sheets fake (googleapiclient call chain)
# ---------------------------------------------------------------------------


class _FakeRequest:
    def __init__(self, callback):
        self._callback = callback

    def execute(self):
        return self._callback()


class _FakeValues:
    def __init__(self, service: "FakeSheetsService") -> None:
        self._service = service

    def get(self, spreadsheetId: str, range: str):  # noqa: N803 - API compatibility
        self._service.calls.append(("values.get", spreadsheetId, range))
        return _FakeRequest(self._service._values)


class _FakeSpreadsheets:
    def __init__(self, service: "FakeSheetsService") -> None:
        self._service = service

    def values(self) -> _FakeValues:
        return _FakeValues(self._service)

    def get(self, spreadsheetId: str, ranges: List[str], includeGridData: bool):  # noqa: N803
        self._service.calls.append(("get", spreadsheetId, tuple(ranges), includeGridData))
        return _FakeRequest(self._service._grid)


class FakeSheetsService:
    def __init__(
        self,
        rows: List[List[Any]] | None = None,
        links: Dict[tuple, str] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.rows = rows or []
        self.links = links or {}
        self.error = error
        self.calls: List[tuple] = []

    def spreadsheets(self) -> _FakeSpreadsheets:
        return _FakeSpreadsheets(self)

    def _values(self) -> Dict[str, Any]:
        if self.error is not None:
            raise self.error
        return {"values": self.rows} if self.rows else {}

    def _grid(self) -> Dict[str, Any]:
        if self.error is not None:
            raise self.error
        row_data = []
        for row_index, row in enumerate(self.rows):
            cells = []
            for col_index, value in enumerate(row):
                cell: Dict[str, Any] = {"formattedValue": value}
                link = self.links.get((row_index, col_index))
                if link:
                    cell["hyperlink"] = link
                cells.append(cell)
            row_data.append({"values": cells})
        return {"sheets": [{"data": [{"rowData": row_data}]}]}


# ---------------------------------------------------------------------------
# Supabase fake (client.table(...).select/delete/insert ... .execute())
# ---------------------------------------------------------------------------


class _FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]) -> None:
        self.data = data


class _FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self._client = client
        self.table = table
        self.op: str | None = None
        self.columns: str | None = None
        self.payload: List[Dict[str, Any]] = []
        self.filter: tuple | None = None

    def select(self, columns: str = "*") -> "_FakeQuery":
        self.op, self.columns = "select", columns
        return self

    def delete(self) -> "_FakeQuery":
        self.op = "delete"
        return self

    def in_(self, column: str, values) -> "_FakeQuery":
        self.filter = (column, list(values))
        return self

    def insert(self, rows: List[Dict[str, Any]]) -> "_FakeQuery":
        self.op, self.payload = "insert", list(rows)
        return self

    def execute(self) -> _FakeResponse:
        return self._client._execute(self)


class FakeSupabase:
    """
    In-memory stand-in for the supabase Client.

    `fail_on` maps an operation ("select" / "delete" / "insert") to the
    1-based call number that should raise APIError.
    """

    def __init__(self, rows: List[Dict[str, Any]] | None = None, fail_on: Dict[str, int] | None = None):
        self.rows: List[Dict[str, Any]] = [dict(r) for r in rows or []]
        self.fail_on = fail_on or {}
        self.calls: List[_FakeQuery] = []

    def table(self, name: str) -> _FakeQuery:
        return _FakeQuery(self, name)

    def ops(self, op: str) -> List[_FakeQuery]:
        return [q for q in self.calls if q.op == op]

    def _execute(self, query: _FakeQuery) -> _FakeResponse:
        self.calls.append(query)
        if self.fail_on.get(query.op) == len(self.ops(query.op)):
            raise APIError({"message": f"{query.op} rejected", "code": "500"})

        if query.op == "select":
            return _FakeResponse([{"id": r["id"]} for r in self.rows])
        if query.op == "delete":
            column, values = query.filter
            removed = [r for r in self.rows if r[column] in values]
            self.rows = [r for r in self.rows if r[column] not in values]
            return _FakeResponse(removed)
        if query.op == "insert":
            inserted = [{"id": str(uuid.uuid4()), **row} for row in query.payload]
            self.rows.extend(inserted)
            return _FakeResponse(inserted)
        raise AssertionError(f"unexpected query {query.op}")


def existing_rows(count: int) -> List[Dict[str, Any]]:
    return [{"id": str(uuid.uuid4()), "name": f"Old {i}", "stock": 1} for i in range(count)]


@pytest.fixture()
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()
