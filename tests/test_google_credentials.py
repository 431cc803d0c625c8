from __future__ import annotations

import base64
import json
from pathlib import Path

import pytest

from app.core.errors import ConfigurationError
from app.core.google_credentials import load_credentials, load_service_account_info
from conftest import make_settings


def _encode(payload) -> str:
    return base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


def test_inline_credentials_are_decoded() -> None:
    settings = make_settings(GOOGLE_CREDENTIALS_JSON=_encode({"type": "service_account", "project_id": "p"}))

    info = load_service_account_info(settings)

    assert info == {"type": "service_account", "project_id": "p"}


def test_inline_credentials_win_over_path(tmp_path: Path) -> None:
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({"source": "file"}), encoding="utf-8")
    settings = make_settings(
        GOOGLE_CREDENTIALS_JSON=_encode({"source": "inline"}),
        GOOGLE_CREDENTIALS_PATH=str(path),
    )

    assert load_service_account_info(settings) == {"source": "inline"}


def test_credentials_file_is_read(tmp_path: Path) -> None:
    path = tmp_path / "creds.json"
    path.write_text(json.dumps({"source": "file"}), encoding="utf-8")

    info = load_service_account_info(make_settings(GOOGLE_CREDENTIALS_PATH=str(path)))

    assert info == {"source": "file"}


def test_relative_credentials_path_resolves_against_cwd(tmp_path: Path) -> None:
    # isolated_env chdirs into tmp_path
    (tmp_path / "creds.json").write_text("{\"source\": \"relative\"}", encoding="utf-8")

    info = load_service_account_info(make_settings(GOOGLE_CREDENTIALS_PATH="creds.json"))

    assert info == {"source": "relative"}


def test_invalid_base64_is_a_configuration_error() -> None:
    settings = make_settings(GOOGLE_CREDENTIALS_JSON="%%% not base64 %%%")

    with pytest.raises(ConfigurationError, match="Failed to parse GOOGLE_CREDENTIALS_JSON"):
        load_service_account_info(settings)


def test_inline_value_that_is_not_json_is_rejected() -> None:
    encoded = base64.b64encode(b"definitely not json").decode("ascii")

    with pytest.raises(ConfigurationError, match="Failed to parse GOOGLE_CREDENTIALS_JSON"):
        load_service_account_info(make_settings(GOOGLE_CREDENTIALS_JSON=encoded))


def test_inline_json_array_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="expected a JSON object"):
        load_service_account_info(make_settings(GOOGLE_CREDENTIALS_JSON=_encode([1, 2])))


def test_missing_credentials_file(tmp_path: Path) -> None:
    missing = tmp_path / "nope.json"

    with pytest.raises(ConfigurationError, match="Credentials file not found at"):
        load_service_account_info(make_settings(GOOGLE_CREDENTIALS_PATH=str(missing)))


def test_broken_credentials_file(tmp_path: Path) -> None:
    path = tmp_path / "creds.json"
    path.write_text("{broken", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Failed to read credentials file"):
        load_service_account_info(make_settings(GOOGLE_CREDENTIALS_PATH=str(path)))


def test_no_credentials_configured() -> None:
    with pytest.raises(ConfigurationError, match="No credentials provided"):
        load_service_account_info(make_settings())


def test_incomplete_service_account_is_a_configuration_error() -> None:
    settings = make_settings(GOOGLE_CREDENTIALS_JSON=_encode({"type": "service_account"}))

    with pytest.raises(ConfigurationError, match="Invalid service account credentials"):
        load_credentials(settings)
