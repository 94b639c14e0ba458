# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_provenance

import json
import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from coreason_provenance.main import main

PIXEL_ID = "uuid-pix-8-pro-x992"


class TestDerive:
    def test_derive_v1(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["derive", "--device-id", PIXEL_ID, "--timestamp", "1700000000000"])
        assert capsys.readouterr().out.strip() == "V1-e191bd738f9465f6c169bc9542ddfb9c"

    def test_derive_v2(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["derive", "--device-id", PIXEL_ID, "--timestamp", "1700000000000", "--algo", "V2_SALTED"])
        assert capsys.readouterr().out.strip() == "V2-c198c53e8c8d8134350d3b03bd64ba8e"

    def test_derive_unknown_device_exits(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["derive", "--device-id", "uuid-unknown", "--timestamp", "1"])
        assert excinfo.value.code == 1

    def test_derive_invalid_algo(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["derive", "--device-id", PIXEL_ID, "--timestamp", "1", "--algo", "V3"])
        assert excinfo.value.code == 2

    def test_derive_with_catalog(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        catalog = tmp_path / "devices.json"
        catalog.write_text(json.dumps([{"id": "lab-1", "model": "Lab", "osVersion": "1", "type": "ANDROID_MID"}]), encoding="utf-8")

        with patch.dict(os.environ, {}, clear=False):
            main(["--device-catalog", str(catalog), "derive", "--device-id", "lab-1", "--timestamp", "5"])
            assert os.environ["COREASON_PROVENANCE_DEVICE_CATALOG"] == str(catalog)

        assert capsys.readouterr().out.strip().startswith("V1-")


class TestServe:
    @patch("coreason_provenance.main.uvicorn")
    def test_serve_defaults(self, mock_uvicorn: MagicMock) -> None:
        main(["serve"])
        mock_uvicorn.run.assert_called_once_with(
            "coreason_provenance.api:app", host="127.0.0.1", port=8000, log_level="info"
        )

    @patch("coreason_provenance.main.uvicorn")
    def test_serve_custom_bind(self, mock_uvicorn: MagicMock) -> None:
        main(["serve", "--host", "0.0.0.0", "--port", "9001"])
        _, kwargs = mock_uvicorn.run.call_args
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9001

    @patch("coreason_provenance.main.uvicorn")
    def test_serve_failure_exits(self, mock_uvicorn: MagicMock) -> None:
        mock_uvicorn.run.side_effect = OSError("address in use")
        with pytest.raises(SystemExit) as excinfo:
            main(["serve"])
        assert excinfo.value.code == 1

    def test_missing_command(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 2
