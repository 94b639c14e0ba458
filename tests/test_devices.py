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
from unittest.mock import patch

import pytest

from coreason_provenance.devices import (
    SIMULATED_DEVICES,
    FileDeviceProvider,
    SimulationDeviceProvider,
    UnknownDeviceError,
    get_device_provider,
)
from coreason_provenance.schemas import DeviceProfile, DeviceType


def _write_catalog(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestSimulationProvider:
    def test_lists_builtin_devices(self) -> None:
        devices = SimulationDeviceProvider().list_devices()
        assert len(devices) == 5
        assert [d.id for d in devices][0] == "uuid-pix-8-pro-x992"
        assert all(isinstance(d, DeviceProfile) for d in devices)

    def test_device_ids_are_unique(self) -> None:
        ids = [d.id for d in SIMULATED_DEVICES]
        assert len(ids) == len(set(ids))

    def test_get_device(self) -> None:
        device = SimulationDeviceProvider().get_device("uuid-iph-15-pm-0012")
        assert device.model == "iPhone 15 Pro Max"
        assert device.type == DeviceType.IOS_PRO

    def test_get_unknown_device(self) -> None:
        with pytest.raises(UnknownDeviceError, match="Unknown device"):
            SimulationDeviceProvider().get_device("uuid-nope")

    def test_list_is_a_copy(self) -> None:
        provider = SimulationDeviceProvider()
        provider.list_devices().clear()
        assert len(provider.list_devices()) == 5


class TestFileProvider:
    def test_loads_catalog(self, tmp_path: Path) -> None:
        path = _write_catalog(
            tmp_path / "devices.json",
            [{"id": "lab-1", "model": "Lab Camera", "osVersion": "fw 2", "type": "IOS_STANDARD", "label": "Lab"}],
        )
        provider = FileDeviceProvider(path)
        assert provider.get_device("lab-1").os_version == "fw 2"
        assert provider.get_device("lab-1").type == DeviceType.IOS_STANDARD

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FileDeviceProvider(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid device catalog"):
            FileDeviceProvider(path)

    def test_invalid_profile(self, tmp_path: Path) -> None:
        path = _write_catalog(tmp_path / "devices.json", [{"id": "x"}])
        with pytest.raises(ValueError, match="Invalid device catalog"):
            FileDeviceProvider(path)

    def test_entry_without_type_rejected(self, tmp_path: Path) -> None:
        path = _write_catalog(tmp_path / "devices.json", [{"id": "lab-1", "model": "Lab", "osVersion": "1"}])
        with pytest.raises(ValueError, match="Invalid device catalog"):
            FileDeviceProvider(path)

    def test_duplicate_ids(self, tmp_path: Path) -> None:
        entry = {"id": "dup", "model": "M", "osVersion": "1", "type": "ANDROID_MID"}
        path = _write_catalog(tmp_path / "devices.json", [entry, entry])
        with pytest.raises(ValueError, match="duplicate device ids"):
            FileDeviceProvider(path)


class TestFactory:
    @patch.dict(os.environ, {}, clear=True)
    def test_default_is_simulation(self) -> None:
        assert isinstance(get_device_provider(), SimulationDeviceProvider)

    def test_blank_env_is_simulation(self) -> None:
        with patch.dict(os.environ, {"COREASON_PROVENANCE_DEVICE_CATALOG": "   "}):
            assert isinstance(get_device_provider(), SimulationDeviceProvider)

    def test_env_selects_file_provider(self, tmp_path: Path) -> None:
        entry = {"id": "lab-1", "model": "Lab", "osVersion": "1", "type": "ANDROID_MID"}
        path = _write_catalog(tmp_path / "devices.json", [entry])
        with patch.dict(os.environ, {"COREASON_PROVENANCE_DEVICE_CATALOG": str(path)}):
            provider = get_device_provider()
        assert isinstance(provider, FileDeviceProvider)
        assert [d.id for d in provider.list_devices()] == ["lab-1"]
