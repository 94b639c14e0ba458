# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_provenance

from threading import Lock
from typing import Generator

import pytest

from coreason_provenance.devices.simulation import SIMULATED_DEVICES
from coreason_provenance.registry import AssetRegistry
from coreason_provenance.schemas import CapturedAsset, DeviceProfile, HashingAlgo


@pytest.fixture(autouse=True)
def reset_provenance_singleton(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Reset the ProvenanceService singleton before and after each test.
    The service owns the in-memory registry, so a shared instance would leak
    assets between tests.
    """
    from coreason_provenance.services import ProvenanceService

    monkeypatch.delenv("COREASON_PROVENANCE_DEVICE_CATALOG", raising=False)

    def _teardown() -> None:
        if ProvenanceService._instance:
            if ProvenanceService._instance._portal:
                ProvenanceService._instance.__exit__(None, None, None)
            ProvenanceService._instance = None

    _teardown()
    ProvenanceService._lock = Lock()

    yield

    _teardown()


@pytest.fixture
def pixel() -> DeviceProfile:
    return SIMULATED_DEVICES[0]


@pytest.fixture
def galaxy() -> DeviceProfile:
    return SIMULATED_DEVICES[1]


@pytest.fixture
def registry() -> AssetRegistry:
    return AssetRegistry()


@pytest.fixture
def asset(pixel: DeviceProfile) -> CapturedAsset:
    return CapturedAsset(
        serial_number="V1-e191bd738f9465f6c169bc9542ddfb9c",
        image_reference="https://picsum.photos/800/600?seed=V1-e191bd738f9465f6c169bc9542ddfb9c",
        timestamp=1700000000000,
        owner_device_id=pixel.id,
        device_model=pixel.model,
        algo_version=HashingAlgo.V1_SIMPLE,
        location="34.0522° N, 118.2437° W",
        recovery_email="owner@googlepixel8pro.com",
        recovery_pin="4821",
    )
