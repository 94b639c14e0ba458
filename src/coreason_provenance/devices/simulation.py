# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_provenance

"""
Simulation Device Catalog.

Built-in set of simulated handsets used when no catalog file is configured.
"""

from typing import List

from coreason_provenance.devices.interfaces import DeviceProvider
from coreason_provenance.schemas import DeviceProfile, DeviceType

SIMULATED_DEVICES: List[DeviceProfile] = [
    DeviceProfile(
        id="uuid-pix-8-pro-x992",
        model="Google Pixel 8 Pro",
        type=DeviceType.ANDROID_HIGH,
        os_version="Android 14",
        label="Device A (Pixel 8 Pro)",
    ),
    DeviceProfile(
        id="uuid-sam-s24-u-7721",
        model="Samsung Galaxy S24 Ultra",
        type=DeviceType.ANDROID_HIGH,
        os_version="OneUI 6.1",
        label="Device B (Galaxy S24 Ultra)",
    ),
    DeviceProfile(
        id="uuid-iph-15-pm-0012",
        model="iPhone 15 Pro Max",
        type=DeviceType.IOS_PRO,
        os_version="iOS 17.4",
        label="Device C (iPhone 15 Pro Max)",
    ),
    DeviceProfile(
        id="uuid-red-n13-5541",
        model="Xiaomi Redmi Note 13",
        type=DeviceType.ANDROID_MID,
        os_version="MIUI 14",
        label="Device D (Redmi Note 13)",
    ),
    DeviceProfile(
        id="uuid-gen-leg-1102",
        model="Generic Legacy Android",
        type=DeviceType.ANDROID_LEGACY,
        os_version="Android 9.0",
        label="Device E (Legacy Android)",
    ),
]


class SimulationDeviceProvider(DeviceProvider):
    """
    Simulation provider backed by the built-in device list.

    The ids are fixed strings, not hardware-bound identities.
    """

    def list_devices(self) -> List[DeviceProfile]:
        return list(SIMULATED_DEVICES)
