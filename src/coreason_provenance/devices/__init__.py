# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_provenance

from coreason_provenance.devices.catalog import FileDeviceProvider
from coreason_provenance.devices.factory import get_device_provider
from coreason_provenance.devices.interfaces import DeviceProvider, UnknownDeviceError
from coreason_provenance.devices.simulation import SIMULATED_DEVICES, SimulationDeviceProvider

__all__ = [
    "DeviceProvider",
    "FileDeviceProvider",
    "SIMULATED_DEVICES",
    "SimulationDeviceProvider",
    "UnknownDeviceError",
    "get_device_provider",
]
