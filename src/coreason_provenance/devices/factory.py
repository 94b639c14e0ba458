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
Device Factory.

Provides the factory method to instantiate the correct DeviceProvider
based on configuration (built-in simulation catalog vs. catalog file).
"""

import os

from coreason_provenance.devices.catalog import FileDeviceProvider
from coreason_provenance.devices.interfaces import DeviceProvider
from coreason_provenance.devices.simulation import SimulationDeviceProvider
from coreason_provenance.utils.logger import logger

CATALOG_ENV_VAR = "COREASON_PROVENANCE_DEVICE_CATALOG"


def get_device_provider() -> DeviceProvider:
    """
    Factory to return the appropriate DeviceProvider.

    Controlled by the 'COREASON_PROVENANCE_DEVICE_CATALOG' environment variable.
    If set, profiles are loaded from that JSON file.
    Otherwise, returns the built-in simulation catalog.

    Returns:
        DeviceProvider: An instance of FileDeviceProvider or SimulationDeviceProvider.
    """
    catalog_path = os.getenv(CATALOG_ENV_VAR, "").strip()

    if catalog_path:
        logger.info(f"Initializing File Device Provider from {catalog_path}.")
        return FileDeviceProvider(catalog_path)
    else:
        logger.info("Initializing Simulation Device Provider.")
        return SimulationDeviceProvider()
