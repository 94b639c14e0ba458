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
File Device Catalog.

Loads device profiles from a JSON file containing a list of profile objects.
"""

import json
from pathlib import Path
from typing import List, Union

from pydantic import TypeAdapter, ValidationError

from coreason_provenance.devices.interfaces import DeviceProvider
from coreason_provenance.schemas import DeviceProfile
from coreason_provenance.utils.logger import logger

_PROFILES = TypeAdapter(List[DeviceProfile])


class FileDeviceProvider(DeviceProvider):
    """
    Provider that reads device profiles from a JSON catalog file.

    The file is read and validated once, at construction.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._devices = self._load()

    def _load(self) -> List[DeviceProfile]:
        if not self.path.exists():
            logger.error(f"Device catalog not found: {self.path}")
            raise FileNotFoundError(f"Device catalog not found: {self.path}")

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            devices = _PROFILES.validate_python(raw)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Invalid device catalog {self.path}: {e}")
            raise ValueError(f"Invalid device catalog: {self.path}") from e

        ids = [d.id for d in devices]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Device catalog {self.path} contains duplicate device ids")

        logger.info(f"Loaded {len(devices)} devices from {self.path}")
        return devices

    def list_devices(self) -> List[DeviceProfile]:
        return list(self._devices)
