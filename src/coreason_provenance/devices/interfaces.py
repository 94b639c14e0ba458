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
Device Interfaces.

Defines the contract for providers of simulated device identities.
"""

from abc import ABC, abstractmethod
from typing import List

from coreason_provenance.schemas import DeviceProfile


class UnknownDeviceError(LookupError):
    """Raised when a device id is not present in the catalog."""

    pass


class DeviceProvider(ABC):
    """
    Abstract Base Class for device catalog providers.

    Responsible for supplying the read-only device profiles that captures are bound to.
    """

    @abstractmethod
    def list_devices(self) -> List[DeviceProfile]:
        """
        Return every device profile in the catalog.

        Returns:
            List[DeviceProfile]: The profiles, in catalog order.
        """
        pass  # pragma: no cover

    def get_device(self, device_id: str) -> DeviceProfile:
        """
        Return the profile with the given id.

        Raises:
            UnknownDeviceError: If no profile has that id.
        """
        for device in self.list_devices():
            if device.id == device_id:
                return device
        raise UnknownDeviceError(f"Unknown device: {device_id}")
