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
Asset Registry.

In-memory mapping from serial number to CapturedAsset. Insert-only, lives for
the lifetime of the owning service.
"""

from threading import Lock
from typing import Dict, Optional

from coreason_provenance.schemas import CapturedAsset
from coreason_provenance.utils.logger import logger


class AssetNotFoundError(KeyError):
    """Raised when a serial number is not present in the registry."""

    pass


class AssetRegistry:
    """
    Thread-safe registry of captured assets keyed by serial number.

    Duplicate serial numbers overwrite the existing entry (last write wins).
    There is no deletion.
    """

    def __init__(self) -> None:
        self._assets: Dict[str, CapturedAsset] = {}
        self._lock = Lock()

    def insert(self, asset: CapturedAsset) -> None:
        """
        Register an asset under its serial number.

        Args:
            asset (CapturedAsset): The asset to store.
        """
        with self._lock:
            if asset.serial_number in self._assets:
                logger.warning(f"Serial number '{asset.serial_number}' already registered. Overwriting.")
            self._assets[asset.serial_number] = asset
        logger.info(f"[LEDGER] Registering Asset: {asset.serial_number}")

    def lookup(self, serial_number: str) -> Optional[CapturedAsset]:
        """Return the asset registered under ``serial_number``, or None."""
        with self._lock:
            return self._assets.get(serial_number)

    def get(self, serial_number: str) -> CapturedAsset:
        """
        Return the asset registered under ``serial_number``.

        Raises:
            AssetNotFoundError: If the serial number is not registered.
        """
        asset = self.lookup(serial_number)
        if asset is None:
            raise AssetNotFoundError(f"Asset not found: {serial_number}")
        return asset

    def __contains__(self, serial_number: object) -> bool:
        with self._lock:
            return serial_number in self._assets

    def __len__(self) -> int:
        with self._lock:
            return len(self._assets)
