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
Coreason Provenance Services.

This module provides the Async-Native and Sync-Facade service classes that
orchestrate capture (derive + register) and verification (resolve).
"""

import re
import secrets
import time
from enum import Enum
from threading import Lock
from typing import Any, ClassVar, List, Optional

import anyio

from coreason_provenance.access import AccessResolver
from coreason_provenance.derivation import MOCK_IMAGE_SIGNATURE, compute_image_signature, derive_serial_number
from coreason_provenance.devices import DeviceProvider, get_device_provider
from coreason_provenance.registry import AssetRegistry
from coreason_provenance.schemas import CapturedAsset, DeviceProfile, HashingAlgo, VerificationResult
from coreason_provenance.utils.logger import logger

# Placeholder image host used when the caller supplies no image reference
MOCK_IMAGE_URL = "https://picsum.photos/800/600"

# Mock capture location recorded when the caller supplies none
MOCK_LOCATION = "34.0522° N, 118.2437° W"


class ServiceStatus(str, Enum):
    INITIALIZING = "INITIALIZING"
    READY = "READY"
    ERROR = "ERROR"


def default_recovery_email(device: DeviceProfile) -> str:
    """Mock recovery address derived from the device model, e.g. ``owner@googlepixel8pro.com``."""
    domain = re.sub(r"\s", "", device.model).lower()
    return f"owner@{domain}.com"


def generate_recovery_pin() -> str:
    """Random four digit PIN in the range 1000-9999."""
    return str(1000 + secrets.randbelow(9000))


class ProvenanceServiceAsync:
    """
    Async-Native Provenance Service.

    Owns the asset registry for its lifetime and exposes capture and
    verification operations in an async-first manner.
    """

    def __init__(
        self,
        device_provider: Optional[DeviceProvider] = None,
        registry: Optional[AssetRegistry] = None,
    ):
        """
        Initialize the Async Service.

        Args:
            device_provider (Optional[DeviceProvider]): Device catalog. Defaults to the configured provider.
            registry (Optional[AssetRegistry]): Asset store. Defaults to a new, empty registry.
        """
        self.device_provider = device_provider or get_device_provider()
        self.registry = registry if registry is not None else AssetRegistry()
        self.resolver = AccessResolver(self.registry)
        self.status = ServiceStatus.INITIALIZING

    async def __aenter__(self) -> "ProvenanceServiceAsync":
        devices = self.device_provider.list_devices()
        if not devices:
            self.status = ServiceStatus.ERROR
            raise RuntimeError("Device catalog is empty")
        self.status = ServiceStatus.READY
        logger.info(f"Provenance service ready with {len(devices)} devices.")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        logger.info(f"Provenance service stopping. {len(self.registry)} assets held in memory will be discarded.")

    async def list_devices(self) -> List[DeviceProfile]:
        return self.device_provider.list_devices()

    async def capture_asset(
        self,
        device_id: str,
        algo: HashingAlgo = HashingAlgo.V1_SIMPLE,
        image_signature: Optional[str] = None,
        image_data: Optional[bytes] = None,
        image_reference: Optional[str] = None,
        location: Optional[str] = None,
        recovery_email: Optional[str] = None,
        recovery_pin: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> CapturedAsset:
        """
        Simulate a capture on a device and register the resulting asset.

        Missing inputs fall back to mock capture values: the current time,
        the placeholder image signature and URL, the mock location, and
        generated recovery credentials.

        Args:
            device_id (str): Id of the capturing device.
            algo (HashingAlgo): Serial number recipe.
            image_signature (Optional[str]): Checksum of the image data.
            image_data (Optional[bytes]): Raw image bytes, fingerprinted when no
                signature is given.
            image_reference (Optional[str]): Reference to the image.
            location (Optional[str]): Capture location.
            recovery_email (Optional[str]): Recovery email address.
            recovery_pin (Optional[str]): Four digit recovery PIN.
            timestamp (Optional[int]): Capture time in epoch milliseconds.

        Returns:
            CapturedAsset: The registered asset.

        Raises:
            UnknownDeviceError: If the device id is not in the catalog.
            UnknownAlgorithmError: If the algorithm is not recognized.
        """
        device = self.device_provider.get_device(device_id)

        ts = timestamp if timestamp is not None else int(time.time() * 1000)
        if image_signature:
            signature = image_signature
        elif image_data is not None:
            signature = compute_image_signature(image_data)
        else:
            signature = MOCK_IMAGE_SIGNATURE

        serial_number = await anyio.to_thread.run_sync(derive_serial_number, device, signature, ts, algo)

        asset = CapturedAsset(
            serial_number=serial_number,
            image_reference=image_reference or f"{MOCK_IMAGE_URL}?seed={serial_number}",
            timestamp=ts,
            owner_device_id=device.id,
            device_model=device.model,
            algo_version=HashingAlgo(algo),
            location=location or MOCK_LOCATION,
            recovery_email=recovery_email or default_recovery_email(device),
            recovery_pin=recovery_pin or generate_recovery_pin(),
        )

        self.registry.insert(asset)
        logger.info(
            "Provenance Service Request",
            operation="capture_asset",
            device_id=device.id,
            algo=asset.algo_version.value,
        )
        return asset

    async def verify_by_device(self, serial_number: str, requester_device_id: str) -> VerificationResult:
        """
        Verify a serial number on behalf of a device.
        """
        logger.info("Provenance Service Request", operation="verify_by_device", device_id=requester_device_id)
        return self.resolver.resolve_by_device(serial_number, requester_device_id)

    async def verify_by_recovery(self, serial_number: str, email: str, pin: str) -> VerificationResult:
        """
        Verify a serial number with recovery credentials.

        Raises:
            AssetNotFoundError: If the serial number is not registered.
            InvalidCredentialsError: If the credentials do not match.
        """
        logger.info("Provenance Service Request", operation="verify_by_recovery")
        return self.resolver.resolve_by_recovery_credentials(serial_number, email, pin)


class ProvenanceService:
    """
    Sync Facade for the Provenance Service.

    Wraps ProvenanceServiceAsync to provide a synchronous interface.
    One shared instance per process is available through ``get_instance``.
    """

    _instance: ClassVar[Optional["ProvenanceService"]] = None
    _lock: ClassVar[Lock] = Lock()

    def __init__(
        self,
        device_provider: Optional[DeviceProvider] = None,
        registry: Optional[AssetRegistry] = None,
    ):
        self._async = ProvenanceServiceAsync(device_provider, registry)
        self._portal: Optional[anyio.from_thread.BlockingPortal] = None
        self._portal_cm: Any = None

    @classmethod
    def get_instance(cls) -> "ProvenanceService":
        """Return the process-wide service, creating it on first use."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @property
    def status(self) -> ServiceStatus:
        return self._async.status

    @property
    def registry(self) -> AssetRegistry:
        return self._async.registry

    def __enter__(self) -> "ProvenanceService":
        # Start a persistent event loop (portal) for the context
        self._portal_cm = anyio.from_thread.start_blocking_portal()
        self._portal = self._portal_cm.__enter__()
        try:
            self._portal.call(self._async.__aenter__)
        except Exception:
            self._portal_cm.__exit__(None, None, None)
            self._portal = None
            self._portal_cm = None
            raise
        return self

    def __exit__(self, *args: Any) -> None:
        if self._portal:
            try:
                self._portal.call(self._async.__aexit__, *args)
            finally:
                if self._portal_cm:
                    self._portal_cm.__exit__(None, None, None)
                self._portal = None
                self._portal_cm = None

    def _require_portal(self) -> anyio.from_thread.BlockingPortal:
        if not self._portal:
            raise RuntimeError("Service used outside of context manager")
        return self._portal

    def list_devices(self) -> List[DeviceProfile]:
        return self._require_portal().call(self._async.list_devices)  # type: ignore[no-any-return]

    def capture_asset(self, device_id: str, algo: HashingAlgo = HashingAlgo.V1_SIMPLE, **kwargs: Any) -> CapturedAsset:
        """
        Capture an asset synchronously. Keyword arguments are passed to the async service.
        """
        portal = self._require_portal()

        async def _capture() -> CapturedAsset:
            return await self._async.capture_asset(device_id, algo, **kwargs)

        return portal.call(_capture)  # type: ignore[no-any-return]

    def verify_by_device(self, serial_number: str, requester_device_id: str) -> VerificationResult:
        return self._require_portal().call(  # type: ignore[no-any-return]
            self._async.verify_by_device, serial_number, requester_device_id
        )

    def verify_by_recovery(self, serial_number: str, email: str, pin: str) -> VerificationResult:
        return self._require_portal().call(  # type: ignore[no-any-return]
            self._async.verify_by_recovery, serial_number, email, pin
        )
