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
Access Resolution.

Decides who is asking for a serial number and returns the matching
projection: full data for the owning device or for valid recovery
credentials, redacted data for everyone else.
"""

import hmac
from datetime import datetime, timedelta, timezone

from coreason_provenance.registry import AssetNotFoundError, AssetRegistry
from coreason_provenance.schemas import (
    AccessLevel,
    CapturedAsset,
    VerificationData,
    VerificationMetadata,
    VerificationResult,
)
from coreason_provenance.utils.logger import logger

REDACTED_DEVICE = "REDACTED DEVICE"
REDACTED_LOCATION = "REDACTED LOCATION"
UNKNOWN = "Unknown"
DEFAULT_OWNER_LOCATION = "GPS: 34.0522° N, 118.2437° W"

MESSAGE_NOT_FOUND = "Serial Number not found in the global registry."
MESSAGE_OWNER = "Identity Verified. Full forensic data access granted."
MESSAGE_PUBLIC = "Authentic content. Metadata redacted for privacy."

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class InvalidCredentialsError(Exception):
    """Raised when recovery credentials do not match the stored values."""

    pass


def _to_datetime(timestamp_ms: int) -> datetime:
    return _EPOCH + timedelta(milliseconds=timestamp_ms)


def format_full_timestamp(timestamp_ms: int) -> str:
    """Format epoch milliseconds as ISO 8601 UTC, e.g. ``2023-11-14T22:13:20.000Z``."""
    return _to_datetime(timestamp_ms).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_date_only(timestamp_ms: int) -> str:
    """Format epoch milliseconds as a UTC calendar date, e.g. ``2023-11-14``."""
    return _to_datetime(timestamp_ms).date().isoformat()


def build_owner_result(asset: CapturedAsset) -> VerificationResult:
    return VerificationResult(
        is_authentic=True,
        access_level=AccessLevel.OWNER,
        data=VerificationData(
            image_url=asset.image_reference,
            obfuscate_image=False,
            metadata=VerificationMetadata(
                timestamp=format_full_timestamp(asset.timestamp),
                device_model=asset.device_model,
                location=asset.location or DEFAULT_OWNER_LOCATION,
                serial_number=asset.serial_number,
            ),
        ),
        message=MESSAGE_OWNER,
    )


def build_public_result(asset: CapturedAsset) -> VerificationResult:
    return VerificationResult(
        is_authentic=True,
        access_level=AccessLevel.PUBLIC,
        data=VerificationData(
            image_url=asset.image_reference,
            obfuscate_image=True,
            metadata=VerificationMetadata(
                timestamp=format_date_only(asset.timestamp),
                device_model=REDACTED_DEVICE,
                location=REDACTED_LOCATION,
                serial_number=asset.serial_number,
            ),
        ),
        message=MESSAGE_PUBLIC,
    )


def build_not_found_result(serial_number: str) -> VerificationResult:
    return VerificationResult(
        is_authentic=False,
        access_level=AccessLevel.PUBLIC,
        data=VerificationData(
            image_url="",
            obfuscate_image=False,
            metadata=VerificationMetadata(
                timestamp=UNKNOWN,
                device_model=UNKNOWN,
                location=UNKNOWN,
                serial_number=serial_number,
            ),
        ),
        message=MESSAGE_NOT_FOUND,
    )


class AccessResolver:
    """
    Resolves verification requests against an AssetRegistry.
    """

    def __init__(self, registry: AssetRegistry) -> None:
        """
        Initialize the AccessResolver.

        Args:
            registry (AssetRegistry): The registry to read assets from.
        """
        self.registry = registry

    def resolve_by_device(self, serial_number: str, requester_device_id: str) -> VerificationResult:
        """
        Resolve a serial number for a requesting device.

        The owning device receives the full projection; any other device
        receives the redacted projection. Unknown serial numbers yield a
        non-authentic result instead of an error.

        Args:
            serial_number (str): The serial number to verify.
            requester_device_id (str): Id of the requesting device.

        Returns:
            VerificationResult: The projection for this requester.
        """
        asset = self.registry.lookup(serial_number)
        if asset is None:
            logger.info(f"Verification miss for serial number {serial_number}")
            return build_not_found_result(serial_number)

        if asset.owner_device_id == requester_device_id:
            logger.info(f"Owner access granted for {serial_number} to device {requester_device_id}")
            return build_owner_result(asset)

        logger.info(f"Public access granted for {serial_number} to device {requester_device_id}")
        return build_public_result(asset)

    def resolve_by_recovery_credentials(self, serial_number: str, email: str, pin: str) -> VerificationResult:
        """
        Resolve a serial number using recovery credentials instead of a device id.

        The email comparison is case-insensitive; the PIN must match exactly.
        On success the owner projection is returned regardless of which
        device is asking.

        Args:
            serial_number (str): The serial number to verify.
            email (str): Recovery email address.
            pin (str): Recovery PIN.

        Returns:
            VerificationResult: The owner projection.

        Raises:
            AssetNotFoundError: If the serial number is not registered.
            InvalidCredentialsError: If the credentials do not match.
        """
        try:
            asset = self.registry.get(serial_number)
        except AssetNotFoundError:
            logger.warning(f"Recovery attempt for unknown serial number {serial_number}")
            raise

        email_ok = asset.recovery_email is not None and asset.recovery_email.lower() == email.lower()
        pin_ok = asset.recovery_pin is not None and hmac.compare_digest(
            asset.recovery_pin.encode("utf-8"), pin.encode("utf-8")
        )

        if not (email_ok and pin_ok):
            logger.warning(f"Invalid recovery credentials for {serial_number}")
            raise InvalidCredentialsError("Invalid Recovery Credentials")

        logger.info(f"Recovery credentials accepted for {serial_number}. Owner access granted.")
        return build_owner_result(asset)
