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
Data schemas for Coreason Provenance.

Defines device profiles, captured assets, verification results and the
request bodies accepted by the API. Wire names are camelCase.
"""

from enum import Enum
from typing import Optional

from pydantic import Base64Bytes, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Last millisecond of 9999-12-31, the largest instant datetime can represent
MAX_TIMESTAMP_MS = 253402300799999


def check_recovery_pin(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    if len(v) != 4 or not (v.isascii() and v.isdigit()):
        raise ValueError("recovery_pin must be exactly 4 digits")
    return v


def check_recovery_email(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    local, sep, domain = v.strip().partition("@")
    if not sep or not local or not domain:
        raise ValueError("recovery_email must be a valid email address")
    return v.strip()


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceType(str, Enum):
    """
    Hardware class of a simulated capture device.

    Attributes:
        ANDROID_HIGH: Flagship Android handset.
        ANDROID_MID: Mid-range Android handset.
        ANDROID_LEGACY: Old Android handset.
        IOS_PRO: iPhone Pro line.
        IOS_STANDARD: Base iPhone line.
    """

    ANDROID_HIGH = "ANDROID_HIGH"
    ANDROID_MID = "ANDROID_MID"
    ANDROID_LEGACY = "ANDROID_LEGACY"
    IOS_PRO = "IOS_PRO"
    IOS_STANDARD = "IOS_STANDARD"


class HashingAlgo(str, Enum):
    """
    Serial number derivation recipe.

    Attributes:
        V1_SIMPLE: Single SHA-256 over the pipe-joined inputs.
        V2_SALTED: Model-salted, double SHA-256 over the colon-joined inputs.
    """

    V1_SIMPLE = "V1_SIMPLE"
    V2_SALTED = "V2_SALTED"


class AccessLevel(str, Enum):
    """Projection granted to a verification requester."""

    PUBLIC = "PUBLIC"
    OWNER = "OWNER"


class DeviceProfile(CamelModel):
    """
    A simulated hardware identity. Read-only reference data.

    Attributes:
        id (str): Hardware UUID simulation.
        model (str): Marketing model name (e.g. "Google Pixel 8 Pro").
        os_version (str): Operating system version string.
        type (DeviceType): Hardware class.
        label (str): Display label.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., description="Hardware UUID simulation")
    model: str = Field(..., description="Device model name")
    os_version: str = Field(..., description="Operating system version")
    type: DeviceType = Field(..., description="Hardware class")
    label: str = Field("", description="Display label")

    @field_validator("id", "model")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Validate that identity fields are not empty."""
        if not v or not v.strip():
            raise ValueError("device id and model cannot be empty")
        return v


class CapturedAsset(CamelModel):
    """
    A registered capture. Created once, never mutated.

    Attributes:
        serial_number (str): Derived serial number (registry key).
        image_reference (str): Reference to the captured image.
        timestamp (int): Capture time in epoch milliseconds.
        owner_device_id (str): Id of the capturing device.
        device_model (str): Model of the capturing device (denormalized).
        algo_version (HashingAlgo): Recipe used to derive the serial number.
        location (Optional[str]): Capture location.
        recovery_email (Optional[str]): Recovery email address.
        recovery_pin (Optional[str]): Recovery PIN, exactly four digits.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    serial_number: str
    image_reference: str
    timestamp: int = Field(..., ge=0, le=MAX_TIMESTAMP_MS, description="Epoch milliseconds")
    owner_device_id: str
    device_model: str
    algo_version: HashingAlgo
    location: Optional[str] = None
    recovery_email: Optional[str] = None
    recovery_pin: Optional[str] = None

    @field_validator("recovery_pin")
    @classmethod
    def validate_recovery_pin(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the recovery PIN is exactly four digits."""
        return check_recovery_pin(v)

    @field_validator("recovery_email")
    @classmethod
    def validate_recovery_email(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the recovery email looks like local@domain."""
        return check_recovery_email(v)


class VerificationMetadata(CamelModel):
    timestamp: str
    device_model: str
    location: str
    serial_number: str


class VerificationData(CamelModel):
    image_url: str = Field(..., description="Image reference, full resolution or to be obfuscated")
    obfuscate_image: bool = Field(False, description="Caller must blur the image before display")
    metadata: VerificationMetadata


class VerificationResult(CamelModel):
    """
    Per-request projection of a captured asset. Never stored.

    Attributes:
        is_authentic (bool): True if the serial number is registered.
        access_level (AccessLevel): OWNER (full) or PUBLIC (redacted).
        data (VerificationData): Image reference and metadata projection.
        message (str): Human-readable outcome.
    """

    is_authentic: bool
    access_level: AccessLevel
    data: VerificationData
    message: str


class CaptureRequest(CamelModel):
    """
    Body of a capture request.

    Only ``device_id`` is required; the remaining fields fall back to the
    mock capture defaults. An explicit ``image_signature`` takes precedence
    over one computed from ``image_data``.
    """

    device_id: str = Field(..., description="Id of the capturing device")
    algo: HashingAlgo = Field(HashingAlgo.V1_SIMPLE, description="Serial number recipe")
    image_signature: Optional[str] = Field(None, description="Checksum of the image data")
    image_data: Optional[Base64Bytes] = Field(None, description="Base64 image bytes to fingerprint")
    image_reference: Optional[str] = Field(None, description="Reference to the image")
    location: Optional[str] = None
    recovery_email: Optional[str] = None
    recovery_pin: Optional[str] = None
    timestamp: Optional[int] = Field(
        None, ge=0, le=MAX_TIMESTAMP_MS, description="Epoch milliseconds, defaults to now"
    )

    @field_validator("recovery_pin")
    @classmethod
    def validate_recovery_pin(cls, v: Optional[str]) -> Optional[str]:
        return check_recovery_pin(v)

    @field_validator("recovery_email")
    @classmethod
    def validate_recovery_email(cls, v: Optional[str]) -> Optional[str]:
        return check_recovery_email(v)


class RecoveryRequest(CamelModel):
    """Recovery credentials presented in place of a device identity."""

    email: str = Field(..., min_length=1)
    pin: str = Field(..., min_length=1)
