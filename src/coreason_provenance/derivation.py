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
Serial Number Derivation.

Binds a device identity, an image signature and a capture timestamp into a
display-facing serial number. Each HashingAlgo member has exactly one
registered DerivationStrategy.
"""

import hashlib
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Type

from coreason_provenance.schemas import DeviceProfile, HashingAlgo
from coreason_provenance.utils.logger import logger

# Number of hex characters kept from the final digest
SERIAL_HEX_LENGTH = 32

# Placeholder checksum used when the caller supplies no image signature
MOCK_IMAGE_SIGNATURE = "binary_checksum_x8s7_mock"


class UnknownAlgorithmError(ValueError):
    """Raised when a serial number is requested for an unrecognized algorithm tag."""

    pass


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


class DerivationStrategy(ABC):
    """Abstract base class for serial number recipes."""

    prefix: str = ""

    @abstractmethod
    def derive(self, device: DeviceProfile, image_signature: str, timestamp: int) -> str:
        """Return the serial number for the given inputs."""
        pass  # pragma: no cover


class DerivationRegistry:
    """
    Registry mapping each HashingAlgo to its DerivationStrategy.
    """

    _registry: Dict[HashingAlgo, Type[DerivationStrategy]] = {}

    @classmethod
    def register(cls, algo: HashingAlgo) -> "Callable[[Type[DerivationStrategy]], Type[DerivationStrategy]]":
        """
        Decorator to register a strategy class for an algorithm.

        Args:
            algo (HashingAlgo): The algorithm the strategy implements.
        """

        def decorator(strategy_cls: Type[DerivationStrategy]) -> Type[DerivationStrategy]:
            if algo in cls._registry:
                logger.warning(f"Derivation strategy for '{algo.value}' already registered. Overwriting.")
            cls._registry[algo] = strategy_cls
            logger.debug(f"Registered derivation strategy: {algo.value} -> {strategy_cls.__name__}")
            return strategy_cls

        return decorator

    @classmethod
    def get(cls, algo: Any) -> DerivationStrategy:
        """
        Instantiate the strategy registered for an algorithm tag.

        Args:
            algo: A HashingAlgo member or its string value.

        Returns:
            DerivationStrategy: The strategy instance.

        Raises:
            UnknownAlgorithmError: If the tag is not a registered HashingAlgo.
        """
        try:
            key = HashingAlgo(algo)
        except ValueError as e:
            raise UnknownAlgorithmError(f"Unknown Algorithm: {algo!r}") from e
        if key not in cls._registry:
            raise UnknownAlgorithmError(f"Unknown Algorithm: {key.value}")
        return cls._registry[key]()

    @classmethod
    def algorithms(cls) -> list[HashingAlgo]:
        return list(cls._registry.keys())


@DerivationRegistry.register(HashingAlgo.V1_SIMPLE)
class V1SimpleStrategy(DerivationStrategy):
    """V1: SHA-256 over ``device_id|timestamp|signature``."""

    prefix = "V1-"

    def derive(self, device: DeviceProfile, image_signature: str, timestamp: int) -> str:
        raw = f"{device.id}|{timestamp}|{image_signature}"
        digest = _sha256(raw.encode("utf-8")).hex()
        return f"{self.prefix}{digest[:SERIAL_HEX_LENGTH]}"


@DerivationRegistry.register(HashingAlgo.V2_SALTED)
class V2SaltedStrategy(DerivationStrategy):
    """
    V2: model-salted double hash.

    The device model is hashed into a hex salt, joined with the other inputs
    by ``::``, hashed, and the raw digest is hashed again.
    """

    prefix = "V2-"

    def derive(self, device: DeviceProfile, image_signature: str, timestamp: int) -> str:
        salt_hex = _sha256(device.model.encode("utf-8")).hex()
        raw = f"{salt_hex}::{device.id}::{timestamp}::{image_signature}"
        inner = _sha256(raw.encode("utf-8"))
        outer = _sha256(inner).hex()
        return f"{self.prefix}{outer[:SERIAL_HEX_LENGTH]}"


def derive_serial_number(device: DeviceProfile, image_signature: str, timestamp: int, algo: Any) -> str:
    """
    Derive the serial number for a capture.

    Args:
        device (DeviceProfile): The capturing device.
        image_signature (str): Checksum of the image data.
        timestamp (int): Capture time in epoch milliseconds.
        algo: The HashingAlgo (or its string value) to use.

    Returns:
        str: ``"V1-"`` or ``"V2-"`` followed by 32 lowercase hex characters.

    Raises:
        UnknownAlgorithmError: If ``algo`` is not a known recipe.
    """
    strategy = DerivationRegistry.get(algo)
    return strategy.derive(device, image_signature, timestamp)


def compute_image_signature(data: bytes) -> str:
    """
    Compute a mock checksum label for raw image bytes.

    This is a placeholder for real content hashing: it fingerprints the bytes
    as given and makes no attempt to decode pixel data.
    """
    return f"binary_checksum_{hashlib.sha256(data).hexdigest()[:16]}"
