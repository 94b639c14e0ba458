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
Coreason Provenance Package.

Exposes serial number derivation, the asset registry, access resolution and the service classes.
"""

from coreason_provenance.access import AccessResolver, InvalidCredentialsError
from coreason_provenance.derivation import UnknownAlgorithmError, derive_serial_number
from coreason_provenance.registry import AssetNotFoundError, AssetRegistry
from coreason_provenance.services import ProvenanceService, ProvenanceServiceAsync

__all__ = [
    "AccessResolver",
    "AssetNotFoundError",
    "AssetRegistry",
    "InvalidCredentialsError",
    "ProvenanceService",
    "ProvenanceServiceAsync",
    "UnknownAlgorithmError",
    "derive_serial_number",
]
