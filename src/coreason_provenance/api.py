# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_provenance

from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from coreason_provenance.access import InvalidCredentialsError
from coreason_provenance.devices import UnknownDeviceError
from coreason_provenance.registry import AssetNotFoundError
from coreason_provenance.schemas import (
    CapturedAsset,
    CaptureRequest,
    DeviceProfile,
    RecoveryRequest,
    VerificationResult,
)
from coreason_provenance.services import ProvenanceService, ServiceStatus
from coreason_provenance.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage the lifecycle of the Provenance API and Service.

    Ensures:
    1. Service singleton is initialized.
    2. Context manager (BlockingPortal) is active.
    3. The device catalog loaded and the service reports READY.
    """
    service = ProvenanceService.get_instance()
    service.__enter__()

    try:
        if service.status != ServiceStatus.READY:
            logger.critical(f"Service failed to start: {service.status}")
            raise RuntimeError(f"Service not ready: {service.status}")
        logger.info("Provenance API started.")

        yield
    finally:
        logger.info("Shutting down Provenance API...")
        service.__exit__(None, None, None)


app = FastAPI(title="Coreason Provenance API", lifespan=lifespan)


class HealthResponse(BaseModel):
    status: ServiceStatus
    assets: int


@app.get("/devices", response_model=List[DeviceProfile])  # type: ignore[misc]
def get_devices() -> List[DeviceProfile]:
    """
    List the simulated devices captures can be bound to.
    """
    return ProvenanceService.get_instance().list_devices()


@app.post("/assets", response_model=CapturedAsset, status_code=201)  # type: ignore[misc]
def capture_asset(request: CaptureRequest) -> CapturedAsset:
    """
    Simulate a capture and register the asset under its derived serial number.
    """
    service = ProvenanceService.get_instance()
    try:
        return service.capture_asset(
            request.device_id,
            request.algo,
            image_signature=request.image_signature,
            image_data=request.image_data,
            image_reference=request.image_reference,
            location=request.location,
            recovery_email=request.recovery_email,
            recovery_pin=request.recovery_pin,
            timestamp=request.timestamp,
        )
    except UnknownDeviceError as e:
        logger.warning(f"Capture rejected: {e}")
        raise HTTPException(status_code=404, detail=f"Unknown device: {request.device_id}") from e


@app.get("/assets/{serial_number}/verification", response_model=VerificationResult)  # type: ignore[misc]
def verify_asset(
    serial_number: str, device_id: str = Query(..., alias="deviceId", min_length=1)
) -> VerificationResult:
    """
    Verify a serial number on behalf of a device.

    Unknown serial numbers return 200 with ``isAuthentic=false``.
    """
    return ProvenanceService.get_instance().verify_by_device(serial_number, device_id)


@app.post("/assets/{serial_number}/recovery", response_model=VerificationResult)  # type: ignore[misc]
def recover_asset(serial_number: str, request: RecoveryRequest) -> VerificationResult:
    """
    Obtain owner access with recovery credentials instead of a device identity.
    """
    service = ProvenanceService.get_instance()
    try:
        return service.verify_by_recovery(serial_number, request.email, request.pin)
    except AssetNotFoundError as e:
        raise HTTPException(status_code=404, detail="Asset not found") from e
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail="Invalid Recovery Credentials") from e


@app.get("/health", response_model=HealthResponse)  # type: ignore[misc]
def get_health() -> HealthResponse:
    """
    Health check endpoint.

    Returns 200 OK only while the service is READY.
    """
    service = ProvenanceService.get_instance()
    current_status = service.status

    if current_status == ServiceStatus.ERROR:
        raise HTTPException(status_code=503, detail="Service in ERROR state")

    if current_status == ServiceStatus.INITIALIZING:
        raise HTTPException(status_code=503, detail="Service initializing")

    return HealthResponse(status=current_status, assets=len(service.registry))
