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
Entry point for Coreason Provenance.

``serve`` runs the HTTP API with uvicorn. ``derive`` prints the serial number
for a device, image signature and timestamp without registering anything.
"""

import argparse
import os
import sys
from typing import Optional

import uvicorn

from coreason_provenance.derivation import MOCK_IMAGE_SIGNATURE, derive_serial_number
from coreason_provenance.devices import get_device_provider
from coreason_provenance.devices.factory import CATALOG_ENV_VAR
from coreason_provenance.schemas import HashingAlgo
from coreason_provenance.utils.logger import logger


def run_api_server(host: str, port: int) -> None:
    """Run the Provenance API server."""
    logger.info(f"Starting Provenance API on {host}:{port}")
    uvicorn.run("coreason_provenance.api:app", host=host, port=port, log_level="info")


def run_derive(device_id: str, signature: str, timestamp: int, algo: HashingAlgo) -> str:
    """Derive and print a serial number for a catalog device."""
    device = get_device_provider().get_device(device_id)
    serial_number = derive_serial_number(device, signature, timestamp, algo)
    print(serial_number)
    return serial_number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="coreason-provenance", description="Coreason Provenance")
    parser.add_argument("--device-catalog", type=str, default=None, help="Path to a JSON device catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    # Constraint: default to the loopback interface
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")

    derive = subparsers.add_parser("derive", help="Print the serial number for a capture")
    derive.add_argument("--device-id", type=str, required=True, help="Catalog device id")
    derive.add_argument("--signature", type=str, default=MOCK_IMAGE_SIGNATURE, help="Image signature")
    derive.add_argument("--timestamp", type=int, required=True, help="Capture time in epoch milliseconds")
    derive.add_argument(
        "--algo",
        type=HashingAlgo,
        choices=list(HashingAlgo),
        default=HashingAlgo.V1_SIMPLE,
        help="Serial number recipe",
    )
    return parser


def main(args: Optional[list[str]] = None) -> None:
    """
    Entry point for the Coreason Provenance CLI.

    Args:
        args (Optional[list[str]]): Command line arguments. Defaults to sys.argv[1:].
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    try:
        if parsed_args.device_catalog:
            os.environ[CATALOG_ENV_VAR] = parsed_args.device_catalog
            logger.info(f"Device catalog: {parsed_args.device_catalog}")

        if parsed_args.command == "serve":
            run_api_server(parsed_args.host, parsed_args.port)
        elif parsed_args.command == "derive":
            run_derive(parsed_args.device_id, parsed_args.signature, parsed_args.timestamp, parsed_args.algo)

    except Exception as e:
        logger.exception(f"Command '{parsed_args.command}' failed: {e}")
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()  # pragma: no cover
