import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from partner_bundle import __version__
from partner_bundle.core.config import Settings
from partner_bundle.core.logging import configure_logging
from partner_bundle.services.bundle_service import BundleService, run_pipeline
from partner_bundle.services.docker_runtime import DockerSDKRuntime
from partner_bundle.services.partner_service import PartnerService, run_partner_load


def _base_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument("-v", "--verbose", action="store_true", help="Also print engine output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def prepare_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _base_parser(
        "partner-prepare",
        "Build the node image and package it with a templated compose setup for offline partners. "
        "All tunables are read from the environment (ZOO_NODE_IMAGE, ZOO_NODE_VERSION, ...).",
    )
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    service = BundleService(DockerSDKRuntime(), Settings())
    return asyncio.run(run_pipeline(service))


def load_main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _base_parser(
        "partner-load",
        "Load the node image from an extracted partner bundle and print the next steps.",
    )
    parser.add_argument(
        "--bundle-dir",
        type=Path,
        default=Path("."),
        help="Extracted bundle directory (default: current directory)",
    )
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    service = PartnerService(DockerSDKRuntime(), args.bundle_dir, Settings())
    return asyncio.run(run_partner_load(service))


def prepare() -> None:
    raise SystemExit(prepare_main())


def load() -> None:
    raise SystemExit(load_main())
