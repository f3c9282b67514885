# partner_bundle/services/bundle_service.py
import asyncio
import logging
import tarfile
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Tuple

import aiofiles.os

from partner_bundle.core.config import Settings
from partner_bundle.core.errors import (
    BundleError,
    ExternalToolError,
    IdempotencyError,
    MissingPreconditionError,
)
from partner_bundle.domain.bundle import BundleLayout, BundleStage
from partner_bundle.domain.ports import ContainerEngine
from partner_bundle.services import fileops
from partner_bundle.services.compose_template import ENV_SAMPLE, rewrite_compose_file
from partner_bundle.services.loader_script import render_loader_script

logger = logging.getLogger(__name__)

Stage = Tuple[BundleStage, Callable[[], Awaitable[None]]]


class BundleService:
    """The producer-side stages. Each one raises a BundleError on failure."""
    def __init__(self, docker_runtime: ContainerEngine, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.docker_runtime = docker_runtime
        self.layout = BundleLayout.from_settings(self.settings)

    # ------------------------------- Build -------------------------------
    async def build_image(self) -> None:
        s, layout = self.settings, self.layout
        msg = (
            f"Docker building {s.image_ref} using {s.ZOO_NODE_DOCKERFILE} "
            f"with source at {s.ZOO_SOURCE_PATH}"
        )
        if not await aiofiles.os.path.isfile(layout.dockerfile):
            raise MissingPreconditionError(f"{msg} - failed (missing file - {s.ZOO_NODE_DOCKERFILE})")
        logger.info(msg)
        image_id = await self.docker_runtime.build_image(
            dockerfile=layout.dockerfile,
            context=layout.source_path,
            tag=s.image_ref,
        )
        logger.debug("Built %s as %s", s.image_ref, image_id)

    # ------------------------------- Compose -------------------------------
    async def prepare_compose(self) -> None:
        layout = self.layout
        await fileops.ensure_dir(layout.working_dir)
        logger.info("Preparing docker compose environment at %s", layout.working_dir)
        await fileops.copy_file(layout.compose_source, layout.compose_file)
        await rewrite_compose_file(layout.compose_file)
        await fileops.write_file(ENV_SAMPLE, layout.env_file)
        await fileops.write_file(render_loader_script(self.settings), layout.loader_script)

    # ------------------------------- Save -------------------------------
    async def save_image(self) -> None:
        s, layout = self.settings, self.layout
        await fileops.ensure_dir(layout.working_dir)
        msg = f"Docker save {s.image_ref} to {s.ZOO_NODE_ARCHIVE}"
        if await aiofiles.os.path.exists(layout.archive):
            raise IdempotencyError(f"{msg} - failed (file already exists - {layout.archive})")
        if not await self.docker_runtime.exists_image(s.image_ref):
            raise MissingPreconditionError(f"{msg} - failed (image {s.image_ref} not built)")
        logger.info(msg)
        await self.docker_runtime.save_image(s.image_ref, layout.archive)

    # ------------------------------- Package -------------------------------
    async def write_partner_archive(self) -> None:
        layout = self.layout
        await fileops.ensure_dir(layout.output_dir)
        logger.info("Preparing partner data at %s", layout.package)
        try:
            await asyncio.to_thread(_gzip_folder, layout.working_dir, layout.package)
        except (OSError, tarfile.TarError) as e:
            raise ExternalToolError(f"failed to write partner archive {layout.package}: {e}")

    # ------------------------------- Cleanup -------------------------------
    async def clean_working_folder(self) -> None:
        if await aiofiles.os.path.isdir(self.layout.working_dir):
            logger.info("Cleaning %s", self.layout.working_dir)
        await fileops.remove_dir(self.layout.working_dir)

    # ------------------------------- Handoff -------------------------------
    async def partner_file_info(self) -> None:
        package = self.layout.package
        msg = f"Send to partner the file {package}"
        if not await aiofiles.os.path.isfile(package):
            raise MissingPreconditionError(f"{msg} - error (missing file - {package})")
        logger.info(msg)

    def stages(self) -> List[Stage]:
        """Stages in run order, each paired with the state it leads to."""
        return [
            (BundleStage.IMAGE_BUILT, self.build_image),
            (BundleStage.COMPOSE_PREPARED, self.prepare_compose),
            (BundleStage.IMAGE_SAVED, self.save_image),
            (BundleStage.PARTNER_ARCHIVE_WRITTEN, self.write_partner_archive),
            (BundleStage.CLEANED, self.clean_working_folder),
            (BundleStage.DONE, self.partner_file_info),
        ]

    async def run(self) -> BundleStage:
        """Run every stage in order, stopping at the first failure.

        Returns the last state reached; raises the failing stage's BundleError.
        """
        state = BundleStage.START
        for next_state, stage in self.stages():
            await stage()
            state = next_state
            logger.debug("Reached %s", state.value)
        return state


def _gzip_folder(folder: Path, package: Path) -> None:
    with tarfile.open(package, "w:gz") as tar:
        tar.add(folder, arcname=folder.name)


async def run_pipeline(service: BundleService) -> int:
    """Run the bundle pipeline and turn the outcome into a process exit code."""
    try:
        await service.run()
    except BundleError as e:
        logger.error(str(e))
        return 1
    return 0
