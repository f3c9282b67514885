# partner_bundle/services/partner_service.py
import logging
from pathlib import Path
from typing import Optional

import aiofiles.os

from partner_bundle.core.config import Settings
from partner_bundle.core.errors import BundleError, MissingPreconditionError
from partner_bundle.domain.ports import ContainerEngine
from partner_bundle.services.loader_script import (
    compose_info_message,
    env_info_message,
    load_message,
    load_missing_message,
    visor_info_message,
)

logger = logging.getLogger(__name__)


class PartnerService:
    """Python counterpart of the generated prepare.sh, run from an extracted bundle."""
    def __init__(self, docker_runtime: ContainerEngine, bundle_dir: Path, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.docker_runtime = docker_runtime
        self.bundle_dir = Path(bundle_dir)

    async def load(self) -> str:
        archive_name = self.settings.ZOO_NODE_ARCHIVE
        archive = self.bundle_dir / archive_name
        if not await aiofiles.os.path.isfile(archive):
            raise MissingPreconditionError(load_missing_message(archive_name))
        logger.info(load_message(archive_name))
        image_id = await self.docker_runtime.load_image(archive)

        env_file = self.settings.DOCKER_COMPOSE_ENV_FILE
        logger.info(env_info_message(env_file))
        logger.info(compose_info_message(env_file, self.settings.DOCKER_COMPOSE_CMD))
        logger.info(visor_info_message())
        return image_id


async def run_partner_load(service: PartnerService) -> int:
    try:
        await service.load()
    except BundleError as e:
        logger.error(str(e))
        return 1
    return 0
