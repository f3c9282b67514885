import asyncio
import logging
from pathlib import Path
from typing import Optional

from docker import DockerClient, from_env
from docker.models.images import Image
from docker.errors import BuildError, DockerException, ImageNotFound

from partner_bundle.core.errors import ExternalToolError
from partner_bundle.domain.ports import ContainerEngine

logger = logging.getLogger(__name__)


class DockerSDKRuntime(ContainerEngine):
    def __init__(self, docker_client: Optional[DockerClient] = None):
        self._docker_client = docker_client

    @property
    def docker_client(self) -> DockerClient:
        # Connected lazily; a missing daemon surfaces as ExternalToolError
        if self._docker_client is None:
            try:
                self._docker_client = from_env()
            except DockerException as e:
                raise ExternalToolError(f"Cannot reach the Docker daemon: {e}")
        return self._docker_client

    # -------------------------------
    # Image lifecycle
    # -------------------------------
    async def build_image(self, *, dockerfile: Path, context: Path, tag: str) -> str:
        try:
            image, build_logs = await asyncio.to_thread(
                self.docker_client.images.build,
                path=str(context),
                dockerfile=str(Path(dockerfile).resolve()),
                tag=tag,
                rm=True,
            )
        except BuildError as e:
            for entry in e.build_log:
                if "stream" in entry:
                    logger.debug(entry["stream"].rstrip())
            raise ExternalToolError(f"Docker build of {tag} failed: {e.msg}")
        except DockerException as e:
            raise ExternalToolError(f"Docker build of {tag} failed: {e}")

        for entry in build_logs:
            if "stream" in entry:
                logger.debug(entry["stream"].rstrip())
        return image.id

    async def save_image(self, tag: str, path: Path) -> None:
        """Stream `docker save` output for `tag` into `path`."""
        try:
            await asyncio.to_thread(self._save_to_file, tag, Path(path))
        except ImageNotFound:
            raise ExternalToolError(f"Docker save failed: image {tag} not found")
        except DockerException as e:
            raise ExternalToolError(f"Docker save of {tag} failed: {e}")
        except OSError as e:
            raise ExternalToolError(f"Docker save failed to write {path}: {e}")

    def _save_to_file(self, tag: str, path: Path) -> None:
        image: Image = self.docker_client.images.get(tag)
        with open(path, "wb") as out_file:
            for chunk in image.save(named=True):
                out_file.write(chunk)

    async def load_image(self, path: Path) -> str:
        """Load a .tar image and return Docker image ID."""
        try:
            with open(path, "rb") as f:
                loaded = await asyncio.to_thread(self.docker_client.images.load, f.read())
        except (DockerException, OSError) as e:
            raise ExternalToolError(f"Failed to load Docker image: {e}")
        if not loaded:
            raise ExternalToolError(f"Failed to load Docker image: {path} contained no image")
        # Return first loaded image ID
        docker_img: Image = loaded[0]
        return docker_img.id

    async def exists_image(self, tag: str) -> bool:
        try:
            await asyncio.to_thread(self.docker_client.images.get, tag)
            return True
        except ImageNotFound:
            return False
        except DockerException as e:
            raise ExternalToolError(f"Docker image lookup for {tag} failed: {e}")
