from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from partner_bundle.core.config import Settings


class BundleStage(str, Enum):
    START = "start"
    IMAGE_BUILT = "image_built"
    COMPOSE_PREPARED = "compose_prepared"
    IMAGE_SAVED = "image_saved"
    PARTNER_ARCHIVE_WRITTEN = "partner_archive_written"
    CLEANED = "cleaned"
    DONE = "done"


@dataclass(frozen=True)
class BundleLayout:
    """Where every artifact of one run lives on disk."""
    dockerfile: Path
    source_path: Path
    compose_source: Path
    working_dir: Path
    compose_file: Path
    env_file: Path
    loader_script: Path
    archive: Path
    output_dir: Path
    package: Path

    @classmethod
    def from_settings(cls, settings: Settings) -> "BundleLayout":
        working_dir = settings.resolve(settings.ZOO_TMP_LOCAL_FOLDER)
        output_dir = settings.resolve(settings.ZOO_TMP_PARTNER_FOLDER)
        return cls(
            dockerfile=settings.resolve(settings.ZOO_NODE_DOCKERFILE),
            source_path=settings.resolve(settings.ZOO_SOURCE_PATH),
            compose_source=settings.resolve(settings.ZOO_COMPOSE_FILE),
            working_dir=working_dir,
            compose_file=working_dir / Path(settings.ZOO_COMPOSE_FILE).name,
            env_file=working_dir / settings.DOCKER_COMPOSE_ENV_FILE,
            loader_script=working_dir / settings.PARTNER_SCRIPT_NAME,
            archive=working_dir / settings.ZOO_NODE_ARCHIVE,
            output_dir=output_dir,
            package=output_dir / settings.package_filename,
        )
