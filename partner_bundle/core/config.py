from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    WORK_DIR: Path = Field(
        default=Path("."),
        description="Directory every relative path below is resolved against"
    )

    # Image
    ZOO_NODE_IMAGE: str = "dcspark/zoo-node"
    ZOO_NODE_VERSION: str = "latest"
    ZOO_NODE_DOCKERFILE: Path = Path("Dockerfile-RELEASE")
    ZOO_SOURCE_PATH: Path = Field(
        default=Path("../"),
        description="Build context handed to the container engine"
    )

    # Bundle contents
    ZOO_COMPOSE_FILE: Path = Path("docker-compose.yml")
    ZOO_NODE_ARCHIVE: str = "dcspark_zoo-node.tar"
    DOCKER_COMPOSE_ENV_FILE: str = ".env"
    PARTNER_SCRIPT_NAME: str = "prepare.sh"

    # Folders
    ZOO_TMP_LOCAL_FOLDER: str = Field(
        default="zoo_deploy",
        description="Working folder, removed at the end of a successful run"
    )
    ZOO_TMP_PARTNER_FOLDER: str = Field(
        default="zoo_deploy_partner",
        description="Where the final <working folder>.tar.gz is written"
    )

    # Commands quoted in the partner-side script and guidance
    DOCKER_COMPOSE_CMD: str = "docker compose"
    DOCKER_LOAD_CMD: str = "docker load --input"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    @property
    def image_ref(self) -> str:
        return f"{self.ZOO_NODE_IMAGE}:{self.ZOO_NODE_VERSION}"

    @property
    def package_filename(self) -> str:
        return f"{Path(self.ZOO_TMP_LOCAL_FOLDER).name}.tar.gz"

    def resolve(self, path) -> Path:
        """Resolve a configured path against WORK_DIR (absolute paths pass through)."""
        path = Path(path)
        return path if path.is_absolute() else self.WORK_DIR / path
