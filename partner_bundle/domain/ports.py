from pathlib import Path
from typing import Protocol


class ContainerEngine(Protocol):
    # -------------------------------
    # Producer side
    # -------------------------------
    async def build_image(self, *, dockerfile: Path, context: Path, tag: str) -> str:
        """Build an image from a Dockerfile and build context. Returns the image ID."""
        ...

    async def save_image(self, tag: str, path: Path) -> None:
        """Serialize a tagged image into a .tar archive at `path`."""
        ...

    async def exists_image(self, tag: str) -> bool:
        """Check if a tagged image exists locally."""
        ...

    # -------------------------------
    # Partner side
    # -------------------------------
    async def load_image(self, path: Path) -> str:
        """Load a .tar image archive from disk. Returns the image ID."""
        ...
