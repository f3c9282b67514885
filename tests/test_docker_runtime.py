from unittest.mock import MagicMock

import pytest
from docker.errors import APIError, BuildError, ImageNotFound

from partner_bundle.core.errors import ExternalToolError
from partner_bundle.services.docker_runtime import DockerSDKRuntime


@pytest.mark.asyncio
async def test_build_image_passes_context_dockerfile_and_tag(tmp_path):
    client = MagicMock()
    image = MagicMock(id="sha256:built")
    client.images.build.return_value = (image, iter([{"stream": "Step 1/1 : FROM scratch\n"}]))
    runtime = DockerSDKRuntime(client)
    dockerfile = tmp_path / "Dockerfile-RELEASE"

    image_id = await runtime.build_image(dockerfile=dockerfile, context=tmp_path, tag="img:1")

    assert image_id == "sha256:built"
    client.images.build.assert_called_once_with(
        path=str(tmp_path), dockerfile=str(dockerfile.resolve()), tag="img:1", rm=True
    )


@pytest.mark.asyncio
async def test_build_error_becomes_external_tool_error(tmp_path):
    client = MagicMock()
    client.images.build.side_effect = BuildError("step failed", iter([]))
    runtime = DockerSDKRuntime(client)

    with pytest.raises(ExternalToolError, match="step failed"):
        await runtime.build_image(dockerfile=tmp_path / "Dockerfile", context=tmp_path, tag="img:1")


@pytest.mark.asyncio
async def test_save_image_streams_chunks(tmp_path):
    client = MagicMock()
    client.images.get.return_value.save.return_value = iter([b"abc", b"def"])
    runtime = DockerSDKRuntime(client)
    archive = tmp_path / "img.tar"

    await runtime.save_image("img:1", archive)

    assert archive.read_bytes() == b"abcdef"
    client.images.get.assert_called_once_with("img:1")
    client.images.get.return_value.save.assert_called_once_with(named=True)


@pytest.mark.asyncio
async def test_save_unknown_image(tmp_path):
    client = MagicMock()
    client.images.get.side_effect = ImageNotFound("no such image")
    runtime = DockerSDKRuntime(client)

    with pytest.raises(ExternalToolError, match="not found"):
        await runtime.save_image("img:1", tmp_path / "img.tar")


@pytest.mark.asyncio
async def test_load_image_returns_first_id(tmp_path):
    archive = tmp_path / "img.tar"
    archive.write_bytes(b"tar bytes")
    client = MagicMock()
    client.images.load.return_value = [MagicMock(id="sha256:loaded")]
    runtime = DockerSDKRuntime(client)

    assert await runtime.load_image(archive) == "sha256:loaded"
    client.images.load.assert_called_once_with(b"tar bytes")


@pytest.mark.asyncio
async def test_load_image_api_error(tmp_path):
    archive = tmp_path / "img.tar"
    archive.write_bytes(b"tar bytes")
    client = MagicMock()
    client.images.load.side_effect = APIError("daemon said no")
    runtime = DockerSDKRuntime(client)

    with pytest.raises(ExternalToolError, match="Failed to load Docker image"):
        await runtime.load_image(archive)


@pytest.mark.asyncio
async def test_exists_image():
    client = MagicMock()
    runtime = DockerSDKRuntime(client)
    assert await runtime.exists_image("img:1") is True

    client.images.get.side_effect = ImageNotFound("missing")
    assert await runtime.exists_image("img:1") is False


@pytest.mark.asyncio
async def test_exists_image_daemon_error():
    client = MagicMock()
    client.images.get.side_effect = APIError("daemon 500")
    runtime = DockerSDKRuntime(client)

    with pytest.raises(ExternalToolError, match="daemon 500"):
        await runtime.exists_image("img:1")
