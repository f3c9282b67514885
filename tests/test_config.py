from pathlib import Path

import pytest
from pydantic import ValidationError

from partner_bundle.core.config import Settings
from partner_bundle.domain.bundle import BundleLayout


def test_defaults():
    settings = Settings()
    assert settings.image_ref == "dcspark/zoo-node:latest"
    assert settings.package_filename == "zoo_deploy.tar.gz"
    assert settings.ZOO_NODE_ARCHIVE == "dcspark_zoo-node.tar"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ZOO_NODE_IMAGE", "acme/node")
    monkeypatch.setenv("ZOO_NODE_VERSION", "1.2.3")
    monkeypatch.setenv("ZOO_TMP_LOCAL_FOLDER", "bundle")

    settings = Settings()

    assert settings.image_ref == "acme/node:1.2.3"
    assert settings.package_filename == "bundle.tar.gz"


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(ValidationError):
        settings.ZOO_NODE_VERSION = "other"


def test_layout_resolves_against_work_dir(tmp_path):
    settings = Settings(WORK_DIR=tmp_path, ZOO_NODE_DOCKERFILE=Path("/abs/Dockerfile"))
    layout = BundleLayout.from_settings(settings)

    assert layout.dockerfile == Path("/abs/Dockerfile")
    assert layout.compose_source == tmp_path / "docker-compose.yml"
    assert layout.working_dir == tmp_path / "zoo_deploy"
    assert layout.archive == tmp_path / "zoo_deploy" / "dcspark_zoo-node.tar"
    assert layout.loader_script == tmp_path / "zoo_deploy" / "prepare.sh"
    assert layout.package == tmp_path / "zoo_deploy_partner" / "zoo_deploy.tar.gz"
