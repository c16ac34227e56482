"""Shared pytest fixtures for KITSYNC tests."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kitsync.config.manager import ConfigManager
from kitsync.context import Context
from kitsync.links import LinkRegistry


def write_json(path: Path, data: dict) -> Path:
    """Write a JSON document, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path: Path):
    """Keep config keys from the developer's environment out of tests."""
    for key in (
        "COM_URL",
        "BLOCK_URL",
        "CACHE_DIR",
        "LINKS_FILE",
        "INTERNAL_SCOPE_PREFIX",
        "BLOCK_SCOPE_PREFIX",
        "SYNC_MAX_PARALLEL",
        "GIT_CLONE_DEPTH",
    ):
        monkeypatch.delenv(key, raising=False)
    # Local .kitsync discovery walks up from cwd
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    (workdir / ".git").mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def mock_popen():
    """Mock subprocess.Popen for the streaming command runner."""
    with patch("subprocess.Popen") as mock:
        process = MagicMock()
        process.stdout = iter([])
        process.wait.return_value = 0
        mock.return_value = process
        yield mock


@pytest.fixture
def com_repo(tmp_path: Path) -> Path:
    """A shared component repository checkout.

    Contains:
        @qg-com/button        -> depends on react and @qg-util/format
        @qg-com/modal         -> depends on @qg-com/button
        @qg-util/format       -> utility with a helper file in a subfolder
    """
    root = tmp_path / "cache" / "com"
    write_json(
        root / "src/components/Button/package.json",
        {
            "name": "@qg-com/button",
            "version": "1.2.0",
            "feature": "button",
            "description": "Primary button",
            "dependencies": {"react": "^18.2.0", "@qg-util/format": "^1.0.0"},
        },
    )
    (root / "src/components/Button/index.tsx").write_text("export const Button = 1;\n")
    write_json(
        root / "src/components/Modal/package.json",
        {
            "name": "@qg-com/modal",
            "version": "2.0.0",
            "feature": "modal",
            "description": "Dialog",
            "dependencies": {"@qg-com/button": "^1.2.0"},
        },
    )
    (root / "src/components/Modal/index.tsx").write_text("export const Modal = 1;\n")
    write_json(
        root / "src/utils/format.package.json",
        {"name": "@qg-util/format", "version": "1.0.0", "description": "Formatters"},
    )
    (root / "src/utils/format.ts").write_text("export const format = 1;\n")
    (root / "src/utils/helpers").mkdir(parents=True)
    (root / "src/utils/helpers/format.ts").write_text("export const helper = 1;\n")
    return root


@pytest.fixture
def block_repo(tmp_path: Path) -> Path:
    """A shared block repository checkout with one login block."""
    root = tmp_path / "cache" / "block"
    write_json(
        root / "src/pages/Login/package.json",
        {
            "name": "@qg-block/login",
            "version": "0.3.0",
            "feature": "login",
            "description": "Login page",
            "dependencies": {"@qg-com/button": "^1.2.0", "axios": "^1.6.0"},
        },
    )
    (root / "src/pages/Login/index.tsx").write_text("export default 1;\n")
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A consumer project with a package.json."""
    root = tmp_path / "app"
    write_json(
        root / "package.json",
        {
            "name": "app",
            "version": "0.1.0",
            "dependencies": {"react": "^17.0.2"},
            "devDependencies": {"typescript": "^5.0.0"},
        },
    )
    return root


@pytest.fixture
def config_manager(tmp_path: Path) -> ConfigManager:
    """Config manager backed by a temporary global config file."""
    config_file = tmp_path / "home" / "config"
    config_file.parent.mkdir(parents=True)
    config_file.write_text(
        f'COM_URL="git@example.com:shared/com.git"\n'
        f'BLOCK_URL="git@example.com:shared/block.git"\n'
        f'CACHE_DIR="{tmp_path / "cache"}"\n'
        f'LINKS_FILE="{tmp_path / "home" / "links.json"}"\n'
    )
    manager = ConfigManager(global_config_path=config_file)
    manager.load()
    return manager


@pytest.fixture
def context(config_manager: ConfigManager, project: Path) -> Context:
    """Context pointing at the temporary caches and project."""
    return Context.from_settings(
        config_manager.settings,
        project_path=project,
        config_path=config_manager.global_config_path,
    )


@pytest.fixture
def registry(context: Context) -> LinkRegistry:
    """Empty link registry in the temporary home directory."""
    return LinkRegistry(context.links_path).load()
