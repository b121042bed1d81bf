"""Shared fixtures."""

import json
from pathlib import Path

import pytest

from office_server.assets import AssetStore
from office_server.config import ResolvedConfig, get_settings

ENV_VARS = [
    "OPENCLAW_GATEWAY_TOKEN",
    "OPENCLAW_GATEWAY_URL",
    "PORT",
    "HOST",
    "OPENCLAW_OFFICE_DIST",
    "OPENCLAW_OFFICE_LOG_LEVEL",
]

INDEX_HTML = """<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>OpenClaw Office</title>
</head>
<body><div id="root"></div><script src="/app.js"></script></body>
</html>
"""


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def dist_dir(tmp_path) -> Path:
    """A small built bundle."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text(INDEX_HTML, encoding="utf-8")
    (dist / "app.js").write_bytes(b"console.log('office');\n")
    (dist / "assets" / "logo.PNG").write_bytes(b"\x89PNG\r\n\x1a\nfake")
    (dist / "assets" / "model.glb").write_bytes(b"glTF\x02\x00\x00\x00")
    (dist / "assets" / "data.bin").write_bytes(b"\x00\x01\x02")
    (dist / "assets" / "my file.css").write_text("body{}", encoding="utf-8")
    return dist


@pytest.fixture
def store(dist_dir) -> AssetStore:
    return AssetStore(dist_dir)


@pytest.fixture
def config() -> ResolvedConfig:
    return ResolvedConfig(
        gateway_url="ws://gateway.test:18789",
        token="secret-token",
        token_source="command line --token",
        host="127.0.0.1",
        port=5180,
    )


@pytest.fixture
def home(tmp_path) -> Path:
    """Fake home directory for credential discovery."""
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def write_cli_config():
    """Writer for CLI config files, creating parent directories."""
    def write(path: Path, document) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return write
