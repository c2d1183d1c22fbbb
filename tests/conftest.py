"""
Global test configuration.
"""

import base64
from collections.abc import Callable
import os

import pytest

from sky_height.config import FrozenConfig

# "body":{"height": 0.1234,"scale":1.5e-1}
CANONICAL_PAYLOAD = "ImJvZHkiOnsiaGVpZ2h0IjogMC4xMjM0LCJzY2FsZSI6MS41ZS0xfQ=="


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def isolate_sky_height_env(request, monkeypatch):
    """Ensure a clean SKY_HEIGHT_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith("SKY_HEIGHT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(autouse=True)
def neutral_project_dir(request, monkeypatch, tmp_path):
    """Run each test from an empty directory so no real pyproject.toml is read."""
    if request.node.get_closest_marker("allow_real_project_config"):
        return
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture
def frozen_config() -> FrozenConfig:
    """Default configuration without touching env or files."""
    return FrozenConfig(
        plaintext_encoding="latin-1",
        simulation_seed=None,
        extreme_threshold=1.96,
        display_precision=4,
    )


@pytest.fixture
def canonical_payload() -> str:
    """A real, padded payload whose plaintext is
    ``"body":{"height": 0.1234,"scale":1.5e-1}``.
    """
    return CANONICAL_PAYLOAD


@pytest.fixture
def make_payload() -> Callable[..., str]:
    """Build a raw payload from plaintext.

    By default the block is URL-safe and unpadded, the way the upstream
    source emits it; ``prefix`` simulates surrounding text.
    """

    def _make(plaintext: str, *, prefix: str = "", url_safe: bool = True) -> str:
        data = plaintext.encode("latin-1")
        if url_safe:
            block = base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
        else:
            block = base64.b64encode(data).decode("ascii")
        return prefix + block

    return _make


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "contract: Behavioral guarantees of the public pipeline",
        "allow_env_pollution: Keep SKY_HEIGHT_* variables from the real environment",
        "allow_real_project_config: Do not chdir into an empty directory",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)
