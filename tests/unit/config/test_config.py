import os
from unittest.mock import patch

import pytest

from sky_height.config import (
    ConfigFileError,
    FrozenConfig,
    SkyHeightSettings,
    resolve_config,
)
from sky_height.core.exceptions import ConfigurationError


def _write_pyproject(root, body: str):
    path = root / "pyproject.toml"
    path.write_text(body, encoding="utf-8")
    return path


@pytest.mark.unit
def test_defaults_when_no_sources(tmp_path):
    resolved = resolve_config(project_root=tmp_path)

    assert resolved.plaintext_encoding == "latin-1"
    assert resolved.simulation_seed is None
    assert resolved.extreme_threshold == 1.96
    assert resolved.display_precision == 4
    assert set(resolved.origin.values()) == {"default"}


@pytest.mark.unit
def test_project_file_values(tmp_path):
    _write_pyproject(
        tmp_path,
        "[tool.sky_height]\nsimulation_seed = 11\ndisplay_precision = 2\nunknown = 1\n",
    )
    resolved = resolve_config(project_root=tmp_path)

    assert resolved.simulation_seed == 11
    assert resolved.display_precision == 2
    assert resolved.origin["simulation_seed"] == "file"
    assert resolved.origin["plaintext_encoding"] == "default"


@pytest.mark.unit
def test_project_file_is_found_in_parent_directory(tmp_path):
    _write_pyproject(tmp_path, "[tool.sky_height]\nextreme_threshold = 1.5\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert resolve_config(project_root=nested).extreme_threshold == 1.5


@pytest.mark.unit
def test_malformed_project_file_raises(tmp_path):
    _write_pyproject(tmp_path, "[tool.sky_height\n")

    with pytest.raises(ConfigFileError):
        resolve_config(project_root=tmp_path)


@pytest.mark.unit
def test_precedence_programmatic_over_env_over_file(tmp_path):
    _write_pyproject(
        tmp_path, "[tool.sky_height]\nsimulation_seed = 1\ndisplay_precision = 2\n"
    )
    with patch.dict(
        os.environ,
        {"SKY_HEIGHT_SIMULATION_SEED": "2", "SKY_HEIGHT_DISPLAY_PRECISION": "6"},
    ):
        resolved = resolve_config({"simulation_seed": 3}, project_root=tmp_path)

    assert resolved.simulation_seed == 3
    assert resolved.display_precision == 6
    assert resolved.origin["simulation_seed"] == "programmatic"
    assert resolved.origin["display_precision"] == "env"


@pytest.mark.unit
def test_blank_env_seed_means_unset(tmp_path):
    with patch.dict(os.environ, {"SKY_HEIGHT_SIMULATION_SEED": ""}):
        resolved = resolve_config(project_root=tmp_path)

    assert resolved.simulation_seed is None


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"plaintext_encoding": "not-a-codec"},
        {"plaintext_encoding": "hex"},
        {"plaintext_encoding": "base64"},
        {"plaintext_encoding": "rot13"},
        {"extreme_threshold": 0.0},
        {"extreme_threshold": 2.5},
        {"display_precision": 13},
    ],
)
def test_invalid_values_raise_configuration_error(tmp_path, overrides):
    with pytest.raises(ConfigurationError):
        resolve_config(overrides, project_root=tmp_path)


@pytest.mark.unit
def test_invalid_env_value_raises_configuration_error(tmp_path):
    with (
        patch.dict(os.environ, {"SKY_HEIGHT_EXTREME_THRESHOLD": "lots"}),
        pytest.raises(ConfigurationError, match="SKY_HEIGHT_EXTREME_THRESHOLD"),
    ):
        resolve_config(project_root=tmp_path)


@pytest.mark.unit
def test_frozen_config_is_immutable(tmp_path):
    frozen = resolve_config(project_root=tmp_path).to_frozen()

    assert isinstance(frozen, FrozenConfig)
    with pytest.raises(AttributeError):
        frozen.display_precision = 8  # type: ignore[misc]


@pytest.mark.unit
def test_with_overrides_and_audit(tmp_path):
    resolved = resolve_config(project_root=tmp_path).with_overrides(
        simulation_seed=9, calibration=1.0
    )

    assert resolved.simulation_seed == 9
    assert resolved.origin["simulation_seed"] == "programmatic"
    assert not hasattr(resolved, "calibration")
    assert "simulation_seed: programmatic:9" in resolved.audit()
    assert "display_precision: default:4" in resolved.audit()


@pytest.mark.unit
def test_settings_schema_has_no_calibration_fields():
    assert set(SkyHeightSettings.model_fields) == {
        "plaintext_encoding",
        "simulation_seed",
        "extreme_threshold",
        "display_precision",
    }


@pytest.mark.unit
def test_bytes_to_bytes_codec_from_env_is_rejected(tmp_path):
    with (
        patch.dict(os.environ, {"SKY_HEIGHT_PLAINTEXT_ENCODING": "hex"}),
        pytest.raises(ConfigurationError, match="Not a text encoding"),
    ):
        resolve_config(project_root=tmp_path)


@pytest.mark.unit
@pytest.mark.parametrize("codec", ["utf-8", "ascii", "cp1252"])
def test_text_codecs_are_accepted(tmp_path, codec):
    resolved = resolve_config({"plaintext_encoding": codec}, project_root=tmp_path)

    assert resolved.plaintext_encoding == codec
