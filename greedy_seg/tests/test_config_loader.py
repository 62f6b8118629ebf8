import json
from pathlib import Path

import pytest

from greedy_seg.src.core.errors import InvalidParameterError, InvalidSizeError
from greedy_seg.src.utils.config_loader import (
    SegmentationConfig,
    default_config_path,
    load_config,
    load_segmentation_config,
)


def test_load_yaml_and_json(tmp_path: Path) -> None:
    yml = tmp_path / "seg.yaml"
    yml.write_text("method: srm\nq: 12.5\n", encoding="utf-8")
    assert load_config(str(yml)) == {"method": "srm", "q": 12.5}
    js = tmp_path / "seg.json"
    js.write_text(json.dumps({"min_size": 7}), encoding="utf-8")
    assert load_config(str(js)) == {"min_size": 7}


def test_unsupported_format(tmp_path: Path) -> None:
    path = tmp_path / "seg.toml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_packaged_defaults_exist():
    assert default_config_path().exists()
    config = load_segmentation_config()
    assert config.method == "felzenszwalb"
    assert config.min_size == 100


def test_file_overrides_defaults(tmp_path: Path) -> None:
    path = tmp_path / "seg.yml"
    path.write_text("method: srm\nq: 10\nunused: true\n", encoding="utf-8")
    config = load_segmentation_config(path)
    assert config.method == "srm"
    assert config.q == 10
    assert config.threshold == 300.0


def test_updated_skips_none():
    config = SegmentationConfig().updated(threshold=None, min_size=5)
    assert config.threshold == 300.0
    assert config.min_size == 5


@pytest.mark.parametrize(
    "overrides, error",
    [
        ({"method": "watershed"}, InvalidParameterError),
        ({"threshold": 0.0}, InvalidParameterError),
        ({"min_size": 0}, InvalidSizeError),
        ({"connectivity": 6}, InvalidParameterError),
        ({"q": -1.0}, InvalidParameterError),
        ({"levels": 0}, InvalidParameterError),
        ({"blur": -1}, InvalidParameterError),
    ],
)
def test_validate_rejects(overrides, error):
    with pytest.raises(error):
        SegmentationConfig(**overrides).validate()
