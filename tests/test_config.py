import logging

import pytest

from arrowhead.config import AppConfig, config_from_dict, load_config
from arrowhead.logging_config import setup_logging


def test_defaults_without_path() -> None:
    cfg = load_config()
    assert cfg == AppConfig()
    assert cfg.min_split_length == 1.0
    assert cfg.menu_path is None


def test_load_yaml_overrides(tmp_path) -> None:
    path = tmp_path / "arrowhead.yaml"
    path.write_text(
        "view_width: 640\nstroke: [255, 0, 0]\nmin_split_length: 2.5\nlog_level: DEBUG\n",
        encoding="utf-8",
    )
    cfg = load_config(path)

    assert cfg.view_width == 640
    assert cfg.view_height == AppConfig().view_height
    assert cfg.stroke == (255, 0, 0)
    assert cfg.min_split_length == 2.5
    assert cfg.log_level == "DEBUG"


def test_empty_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_non_mapping_rejected(tmp_path) -> None:
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_unknown_keys_rejected() -> None:
    with pytest.raises(ValueError, match="zoom"):
        config_from_dict({"zoom": 2})


def test_bad_colour_rejected() -> None:
    with pytest.raises(ValueError):
        config_from_dict({"background": [1, 2]})


def test_overlay_on_base_leaves_base_alone() -> None:
    base = AppConfig(fps=30)
    cfg = config_from_dict({"tree_shrink": 0.5}, base)
    assert cfg is not base
    assert cfg.fps == 30
    assert cfg.tree_shrink == 0.5
    assert base.tree_shrink == AppConfig().tree_shrink


def test_yaml_syntax_error_is_value_error(tmp_path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("view_width: [1, 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="malformed"):
        load_config(path)


@pytest.mark.parametrize(
    "data",
    [
        {"min_split_length": "1"},
        {"max_segments": None},
        {"view_width": "wide"},
        {"view_height": 0},
        {"fps": True},
        {"tree_shrink": -0.5},
        {"stroke": [255, 0, "red"]},
        {"log_level": 10},
    ],
)
def test_bad_field_values_rejected(data) -> None:
    with pytest.raises(ValueError):
        config_from_dict(data)


def test_numeric_fields_coerced() -> None:
    cfg = config_from_dict({"min_split_length": 2, "log_file": None})
    assert cfg.min_split_length == 2.0
    assert isinstance(cfg.min_split_length, float)
    assert cfg.log_file is None


def test_setup_logging_levels(tmp_path) -> None:
    log_file = tmp_path / "arrowhead.log"
    logger = setup_logging("debug", str(log_file))
    try:
        assert logger.name == "arrowhead"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2

        logging.getLogger("arrowhead.test").debug("hello file")
        for handler in logger.handlers:
            handler.flush()
        assert "hello file" in log_file.read_text(encoding="utf-8")

        # a second call replaces handlers instead of stacking them
        setup_logging(logging.WARNING)
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


def test_setup_logging_unknown_level() -> None:
    with pytest.raises(ValueError):
        setup_logging("LOUD")
