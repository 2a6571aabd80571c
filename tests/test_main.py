import logging

import pytest

from arrowhead.config import AppConfig
from arrowhead.main import build_parser, main, run_headless


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("arrowhead")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


def test_run_headless_counts(cfg: AppConfig) -> None:
    lines = []
    counts = run_headless(cfg, "Koch snowflake", 2, emit=lines.append)
    assert counts == [3, 12, 48]
    assert lines == [
        "generation=0 segments=3",
        "generation=1 segments=12",
        "generation=2 segments=48",
    ]


def test_run_headless_prefix_name(cfg: AppConfig) -> None:
    counts = run_headless(cfg, "mandel", 1, emit=lambda line: None)
    assert counts == [4, 20]


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.config is None
    assert args.headless is None
    assert args.generations == 3


def test_main_headless(capsys) -> None:
    code = main(["--headless", "Heighway dragon", "--generations", "3", "--log-level", "WARNING"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out == [
        "generation=0 segments=1",
        "generation=1 segments=2",
        "generation=2 segments=4",
        "generation=3 segments=8",
    ]


def test_main_with_config_file(tmp_path, capsys) -> None:
    path = tmp_path / "arrowhead.yaml"
    path.write_text("view_width: 20\nview_height: 20\nlog_level: ERROR\n", encoding="utf-8")

    code = main(["--config", str(path), "--headless", "koch", "-n", "2"])
    out = capsys.readouterr().out.splitlines()

    assert code == 0
    assert out[-1] == "generation=2 segments=48"

    # side 12: a third generation would cut pieces shorter than one unit
    assert main(["--config", str(path), "--headless", "koch", "-n", "3"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "generation=3 segments=48"


def test_main_missing_config(tmp_path, capsys) -> None:
    code = main(["--config", str(tmp_path / "nope.yaml"), "--headless", "koch"])
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_main_bad_log_level_in_config(tmp_path, capsys) -> None:
    path = tmp_path / "arrowhead.yaml"
    path.write_text("log_level: LOUD\n", encoding="utf-8")
    assert main(["--config", str(path), "--headless", "koch"]) == 1
    assert "LOUD" in capsys.readouterr().err


def test_main_yaml_syntax_error_in_config(tmp_path, capsys) -> None:
    path = tmp_path / "arrowhead.yaml"
    path.write_text("view_width: [1, 2\n", encoding="utf-8")
    assert main(["--config", str(path), "--headless", "koch", "-n", "1"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_main_broken_menu_file(tmp_path, capsys) -> None:
    menu = tmp_path / "menu.yaml"
    menu.write_text("- kind: [koch\n", encoding="utf-8")
    path = tmp_path / "arrowhead.yaml"
    path.write_text(f"menu_path: {menu.as_posix()}\nlog_level: ERROR\n", encoding="utf-8")
    assert main(["--config", str(path), "--headless", "koch"]) == 1
    assert capsys.readouterr().out == ""


def test_main_unknown_fractal(capsys) -> None:
    assert main(["--headless", "julia set", "--log-level", "ERROR"]) == 1
    assert capsys.readouterr().out == ""


def test_main_negative_generations(capsys) -> None:
    assert main(["--headless", "koch", "-n", "-1", "--log-level", "ERROR"]) == 2
