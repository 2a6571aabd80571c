"""Generator menu: which fractals the host offers, loaded from YAML."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Type

import yaml

from arrowhead.config import AppConfig
from arrowhead.graphics.canvas import SegmentCanvas
from arrowhead.patterns import generators

logger = logging.getLogger(__name__)

KINDS: Dict[str, Type[generators.FractalGenerator]] = {
    "koch": generators.KochSnowflake,
    "sierpinski": generators.SierpinskiTriangle,
    "tree": generators.FractalTree,
    "dragon_of_eve": generators.DragonOfEve,
    "minkowski": generators.MinkowskiCurve,
    "levy_c": generators.LevyC,
    "heighway": generators.HeighwayDragon,
    "mandelbrot": generators.MandelbrotCurve,
}

DEFAULT_MENU = Path(__file__).resolve().parent.parent / "content" / "fractals.yaml"


def build_generator(entry: Dict[str, Any], canvas: SegmentCanvas, cfg: AppConfig) -> generators.FractalGenerator:
    """Instantiate one menu entry against canvas."""
    if not isinstance(entry, dict):
        raise ValueError(f"Fractal menu entry must be a mapping, got {entry!r}")
    kind = entry.get("kind")
    if not isinstance(kind, str) or kind not in KINDS:
        raise ValueError(f"Unknown fractal kind {kind!r}; expected one of {sorted(KINDS)}")
    params = entry.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"params for {kind!r} must be a mapping, got {params!r}")
    params = dict(params)
    if kind == "tree":
        params.setdefault("shrink", cfg.tree_shrink)
    try:
        gen = KINDS[kind](canvas, cfg.view_width, cfg.view_height, **params)
    except TypeError as e:
        raise ValueError(f"Bad params for {kind!r}: {params!r} ({e})") from e
    if entry.get("name"):
        gen.name = str(entry["name"])
    return gen


def load_menu(canvas: SegmentCanvas, cfg: AppConfig, path: Path | str | None = None) -> List[generators.FractalGenerator]:
    """Build every generator listed in the menu file, in order."""
    if path is None:
        path = cfg.menu_path or DEFAULT_MENU
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Fractal menu file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Fractal menu malformed: {path} ({e})") from e
    if not isinstance(data, list) or not data:
        raise ValueError(f"Fractal menu malformed (expected a non-empty list): {path}")
    menu = [build_generator(entry, canvas, cfg) for entry in data]
    logger.info("loaded %d fractal generators from %s", len(menu), path)
    return menu


def find_generator(menu: List[generators.FractalGenerator], name: str) -> generators.FractalGenerator:
    """Look a generator up by its display name, or by a case-insensitive prefix."""
    for gen in menu:
        if gen.name == name:
            return gen
    lowered = name.lower()
    matches = [gen for gen in menu if gen.name.lower().startswith(lowered)]
    if len(matches) == 1:
        return matches[0]
    names = ", ".join(gen.name for gen in menu)
    if not matches:
        raise KeyError(f"No fractal named {name!r}; available: {names}")
    raise KeyError(f"Fractal name {name!r} is ambiguous; available: {names}")
