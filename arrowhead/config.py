from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml


Color = Tuple[int, int, int]


@dataclass
class AppConfig:
    view_width: int = 1000
    view_height: int = 800
    fps: int = 60
    background: Color = (15, 15, 25)
    stroke: Color = (230, 240, 255)
    stroke_width: int = 1
    font_size: int = 18
    min_split_length: float = 1.0  # display units; shorter pieces are not drawn
    tree_shrink: float = 0.7
    max_segments: int = 200000     # viewer stops iterating past this
    log_level: str = "INFO"
    log_file: Optional[str] = None
    menu_path: Optional[str] = None  # None = bundled content/fractals.yaml


_COLOR_FIELDS = {"background", "stroke"}
_INT_FIELDS = {"view_width", "view_height", "fps", "stroke_width", "font_size", "max_segments"}
_FLOAT_FIELDS = {"min_split_length", "tree_shrink"}
_OPTIONAL_STR_FIELDS = {"log_file", "menu_path"}


def _coerce(name: str, value: Any) -> Any:
    """Check one field's value; numbers must be positive."""
    if name in _COLOR_FIELDS:
        if not isinstance(value, (list, tuple)) or len(value) != 3:
            raise ValueError(f"{name} must be an [r, g, b] triple, got {value!r}")
        if not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in value):
            raise ValueError(f"{name} components must be integers 0-255, got {value!r}")
        return tuple(value)
    if name in _INT_FIELDS or name in _FLOAT_FIELDS:
        allowed = (int,) if name in _INT_FIELDS else (int, float)
        if isinstance(value, bool) or not isinstance(value, allowed):
            kind = "an integer" if name in _INT_FIELDS else "a number"
            raise ValueError(f"{name} must be {kind}, got {value!r}")
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value!r}")
        return value if name in _INT_FIELDS else float(value)
    if name in _OPTIONAL_STR_FIELDS and value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    return value


def config_from_dict(data: Dict[str, Any], base: AppConfig | None = None) -> AppConfig:
    """Return a copy of base (or the defaults) with the mapping's values applied."""
    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    values = {name: _coerce(name, value) for name, value in data.items()}
    return replace(base if base is not None else AppConfig(), **values)


def load_config(path: Path | str | None = None) -> AppConfig:
    """Load an AppConfig from YAML; no path means defaults."""
    if path is None:
        return AppConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Config file malformed: {path} ({e})") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file malformed (expected a mapping): {path}")
    return config_from_dict(data)
