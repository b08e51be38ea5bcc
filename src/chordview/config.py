"""
Display configuration for chordview.

Holds the rendering preferences a viewer keeps between songs: default mode,
font size, glyph width ratio and transpose range.  Settings can be loaded
from a JSON file::

    {"mode": "lyrics", "font_size": 18, "color": false}
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from .exceptions import ConfigError, UnknownModeError
from .layout import CHAR_WIDTH_RATIO, MIN_COLUMNS, estimate_columns
from .models import DisplayMode

logger = logging.getLogger(__name__)


@dataclass
class ViewConfig:
    """Rendering preferences."""
    mode: DisplayMode = DisplayMode.OVER
    font_size: float = 16
    char_width_ratio: float = CHAR_WIDTH_RATIO
    min_columns: int = MIN_COLUMNS
    color: bool = True
    transpose_limit: int = 11

    def columns_for(self, pixel_width: float | None) -> int | None:
        """Character columns available in *pixel_width* at this font size."""
        return estimate_columns(pixel_width, self.font_size, self.char_width_ratio, self.min_columns)

    def clamp_offset(self, offset: int) -> int:
        """Clamp a transpose offset to ``[-transpose_limit, transpose_limit]``."""
        return max(-self.transpose_limit, min(self.transpose_limit, offset))

    @classmethod
    def load(cls, path: str | Path) -> "ViewConfig":
        """Load configuration from a JSON file.

        Raises ConfigError if the file is unreadable or holds invalid values.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigError(str(path), exc.strerror or str(exc)) from exc
        except json.JSONDecodeError as exc:
            raise ConfigError(str(path), f"invalid JSON ({exc.msg})") from exc
        if not isinstance(data, dict):
            raise ConfigError(str(path), "expected a JSON object")
        return cls.from_dict(data, source=str(path))

    @classmethod
    def from_dict(cls, data: dict, source: str = "<dict>") -> "ViewConfig":
        known = {f.name: f for f in fields(cls)}
        values = {}
        for name, value in data.items():
            if name not in known:
                logger.warning("Ignoring unknown config key %r in %s", name, source)
                continue
            values[name] = _coerce(name, value, source)
        return cls(**values)


def _coerce(name: str, value, source: str):
    if name == "mode":
        if not isinstance(value, str):
            raise ConfigError(source, "mode must be a string")
        try:
            return DisplayMode.from_name(value)
        except UnknownModeError as exc:
            raise ConfigError(source, str(exc)) from exc

    if name == "color":
        if not isinstance(value, bool):
            raise ConfigError(source, "color must be true or false")
        return value

    # bool is an int subclass; reject it for numeric settings
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(source, f"{name} must be a number")
    if value <= 0 and name != "transpose_limit":
        raise ConfigError(source, f"{name} must be positive")
    if name in ("min_columns", "transpose_limit"):
        if value != int(value) or value < 0:
            raise ConfigError(source, f"{name} must be a non-negative integer")
        return int(value)
    return value
