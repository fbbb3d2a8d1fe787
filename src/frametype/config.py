"""
Configuration for frametype.

Defines FrameSettings, a frozen dataclass carrying runtime configuration for frame
validation and empty-frame construction.

Source of truth
- frametype.core.validate.ValidationMode for the structural validation mode.
- Descriptors (frametype.core.descriptor) are never configured; settings only change how
  frames are checked and materialized.

Import DAG discipline
- Depends only on stdlib and frametype.core.
- Does not import polars.

Notes
- Precedence for FrameSettings.load(): env > TOML > defaults.
- Invalid values are ignored and the previous value is kept.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

from frametype.core.validate import ValidationMode

__all__ = [
    "TimeUnit",
    "EnumCheck",
    "FrameSettings",
]

TimeUnit = Literal["ns", "us", "ms"]
EnumCheck = Literal["off", "fail_fast", "collect"]

_TIME_UNITS: frozenset[str] = frozenset({"ns", "us", "ms"})
_ENUM_CHECKS: frozenset[str] = frozenset({"off", "fail_fast", "collect"})


@dataclass(frozen=True)
class FrameSettings:
    """
    Runtime settings for frame validation and materialization.

    Attributes:
        mode (ValidationMode): Default structural validation mode for FrameSchema.validate().
        time_unit (Literal["ns","us","ms"]): Time unit of DateTime columns in empty frames.
        enum_check (Literal["off","fail_fast","collect"]): Row-level enum membership policy
            applied by FrameSchema.validate() after the structural check.

    Examples:
        >>> from frametype.config import FrameSettings
        >>> FrameSettings(time_unit="ns")  # doctest: +ELLIPSIS
        FrameSettings(...)
    """

    mode: ValidationMode = ValidationMode.STANDARD
    time_unit: TimeUnit = "us"
    enum_check: EnumCheck = "off"

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: FrameSettings, cfg: dict[str, Any] | None) -> FrameSettings:
        """
        Apply a loose config mapping onto FrameSettings, returning a new instance.

        A nested [frames] table takes the place of the top-level keys when present.
        """
        if not isinstance(cfg, dict):
            return base
        if isinstance(cfg.get("frames"), dict):
            cfg = cfg["frames"]

        s = base

        def _choice(val: Any, allowed: frozenset[str]) -> str | None:
            if isinstance(val, str):
                lo = val.strip().lower()
                if lo in allowed:
                    return lo
            return None

        # mode (also accepts a bare bool for strict)
        if "mode" in cfg:
            mode = _choice(cfg["mode"], frozenset(m.value for m in ValidationMode))
            if mode is not None:
                s = replace(s, mode=ValidationMode(mode))
        if "strict" in cfg and isinstance(cfg["strict"], bool):
            s = replace(s, mode=ValidationMode.STRICT if cfg["strict"] else ValidationMode.STANDARD)

        # time_unit
        if "time_unit" in cfg:
            unit = _choice(cfg["time_unit"], _TIME_UNITS)
            if unit is not None:
                s = replace(s, time_unit=unit)  # type: ignore[arg-type]

        # enum_check
        if "enum_check" in cfg:
            policy = _choice(cfg["enum_check"], _ENUM_CHECKS)
            if policy is not None:
                s = replace(s, enum_check=policy)  # type: ignore[arg-type]

        return s

    @classmethod
    def from_env(
        cls, base: FrameSettings | None = None, prefix: str = "FRAMETYPE_"
    ) -> FrameSettings:
        """
        Build FrameSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - FRAMETYPE_MODE ("standard" | "strict")
            - FRAMETYPE_TIME_UNIT ("ns" | "us" | "ms")
            - FRAMETYPE_ENUM_CHECK ("off" | "fail_fast" | "collect")
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("mode", "time_unit", "enum_check"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> FrameSettings:
        """
        Build FrameSettings from a TOML file.

        Search order when `path` is None:
            1) ./frametype.toml (with either a [frames] table or top-level keys)
            2) ./pyproject.toml under [tool.frametype]

        The first file that yields a non-empty table wins. Missing or unparsable files are
        skipped; defaults are returned when nothing applies.
        """
        paths = [Path(path)] if path is not None else [Path.cwd() / name for name in _TOML_FILES]
        for candidate in paths:
            table = _settings_table(candidate)
            if table:
                return cls._apply_mapping(cls(), table)
        return cls()

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> FrameSettings:
        """
        Load FrameSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search frametype.toml then pyproject.toml.
        """
        return cls.from_env(base=cls.from_toml(path))


_TOML_FILES = ("frametype.toml", "pyproject.toml")


def _settings_table(path: Path) -> dict[str, Any] | None:
    """Read the frametype settings table of a TOML file, or None if there is none."""
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if path.name == "pyproject.toml":
        tool = data.get("tool")
        table = tool.get("frametype") if isinstance(tool, dict) else None
        return table if isinstance(table, dict) else None
    return data
