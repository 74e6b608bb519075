"""Configuration models and loaders."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from bouncygrid.core.geometry import EdgeInsets, Size


class ConfigError(ValueError):
    """Raised when a configuration file holds an unusable value."""


@dataclass(frozen=True)
class WindowConfig:
    size: Tuple[int, int] = (480, 800)
    fullscreen: bool = False
    title: str = "Bouncy Grid"
    target_fps: int = 60
    background_color: Tuple[int, int, int] = (24, 24, 32)
    item_color: Tuple[int, int, int] = (120, 210, 255)
    pointer_color: Tuple[int, int, int] = (255, 200, 80)


@dataclass(frozen=True)
class FlowConfig:
    interitem_spacing: float = 10.0
    line_spacing: float = 10.0
    item_size: Size = Size(44.0, 44.0)
    section_inset: EdgeInsets = EdgeInsets.uniform(10.0)
    section_counts: Tuple[int, ...] = (200,)


@dataclass(frozen=True)
class LayoutConfig:
    # Extra margin around the viewport so attachments exist before items show.
    overscan_margin: float = 100.0
    # Manhattan distance from the pointer at which resistance reaches 1.0.
    resistance_divisor: float = 1500.0
    spring_length: float = 1.0
    # Damping ratio; 1.0 is critically damped.
    spring_damping: float = 0.8


@dataclass(frozen=True)
class SpringConfig:
    # Undamped oscillation frequency of each attachment, in Hz.
    frequency: float = 1.0
    item_mass: float = 1.0
    physics_step: float = 1.0 / 120.0
    max_frame_time: float = 0.25


@dataclass(frozen=True)
class AppConfig:
    window: WindowConfig = field(default_factory=WindowConfig)
    flow: FlowConfig = field(default_factory=FlowConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    springs: SpringConfig = field(default_factory=SpringConfig)

    @classmethod
    def default(cls) -> "AppConfig":
        return cls()


def _load_json(path: Path) -> Dict[str, Any]:
    try:
        payload = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"{path}: top level must be an object")
    return payload


def _section(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be an object")
    return value


def _number(section: Dict[str, Any], key: str, default: float, *, minimum: Optional[float] = None,
            positive: bool = False) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"'{key}' must be a number, got {value!r}")
    value = float(value)
    if positive and value <= 0:
        raise ConfigError(f"'{key}' must be positive, got {value}")
    if minimum is not None and value < minimum:
        raise ConfigError(f"'{key}' must be >= {minimum}, got {value}")
    return value


def _pair(section: Dict[str, Any], key: str, default: Tuple[float, float]) -> Tuple[float, float]:
    value = section.get(key, default)
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"'{key}' must be a pair of numbers, got {value!r}")
    first, second = value
    for component in (first, second):
        if isinstance(component, bool) or not isinstance(component, (int, float)) or component <= 0:
            raise ConfigError(f"'{key}' must hold two positive numbers, got {value!r}")
    return float(first), float(second)


def _color(section: Dict[str, Any], key: str, default: Tuple[int, int, int]) -> Tuple[int, int, int]:
    value = section.get(key, default)
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 3
        or not all(isinstance(channel, int) and 0 <= channel <= 255 for channel in value)
    ):
        raise ConfigError(f"'{key}' must be an RGB triple, got {value!r}")
    return tuple(value)


def _insets(section: Dict[str, Any], key: str, default: EdgeInsets) -> EdgeInsets:
    value = section.get(key)
    if value is None:
        return default
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return EdgeInsets.uniform(_number(section, key, 0.0, minimum=0.0))
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a number or an object with top/left/bottom/right")
    return EdgeInsets(
        top=_number(value, "top", default.top, minimum=0.0),
        left=_number(value, "left", default.left, minimum=0.0),
        bottom=_number(value, "bottom", default.bottom, minimum=0.0),
        right=_number(value, "right", default.right, minimum=0.0),
    )


def _window_config(payload: Dict[str, Any]) -> WindowConfig:
    defaults = WindowConfig()
    section = _section(payload, "window")
    width, height = _pair(section, "size", defaults.size)
    target_fps = int(_number(section, "target_fps", defaults.target_fps, positive=True))
    return WindowConfig(
        size=(int(width), int(height)),
        fullscreen=bool(section.get("fullscreen", defaults.fullscreen)),
        title=str(section.get("title", defaults.title)),
        target_fps=target_fps,
        background_color=_color(section, "background_color", defaults.background_color),
        item_color=_color(section, "item_color", defaults.item_color),
        pointer_color=_color(section, "pointer_color", defaults.pointer_color),
    )


def _flow_config(payload: Dict[str, Any]) -> FlowConfig:
    defaults = FlowConfig()
    section = _section(payload, "flow")
    width, height = _pair(section, "item_size", defaults.item_size.as_tuple())

    counts = section.get("section_counts", list(defaults.section_counts))
    if not isinstance(counts, (list, tuple)) or not all(
        isinstance(count, int) and not isinstance(count, bool) and count >= 0 for count in counts
    ):
        raise ConfigError(f"'section_counts' must be a list of non-negative integers, got {counts!r}")

    return FlowConfig(
        interitem_spacing=_number(section, "interitem_spacing", defaults.interitem_spacing, minimum=0.0),
        line_spacing=_number(section, "line_spacing", defaults.line_spacing, minimum=0.0),
        item_size=Size(width, height),
        section_inset=_insets(section, "section_inset", defaults.section_inset),
        section_counts=tuple(counts),
    )


def _layout_config(payload: Dict[str, Any]) -> LayoutConfig:
    defaults = LayoutConfig()
    section = _section(payload, "layout")
    damping = _number(section, "spring_damping", defaults.spring_damping, positive=True)
    if damping > 1.0:
        raise ConfigError(f"'spring_damping' must be in (0, 1], got {damping}")
    return LayoutConfig(
        overscan_margin=_number(section, "overscan_margin", defaults.overscan_margin, minimum=0.0),
        resistance_divisor=_number(section, "resistance_divisor", defaults.resistance_divisor, positive=True),
        spring_length=_number(section, "spring_length", defaults.spring_length, minimum=0.0),
        spring_damping=damping,
    )


def _spring_config(payload: Dict[str, Any]) -> SpringConfig:
    defaults = SpringConfig()
    section = _section(payload, "springs")
    return SpringConfig(
        frequency=_number(section, "frequency", defaults.frequency, positive=True),
        item_mass=_number(section, "item_mass", defaults.item_mass, positive=True),
        physics_step=_number(section, "physics_step", defaults.physics_step, positive=True),
        max_frame_time=_number(section, "max_frame_time", defaults.max_frame_time, positive=True),
    )


def parse_app_config(payload: Dict[str, Any]) -> AppConfig:
    return AppConfig(
        window=_window_config(payload),
        flow=_flow_config(payload),
        layout=_layout_config(payload),
        springs=_spring_config(payload),
    )


def load_app_config(path: Path) -> AppConfig:
    return parse_app_config(_load_json(Path(path)))
