"""
Grid Configuration

Defines the settings of a grid surface (columns, row height, spacing and
interaction defaults) and a set of named presets. Configurations can also
be loaded from a YAML file, optionally starting from a preset:

```yaml
preset: md
row_height: 40
margin: [8, 8]
compact_type: horizontal
prevent_collision: true
```
"""

import math
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from .layout.abstraction import CompactType, resolve_compact_type
from .layout.geometry import GridParameters


@dataclass
class GridConfig:
    """Settings shared by every item of one grid."""

    name: str = "default"
    description: str = ""

    # Grid dimensions
    cols: int = 12
    row_height: float = 150.0  # px
    max_rows: float = math.inf

    # Spacing (px, horizontal then vertical)
    margin: Tuple[float, float] = (10, 10)
    container_padding: Optional[Tuple[float, float]] = None  # None = same as margin

    # Compaction
    compact_type: Optional[str] = "vertical"  # "vertical", "horizontal", None
    vertical_compact: bool = True  # legacy switch; False disables compaction

    # Collision handling
    allow_overlap: bool = False
    prevent_collision: bool = False

    # Item defaults, overridable per item
    is_draggable: bool = True
    is_resizable: bool = True
    is_bounded: bool = False
    resize_handles: List[str] = field(default_factory=lambda: ["se"])

    @property
    def effective_compact_type(self) -> CompactType:
        """Compaction mode after applying the legacy vertical_compact switch."""
        return resolve_compact_type(self.compact_type, self.vertical_compact)

    @property
    def effective_padding(self) -> Tuple[float, float]:
        if self.container_padding is None:
            return tuple(self.margin)
        return tuple(self.container_padding)

    def position_params(self, container_width: float) -> GridParameters:
        """Grid parameters for a container of the given pixel width."""
        return GridParameters(
            margin=tuple(self.margin),
            container_padding=self.effective_padding,
            container_width=container_width,
            cols=self.cols,
            row_height=self.row_height,
            max_rows=self.max_rows,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (for display)."""
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, tuple):
                value = list(value)
            d[f.name] = value
        return d


# Pre-defined presets

DEFAULT = GridConfig(
    name="default",
    description="12 columns, 150px rows, vertical compaction",
)

# Responsive breakpoint presets (dense dashboards)
BREAKPOINT_LG = GridConfig(
    name="lg",
    description="Large screens (>= 1200px): 12 columns",
    cols=12,
    row_height=30,
)

BREAKPOINT_MD = GridConfig(
    name="md",
    description="Medium screens (>= 996px): 10 columns",
    cols=10,
    row_height=30,
)

BREAKPOINT_SM = GridConfig(
    name="sm",
    description="Small screens (>= 768px): 6 columns",
    cols=6,
    row_height=30,
)

BREAKPOINT_XS = GridConfig(
    name="xs",
    description="Extra small screens (>= 480px): 4 columns",
    cols=4,
    row_height=30,
)

BREAKPOINT_XXS = GridConfig(
    name="xxs",
    description="Tiny screens: 2 columns",
    cols=2,
    row_height=30,
)

FREEFORM = GridConfig(
    name="freeform",
    description="No compaction; items stay where they are dropped",
    compact_type=None,
    prevent_collision=True,
)

PRESETS: Dict[str, GridConfig] = {
    "default": DEFAULT,
    "lg": BREAKPOINT_LG,
    "md": BREAKPOINT_MD,
    "sm": BREAKPOINT_SM,
    "xs": BREAKPOINT_XS,
    "xxs": BREAKPOINT_XXS,
    "freeform": FREEFORM,
}


def get_preset(name: str) -> GridConfig:
    """
    Get a grid preset by name.

    Returns a copy, so callers may modify it freely.

    Raises:
        ValueError: If preset name is not found
    """
    if name not in PRESETS:
        available = ", ".join(sorted(PRESETS.keys()))
        raise ValueError(f"Unknown grid preset '{name}'. Available: {available}")
    preset = PRESETS[name]
    return replace(preset, resize_handles=list(preset.resize_handles))


def list_presets() -> List[str]:
    """List all available preset names."""
    return sorted(PRESETS.keys())


def config_from_dict(data: Dict[str, Any]) -> GridConfig:
    """
    Build a config from a mapping, starting from its `preset` (default: "default").

    Raises:
        ValueError: On unknown keys, an unknown preset or compaction mode
    """
    data = dict(data or {})
    base = get_preset(str(data.pop("preset", "default")))

    known = {f.name for f in fields(GridConfig)}
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        raise ValueError(f"Unknown grid config keys: {unknown}")

    for key in ("margin", "container_padding"):
        if data.get(key) is not None:
            data[key] = tuple(data[key])
    if data.get("max_rows") is None and "max_rows" in data:
        data["max_rows"] = math.inf

    config = replace(base, **data)
    # Fail early on a bad mode rather than at the first drag
    CompactType.parse(config.compact_type)
    return config


def load_config(config_path: Union[str, Path]) -> GridConfig:
    """
    Load a grid configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is a symlink or holds invalid settings
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Grid configuration file not found: {config_path}")

    # Refuse to follow symlinks to unintended files
    if config_path.is_symlink():
        raise ValueError(f"Grid configuration file cannot be a symlink: {config_path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Grid configuration must be a mapping: {config_path}")
    return config_from_dict(data)
