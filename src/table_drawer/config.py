"""Configuration dataclass and YAML loading for table drawing."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional
import yaml

from reportlab.lib.colors import Color, HexColor


@dataclass
class DrawerConfig:
    """Defaults used when building and drawing tables."""

    table_style: str = "CLEAN"
    font_name: Optional[str] = None  # None = the style's font family
    font_size: Optional[float] = None  # None = the style's font size
    word_break: bool = True
    line_spacing: float = 0.2
    border_color: str = "#000000"  # Row border color

    # Demo table contents
    rows: int = 12
    seed: int = 42

    # Page setup
    orientation: str = "portrait"  # "portrait" or "landscape"
    margin: float = 36  # 0.5 inch margins

    # Proportional column weights for the demo table
    column_ratios: List[float] = field(default_factory=lambda: [0.15, 0.45, 0.15, 0.25])

    @property
    def border_rgb(self) -> Color:
        """Border color as a ReportLab color."""
        return HexColor(self.border_color)

    @classmethod
    def from_yaml(cls, path: Path) -> "DrawerConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys in {path}: {', '.join(unknown)}")

        if "column_ratios" in data:
            data["column_ratios"] = [float(r) for r in data["column_ratios"]]

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        data = {item.name: getattr(self, item.name) for item in fields(self)}
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> DrawerConfig:
    """Load config from path or return default config."""
    if path is None:
        return DrawerConfig()
    return DrawerConfig.from_yaml(path)
