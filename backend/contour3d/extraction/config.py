# backend/contour3d/extraction/config.py
import json
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Mapping, Tuple

from .errors import ConfigError

MORPH_SHAPES = ("ellipse", "rect")
POLARITIES = ("dark", "light")
FILL_SEEDS = ("corner", "border")


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Tunables for the mask / contour stages.

    Defaults reproduce the capture station setup: dark target on a light
    surface, 3x3 box blur, cutoff 60, elliptical closing of radius 2.
    """
    threshold: int = 60
    blur_ksize: int = 3
    morph_radius: int = 2
    morph_shape: str = "ellipse"
    polarity: str = "dark"
    fill_seed: str = "corner"
    highlight_rgb: Tuple[int, int, int] = (230, 200, 230)
    line_width: int = 2

    def __post_init__(self):
        if not 0 <= self.threshold <= 255:
            raise ConfigError(f"threshold must be in 0..255, got {self.threshold}")
        if self.blur_ksize < 1 or self.blur_ksize % 2 == 0:
            raise ConfigError(f"blur_ksize must be a positive odd number, got {self.blur_ksize}")
        if self.morph_radius < 0:
            raise ConfigError(f"morph_radius must be >= 0, got {self.morph_radius}")
        if self.morph_shape not in MORPH_SHAPES:
            raise ConfigError(f"morph_shape must be one of {MORPH_SHAPES}, got {self.morph_shape!r}")
        if self.polarity not in POLARITIES:
            raise ConfigError(f"polarity must be one of {POLARITIES}, got {self.polarity!r}")
        if self.fill_seed not in FILL_SEEDS:
            raise ConfigError(f"fill_seed must be one of {FILL_SEEDS}, got {self.fill_seed!r}")
        if len(self.highlight_rgb) != 3 or any(not 0 <= c <= 255 for c in self.highlight_rgb):
            raise ConfigError(f"highlight_rgb must be three values in 0..255, got {self.highlight_rgb}")
        if self.line_width < 1:
            raise ConfigError(f"line_width must be >= 1, got {self.line_width}")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "ExtractionConfig":
        """Build a config from a plain mapping; None values keep the default."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"unknown config keys: {sorted(unknown)}")
        kwargs = {k: v for k, v in values.items() if v is not None}
        try:
            if "highlight_rgb" in kwargs:
                kwargs["highlight_rgb"] = tuple(int(c) for c in kwargs["highlight_rgb"])
            return cls(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise ConfigError(str(e)) from e

    def with_overrides(self, **overrides) -> "ExtractionConfig":
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_json(self) -> str:
        return json.dumps(asdict(self))
