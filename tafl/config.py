from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

REPORT_FORMATS = ("text", "json")


@dataclass
class GameConfig:
    layout_path: Optional[str] = None
    report_path: Optional[str] = None
    report_format: str = "text"
    max_ply: int = 400

    def __post_init__(self) -> None:
        if self.report_format not in REPORT_FORMATS:
            raise ValueError(f"report_format must be one of {REPORT_FORMATS}, got {self.report_format!r}.")
        if self.max_ply <= 0:
            raise ValueError("max_ply must be positive.")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GameConfig":
        cfg = yaml.safe_load(Path(path).read_text()) or {}
        return cls.from_dict(cfg)

    def merged(self, **overrides: Any) -> "GameConfig":
        """Return a copy with every non-None override applied."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data.update({key: value for key, value in overrides.items() if value is not None})
        return GameConfig.from_dict(data)
