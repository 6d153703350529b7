"""
config.py

Simulation settings, loadable from YAML. Example:

    rule_kind: elementary
    rule: 30
    shape: [64]
    iterations: 32
    initial: single
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

RULE_KINDS = {"elementary": 1, "totalistic1d": 1, "totalistic2d": 2}
INITIAL_KINDS = {"single", "random"}
NEIGHBORHOODS = {"moore", "von_neumann"}


@dataclass
class SimulationConfig:
    rule_kind: str = "elementary"
    rule: Union[int, str] = 30
    shape: Tuple[int, ...] = (64,)
    iterations: Optional[int] = 32 # None runs until --max-steps
    keep_history: bool = True
    initial: str = "single"
    density: float = 0.5
    seed: int = 42
    neighborhood: str = "moore"
    radius: int = 1

    def __post_init__(self) -> None:
        self.shape = tuple(self.shape)
        self._validate()

    def _validate(self) -> None:
        if self.rule_kind not in RULE_KINDS:
            raise ValueError(f"rule_kind must be one of {sorted(RULE_KINDS)}, got {self.rule_kind}")
        if len(self.shape) != RULE_KINDS[self.rule_kind]:
            raise ValueError(f"shape must have {RULE_KINDS[self.rule_kind]} entries for {self.rule_kind}, got {self.shape}")
        if any(not isinstance(n, int) or n <= 0 for n in self.shape):
            raise ValueError(f"shape entries must be positive ints, got {self.shape}")
        if self.rule_kind == "elementary" and not (isinstance(self.rule, int) and 0 <= self.rule < 256):
            raise ValueError(f"elementary rule must be an int in [0, 255], got {self.rule!r}")
        if self.iterations is not None and self.iterations <= 0:
            raise ValueError(f"iterations must be > 0 or null, got {self.iterations}")
        if self.initial not in INITIAL_KINDS:
            raise ValueError(f"initial must be one of {sorted(INITIAL_KINDS)}, got {self.initial}")
        if not 0 <= self.density <= 1:
            raise ValueError(f"density must be in [0, 1], got {self.density}")
        if self.neighborhood not in NEIGHBORHOODS:
            raise ValueError(f"neighborhood must be one of {sorted(NEIGHBORHOODS)}, got {self.neighborhood}")
        if self.radius < 1:
            raise ValueError(f"radius must be >= 1, got {self.radius}")
        if self.radius != 1 and self.rule_kind != "totalistic1d":
            raise ValueError(f"radius is only adjustable for totalistic1d rules, got {self.radius}")
        if self.rule_kind != "elementary" and not isinstance(self.rule, (int, str)):
            raise ValueError(f"rule must be an int code or a bit string, got {self.rule!r}")

    @property
    def dimensions(self) -> int:
        return len(self.shape)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["shape"] = list(self.shape)
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SimulationConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"unknown config keys: {sorted(unknown)}")
        d = dict(d)
        if "shape" in d and isinstance(d["shape"], list):
            d["shape"] = tuple(d["shape"])
        return cls(**d)


def load_config(path: Path) -> SimulationConfig:
    settings = yaml.safe_load(Path(path).read_text())
    if not isinstance(settings, dict):
        raise ValueError(f"{path} must hold a mapping of settings")
    return SimulationConfig.from_dict(settings)
