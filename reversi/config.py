# reversi/config.py
from dataclasses import dataclass, field
from typing import List
import os
import tomllib

# Positional weights, row-major (y, x). Corners high, X/C squares negative.
POSITION_WEIGHTS = [
    [120, -20, 20, 5, 5, 20, -20, 120],
    [-20, -40, -5, -5, -5, -5, -40, -20],
    [20, -5, 15, 3, 3, 15, -5, 20],
    [5, -5, 3, 3, 3, 3, -5, 5],
    [5, -5, 3, 3, 3, 3, -5, 5],
    [20, -5, 15, 3, 3, 15, -5, 20],
    [-20, -40, -5, -5, -5, -5, -40, -20],
    [120, -20, 20, 5, 5, 20, -20, 120],
]

@dataclass
class SearchConfig:
    depth: int = 3
    min_depth: int = 1
    max_depth: int = 5
    workers: int = 1

@dataclass
class EvalConfig:
    weights: List[List[int]] = field(default_factory=lambda: [row[:] for row in POSITION_WEIGHTS])

@dataclass
class SessionConfig:
    black: str = "human"      # "human" | "computer"
    white: str = "computer"

@dataclass
class UIConfig:
    engine_name: str = "Reversi"

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "config.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "session", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg

    def clamp_depth(self, depth: int) -> int:
        return max(self.search.min_depth, min(self.search.max_depth, int(depth)))

# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("REVERSI_CONFIG_TOML", "config.toml"))
# allow env override of depth for quick debugging
try:
    override_depth = os.environ.get("REVERSI_SEARCH_DEPTH")
    if override_depth:
        CONFIG.search.depth = CONFIG.clamp_depth(int(override_depth))
except ValueError:
    pass
