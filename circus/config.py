from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional

from .errors import ConfigurationError

ENV_PREFIX = "CIRCUS_"


@dataclass(frozen=True)
class EngineConfig:
    """Tunables for the board, the turn loop and the search.

    Every field can be overridden from the environment as ``CIRCUS_<FIELD>``,
    e.g. ``CIRCUS_PRUNE_MARGIN=80``.
    """

    rows: int = 9
    cols: int = 12
    houses_count: int = 13
    max_steps: int = 300

    # Search
    prune_margin: int = 12
    search_budget: int = 1000
    max_depth: int = 3

    # Opening heuristics
    near_goal_distance: int = 2

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        environ = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            try:
                overrides[f.name] = int(raw)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{ENV_PREFIX}{f.name.upper()} must be an integer",
                    context={"value": raw},
                ) from exc
        return cls(**overrides).validate()

    def with_overrides(self, **overrides: Optional[int]) -> "EngineConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None}).validate()

    def validate(self) -> "EngineConfig":
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError("grid extent must be positive", context={"rows": self.rows, "cols": self.cols})
        # Tokens are a single letter and a single character per axis
        if self.rows > 26:
            raise ConfigurationError("at most 26 rows can be encoded", context={"rows": self.rows})
        for name in ("houses_count", "max_steps", "prune_margin", "search_budget", "max_depth", "near_goal_distance"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative", context={name: getattr(self, name)})
        return self


DEFAULT_CONFIG = EngineConfig()
