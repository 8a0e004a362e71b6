import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "CAVERN_"
_FALSE_VALUES = {"0", "false", "no", ""}


@dataclass
class DungeonConfig:
    width: int = 80
    height: int = 40
    wall_percent: int = 28
    smoothing_iterations: int = 4
    seed: Optional[int] = None
    verify_connectivity: bool = True
    max_bridge_rounds: int = 4
    enable_metrics: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "DungeonConfig":
        """Build a config from CAVERN_* environment variables.

        Field names map to upper-case variables (``wall_percent`` ->
        ``CAVERN_WALL_PERCENT``). Keyword overrides take precedence over the
        environment; anything unset keeps the dataclass default.
        """
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            if key not in env:
                continue
            raw = env[key]
            if f.name in ("verify_connectivity", "enable_metrics"):
                values[f.name] = raw.strip().lower() not in _FALSE_VALUES
                continue
            if f.name == "seed" and raw.strip() == "":
                values[f.name] = None
                continue
            try:
                values[f.name] = int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}") from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = ["DungeonConfig", "ENV_PREFIX"]
