import os
from dataclasses import dataclass
from typing import Optional

MAX_DOORS = 10
FOV_RADIUS = 3


def _env_flag(value: str) -> bool:
    return value.lower() not in {"0", "false", "no", ""}


@dataclass
class StationConfig:
    seed: Optional[int] = None
    fov_radius: int = FOV_RADIUS
    max_doors: int = MAX_DOORS
    enable_metrics: bool = True

    @classmethod
    def from_env(cls, **overrides) -> "StationConfig":
        """Build a config from ``STATION_*`` environment variables.

        Explicit keyword overrides win over the environment.
        """
        cfg = cls()
        env_map = {
            "STATION_SEED": ("seed", int),
            "STATION_FOV_RADIUS": ("fov_radius", int),
            "STATION_MAX_DOORS": ("max_doors", int),
            "STATION_ENABLE_METRICS": ("enable_metrics", _env_flag),
        }
        for env_key, (attr, convert) in env_map.items():
            raw = os.environ.get(env_key)
            if raw is None or raw.strip() == "":
                continue
            setattr(cfg, attr, convert(raw.strip()))
        for attr, value in overrides.items():
            if value is not None:
                setattr(cfg, attr, value)
        return cfg


__all__ = ["StationConfig", "MAX_DOORS", "FOV_RADIUS"]
