"""Generation parameters and their upfront validation.

A DungeonConfig is validated once, before any grid is allocated. Every later
phase assumes the bounds checked here hold, so none of them clamp or retry.
"""

import os
import random
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .errors import DungeonConfigError

# Root partition is inset by this many tiles on every side
BORDER = 1
# Rooms keep this many tiles between themselves and their partition edge
ROOM_MARGIN = 1
# Upper bound for seeds drawn when the caller supplies none
SEED_DRAW_MAX = 2**31 - 1

_INT_RE = re.compile(r"-?[0-9]+")

_ENV_KEYS = {
    "width": "DELVE_DUNGEON_WIDTH",
    "height": "DELVE_DUNGEON_HEIGHT",
    "min_room_size": "DELVE_MIN_ROOM_SIZE",
    "max_room_size": "DELVE_MAX_ROOM_SIZE",
    "min_partition_size": "DELVE_MIN_PARTITION_SIZE",
    "max_partition_size": "DELVE_MAX_PARTITION_SIZE",
    "seed": "DELVE_DUNGEON_SEED",
}


@dataclass
class DungeonConfig:
    width: int = 80
    height: int = 80
    min_room_size: int = 6
    max_room_size: int = 14
    min_partition_size: int = 10
    max_partition_size: int = 25
    seed: Optional[int] = None

    @property
    def inset_width(self) -> int:
        return self.width - 2 * BORDER

    @property
    def inset_height(self) -> int:
        return self.height - 2 * BORDER

    def validate(self) -> "DungeonConfig":
        """Raise DungeonConfigError if this config cannot yield valid geometry.

        Checks, in order:
          * all sizes are positive integers
          * max_partition_size > min_partition_size
          * max_room_size >= min_room_size
          * a room (plus its margin) fits in the smallest partition a split can produce
          * the inset area can host at least one room with its margin
          * max_room_size (plus its margin) fits inside the inset area

        A max_partition_size larger than the inset area is accepted: the root
        is simply never split and hosts a single room.
        Returns self so calls can be chained.
        """
        for name in ("width", "height", "min_room_size", "max_room_size", "min_partition_size", "max_partition_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise DungeonConfigError(f"{name} must be an integer (got {value!r})", [name])
            if value <= 0:
                raise DungeonConfigError(f"{name} must be positive (got {value})", [name])
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise DungeonConfigError(f"seed must be an integer or None (got {self.seed!r})", ["seed"])
        if self.max_partition_size <= self.min_partition_size:
            raise DungeonConfigError(
                f"max_partition_size ({self.max_partition_size}) must be greater than "
                f"min_partition_size ({self.min_partition_size})",
                ["min_partition_size", "max_partition_size"],
            )
        if self.max_room_size < self.min_room_size:
            raise DungeonConfigError(
                f"max_room_size ({self.max_room_size}) must be at least min_room_size ({self.min_room_size})",
                ["min_room_size", "max_room_size"],
            )
        if self.min_room_size + 2 * ROOM_MARGIN > self.min_partition_size:
            raise DungeonConfigError(
                f"min_room_size ({self.min_room_size}) plus a {ROOM_MARGIN}-tile margin on each side does not fit "
                f"in a partition of min_partition_size ({self.min_partition_size})",
                ["min_room_size", "min_partition_size"],
            )
        smallest = min(self.inset_width, self.inset_height)
        if smallest < self.min_room_size + 2 * ROOM_MARGIN:
            needed = self.min_room_size + 2 * ROOM_MARGIN + 2 * BORDER
            raise DungeonConfigError(
                f"grid {self.width}x{self.height} is too small to host one room; "
                f"width and height must both be at least {needed}",
                ["width", "height"],
            )
        largest = max(self.inset_width, self.inset_height)
        if self.max_room_size + 2 * ROOM_MARGIN > largest:
            raise DungeonConfigError(
                f"max_room_size ({self.max_room_size}) does not fit in the {self.inset_width}x{self.inset_height} "
                f"area inside the border",
                ["max_room_size"],
            )
        return self

    def with_seed(self, seed: Optional[int]) -> "DungeonConfig":
        return replace(self, seed=seed)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["DungeonConfig"] = None) -> "DungeonConfig":
        """Build a config from request parameters or parsed JSON.

        Missing keys fall back to ``base`` (or the dataclass defaults). Values
        may be ints or numeric strings; anything else is a DungeonConfigError.
        ``seed`` is copied through untouched so callers can coerce it themselves.
        """
        base = base or cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in data.keys() if k not in known)
        if unknown:
            raise DungeonConfigError(f"unknown config option(s): {', '.join(unknown)}", unknown)
        values: Dict[str, Any] = {}
        for name in known:
            if name not in data or data[name] is None:
                continue
            if name == "seed":
                values[name] = data[name]
                continue
            values[name] = _coerce_int(name, data[name])
        return replace(base, **values)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DungeonConfig":
        """Build a config from ``DELVE_*`` environment variables (unset ones keep defaults).

        ``DELVE_DUNGEON_SEED`` accepts the same forms as the API and CLI seed
        (an integer or any phrase).
        """
        from ..utils.seeds import coerce_seed

        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for name, key in _ENV_KEYS.items():
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            values[name] = coerce_seed(raw) if name == "seed" else _coerce_int(key, raw)
        return cls(**values)


def draw_seed() -> int:
    """Fresh seed for runs that were not given one (global random, never the run's rng)."""
    return random.randint(0, SEED_DRAW_MAX)


def _coerce_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise DungeonConfigError(f"{name} must be an integer (got {value!r})", [name])
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value.strip())
    raise DungeonConfigError(f"{name} must be an integer (got {value!r})", [name])


__all__ = ["DungeonConfig", "BORDER", "ROOM_MARGIN", "SEED_DRAW_MAX", "draw_seed"]
