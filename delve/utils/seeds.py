"""Seed normalisation shared by the HTTP API, the CLI and env defaults.

Accepts ints, digit strings and free-form strings ("crypt-of-bones") and
turns them into a bounded non-negative 63-bit integer. Free-form strings are
hashed with SHA-256 so the same phrase always yields the same dungeon.
"""

from __future__ import annotations

import hashlib

from delve.dungeon.config import draw_seed
from delve.dungeon.errors import DungeonConfigError

SEED_MAX = 2**63 - 1


def coerce_seed(payload_seed) -> int:
    """Convert a provided seed (int, str or None) into a bounded int.

    None or a blank string draws a fresh seed with ``draw_seed``. Only ASCII
    digit strings are read as numbers; anything else is hashed.
    """
    if payload_seed is None:
        return draw_seed()
    if isinstance(payload_seed, bool):
        raise DungeonConfigError(f"seed must be an integer or string (got {payload_seed!r})", ["seed"])
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return draw_seed()
        if s.isascii() and s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise DungeonConfigError(f"seed must be an integer or string (got {payload_seed!r})", ["seed"])
