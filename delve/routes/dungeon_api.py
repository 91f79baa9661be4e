"""
project: Delve
module: dungeon_api.py
License: MIT

Dungeon generation API routes.

Every endpoint accepts the generation options either as query string
parameters (GET) or as a JSON body (POST):

    width, height, min_room_size, max_room_size,
    min_partition_size, max_partition_size, seed

``seed`` may be an integer or any string (hashed to a stable integer); when
omitted a random seed is drawn and echoed back so the dungeon can be
requested again. Invalid options produce ``400 {"error": ..., "fields": [...]}``.
"""

import random
import threading

from flask import Blueprint, Response, current_app, jsonify, request

from delve.dungeon import DungeonConfig, DungeonConfigError, DungeonResult, generate_dungeon
from delve.logging_utils import get_logger
from delve.services import spawn_service
from delve.utils.seeds import coerce_seed

log = get_logger("delve.api")

bp_dungeon = Blueprint("dungeon", __name__)

_SPAWN_KEYS = ("tile_size", "min_enemies", "max_enemies")


# Simple in-process cache (seed, config)->DungeonResult. Locked because the dev server may be threaded.
_dungeon_cache = {}
_dungeon_cache_lock = threading.Lock()
_DUNGEON_CACHE_MAX = 8  # small LRU-ish manual cap


def clear_cache():
    with _dungeon_cache_lock:
        _dungeon_cache.clear()


def get_cached_dungeon(config: DungeonConfig) -> DungeonResult:
    if current_app.config.get("DELVE_DISABLE_CACHE"):
        return generate_dungeon(config)
    key = tuple(sorted(config.to_dict().items()))
    with _dungeon_cache_lock:
        result = _dungeon_cache.get(key)
        if result is not None:
            log.debug(event="dungeon_cache_hit", seed=config.seed)
            return result
    result = generate_dungeon(config)
    with _dungeon_cache_lock:
        _dungeon_cache[key] = result
        if len(_dungeon_cache) > _DUNGEON_CACHE_MAX:
            first_key = next(iter(_dungeon_cache.keys()))
            if first_key != key:
                _dungeon_cache.pop(first_key, None)
    return result


def _request_params() -> dict:
    if request.method == "POST":
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DungeonConfigError("request body must be a JSON object")
        return dict(data)
    return request.args.to_dict()


def _config_from_params(params: dict) -> DungeonConfig:
    params = dict(params)
    defaults = current_app.config["DELVE_DUNGEON_DEFAULTS"]
    seed = params.pop("seed", None)
    config = DungeonConfig.from_mapping(params, base=defaults)
    config = config.with_seed(coerce_seed(seed if seed is not None else defaults.seed))
    limit = current_app.config.get("DELVE_MAX_GRID_AREA")
    if limit and config.width * config.height > limit:
        raise DungeonConfigError(
            f"grid {config.width}x{config.height} exceeds the maximum area of {limit} tiles",
            ["width", "height"],
        )
    return config.validate()


@bp_dungeon.route("/api/dungeon/generate", methods=["GET", "POST"])
def dungeon_generate():
    """Generate (or fetch from cache) a dungeon.

    Response: { seed, width, height, tiles: [[int]], rooms: [...], corridors: [...],
                start_room: <room id>, boss_room: <room id>, metrics: {...} }
    """
    config = _config_from_params(_request_params())
    result = get_cached_dungeon(config)
    return jsonify(result.to_dict())


@bp_dungeon.route("/api/dungeon/ascii")
def dungeon_ascii():
    """Return the dungeon as plain text, one line per grid row."""
    config = _config_from_params(_request_params())
    result = get_cached_dungeon(config)
    return Response(result.to_ascii() + "\n", mimetype="text/plain", headers={"X-Dungeon-Seed": str(result.seed)})


@bp_dungeon.route("/api/dungeon/spawns", methods=["GET", "POST"])
def dungeon_spawns():
    """Return the spawn plan for a dungeon.

    Extra options: tile_size (default 16), min_enemies (1), max_enemies (3).
    Response: { seed, start_room, boss_room, plan: { tile_size, player, boss, enemies } }
    """
    params = _request_params()
    spawn_opts = {}
    for key in _SPAWN_KEYS:
        if key in params:
            raw = params.pop(key)
            try:
                spawn_opts[key] = int(raw)
            except (TypeError, ValueError):
                raise DungeonConfigError(f"{key} must be an integer (got {raw!r})", [key]) from None
    config = _config_from_params(params)
    result = get_cached_dungeon(config)
    rng = random.Random(f"spawns:{result.seed}")
    try:
        plan = spawn_service.plan_spawns(result, rng, **spawn_opts)
    except ValueError as e:
        return jsonify({"error": str(e), "fields": list(spawn_opts.keys())}), 400
    return jsonify(
        {
            "seed": result.seed,
            "start_room": result.start_room.id,
            "boss_room": result.boss_room.id,
            "plan": plan.to_dict(),
        }
    )


@bp_dungeon.route("/api/dungeon/defaults")
def dungeon_defaults():
    """Return the effective default generation options."""
    defaults = current_app.config["DELVE_DUNGEON_DEFAULTS"]
    return jsonify(defaults.to_dict())
