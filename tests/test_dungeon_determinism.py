import random

from delve.dungeon import DungeonConfig, DungeonGenerator, generate_dungeon


def test_same_seed_same_dungeon():
    cfg = DungeonConfig(seed=12345)
    a = generate_dungeon(cfg)
    b = generate_dungeon(cfg)
    assert a.grid == b.grid
    assert a.rooms == b.rooms
    assert a.corridors == b.corridors
    assert (a.start_room, a.boss_room) == (b.start_room, b.boss_room)


def test_different_seeds_usually_differ():
    grids = {generate_dungeon(DungeonConfig(seed=s)).to_ascii() for s in range(5)}
    assert len(grids) > 1


def test_injected_rng_matches_seeded_run():
    cfg = DungeonConfig(width=60, height=40, max_partition_size=20)
    a = generate_dungeon(cfg, rng=random.Random(77))
    b = generate_dungeon(cfg.with_seed(77))
    assert a.grid == b.grid
    assert a.rooms == b.rooms


def test_global_random_state_untouched():
    random.seed(2024)
    expected = random.random()
    random.seed(2024)
    generate_dungeon(DungeonConfig(seed=5))
    assert random.random() == expected


def test_missing_seed_is_drawn_and_recorded():
    gen = DungeonGenerator(DungeonConfig())
    assert isinstance(gen.seed, int)
    res = gen.generate()
    assert res.seed == gen.seed
    replay = generate_dungeon(DungeonConfig(seed=res.seed))
    assert replay.grid == res.grid
