import json
import os

import pygame

import main

CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config", "procgen_config.json")


def test_rooms_only_prints_grid(capsys):
    assert main.main(["--seed", "3", "--config", CONFIG_PATH, "--rooms-only"]) == 0
    out = capsys.readouterr().out.splitlines()

    assert out[0] == "Seed: 3"
    grid = out[2:]
    assert len(grid) == 4
    assert sum(line.count("[") for line in grid) == 1
    assert "[" in grid[0]


def test_full_dump_includes_perimeter_and_player(capsys):
    assert main.main(["--seed", "3", "--config", CONFIG_PATH, "--width", "2", "--height", "2"]) == 0
    out = capsys.readouterr().out.splitlines()

    dump = out[out.index("") + 1:]
    assert len(dump) == 4 * 16
    assert all(len(row) == 4 * 16 for row in dump)
    assert dump[0] == "#" * 64
    assert sum(row.count("P") for row in dump) == 1


def test_json_output(capsys):
    assert main.main(["--seed", "12", "--config", CONFIG_PATH, "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 12
    assert len(data["room_types"]) == 4


def test_invalid_size_exits_with_error():
    assert main.main(["--seed", "1", "--config", CONFIG_PATH, "--width", "0"]) == 1


def test_one_way_tiles_draw_as_ledges():
    assert main.tile_draw_rect(12, 6, 8, "one_way") == pygame.Rect(12, 6, 8, 2)
    assert main.tile_draw_rect(12, 6, 8, "full") == pygame.Rect(12, 6, 8, 8)


def test_malformed_spawn_origin_exits_with_error(tmp_path):
    path = tmp_path / "procgen.json"
    path.write_text(json.dumps({"procgen_config": {"spawn_search_origin": [1]}}), encoding="utf-8")
    assert main.main(["--seed", "1", "--config", str(path), "--rooms-only"]) == 1


def test_string_size_in_config_exits_with_error(tmp_path):
    path = tmp_path / "procgen.json"
    path.write_text(json.dumps({"procgen_config": {"level_width": "4"}}), encoding="utf-8")
    assert main.main(["--seed", "1", "--config", str(path), "--rooms-only"]) == 1
