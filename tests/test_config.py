import json
import logging

import pytest

from gumshoe.config import GameConfig
from gumshoe.layout import DEFAULT_LAYOUT
from gumshoe.pools import DEFAULT_PACK


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults():
    config = GameConfig()
    assert config.npc_count == 7
    assert config.message_limit == 20
    assert config.layout() is DEFAULT_LAYOUT
    assert config.content_pack() is DEFAULT_PACK


def test_load_resolves_relative_paths(tmp_path):
    _write(tmp_path / "house.json", {"rooms": [{"id": "den"}]})
    _write(tmp_path / "cast.json", {
        "npcs": [{"name": "Ada", "gender": "female"}, {"name": "Bob", "gender": "male"}],
        "weapons": [{"name": "Rope", "description": "Hemp."}],
    })
    config = GameConfig.load(_write(tmp_path / "game.json", {
        "npc_count": 2,
        "seed": "5",
        "layout": "house.json",
        "content_pack": "cast.json",
        "debug": True,
    }))
    assert config.seed == 5
    assert config.debug
    assert config.layout_path == tmp_path.resolve() / "house.json"
    assert config.layout().name == "house"
    assert [npc.name for npc in config.content_pack().npcs] == ["Ada", "Bob"]


def test_unreachable_rooms_are_logged(tmp_path, caplog):
    _write(tmp_path / "house.json", {
        "starting_room": "den",
        "rooms": [{"id": "den"}, {"id": "vault"}],
    })
    config = GameConfig.load(_write(tmp_path / "game.json", {"layout": "house.json"}))
    with caplog.at_level(logging.WARNING, logger="gumshoe.config"):
        config.layout()
    assert "vault" in caplog.text


@pytest.mark.parametrize("raw", [{"npc_count": 1}, {"message_limit": 0}])
def test_invalid_values_rejected(raw):
    with pytest.raises(ValueError):
        GameConfig.from_dict(raw)


def test_bad_gender_in_pack_rejected(tmp_path):
    _write(tmp_path / "cast.json", {"npcs": [{"name": "Ada", "gender": "robot"}]})
    config = GameConfig.load(_write(tmp_path / "game.json", {"content_pack": "cast.json"}))
    with pytest.raises(ValueError):
        config.content_pack()
