import json

import pytest

from spriteengine.scene import (
    SceneDescription,
    SceneFormatError,
    SceneObject,
    load_scene,
    save_scene,
)


def _write(path, doc):
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


def test_round_trip(tmp_path):
    sprite = tmp_path / "hero.png"
    sprite.write_bytes(b"")
    scene = SceneDescription(
        "Level",
        [
            SceneObject("hero", 1.5, 2.0, 32.0, 48.0, sprite.as_posix(), 45.0, 2.0, 0.5),
            SceneObject("wall", -3.0, 4.0, 10.0, 10.0),
        ],
    )
    path = tmp_path / "scene.json"
    save_scene(scene, path)
    assert load_scene(path) == scene


def test_saved_format_uses_sorted_keys_and_indent(tmp_path):
    path = tmp_path / "scene.json"
    save_scene(SceneDescription("S", [SceneObject("a")]), path)
    text = path.read_text(encoding="utf-8")
    assert text.startswith('{\n    "objects": [')
    doc = json.loads(text)
    assert list(doc["objects"][0]) == sorted(doc["objects"][0])
    assert doc["sceneName"] == "S"


def test_empty_scene_has_no_objects_key(tmp_path):
    path = tmp_path / "empty.json"
    save_scene(SceneDescription("Empty"), path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"sceneName": "Empty"}
    assert load_scene(path) == SceneDescription("Empty", [])


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_scene(tmp_path / "nope.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_scene(path)


def test_missing_scene_name_raises(tmp_path):
    path = _write(tmp_path / "s.json", {"objects": []})
    with pytest.raises(SceneFormatError):
        load_scene(path)


def test_missing_object_field_raises(tmp_path):
    path = _write(
        tmp_path / "s.json",
        {"sceneName": "S", "objects": [{"name": "a", "x": 1, "y": 2, "width": 3}]},
    )
    with pytest.raises(SceneFormatError):
        load_scene(path)


def test_optional_fields_take_defaults(tmp_path):
    path = _write(
        tmp_path / "s.json",
        {
            "sceneName": "S",
            "objects": [{"name": "a", "x": 1, "y": 2, "width": 3, "height": 4}],
        },
    )
    obj = load_scene(path).objects[0]
    assert obj.sprite_path == ""
    assert obj.rotation == 0.0
    assert (obj.scale_x, obj.scale_y) == (1.0, 1.0)


def test_null_sprite_path_becomes_empty(tmp_path):
    path = _write(
        tmp_path / "s.json",
        {
            "sceneName": "S",
            "objects": [
                {"name": "a", "x": 0, "y": 0, "width": 1, "height": 1, "spritePath": None}
            ],
        },
    )
    assert load_scene(path).objects[0].sprite_path == ""


def test_backslashes_in_sprite_path_are_normalized(tmp_path):
    path = _write(
        tmp_path / "s.json",
        {
            "sceneName": "S",
            "objects": [
                {
                    "name": "a",
                    "x": 0,
                    "y": 0,
                    "width": 1,
                    "height": 1,
                    "spritePath": "assets\\images\\box.png",
                }
            ],
        },
    )
    assert load_scene(path).objects[0].sprite_path == "assets/images/box.png"


def test_integer_coordinates_load_as_floats(tmp_path):
    path = _write(
        tmp_path / "s.json",
        {"sceneName": "S", "objects": [{"name": "a", "x": 7, "y": 8, "width": 9, "height": 10}]},
    )
    obj = load_scene(path).objects[0]
    assert (obj.x, obj.y, obj.width, obj.height) == (7.0, 8.0, 9.0, 10.0)
    assert isinstance(obj.x, float)