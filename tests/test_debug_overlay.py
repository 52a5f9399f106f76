import pytest

from frostarena.character import Character
from frostarena.debug_overlay import DebugOverlay, describe_player
from frostarena.items import Point, Rect
from frostarena.maps import Obstacle, ObstacleType

SCENE = Rect(0, 0, 1280, 720)


def _obstacles(count=1):
    return [
        Obstacle(ObstacleType.RECTANGLE, Rect(10 + 100 * i, 20, 30, 40)) for i in range(count)
    ]


def _player(x=100.0, y=200.0):
    player = Character()
    player.pos = Point(x, y)
    return player


def test_show_creates_visible_static_shapes():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, _obstacles())
    z_values = {shape.z_value for shape in overlay.shapes}
    assert {100, 101, 150, 151, 200, 201, 202} <= z_values
    assert overlay.visible_shapes() == overlay.shapes


def test_each_obstacle_adds_box_and_label():
    one = DebugOverlay()
    one.show(SCENE, 600, _obstacles(1))
    two = DebugOverlay()
    two.show(SCENE, 600, _obstacles(2))
    assert len(two.shapes) - len(one.shapes) == 2


def test_obstacle_label_text():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, _obstacles())
    labels = [s.text for s in overlay.shapes if s.z_value == 151]
    assert labels == ["Obstacle 0\n(10.0,20.0)\n30.0x40.0"]


def test_floor_label_and_line():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, [])
    floor_label = next(s for s in overlay.shapes if s.z_value == 101)
    assert floor_label.text == "Floor Height: 600"
    line = next(s for s in overlay.shapes if s.kind == "line")
    assert line.line == (Point(0, 600), Point(SCENE.width, 600))


def test_show_twice_does_not_duplicate():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, _obstacles())
    count = len(overlay.shapes)
    overlay.show(SCENE, 600, _obstacles())
    assert len(overlay.shapes) == count


def test_hide_then_show_restores_all():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, _obstacles())
    overlay.hide()
    assert overlay.visible_shapes() == []
    assert overlay.visible is False
    overlay.show(SCENE, 600, _obstacles())
    assert overlay.visible_shapes() == overlay.shapes


def test_toggle_flips_visibility():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, [])
    assert overlay.toggle(SCENE, 600, []) is False
    assert overlay.visible_shapes() == []
    assert overlay.toggle(SCENE, 600, []) is True
    assert len(overlay.visible_shapes()) == len(overlay.shapes)


def test_describe_player():
    player = _player()
    player.velocity = Point(0.5, 0)
    player.velocity_y = 1.25
    assert describe_player("Player1", player) == (
        "Player1\nPos: (100.0, 200.0)\nVel: (0.50, 1.25)\nOnGround: Yes\n"
        "Head: (100.0,200.0)\nBody: (100.0,200.0)"
    )


def test_describe_player_airborne():
    player = _player()
    player.on_ground = False
    assert "OnGround: No" in describe_player("Player2", player)


def test_update_adds_player_shapes_without_accumulating():
    overlay = DebugOverlay()
    overlay.show(SCENE, 600, _obstacles())
    static = len(overlay.shapes)
    overlay.update([_player(), _player(500, 300)])
    dynamic = [s for s in overlay.shapes if 160 <= s.z_value <= 162]
    assert len(dynamic) == 8
    overlay.update([_player(), _player(500, 300)])
    assert len(overlay.shapes) == static + 8


def test_update_skips_missing_player():
    overlay = DebugOverlay()
    overlay.update([None, _player()])
    labels = [s.text for s in overlay.shapes if s.z_value == 162]
    assert len(labels) == 1
    assert labels[0].startswith("Player2")


def test_update_boxes_follow_player_position():
    player = _player(300, 400)
    overlay = DebugOverlay()
    overlay.update([player])
    boxes = [s.rect for s in overlay.shapes if s.z_value == 160]
    assert boxes == [
        player.head_collision_rect.translated(300, 400),
        player.body_collision_rect.translated(300, 400),
    ]
    centre = next(s for s in overlay.shapes if s.kind == "ellipse")
    assert centre.rect.center() == Point(300, 400)


@pytest.mark.parametrize("index,offset", [(0, Point(50, -120)), (1, Point(-200, -120))])
def test_label_offsets(index, offset):
    players = [None, None]
    players[index] = _player(600, 500)
    overlay = DebugOverlay()
    overlay.update(players)
    label = next(s for s in overlay.shapes if s.z_value == 162)
    assert label.rect.top_left() == Point(600, 500) + offset