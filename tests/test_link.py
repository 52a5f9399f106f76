import pytest

from frostarena.equipment import CapOfTheHero, OldShirt, WellWornTrousers
from frostarena.items import Point
from frostarena.link import (
    CROUCH_PIXMAP,
    JUMP_PIXMAP,
    STAND_PIXMAP,
    WALK_PIXMAPS,
    Link,
)
from frostarena.weapons import ShabbyPistol


def _link(**kwargs):
    return Link(pixmap_size=(1000, 1000), clock=lambda: 10_000, **kwargs)


def test_starts_standing_and_facing_right():
    link = _link()
    assert link.face_right is True
    assert link.pixmap_path == STAND_PIXMAP
    assert link.pixmap_scale == 0.3
    assert link.pixmap_offset == Point(-130, -225)
    assert link.on_ground is True


def test_starts_fully_equipped():
    link = _link()
    assert isinstance(link.head_equipment, CapOfTheHero)
    assert isinstance(link.leg_equipment, WellWornTrousers)
    assert isinstance(link.armor, OldShirt)
    assert isinstance(link.weapon, ShabbyPistol)
    for item in (link.head_equipment, link.leg_equipment, link.armor, link.weapon):
        assert item.is_mounted()
        assert item.parent is link
    assert link.armor.pos == Point(-59, -176)
    assert link.can_shoot() is True


def test_collision_rect_proportions():
    link = _link()
    head, body = link.head_collision_rect, link.body_collision_rect
    assert head.width == pytest.approx(2 * body.width)
    assert head.y < body.y
    assert link.bounding_rect().width >= head.width


def test_turning_sets_mirror_transform():
    link = _link()
    link.turn_face_left()
    assert link.face_right is False
    assert link.transform == (-1.0, 1.0)
    link.turn_face_left()
    assert link.transform == (-1.0, 1.0)
    link.turn_face_right()
    assert link.face_right is True
    assert link.transform == (1.0, 1.0)


def test_walk_left_on_ground():
    link = _link()
    link.left_down = True
    link.process_input()
    assert link.velocity.x == -link.move_speed
    assert link.face_right is False


def test_walk_right_on_ground():
    link = _link()
    link.turn_face_left()
    link.right_down = True
    link.process_input()
    assert link.velocity.x == link.move_speed
    assert link.face_right is True


def test_crouch_stops_on_ground():
    link = _link()
    link.velocity = Point(0.5, 0.2)
    link.down_down = True
    link.process_input()
    assert link.velocity == Point(0, 0)
    assert link.pixmap_path == CROUCH_PIXMAP


def test_crouch_in_air_keeps_horizontal_speed():
    link = _link()
    link.on_ground = False
    link.velocity = Point(0.5, 0.2)
    link.down_down = True
    link.process_input()
    assert link.velocity == Point(0.5, 0)


def test_air_control_is_halved():
    link = _link()
    link.on_ground = False
    link.left_down = True
    link.process_input()
    assert link.velocity.x == pytest.approx(-link.move_speed * 0.5)
    assert link.pixmap_path == JUMP_PIXMAP


def test_up_key_jumps():
    link = _link()
    link.up_down = True
    link.process_input()
    assert link.on_ground is False
    assert link.velocity_y == pytest.approx(-2.25)
    assert link.pixmap_path == JUMP_PIXMAP


def test_idle_keeps_velocity_for_friction():
    link = _link()
    link.velocity = Point(0.4, 0)
    link.process_input()
    assert link.velocity == Point(0.4, 0)
    assert link.pixmap_path == STAND_PIXMAP


def test_walk_animation_switches_frames_each_interval():
    link = _link()
    link.process_walk_animation(50)
    assert link.current_walk_frame == 0
    link.process_walk_animation(50)
    assert link.current_walk_frame == 1
    assert link.pixmap_path == WALK_PIXMAPS[1]
    assert link.walk_elapsed_ms == 0
    link.process_walk_animation(100)
    assert link.current_walk_frame == 0
    assert link.pixmap_path == WALK_PIXMAPS[0]


def test_update_animation_walks_when_moving():
    link = _link()
    link.right_down = True
    link.update_animation(100)
    assert link.current_walk_frame == 1


def test_update_animation_resets_when_idle():
    link = _link()
    link.right_down = True
    link.update_animation(100)
    link.right_down = False
    link.update_animation(16)
    assert link.current_walk_frame == 0
    assert link.walk_elapsed_ms == 0
    assert link.pixmap_path == STAND_PIXMAP
    link.down_down = True
    link.update_animation(16)
    assert link.pixmap_path == CROUCH_PIXMAP


def test_update_animation_leaves_air_pose():
    link = _link()
    link.on_ground = False
    link.set_jump_pixmap()
    link.update_animation(100)
    assert link.pixmap_path == JUMP_PIXMAP