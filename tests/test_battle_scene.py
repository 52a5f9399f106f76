import pytest

from frostarena.battle_scene import BattleScene, pickup_mountable
from frostarena.equipment import FlamebreakerArmor, HelmetOfThePaladin, OldShirt
from frostarena.items import Point
from frostarena.maps import Battlefield
from frostarena.scene import Key


@pytest.fixture
def scene():
    return BattleScene(battlefield=Battlefield(pixmap_size=(1280, 720)))


def test_construction_places_everything(scene):
    items = scene.items()
    assert scene.map in items
    assert scene.character in items
    assert scene.spare_armor in items
    assert scene.character.pos == scene.map.spawn_pos()
    assert isinstance(scene.spare_armor, FlamebreakerArmor)
    assert not scene.spare_armor.is_mounted()
    assert scene.spare_armor.pos.y == pytest.approx(scene.map.floor_height())
    assert scene.spare_armor.pos.x > scene.character.pos.x


def test_scene_rect_matches_map(scene):
    assert (scene.width, scene.height) == (1280, 720)
    rect = scene.map.scene_bounding_rect()
    assert rect.width == pytest.approx(scene.width)
    assert rect.height == pytest.approx(scene.height)


def test_keys_set_and_clear_movement_flags(scene):
    character = scene.character
    scene.key_press(Key.A)
    scene.key_press(Key.D)
    assert character.left_down and character.right_down
    scene.key_release(Key.A)
    scene.key_release(Key.D)
    assert not character.left_down and not character.right_down


def test_s_key_crouches_and_picks(scene):
    character = scene.character
    scene.key_press(Key.S)
    assert character.pick_down and character.down_down
    scene.key_release(Key.S)
    assert not character.pick_down and not character.down_down


def test_other_keys_leave_flags_alone(scene):
    character = scene.character
    scene.key_press(Key.J)
    scene.key_press(Key.W)
    flags = (
        character.left_down,
        character.right_down,
        character.pick_down,
        character.down_down,
        character.up_down,
    )
    assert flags == (False, False, False, False, False)


def test_movement_follows_velocity_and_delta(scene):
    character = scene.character
    scene.update(1000)
    start = character.pos
    character.velocity = Point(0.5, 0.0)
    scene.update(1010)
    assert character.pos.x - start.x == pytest.approx(0.5 * 10)
    assert character.pos.y == pytest.approx(start.y)


def test_picking_up_spare_armor_swaps_armor(scene):
    character = scene.character
    spare = scene.spare_armor
    old_armor = character.armor
    character.pos = spare.pos + Point(10, 0)
    scene.key_press(Key.S)
    scene.update(0)
    assert character.armor is spare
    assert spare.is_mounted()
    assert spare.parent is character
    assert isinstance(old_armor, OldShirt)
    assert scene.spare_armor is old_armor
    assert not old_armor.is_mounted()
    assert old_armor.parent is None
    assert old_armor in scene.items()


def test_holding_pick_key_picks_only_once(scene):
    character = scene.character
    spare = scene.spare_armor
    character.pos = spare.pos
    scene.key_press(Key.S)
    scene.update(0)
    dropped = scene.spare_armor
    scene.update(10)
    assert character.armor is spare
    assert scene.spare_armor is dropped


def test_far_armor_is_not_picked(scene):
    character = scene.character
    old_armor = character.armor
    scene.key_press(Key.S)
    scene.update(0)
    assert character.armor is old_armor
    assert not scene.spare_armor.is_mounted()


def test_find_nearest_respects_threshold_and_distance(scene):
    spare = scene.spare_armor
    closer = FlamebreakerArmor()
    scene.add_item(closer)
    closer.unmount()
    closer.pos = Point(100, 100)
    assert scene.find_nearest_unmounted_mountable(Point(110, 100)) is closer
    assert scene.find_nearest_unmounted_mountable(spare.pos) is spare
    assert scene.find_nearest_unmounted_mountable(Point(110, 100), 5.0) is None


def test_find_nearest_ignores_mounted_items(scene):
    character = scene.character
    spare = scene.spare_armor
    found = scene.find_nearest_unmounted_mountable(character.pos)
    assert found is spare


def test_pickup_mountable_only_takes_armor(scene):
    character = scene.character
    helmet = HelmetOfThePaladin()
    previous = character.head_equipment
    assert pickup_mountable(character, helmet) is None
    assert character.head_equipment is previous
    assert not helmet.is_mounted()


def test_pickup_mountable_returns_old_armor(scene):
    character = scene.character
    old_armor = character.armor
    new_armor = FlamebreakerArmor()
    assert pickup_mountable(character, new_armor) is old_armor
    assert character.armor is new_armor