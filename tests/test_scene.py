import pytest

from frostarena.items import Item, Rect, SceneID
from frostarena.scene import FRAME_INTERVAL_MS, Scene


class RecordingScene(Scene):
    def __init__(self):
        super().__init__(scene_rect=Rect(0, 0, 1280, 720))
        self.calls = []

    def process_input(self):
        self.calls.append("input")

    def process_movement(self):
        self.calls.append("movement")

    def process_picking(self):
        self.calls.append("picking")


def test_update_runs_phases_in_order():
    scene = RecordingScene()
    Scene.update(scene, 100)
    assert scene.calls == ["input", "movement", "picking"]


def test_first_frame_has_zero_delta_then_elapsed_time():
    scene = Scene(scene_rect=Rect(0, 0, 1280, 720))
    scene.update(1000)
    assert scene.delta_time == 0
    scene.update(1016)
    assert scene.delta_time == 16
    scene.update(1020)
    assert scene.delta_time == 4


def test_update_without_time_uses_clock():
    scene = Scene(scene_rect=Rect(0, 0, 1280, 720))
    scene.update()
    assert scene.delta_time == 0
    scene.update()
    assert 0 <= scene.delta_time < 1000


def test_loop_start_and_stop():
    scene = Scene()
    assert not scene.running
    scene.start_loop()
    assert scene.running
    assert scene.frame_interval_ms == FRAME_INTERVAL_MS == 1000 // 90
    scene.stop_loop()
    assert not scene.running


def test_width_and_height_follow_scene_rect():
    scene = Scene(scene_rect=Rect(0, 0, 1280, 720))
    assert (scene.width, scene.height) == (1280, 720)


def test_items_include_children():
    scene = Scene()
    parent = Item()
    child = Item(parent)
    scene.add_item(parent)
    assert scene.items() == [parent, child]
    assert child.scene is scene


def test_add_item_detaches_from_parent():
    scene = Scene()
    parent = Item()
    child = Item(parent)
    scene.add_item(child)
    assert child.parent is None
    assert child not in parent.children
    assert scene.items() == [child]


def test_add_item_twice_lists_it_once():
    scene = Scene()
    item = Item()
    scene.add_item(item)
    scene.add_item(item)
    assert scene.items() == [item]


def test_add_item_moves_between_scenes():
    first, second = Scene(), Scene()
    item = Item()
    first.add_item(item)
    second.add_item(item)
    assert first.items() == []
    assert second.items() == [item]
    assert item.scene is second


def test_remove_item():
    scene = Scene()
    item = Item()
    scene.add_item(item)
    scene.remove_item(item)
    assert scene.items() == []
    assert item.scene is None


def test_remove_child_item_detaches_it():
    scene = Scene()
    parent = Item()
    child = Item(parent)
    scene.add_item(parent)
    scene.remove_item(child)
    assert scene.items() == [parent]
    assert child.parent is None


def test_remove_unknown_item_raises():
    with pytest.raises(ValueError):
        Scene().remove_item(Item())


def test_scene_change_request_reaches_listeners():
    scene = Scene()
    received = []
    scene.connect_scene_change(received.append)
    scene.request_scene_change(SceneID.ICE_SCENE)
    scene.request_scene_change(0)
    assert received == [SceneID.ICE_SCENE, SceneID.BATTLE_SCENE]


def test_disconnected_listener_gets_nothing():
    scene = Scene()
    received = []
    scene.connect_scene_change(received.append)
    scene.disconnect_scene_change(received.append)
    scene.request_scene_change(SceneID.ICE_SCENE)
    assert received == []


def test_disconnect_unknown_listener_raises():
    with pytest.raises(ValueError):
        Scene().disconnect_scene_change(print)


def test_unknown_scene_id_raises():
    with pytest.raises(ValueError):
        Scene().request_scene_change(42)