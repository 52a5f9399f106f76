"""The base scene: item bookkeeping, a frame loop and scene-change requests."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from enum import Enum, auto
from typing import Any

from .items import Item, Rect, SceneID

FRAME_INTERVAL_MS = 1000 // 90


class Key(Enum):
    """Keys the scenes react to."""

    A = auto()
    D = auto()
    S = auto()
    W = auto()
    J = auto()
    H = auto()
    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    DIGIT_0 = auto()
    ESCAPE = auto()


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class Scene:
    """Holds items and runs input, movement and picking once per frame."""

    def __init__(self, parent: Any = None, scene_rect: Rect | None = None) -> None:
        self.parent = parent
        self.scene_rect = scene_rect if scene_rect is not None else Rect()
        self.delta_time = 0
        self.running = False
        self.frame_interval_ms = FRAME_INTERVAL_MS
        self._last_time: int | None = None
        self._items: list[Item] = []
        self._scene_change_callbacks: list[Callable[[SceneID], Any]] = []

    @property
    def width(self) -> float:
        return self.scene_rect.width

    @property
    def height(self) -> float:
        return self.scene_rect.height

    def add_item(self, item: Item) -> None:
        """Add the item as a top-level item, taking it from any other scene or parent."""
        old_scene = item.scene
        if old_scene is not None and old_scene is not self and item in old_scene.items():
            old_scene.remove_item(item)
        if item.parent is not None:
            item.set_parent(None)
        if item not in self._items:
            self._items.append(item)
        item.scene = self

    def remove_item(self, item: Item) -> None:
        """Take the item and its children out of the scene."""
        if item not in self.items():
            raise ValueError("item is not in this scene")
        if item in self._items:
            self._items.remove(item)
        if item.parent is not None:
            item.set_parent(None)
        item.scene = None

    def _walk(self, item: Item, seen: set[int]) -> Iterator[Item]:
        if id(item) in seen:
            return
        seen.add(id(item))
        yield item
        for child in item.children:
            yield from self._walk(child, seen)

    def items(self) -> list[Item]:
        """Every item in the scene, each top-level item followed by its descendants."""
        seen: set[int] = set()
        result: list[Item] = []
        for item in self._items:
            if item.parent is None:
                result.extend(self._walk(item, seen))
        return result

    def start_loop(self) -> None:
        self.running = True

    def stop_loop(self) -> None:
        self.running = False

    def update(self, now_ms: int | None = None) -> None:
        """Run one frame; the first frame has a delta of zero."""
        now = _now_ms() if now_ms is None else now_ms
        self.delta_time = 0 if self._last_time is None else now - self._last_time
        self._last_time = now
        self.process_input()
        self.process_movement()
        self.process_picking()

    def process_input(self) -> None:
        """Hook for turning held keys into character state."""

    def process_movement(self) -> None:
        """Hook for moving things by the frame's delta time."""

    def process_picking(self) -> None:
        """Hook for characters picking up items."""

    def key_press(self, key: Key) -> None:
        """Hook for a key going down; the base scene ignores it."""

    def key_release(self, key: Key) -> None:
        """Hook for a key coming up; the base scene ignores it."""

    def connect_scene_change(self, callback: Callable[[SceneID], Any]) -> None:
        self._scene_change_callbacks.append(callback)

    def disconnect_scene_change(self, callback: Callable[[SceneID], Any]) -> None:
        """Stop notifying the callback; raises ValueError if it was not connected."""
        self._scene_change_callbacks.remove(callback)

    def request_scene_change(self, scene_id: SceneID) -> None:
        """Ask every connected listener to switch to another scene."""
        target = SceneID(scene_id)
        for callback in list(self._scene_change_callbacks):
            callback(target)