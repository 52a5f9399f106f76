"""A single-player arena on the battlefield with a spare armour to pick up."""

from __future__ import annotations

import math
from typing import Any

from .character import Character
from .equipment import Armor, FlamebreakerArmor
from .items import Item, Mountable, Point, Rect
from .link import Link
from .maps import Battlefield, Map
from .scene import Key, Scene

PICKUP_DISTANCE = 100.0


def pickup_mountable(character: Character, mountable: Mountable) -> Mountable | None:
    """Have the character wear the item; returns what it took off, if anything.

    Only armour can be picked up here.
    """
    if isinstance(mountable, Armor):
        return character.pickup_armor(mountable)
    return None


class BattleScene(Scene):
    """One character on the battlefield; A/D walk, S crouches and picks up."""

    def __init__(
        self,
        parent: Any = None,
        *,
        battlefield: Map | None = None,
        character: Character | None = None,
        spare_armor: Armor | None = None,
    ) -> None:
        super().__init__(parent, Rect(0, 0, 1280, 720))
        self.map = battlefield if battlefield is not None else Battlefield()
        self.character = character if character is not None else Link()
        self.spare_armor: Armor | None = (
            spare_armor if spare_armor is not None else FlamebreakerArmor()
        )
        self.add_item(self.map)
        self.add_item(self.character)
        self.add_item(self.spare_armor)
        self.map.scale_to_fit_scene(self.scene_rect)
        self.character.pos = self.map.spawn_pos()
        self.spare_armor.unmount()
        rect = self.scene_rect
        self.spare_armor.pos = Point(
            rect.x + (rect.right() - rect.x) * 0.75, self.map.floor_height()
        )

    def process_input(self) -> None:
        super().process_input()
        if self.character is not None:
            self.character.process_input()

    def _set_keys(self, key: Key, pressed: bool) -> bool:
        character = self.character
        if key is Key.A:
            if character is not None:
                character.left_down = pressed
        elif key is Key.D:
            if character is not None:
                character.right_down = pressed
        elif key is Key.S:
            if character is not None:
                character.pick_down = pressed
                character.down_down = pressed
        else:
            return False
        return True

    def key_press(self, key: Key) -> None:
        if not self._set_keys(key, True):
            super().key_press(key)

    def key_release(self, key: Key) -> None:
        if not self._set_keys(key, False):
            super().key_release(key)

    def process_movement(self) -> None:
        super().process_movement()
        if self.character is not None:
            self.character.pos = self.character.pos + self.character.velocity * self.delta_time

    def process_picking(self) -> None:
        super().process_picking()
        if self.character is None or not self.character.picking:
            return
        mountable = self.find_nearest_unmounted_mountable(self.character.pos, PICKUP_DISTANCE)
        if mountable is not None:
            dropped = pickup_mountable(self.character, mountable)
            self.spare_armor = dropped if isinstance(dropped, Armor) else None

    def find_nearest_unmounted_mountable(
        self, pos: Point, distance_threshold: float = math.inf
    ) -> Mountable | None:
        """The closest unworn item strictly nearer than the threshold, if any."""
        nearest: Mountable | None = None
        best = distance_threshold
        for item in self.items():
            if not isinstance(item, Mountable) or item.is_mounted():
                continue
            assert isinstance(item, Item)
            distance = pos.distance_to(item.pos)
            if distance < best:
                best = distance
                nearest = item
        return nearest