"""Playable characters: input state, jumping, health and equipment slots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

from .bullets import Bullet
from .equipment import Armor, HeadEquipment, LegEquipment
from .items import Item, Mountable, Point, Rect
from .weapons import Weapon

log = logging.getLogger(__name__)

_HEALTH_BAR_WIDTH = 80
_HEALTH_BAR_HEIGHT = 10
_HEALTH_BAR_TOP = -250


@dataclass(frozen=True)
class HealthBar:
    """The health bar drawn above a character, in the character's coordinates."""

    background: Rect
    fill: Rect
    color: str


class Character(Item):
    """A character with movement flags, vertical motion, health and equipment."""

    is_character: ClassVar[bool] = True

    def __init__(
        self,
        parent: Item | None = None,
        pixmap_path: str = "",
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)
        self.move_speed = 0.3
        self.max_health = 100
        self._health = self.max_health

        self.velocity = Point()
        self.velocity_y = 0.0
        self.on_ground = True
        self.jump_strength = 2.0
        self.gravity = 1.0
        self.ground_y = 0.0

        self.left_down = False
        self.right_down = False
        self.pick_down = False
        self.down_down = False
        self.up_down = False
        self.picking = False
        self._last_pick_down = False

        self.head_equipment: HeadEquipment | None = None
        self.leg_equipment: LegEquipment | None = None
        self.armor: Armor | None = None
        self.weapon: Weapon | None = None

        if self.has_pixmap:
            width, height = pixmap_size
            image_width = width * self.pixmap_scale
            image_height = height * self.pixmap_scale
            head_width = image_width * 0.8
            head_height = image_height * 0.6
            self.head_collision_rect = Rect(
                (image_width - head_width) / 2.0, image_height * 0.1, head_width, head_height
            )
            body_width = image_width * 0.6
            body_height = image_height * 0.5
            self.body_collision_rect = Rect(
                (image_width - body_width) / 2.0,
                image_height * 0.7,
                body_width,
                body_height - 45,
            )
        else:
            self.head_collision_rect = Rect(0, 0, 50, 80)
            self.body_collision_rect = Rect(0, 0, 30, 50)

    @property
    def health(self) -> int:
        return self._health

    @health.setter
    def health(self, value: int) -> None:
        self._health = max(0, min(value, self.max_health))

    def process_input(self) -> None:
        """Turn the pick key into a single-frame picking pulse on its press."""
        self.picking = self.pick_down and not self._last_pick_down
        self._last_pick_down = self.pick_down

    def take_damage(self, damage: int) -> None:
        """Let worn headgear absorb what it can, then hurt the character."""
        remaining = damage
        head = self.head_equipment
        if head is not None and head.durability > 0:
            absorbed = min(remaining, head.durability)
            head.take_damage(absorbed)
            remaining -= absorbed
            if head.durability <= 0:
                self.unequip_head_equipment()
        self._health = max(0, self._health - remaining)
        self.health = self._health - damage

    def heal(self, amount: int) -> None:
        self.health = self._health + amount

    def handle_jump(self) -> None:
        """Leave the ground with an upward speed set by the jump strength."""
        if self.on_ground:
            self.velocity_y = -(2.25 * self.jump_strength / 2)
            self.on_ground = False

    def handle_gravity(self) -> None:
        """While airborne, speed up the fall and move by the vertical speed."""
        if not self.on_ground:
            self.velocity_y += self.gravity * 0.1
            self.pos = self.pos + Point(0, self.velocity_y)

    def shoot(self, direction: Point) -> Bullet | None:
        """Fire the carried weapon; returns the bullet, or None when no shot."""
        if self.weapon is not None and self.weapon.can_shoot():
            return self.weapon.shoot(self, direction)
        return None

    def can_shoot(self) -> bool:
        return self.weapon is not None and self.weapon.can_shoot()

    def bounding_rect(self) -> Rect:
        return self.head_collision_rect.united(self.body_collision_rect)

    def all_collision_rects(self) -> list[Rect]:
        return [self.head_collision_rect, self.body_collision_rect]

    def health_bar(self) -> HealthBar:
        """The bar's background, its filled part and the fill colour."""
        background = Rect(
            -(_HEALTH_BAR_WIDTH // 2), _HEALTH_BAR_TOP, _HEALTH_BAR_WIDTH, _HEALTH_BAR_HEIGHT
        )
        ratio = self._health / self.max_health
        fill = Rect(background.x, background.y, ratio * background.width, background.height)
        if ratio > 0.5:
            color = "green"
        elif ratio > 0.2:
            color = "yellow"
        elif ratio > 0.1:
            color = "red"
        else:
            color = "black"
        return HealthBar(background, fill, color)

    def _drop(self, item: Any, at: Point | None = None) -> None:
        scene = self.scene
        item.unmount()
        if at is not None:
            item.pos = at
        item.set_parent(self.parent)
        if item.parent is None and scene is not None and item not in scene.items():
            scene.add_item(item)

    def _wear(self, current: Mountable | None, new: Any) -> None:
        if current is not None:
            self._drop(current, new.pos)
        new.set_parent(self)
        new.mount_to_parent()

    def equip_head_equipment(self, head_equipment: HeadEquipment) -> None:
        self._wear(self.head_equipment, head_equipment)
        self.head_equipment = head_equipment

    def unequip_head_equipment(self) -> None:
        if self.head_equipment is not None:
            self._drop(self.head_equipment)
            self.head_equipment = None

    def pickup_armor(self, new_armor: Armor) -> Armor | None:
        """Wear the new armour; the old one is dropped where the new one lay and returned."""
        old = self.armor
        self._wear(old, new_armor)
        self.armor = new_armor
        return old

    def pickup_leg_equipment(self, new_leg_equipment: LegEquipment) -> LegEquipment | None:
        old = self.leg_equipment
        self._wear(old, new_leg_equipment)
        self.leg_equipment = new_leg_equipment
        return old

    def pickup_head_equipment(self, new_head_equipment: HeadEquipment) -> HeadEquipment | None:
        old = self.head_equipment
        self._wear(old, new_head_equipment)
        self.head_equipment = new_head_equipment
        return old

    def pickup_weapon(self, new_weapon: Weapon) -> Weapon | None:
        old = self.weapon
        self._wear(old, new_weapon)
        self.weapon = new_weapon
        return old

    def _update_pixmap(self, pixmap_path: str) -> None:
        if self.has_pixmap:
            self.pixmap_path = pixmap_path
        else:
            log.debug("character has no pixmap to replace")