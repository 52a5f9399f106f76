"""Weapons carried by characters."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from .bullets import Bullet, BulletBasic
from .items import Item, Mountable, Point

log = logging.getLogger(__name__)

SHABBY_PISTOL_PIXMAP = "Items/Weapons/Shabby_Pistol_Icon.png"

_MUZZLE_DISTANCE = 20


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class Weapon(Item, Mountable):
    """A weapon with attack statistics, ammunition and a firing cooldown.

    attack_type: 0 default melee, 1 melee, 2 ranged.
    attack_element: 0 none, 1 fire, 2 frost, 3 lightning, 4 poison.
    """

    def __init__(
        self,
        parent: Item | None,
        pixmap_path: str,
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
        clock: Callable[[], int] | None = None,
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)
        self.name = ""
        self.description = ""
        self.attack_type = 0
        self.attack_element = 0
        self.attack_power = 0
        self.attack_range = 0
        self.attack_speed = 0
        self.critical_chance = 0
        self.critical_damage = 0
        self.ammo_count = 0
        self.max_ammo_count = 0
        self.weight = 0
        self.last_shot_time = 0
        self.shot_cooldown = 500
        self._clock = clock or _now_ms

    def mount_to_parent(self) -> None:
        super().mount_to_parent()
        if self.has_pixmap:
            self.pixmap_offset = Point()

    def unmount(self) -> None:
        super().unmount()
        self.scale = 0.8
        if self.has_pixmap:
            self.pixmap_offset = Point(0, -120)

    def can_shoot(self) -> bool:
        """True when ammunition remains and the cooldown has passed."""
        return self.ammo_count > 0 and self._clock() - self.last_shot_time >= self.shot_cooldown

    def create_bullet(self, start_pos: Point, direction: Point) -> Bullet | None:
        """Make the projectile for one shot; a plain weapon fires none."""
        return None

    def shoot(self, shooter: Any, direction: Point) -> Bullet | None:
        """Fire from the shooter's body centre; returns the bullet, or None if no shot."""
        if shooter is None or not self.can_shoot():
            return None
        body_center = shooter.pos + shooter.body_collision_rect.center()
        start = body_center + Point(direction.x * _MUZZLE_DISTANCE, 0)
        bullet = self.create_bullet(start, direction)
        if bullet is None:
            return None
        scene = shooter.scene
        if scene is not None:
            scene.add_item(bullet)
        self.ammo_count -= 1
        self.last_shot_time = self._clock()
        log.debug("weapon fired, %d rounds left, bullet at %s", self.ammo_count, start)
        return bullet


class ShabbyPistol(Weapon):
    """A worn pistol: ranged, six rounds, 300 ms between shots."""

    def __init__(
        self,
        parent: Item | None = None,
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
        clock: Callable[[], int] | None = None,
    ) -> None:
        super().__init__(parent, SHABBY_PISTOL_PIXMAP, pixmap_size=pixmap_size, clock=clock)
        self.scale = 0.6
        self.pos = Point(-92, -110)
        self.z_value = 1
        self.name = "破旧的手枪"
        self.description = "一把看起来破旧的手枪，虽然外观不佳，但仍然可以发射子弹。"
        self.attack_type = 2
        self.attack_element = 0
        self.attack_power = 5
        self.attack_range = 50
        self.attack_speed = 3
        self.critical_chance = 10
        self.critical_damage = 15
        self.ammo_count = 6
        self.max_ammo_count = 6
        self.weight = 2
        self.shot_cooldown = 300

    def create_bullet(self, start_pos: Point, direction: Point) -> Bullet:
        return BulletBasic(None, start_pos, direction, self.attack_power)