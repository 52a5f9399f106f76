"""Projectiles fired by weapons."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .items import Item, Point, Rect

log = logging.getLogger(__name__)

BULLET_BASIC_PIXMAP = "Items/Bullets/Shabby_Pistol_bullet.png"


class Bullet(Item, ABC):
    """A projectile that travels each frame and expires after a number of frames."""

    def __init__(
        self,
        parent: Item | None,
        pixmap_path: str,
        start_pos: Point,
        direction: Point,
        damage: int,
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)
        self.speed = 15.0
        self.damage = damage
        self.direction = direction
        self.lifetime_frames = 180
        self.frame_count = 0
        self.is_destroyed = False
        self.pos = start_pos
        if direction.x < 0:
            self.transform = (-1.0, 1.0)
        self.scale = 0.05
        self.z_value = 2

    def advance(self, phase: int) -> None:
        """Move one frame; only phase 0 does any work."""
        if phase != 0 or self.is_destroyed:
            return
        self.pos = self.pos + self.direction * self.speed
        self.frame_count += 1
        if self.frame_count >= self.lifetime_frames:
            self.destroy()
            return
        self.handle_collisions()
        scene = self.scene
        if scene is not None and not self._within(scene.scene_rect):
            self.destroy()

    def _within(self, area: Rect) -> bool:
        bounds = self.scene_bounding_rect()
        if bounds.width and bounds.height:
            return area.intersects(bounds)
        point = self.scene_pos()
        return area.x <= point.x < area.right() and area.y <= point.y < area.bottom()

    def destroy(self) -> None:
        """Take the bullet out of its scene; later calls do nothing."""
        if self.is_destroyed:
            return
        self.is_destroyed = True
        scene = self.scene
        if scene is not None:
            scene.remove_item(self)

    @abstractmethod
    def handle_collisions(self) -> None:
        """React to whatever the bullet touches this frame."""


class BulletBasic(Bullet):
    """The pistol's bullet: damages the first character it touches, or bursts on an obstacle."""

    def __init__(
        self,
        parent: Item | None = None,
        start_pos: Point = Point(0, 0),
        direction: Point = Point(1, 0),
        damage: int = 10,
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        super().__init__(
            parent, BULLET_BASIC_PIXMAP, start_pos, direction, damage, pixmap_size=pixmap_size
        )
        self.speed = 20.0
        self.lifetime_frames = 300
        self.has_exploded = False

    def explode(self) -> None:
        """Show the burst once: fade the pixmap and double the size."""
        if self.has_exploded:
            return
        self.has_exploded = True
        if self.has_pixmap:
            self.pixmap_opacity = 0.5
            self.scale *= 2
        log.debug("bullet exploded")

    def handle_collisions(self) -> None:
        if self.has_exploded:
            return
        scene = self.scene
        if scene is None:
            return
        bounds = self.scene_bounding_rect()
        items = scene.items()
        for item in items:
            if item is self or not getattr(item, "is_character", False):
                continue
            if item.scene_bounding_rect().intersects(bounds):
                item.take_damage(self.damage)
                log.debug("bullet hit a character")
                self.explode()
                return
        for item in items:
            obstacles = getattr(item, "obstacles", None)
            if not callable(obstacles):
                continue
            if any(obstacle.bounds.intersects(bounds) for obstacle in obstacles()):
                log.debug("bullet hit an obstacle")
                self.explode()
            return