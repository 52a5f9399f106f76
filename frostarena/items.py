"""Geometry primitives, scene identifiers and the base scene item."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, ClassVar


@dataclass(frozen=True)
class Point:
    """A 2D point or vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: object) -> Point:
        if not isinstance(other, Point):
            return NotImplemented
        return Point(self.x - other.x, self.y - other.y)

    def __neg__(self) -> Point:
        return Point(-self.x, -self.y)

    def __mul__(self, factor: float) -> Point:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Point) -> float:
        """Distance between this point and another."""
        return (other - self).length()


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def right(self) -> float:
        return self.x + self.width

    def bottom(self) -> float:
        return self.y + self.height

    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def top_left(self) -> Point:
        return Point(self.x, self.y)

    def moved_to(self, x: float, y: float) -> Rect:
        """The same rectangle with its top-left corner at (x, y)."""
        return Rect(x, y, self.width, self.height)

    def translated(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def _edges(self) -> tuple[float, float, float, float]:
        left, right = sorted((self.x, self.x + self.width))
        top, bottom = sorted((self.y, self.y + self.height))
        return left, top, right, bottom

    def _is_null(self) -> bool:
        return self.width == 0 and self.height == 0

    def intersects(self, other: Rect) -> bool:
        """True when both rectangles have area and their interiors overlap."""
        l1, t1, r1, b1 = self._edges()
        l2, t2, r2, b2 = other._edges()
        if l1 == r1 or t1 == b1 or l2 == r2 or t2 == b2:
            return False
        return l1 < r2 and l2 < r1 and t1 < b2 and t2 < b1

    def united(self, other: Rect) -> Rect:
        """The smallest rectangle holding both; a null rectangle is ignored."""
        if self._is_null():
            return other
        if other._is_null():
            return self
        l1, t1, r1, b1 = self._edges()
        l2, t2, r2, b2 = other._edges()
        left, top = min(l1, l2), min(t1, t2)
        return Rect(left, top, max(r1, r2) - left, max(b1, b2) - top)

    def adjusted(self, dx1: float, dy1: float, dx2: float, dy2: float) -> Rect:
        """Move the top-left corner by (dx1, dy1) and the bottom-right by (dx2, dy2)."""
        return Rect(
            self.x + dx1,
            self.y + dy1,
            self.width + dx2 - dx1,
            self.height + dy2 - dy1,
        )


class SceneID(IntEnum):
    """Identifiers of the game's scenes."""

    BATTLE_SCENE = 0
    ICE_SCENE = 1
    SETTINGS_SCENE = 999
    PREVIOUS_SCENE = 1000


class Item:
    """A node of the scene graph, optionally carrying a pixmap.

    Its position, scale and (sx, sy) transform place it in its parent's
    coordinates; the pixmap has its own offset and scale within the item.
    """

    is_character: ClassVar[bool] = False

    def __init__(
        self,
        parent: Item | None = None,
        pixmap_path: str = "",
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
    ) -> None:
        self.pos = Point()
        self.scale = 1.0
        self.transform: tuple[float, float] = (1.0, 1.0)
        self.z_value = 0.0
        self.visible = True
        self.pixmap_path: str | None = pixmap_path or None
        self.pixmap_size = pixmap_size
        self.pixmap_offset = Point()
        self.pixmap_scale = 1.0
        self.pixmap_opacity = 1.0
        self.pixmap_z_value = 0.0
        self.parent: Item | None = None
        self.children: list[Item] = []
        self._scene: Any = None
        if parent is not None:
            self.set_parent(parent)

    @property
    def has_pixmap(self) -> bool:
        return self.pixmap_path is not None

    @property
    def scene(self) -> Any:
        """The scene holding this item, directly or through its parents."""
        if self._scene is not None:
            return self._scene
        if self.parent is not None:
            return self.parent.scene
        return None

    @scene.setter
    def scene(self, value: Any) -> None:
        self._scene = value

    def bounding_rect(self) -> Rect:
        """The pixmap's rectangle in local coordinates, empty without one."""
        if self.has_pixmap:
            width, height = self.pixmap_size
            return Rect(0.0, 0.0, width, height)
        return Rect()

    def _map_to_parent(self, point: Point) -> Point:
        sx, sy = self.transform
        return Point(
            self.pos.x + point.x * sx * self.scale,
            self.pos.y + point.y * sy * self.scale,
        )

    def _map_to_scene(self, point: Point) -> Point:
        item: Item | None = self
        while item is not None:
            point = item._map_to_parent(point)
            item = item.parent
        return point

    def scene_pos(self) -> Point:
        return self._map_to_scene(Point())

    def scene_bounding_rect(self) -> Rect:
        rect = self.bounding_rect()
        a = self._map_to_scene(rect.top_left())
        b = self._map_to_scene(Point(rect.right(), rect.bottom()))
        left, right = sorted((a.x, b.x))
        top, bottom = sorted((a.y, b.y))
        return Rect(left, top, right - left, bottom - top)

    def set_parent(self, parent: Item | None) -> None:
        """Reparent the item; a parent may not be the item or one of its descendants."""
        node = parent
        while node is not None:
            if node is self:
                raise ValueError("an item cannot be its own ancestor")
            node = node.parent
        if self.parent is not None:
            self.parent.children.remove(self)
        self.parent = parent
        if parent is not None:
            parent.children.append(self)


class Mountable:
    """Mixin for things a character can wear or carry."""

    _mounted: bool = False

    def mount_to_parent(self) -> None:
        self._mounted = True

    def unmount(self) -> None:
        self._mounted = False

    def is_mounted(self) -> bool:
        return self._mounted