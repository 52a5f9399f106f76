"""Level backgrounds: floor height, spawn point, obstacles and surface friction."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol

from .items import Item, Point, Rect

BATTLEFIELD_PIXMAP = "Items/Maps/Battlefield/g9tOqth.png"
SETTINGSFIELD_PIXMAP = "Items/Maps/Scenicpicture/SettingsScene.png"
ICEFIELD_PURPLE_PIXMAP = "Items/Maps/Icefield/Icefield_purple.png"
ICEFIELD_WHITE_PIXMAP = "Items/Maps/Icefield/Icefield_white.png"
ICICLE_1_PIXMAP = "Items/Maps/Icefield/icicle_1.png"
ICICLE_2_PIXMAP = "Items/Maps/Icefield/icicle_2.png"
ICE_PLATFORM_PIXMAP = "Items/Maps/Icefield/ice_platform.png"

WHITE_ICE_FRICTION = 0.15
PURPLE_ICE_FRICTION = 0.02

_Size = tuple[float, float]


class _RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class Map(Item):
    """A background that is scaled to the scene and defines where the floor is."""

    def __init__(
        self, parent: Item | None = None, pixmap_path: str = "", *, pixmap_size: _Size = (0.0, 0.0)
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)

    def scale_to_fit_scene(self, scene_rect: Rect) -> None:
        """Scale uniformly to fit inside the scene and centre the result.

        A map without area is left untouched.
        """
        item_rect = self.bounding_rect()
        if item_rect.width <= 0 or item_rect.height <= 0:
            return
        factor = min(scene_rect.width / item_rect.width, scene_rect.height / item_rect.height)
        sx, sy = self.transform
        self.transform = (sx * factor, sy * factor)
        self.pos = Point(
            (scene_rect.width - item_rect.width * factor) / 2,
            (scene_rect.height - item_rect.height * factor) / 2,
        )

    def floor_height(self) -> float:
        rect = self.scene_bounding_rect()
        return rect.y + (rect.y - rect.bottom()) * 0.5

    def spawn_pos(self) -> Point:
        """The horizontal middle of the map, standing on the floor."""
        rect = self.scene_bounding_rect()
        return Point((rect.x + rect.right()) * 0.5, self.floor_height())

    def set_pixmap(self, pixmap_path: str) -> None:
        self.pixmap_path = pixmap_path

    def apply_effect_to_character(self, character: Any, delta_time: int) -> None:
        """Hook for surface effects on a character; a plain map has none."""


class Battlefield(Map):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, BATTLEFIELD_PIXMAP, pixmap_size=pixmap_size)

    def floor_height(self) -> float:
        rect = self.scene_bounding_rect()
        return (rect.y + rect.bottom()) * 0.63


class Settingsfield(Map):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, SETTINGSFIELD_PIXMAP, pixmap_size=pixmap_size)

    def floor_height(self) -> float:
        rect = self.scene_bounding_rect()
        return (rect.y + rect.bottom()) * 0.63


class ObstacleType(Enum):
    RECTANGLE = auto()


@dataclass(frozen=True)
class Obstacle:
    """A solid region in scene coordinates."""

    type: ObstacleType
    bounds: Rect


def select_random_icefield_pixmap_path(rng: _RandomSource | None = None) -> str:
    """Pick the purple ice background one time in five, otherwise the white one."""
    source = rng if rng is not None else random.Random()
    if source.randint(0, 4) == 0:
        return ICEFIELD_PURPLE_PIXMAP
    return ICEFIELD_WHITE_PIXMAP


class Icefield(Map):
    """An ice level with icicles, a floating platform and slippery ground.

    map_type is 0 for white ice and 1 for the slicker purple ice. An
    obstacle is only created for a decoration whose size is given.
    """

    def __init__(
        self,
        parent: Item | None = None,
        *,
        pixmap_size: _Size = (0.0, 0.0),
        icicle_1_size: _Size | None = None,
        icicle_2_size: _Size | None = None,
        ice_platform_size: _Size | None = None,
        rng: _RandomSource | None = None,
    ) -> None:
        super().__init__(parent, "", pixmap_size=pixmap_size)
        path = select_random_icefield_pixmap_path(rng)
        self.set_pixmap(path)
        self.map_type = 1 if path == ICEFIELD_PURPLE_PIXMAP else 0
        self.pixmap_z_value = -1
        self._obstacles: list[Obstacle] = []
        self.icicle_1: Item | None = None
        self.icicle_2: Item | None = None
        self.ice_platform: Item | None = None

        if icicle_1_size is not None:
            self.icicle_1 = self._decoration(ICICLE_1_PIXMAP, icicle_1_size, 0.55, Point(0, 465))
            self._obstacles.append(
                Obstacle(ObstacleType.RECTANGLE, self.icicle_1.scene_bounding_rect())
            )
        if icicle_2_size is not None:
            self.icicle_2 = self._decoration(ICICLE_2_PIXMAP, icicle_2_size, 1.0, Point(1100, 512))
            self._obstacles.append(
                Obstacle(ObstacleType.RECTANGLE, self.icicle_2.scene_bounding_rect())
            )
        if ice_platform_size is not None:
            platform = self._decoration(
                ICE_PLATFORM_PIXMAP, ice_platform_size, 0.65, Point(315, 270)
            )
            self.ice_platform = platform
            local = platform.bounding_rect()
            bounds = Rect(
                platform.pos.x,
                platform.pos.y + 25,
                local.width * platform.scale,
                local.height * platform.scale - 60,
            )
            self._obstacles.append(Obstacle(ObstacleType.RECTANGLE, bounds))

        self._ground_rect = Rect()
        self._boundary_rect = Rect()
        self._update_ground_geometry()

    def _decoration(self, path: str, size: _Size, scale: float, pos: Point) -> Item:
        item = Item(self, path, pixmap_size=size)
        item.scale = scale
        item.pos = pos
        item.z_value = 0
        return item

    def _update_ground_geometry(self) -> None:
        rect = self.scene_bounding_rect()
        self._ground_rect = Rect(
            rect.x + rect.width * 0.05,
            rect.bottom() - rect.height * 0.13,
            rect.width * 0.9,
            rect.height * 0.13,
        )
        self._boundary_rect = rect.adjusted(
            rect.width * 0.05, rect.height * 0.05, -rect.width * 0.05, -rect.height * 0.05
        )

    def floor_height(self) -> float:
        self._update_ground_geometry()
        return self._ground_rect.y

    def apply_effect_to_character(self, character: Any, delta_time: int) -> None:
        """Slow a grounded character that is not being steered, without reversing it."""
        if character is None:
            return
        self._update_ground_geometry()
        if not character.on_ground:
            return
        friction = PURPLE_ICE_FRICTION if self.map_type == 1 else WHITE_ICE_FRICTION
        if character.left_down or character.right_down:
            return
        velocity = character.velocity
        speed_x = velocity.x
        if abs(speed_x) <= 0.001:
            return
        new_speed_x = speed_x - speed_x * friction
        if (speed_x > 0 > new_speed_x) or (speed_x < 0 < new_speed_x):
            new_speed_x = 0.0
        character.velocity = Point(new_speed_x, velocity.y)

    def ground_rect(self) -> Rect:
        return self._ground_rect

    def boundary_rect(self) -> Rect:
        return self._boundary_rect

    def obstacles(self) -> tuple[Obstacle, ...]:
        return tuple(self._obstacles)