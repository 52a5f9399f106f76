"""A two-player duel on the ice field with obstacles, pickups and a debug overlay."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .character import Character
from .debug_overlay import DebugOverlay
from .equipment import Armor, FlamebreakerArmor, HeadEquipment, HelmetOfThePaladin, LegEquipment
from .items import Item, Mountable, Point, Rect
from .link import Link
from .maps import Icefield, Obstacle
from .scene import Key, Scene
from .weapons import Weapon

log = logging.getLogger(__name__)

TARGET_FPS = 60
FRAME_TIME_MS = 1000 // TARGET_FPS
GRAVITY = 0.008
MAX_FALL_SPEED = 3.0
PICKUP_DISTANCE = 100.0

_SLIDE_FACTORS = (0.5, 0.3, 0.1)
_PLATFORM_TOLERANCE = 5
_FLOOR_TOLERANCE = 2

_PLAYER1_KEYS = {Key.A: "left", Key.D: "right", Key.S: "down", Key.W: "up"}
_PLAYER2_KEYS = {Key.LEFT: "left", Key.RIGHT: "right", Key.DOWN: "down", Key.UP: "up"}
_SHOOT_KEYS = {Key.J: 0, Key.DIGIT_0: 1}


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _placed(rect: Rect, pos: Point) -> Rect:
    return rect.translated(pos.x, pos.y)


def _set_control(player: Character, action: str, pressed: bool) -> None:
    if action == "left":
        player.left_down = pressed
    elif action == "right":
        player.right_down = pressed
    elif action == "down":
        player.down_down = pressed
        player.pick_down = pressed
    elif action == "up":
        player.up_down = pressed


@dataclass(frozen=True)
class Platform:
    """A surface to stand on; a one-way platform can only be landed on from above."""

    rect: Rect
    is_one_way: bool = True


def pickup_mountable(character: Character, mountable: Mountable) -> Mountable | None:
    """Have the character wear the item; returns what it took off, if anything."""
    if isinstance(mountable, Armor):
        return character.pickup_armor(mountable)
    if isinstance(mountable, HeadEquipment):
        return character.pickup_head_equipment(mountable)
    if isinstance(mountable, LegEquipment):
        return character.pickup_leg_equipment(mountable)
    if isinstance(mountable, Weapon):
        return character.pickup_weapon(mountable)
    return None


class IceScene(Scene):
    """Two heroes on the ice: WASD/J for the first, arrows/0 for the second, H for debug."""

    def __init__(
        self,
        parent: Any = None,
        *,
        icefield: Icefield | None = None,
        player1: Link | None = None,
        player2: Link | None = None,
        spare_armor: Armor | None = None,
        spare_head_equipment: HeadEquipment | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        super().__init__(parent, Rect(0, 0, 1280, 720))
        self.map = icefield if icefield is not None else Icefield()
        self.player1: Link | None = player1 if player1 is not None else Link()
        self.player2: Link | None = player2 if player2 is not None else Link()
        self.spare_armor: Armor | None = (
            spare_armor if spare_armor is not None else FlamebreakerArmor()
        )
        self.spare_head_equipment: HeadEquipment | None = (
            spare_head_equipment if spare_head_equipment is not None else HelmetOfThePaladin()
        )
        self.platforms: list[Platform] = []
        self.frame_time_ms = FRAME_TIME_MS

        for item in (
            self.map, self.player1, self.player2, self.spare_armor, self.spare_head_equipment
        ):
            self.add_item(item)
        self.map.scale_to_fit_scene(self.scene_rect)

        floor = self.map.floor_height()
        self.player1.pos = Point(250, floor)
        self.player2.pos = Point(1000, floor)
        self.player2.turn_face_left()
        for player in (self.player1, self.player2):
            player.move_speed = player.move_speed * 2
            player.ground_y = floor
            player.on_ground = True
            player.velocity_y = 0.0

        rect = self.scene_rect
        span = rect.right() - rect.x
        self.spare_armor.unmount()
        self.spare_armor.pos = Point(rect.x + span * 0.75, floor)
        self.spare_head_equipment.unmount()
        self.spare_head_equipment.pos = Point(rect.x + span * 0.25, floor)
        self.spare_head_equipment.z_value = 5

        self._clock = clock or _now_ms
        self._last_frame_time = self._clock()

        self.debug_overlay = DebugOverlay()
        self.debug_overlay.show(self.scene_rect, floor, self._obstacles())
        log.debug("debug visualization enabled, press H to toggle")

    @property
    def players(self) -> tuple[Link | None, Link | None]:
        return self.player1, self.player2

    def _obstacles(self) -> tuple[Obstacle, ...]:
        return tuple(self.map.obstacles())

    def _touches_obstacle(self, rect: Rect) -> Obstacle | None:
        for obstacle in self._obstacles():
            if obstacle.bounds.intersects(rect):
                return obstacle
        return None

    def initialize_platforms(self) -> None:
        """Rebuild the platform list: the ice ledge, the ground and two side walls."""
        width, height = self.scene_rect.width, self.scene_rect.height
        self.platforms = [
            Platform(Rect(300, 270, 200 * 0.7, 20), True),
            Platform(Rect(0, self.map.floor_height(), width, 50), False),
            Platform(Rect(-10, 0, 10, height), False),
            Platform(Rect(width, 0, 10, height), False),
        ]

    def handle_boundary_collision(self, character: Character | None, new_pos: Point) -> Point:
        """Keep the character's body inside the scene; returns the corrected position."""
        if character is None:
            return new_pos
        body = character.body_collision_rect
        actual = _placed(body, new_pos)
        x, y = new_pos.x, new_pos.y
        if actual.x < 0:
            x = -body.x
            character.velocity = Point(0, character.velocity.y)
            log.debug("hit left boundary")
        if actual.right() > self.scene_rect.width:
            x = self.scene_rect.width - body.width - body.x
            character.velocity = Point(0, character.velocity.y)
            log.debug("hit right boundary")
        if actual.y < 0:
            y = -body.y
            character.velocity_y = 0.0
            log.debug("hit top boundary")
        if actual.bottom() > self.scene_rect.height:
            y = self.scene_rect.height - body.height - body.y
            character.velocity_y = 0.0
            character.on_ground = True
            log.debug("hit bottom boundary")
        return Point(x, y)

    def handle_ground_collision(self, character: Character | None, new_pos: Point) -> Point:
        """Land the whole character on the floor, clamp to the scene and move it there."""
        if character is None:
            return new_pos
        floor = self.map.floor_height()
        bottom = character.bounding_rect().bottom()
        if new_pos.y + bottom >= floor:
            new_pos = Point(new_pos.x, floor - bottom)
            character.velocity_y = 0.0
            character.on_ground = True
        else:
            character.on_ground = False
        new_pos = self.handle_boundary_collision(character, new_pos)
        character.pos = new_pos
        return new_pos

    def handle_all_collisions(self, character: Character | None, new_pos: Point) -> Point:
        """Resolve obstacles, floor, platforms and bounds, then move the character."""
        if character is None:
            return new_pos
        head = character.head_collision_rect
        body = character.body_collision_rect
        old_pos = character.pos

        # A trapped head slides the character clear while it keeps falling.
        if self.is_head_stuck_in_obstacle(character, new_pos) or self.is_head_stuck_in_obstacle(
            character, old_pos
        ):
            slide = self.calculate_slide_direction(character, new_pos)
            if slide.x != 0:
                for factor in _SLIDE_FACTORS:
                    candidate = new_pos + Point(slide.x * factor, 0)
                    if self.is_position_safe(character, candidate):
                        new_pos = Point(candidate.x, new_pos.y)
                        break
            fall = abs(head.bottom() - body.y) * 0.3
            new_pos = Point(new_pos.x, new_pos.y + fall)

        test_x = Point(new_pos.x, old_pos.y)
        head_hit = self.check_head_horizontal_collision(character, test_x)
        body_hit = self.check_body_obstacle_collision(character, test_x)
        if head_hit or body_hit:
            new_pos = Point(old_pos.x, new_pos.y)
            character.velocity = Point(0, character.velocity.y)
            log.debug("horizontal collision (head=%s, body=%s)", head_hit, body_hit)

        test_y = new_pos
        landed = False
        floor = self.map.floor_height()
        if test_y.y + body.bottom() >= floor:
            new_pos = Point(new_pos.x, floor - body.bottom())
            character.velocity_y = 0.0
            character.on_ground = True
            landed = True

        if not landed and self.check_body_obstacle_collision(character, test_y):
            if character.velocity_y > 0:
                test_body = _placed(body, test_y)
                old_bottom = old_pos.y + body.bottom()
                for obstacle in self._obstacles():
                    if not obstacle.bounds.intersects(test_body):
                        continue
                    if old_bottom <= obstacle.bounds.y + _PLATFORM_TOLERANCE:
                        new_pos = Point(new_pos.x, obstacle.bounds.y - body.bottom())
                        character.velocity_y = 0.0
                        character.on_ground = True
                        landed = True
                        break
            if not landed:
                new_pos = Point(new_pos.x, old_pos.y)
                if character.velocity_y < 0:
                    character.velocity_y = 0.0
                log.debug("vertical obstacle collision")

        if not landed and not self._stands_on_something(body, new_pos, floor):
            character.on_ground = False

        new_pos = self.handle_boundary_collision(character, new_pos)

        if not self.is_position_safe(character, new_pos):
            new_pos = self._nudge_to_safety(character, new_pos)

        character.pos = new_pos
        return new_pos

    def _stands_on_something(self, body: Rect, pos: Point, floor: float) -> bool:
        bottom = pos.y + body.bottom()
        if bottom >= floor - _FLOOR_TOLERANCE:
            return True
        left, right = pos.x + body.x, pos.x + body.right()
        return any(
            abs(bottom - obstacle.bounds.y) < _PLATFORM_TOLERANCE
            and right > obstacle.bounds.x
            and left < obstacle.bounds.right()
            for obstacle in self._obstacles()
        )

    def _nudge_to_safety(self, character: Character, pos: Point) -> Point:
        for step in range(1, 11):
            for dx in (step * 5, -step * 5):
                candidate = pos + Point(dx, 0)
                if self.is_position_safe(character, candidate):
                    return candidate
        for step in range(1, 6):
            candidate = pos + Point(0, -step * 3)
            if self.is_position_safe(character, candidate):
                return candidate
        return pos

    def check_obstacle_collision(self, character: Character | None, test_pos: Point) -> bool:
        """True when any of the character's collision boxes overlaps an obstacle."""
        if character is None:
            return False
        return any(
            self._touches_obstacle(_placed(rect, test_pos)) is not None
            for rect in character.all_collision_rects()
        )

    def check_body_obstacle_collision(self, character: Character | None, test_pos: Point) -> bool:
        if character is None:
            return False
        return self._touches_obstacle(_placed(character.body_collision_rect, test_pos)) is not None

    def check_head_horizontal_collision(
        self, character: Character | None, test_pos: Point
    ) -> bool:
        if character is None:
            return False
        return self._touches_obstacle(_placed(character.head_collision_rect, test_pos)) is not None

    def is_head_stuck_in_obstacle(self, character: Character | None, test_pos: Point) -> bool:
        return self.check_head_horizontal_collision(character, test_pos)

    def calculate_slide_direction(self, character: Character | None, current_pos: Point) -> Point:
        """Horizontal push away from the obstacle holding the head, or (0, 0)."""
        if character is None:
            return Point(0, 0)
        head = character.head_collision_rect
        obstacle = self._touches_obstacle(_placed(head, current_pos))
        if obstacle is None:
            return Point(0, 0)
        away = _placed(head, current_pos).center() - obstacle.bounds.center()
        direction = 0.0
        if away.x != 0:
            direction = 1.0 if away.x > 0 else -1.0
        distance = abs(head.center().x - character.body_collision_rect.center().x) * 0.5
        return Point(direction * distance, 0)

    def is_position_safe(self, character: Character | None, test_pos: Point) -> bool:
        """True when the character's body would not overlap any obstacle."""
        if character is None:
            return False
        return not self.check_body_obstacle_collision(character, test_pos)

    def game_loop(self, now_ms: int | None = None) -> None:
        """Run one frame of the duel, animate the players and refresh the overlay."""
        now = self._clock() if now_ms is None else now_ms
        frame_delta = now - self._last_frame_time
        self._last_frame_time = now
        self.process_input()
        self.process_movement()
        self.process_picking()
        for player in self.players:
            if player is not None:
                player.update_animation(frame_delta)
        if self.debug_overlay.visible:
            self.debug_overlay.update(list(self.players))
        self.update(now)

    def process_input(self) -> None:
        super().process_input()
        for player in self.players:
            if player is not None:
                player.process_input()

    def key_press(self, key: Key) -> None:
        if key in _PLAYER1_KEYS:
            if self.player1 is not None:
                _set_control(self.player1, _PLAYER1_KEYS[key], True)
        elif key in _PLAYER2_KEYS:
            if self.player2 is not None:
                _set_control(self.player2, _PLAYER2_KEYS[key], True)
        elif key in _SHOOT_KEYS:
            shooter = self.players[_SHOOT_KEYS[key]]
            if shooter is not None and shooter.can_shoot():
                shooter.shoot(Point(1, 0) if shooter.face_right else Point(-1, 0))
        elif key is Key.H:
            self.debug_overlay.toggle(
                self.scene_rect, self.map.floor_height(), self._obstacles()
            )
        else:
            super().key_press(key)

    def key_release(self, key: Key) -> None:
        if key in _PLAYER1_KEYS:
            if self.player1 is not None:
                _set_control(self.player1, _PLAYER1_KEYS[key], False)
        elif key in _PLAYER2_KEYS:
            if self.player2 is not None:
                _set_control(self.player2, _PLAYER2_KEYS[key], False)
        else:
            super().key_release(key)

    def process_movement(self) -> None:
        """Walk, jump and fall each player, then resolve collisions and ice friction."""
        super().process_movement()
        dt = self.delta_time
        for player in self.players:
            if player is None:
                continue
            old_pos = player.pos
            new_x = old_pos.x + player.velocity.x * dt
            if player.up_down and player.on_ground:
                player.handle_jump()
            if not player.on_ground:
                player.velocity_y = min(player.velocity_y + GRAVITY * dt, MAX_FALL_SPEED)
            new_pos = Point(new_x, old_pos.y + player.velocity_y * dt)
            self.handle_all_collisions(player, new_pos)
            self.map.apply_effect_to_character(player, dt)

    def process_picking(self) -> None:
        super().process_picking()
        for player in self.players:
            if player is None or not player.picking:
                continue
            mountable = self.find_nearest_unmounted_mountable(player.pos, PICKUP_DISTANCE)
            if mountable is None:
                continue
            dropped = pickup_mountable(player, mountable)
            if isinstance(dropped, Armor):
                self.spare_armor = dropped
            elif isinstance(dropped, HeadEquipment):
                self.spare_head_equipment = dropped

    def find_nearest_unmounted_mountable(
        self, pos: Point, distance_threshold: float = math.inf
    ) -> Mountable | None:
        """The unworn item whose centre is closest, strictly within the threshold."""
        nearest: Mountable | None = None
        best = distance_threshold
        for item in self.items():
            if not isinstance(item, Mountable) or item.is_mounted():
                continue
            assert isinstance(item, Item)
            bounds = item.bounding_rect()
            center = item.pos + Point(bounds.width / 2, bounds.height / 2)
            distance = pos.distance_to(center)
            if distance < best:
                best = distance
                nearest = item
        if nearest is None:
            log.debug("no item found within %s", distance_threshold)
        else:
            log.debug("nearest item at distance %s", best)
        return nearest