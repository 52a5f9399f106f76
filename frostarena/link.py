"""The default playable hero with walking, crouching and jumping poses."""

from __future__ import annotations

from collections.abc import Callable

from .character import Character
from .equipment import CapOfTheHero, OldShirt, WellWornTrousers
from .items import Item, Point, Rect
from .weapons import ShabbyPistol

_SPRITES = "Items/Characters/littlerubbish/Reaper_Man_1/PNG Sequences"
WALK_PIXMAPS = (
    f"{_SPRITES}/Walking/0_Reaper_Man_Walking_006.png",
    f"{_SPRITES}/Walking/0_Reaper_Man_Walking_000.png",
)
STAND_PIXMAP = WALK_PIXMAPS[0]
CROUCH_PIXMAP = f"{_SPRITES}/Crouch/0_Reaper_Man_Dying_000.png"
JUMP_PIXMAP = f"{_SPRITES}/Jump Start/0_Reaper_Man_Jump Start_005.png"

PIXMAP_SCALE = 0.3
PIXMAP_OFFSET = Point(-130, -225)
WALK_ANIMATION_INTERVAL_MS = 100


class Link(Character):
    """A hero wearing a cap, shirt and trousers and carrying a pistol."""

    def __init__(
        self,
        parent: Item | None = None,
        *,
        pixmap_size: tuple[float, float] = (0.0, 0.0),
        clock: Callable[[], int] | None = None,
    ) -> None:
        super().__init__(parent, STAND_PIXMAP, pixmap_size=pixmap_size)
        self.walk_elapsed_ms = 0
        self.current_walk_frame = 0
        self.face_right = True

        self.pixmap_scale = PIXMAP_SCALE
        self.pixmap_offset = PIXMAP_OFFSET
        width, height = pixmap_size
        scaled_width = width * PIXMAP_SCALE
        scaled_height = height * PIXMAP_SCALE
        origin = self.pixmap_offset

        head_width = scaled_width * 0.50
        head_height = scaled_height * 0.45
        self.head_collision_rect = Rect(
            origin.x + (scaled_width - head_width) / 2.0 - 7,
            origin.y + scaled_height * 0.2,
            head_width,
            head_height,
        )
        body_width = scaled_width * 0.25
        body_height = scaled_height * 0.35
        self.body_collision_rect = Rect(
            origin.x + (scaled_width - body_width) / 2.0 - 5,
            origin.y + scaled_height * 0.55,
            body_width,
            body_height - 20,
        )

        self.head_equipment = CapOfTheHero(self)
        self.leg_equipment = WellWornTrousers(self)
        self.armor = OldShirt(self)
        self.weapon = ShabbyPistol(self, clock=clock)
        self.head_equipment.mount_to_parent()
        self.leg_equipment.mount_to_parent()
        self.armor.mount_to_parent()
        self.weapon.mount_to_parent()

        self.set_stand_pixmap()

    def _show(self, pixmap_path: str) -> None:
        if self.has_pixmap:
            self._update_pixmap(pixmap_path)
            self.pixmap_scale = PIXMAP_SCALE
            self.pixmap_offset = PIXMAP_OFFSET

    def set_crouch_pixmap(self) -> None:
        self._show(CROUCH_PIXMAP)

    def set_stand_pixmap(self) -> None:
        self._show(STAND_PIXMAP)

    def set_jump_pixmap(self) -> None:
        self._show(JUMP_PIXMAP)

    def turn_face_left(self) -> None:
        if self.face_right:
            self.face_right = False
            if self.has_pixmap:
                self.transform = (-1.0, 1.0)

    def turn_face_right(self) -> None:
        if not self.face_right:
            self.face_right = True
            if self.has_pixmap:
                self.transform = (1.0, 1.0)

    def process_input(self) -> None:
        """Turn the held keys into velocity, facing and pose."""
        super().process_input()
        if self.down_down:
            if self.on_ground:
                self.velocity = Point(0, 0)
            else:
                self.velocity = Point(self.velocity.x, 0)
            self.set_crouch_pixmap()
            return

        speed = self.move_speed if self.on_ground else self.move_speed * 0.5
        if self.left_down:
            self.velocity = Point(-speed, self.velocity.y)
            self.turn_face_left()
        elif self.right_down:
            self.velocity = Point(speed, self.velocity.y)
            self.turn_face_right()

        if not self.on_ground:
            self.set_jump_pixmap()
        elif not (self.left_down or self.right_down):
            # Without a direction key the velocity is left for friction to settle.
            if self.up_down:
                self.handle_jump()
                self.set_jump_pixmap()
            else:
                self.set_stand_pixmap()

    def process_walk_animation(self, delta_time: int) -> None:
        """Flip between the two walking frames every interval."""
        self.walk_elapsed_ms += delta_time
        if self.walk_elapsed_ms < WALK_ANIMATION_INTERVAL_MS:
            return
        self.walk_elapsed_ms = 0
        self.current_walk_frame = (self.current_walk_frame + 1) % len(WALK_PIXMAPS)
        self._show(WALK_PIXMAPS[self.current_walk_frame])

    def update_animation(self, delta_time: int) -> None:
        """Advance the walk cycle while moving on the ground, else show the resting pose."""
        if (self.left_down or self.right_down) and self.on_ground:
            self.process_walk_animation(delta_time)
        elif self.on_ground:
            self.walk_elapsed_ms = 0
            self.current_walk_frame = 0
            if self.down_down:
                self.set_crouch_pixmap()
            else:
                self.set_stand_pixmap()