"""Debug overlay: scene bounds, floor, obstacles and per-player collision boxes."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Optional, Union

from .items import Point, Rect
from .maps import Obstacle, ObstacleType

Color = Union[str, tuple[int, ...]]

DYNAMIC_Z_MIN = 160
DYNAMIC_Z_MAX = 162

INSTRUCTIONS = (
    "Debug Visualization:\n"
    "- Magenta dashed: Scene boundary\n"
    "- Green dotted: Floor line\n"
    "- Red rectangles: Obstacles\n"
    "- Cyan box: Player1 (WASD move, J shoot)\n"
    "- Yellow box: Player2 (Arrow keys move, 0 shoot)\n"
    "Press 'H' to hide debug view"
)

_DEFAULT_FONT_SIZE = 9
_TEXT_MARGIN = 4.0


def _text_size(text: str, point_size: int) -> tuple[float, float]:
    """Estimated extent of a text item: full-width glyphs one em, others 0.6 em."""
    em = point_size * 96 / 72
    lines = text.split("\n")
    widest = max(
        sum(
            em if unicodedata.east_asian_width(char) in ("W", "F") else em * 0.6
            for char in line
        )
        for line in lines
    )
    return widest + 2 * _TEXT_MARGIN, len(lines) * em * 1.2 + 2 * _TEXT_MARGIN


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass
class DebugShape:
    """One drawable element of the overlay.

    kind is "rect", "ellipse", "line" or "text". Rectangles, ellipses and
    texts occupy ``rect``; a line runs between the two points of ``line``.
    """

    kind: str
    z_value: float
    color: Color = "black"
    rect: Rect = Rect()
    line: Optional[tuple[Point, Point]] = None
    text: str = ""
    fill: Optional[Color] = None
    pen_width: float = 1.0
    pen_style: str = "solid"
    font_size: Optional[int] = None
    bold: bool = False
    visible: bool = True


def _text(
    text: str, pos: Point, color: Color, z_value: float, font_size: int | None = None,
    bold: bool = False,
) -> DebugShape:
    width, height = _text_size(text, font_size or _DEFAULT_FONT_SIZE)
    return DebugShape(
        "text", z_value, color, Rect(pos.x, pos.y, width, height), text=text,
        font_size=font_size, bold=bold,
    )


@dataclass(frozen=True)
class _PlayerStyle:
    label: str
    head_color: Color
    head_fill: Color
    body_color: Color
    body_fill: Color
    label_offset: Point


_PLAYER_STYLES = (
    _PlayerStyle("Player1", "cyan", (0, 255, 255, 30), "darkCyan", (0, 200, 200, 30),
                 Point(50, -120)),
    _PlayerStyle("Player2", "yellow", (255, 255, 0, 30), (200, 200, 0), (200, 200, 0, 30),
                 Point(-200, -120)),
)


def describe_player(label: str, player: Any) -> str:
    """The info text shown next to a player."""
    pos = player.pos
    head = player.head_collision_rect.translated(pos.x, pos.y)
    body = player.body_collision_rect.translated(pos.x, pos.y)
    on_ground = "Yes" if player.on_ground else "No"
    return (
        f"{label}\n"
        f"Pos: ({pos.x:.1f}, {pos.y:.1f})\n"
        f"Vel: ({player.velocity.x:.2f}, {player.velocity_y:.2f})\n"
        f"OnGround: {on_ground}\n"
        f"Head: ({head.x:.1f},{head.y:.1f})\n"
        f"Body: ({body.x:.1f},{body.y:.1f})"
    )


class DebugOverlay:
    """Static level annotations plus per-frame player boxes, shown or hidden together."""

    def __init__(self) -> None:
        self.shapes: list[DebugShape] = []
        self.visible = True

    def show(self, scene_rect: Rect, floor_height: float, obstacles: Iterable[Obstacle]) -> None:
        """Make the overlay visible, building the static shapes the first time."""
        self.visible = True
        if self.shapes:
            for shape in self.shapes:
                shape.visible = True
            return

        self.shapes.append(
            DebugShape("rect", 200, "magenta", scene_rect, pen_width=5, pen_style="dash")
        )
        self.shapes.append(_text("Scene Boundary", Point(10, 10), "magenta", 201))

        self.shapes.append(
            DebugShape(
                "line", 100, "green",
                line=(Point(0, floor_height), Point(scene_rect.width, floor_height)),
                pen_width=3, pen_style="dot",
            )
        )
        self.shapes.append(
            _text(
                f"Floor Height: {_format_number(floor_height)}",
                Point(scene_rect.width / 2 - 50, floor_height - 20), "green", 101,
            )
        )

        for index, obstacle in enumerate(obstacles):
            bounds = obstacle.bounds
            color = "red" if obstacle.type is ObstacleType.RECTANGLE else "orange"
            self.shapes.append(
                DebugShape("rect", 150, color, bounds, fill=(255, 0, 0, 50), pen_width=3)
            )
            label = (
                f"Obstacle {index}\n({bounds.x:.1f},{bounds.y:.1f})\n"
                f"{bounds.width:.1f}x{bounds.height:.1f}"
            )
            self.shapes.append(
                _text(label, bounds.top_left() + Point(5, 5), "red", 151, font_size=8, bold=True)
            )

        instructions = _text(INSTRUCTIONS, Point(10, 50), "white", 202, font_size=10, bold=True)
        self.shapes.append(
            DebugShape("rect", 201, "black", instructions.rect, fill=(0, 0, 0, 180),
                       pen_style="none")
        )
        self.shapes.append(instructions)

    def hide(self) -> None:
        self.visible = False
        for shape in self.shapes:
            shape.visible = False

    def toggle(self, scene_rect: Rect, floor_height: float, obstacles: Iterable[Obstacle]) -> bool:
        """Flip visibility; returns whether the overlay is now shown."""
        if self.visible:
            self.hide()
        else:
            self.show(scene_rect, floor_height, obstacles)
        return self.visible

    def update(self, players: Sequence[Any]) -> None:
        """Replace the player boxes; the first two players are drawn, None is skipped."""
        self.shapes = [
            shape for shape in self.shapes
            if not DYNAMIC_Z_MIN <= shape.z_value <= DYNAMIC_Z_MAX
        ]
        for style, player in zip(_PLAYER_STYLES, players):
            if player is None:
                continue
            pos = player.pos
            head = player.head_collision_rect.translated(pos.x, pos.y)
            body = player.body_collision_rect.translated(pos.x, pos.y)
            self.shapes.append(
                DebugShape("rect", 160, style.head_color, head, fill=style.head_fill, pen_width=2)
            )
            self.shapes.append(
                DebugShape("rect", 160, style.body_color, body, fill=style.body_fill, pen_width=2)
            )
            self.shapes.append(
                DebugShape("ellipse", 161, "black", Rect(pos.x - 3, pos.y - 3, 6, 6),
                           fill=style.head_color)
            )
            self.shapes.append(
                _text(describe_player(style.label, player), pos + style.label_offset,
                      style.head_color, 162, font_size=8)
            )

    def visible_shapes(self) -> list[DebugShape]:
        return [shape for shape in self.shapes if shape.visible]