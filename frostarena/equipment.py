"""Wearable armour, head and leg equipment."""

from __future__ import annotations

import logging

from .items import Item, Mountable, Point

log = logging.getLogger(__name__)

_Size = tuple[float, float]

FLAMEBREAKER_ARMOR_PIXMAP = "Items/Armors/FlamebreakerArmor/BotW_Flamebreaker_Armor_Icon.png"
OLD_SHIRT_PIXMAP = "Items/Armors/OldShirt/BotW_Old_Shirt_Icon.png"
CAP_OF_THE_HERO_PIXMAP = "Items/HeadEquipments/CapOfTheHero/BotW_Cap_of_the_Hero_Icon.png"
HELMET_OF_THE_PALADIN_PIXMAP = "Items/HeadEquipments/Helmet/Helmet_of_the_Paladin.png"
WELL_WORN_TROUSERS_PIXMAP = (
    "Items/LegEquipments/WellWornTrousers/BotW_Well-Worn_Trousers_Icon.png"
)

_UNMOUNTED_PIXMAP_OFFSET = Point(0, -120)


class Armor(Item, Mountable):
    """Body armour."""

    def __init__(
        self, parent: Item | None, pixmap_path: str, *, pixmap_size: _Size = (0.0, 0.0)
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)

    def mount_to_parent(self) -> None:
        super().mount_to_parent()
        self.scale = 0.8
        self.pos = Point(-59, -176)
        if self.has_pixmap:
            self.pixmap_offset = Point()

    def unmount(self) -> None:
        super().unmount()
        self.scale = 0.8
        if self.has_pixmap:
            self.pixmap_offset = _UNMOUNTED_PIXMAP_OFFSET


class FlamebreakerArmor(Armor):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, FLAMEBREAKER_ARMOR_PIXMAP, pixmap_size=pixmap_size)


class OldShirt(Armor):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, OLD_SHIRT_PIXMAP, pixmap_size=pixmap_size)


class HeadEquipment(Item, Mountable):
    """Headgear; its durability absorbs damage before the wearer does."""

    def __init__(
        self, parent: Item | None, pixmap_path: str, *, pixmap_size: _Size = (0.0, 0.0)
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)
        self.durability = 0
        self.wearer: object | None = None

    def mount_to_parent(self) -> None:
        super().mount_to_parent()
        self.scale = 0.4
        self.pos = Point(-30, -210)
        if self.has_pixmap:
            self.pixmap_offset = Point()

    def unmount(self) -> None:
        super().unmount()
        self.scale = 0.8
        if self.has_pixmap:
            self.pixmap_offset = _UNMOUNTED_PIXMAP_OFFSET

    def apply_effects(self, character: object) -> None:
        """Bind the headgear's effects to the character wearing it."""
        self.wearer = character
        log.debug("head equipment effects applied")

    def remove_effects(self, character: object) -> None:
        """Withdraw the headgear's effects from the character, if it is the wearer."""
        if self.wearer is character:
            self.wearer = None
            log.debug("head equipment effects removed")

    def take_damage(self, damage: int) -> None:
        """Reduce durability by the damage, never below zero."""
        if self.durability <= 0:
            log.debug("head equipment has no durability left")
            return
        self.durability -= damage
        if self.durability < 0:
            self.durability = 0
            log.debug("head equipment durability depleted")
        log.debug("head equipment took %d damage, durability %d", damage, self.durability)


class CapOfTheHero(HeadEquipment):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, CAP_OF_THE_HERO_PIXMAP, pixmap_size=pixmap_size)


class HelmetOfThePaladin(HeadEquipment):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, HELMET_OF_THE_PALADIN_PIXMAP, pixmap_size=pixmap_size)
        self.durability = 100

    def mount_to_parent(self) -> None:
        super().mount_to_parent()
        self.scale = 1.1
        self.pos = Point(-80, -220)


class LegEquipment(Item, Mountable):
    """Trousers and the like."""

    def __init__(
        self, parent: Item | None, pixmap_path: str, *, pixmap_size: _Size = (0.0, 0.0)
    ) -> None:
        super().__init__(parent, pixmap_path, pixmap_size=pixmap_size)

    def mount_to_parent(self) -> None:
        super().mount_to_parent()


class WellWornTrousers(LegEquipment):
    def __init__(self, parent: Item | None = None, *, pixmap_size: _Size = (0.0, 0.0)) -> None:
        super().__init__(parent, WELL_WORN_TROUSERS_PIXMAP, pixmap_size=pixmap_size)
        self.scale = 0.8
        self.pos = Point(-60, -110)
        self.z_value = 1