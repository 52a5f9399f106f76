# frostarena

This package holds the game logic for a small two-player arena
game. Two heroes share an icy field that has icicles and a floating
platform. They run, jump, crouch, pick up armour and helmets, and
fire pistols at each other. A single-player battlefield scene is
also included.

The package does no drawing and opens no window. You drive each
scene one frame at a time. You feed in keys with a `Key` value and
read back positions, velocities, health and debug shapes.

## Installation

```
pip install .
```

The package needs only the standard library.

## Driving a scene

```python
from frostarena.ice_scene import IceScene
from frostarena.scene import Key

scene = IceScene(clock=lambda: 0)
scene.key_press(Key.D)       # player 1 walks right
scene.game_loop(16)          # one frame at t = 16 ms
scene.game_loop(32)
print(scene.player1.pos, scene.player1.velocity)
scene.key_release(Key.D)
```

`IceScene.game_loop(now_ms)` runs one frame. The frame has three
steps: input, movement (gravity, jumping, collisions, ice friction),
then picking up items. After that it advances the walk animations
and refreshes the debug overlay.

Controls in `IceScene`:

| Action            | Player 1 | Player 2      |
|-------------------|----------|---------------|
| Move left/right   | `Key.A` / `Key.D` | `Key.LEFT` / `Key.RIGHT` |
| Jump              | `Key.W`  | `Key.UP`      |
| Crouch / pick up  | `Key.S`  | `Key.DOWN`    |
| Shoot             | `Key.J`  | `Key.DIGIT_0` |

`Key.H` toggles the debug overlay.

`BattleScene` (in `frostarena.battle_scene`) has one character.
`Key.A` and `Key.D` walk, and `Key.S` crouches and picks up. You
advance it with `update(now_ms)`. On the battlefield the only thing
a character can pick up is armour.

## Modules

- `frostarena.items`: `Point`, `Rect`, the `SceneID` enum, the base
  `Item` (a scene-graph node) and the `Mountable` mixin.
- `frostarena.equipment`: armour (`FlamebreakerArmor`, `OldShirt`),
  headgear (`CapOfTheHero`, `HelmetOfThePaladin` with durability
  100) and leg equipment (`WellWornTrousers`).
- `frostarena.weapons`: `Weapon`, which tracks ammunition and a
  cooldown. `ShabbyPistol` has six rounds, 300 ms between shots and
  attack power 5.
- `frostarena.bullets`: `Bullet` and `BulletBasic`. A `BulletBasic`
  damages the first character it touches, or bursts on an obstacle.
- `frostarena.character`: `Character` holds the input flags, jump
  and gravity, health with a `HealthBar`, and the equipment slots.
- `frostarena.link`: `Link` is the default hero. It has poses and a
  two-frame walk cycle.
- `frostarena.maps`: `Map`, `Battlefield`, `Settingsfield` and
  `Icefield`, plus `Obstacle` and `select_random_icefield_pixmap_path`.
  - The purple ice (`map_type == 1`) is picked one time in five.
  - Purple ice has friction 0.02 and white ice has 0.15.
  - An icefield creates an icicle or platform obstacle only when
    you pass that decoration's size, for example
    `Icefield(pixmap_size=(1280, 720), ice_platform_size=(200, 150))`.
- `frostarena.scene`: the base `Scene`, the `Key` enum, and
  scene-change requests (`connect_scene_change`,
  `request_scene_change`).
- `frostarena.debug_overlay`: `DebugOverlay` builds `DebugShape`
  records. They cover the scene border, the floor line, the
  obstacles and each player's head and body boxes. `describe_player`
  gives a player's info text.

Image paths are kept as plain strings. No image is ever loaded, so
sizes have to be passed in through `pixmap_size` where they matter.

## What the package does not do

- It has no command and no window. Nothing renders the scenes or
  reads a real keyboard.
- It has no settings screen.
- No object switches between scenes. A scene can emit a
  `request_scene_change(SceneID...)`, but acting on it is up to the
  caller.

## Tests

```
pip install .[test]
pytest
```