# pixelwin

A small library for putting pixels on a window. You create RGBA images,
draw into them pixel by pixel, place instances of them on the window at a
position and depth, and run a loop that calls your hooks every frame and
draws every enabled instance in depth order. The window, input and drawing
are handled through pygame.

Textures can be loaded from PNG files (through Pillow) and from the XPM42
text format, and turned into images.

## Installing

```
pip install pixelwin
```

For running the tests:

```
pip install "pixelwin[test]"
pytest
```

## A first window

```python
from pixelwin.context import Mlx
from pixelwin.constants import Key

mlx = Mlx(640, 480, "demo", False)

img = mlx.new_image(64, 64)
for y in range(64):
    for x in range(64):
        img.put_pixel(x, y, 0xFF0000FF)  # RGBA: opaque red

mlx.image_to_window(img, 100, 100)

def on_frame():
    if mlx.window.is_key_down(Key.ESCAPE):
        mlx.close_window()

mlx.loop_hook(on_frame)
mlx.loop()
mlx.terminate()
```

`Mlx` is also a context manager; leaving the `with` block calls
`terminate()`. Colours are 32-bit integers in the form `0xRRGGBBAA`.

## The modules

- `pixelwin.context` – `Mlx`, the handle that owns the window, images,
  render queue and hooks; `set_setting`, `get_setting` and `get_time`.
- `pixelwin.window` – `Window`, a single pygame window with keyboard,
  mouse and cursor state; `WindowEvent`; `create_std_cursor`,
  `create_cursor`, `get_monitor_size`; `NO_LIMIT`.
- `pixelwin.image` – `Image` (an RGBA pixel buffer) and `Instance`
  (one placement of it: `x`, `y`, `z`, `enabled`).
- `pixelwin.renderqueue` – `DrawCall` and `RenderQueue`.
- `pixelwin.texture` – `Texture` and `load_png`.
- `pixelwin.xpm42` – `Xpm`, `parse_xpm42` and `load_xpm42`.
- `pixelwin.constants` – `Action`, `ModifierKey`, `MouseKey`,
  `MouseMode`, `CursorType`, `Key`, `Setting`, `KeyData`.
- `pixelwin.errors` – `ErrorCode`, `MlxError`, `strerror`.
- `pixelwin.utils` – `fnv_hash`, `rgba_to_mono`, `pack_rgba`,
  `get_texoffset`.

## Images and instances

- `Mlx.new_image(width, height)` makes a blank (all zero) image; width and
  height must lie between 1 and 32767, otherwise `MlxError` with
  `ErrorCode.INVDIM` is raised.
- `Image.put_pixel(x, y, color)` and `Image.get_pixel(x, y)` write and read
  one pixel; coordinates outside the image raise `MlxError` with
  `ErrorCode.INVPOS`.
- `Mlx.image_to_window(image, x, y)` adds an instance of the image and
  returns its index in `image.instances`. Each new instance gets the next
  depth value, so later instances sit on top.
- `Mlx.set_instance_depth(instance, z)` moves an instance in depth; the
  render queue is re-sorted by ascending depth before the next frame.
- `Image.resize(width, height)` scales the pixels with nearest-neighbour
  sampling.
- Setting `image.enabled` or `instance.enabled` to `False` stops it being
  drawn without deleting it.
- `Mlx.delete_image(image)` removes the image and all its draw calls.

## Textures

```python
from pixelwin.texture import load_png
from pixelwin.xpm42 import load_xpm42

tex = load_png("wall.png")
wall = mlx.texture_to_image(tex)

xpm = load_xpm42("sprite.xpm42")
sprite = mlx.texture_to_image(xpm.texture)
```

`load_png` raises `MlxError` with `ErrorCode.INVPNG` for a file that is
missing, unreadable or not a PNG. `Texture.to_image()` makes an image
without registering it with an `Mlx`.

An XPM42 file starts with the line `!XPM42`, then a header
`width height colour_count chars_per_pixel mode`, where mode is `c` for
colour or `m` for monochrome (every colour turned to grayscale), then one
line per colour (`.X #RRGGBBAA`), then one line of pixel characters per
row. `load_xpm42` raises `MlxError` with `INVEXT` if the path does not
contain `.xpm42`, `INVFILE` if the file cannot be opened and `INVXPM` if
its contents are malformed. `parse_xpm42` reads from an already open text
or binary stream, or any iterable of lines.

## Hooks

All hooks are plain callables; pass extra state through closures.

| Method | Called with |
| --- | --- |
| `loop_hook(func)` | nothing; once per frame, in the order added |
| `key_hook(func)` | a `KeyData` (`key`, `action`, `os_key`, `modifier`) |
| `mouse_hook(func)` | `(button, action, modifiers)` |
| `scroll_hook(func)` | `(xdelta, ydelta)` |
| `cursor_hook(func)` | `(x, y)` |
| `resize_hook(func)` | `(width, height)` |
| `close_hook(func)` | nothing, when the user asks to close the window |

`Mlx.loop()` calls `render_frame()` until `close_window()` is called or
the window is closed. `render_frame()` runs the loop hooks, draws the
queue, presents the frame and then dispatches pending window events to
the hooks; `delta_time` holds the time since the previous frame.

## The window

`mlx.window` is a `Window`. Besides `is_key_down`, `is_mouse_down` and
`get_mouse_pos`, it offers `set_title`, `set_position`, `get_position`,
`set_size`, `get_size`, `set_limits` (pass `NO_LIMIT` to leave a side
free), `set_mouse_pos`, `set_cursor_mode` (a `MouseMode`), `set_cursor`,
`set_icon` (a `Texture`) and `focus`. `create_std_cursor(CursorType...)`
and `create_cursor(texture)` make cursors for `set_cursor`;
`get_monitor_size(index)` returns `(0, 0)` when the size is not known.

## Settings

Call `set_setting` from `pixelwin.context` with a `Setting` from
`pixelwin.constants` before creating an `Mlx` to start fullscreen,
maximised, undecorated or headless. `Setting.STRETCH_IMAGE` draws the
frame at the initial window size and scales it to the current size.

## Errors

Failures raise `MlxError` from `pixelwin.errors`; its `code` is an
`ErrorCode`, and `strerror(code)` gives the English description. Invalid
arguments such as a non-positive window size raise `ValueError`, and a
non-callable hook raises `TypeError`.

## What it does not do

There is no text drawing: `pixelwin.utils.get_texoffset` computes where a
character would sit in a font atlas, but the package ships no font and has
no function that draws strings onto an image.