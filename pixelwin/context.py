"""The library handle: window, images, render queue, hooks and main loop."""

from __future__ import annotations

import time
from collections.abc import Callable

import pygame

from .constants import DEFAULT_SETTINGS, KeyData, Setting
from .errors import ErrorCode, MlxError
from .image import Image, Instance
from .renderqueue import DrawCall, RenderQueue
from .texture import Texture
from .window import Window, WindowEvent

_CLEAR_COLOR = (51, 51, 51)

_settings: dict[Setting, int] = dict(DEFAULT_SETTINGS)
_epoch = time.perf_counter()


def set_setting(setting: int, value: int) -> None:
    """Change a global setting; takes effect for windows created afterwards."""
    _settings[Setting(setting)] = value


def get_setting(setting: int) -> int:
    """Return the current value of a global setting."""
    return _settings[Setting(setting)]


def get_time() -> float:
    """Return the seconds elapsed since the library was last initialised."""
    return time.perf_counter() - _epoch


def _require_callable(func: object) -> None:
    if not callable(func):
        raise TypeError("hook must be callable")


def _image_surface(image: Image) -> pygame.Surface:
    return pygame.image.frombuffer(bytes(image.pixels), (image.width, image.height), "RGBA")


class Mlx:
    """A window together with everything drawn on it.

    Hooks are plain callables; pass extra state through closures.
    """

    def __init__(self, width: int, height: int, title: str, resize: bool = False) -> None:
        global _epoch
        if not isinstance(title, str):
            raise TypeError("title must be a string")
        if width <= 0:
            raise ValueError("Window width must be positive")
        if height <= 0:
            raise ValueError("Window height must be positive")
        _epoch = time.perf_counter()

        self.window = Window(
            width,
            height,
            title,
            resizable=bool(resize),
            fullscreen=bool(_settings[Setting.FULLSCREEN]),
            maximized=bool(_settings[Setting.MAXIMIZED]),
            decorated=bool(_settings[Setting.DECORATED]),
            headless=bool(_settings[Setting.HEADLESS]),
        )
        self.width = width
        self.height = height
        self.initial_width = width
        self.initial_height = height
        self.delta_time = 0.0
        self._last_start = 0.0

        self.images: list[Image] = []
        self.render_queue = RenderQueue()
        self._zdepth = 0
        self._sort_pending = False

        self._loop_hooks: list[Callable[[], None]] = []
        self._key_hook: Callable[[KeyData], None] | None = None
        self._scroll_hook: Callable[[float, float], None] | None = None
        self._mouse_hook: Callable[..., None] | None = None
        self._cursor_hook: Callable[[float, float], None] | None = None
        self._close_hook: Callable[[], None] | None = None
        self._resize_hook: Callable[[int, int], None] | None = None
        self._terminated = False

    def __enter__(self) -> Mlx:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.terminate()

    # Images

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank image owned by this handle."""
        image = Image(width, height)
        self.images.insert(0, image)
        return image

    def image_to_window(self, image: Image, x: int, y: int) -> int:
        """Show a new instance of ``image`` at (x, y); return its index.

        Each new instance is placed one layer above all earlier ones.
        """
        index = image.add_instance(x, y, self._zdepth)
        self._zdepth += 1
        self.render_queue.push_front(DrawCall(image, index))
        self._sort_pending = True
        return index

    def set_instance_depth(self, instance: Instance, z: int) -> None:
        """Change an instance's depth; the queue is re-sorted before the next frame."""
        if instance.z == z:
            return
        instance.z = z
        self._sort_pending = True

    def delete_image(self, image: Image) -> None:
        """Remove an image and all its instances from rendering."""
        self.render_queue.remove_image(image)
        self.images = [kept for kept in self.images if kept is not image]

    def texture_to_image(self, texture: Texture) -> Image:
        """Create an image owned by this handle from a texture's pixels."""
        image = texture.to_image()
        self.images.insert(0, image)
        return image

    # Hooks

    def loop_hook(self, func: Callable[[], None]) -> None:
        """Add a function called once per frame; hooks run in the order added."""
        _require_callable(func)
        self._loop_hooks.append(func)

    def key_hook(self, func: Callable[[KeyData], None]) -> None:
        """Set the function called with a KeyData for every key event."""
        _require_callable(func)
        self._key_hook = func

    def scroll_hook(self, func: Callable[[float, float], None]) -> None:
        """Set the function called with (xdelta, ydelta) when scrolling."""
        _require_callable(func)
        self._scroll_hook = func

    def mouse_hook(self, func: Callable[..., None]) -> None:
        """Set the function called with (button, action, modifiers) on clicks."""
        _require_callable(func)
        self._mouse_hook = func

    def cursor_hook(self, func: Callable[[float, float], None]) -> None:
        """Set the function called with (x, y) when the cursor moves."""
        _require_callable(func)
        self._cursor_hook = func

    def close_hook(self, func: Callable[[], None]) -> None:
        """Set the function called when the user asks to close the window."""
        _require_callable(func)
        self._close_hook = func

    def resize_hook(self, func: Callable[[int, int], None]) -> None:
        """Set the function called with (width, height) after a resize."""
        _require_callable(func)
        self._resize_hook = func

    # Frame handling

    def _run_loop_hooks(self) -> None:
        for hook in list(self._loop_hooks):
            if self.window.should_close:
                break
            hook()

    def _compose(self) -> pygame.Surface:
        if self._sort_pending:
            self._sort_pending = False
            self.render_queue.sort()

        stretch = bool(_settings[Setting.STRETCH_IMAGE])
        size = (self.initial_width, self.initial_height) if stretch else (self.width, self.height)
        canvas = pygame.Surface(size)
        canvas.fill(_CLEAR_COLOR)

        surfaces: dict[int, pygame.Surface] = {}
        for call in self.render_queue:
            image = call.image
            instance = image.instances[call.instance_id]
            if not (image.enabled and instance.enabled):
                continue
            surface = surfaces.get(id(image))
            if surface is None:
                surface = _image_surface(image)
                surfaces[id(image)] = surface
            canvas.blit(surface, (instance.x, instance.y))

        if stretch and size != (self.width, self.height):
            canvas = pygame.transform.scale(canvas, (self.width, self.height))
        return canvas

    def _dispatch(self, event: WindowEvent) -> None:
        if event.kind == WindowEvent.KEY and self._key_hook and event.key is not None:
            self._key_hook(event.key)
        elif event.kind == WindowEvent.SCROLL and self._scroll_hook:
            self._scroll_hook(event.x, event.y)
        elif event.kind == WindowEvent.MOUSE and self._mouse_hook:
            self._mouse_hook(event.button, event.action, event.modifier)
        elif event.kind == WindowEvent.CURSOR and self._cursor_hook:
            self._cursor_hook(event.x, event.y)
        elif event.kind == WindowEvent.RESIZE:
            self.width, self.height = event.width, event.height
            if self._resize_hook:
                self._resize_hook(event.width, event.height)
        elif event.kind == WindowEvent.CLOSE and self._close_hook:
            self._close_hook()

    def render_frame(self) -> None:
        """Run one frame: loop hooks, drawing, presenting and event handling."""
        if self._terminated:
            raise RuntimeError("handle has been terminated")
        start = get_time()
        self.delta_time = start - self._last_start
        self._last_start = start

        self.width, self.height = self.window.get_size()
        self._run_loop_hooks()
        self.window.present(self._compose())
        for event in self.window.poll_events():
            self._dispatch(event)

    def loop(self) -> None:
        """Render frames until the window is asked to close."""
        while not self._terminated and not self.window.should_close:
            self.render_frame()

    def close_window(self) -> None:
        """Ask the main loop to stop after the current frame."""
        self.window.should_close = True

    def terminate(self) -> None:
        """Close the window and release every image, hook and draw call."""
        if self._terminated:
            return
        self._terminated = True
        self.window.terminate()
        self._loop_hooks.clear()
        self.render_queue = RenderQueue()
        self.images.clear()


__all__ = ["Mlx", "MlxError", "ErrorCode", "get_setting", "get_time", "set_setting"]