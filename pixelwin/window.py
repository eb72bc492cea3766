"""A single display window with keyboard, mouse and cursor handling."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import ClassVar

import pygame

from .constants import Action, CursorType, KeyData, Key, ModifierKey, MouseKey, MouseMode
from .errors import ErrorCode, MlxError
from .texture import Texture

NO_LIMIT = -1
"""Pass to :meth:`Window.set_limits` to leave a boundary unset."""

_UNKNOWN_KEY = -1


def _pg_const(*names: str) -> int | None:
    for name in names:
        value = getattr(pygame, name, None)
        if value is not None:
            return value
    return None


def _build_key_map() -> dict[int, int]:
    pairs: list[tuple[Key, tuple[str, ...]]] = [
        (Key.SPACE, ("K_SPACE",)),
        (Key.APOSTROPHE, ("K_QUOTE",)),
        (Key.COMMA, ("K_COMMA",)),
        (Key.MINUS, ("K_MINUS",)),
        (Key.PERIOD, ("K_PERIOD",)),
        (Key.SLASH, ("K_SLASH",)),
        (Key.SEMICOLON, ("K_SEMICOLON",)),
        (Key.EQUAL, ("K_EQUALS",)),
        (Key.LEFT_BRACKET, ("K_LEFTBRACKET",)),
        (Key.BACKSLASH, ("K_BACKSLASH",)),
        (Key.RIGHT_BRACKET, ("K_RIGHTBRACKET",)),
        (Key.GRAVE_ACCENT, ("K_BACKQUOTE",)),
        (Key.ESCAPE, ("K_ESCAPE",)),
        (Key.ENTER, ("K_RETURN",)),
        (Key.TAB, ("K_TAB",)),
        (Key.BACKSPACE, ("K_BACKSPACE",)),
        (Key.INSERT, ("K_INSERT",)),
        (Key.DELETE, ("K_DELETE",)),
        (Key.RIGHT, ("K_RIGHT",)),
        (Key.LEFT, ("K_LEFT",)),
        (Key.DOWN, ("K_DOWN",)),
        (Key.UP, ("K_UP",)),
        (Key.PAGE_UP, ("K_PAGEUP",)),
        (Key.PAGE_DOWN, ("K_PAGEDOWN",)),
        (Key.HOME, ("K_HOME",)),
        (Key.END, ("K_END",)),
        (Key.CAPS_LOCK, ("K_CAPSLOCK",)),
        (Key.SCROLL_LOCK, ("K_SCROLLLOCK", "K_SCROLLOCK")),
        (Key.NUM_LOCK, ("K_NUMLOCK", "K_NUMLOCKCLEAR")),
        (Key.PRINT_SCREEN, ("K_PRINTSCREEN", "K_PRINT")),
        (Key.PAUSE, ("K_PAUSE",)),
        (Key.KP_DECIMAL, ("K_KP_PERIOD",)),
        (Key.KP_DIVIDE, ("K_KP_DIVIDE",)),
        (Key.KP_MULTIPLY, ("K_KP_MULTIPLY",)),
        (Key.KP_SUBTRACT, ("K_KP_MINUS",)),
        (Key.KP_ADD, ("K_KP_PLUS",)),
        (Key.KP_ENTER, ("K_KP_ENTER",)),
        (Key.KP_EQUAL, ("K_KP_EQUALS",)),
        (Key.LEFT_SHIFT, ("K_LSHIFT",)),
        (Key.LEFT_CONTROL, ("K_LCTRL",)),
        (Key.LEFT_ALT, ("K_LALT",)),
        (Key.LEFT_SUPER, ("K_LSUPER", "K_LGUI", "K_LMETA")),
        (Key.RIGHT_SHIFT, ("K_RSHIFT",)),
        (Key.RIGHT_CONTROL, ("K_RCTRL",)),
        (Key.RIGHT_ALT, ("K_RALT",)),
        (Key.RIGHT_SUPER, ("K_RSUPER", "K_RGUI", "K_RMETA")),
        (Key.MENU, ("K_MENU",)),
    ]
    pairs += [(Key[letter], (f"K_{letter.lower()}",)) for letter in string.ascii_uppercase]
    pairs += [(Key[f"NUM_{digit}"], (f"K_{digit}",)) for digit in string.digits]
    pairs += [(Key[f"KP_{digit}"], (f"K_KP{digit}", f"K_KP_{digit}")) for digit in string.digits]
    pairs += [(Key[f"F{n}"], (f"K_F{n}",)) for n in range(1, 26)]

    mapping: dict[int, int] = {}
    for key, names in pairs:
        value = _pg_const(*names)
        if value is not None:
            mapping.setdefault(value, key)
    return mapping


_FROM_PYGAME_KEY = _build_key_map()
_TO_PYGAME_KEY = {key: code for code, key in _FROM_PYGAME_KEY.items()}

_MOUSE_BUTTONS = {1: MouseKey.LEFT, 2: MouseKey.MIDDLE, 3: MouseKey.RIGHT}

_MODIFIERS = [
    (_pg_const("KMOD_SHIFT"), ModifierKey.SHIFT),
    (_pg_const("KMOD_CTRL"), ModifierKey.CONTROL),
    (_pg_const("KMOD_ALT"), ModifierKey.ALT),
    (_pg_const("KMOD_GUI", "KMOD_META"), ModifierKey.SUPERKEY),
    (_pg_const("KMOD_CAPS"), ModifierKey.CAPSLOCK),
    (_pg_const("KMOD_NUM"), ModifierKey.NUMLOCK),
]

_STD_CURSORS = {
    CursorType.ARROW: "SYSTEM_CURSOR_ARROW",
    CursorType.IBEAM: "SYSTEM_CURSOR_IBEAM",
    CursorType.CROSSHAIR: "SYSTEM_CURSOR_CROSSHAIR",
    CursorType.HAND: "SYSTEM_CURSOR_HAND",
    CursorType.HRESIZE: "SYSTEM_CURSOR_SIZEWE",
    CursorType.VRESIZE: "SYSTEM_CURSOR_SIZENS",
}


def _modifiers(mods: int) -> ModifierKey:
    result = ModifierKey.NONE
    for mask, flag in _MODIFIERS:
        if mask is not None and mods & mask:
            result |= flag
    return result


def _sdl_window():
    """Return the low-level handle of the display window, if available."""
    try:
        from pygame._sdl2.video import Window as SdlWindow

        return SdlWindow.from_display_module()
    except (ImportError, AttributeError, pygame.error):
        return None


def _texture_surface(texture: Texture) -> pygame.Surface:
    if texture.width <= 0 or texture.height <= 0 or texture.bytes_per_pixel != 4:
        raise MlxError(ErrorCode.MEMFAIL)
    size = texture.width * texture.height * texture.bytes_per_pixel
    try:
        surface = pygame.image.frombuffer(
            bytes(texture.pixels[:size]), (texture.width, texture.height), "RGBA"
        )
        return surface.copy()
    except (pygame.error, ValueError) as exc:
        raise MlxError(ErrorCode.MEMFAIL) from exc


@dataclass(frozen=True)
class WindowEvent:
    """Something that happened to the window, as reported by poll_events.

    ``kind`` is one of the class constants below; the other fields are
    filled in according to it.
    """

    KEY: ClassVar[str] = "key"
    SCROLL: ClassVar[str] = "scroll"
    MOUSE: ClassVar[str] = "mouse"
    CURSOR: ClassVar[str] = "cursor"
    RESIZE: ClassVar[str] = "resize"
    CLOSE: ClassVar[str] = "close"

    kind: str
    key: KeyData | None = None
    button: MouseKey | None = None
    action: Action | None = None
    modifier: ModifierKey = ModifierKey.NONE
    x: float = 0.0
    y: float = 0.0
    width: int = 0
    height: int = 0


class Window:
    """The application window.

    Only one window exists at a time; creating one initialises the
    display and :meth:`terminate` shuts it down.
    """

    def __init__(
        self,
        width: int,
        height: int,
        title: str,
        resizable: bool = False,
        fullscreen: bool = False,
        maximized: bool = False,
        decorated: bool = True,
        headless: bool = False,
    ) -> None:
        if not isinstance(title, str):
            raise TypeError("title must be a string")
        if width <= 0 or height <= 0:
            raise ValueError("Window width and height must be positive")

        flags = 0
        if resizable:
            flags |= pygame.RESIZABLE
        if fullscreen:
            flags |= pygame.FULLSCREEN
        if not decorated:
            flags |= pygame.NOFRAME
        if headless:
            flags |= getattr(pygame, "HIDDEN", 0)
        self._flags = flags

        try:
            pygame.display.init()
        except pygame.error as exc:
            raise MlxError(ErrorCode.GLFWFAIL) from exc
        try:
            self._surface = pygame.display.set_mode((width, height), flags)
        except pygame.error as exc:
            pygame.display.quit()
            raise MlxError(ErrorCode.WINFAIL) from exc
        pygame.display.set_caption(title)

        self._alive = True
        self.should_close = False
        self.cursor_mode = MouseMode.NORMAL
        self._keys_down: set[int] = set()
        self._buttons_down: set[MouseKey] = set()
        self._mouse_pos = (0, 0)
        self._limits = (NO_LIMIT, NO_LIMIT, NO_LIMIT, NO_LIMIT)

        sdl = _sdl_window()
        self._position = tuple(sdl.position) if sdl is not None else (0, 0)
        if maximized and sdl is not None:
            sdl.maximize()

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.terminate()

    def _display(self) -> pygame.Surface:
        if not self._alive:
            raise RuntimeError("window has been terminated")
        return self._surface

    @property
    def title(self) -> str:
        self._display()
        return pygame.display.get_caption()[0]

    @property
    def width(self) -> int:
        return self.get_size()[0]

    @property
    def height(self) -> int:
        return self.get_size()[1]

    def set_title(self, title: str) -> None:
        """Change the window title."""
        if not isinstance(title, str):
            raise TypeError("title must be a string")
        self._display()
        pygame.display.set_caption(title)

    def set_position(self, x: int, y: int) -> None:
        """Move the window to screen position (x, y)."""
        self._display()
        sdl = _sdl_window()
        if sdl is not None:
            sdl.position = (x, y)
        self._position = (x, y)

    def get_position(self) -> tuple[int, int]:
        """Return the last known window position."""
        self._display()
        return self._position

    def _clamp(self, width: int, height: int) -> tuple[int, int]:
        min_w, min_h, max_w, max_h = self._limits
        if min_w != NO_LIMIT:
            width = max(width, min_w)
        if max_w != NO_LIMIT:
            width = min(width, max_w)
        if min_h != NO_LIMIT:
            height = max(height, min_h)
        if max_h != NO_LIMIT:
            height = min(height, max_h)
        return width, height

    def _apply_size(self, width: int, height: int) -> tuple[int, int]:
        size = self._clamp(width, height)
        if size != self._display().get_size():
            self._surface = pygame.display.set_mode(size, self._flags)
        return size

    def set_size(self, width: int, height: int) -> None:
        """Resize the window, respecting any size limits."""
        if width <= 0 or height <= 0:
            raise ValueError("Window width and height must be positive")
        self._apply_size(width, height)

    def get_size(self) -> tuple[int, int]:
        """Return the window's (width, height)."""
        return tuple(self._display().get_size())

    def set_limits(self, min_w: int, min_h: int, max_w: int, max_h: int) -> None:
        """Bound the window size; pass NO_LIMIT (-1) to leave a side free."""
        for value in (min_w, min_h, max_w, max_h):
            if value != NO_LIMIT and value < 0:
                raise ValueError("size limits must be non-negative or NO_LIMIT")
        if min_w != NO_LIMIT and max_w != NO_LIMIT and min_w > max_w:
            raise ValueError("minimum width exceeds maximum width")
        if min_h != NO_LIMIT and max_h != NO_LIMIT and min_h > max_h:
            raise ValueError("minimum height exceeds maximum height")
        self._limits = (min_w, min_h, max_w, max_h)
        self._apply_size(*self.get_size())

    def is_key_down(self, key: int) -> bool:
        """Return whether ``key`` is currently held down."""
        self._display()
        return key in self._keys_down

    def is_mouse_down(self, button: int) -> bool:
        """Return whether the mouse ``button`` is currently held down."""
        self._display()
        return button in self._buttons_down

    def get_mouse_pos(self) -> tuple[int, int]:
        """Return the cursor position relative to the window's top left."""
        self._display()
        return self._mouse_pos

    def set_mouse_pos(self, x: int, y: int) -> None:
        """Move the cursor to (x, y) inside the window."""
        self._display()
        pygame.mouse.set_pos((x, y))
        self._mouse_pos = (int(x), int(y))

    def set_cursor_mode(self, mode: int) -> None:
        """Show, hide or capture the cursor."""
        mode = MouseMode(mode)
        self._display()
        pygame.mouse.set_visible(mode is MouseMode.NORMAL)
        pygame.event.set_grab(mode is MouseMode.DISABLED)
        self.cursor_mode = mode

    def set_cursor(self, cursor: pygame.cursors.Cursor | None) -> None:
        """Display ``cursor``; None selects the default arrow."""
        self._display()
        if cursor is None:
            cursor = pygame.cursors.Cursor(pygame.SYSTEM_CURSOR_ARROW)
        pygame.mouse.set_cursor(cursor)

    def set_icon(self, texture: Texture) -> None:
        """Use ``texture`` as the window icon."""
        self._display()
        pygame.display.set_icon(_texture_surface(texture))

    def focus(self) -> None:
        """Bring the window to the front and give it input focus."""
        self._display()
        sdl = _sdl_window()
        if sdl is not None:
            sdl.focus()

    def _translate(self, event: pygame.event.Event) -> WindowEvent | None:
        kind = event.type
        if kind in (pygame.KEYDOWN, pygame.KEYUP):
            key = _FROM_PYGAME_KEY.get(getattr(event, "key", None), _UNKNOWN_KEY)
            mods = _modifiers(getattr(event, "mod", pygame.key.get_mods()))
            if kind == pygame.KEYDOWN:
                repeated = key != _UNKNOWN_KEY and key in self._keys_down
                action = Action.REPEAT if repeated else Action.PRESS
                if key != _UNKNOWN_KEY:
                    self._keys_down.add(key)
            else:
                action = Action.RELEASE
                self._keys_down.discard(key)
            data = KeyData(key, action, getattr(event, "scancode", 0), mods)
            return WindowEvent(WindowEvent.KEY, key=data, action=action, modifier=mods)
        if kind in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            button = _MOUSE_BUTTONS.get(getattr(event, "button", 0))
            if button is None:
                return None
            if kind == pygame.MOUSEBUTTONDOWN:
                action = Action.PRESS
                self._buttons_down.add(button)
            else:
                action = Action.RELEASE
                self._buttons_down.discard(button)
            mods = _modifiers(pygame.key.get_mods())
            return WindowEvent(WindowEvent.MOUSE, button=button, action=action, modifier=mods)
        if kind == pygame.MOUSEWHEEL:
            dx = float(getattr(event, "precise_x", event.x))
            dy = float(getattr(event, "precise_y", event.y))
            return WindowEvent(WindowEvent.SCROLL, x=dx, y=dy)
        if kind == pygame.MOUSEMOTION:
            x, y = event.pos
            self._mouse_pos = (int(x), int(y))
            return WindowEvent(WindowEvent.CURSOR, x=float(x), y=float(y))
        if kind == pygame.VIDEORESIZE:
            width, height = self._apply_size(event.w, event.h)
            return WindowEvent(WindowEvent.RESIZE, width=width, height=height)
        if kind == getattr(pygame, "WINDOWMOVED", None):
            self._position = (event.x, event.y)
            return None
        if kind == pygame.QUIT:
            self.should_close = True
            return WindowEvent(WindowEvent.CLOSE)
        return None

    def poll_events(self) -> list[WindowEvent]:
        """Process pending events and return those of interest, in order."""
        self._display()
        events = []
        for raw in pygame.event.get():
            translated = self._translate(raw)
            if translated is not None:
                events.append(translated)
        return events

    def present(self, surface: pygame.Surface | None) -> None:
        """Copy ``surface`` to the window's top left and show the frame."""
        display = self._display()
        if surface is not None:
            display.blit(surface, (0, 0))
        pygame.display.flip()

    def terminate(self) -> None:
        """Close the window and shut the display down."""
        if self._alive:
            self._alive = False
            pygame.display.quit()


def create_std_cursor(kind: int) -> pygame.cursors.Cursor:
    """Create one of the system's standard cursors."""
    kind = CursorType(kind)
    if kind is CursorType.VRESIZE:
        raise ValueError("Invalid standard cursor type")
    try:
        return pygame.cursors.Cursor(getattr(pygame, _STD_CURSORS[kind]))
    except pygame.error as exc:
        raise MlxError(ErrorCode.MEMFAIL) from exc


def create_cursor(texture: Texture) -> pygame.cursors.Cursor:
    """Create a cursor showing ``texture``, with its hotspot at the top left."""
    surface = _texture_surface(texture)
    try:
        return pygame.cursors.Cursor((0, 0), surface)
    except pygame.error as exc:
        raise MlxError(ErrorCode.MEMFAIL) from exc


def get_monitor_size(index: int) -> tuple[int, int]:
    """Return the size of monitor ``index``, or (0, 0) if it is unknown."""
    if index < 0:
        raise ValueError("Index out of bounds")
    if not pygame.display.get_init():
        return (0, 0)
    sizes = pygame.display.get_desktop_sizes()
    if index >= len(sizes):
        return (0, 0)
    width, height = sizes[index]
    return (width, height)