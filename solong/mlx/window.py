"""Window creation, the main loop, input hooks and global window settings."""

from __future__ import annotations

import enum
import math
import os
import time

import pygame

from .errors import MlxErrno, MlxError
from .images import Canvas

RELEASE = 0
PRESS = 1
REPEAT = 2

_CLEAR_COLOR = (51, 51, 51)
_FRAME_RATE = 60


class Setting(enum.IntEnum):
    """Global settings that affect windows created afterwards."""

    STRETCH_IMAGE = 0
    FULLSCREEN = 1
    MAXIMIZED = 2
    DECORATED = 3
    HEADLESS = 4


_DEFAULTS = {
    Setting.STRETCH_IMAGE: False,
    Setting.FULLSCREEN: False,
    Setting.MAXIMIZED: False,
    Setting.DECORATED: True,
    Setting.HEADLESS: False,
}
_settings = dict(_DEFAULTS)


def set_setting(setting, value):
    """Change a global window setting."""
    try:
        key = Setting(setting)
    except ValueError:
        raise ValueError(f"Invalid settings value: {setting!r}") from None
    _settings[key] = value


def get_setting(setting):
    """Return the current value of a global window setting."""
    try:
        key = Setting(setting)
    except ValueError:
        raise ValueError(f"Invalid settings value: {setting!r}") from None
    return _settings[key]


class Key(enum.IntEnum):
    """Keyboard keys, numbered as in the GLFW key table."""

    UNKNOWN = -1
    SPACE = 32
    APOSTROPHE = 39
    COMMA = 44
    MINUS = 45
    PERIOD = 46
    SLASH = 47
    DIGIT_0 = 48
    DIGIT_1 = 49
    DIGIT_2 = 50
    DIGIT_3 = 51
    DIGIT_4 = 52
    DIGIT_5 = 53
    DIGIT_6 = 54
    DIGIT_7 = 55
    DIGIT_8 = 56
    DIGIT_9 = 57
    SEMICOLON = 59
    EQUAL = 61
    A = 65
    B = 66
    C = 67
    D = 68
    E = 69
    F = 70
    G = 71
    H = 72
    I = 73  # noqa: E741
    J = 74
    K = 75
    L = 76
    M = 77
    N = 78
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    U = 85
    V = 86
    W = 87
    X = 88
    Y = 89
    Z = 90
    ESCAPE = 256
    ENTER = 257
    TAB = 258
    BACKSPACE = 259
    INSERT = 260
    DELETE = 261
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265
    PAGE_UP = 266
    PAGE_DOWN = 267
    HOME = 268
    END = 269
    F1 = 290
    F2 = 291
    F3 = 292
    F4 = 293
    F5 = 294
    F6 = 295
    F7 = 296
    F8 = 297
    F9 = 298
    F10 = 299
    F11 = 300
    F12 = 301
    LEFT_SHIFT = 340
    LEFT_CONTROL = 341
    LEFT_ALT = 342
    RIGHT_SHIFT = 344
    RIGHT_CONTROL = 345
    RIGHT_ALT = 346


_keymap = None


def _pygame_keymap():
    """Map pygame key codes to Key members."""
    global _keymap
    if _keymap is not None:
        return _keymap
    named = {
        pygame.K_SPACE: Key.SPACE,
        pygame.K_QUOTE: Key.APOSTROPHE,
        pygame.K_COMMA: Key.COMMA,
        pygame.K_MINUS: Key.MINUS,
        pygame.K_PERIOD: Key.PERIOD,
        pygame.K_SLASH: Key.SLASH,
        pygame.K_SEMICOLON: Key.SEMICOLON,
        pygame.K_EQUALS: Key.EQUAL,
        pygame.K_ESCAPE: Key.ESCAPE,
        pygame.K_RETURN: Key.ENTER,
        pygame.K_TAB: Key.TAB,
        pygame.K_BACKSPACE: Key.BACKSPACE,
        pygame.K_INSERT: Key.INSERT,
        pygame.K_DELETE: Key.DELETE,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_DOWN: Key.DOWN,
        pygame.K_UP: Key.UP,
        pygame.K_PAGEUP: Key.PAGE_UP,
        pygame.K_PAGEDOWN: Key.PAGE_DOWN,
        pygame.K_HOME: Key.HOME,
        pygame.K_END: Key.END,
        pygame.K_LSHIFT: Key.LEFT_SHIFT,
        pygame.K_LCTRL: Key.LEFT_CONTROL,
        pygame.K_LALT: Key.LEFT_ALT,
        pygame.K_RSHIFT: Key.RIGHT_SHIFT,
        pygame.K_RCTRL: Key.RIGHT_CONTROL,
        pygame.K_RALT: Key.RIGHT_ALT,
    }
    for member in Key:
        if len(member.name) == 1:
            named[getattr(pygame, "K_" + member.name.lower())] = member
        elif member.name.startswith("DIGIT_"):
            named[getattr(pygame, "K_" + member.name[-1])] = member
        elif member.name[0] == "F" and member.name[1:].isdigit():
            named[getattr(pygame, "K_" + member.name)] = member
    _keymap = named
    return _keymap


def projection_matrix(width, height, depth):
    """Return the 4x4 orthographic projection (column major) for a window."""
    if width == 0 or height == 0:
        raise ValueError("width and height must not be zero")
    span = float(depth - -depth)
    if span:
        z_scale = -2.0 / span
        z_offset = -((depth + -depth) / span)
    else:
        z_scale = -math.inf
        z_offset = math.nan
    flip = -int(height / -height)
    return [
        2.0 / width, 0.0, 0.0, 0.0,
        0.0, 2.0 / -height, 0.0, 0.0,
        0.0, 0.0, z_scale, 0.0,
        -1.0, float(flip), z_offset, 1.0,
    ]


class Window:
    """A window showing a canvas of images, driven by a frame loop.

    Loop hooks and the close hook are called with no arguments; the key
    hook gets ``(key, action, scancode, mods)``; the resize hook gets
    ``(width, height)``.
    """

    def __init__(self, width, height, title, resize=False):
        if width <= 0:
            raise ValueError("Window width must be positive")
        if height <= 0:
            raise ValueError("Window height must be positive")
        if title is None:
            raise ValueError("Window title can't be null")

        self.width = width
        self.height = height
        self.initial_width = width
        self.initial_height = height
        self.title = title
        self.resizable = bool(resize)
        self.canvas = Canvas()
        self.delta_time = 0.0
        self.should_close = False

        self._loop_hooks = []
        self._key_hook = None
        self._close_hook = None
        self._resize_hook = None
        self._pressed = set()
        self._headless = bool(get_setting(Setting.HEADLESS))
        self._clock = pygame.time.Clock()
        self._start = time.perf_counter()

        if self._headless:
            os.environ["SDL_VIDEODRIVER"] = "dummy"
        try:
            pygame.display.init()
        except pygame.error as exc:
            raise MlxError(MlxErrno.GLFWFAIL, str(exc)) from exc
        try:
            self.surface = pygame.display.set_mode((width, height), self._flags(), 32)
        except pygame.error as exc:
            self.terminate()
            raise MlxError(MlxErrno.WINFAIL, str(exc)) from exc
        pygame.display.set_caption(title)

    def _flags(self):
        flags = 0
        if self.resizable:
            flags |= pygame.RESIZABLE
        if not get_setting(Setting.DECORATED):
            flags |= pygame.NOFRAME
        if get_setting(Setting.FULLSCREEN):
            flags |= pygame.FULLSCREEN
        if self._headless:
            flags |= pygame.HIDDEN
        return flags

    def add_loop_hook(self, func):
        """Run ``func()`` once per frame, after the hooks added before it."""
        if func is None:
            raise ValueError("Parameter can't be null")
        self._loop_hooks.append(func)

    def key_hook(self, func):
        """Call ``func(key, action, scancode, mods)`` on every key event."""
        if func is None:
            raise ValueError("Parameter can't be null")
        self._key_hook = func

    def close_hook(self, func):
        """Call ``func()`` when the user asks to close the window."""
        if func is None:
            raise ValueError("Parameter can't be null")
        self._close_hook = func

    def resize_hook(self, func):
        """Call ``func(width, height)`` when the window is resized."""
        if func is None:
            raise ValueError("Parameter can't be null")
        self._resize_hook = func

    def is_key_down(self, key):
        """Return whether the key is currently held down."""
        return Key(key) in self._pressed

    def _handle_event(self, event):
        if event.type == pygame.QUIT:
            self.should_close = True
            if self._close_hook is not None:
                self._close_hook()
        elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
            key = _pygame_keymap().get(event.key, Key.UNKNOWN)
            if event.type == pygame.KEYDOWN:
                action = REPEAT if key in self._pressed else PRESS
                if key is not Key.UNKNOWN:
                    self._pressed.add(key)
            else:
                action = RELEASE
                self._pressed.discard(key)
            if self._key_hook is not None:
                self._key_hook(
                    key, action, getattr(event, "scancode", 0), getattr(event, "mod", 0)
                )
        elif event.type == pygame.VIDEORESIZE:
            if self._resize_hook is not None:
                self._resize_hook(event.w, event.h)

    def _run_hooks(self):
        for hook in list(self._loop_hooks):
            if self.should_close:
                break
            hook()

    def _render(self):
        stretch = get_setting(Setting.STRETCH_IMAGE)
        if stretch:
            frame = pygame.Surface((self.initial_width, self.initial_height))
        else:
            frame = self.surface
        frame.fill(_CLEAR_COLOR)
        surfaces = {}
        for image, instance in self.canvas.draw_order():
            surf = surfaces.get(id(image))
            if surf is None:
                surf = pygame.image.frombuffer(
                    bytes(image.pixels), (image.width, image.height), "RGBA"
                )
                surfaces[id(image)] = surf
            frame.blit(surf, (instance.x, instance.y))
        if stretch:
            pygame.transform.scale(frame, self.surface.get_size(), self.surface)
        pygame.display.flip()

    def loop(self):
        """Run frames until the window is asked to close."""
        previous = 0.0
        while not self.should_close:
            now = time.perf_counter() - self._start
            self.delta_time = now - previous
            previous = now

            self.surface = pygame.display.get_surface() or self.surface
            self.width, self.height = self.surface.get_size()

            self._run_hooks()
            self._render()
            for event in pygame.event.get():
                self._handle_event(event)
            if not self._headless:
                self._clock.tick(_FRAME_RATE)

    def close(self):
        """Ask the loop to stop after the current frame."""
        self.should_close = True

    def terminate(self):
        """Release the window and everything drawn on it."""
        self._loop_hooks.clear()
        self._key_hook = None
        self._close_hook = None
        self._resize_hook = None
        self._pressed.clear()
        self.canvas.clear()
        pygame.display.quit()

    def set_title(self, title):
        """Change the window title."""
        if title is None:
            raise ValueError("Window title can't be null")
        self.title = title
        pygame.display.set_caption(title)

    def set_size(self, width, height):
        """Resize the window."""
        self.width = width
        self.height = height
        self.surface = pygame.display.set_mode((width, height), self._flags(), 32)