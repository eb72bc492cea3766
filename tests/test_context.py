import pygame
import pytest

from pixelwin.constants import Action, Key, Setting
from pixelwin.context import Mlx, get_setting, get_time, set_setting
from pixelwin.errors import ErrorCode, MlxError
from pixelwin.texture import Texture

RED = 0xFF0000FF
BLUE = 0x0000FFFF


@pytest.fixture(autouse=True)
def _restore_settings():
    saved = {setting: get_setting(setting) for setting in Setting}
    yield
    for setting, value in saved.items():
        set_setting(setting, value)


@pytest.fixture
def mlx(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    handle = Mlx(32, 24, "test", False)
    yield handle
    handle.terminate()


def _filled(mlx, width, height, color):
    image = mlx.new_image(width, height)
    for y in range(height):
        for x in range(width):
            image.put_pixel(x, y, color)
    return image


def _screen_rgb(x, y):
    return tuple(pygame.display.get_surface().get_at((x, y)))[:3]


def _queue_depths(mlx):
    return [call.z() for call in mlx.render_queue]


def test_setting_round_trip():
    set_setting(Setting.STRETCH_IMAGE, True)
    assert get_setting(Setting.STRETCH_IMAGE) is True
    set_setting(Setting.STRETCH_IMAGE, False)
    assert get_setting(Setting.STRETCH_IMAGE) is False


def test_default_decorated_setting():
    assert get_setting(Setting.DECORATED) is True


def test_invalid_setting_rejected():
    with pytest.raises(ValueError):
        set_setting(99, 1)


def test_invalid_window_size(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    with pytest.raises(ValueError):
        Mlx(0, 10, "bad", False)


def test_new_image_registered(mlx):
    image = mlx.new_image(4, 5)
    assert image in mlx.images
    assert (image.width, image.height) == (4, 5)


def test_new_image_bad_dimensions(mlx):
    with pytest.raises(MlxError) as info:
        mlx.new_image(0, 5)
    assert info.value.code is ErrorCode.INVDIM


def test_image_to_window_indices_and_depth(mlx):
    image = mlx.new_image(2, 2)
    first = mlx.image_to_window(image, 1, 2)
    second = mlx.image_to_window(image, 3, 4)
    assert (first, second) == (0, 1)
    assert image.instances[1].z > image.instances[0].z
    assert (image.instances[0].x, image.instances[0].y) == (1, 2)
    assert image.instances[0].enabled
    assert len(mlx.render_queue) == 2


def test_render_draws_pixels(mlx):
    image = _filled(mlx, 3, 3, RED)
    index = mlx.image_to_window(image, 2, 3)
    mlx.render_frame()
    assert index == 0
    assert _queue_depths(mlx) == [image.instances[0].z]
    assert _screen_rgb(3, 4) == (255, 0, 0)
    assert _screen_rgb(30, 20) != (255, 0, 0)


def test_later_instance_on_top_and_depth_change(mlx):
    red = _filled(mlx, 4, 4, RED)
    blue = _filled(mlx, 4, 4, BLUE)
    mlx.image_to_window(red, 0, 0)
    mlx.image_to_window(blue, 0, 0)
    mlx.render_frame()
    assert _queue_depths(mlx) == [red.instances[0].z, blue.instances[0].z]
    assert _screen_rgb(1, 1) == (0, 0, 255)

    mlx.set_instance_depth(red.instances[0], 100)
    mlx.render_frame()
    assert _queue_depths(mlx) == [blue.instances[0].z, 100]
    assert _screen_rgb(1, 1) == (255, 0, 0)


def test_disabled_image_not_drawn(mlx):
    image = _filled(mlx, 3, 3, RED)
    mlx.image_to_window(image, 0, 0)
    image.enabled = False
    mlx.render_frame()
    assert len(mlx.render_queue) == 1
    assert _screen_rgb(1, 1) == _screen_rgb(30, 20)


def test_delete_image(mlx):
    image = _filled(mlx, 3, 3, RED)
    mlx.image_to_window(image, 0, 0)
    mlx.image_to_window(image, 5, 5)
    mlx.delete_image(image)
    assert image not in mlx.images
    assert len(mlx.render_queue) == 0
    mlx.render_frame()
    assert _screen_rgb(1, 1) == _screen_rgb(30, 20)


def test_texture_to_image(mlx):
    pixels = bytearray(range(2 * 2 * 4))
    image = mlx.texture_to_image(Texture(2, 2, pixels))
    assert bytes(image.pixels) == bytes(pixels)
    assert image in mlx.images


def test_loop_runs_hooks_until_closed(mlx):
    frames = []

    def hook():
        frames.append(mlx.delta_time)
        if len(frames) == 3:
            mlx.close_window()

    mlx.loop_hook(hook)
    mlx.loop()
    assert mlx.window.should_close is True
    assert len(frames) == 3
    assert all(delta >= 0 for delta in frames)


def test_loop_hooks_stop_after_close(mlx):
    calls = []
    mlx.loop_hook(lambda: (calls.append("first"), mlx.close_window()))
    mlx.loop_hook(lambda: calls.append("second"))
    mlx.loop()
    assert calls == ["first"]


def test_loop_hook_requires_callable(mlx):
    with pytest.raises(TypeError):
        mlx.loop_hook(42)


def test_key_hook_receives_key_data(mlx):
    received = []
    mlx.key_hook(received.append)
    pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a, mod=0, scancode=4))
    mlx.render_frame()
    assert len(received) == 1
    assert received[0].key == Key.A
    assert received[0].action is Action.PRESS


def test_scroll_hook(mlx):
    deltas = []
    mlx.scroll_hook(lambda dx, dy: deltas.append((dx, dy)))
    pygame.event.post(pygame.event.Event(pygame.MOUSEWHEEL, x=1, y=-2))
    mlx.render_frame()
    assert deltas == [(1.0, -2.0)]


def test_close_hook_ends_loop(mlx):
    closed = []
    mlx.close_hook(lambda: closed.append(True))
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    mlx.loop()
    assert closed == [True]
    assert mlx.window.should_close


def test_get_time_monotonic(mlx):
    first = get_time()
    second = get_time()
    assert 0 <= first <= second


def test_terminate_releases_everything(mlx):
    image = mlx.new_image(2, 2)
    mlx.image_to_window(image, 0, 0)
    mlx.terminate()
    assert mlx.images == []
    assert len(mlx.render_queue) == 0
    with pytest.raises(RuntimeError):
        mlx.render_frame()