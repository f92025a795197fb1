"""Tests for the XOR-blit framebuffer."""

from __future__ import annotations

import pytest

from chip8.display.framebuffer import HEIGHT, WIDTH, Framebuffer


def test_new_framebuffer_is_blank():
    fb = Framebuffer()
    assert fb.lit_count() == 0
    assert len(fb.pixels()) == WIDTH * HEIGHT == 2048


def test_draw_twice_reports_collision_only_on_second_draw():
    fb = Framebuffer()
    sprite = [0xFF, 0xFF]

    assert fb.draw_sprite(10, 5, sprite) is False
    assert fb.lit_count() == 16

    assert fb.draw_sprite(10, 5, sprite) is True
    assert fb.lit_count() == 0


def test_overlap_that_only_lights_pixels_is_not_a_collision():
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0b11110000])

    # Source bits land on unlit pixels only.
    assert fb.draw_sprite(0, 0, [0b00001111]) is False
    assert fb.lit_count() == 8


def test_rows_drawn_msb_first():
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0b10000001])

    assert fb.pixel(0, 0) is True
    assert fb.pixel(7, 0) is True
    assert not any(fb.pixel(col, 0) for col in range(1, 7))


def test_draw_wraps_horizontally():
    fb = Framebuffer()
    fb.draw_sprite(WIDTH - 1, 3, [0xFF])

    assert fb.pixel(WIDTH - 1, 3) is True
    # The remaining seven columns continue at column 0 of the same row.
    for col in range(7):
        assert fb.pixel(col, 3) is True
    assert fb.pixel(7, 3) is False
    assert fb.lit_count() == 8


def test_draw_wraps_vertically():
    fb = Framebuffer()
    fb.draw_sprite(0, HEIGHT - 1, [0x80, 0x80])

    assert fb.pixel(0, HEIGHT - 1) is True
    assert fb.pixel(0, 0) is True


def test_coordinates_beyond_grid_are_taken_modulo():
    fb = Framebuffer()
    fb.draw_sprite(WIDTH + 2, HEIGHT + 1, [0x80])
    assert fb.pixel(2, 1) is True


def test_clear_resets_every_pixel():
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0xFF] * 15)
    fb.clear()
    assert fb.lit_count() == 0


def test_pixel_view_is_row_major_and_reiterable():
    fb = Framebuffer()
    fb.draw_sprite(1, 1, [0x80])
    view = fb.pixels()

    first = list(view)
    second = list(view)
    assert first == second
    assert first.index(True) == 1 * WIDTH + 1
    assert view[WIDTH + 1] is True
    assert view[-1] is False
    with pytest.raises(IndexError):
        view[WIDTH * HEIGHT]


def test_pixel_view_tracks_live_framebuffer():
    fb = Framebuffer()
    view = fb.pixels()
    assert not any(view)

    fb.draw_sprite(0, 0, [0x80])
    assert view[0] is True


def test_as_array_is_read_only_copy():
    fb = Framebuffer()
    fb.draw_sprite(0, 0, [0x80])
    array = fb.as_array()

    assert array.shape == (HEIGHT, WIDTH)
    with pytest.raises(ValueError):
        array[0, 0] = False

    fb.clear()
    assert bool(array[0, 0]) is True
