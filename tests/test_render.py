import numpy as np
import pytest

from termvideo.pixels import pack_rgb
from termvideo.render import render, screen

CW, CH = 8, 16


def _glyph_table():
    glyph = np.array([0, 0, 0, 0xFFFFFFFF], dtype=np.uint32)
    return np.concatenate([glyph, ~glyph])


def test_render_uniform_cell():
    colour = pack_rgb(10, 20, 30)
    data = np.full(CW * CH, colour, dtype=np.uint32)
    term, palette = render(data, CW, CH, 1, 1, CW, CH, _glyph_table())
    assert list(palette) == [colour, colour]
    assert term.size == 1


def test_render_split_cell_matches_glyph():
    white = pack_rgb(255, 255, 255)
    image = np.zeros((CH, CW), dtype=np.uint32)
    image[12:, :] = white
    term, palette = render(image.ravel(), CW, CH, 1, 1, CW, CH, _glyph_table())
    assert list(term) == [0]
    assert list(palette) == [0, white]


def test_render_inverted_glyph_selected():
    white = pack_rgb(255, 255, 255)
    image = np.zeros((CH, CW), dtype=np.uint32)
    image[12:, :] = white
    glyph = np.array([0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF, 0], dtype=np.uint32)
    table = np.concatenate([glyph, ~glyph])
    term, _ = render(image.ravel(), CW, CH, 1, 1, CW, CH, table)
    assert list(term) == [1]


def test_render_two_cells():
    red = pack_rgb(200, 0, 0)
    blue = pack_rgb(0, 0, 200)
    image = np.zeros((CH, 2 * CW), dtype=np.uint32)
    image[:, :CW] = red
    image[:, CW:] = blue
    term, palette = render(image.ravel(), 2 * CW, CH, 2, 1, CW, CH, _glyph_table())
    assert term.size == 2
    assert list(palette) == [red, red, blue, blue]


def test_render_size_mismatch():
    data = np.zeros(CW * CH, dtype=np.uint32)
    with pytest.raises(ValueError):
        render(data, CW, CH, 2, 1, CW, CH, _glyph_table())


def test_screen_even_index():
    dark = pack_rgb(1, 2, 3)
    bright = pack_rgb(4, 5, 6)
    text = screen([2 * (ord("A") - 32)], [dark, bright], 1, 1)
    assert text == "\x1b[0;0H\x1b[38;2;4;5;6m\x1b[48;2;1;2;3mA\x1b[0m\n"


def test_screen_odd_index_swaps_colours():
    dark = pack_rgb(1, 2, 3)
    bright = pack_rgb(4, 5, 6)
    text = screen([1], [dark, bright], 1, 1)
    assert text == "\x1b[0;0H\x1b[38;2;1;2;3m\x1b[48;2;4;5;6m \x1b[0m\n"


def test_screen_line_structure():
    term = [0] * 6
    palette = [0] * 12
    text = screen(term, palette, 3, 2)
    assert text.startswith("\x1b[0;0H")
    assert text.count("\x1b[0m\n") == 2
    assert text.count("\x1b[38;2;") == 6


def test_screen_short_palette():
    with pytest.raises(ValueError):
        screen([0, 0], [0, 0], 2, 1)