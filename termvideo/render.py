"""Turning a video frame into coloured terminal characters."""

from __future__ import annotations

from termvideo.pixels import (
    ASCII_START,
    best_glyph,
    bimodal_luma_cluster,
    calc_similarity,
    compute_brightness,
    repack,
    unpack_rgb,
)


def render(data, width, height, term_width, term_height, char_width, char_height, glyphs):
    """Pick a glyph and a two-colour palette for every terminal cell.

    ``data`` is a packed-colour frame of ``width`` x ``height`` pixels that
    covers the terminal exactly. Returns ``(term, palette)``: one glyph
    table index per cell, and the dark and bright colour of each cell.
    """
    if width != term_width * char_width or height != term_height * char_height:
        raise ValueError(
            f"a {width}x{height} frame does not cover {term_width}x{term_height} "
            f"cells of {char_width}x{char_height} pixels"
        )
    repacked = repack(data, term_width, term_height, char_width, char_height)
    brightness = compute_brightness(repacked)
    masks, palette = bimodal_luma_cluster(
        repacked, brightness, term_width, term_height, char_width, char_height
    )
    similarity = calc_similarity(masks, glyphs)
    return best_glyph(similarity), palette


def screen(term, palette, term_width, term_height):
    """Compose the ANSI escape text that draws one frame from the top-left corner.

    An even glyph index draws the character in the bright colour on the dark
    one; an odd index swaps the two.
    """
    cells = term_width * term_height
    if len(term) < cells or len(palette) < cells * 2:
        raise ValueError("term and palette are too short for the terminal size")

    parts = ["\x1b[0;0H"]
    for row in range(term_height):
        for idx in range(row * term_width, (row + 1) * term_width):
            glyph = int(term[idx])
            dark = int(palette[idx * 2])
            bright = int(palette[idx * 2 + 1])
            fg, bg = (bright, dark) if glyph % 2 == 0 else (dark, bright)
            fr, fgreen, fb = unpack_rgb(fg)
            br, bgreen, bb = unpack_rgb(bg)
            chr_ = chr((glyph // 2 + ASCII_START) & 0xFF)
            parts.append(
                f"\x1b[38;2;{fr};{fgreen};{fb}m\x1b[48;2;{br};{bgreen};{bb}m{chr_}"
            )
        parts.append("\x1b[0m\n")
    return "".join(parts)