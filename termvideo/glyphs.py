"""Rasterising the printable ASCII characters into cell-sized bit masks."""

from __future__ import annotations

import os

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from termvideo.pixels import ASCII_END, ASCII_START, MASK_BITS, MASK_WORDS

CHAR_WIDTH = 8
CHAR_HEIGHT = 16
FONT_SIZE = 16


def render_centered(font, character):
    """Rasterise ``character`` centred in a 16x8 matrix of 0/1 values.

    Pixels with coverage of at least 128 become 1. A glyph larger than the
    cell is cropped around its centre.
    """
    matrix = np.zeros((CHAR_HEIGHT, CHAR_WIDTH), dtype=np.uint8)
    probe = ImageDraw.Draw(Image.new("L", (1, 1)))
    left, top, right, bottom = probe.textbbox((0, 0), character, font=font)
    width, height = int(right - left), int(bottom - top)
    if width <= 0 or height <= 0:
        return matrix

    canvas = Image.new("L", (width, height), 0)
    ImageDraw.Draw(canvas).text((-left, -top), character, fill=255, font=font)
    coverage = (np.asarray(canvas) >= 128).astype(np.uint8)

    x_offset = (CHAR_WIDTH - width) // 2
    y_offset = (CHAR_HEIGHT - height) // 2
    src_x0, src_x1 = max(0, -x_offset), min(width, CHAR_WIDTH - x_offset)
    src_y0, src_y1 = max(0, -y_offset), min(height, CHAR_HEIGHT - y_offset)
    if src_x1 <= src_x0 or src_y1 <= src_y0:
        return matrix
    dst_x0, dst_y0 = src_x0 + x_offset, src_y0 + y_offset
    matrix[dst_y0 : dst_y0 + (src_y1 - src_y0), dst_x0 : dst_x0 + (src_x1 - src_x0)] = (
        coverage[src_y0:src_y1, src_x0:src_x1]
    )
    return matrix


def pack_bitmap(bitmap):
    """Pack 128 pixel flags, row-major, into four 32-bit words (low bit first)."""
    bits = np.asarray(bitmap).ravel()
    if bits.size != MASK_BITS:
        raise ValueError(f"a glyph bitmap holds {MASK_BITS} pixels, got {bits.size}")
    flags = (bits != 0).reshape(MASK_WORDS, 32).astype(np.uint64)
    weights = np.left_shift(np.uint64(1), np.arange(32, dtype=np.uint64))
    return (flags * weights).sum(axis=1).astype(np.uint32)


def generate_ascii_bitmap(font_path):
    """Build the glyph mask table for the printable ASCII characters.

    ``font_path`` is a font file path or an already loaded Pillow font. For
    every character the table holds its four mask words followed by their
    bitwise complement, so entry ``2 * k`` is character ``k`` drawn in the
    foreground and entry ``2 * k + 1`` is the inverted drawing.
    """
    if isinstance(font_path, (str, bytes, os.PathLike)):
        font = ImageFont.truetype(os.fspath(font_path), FONT_SIZE)
    else:
        font = font_path

    words = []
    for code in range(ASCII_START, ASCII_END + 1):
        packed = pack_bitmap(render_centered(font, chr(code)))
        words.append(packed)
        words.append(~packed)
    return np.concatenate(words).astype(np.uint32)