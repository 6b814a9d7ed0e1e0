"""Pixel-level image operations: packing, resizing, tiling, clustering and glyph matching.

Colours are packed into 32-bit integers with red in the lowest byte, then
green, then blue. Images are flat row-major sequences of packed colours.
"""

from __future__ import annotations

import numpy as np

ASCII_START = 32
ASCII_END = 126
ASCII_TABLE_SIZE = ASCII_END - ASCII_START + 1

PACK_R_OFFSET = 0
PACK_G_OFFSET = 8
PACK_B_OFFSET = 16

MASK_WORDS = 4
MASK_BITS = MASK_WORDS * 32

_POPCOUNT8 = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint32)


def pack_rgb(r, g, b):
    """Pack red, green and blue bytes into one 32-bit colour value."""
    return (b << PACK_B_OFFSET) | (g << PACK_G_OFFSET) | (r << PACK_R_OFFSET)


def unpack_rgb(packed):
    """Split a packed colour into its (red, green, blue) bytes."""
    r = (packed >> PACK_R_OFFSET) & 0xFF
    g = (packed >> PACK_G_OFFSET) & 0xFF
    b = (packed >> PACK_B_OFFSET) & 0xFF
    return r, g, b


def cubic_weight(x, a):
    """Keys cubic convolution kernel evaluated at ``x`` with parameter ``a``."""
    ax = abs(x)
    if ax <= 1.0:
        return (a + 2.0) * ax**3 - (a + 3.0) * ax**2 + 1.0
    if ax < 2.0:
        return a * ax**3 - 5.0 * a * ax**2 + 8.0 * a * ax - 4.0 * a
    return 0.0


def _cubic_weight_array(x, a):
    a = np.float32(a)
    ax = np.abs(x).astype(np.float32)
    ax2 = ax * ax
    ax3 = ax2 * ax
    near = (a + np.float32(2.0)) * ax3 - (a + np.float32(3.0)) * ax2 + np.float32(1.0)
    far = (
        a * ax3
        - np.float32(5.0) * a * ax2
        + np.float32(8.0) * a * ax
        - np.float32(4.0) * a
    )
    return np.where(ax <= 1.0, near, np.where(ax < 2.0, far, np.float32(0.0))).astype(
        np.float32
    )


def _as_u32(values):
    return np.asarray(values, dtype=np.uint32).ravel()


def _require_length(values, needed, what):
    if values.size < needed:
        raise ValueError(f"{what} holds {values.size} values, {needed} needed")


def bicubic_resize(src, src_width, src_height, dst_width, dst_height):
    """Resize a packed-colour image with bicubic interpolation (a = -0.5)."""
    src = _as_u32(src)
    _require_length(src, src_width * src_height, "source image")
    if dst_width == 0 or dst_height == 0:
        return np.zeros(dst_width * dst_height, dtype=np.uint32)
    if src_width == 0 or src_height == 0:
        raise ValueError("source image is empty")

    image = src[: src_width * src_height].reshape(src_height, src_width)
    channels = [c.astype(np.float32) for c in unpack_rgb(image)]

    x_ratio = np.float32(src_width) / np.float32(dst_width)
    y_ratio = np.float32(src_height) / np.float32(dst_height)
    src_x = np.arange(dst_width, dtype=np.float32) * x_ratio
    src_y = np.arange(dst_height, dtype=np.float32) * y_ratio
    x_floor = np.floor(src_x).astype(np.int64)
    y_floor = np.floor(src_y).astype(np.int64)

    shape = (dst_height, dst_width)
    sums = [np.zeros(shape, dtype=np.float32) for _ in range(3)]
    total_weight = np.zeros(shape, dtype=np.float32)

    for i in range(-1, 3):
        px = np.clip(x_floor + i, 0, src_width - 1)
        weight_x = _cubic_weight_array(src_x - (x_floor + i).astype(np.float32), -0.5)
        for j in range(-1, 3):
            py = np.clip(y_floor + j, 0, src_height - 1)
            weight_y = _cubic_weight_array(
                src_y - (y_floor + j).astype(np.float32), -0.5
            )
            weight = weight_y[:, None] * weight_x[None, :]
            rows_cols = np.ix_(py, px)
            for acc, channel in zip(sums, channels):
                acc += channel[rows_cols] * weight
            total_weight += weight

    with np.errstate(divide="ignore", invalid="ignore"):
        r, g, b = (
            np.nan_to_num(np.clip(acc / total_weight, 0.0, 255.0)).astype(np.uint32)
            for acc in sums
        )
    return pack_rgb(r, g, b).astype(np.uint32).ravel()


def repack(src, term_width, term_height, char_width, char_height):
    """Reorder a full image so that each character cell's pixels are contiguous."""
    src = _as_u32(src)
    total = term_width * term_height * char_width * char_height
    _require_length(src, total, "source image")
    tiles = src[:total].reshape(term_height, char_height, term_width, char_width)
    return np.ascontiguousarray(tiles.transpose(0, 2, 1, 3)).ravel()


def compute_brightness(src):
    """Return the integer luma (0.299 R + 0.587 G + 0.114 B) of each pixel."""
    src = _as_u32(src)
    r, g, b = unpack_rgb(src)
    luma = (
        np.float32(0.299) * r.astype(np.float32)
        + np.float32(0.587) * g.astype(np.float32)
        + np.float32(0.114) * b.astype(np.float32)
    )
    return luma.astype(np.uint32)


def bimodal_luma_cluster(src, brightness, term_width, term_height, char_width, char_height):
    """Split each cell into dark and bright pixels around its median luma.

    Returns ``(masks, palette)``: four 32-bit words per cell whose bits mark
    the bright pixels among the cell's first 128, and two packed colours per
    cell, the mean dark colour followed by the mean bright colour.
    """
    px_per_cell = char_width * char_height
    if px_per_cell < MASK_BITS:
        raise ValueError(
            f"a character cell needs at least {MASK_BITS} pixels, got {px_per_cell}"
        )
    cells = term_width * term_height
    total = cells * px_per_cell
    src = _as_u32(src)
    brightness = _as_u32(brightness)
    _require_length(src, total, "source image")
    _require_length(brightness, total, "brightness map")

    pixels = src[:total].reshape(cells, px_per_cell)
    luma = brightness[:total].reshape(cells, px_per_cell).astype(np.int64)

    # Smallest m with more than half the cell's pixels at or below m, capped at 256.
    ordered = np.sort(luma, axis=1)
    median = np.minimum(ordered[:, px_per_cell // 2], 256)
    dark = luma <= median[:, None]

    cnt_dark = dark.sum(axis=1).astype(np.int64)
    cnt_bright = px_per_cell - cnt_dark
    channels = [c.astype(np.int64) for c in unpack_rgb(pixels)]
    sum_dark = [np.where(dark, c, 0).sum(axis=1) for c in channels]
    sum_bright = [np.where(dark, 0, c).sum(axis=1) for c in channels]

    no_dark = cnt_dark == 0
    no_bright = cnt_bright == 0
    sum_dark = [np.where(no_dark, sb, sd) for sd, sb in zip(sum_dark, sum_bright)]
    cnt_dark = np.where(no_dark, cnt_bright, cnt_dark)
    sum_bright = [np.where(no_bright, sd, sb) for sd, sb in zip(sum_dark, sum_bright)]
    cnt_bright = np.where(no_bright, cnt_dark, cnt_bright)

    mean_dark = [(s // cnt_dark) & 0xFF for s in sum_dark]
    mean_bright = [(s // cnt_bright) & 0xFF for s in sum_bright]

    bits = (~dark[:, :MASK_BITS]).reshape(cells, MASK_WORDS, 32).astype(np.uint64)
    weights = np.left_shift(np.uint64(1), np.arange(32, dtype=np.uint64))
    masks = (bits * weights).sum(axis=2).astype(np.uint32).ravel()

    palette = np.empty(cells * 2, dtype=np.uint32)
    palette[0::2] = pack_rgb(*mean_dark).astype(np.uint32)
    palette[1::2] = pack_rgb(*mean_bright).astype(np.uint32)
    return masks, palette


def count_zeros(x):
    """Number of zero bits in the 32-bit value ``x``."""
    return 32 - bin(int(x) & 0xFFFFFFFF).count("1")


def _popcount(words):
    words = np.ascontiguousarray(words, dtype=np.uint32)
    as_bytes = words.view(np.uint8).reshape(*words.shape, 4)
    return _POPCOUNT8[as_bytes].sum(axis=-1)


def calc_similarity(masks, glyphs):
    """Count agreeing bits between every cell mask and every glyph mask.

    Both inputs are flat sequences of four 32-bit words per item. The result
    has one row per cell and one column per glyph.
    """
    masks = _as_u32(masks)
    glyphs = _as_u32(glyphs)
    if masks.size % MASK_WORDS or glyphs.size % MASK_WORDS:
        raise ValueError(f"masks and glyphs must come in groups of {MASK_WORDS} words")
    cell_words = masks.reshape(-1, MASK_WORDS)
    glyph_words = glyphs.reshape(-1, MASK_WORDS)
    differing = cell_words[:, None, :] ^ glyph_words[None, :, :]
    return (MASK_BITS - _popcount(differing).sum(axis=-1)).astype(np.uint32)


def best_glyph(similarity):
    """Index of the most similar glyph for each cell; the first wins a tie."""
    similarity = np.asarray(similarity, dtype=np.uint32)
    if similarity.ndim != 2:
        raise ValueError("similarity must be a two-dimensional table")
    if similarity.shape[1] == 0:
        return np.zeros(similarity.shape[0], dtype=np.uint32)
    return np.argmax(similarity, axis=1).astype(np.uint32)