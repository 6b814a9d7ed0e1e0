"""Command line entry point: play a video as coloured text in the terminal."""

from __future__ import annotations

import argparse
import queue
import shutil
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor

from termvideo.glyphs import CHAR_HEIGHT, CHAR_WIDTH, generate_ascii_bitmap
from termvideo.render import render, screen
from termvideo.video import VideoStream

PENDING_FRAMES = 4


def _rate(count, duration):
    if duration > 0:
        return count / duration
    return float("inf") if count else float("nan")


def status_line(duration, frames_rendered, frames_dropped):
    """The progress line shown below each frame."""
    shown = _rate(frames_rendered, duration)
    total = _rate(frames_rendered + frames_dropped, duration)
    return (
        f"ok, {duration:.2f} secs, {frames_rendered} frames, "
        f"{frames_dropped} dropped, {shown:.2f}/{total:.2f} fps"
    )


def _present(pending, term_width, term_height, out):
    rendered = 0
    dropped = 0
    start = time.monotonic()
    while (job := pending.get()) is not None:
        if not job.done() and not pending.empty():
            dropped += 1
            continue
        term, palette = job.result()
        duration = time.monotonic() - start
        out.write(
            screen(term, palette, term_width, term_height)
            + status_line(duration, rendered, dropped)
        )
        out.flush()
        rendered += 1


def main(argv=None):
    parser = argparse.ArgumentParser(prog="termvideo", description=__doc__)
    parser.add_argument("video_path")
    parser.add_argument("--font", default="font.otf", help="font used for the glyphs")
    args = parser.parse_args(argv)

    try:
        glyphs = generate_ascii_bitmap(args.font)
    except OSError as exc:
        print(f"cannot load font {args.font}: {exc}", file=sys.stderr)
        return 1
    print(f"Generated {len(glyphs)} bytes of bitmap data")

    columns, rows = shutil.get_terminal_size()
    term_width, term_height = columns - 2, rows - 2
    if term_width <= 0 or term_height <= 0:
        print("terminal is too small", file=sys.stderr)
        return 1

    width, height = term_width * CHAR_WIDTH, term_height * CHAR_HEIGHT
    pending = queue.Queue(maxsize=PENDING_FRAMES)
    writer = threading.Thread(
        target=_present, args=(pending, term_width, term_height, sys.stdout), daemon=True
    )
    with VideoStream.open(args.video_path, width, height) as stream, ThreadPoolExecutor() as pool:
        writer.start()
        try:
            for frame in stream:
                pending.put(
                    pool.submit(
                        render,
                        frame.data,
                        frame.width,
                        frame.height,
                        term_width,
                        term_height,
                        CHAR_WIDTH,
                        CHAR_HEIGHT,
                        glyphs,
                    )
                )
        finally:
            pending.put(None)
            writer.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())