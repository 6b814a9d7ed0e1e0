"""Reading raw RGBA frames from an ffmpeg decoder process."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass

import numpy as np

BYTES_PER_PIXEL = 4


@dataclass(frozen=True)
class VideoFrame:
    """One decoded frame as packed colours, row-major."""

    data: np.ndarray
    width: int
    height: int


def ffmpeg_command(path, width, height):
    """Command line that decodes ``path`` in real time to scaled raw RGBA on stdout."""
    return [
        "ffmpeg",
        "-re",
        "-loglevel", "error",
        "-hwaccel", "vaapi",
        "-hwaccel_output_format", "vaapi",
        "-i", str(path),
        "-vf", f"scale_vaapi=w={width}:h={height}:format=nv12,hwdownload,format=rgba",
        "-f", "rawvideo",
        "-pix_fmt", "rgba",
        "pipe:",
    ]


class VideoStream:
    """A stream of fixed-size frames read from a binary pipe."""

    def __init__(self, stdout, width, height, process=None):
        self.stdout = stdout
        self.width = width
        self.height = height
        self.process = process

    @classmethod
    def open(cls, path, width, height):
        """Start ffmpeg on ``path`` and stream its frames at ``width`` x ``height``."""
        process = subprocess.Popen(ffmpeg_command(path, width, height), stdout=subprocess.PIPE)
        return cls(process.stdout, width, height, process)

    @property
    def frame_size(self):
        return self.width * self.height * BYTES_PER_PIXEL

    def read_next(self):
        """Return the next whole frame, or None once the stream ends."""
        needed = self.frame_size
        chunks = []
        while needed > 0:
            chunk = self.stdout.read(needed)
            if not chunk:
                return None
            chunks.append(chunk)
            needed -= len(chunk)
        data = np.frombuffer(b"".join(chunks), dtype="<u4").astype(np.uint32)
        return VideoFrame(data, self.width, self.height)

    def close(self):
        """Close the pipe and stop the decoder if it is still running."""
        self.stdout.close()
        if self.process is not None:
            if self.process.poll() is None:
                self.process.terminate()
            self.process.wait()

    def __iter__(self):
        return iter(self.read_next, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()