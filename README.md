# termvideo

termvideo plays a video file in a terminal as coloured text. Each frame is cut into
cells of 8×16 pixels. Every cell is split into a dark colour and a bright colour
around its median brightness. The printable ASCII character (codes 32–126) whose
shape best fits the cell is then drawn, either normally or inverted, using 24-bit
foreground and background colours.

## Requirements

- A terminal that supports true-colour ANSI escape sequences.
- `ffmpeg` on your `PATH`. It is started with VAAPI hardware decoding and scaling
  (`-hwaccel vaapi`, `scale_vaapi`), so a VAAPI-capable system is needed. It decodes
  the video in real time and scales it to the terminal size.
- A font file Pillow can load. By default `font.otf` in the current directory is
  used. Its glyphs are rendered once at start-up at 16 pixels and used as the shapes
  to match.

## Installation

```
pip install .
```

## Usage

```
termvideo path/to/video.mp4
termvideo --font /path/to/font.ttf path/to/video.mp4
```

The picture fills the terminal, leaving two rows and two columns free. If the font
cannot be loaded, or the terminal is too small, an error is printed and the command
exits with status 1.

Frames are rendered on a thread pool, with up to four frames waiting to be shown.
When a frame is not finished yet and a later one is already waiting, it is dropped
so that playback keeps pace with the video. A status line under the picture shows
the time played, the frames drawn, the frames dropped, and the drawn and total
frame rates.

## Library use

The stages of the pipeline can also be used directly. Images are flat, row-major
sequences of colours packed into 32-bit integers (red in the lowest byte, then
green, then blue).

- `termvideo.pixels`: `pack_rgb`, `unpack_rgb`, `cubic_weight`, `bicubic_resize`,
  `repack` (makes each cell's pixels contiguous), `compute_brightness`,
  `bimodal_luma_cluster` (returns the cell bit masks and a dark/bright palette),
  `count_zeros`, `calc_similarity` and `best_glyph`.
- `termvideo.glyphs`: `render_centered(font, character)`, `pack_bitmap(bitmap)` and
  `generate_ascii_bitmap(font_path)`, which accepts a font file path or a loaded
  Pillow font and returns each character's four mask words followed by their
  complement.
- `termvideo.render`: `render(...)` turns one frame that exactly covers the terminal
  cells into glyph indices and a palette; `screen(...)` turns those into ANSI text.
- `termvideo.video`: `ffmpeg_command(path, width, height)` builds the decoder
  command line; `VideoStream.open(path, width, height)` starts it. A `VideoStream`
  yields `VideoFrame` objects through `read_next()` or iteration, and is a context
  manager whose `close()` stops the decoder.
- `termvideo.cli`: `main(argv=None)` and `status_line(...)`.

`bicubic_resize` is available as a library function, but the command does not use
it: frames are scaled by `ffmpeg`.

## Running the tests

```
pip install ".[test]"
pytest
```