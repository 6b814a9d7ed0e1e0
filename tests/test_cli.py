import math

import pytest

from termvideo.cli import main, status_line


def test_status_line_format():
    assert status_line(2.0, 10, 2) == "ok, 2.00 secs, 10 frames, 2 dropped, 5.00/6.00 fps"


def test_status_line_no_drops_rates_equal():
    line = status_line(4.0, 8, 0)
    rates = line.rsplit(" ", 2)[1]
    shown, total = rates.split("/")
    assert shown == total
    assert shown == "2.00"


def test_status_line_zero_duration():
    line = status_line(0.0, 0, 0)
    prefix, rates, unit = line.rsplit(" ", 2)
    assert prefix == "ok, 0.00 secs, 0 frames, 0 dropped,"
    assert unit == "fps"
    shown, total = rates.split("/")
    assert math.isnan(float(shown))
    assert math.isnan(float(total))


def test_main_requires_video_path():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_main_missing_font(tmp_path, capsys):
    code = main(["clip.mp4", "--font", str(tmp_path / "missing.otf")])
    assert code == 1
    assert "cannot load font" in capsys.readouterr().err