import logging

import pytest
from PIL import Image

import client_thumbnail


def test_defaults():
    args = client_thumbnail.parse_args(["in.stl", "out.png"])
    assert (args.width, args.height) == (256, 256)
    assert not (args.turntable or args.verbose or args.lazy or args.normals or args.dimensions)
    assert args.timeout == 0


def test_short_h_is_height():
    args = client_thumbnail.parse_args(["in.stl", "out.png", "-w", "64", "-h", "32"])
    assert (args.width, args.height) == (64, 32)


def test_help_exits(capsys):
    with pytest.raises(SystemExit) as e:
        client_thumbnail.parse_args(["--help"])
    assert e.value.code == 0
    assert "turntable" in capsys.readouterr().out


def test_settings_from_args():
    args = client_thumbnail.parse_args(["in.stl", "out.gif", "-t", "-l", "-n", "-d", "--timeout", "1500"])
    settings = client_thumbnail.settings_from_args(args)
    assert settings.turntable and settings.lazy and settings.recalculate_normals
    assert settings.size_hint
    assert settings.timeout == pytest.approx(1.5)


def test_dimensions_need_height():
    args = client_thumbnail.parse_args(["in.stl", "out.png", "-d", "-h", "127"])
    assert not client_thumbnail.settings_from_args(args).size_hint


def test_zero_timeout_disables():
    args = client_thumbnail.parse_args(["in.stl", "out.png"])
    assert client_thumbnail.settings_from_args(args).timeout is None


def test_main_writes_thumbnail(stl_file, tmp_path):
    out = tmp_path / "out.png"
    assert client_thumbnail.main([str(stl_file), str(out), "-w", "40", "-h", "30"]) == 0
    with Image.open(out) as img:
        assert img.size == (40, 30)


def test_main_reports_errors(tmp_path, capsys):
    code = client_thumbnail.main([str(tmp_path / "missing.stl"), str(tmp_path / "out.png")])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error:")
    assert not (tmp_path / "out.png").exists()


def test_verbose_logs_settings(stl_file, tmp_path, caplog):
    with caplog.at_level(logging.DEBUG, logger="stl_thumbnail"):
        client_thumbnail.main([str(stl_file), str(tmp_path / "out.png"), "-v", "-w", "16", "-h", "16"])
    assert any("Low memory usage mode" in r.getMessage() for r in caplog.records)
