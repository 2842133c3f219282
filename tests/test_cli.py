from __future__ import annotations

import json
from pathlib import Path

import pytest

from bgi_converter.cli import main


def test_cli_importable():
    assert callable(main)


def test_cli_requires_a_mode():
    with pytest.raises(SystemExit):
        main([])


def test_cli_extract_default_output(tmp_path: Path, bgi_bytes, capsys) -> None:
    src = tmp_path / "SGTitle000300"
    src.write_bytes(bgi_bytes(1, 1, 0x00000000, b"\x0a\x0b\x0c"))

    code = main(["-x", str(src)])
    assert code == 0
    out = tmp_path / "SGTitle000300.tga"
    assert out.read_bytes()[18:] == b"\x0a\x0b\x0c\xff"
    assert "SGTitle000300.tga" in capsys.readouterr().out


def test_cli_extract_custom_output(tmp_path: Path, bgi_bytes) -> None:
    src = tmp_path / "SGTitle000300"
    src.write_bytes(bgi_bytes(1, 1, 0x00000020, b"\x01\x02\x03\x04"))
    dst = tmp_path / "titulo.tga"
    assert main(["--extract", str(src), str(dst)]) == 0
    assert dst.is_file()


def test_cli_extract_unknown_format_fails(tmp_path: Path, capsys) -> None:
    src = tmp_path / "junk"
    src.write_bytes(b"\xff" * 32)
    assert main(["-x", str(src)]) == 1
    assert "Ошибка" in capsys.readouterr().err


def test_cli_extract_too_many_arguments(tmp_path: Path) -> None:
    assert main(["-x", "a", "b", "c"]) == 1


def test_cli_analyze_prints_report(tmp_path: Path, bmp_bytes, capsys) -> None:
    src = tmp_path / "image.bmp"
    src.write_bytes(bmp_bytes(1, 1, 24, b"\x01\x02\x03\x00"))
    assert main(["-a", str(src)]) == 0
    out = capsys.readouterr().out
    assert "BMP 24-bit (BGR)" in out
    assert "0000: 42 4D" in out


def test_cli_analyze_missing_file(tmp_path: Path) -> None:
    assert main(["-a", str(tmp_path / "missing")]) == 1


def test_cli_batch_with_pattern(tmp_path: Path, bgi_bytes, capsys) -> None:
    (tmp_path / "SGTitle1").write_bytes(bgi_bytes(1, 1, 0x00000000, b"\x00\x00\x00"))
    (tmp_path / "Other1").write_bytes(bgi_bytes(1, 1, 0x00000000, b"\x00\x00\x00"))

    assert main(["-b", "SGTitle", "--folder", str(tmp_path)]) == 0
    assert "Конвертировано: 1/1" in capsys.readouterr().out
    assert (tmp_path / "SGTitle1.tga").exists()
    assert not (tmp_path / "Other1.tga").exists()


def test_cli_batch_nothing_found(tmp_path: Path, capsys) -> None:
    assert main(["--batch", "--folder", str(tmp_path)]) == 0
    assert "не найдены" in capsys.readouterr().out


def test_cli_config_and_honor_top_down(tmp_path: Path, bmp_bytes) -> None:
    src = tmp_path / "top_down.bmp"
    src.write_bytes(bmp_bytes(1, -2, 32, bytes.fromhex("01020304 05060708")))
    cfg = tmp_path / "settings.json"
    cfg.write_text(json.dumps({"output_suffix": ".canon.tga"}), encoding="utf-8")

    assert main(["-x", str(src), "--config", str(cfg), "--honor-top-down"]) == 0
    written = (tmp_path / "top_down.bmp.canon.tga").read_bytes()
    assert written[18:] == bytes.fromhex("03020104 07060508")


def test_cli_bad_config(tmp_path: Path) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text("[]", encoding="utf-8")
    assert main(["-b", "--config", str(cfg), "--folder", str(tmp_path)]) == 1
