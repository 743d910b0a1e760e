import numpy as np
import pytest

import main
from nobg.chroma import PixelBuffer
from nobg.image import save_png


def _write(tmp_path, name, px):
    return save_png(PixelBuffer(pixels=px), str(tmp_path / name))


def test_cli_keys_existing_image(tmp_path, monkeypatch, capsys):
    px = np.zeros((6, 6, 4), dtype=np.uint8)
    px[:, :] = (0, 255, 0, 255)
    px[2:4, 1:5] = (30, 30, 220, 255)
    src = _write(tmp_path, "render.png", px)
    monkeypatch.setattr("sys.argv", ["nobg", "-i", src, "-c", "#00FF00"])
    main._cli()
    assert "Saved render_nobg.png (4x2, key #00FF00)" in capsys.readouterr().out
    assert (tmp_path / "render_nobg.png").exists()


def test_cli_requires_prompt(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["nobg"])
    with pytest.raises(SystemExit) as exc:
        main._cli()
    assert exc.value.code == 1
    assert "prompt is required" in capsys.readouterr().out


def test_cli_reports_nothing_left(tmp_path, monkeypatch, capsys):
    px = np.zeros((3, 3, 4), dtype=np.uint8)
    px[:, :] = (0, 255, 0, 255)
    src = _write(tmp_path, "empty.png", px)
    monkeypatch.setattr("sys.argv", ["nobg", "-i", src])
    with pytest.raises(SystemExit) as exc:
        main._cli()
    assert exc.value.code == 1
    assert "Nothing left after key removal" in capsys.readouterr().out
