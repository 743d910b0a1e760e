import base64
import io

import numpy as np

from nobg.chroma import PixelBuffer
from nobg.image import save_png
from nobg.render import inline_image_sequence, show_inline, supports_inline_images
from nobg.render.terminal import preview_png


def test_inline_image_sequence_format():
    seq = inline_image_sequence(b"abc", "x.png")
    assert seq.startswith("\x1b]1337;File=")
    assert seq.endswith("\x07")
    assert "size=3" in seq
    assert "inline=1" in seq
    assert seq.split(":", 1)[1][:-1] == base64.b64encode(b"abc").decode("ascii")


def test_supports_inline_images():
    assert supports_inline_images({"TERM_PROGRAM": "iTerm.app"})
    assert supports_inline_images({"TERM_PROGRAM": "WezTerm"})
    assert not supports_inline_images({"TERM_PROGRAM": "Apple_Terminal"})


def test_preview_is_downscaled_and_shown(tmp_path, monkeypatch):
    px = np.zeros((20, 40, 4), dtype=np.uint8)
    px[:, :] = (255, 0, 0, 255)
    path = save_png(PixelBuffer(pixels=px), str(tmp_path / "wide.png"))
    from PIL import Image

    small = Image.open(io.BytesIO(preview_png(path, max_width=10)))
    assert small.size == (10, 5)

    monkeypatch.setenv("TERM_PROGRAM", "iTerm.app")
    stream = io.StringIO()
    assert show_inline(path, max_width=10, stream=stream)
    assert stream.getvalue().startswith("\x1b]1337;")
