import threading
import time

import numpy as np

from glyphart import ConversionConfig, DecodedImage, DecodeError, LatestConverter

from conftest import png_bytes, solid

CFG = ConversionConfig(cell_size=2, contrast=0, brightness=0, invert=False)


def test_latest_result_wins(three_glyphs):
    with LatestConverter(three_glyphs, workers=3) as conv:
        seqs = [conv.submit(solid(4, 2, (v, v, v)), CFG) for v in (0, 128, 255)]
        assert seqs == [0, 1, 2]
        seq, art = conv.wait(seqs[-1], timeout=5)
    assert seq == 2
    assert art == "..\n"


def test_stale_result_is_dropped(three_glyphs):
    published = []
    conv = LatestConverter(three_glyphs, on_result=lambda seq, art: published.append(seq))
    assert conv._publish(5, "new\n")
    assert not conv._publish(3, "old\n")
    assert conv.latest() == (5, "new\n")
    assert published == [5]


def test_accepts_encoded_bytes(three_glyphs):
    data = png_bytes(np.zeros((2, 2, 3), dtype=np.uint8))
    with LatestConverter(three_glyphs) as conv:
        seq = conv.submit(data, CFG)
        assert conv.wait(seq, timeout=5) == (seq, "#\n")


def test_failed_request(three_glyphs, capsys):
    with LatestConverter(three_glyphs) as conv:
        seq = conv.submit(b"garbage", CFG)
        assert conv.wait(seq, timeout=5) is None
        assert isinstance(conv.error(seq), DecodeError)
        assert conv.latest() is None
    assert "[worker error]" in capsys.readouterr().err


def test_many_submitters(three_glyphs):
    img = DecodedImage.from_array(np.full((4, 4, 3), 255, dtype=np.uint8))
    with LatestConverter(three_glyphs, workers=4) as conv:
        threads = [threading.Thread(target=conv.submit, args=(img, CFG)) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        seq, art = conv.wait(19, timeout=5)
    assert seq == 19
    assert art == "..\n..\n"


def test_wait_timeout(three_glyphs):
    conv = LatestConverter(three_glyphs)
    assert conv.wait(0, timeout=0.05) is None


def test_callbacks_arrive_in_request_order(three_glyphs):
    shown = []
    first_delivering = threading.Event()

    def show(seq, art):
        if seq == 0:
            first_delivering.set()
            time.sleep(0.3)
        shown.append(seq)

    conv = LatestConverter(three_glyphs, workers=2, on_result=show).start()
    conv.submit(solid(2, 2, (0, 0, 0)), CFG)
    assert first_delivering.wait(5)
    seq = conv.submit(solid(2, 2, (128, 128, 128)), CFG)
    assert conv.wait(seq, timeout=5) == (1, "+\n")
    conv.stop(timeout=5)
    assert shown == [0, 1]


def test_old_errors_are_forgotten(three_glyphs):
    conv = LatestConverter(three_glyphs)
    conv._fail(0, ValueError("boom"))
    assert isinstance(conv.error(0), ValueError)
    conv._publish(1, "+\n")
    assert conv.error(0) is None
    conv._fail(0, ValueError("late"))
    assert conv.error(0) is None
