import pytest

from encoding.errors import DecodeFailure
from processing.size_selector import select_sizes, select_source


def test_select_widest_source(make_png):
    small, large, medium = make_png(16, 16), make_png(64, 64), make_png(32, 32)

    assert select_source([small, large, medium]) == (large, 64)


def test_last_source_wins_ties(make_png):
    first, second = make_png(32, 32, mode="RGB"), make_png(32, 16)

    assert select_source([first, second]) == (second, 32)


def test_last_of_widest_sources_wins(make_png):
    wide, narrow, tie = make_png(64, 64), make_png(32, 32), make_png(64, 64, mode="RGB")

    assert select_source([wide, narrow, tie]) == (tie, 64)


def test_no_sources():
    assert select_source([]) is None


def test_bad_source_reports_index(make_png):
    with pytest.raises(DecodeFailure) as exc:
        select_source([make_png(8, 8), b"garbage"])
    assert exc.value.index == 1


def test_select_sizes_keeps_order_and_drops_upscales():
    assert select_sizes([16, 24, 32, 48, 64, 128, 256], 48) == [16, 24, 32, 48]
    assert select_sizes([256, 16, 32], 32) == [16, 32]
    assert select_sizes([16, 32], 8) == []
