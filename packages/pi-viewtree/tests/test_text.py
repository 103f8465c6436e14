"""Tests for pi.viewtree.text -- cell measurement."""

from __future__ import annotations

from pi.viewtree.text import cell_width, cells, truncate_to_width, visible_width


class TestCellWidth:
    def test_ascii(self) -> None:
        assert cell_width("a") == 1

    def test_empty_and_control(self) -> None:
        assert cell_width("") == 0
        assert cell_width("\x07") == 0

    def test_wide_cjk(self) -> None:
        assert cell_width("世") == 2

    def test_combining_cluster_is_narrow(self) -> None:
        # "e" followed by a combining acute accent is one cell.
        assert cell_width("é") == 1

    def test_emoji_with_variation_selector_is_wide(self) -> None:
        assert cell_width("❤️") == 2


class TestCells:
    def test_clusters_and_widths(self) -> None:
        assert list(cells("a世é")) == [("a", 1), ("世", 2), ("é", 1)]

    def test_tabs_expand(self) -> None:
        assert list(cells("\t")) == [(" ", 1), (" ", 1), (" ", 1)]

    def test_zero_width_dropped(self) -> None:
        assert list(cells("a\x00b")) == [("a", 1), ("b", 1)]


class TestVisibleWidth:
    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4

    def test_tab_counts_as_three_spaces(self) -> None:
        assert visible_width("\t") == 3


class TestTruncateToWidth:
    def test_fits(self) -> None:
        assert truncate_to_width("hello", 10) == "hello"

    def test_cuts(self) -> None:
        assert truncate_to_width("hello", 3) == "hel"

    def test_does_not_split_wide_cluster(self) -> None:
        assert truncate_to_width("a世b", 2) == "a"
        assert truncate_to_width("a世b", 3) == "a世"
