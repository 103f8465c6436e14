"""Tests for pi.viewtree.viewport -- containment, scrolling and projection."""

from __future__ import annotations

import pytest

from pi.viewtree.geom import Expanse, GeometryError, Line, Point, Rect
from pi.viewtree.viewport import ViewPort


def vp(canvas: tuple[int, int], view: tuple[int, int, int, int], pos: tuple[int, int] = (0, 0)) -> ViewPort:
    return ViewPort(Expanse(*canvas), Rect.new(*view), Point(*pos))


def assert_contained(v: ViewPort) -> None:
    assert v.canvas.rect().contains_rect(v.view)


class TestConstruction:
    def test_view_must_fit_canvas(self) -> None:
        with pytest.raises(GeometryError):
            vp((10, 10), (5, 5, 10, 10))

    def test_default_is_empty(self) -> None:
        v = ViewPort()
        assert v.canvas == Expanse(0, 0)
        assert v.view.is_zero()

    def test_equality(self) -> None:
        assert vp((10, 10), (0, 0, 5, 5), (1, 1)) == vp((10, 10), (0, 0, 5, 5), (1, 1))

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(vp((10, 10), (0, 0, 5, 5)))
        assert vp((10, 10), (0, 0, 5, 5)) != vp((10, 10), (0, 0, 5, 5), (1, 1))


class TestScrolling:
    def test_scroll_by_and_page(self) -> None:
        v = vp((100, 100), (0, 0, 10, 10))
        v.scroll_by(10, 10)
        assert v.view == Rect.new(10, 10, 10, 10)
        v.scroll_by(-20, -20)
        assert v.view == Rect.new(0, 0, 10, 10)
        v.page_down()
        assert v.view == Rect.new(0, 10, 10, 10)
        v.page_up()
        assert v.view == Rect.new(0, 0, 10, 10)

    def test_single_steps(self) -> None:
        v = vp((100, 100), (5, 5, 10, 10))
        v.scroll_up()
        v.scroll_left()
        assert v.view == Rect.new(4, 4, 10, 10)
        v.scroll_down()
        v.scroll_right()
        assert v.view == Rect.new(5, 5, 10, 10)

    def test_scroll_to_saturates(self) -> None:
        v = vp((100, 100), (0, 0, 10, 10))
        v.scroll_to(150, 150)
        assert v.view == Rect.new(90, 90, 10, 10)

    def test_scroll_to_is_idempotent(self) -> None:
        v = vp((100, 100), (0, 0, 10, 10))
        v.scroll_to(37, 12)
        first = v.view
        v.scroll_to(37, 12)
        assert v.view == first

    def test_overscroll_never_leaves_canvas(self) -> None:
        v = vp((30, 20), (0, 0, 10, 10))
        for step in (v.page_down, v.page_down, v.page_down, v.scroll_right, v.page_up):
            step()
            assert_contained(v)
        for dx, dy in ((100, 100), (-1000, 5), (3, -1000)):
            v.scroll_by(dx, dy)
            assert_contained(v)


class TestResizing:
    def test_set_view_clamps(self) -> None:
        v = vp((20, 20), (0, 0, 10, 10))
        v.set_view(Rect.new(15, 15, 10, 10))
        assert v.view == Rect.new(10, 10, 10, 10)
        v.set_view(Rect.new(5, 5, 50, 5))
        assert v.view == Rect.new(0, 5, 20, 5)
        assert_contained(v)

    def test_shrinking_canvas_clamps_view(self) -> None:
        v = vp((100, 100), (50, 50, 10, 10))
        v.set_canvas(Expanse(5, 5))
        assert v.view == Rect.new(0, 0, 5, 5)
        v.set_canvas(Expanse(100, 100))
        assert v.view == Rect.new(0, 0, 5, 5)

    def test_set_canvas_moves_view_inside(self) -> None:
        v = vp((100, 100), (90, 90, 10, 10))
        v.set_canvas(Expanse(50, 50))
        assert v.view == Rect.new(40, 40, 10, 10)

    def test_fit_size(self) -> None:
        v = vp((100, 100), (50, 50, 10, 10))
        v.fit_size(Expanse(50, 50), Expanse(20, 20))
        assert v.view == Rect.new(30, 30, 20, 20)
        v.fit_size(Expanse(100, 100), Expanse(20, 20))
        assert v.view == Rect.new(30, 30, 20, 20)
        v.fit_size(Expanse(10, 10), Expanse(10, 10))
        assert v.view == Rect.new(0, 0, 10, 10)
        v.fit_size(Expanse(20, 20), Expanse(20, 20))
        assert v.view == Rect.new(0, 0, 20, 20)
        assert v.canvas == Expanse(20, 20)

    def test_filling(self) -> None:
        v = ViewPort.filling(Rect.new(5, 6, 7, 8))
        assert v == vp((7, 8), (0, 0, 7, 8), (5, 6))
        assert v.screen_rect() == Rect.new(5, 6, 7, 8)


class TestProjection:
    def test_screen_rect(self) -> None:
        assert vp((100, 100), (30, 30, 10, 10), (50, 50)).screen_rect() == Rect.new(50, 50, 10, 10)

    def test_project_point(self) -> None:
        v = vp((100, 100), (30, 30, 10, 10), (50, 50))
        assert v.project_point(Point(10, 10)) is None
        assert v.project_point(Point(30, 30)) == Point(50, 50)
        assert v.project_point(Point(35, 39)) == Point(55, 59)
        assert v.project_point(Point(40, 40)) is None

    def test_project_rect(self) -> None:
        v = vp((100, 100), (30, 30, 10, 10), (50, 50))
        assert v.project_rect(Rect.new(10, 10, 10, 10)) is None
        assert v.project_rect(Rect.new(30, 30, 10, 10)) == Rect.new(50, 50, 10, 10)
        assert v.project_rect(Rect.new(20, 20, 15, 15)) == Rect.new(50, 50, 5, 5)
        assert v.project_rect(Rect.new(35, 35, 15, 15)) == Rect.new(55, 55, 5, 5)

    def test_project_line(self) -> None:
        v = vp((100, 100), (30, 30, 10, 10), (50, 50))
        assert v.project_line(Line.new(10, 10, 10)) is None
        assert v.project_line(Line.new(30, 30, 10)) == (0, Line.new(50, 50, 10))
        assert v.project_line(Line.new(20, 30, 15)) == (10, Line.new(50, 50, 5))
        assert v.project_line(Line.new(35, 30, 10)) == (0, Line.new(55, 50, 5))

    def test_unproject(self) -> None:
        v = vp((100, 100), (30, 30, 10, 10), (50, 50))
        assert v.unproject(Rect.new(52, 53, 2, 2)) == Rect.new(2, 3, 2, 2)
        with pytest.raises(GeometryError):
            v.unproject(Rect.new(0, 0, 2, 2))

    def test_map(self) -> None:
        v = vp((100, 100), (30, 30, 20, 20), (200, 200))
        assert v.map(Rect.new(10, 10, 2, 2)) is None
        assert v.map(Rect.new(30, 30, 10, 10)) == vp((10, 10), (0, 0, 10, 10), (200, 200))
        assert v.map(Rect.new(40, 40, 10, 10)) == vp((10, 10), (0, 0, 10, 10), (210, 210))
        assert v.map(Rect.new(25, 25, 10, 10)) == vp((10, 10), (5, 5, 5, 5), (200, 200))
        assert v.map(Rect.new(45, 45, 10, 10)) == vp((10, 10), (0, 0, 5, 5), (215, 215))
        assert v.map(Rect.new(30, 21, 10, 10)) == vp((10, 10), (0, 9, 10, 1), (200, 200))
        assert v.map(Rect.new(30, 49, 10, 10)) == vp((10, 10), (0, 0, 10, 1), (200, 219))


class TestScrollbars:
    def test_no_scrollbar_when_everything_visible(self) -> None:
        v = vp((10, 10), (0, 0, 10, 10))
        assert v.vactive(Rect.new(9, 0, 1, 10)) is None
        assert v.hactive(Rect.new(0, 9, 10, 1)) is None

    def test_vactive(self) -> None:
        v = vp((10, 100), (0, 50, 10, 50))
        margin = Rect.new(9, 0, 1, 10)
        assert v.vactive(margin) == (
            Rect.new(9, 0, 1, 5),
            Rect.new(9, 5, 1, 5),
            Rect.new(9, 10, 1, 0),
        )

    def test_hactive(self) -> None:
        v = vp((100, 10), (30, 0, 40, 10))
        margin = Rect.new(0, 9, 10, 1)
        assert v.hactive(margin) == (
            Rect.new(0, 9, 3, 1),
            Rect.new(3, 9, 4, 1),
            Rect.new(7, 9, 3, 1),
        )


class TestCarving:
    def test_carve_delegates_to_view(self) -> None:
        v = vp((100, 100), (10, 10, 20, 10))
        assert v.carve_hstart(5) == (Rect.new(10, 10, 5, 10), Rect.new(15, 10, 15, 10))
        assert v.carve_vend(2) == (Rect.new(10, 10, 20, 8), Rect.new(10, 18, 20, 2))
        assert v.split_horizontal(2) == [Rect.new(10, 10, 10, 10), Rect.new(20, 10, 10, 10)]
        assert v.split_vertical(2) == [Rect.new(10, 10, 20, 5), Rect.new(10, 15, 20, 5)]
