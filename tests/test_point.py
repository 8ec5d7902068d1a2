"""Tests for coordinate strings, reserved positions and the current point.

Element lookups and screen size are deterministic stand-ins, so no X display is needed.
"""
import threading

import pytest


class FakeLookup:
    """Element lookup over a fixed list of rectangles."""

    name = "fake"

    def __init__(self, elements=()):
        self.elements = list(elements)
        self.calls = []

    def lookup_element(self, x, y):
        self.calls.append((x, y))
        for element in self.elements:
            if element.contains(x, y):
                return element
        return None

    def check_health(self):
        return {"ok": True, "backend": "fake"}


@pytest.fixture
def geometry():
    from detection_point.point import ScreenGeometry
    return ScreenGeometry(width=1000, height=500)


@pytest.fixture
def resolver(geometry):
    from detection_point.accessibility import UIElement
    from detection_point.point import ScreenPointResolver

    button = UIElement(id=7, name="OK", x=100, y=100, width=50, height=20, role="window")
    return ScreenPointResolver(lookup=FakeLookup([button]), geometry=lambda: geometry)


# ─── Parsing & formatting ───────────────────────────────────────

def test_parse_signed_fractional_coordinates():
    from detection_point.point import ScreenPoint, parse_coordinates

    assert parse_coordinates("12.5,-3") == ScreenPoint(12.5, -3.0)
    assert parse_coordinates("  +4 , .5  ") == ScreenPoint(4.0, 0.5)


@pytest.mark.parametrize("text", ["", "abc,5", "10,20,30", "10 20", "10,", ",5", "nan,1", "1,inf", "1,2px", "1e400,5", "5,-1e999"])
def test_parse_rejects_malformed(text):
    from detection_point.point import CoordinateParseError, parse_coordinates

    with pytest.raises(CoordinateParseError):
        parse_coordinates(text)


def test_parse_error_is_a_value_error():
    from detection_point.point import CoordinateParseError, parse_coordinates

    with pytest.raises(ValueError):
        parse_coordinates("left,top")
    assert issubclass(CoordinateParseError, ValueError)


def test_format_drops_trailing_zero_for_whole_numbers():
    from detection_point.point import ScreenPoint, format_coordinates

    assert format_coordinates(ScreenPoint(12.5, -3.0)) == "12.5,-3"
    assert format_coordinates(ScreenPoint(0, 0)) == "0,0"


@pytest.mark.parametrize("x,y", [(0.1, 0.2), (-1234.5678, 99.0), (1e-7, 3.14159265358979), (1e20, -2.5e-10)])
def test_format_then_parse_reproduces_values(x, y):
    from detection_point.point import ScreenPoint, format_coordinates, parse_coordinates

    point = parse_coordinates(format_coordinates(ScreenPoint(x, y)))
    assert point.x == pytest.approx(x)
    assert point.y == pytest.approx(y)


# ─── Reserved positions ─────────────────────────────────────────

def test_reserved_positions_on_wide_screen(geometry):
    from detection_point.point import ScreenPoint, resolve_reserved

    # m = min(1000, 500) * 0.2 = 100
    expected = {
        "left-top": (100, 100),
        "top": (500, 100),
        "right-top": (900, 100),
        "center": (500, 250),
        "left-bottom": (100, 400),
        "bottom": (500, 400),
        "right-bottom": (900, 400),
    }
    for keyword, (x, y) in expected.items():
        assert resolve_reserved(keyword, geometry, margin_ratio=0.2) == ScreenPoint(x, y), keyword


def test_reserved_margin_comes_from_config(monkeypatch, geometry):
    from detection_point import config
    from detection_point.point import ScreenPoint, resolve_reserved

    monkeypatch.setattr(config, "RESERVED_MARGIN_RATIO", 0.1)
    assert resolve_reserved("left-top", geometry) == ScreenPoint(50, 50)


def test_unknown_keyword_resolves_to_origin(geometry):
    from detection_point.point import ScreenPoint, resolve_reserved

    assert resolve_reserved("diagonal", geometry) == ScreenPoint(0, 0)
    # keywords are case-sensitive
    assert resolve_reserved("Center", geometry) == ScreenPoint(0, 0)


def test_lookup_reserved_distinguishes_unknown(geometry):
    from detection_point.point import is_reserved, lookup_reserved

    assert lookup_reserved("diagonal", geometry) is None
    assert lookup_reserved("center", geometry) is not None
    assert is_reserved("right-bottom")
    assert not is_reserved("right bottom")


# ─── Current point ──────────────────────────────────────────────

def test_set_from_string_updates_current(resolver):
    from detection_point.point import ScreenPoint

    resolver.set_from_string("12.5,-3")
    assert resolver.current() == ScreenPoint(12.5, -3.0)
    assert resolver.to_string() == "12.5,-3"


def test_malformed_string_leaves_point_unchanged(resolver):
    from detection_point.point import CoordinateParseError, ScreenPoint

    resolver.set_from_string("1,2")
    with pytest.raises(CoordinateParseError):
        resolver.set_from_string("abc,5")
    with pytest.raises(CoordinateParseError):
        resolver.set_from_string("10,20,30")
    assert resolver.current() == ScreenPoint(1, 2)


def test_resolve_reserved_does_not_mutate(resolver):
    from detection_point.point import ScreenPoint

    resolver.set_from_string("7,8")
    assert resolver.resolve_reserved("center") == ScreenPoint(500, 250)
    assert resolver.current() == ScreenPoint(7, 8)


def test_apply_accepts_keywords_and_coordinates(resolver):
    from detection_point.point import CoordinateParseError, ScreenPoint

    assert resolver.apply("right-bottom") == ScreenPoint(900, 400)
    assert resolver.current() == ScreenPoint(900, 400)

    resolver.apply(" 3 , 4 ")
    assert resolver.current() == ScreenPoint(3, 4)

    with pytest.raises(CoordinateParseError):
        resolver.apply("diagonal")
    assert resolver.current() == ScreenPoint(3, 4)


def test_element_at_current_point(resolver):
    resolver.set_from_string("120,110")
    element = resolver.element_at_current_point()
    assert element is not None
    assert element.name == "OK"
    assert resolver.lookup.calls == [(120.0, 110.0)]


def test_no_element_is_none_not_error(resolver):
    from detection_point.point import ScreenPoint

    resolver.set_from_string("-50,9999")
    assert resolver.element_at_current_point() is None
    assert resolver.element_at(ScreenPoint(0, 0)) is None


def test_concurrent_writes_never_mix_coordinates(resolver):
    """Every observed point must be one that some writer actually set."""
    seen = []

    def writer(n):
        for _ in range(200):
            resolver.set_from_string(f"{n},{n}")

    def reader():
        for _ in range(400):
            p = resolver.current()
            seen.append((p.x, p.y))

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(1, 5)]
    threads.append(threading.Thread(target=reader))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert all(x == y for x, y in seen)


def test_process_wide_resolver_is_shared():
    from detection_point.point import ScreenPointResolver, get_resolver, reset_resolver

    reset_resolver()
    try:
        first = get_resolver()
        assert get_resolver() is first

        own = ScreenPointResolver(lookup=FakeLookup(), geometry=lambda: None)
        reset_resolver(own)
        assert get_resolver() is own
    finally:
        reset_resolver()


def test_backend_selection(monkeypatch):
    from detection_point import accessibility, config

    monkeypatch.setattr(config, "ELEMENT_BACKEND", "none")
    accessibility.set_backend(None)
    try:
        backend = accessibility.get_backend()
        assert backend.name == "none"
        assert accessibility.lookup_element(10, 10) is None

        monkeypatch.setattr(config, "ELEMENT_BACKEND", "bogus")
        accessibility.set_backend(None)
        with pytest.raises(ValueError):
            accessibility.get_backend()
    finally:
        accessibility.set_backend(None)


def test_screen_geometry_falls_back_to_config(monkeypatch):
    from detection_point import config, display
    from detection_point.point import ScreenGeometry

    def no_display(display_str=None):
        raise OSError("Can't connect to display")

    monkeypatch.setattr(display, "get_xlib_display", no_display)
    monkeypatch.setattr(config, "DEFAULT_SCREEN_WIDTH", 800)
    monkeypatch.setattr(config, "DEFAULT_SCREEN_HEIGHT", 600)
    monkeypatch.setattr(config, "PLATFORM", "linux")

    assert display.get_screen_geometry(":42") == ScreenGeometry(800, 600, "linux")


def test_finite_point_rejects_overflow_and_nan():
    from detection_point.point import CoordinateParseError, ScreenPoint, finite_point, format_coordinates, parse_coordinates

    assert finite_point("3", 4) == ScreenPoint(3.0, 4.0)
    for x, y in [(float("inf"), 1), ("nan", 1), (1, "-infinity"), ("abc", 1), (None, 1)]:
        with pytest.raises(CoordinateParseError):
            finite_point(x, y)

    # the largest finite values still survive a format/parse round trip
    big = ScreenPoint(1.7976931348623157e308, -1.7976931348623157e308)
    assert parse_coordinates(format_coordinates(big)) == big


def test_is_reserved_ignores_non_strings():
    from detection_point.point import is_reserved

    assert not is_reserved([])
    assert not is_reserved(None)
