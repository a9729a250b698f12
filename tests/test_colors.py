"""Tests for colors.py - color schemes."""

import pytest

from colorline import ConfigurationError, InvalidLevel, Level
from colorline.colors import (
    DEFAULT_COLORS,
    RESET,
    TRAFFIC_LIGHT_COLORS,
    AnsiScheme,
    ColorScheme,
    check_scheme,
    default_scheme,
    sgr,
    traffic_light_scheme,
)


class TestAnsiScheme:
    """Tests for the stock color scheme."""

    @pytest.mark.parametrize("level", list(Level))
    def test_every_level_has_a_color(self, level):
        for scheme in (default_scheme(), traffic_light_scheme()):
            color = scheme.colorize(level)
            assert color
            assert color.startswith("\x1b[")

    def test_reset(self):
        assert default_scheme().reset() == "\x1b[0m" == RESET

    def test_level_forms(self):
        scheme = default_scheme()
        expected = DEFAULT_COLORS[Level.ERROR]
        assert expected == "\x1b[31m"
        assert scheme.colorize(Level.ERROR) == expected
        assert scheme.colorize(400) == expected
        assert scheme.colorize("error") == expected

    @pytest.mark.parametrize("level", [123, "verbose", None])
    def test_unknown_level_raises(self, level):
        with pytest.raises(InvalidLevel):
            default_scheme().colorize(level)

    def test_traffic_light_palette(self):
        scheme = traffic_light_scheme()
        assert scheme.colorize(Level.NOTICE) == TRAFFIC_LIGHT_COLORS[Level.INFO]
        assert scheme.colorize(Level.ALERT) == sgr(31, 1)

    def test_missing_level_rejected(self):
        colors = dict(DEFAULT_COLORS)
        del colors[Level.ALERT]
        with pytest.raises(ConfigurationError, match="ALERT"):
            AnsiScheme(colors)

    def test_empty_color_rejected(self):
        colors = {**DEFAULT_COLORS, Level.DEBUG: ""}
        with pytest.raises(ConfigurationError, match="DEBUG"):
            AnsiScheme(colors)

    def test_empty_reset_rejected(self):
        with pytest.raises(ConfigurationError):
            AnsiScheme(DEFAULT_COLORS, reset="")

    def test_custom_reset(self):
        assert AnsiScheme(DEFAULT_COLORS, reset="<r>").reset() == "<r>"

    def test_fresh_instances(self):
        """No shared process-wide default scheme."""
        assert default_scheme() is not default_scheme()


def test_sgr():
    assert sgr(31) == "\x1b[31m"
    assert sgr(31, 4) == "\x1b[31;4m"


class TestCheckScheme:
    """Tests for validating user supplied schemes."""

    def test_duck_typed_scheme(self):
        class Mono:
            def colorize(self, level):
                return "<c>"

            def reset(self):
                return "</c>"

        scheme = Mono()
        assert check_scheme(scheme) is scheme
        assert isinstance(scheme, ColorScheme)

    def test_missing_methods(self):
        with pytest.raises(ConfigurationError, match="colorize"):
            check_scheme(object())

    def test_reset_not_callable(self):
        class Half:
            reset = "\x1b[0m"

            def colorize(self, level):
                return ""

        with pytest.raises(ConfigurationError, match="reset"):
            check_scheme(Half())

    def test_default_is_a_scheme(self):
        assert isinstance(default_scheme(), ColorScheme)
