"""Tests for layout configuration and its validation."""

import dataclasses

import pytest

from sankey_layout import (
    DEFAULT_CONFIG,
    InvalidConfigError,
    LinkColorMode,
    NodeAlign,
    SankeyConfig,
    ValidationError,
)
from sankey_layout.validation import (
    validate_canvas_size,
    validate_iterations,
    validate_link_value,
    validate_unique_ids,
)


class TestDefaults:
    """Tests for default settings."""

    def test_defaults(self):
        """Defaults match the documented values."""
        config = SankeyConfig()
        assert (config.width, config.height, config.margin) == (900, 600, 10)
        assert config.node_width == 40
        assert config.node_padding == 16
        assert config.align is NodeAlign.LEFT
        assert config.iterations == 6
        assert config.link_color is LinkColorMode.NONE

    def test_default_instance(self):
        """DEFAULT_CONFIG is a default SankeyConfig."""
        assert DEFAULT_CONFIG == SankeyConfig()

    def test_drawable_area(self):
        """Drawable extent excludes margins."""
        config = SankeyConfig(width=500, height=300, margin=20)
        assert config.drawable_width == 460
        assert config.drawable_height == 260


class TestImmutability:
    """Tests for immutable settings."""

    def test_frozen(self):
        """Fields cannot be reassigned."""
        config = SankeyConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.width = 100  # type: ignore[misc]

    def test_replace(self):
        """replace() returns a new validated config."""
        config = SankeyConfig()
        wider = config.replace(width=1200, align="center")
        assert wider.width == 1200
        assert wider.align is NodeAlign.CENTER
        assert config.width == 900

    def test_replace_validates(self):
        """replace() rejects bad values."""
        with pytest.raises(InvalidConfigError):
            SankeyConfig().replace(node_padding=-1)


class TestCoercion:
    """Tests for string options."""

    @pytest.mark.parametrize("value", ["justify", "Justify", " JUSTIFY "])
    def test_align_from_string(self, value):
        """Alignment names are case-insensitive."""
        assert SankeyConfig(align=value).align is NodeAlign.JUSTIFY

    def test_link_color_from_string(self):
        """Link colour modes accept their names."""
        assert SankeyConfig(link_color="target").link_color is LinkColorMode.TARGET

    def test_unknown_align(self):
        """Unknown alignment names are rejected."""
        with pytest.raises(InvalidConfigError, match="align must be one of"):
            SankeyConfig(align="middle")

    def test_unknown_link_color(self):
        """Unknown colour modes are rejected."""
        with pytest.raises(InvalidConfigError, match="link_color"):
            SankeyConfig(link_color="rainbow")


class TestValidation:
    """Tests for rejected settings."""

    @pytest.mark.parametrize(
        "options, message",
        [
            ({"width": 0}, "width must be positive"),
            ({"height": -5}, "height must be positive"),
            ({"margin": -1}, "margin must be >= 0"),
            ({"margin": 300}, "no drawable area"),
            ({"node_width": 0}, "node_width must be positive"),
            ({"node_width": 2000}, "exceeds drawable width"),
            ({"node_padding": -2}, "node_padding must be >= 0"),
            ({"iterations": -1}, "iterations must be >= 0"),
            ({"min_node_height": -1}, "min_node_height must be >= 0"),
        ],
    )
    def test_invalid(self, options, message):
        """Each invalid option raises InvalidConfigError."""
        with pytest.raises(InvalidConfigError, match=message):
            SankeyConfig(**options)

    def test_config_errors_are_validation_errors(self):
        """InvalidConfigError shares the validation base class."""
        assert issubclass(InvalidConfigError, ValidationError)

    def test_zero_padding_allowed(self):
        """Padding may be zero."""
        assert SankeyConfig(node_padding=0).node_padding == 0


class TestValidators:
    """Tests for standalone validation helpers."""

    def test_canvas_size(self):
        """Valid sizes come back as floats."""
        assert validate_canvas_size(800, 600) == (800.0, 600.0)

    def test_iterations(self):
        """Zero passes is allowed."""
        assert validate_iterations(0) == 0

    def test_link_value(self):
        """Numeric strings are accepted like numbers."""
        assert validate_link_value("2.5", 0) == 2.5

    def test_link_value_rejects_bool(self):
        """Booleans are not flow values."""
        with pytest.raises(ValidationError):
            validate_link_value(True, 0)

    def test_unique_ids(self):
        """Unique ids pass silently."""
        validate_unique_ids(["a", "b", "c"])
