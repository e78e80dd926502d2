"""
Layout configuration.

A SankeyConfig is an immutable value passed into every layout run. A change
of settings means building a new config (see ``replace``) and recomputing.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Union

from .types import LinkColorMode, NodeAlign
from .validation import (
    InvalidConfigError,
    validate_canvas_size,
    validate_iterations,
    validate_margin,
    validate_node_width,
    validate_non_negative,
)


def _coerce_enum(enum_cls: Any, value: Any, name: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(member.value for member in enum_cls)
    raise InvalidConfigError(f"{name} must be one of {{{valid}}}, got {value!r}")


@dataclass(frozen=True)
class SankeyConfig:
    """
    Immutable layout settings.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        margin: Empty border on every side
        node_width: Horizontal thickness of every node
        node_padding: Minimum vertical gap between nodes in one column
        align: Column alignment mode
        iterations: Number of relaxation passes
        min_node_height: Smallest drawn node height
        link_color: Link colouring mode, used by renderers only

    Example:
        config = SankeyConfig(width=800, height=400, align="justify")
        wider = config.replace(width=1200)
    """

    width: float = 900.0
    height: float = 600.0
    margin: float = 10.0
    node_width: float = 40.0
    node_padding: float = 16.0
    align: Union[NodeAlign, str] = NodeAlign.LEFT
    iterations: int = 6
    min_node_height: float = 1.0
    link_color: Union[LinkColorMode, str] = LinkColorMode.NONE

    def __post_init__(self) -> None:
        width, height = validate_canvas_size(self.width, self.height)
        margin = validate_margin(self.margin, width, height)
        node_width = validate_node_width(self.node_width, width - 2 * margin)

        # Frozen dataclass: normalized values go through object.__setattr__
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "margin", margin)
        object.__setattr__(self, "node_width", node_width)
        object.__setattr__(
            self, "node_padding", validate_non_negative("node_padding", self.node_padding)
        )
        object.__setattr__(self, "align", _coerce_enum(NodeAlign, self.align, "align"))
        object.__setattr__(self, "iterations", validate_iterations(self.iterations))
        object.__setattr__(
            self,
            "min_node_height",
            validate_non_negative("min_node_height", self.min_node_height),
        )
        object.__setattr__(
            self, "link_color", _coerce_enum(LinkColorMode, self.link_color, "link_color")
        )

    @property
    def drawable_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def drawable_height(self) -> float:
        return self.height - 2 * self.margin

    def replace(self, **changes: Any) -> SankeyConfig:
        """Return a new validated config with ``changes`` applied."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = SankeyConfig()


__all__ = ["SankeyConfig", "DEFAULT_CONFIG"]
