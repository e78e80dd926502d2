"""
sankey-layout: Flow diagram layout in Python.

This package computes the geometry of Sankey diagrams over weighted
directed acyclic graphs: node columns, node heights proportional to flow,
and per-link attachment offsets whose widths add up at every node.
Rendering is left to the caller (an SVG exporter is included).

Pipeline:
- graph: Validation and node flow values
- layering: Column assignment (left, right, center, justify)
- columns: Horizontal placement
- sizing: Vertical scale factor and initial stacking
- relaxation: Iterative vertical relaxation
- routing: Link ordering and attachment offsets
"""

__version__ = "0.1.0"

# Configuration
from .config import DEFAULT_CONFIG, SankeyConfig

# Pipeline phases
from .columns import ColumnScaler
from .graph import GraphModel
from .layering import LayeringEngine, assign_columns

# Layout entry points
from .layout import SankeyLayout, compute_layout

# Metrics for layout quality evaluation
from .metrics import (
    column_overlaps,
    flow_imbalance,
    layout_quality_summary,
    link_crossings,
    weighted_link_length,
)

# Notations
from .parsing import ParseError, parse_mapping, parse_rows, parse_yaml

# Preprocessing utilities
from .preprocessing import detect_cycle, topological_sort
from .relaxation import VerticalRelaxer
from .routing import LinkRouter, link_control_points
from .sizing import NodeSizer, SizingResult
from .types import (
    GraphSpec,
    LayoutResult,
    Link,
    LinkColorMode,
    LinkLayout,
    LinkSpec,
    Node,
    NodeAlign,
    NodeLayout,
    NodeSpec,
)

# Validation utilities
from .validation import (
    CycleDetectedError,
    DuplicateNodeIdError,
    InsufficientHeightWarning,
    InvalidConfigError,
    InvalidValueError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "NodeAlign",
    "LinkColorMode",
    "NodeSpec",
    "LinkSpec",
    "GraphSpec",
    "Node",
    "Link",
    "NodeLayout",
    "LinkLayout",
    "LayoutResult",
    # Configuration
    "SankeyConfig",
    "DEFAULT_CONFIG",
    # Layout
    "SankeyLayout",
    "compute_layout",
    # Pipeline phases
    "GraphModel",
    "LayeringEngine",
    "assign_columns",
    "ColumnScaler",
    "NodeSizer",
    "SizingResult",
    "VerticalRelaxer",
    "LinkRouter",
    "link_control_points",
    # Notations
    "parse_rows",
    "parse_mapping",
    "parse_yaml",
    "ParseError",
    # Metrics
    "flow_imbalance",
    "weighted_link_length",
    "link_crossings",
    "column_overlaps",
    "layout_quality_summary",
    # Preprocessing
    "detect_cycle",
    "topological_sort",
    # Validation
    "ValidationError",
    "DuplicateNodeIdError",
    "InvalidValueError",
    "CycleDetectedError",
    "InvalidConfigError",
    "InsufficientHeightWarning",
]
