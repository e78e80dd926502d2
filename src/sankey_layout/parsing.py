"""
Graph notations.

Two notations are understood:

- Row notation: one ``source,target,value`` link per line::

      Salary,Budget,3000
      Budget,Rent,1200

- Mapping notation: YAML text, or an already-decoded YAML/JSON object::

      {"nodes": [{"name": "Budget", "color": "#4a90d9"}],
       "links": [{"source": "Salary", "target": "Budget", "value": 3000}]}

Both return a GraphSpec; validation of ids and values happens in GraphModel.
"""

from __future__ import annotations

from typing import Any, Mapping

import yaml

from .types import GraphSpec, LinkSpec, NodeSpec
from .validation import ValidationError


class ParseError(ValidationError):
    """Raised when a graph notation cannot be read."""

    def __init__(self, message: str, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


def parse_rows(source: str) -> GraphSpec:
    """
    Parse row notation.

    Blank lines and rows that do not have exactly three fields are skipped.
    Fields are stripped of surrounding whitespace. Nodes are declared in
    order of first appearance.

    Raises:
        ParseError: If a value field is not a number.
    """
    nodes: dict[str, NodeSpec] = {}
    links: list[LinkSpec] = []

    for lineno, row in enumerate(source.splitlines(), start=1):
        if not row.strip():
            continue
        cols = [col.strip() for col in row.split(",")]
        if len(cols) != 3:
            continue

        source_id, target_id, raw_value = cols
        try:
            value = float(raw_value)
        except ValueError:
            raise ParseError(f"value {raw_value!r} is not a number", lineno) from None

        for node_id in (source_id, target_id):
            if node_id not in nodes:
                nodes[node_id] = NodeSpec(node_id)
        links.append(LinkSpec(source_id, target_id, value))

    return GraphSpec(nodes=tuple(nodes.values()), links=tuple(links))


def _node_from_mapping(index: int, data: Any) -> NodeSpec:
    if isinstance(data, str):
        return NodeSpec(data)
    if not isinstance(data, Mapping):
        raise ParseError(f"node {index} must be a mapping or a string, got {data!r}")
    attrs = dict(data)
    node_id = attrs.pop("id", None)
    name = attrs.pop("name", None)
    if node_id is None:
        node_id = name
    elif name is not None:
        attrs["name"] = name
    if node_id is None:
        raise ParseError(f"node {index} has no 'name' or 'id'")
    return NodeSpec(str(node_id), attrs)


def _link_from_mapping(index: int, data: Any) -> LinkSpec:
    if not isinstance(data, Mapping):
        raise ParseError(f"link {index} must be a mapping, got {data!r}")
    missing = [key for key in ("source", "target", "value") if key not in data]
    if missing:
        raise ParseError(f"link {index} is missing {', '.join(missing)}")
    try:
        value = float(data["value"])
    except (TypeError, ValueError):
        raise ParseError(f"link {index} value {data['value']!r} is not a number") from None
    except OverflowError:
        raise ParseError(f"link {index} value {data['value']!r} is not finite") from None
    return LinkSpec(str(data["source"]), str(data["target"]), value)


def parse_mapping(data: Mapping[str, Any]) -> GraphSpec:
    """
    Parse mapping notation.

    Missing or null ``nodes``/``links`` entries are treated as empty lists.
    Extra node keys (e.g. ``color``) are kept as display attributes.

    Raises:
        ParseError: If the structure is malformed.
    """
    if not isinstance(data, Mapping):
        raise ParseError(f"expected a mapping with 'nodes' and 'links', got {type(data).__name__}")

    raw_nodes = data.get("nodes") or []
    raw_links = data.get("links") or []
    return GraphSpec(
        nodes=tuple(_node_from_mapping(i, n) for i, n in enumerate(raw_nodes)),
        links=tuple(_link_from_mapping(i, link) for i, link in enumerate(raw_links)),
    )


def parse_yaml(source: str) -> GraphSpec:
    """
    Parse mapping notation written as YAML.

    Example:
        >>> spec = parse_yaml("links:\\n  - {source: A, target: B, value: 5}")
        >>> spec.links
        (LinkSpec(source='A', target='B', value=5.0),)

    Raises:
        ParseError: If the text is not valid YAML or the structure is malformed.
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        raise ParseError(f"invalid YAML: {e}", line) from e

    if data is None:
        data = {}
    return parse_mapping(data)


__all__ = ["ParseError", "parse_rows", "parse_mapping", "parse_yaml"]
