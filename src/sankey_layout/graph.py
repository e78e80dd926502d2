"""
Validated flow graph.

GraphModel turns a graph description into an immutable, validated model:
unique node identifiers, positive finite link values, implicit nodes for
identifiers that only appear in links, and each node's flow value.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from .types import GraphSpec, Link, LinkLike, LinkSpec, Node, NodeLike, NodeSpec
from .validation import ValidationError, validate_link_value, validate_unique_ids


def _to_node_spec(node_data: NodeLike) -> NodeSpec:
    if isinstance(node_data, NodeSpec):
        return node_data
    if isinstance(node_data, str):
        return NodeSpec(node_data)
    if isinstance(node_data, Mapping):
        attrs = dict(node_data)
        node_id = attrs.pop("id", None)
        name = attrs.pop("name", None)
        if node_id is None:
            node_id = name
        elif name is not None:
            attrs["name"] = name
        if node_id is None:
            raise ValidationError(f"Node descriptor has no 'id' or 'name': {node_data!r}")
        return NodeSpec(str(node_id), attrs)
    raise ValidationError(f"Unsupported node descriptor: {node_data!r}")


def _to_link_parts(link_data: LinkLike, index: int) -> tuple[str, str, Any]:
    if isinstance(link_data, LinkSpec):
        return link_data.source, link_data.target, link_data.value
    if isinstance(link_data, Mapping):
        try:
            return str(link_data["source"]), str(link_data["target"]), link_data.get("value")
        except KeyError as exc:
            raise ValidationError(f"Link {index}: missing {exc.args[0]!r}") from None
    if isinstance(link_data, (tuple, list)) and len(link_data) == 3:
        source, target, value = link_data
        return str(source), str(target), value
    raise ValidationError(f"Unsupported link descriptor at {index}: {link_data!r}")


class GraphModel:
    """
    Validated in-memory flow graph.

    Nodes keep declaration order; nodes created implicitly from links follow
    in order of first appearance (source before target).

    Example:
        graph = GraphModel(
            nodes=["A", "B"],
            links=[{"source": "A", "target": "B", "value": 5}],
        )
        graph.value("A")  # 5.0

    Raises:
        DuplicateNodeIdError: If two declared nodes share an id.
        InvalidValueError: If a link value is non-positive or non-finite.
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
    ) -> None:
        node_specs = [_to_node_spec(n) for n in (nodes or ())]
        validate_unique_ids(spec.id for spec in node_specs)

        link_specs: list[LinkSpec] = []
        for i, link_data in enumerate(links or ()):
            source, target, raw_value = _to_link_parts(link_data, i)
            link_specs.append(LinkSpec(source, target, validate_link_value(raw_value, i)))

        known = {spec.id for spec in node_specs}
        for link in link_specs:
            for node_id in (link.source, link.target):
                if node_id not in known:
                    known.add(node_id)
                    node_specs.append(NodeSpec(node_id))

        self._nodes: tuple[NodeSpec, ...] = tuple(node_specs)
        self._links: tuple[LinkSpec, ...] = tuple(link_specs)
        self._index: dict[str, int] = {spec.id: i for i, spec in enumerate(node_specs)}

        incoming = [0.0] * len(node_specs)
        outgoing = [0.0] * len(node_specs)
        for link in link_specs:
            outgoing[self._index[link.source]] += link.value
            incoming[self._index[link.target]] += link.value
        self._values: tuple[float, ...] = tuple(
            max(i, o) for i, o in zip(incoming, outgoing)
        )

    @classmethod
    def from_spec(cls, spec: GraphSpec) -> GraphModel:
        """Build a model from a parsed GraphSpec."""
        return cls(nodes=spec.nodes, links=spec.links)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> tuple[NodeSpec, ...]:
        return self._nodes

    @property
    def links(self) -> tuple[LinkSpec, ...]:
        return self._links

    @property
    def node_ids(self) -> list[str]:
        return [spec.id for spec in self._nodes]

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def is_empty(self) -> bool:
        return not self._nodes

    def index_of(self, node_id: str) -> int:
        return self._index[node_id]

    def value(self, node_id: str) -> float:
        """Flow value of a node: max(sum of incoming, sum of outgoing)."""
        return self._values[self._index[node_id]]

    def edges(self) -> list[tuple[int, int]]:
        """Links as (source index, target index) pairs."""
        return [(self._index[link.source], self._index[link.target]) for link in self._links]

    # -------------------------------------------------------------------------
    # Working copies
    # -------------------------------------------------------------------------

    def build(self) -> tuple[list[Node], list[Link]]:
        """
        Create fresh working nodes and links for one layout run.

        The model itself is never mutated, so every run starts from the same
        state.
        """
        nodes = [
            Node(spec.id, index=i, value=self._values[i], attrs=spec.attrs)
            for i, spec in enumerate(self._nodes)
        ]
        links: list[Link] = []
        for i, spec in enumerate(self._links):
            source = nodes[self._index[spec.source]]
            target = nodes[self._index[spec.target]]
            link = Link(source, target, spec.value, index=i)
            source.source_links.append(link)
            target.target_links.append(link)
            links.append(link)
        return nodes, links

    def __repr__(self) -> str:
        return f"GraphModel(nodes={len(self._nodes)}, links={len(self._links)})"


__all__ = ["GraphModel"]
