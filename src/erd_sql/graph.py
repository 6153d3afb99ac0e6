"""
Graph conversion
================

Projects a validated schema into diagram nodes and foreign-key edges.
Edges point from the referenced (primary-key) table to the referencing
table, i.e. "is referenced by". Positions are a diagonal seed layout;
real placement belongs to the renderer.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .models import FK, Attribute, Schema, Table

NODE_SPACING_X = 400
NODE_SPACING_Y = 200

HANDLE_PATTERN = re.compile(r'^(.+)-(.+)-(source|target)$')


@dataclass
class GraphNode:
    id: str
    position: Dict[str, int]
    attributes: List[Attribute] = field(default_factory=list)
    label: str = ''
    type: str = 'tableNode'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'position': dict(self.position),
            'label': self.label or self.id,
            'attributes': [attr.to_dict() for attr in self.attributes],
        }


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    source_attr: str
    target_attr: str
    type: str = 'customEdge'
    label: str = 'FK'

    @property
    def id(self) -> str:
        return edge_id(self.source, self.source_attr, self.target, self.target_attr)

    @property
    def source_handle(self) -> str:
        return f"{self.source}-{self.source_attr}-source"

    @property
    def target_handle(self) -> str:
        return f"{self.target}-{self.target_attr}-target"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source,
            'target': self.target,
            'sourceAttr': self.source_attr,
            'targetAttr': self.target_attr,
            'sourceHandle': self.source_handle,
            'targetHandle': self.target_handle,
            'type': self.type,
            'label': self.label,
        }


@dataclass(frozen=True)
class ConnectionInfo:
    source_table_id: str
    source_attr_name: str
    target_table_id: str
    target_attr_name: str


def edge_id(source_table: str, source_attr: str, target_table: str, target_attr: str) -> str:
    return f"{source_table}-{source_attr}-to-{target_table}-{target_attr}"


def table_to_node(table: Table, index: int) -> GraphNode:
    # copies so the projection never aliases the schema's attributes
    attributes = [Attribute(**vars(attr)) for attr in table.attributes]
    return GraphNode(
        id=table.name,
        label=table.name,
        position={'x': index * NODE_SPACING_X, 'y': index * NODE_SPACING_Y},
        attributes=attributes,
    )


def edges_from_foreign_keys(nodes: List[GraphNode]) -> List[GraphEdge]:
    """One edge per FK attribute whose referenced table has a node."""
    node_ids = {node.id for node in nodes}
    edges = []
    for node in nodes:
        for attr in node.attributes:
            if attr.type != FK or not attr.ref_table or not attr.ref_attr:
                continue
            if attr.ref_table not in node_ids:
                continue
            edges.append(GraphEdge(
                source=attr.ref_table,
                target=node.id,
                source_attr=attr.ref_attr,
                target_attr=attr.name,
            ))
    return edges


def schema_to_graph(schema: Schema) -> Tuple[List[GraphNode], List[GraphEdge]]:
    nodes = [table_to_node(table, index) for index, table in enumerate(schema.tables)]
    return nodes, edges_from_foreign_keys(nodes)


def graph_to_dict(nodes: List[GraphNode], edges: List[GraphEdge]) -> Dict[str, Any]:
    return {
        'nodes': [node.to_dict() for node in nodes],
        'edges': [edge.to_dict() for edge in edges],
    }


def parse_connection_handles(source_handle: Optional[str], target_handle: Optional[str]) -> Optional[ConnectionInfo]:
    """Split ``<table>-<attr>-source`` / ``<table>-<attr>-target`` handle ids."""
    if not source_handle or not target_handle:
        return None

    source_match = HANDLE_PATTERN.match(source_handle)
    target_match = HANDLE_PATTERN.match(target_handle)
    if not source_match or not target_match:
        return None
    if source_match.group(3) != 'source' or target_match.group(3) != 'target':
        return None

    return ConnectionInfo(
        source_table_id=source_match.group(1),
        source_attr_name=source_match.group(2),
        target_table_id=target_match.group(1),
        target_attr_name=target_match.group(2),
    )


def is_valid_connection(source: str, target: str,
                        source_handle: Optional[str], target_handle: Optional[str]) -> bool:
    if source == target:
        return False
    return parse_connection_handles(source_handle, target_handle) is not None
