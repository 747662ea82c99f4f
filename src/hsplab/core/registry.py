"""
Node type lookup.

Nodes register under their class name with @register_node. The registry
turns a saved node description (Node.to_dict()) back into a configured
node.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Type

if TYPE_CHECKING:
    from hsplab.core.node import Node

logger = logging.getLogger(__name__)

_NODE_TYPES: dict[str, Type[Node]] = {}


def register_node(cls: Type[Node]) -> Type[Node]:
    """
    Class decorator adding a node type to the registry.

    Usage:
        @register_node
        class MyNode(Node):
            name = "My Node"
    """
    _NODE_TYPES[cls.__name__] = cls
    return cls


def get_node_type(type_name: str) -> Type[Node] | None:
    """Registered class for a type name, or None."""
    return _NODE_TYPES.get(type_name)


def node_types() -> dict[str, Type[Node]]:
    """Copy of the type name -> class mapping."""
    return dict(_NODE_TYPES)


def create_node(type_name: str) -> Node:
    """
    Instantiate a registered node type.

    Raises:
        KeyError: If the type is not registered
    """
    cls = _NODE_TYPES.get(type_name)
    if cls is None:
        raise KeyError(f"Unknown node type: {type_name}")
    return cls()


def node_from_dict(data: dict[str, Any]) -> Node:
    """
    Rebuild a node from Node.to_dict() output.

    Parameters the node no longer has are skipped with a warning.
    """
    node = create_node(data["type"])
    node.id = data.get("id", node.id)
    node.position = tuple(data.get("position", node.position))

    for name, value in data.get("parameters", {}).items():
        if name in node.parameters:
            node.set_parameter(name, value)
        else:
            logger.warning("%s: ignoring unknown parameter '%s'", node.id, name)

    return node
