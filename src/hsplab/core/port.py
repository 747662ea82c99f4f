"""
Node ports.

An OutputPort holds the value a node produced on its last run; an
InputPort either reads the OutputPort it is wired to or falls back to its
own default. Each input takes at most one connection, outputs fan out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hsplab.core.node import Node


class PortType(Enum):
    """What travels over a port."""

    IMAGE = auto()  # ImageBuffer
    NUMBER = auto()
    ANY = auto()


def types_compatible(source_type: PortType, dest_type: PortType) -> bool:
    """Same type, or a destination that takes anything."""
    return dest_type in (source_type, PortType.ANY)


@dataclass
class InputPort:
    """
    Node input.

    Attributes:
        name: Port name within the node
        port_type: Accepted type
        description: Human-readable description
        required: Whether execute() needs a value here
        default: Value used while unconnected
        node: Owning node
        connection: Upstream output, if wired
    """

    name: str
    port_type: PortType = PortType.ANY
    description: str = ""
    required: bool = True
    default: Any = None
    node: Node | None = field(default=None, repr=False)
    connection: OutputPort | None = field(default=None, repr=False)

    @property
    def is_connected(self) -> bool:
        return self.connection is not None

    def get_value(self) -> Any:
        """Upstream value when connected, otherwise the default."""
        if self.connection is not None:
            return self.connection.get_value()
        return self.default


@dataclass
class OutputPort:
    """
    Node output.

    Attributes:
        name: Port name within the node
        port_type: Produced type
        description: Human-readable description
        node: Owning node
        connections: Downstream inputs
    """

    name: str
    port_type: PortType = PortType.ANY
    description: str = ""
    node: Node | None = field(default=None, repr=False)
    connections: list[InputPort] = field(default_factory=list, repr=False)
    _value: Any = field(default=None, repr=False)
    _valid: bool = field(default=False, repr=False)

    @property
    def is_connected(self) -> bool:
        return bool(self.connections)

    @property
    def has_value(self) -> bool:
        """True once a value was set and not invalidated since."""
        return self._valid

    def get_value(self) -> Any:
        """Last published value, or None after invalidation."""
        return self._value if self._valid else None

    def set_value(self, value: Any) -> None:
        self._value = value
        self._valid = True

    def invalidate_cache(self) -> None:
        self._value = None
        self._valid = False


def connect(output: OutputPort, input_port: InputPort) -> bool:
    """
    Wire an output to an input, replacing the input's current source.

    Returns:
        False for incompatible types or a node wired to itself
    """
    if not types_compatible(output.port_type, input_port.port_type):
        return False
    if output.node is not None and output.node is input_port.node:
        return False

    disconnect(input_port)
    output.connections.append(input_port)
    input_port.connection = output
    return True


def disconnect(input_port: InputPort) -> bool:
    """Unwire an input. Returns False if it was not connected."""
    output = input_port.connection
    if output is None:
        return False

    output.connections.remove(input_port)
    input_port.connection = None
    return True
