"""
Node base class.

A node owns typed input/output ports and a set of parameters. Subclasses
declare them in define_ports() / define_parameters() and do their work in
process(); execute() wraps process() with input checks, error capture and
output caching.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, ABCMeta, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar

from hsplab.core.port import InputPort, OutputPort, PortType, disconnect

logger = logging.getLogger(__name__)


class ParameterType(Enum):
    """Kinds of node parameters."""

    FLOAT = auto()
    INT = auto()
    BOOL = auto()
    ENUM = auto()
    STRING = auto()


@dataclass
class Parameter:
    """
    A user-facing node setting.

    Values are coerced to the parameter type on set(); numeric values are
    clamped to [min_value, max_value] when those are given, and ENUM
    values must be one of choices.

    Attributes:
        name: Identifier within the node
        param_type: Kind of value
        default: Initial value
        value: Current value
        min_value: Lower bound for numeric types
        max_value: Upper bound for numeric types
        step: UI increment hint
        choices: Allowed values for ENUM
        description: Human-readable description
    """

    name: str
    param_type: ParameterType
    default: Any = None
    value: Any = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    choices: list[str] = field(default_factory=list)
    description: str = ""

    def __post_init__(self) -> None:
        self.value = self._coerce(self.default)

    def _coerce(self, value: Any) -> Any:
        if self.param_type == ParameterType.FLOAT:
            value = float(value)
        elif self.param_type == ParameterType.INT:
            value = int(value)
        elif self.param_type == ParameterType.BOOL:
            if isinstance(value, str):
                value = value.strip().lower() in ("1", "true", "yes", "on")
            else:
                value = bool(value)
        elif self.param_type in (ParameterType.ENUM, ParameterType.STRING):
            value = str(value)

        if self.param_type in (ParameterType.FLOAT, ParameterType.INT):
            if self.min_value is not None and value < self.min_value:
                value = type(value)(self.min_value)
            if self.max_value is not None and value > self.max_value:
                value = type(value)(self.max_value)

        if self.param_type == ParameterType.ENUM and self.choices:
            if value not in self.choices:
                raise ValueError(
                    f"Invalid choice {value!r} for parameter '{self.name}', "
                    f"expected one of {self.choices}"
                )

        return value

    def set(self, value: Any) -> bool:
        """
        Set a new value.

        Returns:
            True if the stored value changed
        """
        new_value = self._coerce(value)
        changed = new_value != self.value
        self.value = new_value
        return changed

    def reset(self) -> None:
        """Restore the default value."""
        self.value = self._coerce(self.default)


class NodeMeta(ABCMeta):
    """Metaclass that marks classes defining abstract methods as abstract."""

    def __new__(mcs, name, bases, namespace, **kwargs):
        cls = super().__new__(mcs, name, bases, namespace, **kwargs)
        if "_abstract" not in namespace:
            cls._abstract = bool(getattr(cls, "__abstractmethods__", None))
        return cls


class Node(ABC, metaclass=NodeMeta):
    """
    Base class for all processing nodes.

    Class attributes describe the node for the registry:

        name: Display name
        category: Palette category
        description: One-line summary
        icon: Icon hint

    Attributes:
        id: Unique node id
        inputs: Input ports by name
        outputs: Output ports by name
        parameters: Parameters by name
        position: Editor position
        last_error: Message from the last failed execute(), if any
    """

    name: ClassVar[str] = "Node"
    category: ClassVar[str] = "Utility"
    description: ClassVar[str] = ""
    icon: ClassVar[str | None] = None
    _abstract: ClassVar[bool] = True

    def __init__(self) -> None:
        self.id: str = f"{self.__class__.__name__}_{uuid.uuid4().hex[:8]}"
        self.inputs: dict[str, InputPort] = {}
        self.outputs: dict[str, OutputPort] = {}
        self.parameters: dict[str, Parameter] = {}
        self.position: tuple[float, float] = (0.0, 0.0)
        self.last_error: str | None = None
        self._dirty: bool = True

        self.define_ports()
        self.define_parameters()

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def define_ports(self) -> None:
        """Declare ports. Override in subclasses."""

    def define_parameters(self) -> None:
        """Declare parameters. Override in subclasses."""

    @abstractmethod
    def process(self) -> None:
        """Read inputs, compute, and set outputs."""

    def add_input(
        self,
        name: str,
        port_type: PortType = PortType.ANY,
        description: str = "",
        required: bool = True,
        default: Any = None,
    ) -> InputPort:
        """Add an input port."""
        port = InputPort(
            name=name,
            port_type=port_type,
            description=description,
            required=required,
            default=default,
            node=self,
        )
        self.inputs[name] = port
        return port

    def add_output(
        self,
        name: str,
        port_type: PortType = PortType.ANY,
        description: str = "",
    ) -> OutputPort:
        """Add an output port."""
        port = OutputPort(
            name=name,
            port_type=port_type,
            description=description,
            node=self,
        )
        self.outputs[name] = port
        return port

    def add_parameter(
        self,
        name: str,
        param_type: ParameterType,
        default: Any = None,
        min_value: float | None = None,
        max_value: float | None = None,
        step: float | None = None,
        choices: list[str] | None = None,
        description: str = "",
    ) -> Parameter:
        """Add a parameter."""
        param = Parameter(
            name=name,
            param_type=param_type,
            default=default,
            min_value=min_value,
            max_value=max_value,
            step=step,
            choices=list(choices or []),
            description=description,
        )
        self.parameters[name] = param
        return param

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def get_parameter(self, name: str) -> Any:
        """Current value of a parameter."""
        if name not in self.parameters:
            raise KeyError(f"{self.__class__.__name__} has no parameter '{name}'")
        return self.parameters[name].value

    def set_parameter(self, name: str, value: Any) -> None:
        """Set a parameter; marks the node dirty if the value changed."""
        if name not in self.parameters:
            raise KeyError(f"{self.__class__.__name__} has no parameter '{name}'")
        if self.parameters[name].set(value):
            self.mark_dirty()

    def get_input_value(self, name: str) -> Any:
        """Value arriving on an input port."""
        return self.inputs[name].get_value()

    def set_output_value(self, name: str, value: Any) -> None:
        """Publish a value on an output port."""
        self.outputs[name].set_value(value)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @property
    def is_dirty(self) -> bool:
        """True if outputs are stale."""
        return self._dirty

    def mark_dirty(self) -> None:
        """Invalidate outputs here and downstream."""
        self._dirty = True
        for output in self.outputs.values():
            output.invalidate_cache()
            for connected in output.connections:
                if connected.node is not None and not connected.node.is_dirty:
                    connected.node.mark_dirty()

    def _upstream_dirty(self) -> bool:
        for port in self.inputs.values():
            if port.connection is not None and port.connection.node is not None:
                if port.connection.node.is_dirty:
                    return True
        return False

    def execute(self) -> bool:
        """
        Run process() if outputs are stale.

        Exceptions are logged and stored in last_error rather than raised,
        so a failing node leaves its callers running.

        Returns:
            True on success (or when cached outputs are still valid)
        """
        if not self._dirty and not self._upstream_dirty():
            return True

        for port_name, port in self.inputs.items():
            if port.required and port.get_value() is None:
                self.last_error = f"Missing required input '{port_name}'"
                logger.error("%s: %s", self.id, self.last_error)
                return False

        try:
            self.process()
        except Exception as e:
            self.last_error = str(e)
            logger.error("%s: process failed: %s", self.id, e, exc_info=True)
            return False

        self.last_error = None
        self._dirty = False
        return True

    def disconnect_all(self) -> None:
        """Drop every connection on every port."""
        for port in self.inputs.values():
            disconnect(port)
        for port in self.outputs.values():
            for input_port in list(port.connections):
                disconnect(input_port)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "type": self.__class__.__name__,
            "position": list(self.position),
            "parameters": {name: p.value for name, p in self.parameters.items()},
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r})"
