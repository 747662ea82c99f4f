"""Node host: image buffers, ports, nodes and node type lookup."""

from hsplab.core.data_types import ColorSpace, ImageBuffer
from hsplab.core.port import InputPort, OutputPort, PortType, connect, disconnect
from hsplab.core.node import Node, NodeMeta, Parameter, ParameterType
from hsplab.core.registry import create_node, node_from_dict, node_types, register_node

__all__ = [
    "ColorSpace",
    "ImageBuffer",
    "InputPort",
    "OutputPort",
    "PortType",
    "connect",
    "disconnect",
    "Node",
    "NodeMeta",
    "Parameter",
    "ParameterType",
    "create_node",
    "node_from_dict",
    "node_types",
    "register_node",
]
