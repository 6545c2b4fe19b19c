from ._activations import Activations, Gradients
from ._base_vertex import BaseGraphVertex
from ._elementwise_vertex import ElementWiseVertex
from ._serialization import (
    register_vertex,
    vertex_from_config,
    vertex_from_json,
    vertex_to_config,
    vertex_to_json,
)

__all__ = [
    Activations.__name__,
    Gradients.__name__,
    BaseGraphVertex.__name__,
    ElementWiseVertex.__name__,
    register_vertex.__name__,
    vertex_from_config.__name__,
    vertex_from_json.__name__,
    vertex_to_config.__name__,
    vertex_to_json.__name__,
]
