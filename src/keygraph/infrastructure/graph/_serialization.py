"""
Vertex configuration registry and JSON round-trip.

Vertex classes register themselves with `@register_vertex()`. A registered
vertex can then be described as a JSON-serializable node

    {"type": "ElementWiseVertex", "config": {...}}

and rebuilt from that node. Only the vertex configuration is stored;
per-minibatch state (masks, the last forward input count) is not.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Optional, Type

_VERTEX_REGISTRY: Dict[str, Type[Any]] = {}


def register_vertex(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register a vertex class for deserialization.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _VERTEX_REGISTRY[key] = cls
        return cls

    return deco


def vertex_to_config(v: Any) -> Dict[str, Any]:
    """
    Describe a vertex as a `{"type", "config"}` node.
    """
    get_cfg = getattr(v, "get_config", None)
    cfg = get_cfg() if callable(get_cfg) else {}
    return {"type": v.__class__.__name__, "config": cfg}


def vertex_from_config(node: Dict[str, Any]) -> Any:
    """
    Rebuild a vertex from a `{"type", "config"}` node.

    Raises
    ------
    ValueError
        If the node names a vertex type that was never registered.
    """
    type_name = str(node["type"])
    if type_name not in _VERTEX_REGISTRY:
        raise ValueError(
            f"Unknown vertex type '{type_name}'. Register it via @register_vertex."
        )

    cls = _VERTEX_REGISTRY[type_name]
    cfg = node.get("config", {}) or {}

    from_cfg = getattr(cls, "from_config", None)
    if callable(from_cfg):
        return from_cfg(cfg)
    return cls(**cfg)


def vertex_to_json(v: Any, **json_kwargs: Any) -> str:
    return json.dumps(vertex_to_config(v), **json_kwargs)


def vertex_from_json(s: str) -> Any:
    return vertex_from_config(json.loads(s))
