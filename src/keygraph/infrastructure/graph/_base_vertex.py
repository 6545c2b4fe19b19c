"""
Base class for parameter-free graph vertices.

`BaseGraphVertex` carries the bookkeeping every vertex shares with the host
graph: its name, its index in the graph, its declared arity and an optional
mask. Subclasses implement the forward pass, the backward pass and mask
propagation.

Vertices derived from this class own no learnable parameters. They report
`num_params() == 0` and reject any gradient-accumulation buffer the host
graph tries to attach.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from ...domain._errors import ConfigurationError
from ...domain._tensor import ITensor
from ...domain._vertex import MaskState
from ._activations import Activations, Gradients

logger = logging.getLogger(__name__)


class BaseGraphVertex(ABC):
    """
    Shared state and host-graph hooks for vertices without parameters.

    Parameters
    ----------
    name : str
        Human-readable vertex name, unique within its graph.
    index : int
        Position of the vertex in the graph's topological order.
    num_inputs : int
        Number of inputs the graph wires into this vertex. Must be >= 1.

    Raises
    ------
    ValueError
        If `index` is negative or `num_inputs` is smaller than 1.
    """

    def __init__(self, name: str, index: int, num_inputs: int) -> None:
        if index < 0:
            raise ValueError(f"index must be >= 0, got {index}")
        if num_inputs < 1:
            raise ValueError(f"num_inputs must be >= 1, got {num_inputs}")
        self._name = str(name)
        self._index = int(index)
        self._num_inputs = int(num_inputs)
        self._mask: Optional[ITensor] = None

    # ---------------------------------------------------------------------
    # Identity
    # ---------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> int:
        return self._index

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    def has_layer(self) -> bool:
        return False

    # ---------------------------------------------------------------------
    # Parameters
    # ---------------------------------------------------------------------
    def num_params(self) -> int:
        return 0

    def params(self) -> tuple:
        return ()

    def set_backprop_gradients_view(self, buffer: Optional[ITensor]) -> None:
        """
        Attach a gradient-accumulation buffer.

        Parameter-free vertices have nothing to accumulate, so only None is
        accepted (as a no-op).

        Raises
        ------
        ConfigurationError
            If `buffer` is not None.
        """
        if buffer is not None:
            raise ConfigurationError(
                f"Vertex '{self._name}' does not have gradients; "
                "gradients view array cannot be set here"
            )

    # ---------------------------------------------------------------------
    # Mask
    # ---------------------------------------------------------------------
    @property
    def mask(self) -> Optional[ITensor]:
        return self._mask

    def set_mask(self, mask: Optional[ITensor]) -> None:
        self._mask = mask

    def clear(self) -> None:
        """
        Drop per-minibatch state so the vertex can start a new cycle.
        """
        logger.debug("Clearing vertex %r", self._name)
        self._mask = None

    # ---------------------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        return {
            "name": self._name,
            "index": self._index,
            "num_inputs": self._num_inputs,
        }

    # ---------------------------------------------------------------------
    # Subclass contract
    # ---------------------------------------------------------------------
    @abstractmethod
    def forward(self, inputs: Sequence[ITensor], **kwargs: Any) -> Activations:
        """
        Compute the vertex output for `inputs`.
        """
        ...

    @abstractmethod
    def backward(
        self, gradients: Gradients, inputs: Optional[Sequence[ITensor]] = None
    ) -> Gradients:
        """
        Compute per-input gradients for the most recent forward pass.
        """
        ...

    @abstractmethod
    def feed_forward_mask_arrays(
        self,
        mask_arrays: Optional[Sequence[Optional[ITensor]]],
        current_mask_state: Optional[MaskState],
    ) -> tuple[Optional[ITensor], Optional[MaskState]]:
        """
        Merge the masks of the vertex inputs into the mask of its output.
        """
        ...
