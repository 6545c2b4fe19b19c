"""
Forward and backward result bundles exchanged between vertices and the host graph.

A vertex returns an `Activations` bundle from its forward pass and a
`Gradients` bundle from its backward pass. Both are small immutable records;
the tensors they reference are owned by the caller once returned.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from ...domain._tensor import ITensor
from ...domain._vertex import MaskState


@dataclass(frozen=True)
class Activations:
    """
    Output of a vertex forward pass.

    Attributes
    ----------
    output : ITensor
        The activation tensor produced by the vertex.
    mask : Optional[ITensor]
        Merged validity mask, or None when no mask applies.
    mask_state : Optional[MaskState]
        Interpretation tag for `mask`, propagated unchanged by the vertex.
    """

    output: ITensor
    mask: Optional[ITensor] = None
    mask_state: Optional[MaskState] = None

    def get(self, i: int = 0) -> ITensor:
        """Return the activation at position `i` (vertices emit one)."""
        if i != 0:
            raise IndexError(f"Activations holds a single output, got index {i}")
        return self.output


@dataclass(frozen=True)
class Gradients:
    """
    Output of a vertex backward pass, or the upstream input to one.

    Attributes
    ----------
    activation_gradients : tuple[Optional[ITensor], ...]
        Gradients with respect to each vertex input, in input order. As an
        upstream bundle, position 0 holds the error signal (epsilon).
    parameter_gradients : Optional[Dict[str, ITensor]]
        Gradients of learnable parameters. Always None for parameter-free
        vertices.
    """

    activation_gradients: tuple[Optional[ITensor], ...] = field(default_factory=tuple)
    parameter_gradients: Optional[Dict[str, ITensor]] = None

    @classmethod
    def of(
        cls,
        gradients: Sequence[Optional[ITensor]],
        parameter_gradients: Optional[Dict[str, ITensor]] = None,
    ) -> "Gradients":
        """Build a bundle from any sequence of per-input gradients."""
        return cls(tuple(gradients), parameter_gradients)

    def get(self, i: int) -> Optional[ITensor]:
        """
        Return the gradient at position `i`, or None if it is absent.
        """
        if 0 <= i < len(self.activation_gradients):
            return self.activation_gradients[i]
        return None

    def size(self) -> int:
        return len(self.activation_gradients)
