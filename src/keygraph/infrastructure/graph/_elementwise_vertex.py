"""
Element-wise combination vertex.

`ElementWiseVertex` combines the activations of two or more vertices in an
element-wise manner: by addition, subtraction or multiplication. Addition and
multiplication accept any number of inputs; subtraction accepts exactly two.
All inputs of one forward call must share the same shape. Shape equality is
the host graph's responsibility and is not re-verified here beyond what the
tensor backend enforces.

Masks of variable-length inputs are merged with a logical OR: a step is
valid in the output if it is valid in any input. If any input lacks a mask,
the output carries no mask at all.

The vertex is intended for single-threaded use. `last_input_count` is
per-instance sequencing state linking a forward call to the matching
backward call, so concurrent minibatches need separate instances.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Union

from typing_extensions import Self

from ...domain._errors import InvalidArityError, StateError, UnsupportedOperationError
from ...domain._tensor import ITensor
from ...domain._vertex import ElementWiseOp, MaskState
from ._activations import Activations, Gradients
from ._base_vertex import BaseGraphVertex
from ._serialization import register_vertex

logger = logging.getLogger(__name__)


@register_vertex()
class ElementWiseVertex(BaseGraphVertex):
    """
    Graph vertex computing an element-wise sum, difference or product.

    Parameters
    ----------
    name : str
        Vertex name.
    index : int
        Vertex index in the graph.
    num_inputs : int
        Declared number of inputs.
    op : Union[ElementWiseOp, str]
        Combination operator, as an enum member or a case-insensitive name
        ("add", "subtract", "product").

    Raises
    ------
    UnsupportedOperationError
        If `op` does not name a known operator.
    """

    def __init__(
        self,
        name: str,
        index: int,
        num_inputs: int,
        op: Union[ElementWiseOp, str],
    ) -> None:
        super().__init__(name, index, num_inputs)
        self._op = ElementWiseOp.parse(op)
        self._last_input_count: Optional[int] = None

    @property
    def op(self) -> ElementWiseOp:
        return self._op

    @property
    def last_input_count(self) -> Optional[int]:
        """
        Number of inputs seen by the most recent forward pass.

        None before the first forward pass and after `clear()`.
        """
        return self._last_input_count

    def clear(self) -> None:
        super().clear()
        self._last_input_count = None

    # ---------------------------------------------------------------------
    # Forward
    # ---------------------------------------------------------------------
    def forward(
        self,
        inputs: Optional[Sequence[ITensor]],
        *,
        masks: Optional[Sequence[Optional[ITensor]]] = None,
        mask_state: Optional[MaskState] = MaskState.ACTIVE,
    ) -> Activations:
        """
        Combine `inputs` element-wise.

        Parameters
        ----------
        inputs : Sequence[ITensor]
            Input activations, all of identical shape. Never mutated.
        masks : Optional[Sequence[Optional[ITensor]]], optional
            Per-input masks to merge into the output mask, one per input.
            An empty sequence means no masks. When omitted, the vertex's
            own mask (see `set_mask`) is used.
        mask_state : Optional[MaskState], optional
            Tag propagated with the merged mask. Defaults to ACTIVE.

        Returns
        -------
        Activations
            The combined output with its merged mask and mask state. A
            single input is passed through unchanged, with no mask.

        Raises
        ------
        StateError
            If `inputs` is None or empty.
        InvalidArityError
            If the operator is SUBTRACT and there are not exactly 2 inputs,
            or a non-empty `masks` does not hold one mask per input.
        UnsupportedOperationError
            If the operator is unknown.
        """
        if not inputs:
            raise StateError("Cannot do forward pass: inputs not set")

        inputs = tuple(inputs)
        n = len(inputs)
        self._last_input_count = n

        if n == 1:
            return Activations(inputs[0], mask=None, mask_state=None)

        logger.debug("%r forward with %d inputs", self, n)

        match self._op:
            case ElementWiseOp.ADD:
                out = inputs[0].clone()
                for x in inputs[1:]:
                    out += x
            case ElementWiseOp.SUBTRACT:
                if n != 2:
                    raise InvalidArityError(
                        op=str(self._op),
                        actual=n,
                        expected=2,
                        message="ElementWise subtraction only supports 2 inputs",
                    )
                out = inputs[0] - inputs[1]
            case ElementWiseOp.PRODUCT:
                out = inputs[0].clone()
                for x in inputs[1:]:
                    out *= x
            case _:
                raise UnsupportedOperationError(self._op)

        if masks is None:
            mask_arrays = (self._mask,)
        else:
            mask_arrays = tuple(masks)
            if mask_arrays and len(mask_arrays) != n:
                raise InvalidArityError(
                    op=str(self._op),
                    actual=len(mask_arrays),
                    expected=n,
                    message=f"Expected one mask per input ({n}), "
                    f"got {len(mask_arrays)}",
                )
        merged, state = self.feed_forward_mask_arrays(mask_arrays, mask_state)
        return Activations(out, mask=merged, mask_state=state)

    # ---------------------------------------------------------------------
    # Backward
    # ---------------------------------------------------------------------
    def backward(
        self,
        gradients: Optional[Gradients],
        inputs: Optional[Sequence[ITensor]] = None,
    ) -> Gradients:
        """
        Redistribute the upstream error to each input of the last forward pass.

        Parameters
        ----------
        gradients : Gradients
            Upstream bundle whose position 0 holds the error (epsilon) with
            respect to this vertex's output.
        inputs : Optional[Sequence[ITensor]], optional
            The inputs of the matching forward pass. Required only for
            PRODUCT, whose derivative depends on the input values.

        Returns
        -------
        Gradients
            One gradient per input, in input order, and no parameter
            gradients. With a single forward input, `gradients` itself is
            returned.

        Raises
        ------
        StateError
            If no forward pass was recorded, if the error is missing, or if
            PRODUCT is given no inputs.
        InvalidArityError
            If the number of supplied inputs differs from the forward pass,
            or SUBTRACT was run with other than 2 inputs.
        UnsupportedOperationError
            If the operator is unknown.
        """
        epsilon = gradients.get(0) if gradients is not None else None
        if epsilon is None:
            raise StateError("Cannot do backward pass: errors not set")
        if self._last_input_count is None:
            raise StateError("Cannot do backward pass: no forward pass recorded")

        n = self._last_input_count
        if n == 1:
            return gradients

        logger.debug("%r backward for %d inputs", self, n)

        match self._op:
            case ElementWiseOp.ADD:
                # d(sum)/dx_i = 1
                out = [epsilon.clone() for _ in range(n)]
            case ElementWiseOp.SUBTRACT:
                if n != 2:
                    raise InvalidArityError(op=str(self._op), actual=n, expected=2)
                out = [epsilon.clone(), -epsilon]
            case ElementWiseOp.PRODUCT:
                if not inputs:
                    raise StateError("Cannot do backward pass: inputs not set")
                if len(inputs) != n:
                    raise InvalidArityError(
                        op=str(self._op), actual=len(inputs), expected=n
                    )
                # d(prod)/dx_i = prod_{j != i} x_j
                out = []
                for i in range(n):
                    g = epsilon.clone()
                    for j in range(n):
                        if i != j:
                            g *= inputs[j]
                    out.append(g)
            case _:
                raise UnsupportedOperationError(self._op)

        return Gradients.of(out, parameter_gradients=None)

    # ---------------------------------------------------------------------
    # Masks
    # ---------------------------------------------------------------------
    def feed_forward_mask_arrays(
        self,
        mask_arrays: Optional[Sequence[Optional[ITensor]]],
        current_mask_state: Optional[MaskState],
    ) -> tuple[Optional[ITensor], Optional[MaskState]]:
        """
        Merge input masks with an element-wise logical OR.

        Parameters
        ----------
        mask_arrays : Optional[Sequence[Optional[ITensor]]]
            One mask per input. Entries may be None.
        current_mask_state : Optional[MaskState]
            Tag returned unchanged alongside the merged mask.

        Returns
        -------
        tuple[Optional[ITensor], Optional[MaskState]]
            The merged mask and `current_mask_state`.

        Notes
        -----
        A missing mask means "every step valid", which under OR makes the
        whole output valid; the merge therefore returns no mask as soon as
        any entry is None instead of materializing an all-ones mask.
        A single mask is returned as-is, without copying. An empty sequence
        is treated like no masks at all.
        """
        if mask_arrays is None:
            return None, current_mask_state

        mask_arrays = tuple(mask_arrays)
        if not mask_arrays:
            return None, current_mask_state
        if any(m is None for m in mask_arrays):
            logger.debug("%r: missing input mask, dropping output mask", self)
            return None, current_mask_state

        if len(mask_arrays) == 1:
            return mask_arrays[0], current_mask_state

        merged = mask_arrays[0].logical_or(mask_arrays[1])
        for m in mask_arrays[2:]:
            merged = merged.logical_or(m)
        return merged, current_mask_state

    # ---------------------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------------------
    def get_config(self) -> Dict[str, Any]:
        cfg = super().get_config()
        cfg["op"] = self._op.value
        return cfg

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> Self:
        """
        Rebuild a vertex from `get_config()` output.

        Raises
        ------
        KeyError
            If a required key is missing.
        """
        return cls(
            name=cfg["name"],
            index=int(cfg["index"]),
            num_inputs=int(cfg["num_inputs"]),
            op=cfg["op"],
        )

    def __repr__(self) -> str:
        return (
            f'ElementWiseVertex(id={self._index},name="{self._name}",op={self._op})'
        )
