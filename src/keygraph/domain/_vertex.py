"""
Graph vertex interface definitions.

This module defines the domain-level vocabulary shared by graph vertices and
the host graph that drives them:

- `ElementWiseOp`: the closed set of element-wise combination operators.
- `MaskState`: an opaque tag describing how a mask should be interpreted
  downstream. Vertices propagate it unchanged.
- `IGraphVertex`: the structural contract a host graph relies on to run a
  vertex through its forward / backward cycle.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Protocol, Sequence, Union, runtime_checkable

from ._errors import UnsupportedOperationError
from ._tensor import ITensor


class ElementWiseOp(Enum):
    """
    Element-wise combination operator.

    Attributes
    ----------
    ADD : ElementWiseOp
        Sum of any number of inputs.
    SUBTRACT : ElementWiseOp
        Difference of exactly two inputs (`x0 - x1`).
    PRODUCT : ElementWiseOp
        Product of any number of inputs.
    """

    ADD = "Add"
    SUBTRACT = "Subtract"
    PRODUCT = "Product"

    @classmethod
    def parse(cls, op: Union["ElementWiseOp", str]) -> "ElementWiseOp":
        """
        Normalize an operator given as an enum member or a name.

        Names are matched case-insensitively against both the member name
        (``"ADD"``) and its value (``"Add"``).

        Parameters
        ----------
        op : Union[ElementWiseOp, str]
            Operator to normalize.

        Returns
        -------
        ElementWiseOp
            The matching enum member.

        Raises
        ------
        UnsupportedOperationError
            If `op` does not name a known operator.
        """
        if isinstance(op, cls):
            return op
        if isinstance(op, str):
            key = op.strip().lower()
            for member in cls:
                if key in (member.name.lower(), member.value.lower()):
                    return member
        raise UnsupportedOperationError(op)

    def __str__(self) -> str:
        return self.value


class MaskState(Enum):
    """
    Interpretation tag attached to a propagated mask.

    ACTIVE masks are applied by downstream layers; PASSTHROUGH masks are
    carried along without being applied.
    """

    ACTIVE = "Active"
    PASSTHROUGH = "Passthrough"


@runtime_checkable
class IGraphVertex(Protocol):
    """
    Domain-level graph vertex interface.

    A host graph owns each vertex and invokes `forward` before `backward`
    on every minibatch. Vertices that hold no learnable parameters report
    `num_params() == 0` and refuse gradient buffers.
    """

    @property
    def name(self) -> str: ...

    @property
    def index(self) -> int: ...

    @property
    def num_inputs(self) -> int: ...

    def has_layer(self) -> bool: ...

    def num_params(self) -> int: ...

    def forward(self, inputs: Sequence[ITensor], **kwargs: Any) -> Any:
        """
        Run the forward pass over `inputs` and return an activations bundle.
        """
        ...

    def backward(
        self, gradients: Any, inputs: Optional[Sequence[ITensor]] = None
    ) -> Any:
        """
        Run the backward pass for the most recent forward call.
        """
        ...

    def feed_forward_mask_arrays(
        self,
        mask_arrays: Optional[Sequence[Optional[ITensor]]],
        current_mask_state: Optional[MaskState],
    ) -> tuple[Optional[ITensor], Optional[MaskState]]: ...

    def set_backprop_gradients_view(self, buffer: Optional[ITensor]) -> None: ...
