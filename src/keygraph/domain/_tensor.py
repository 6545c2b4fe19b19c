"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects used
by graph vertices. The interface is the tensor primitive contract a vertex
relies on: independent duplication, elementwise arithmetic (value-returning
and in-place), shape queries and an elementwise logical OR for mask tensors.

Notes
-----
The protocol is structural, so any backend exposing these members can be
passed to a vertex. The NumPy-backed `Tensor` in the infrastructure layer is
the reference implementation.
"""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

import numpy as np

from .device._device_protocol import DeviceLike

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a dense multi-dimensional numeric array with a fixed
    shape and a device placement.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the tensor.

        Returns
        -------
        tuple[int, ...]
            The tensor's shape.
        """
        ...

    @property
    def device(self) -> DeviceLike:
        """
        Return the device on which this tensor resides.

        Returns
        -------
        DeviceLike
            The tensor's device placement descriptor.
        """
        ...

    def size(self, dim: int) -> int:
        """
        Return the extent of the tensor along one dimension.

        Parameters
        ----------
        dim : int
            Dimension index. Negative values count from the end.

        Returns
        -------
        int
            Number of elements along `dim`.
        """
        ...

    def numel(self) -> int:
        """Return the total number of elements."""
        ...

    def clone(self) -> "ITensor":
        """
        Return an independent copy with its own storage.

        Returns
        -------
        ITensor
            A tensor equal in value to `self` that shares no storage with it.
        """
        ...

    def to_numpy(self) -> np.ndarray:
        """Return the CPU storage as a NumPy array."""
        ...

    # ---------------------------------------------------------------------
    # Elementwise arithmetic
    # ---------------------------------------------------------------------
    def __neg__(self) -> "ITensor": ...
    def __add__(self, other: Union["ITensor", Number]) -> "ITensor": ...
    def __sub__(self, other: Union["ITensor", Number]) -> "ITensor": ...
    def __mul__(self, other: Union["ITensor", Number]) -> "ITensor": ...
    def __iadd__(self, other: Union["ITensor", Number]) -> "ITensor": ...
    def __isub__(self, other: Union["ITensor", Number]) -> "ITensor": ...
    def __imul__(self, other: Union["ITensor", Number]) -> "ITensor": ...

    def logical_or(self, other: "ITensor") -> "ITensor":
        """
        Elementwise logical OR of two mask tensors.

        Parameters
        ----------
        other : ITensor
            Second operand, same shape as `self`.

        Returns
        -------
        ITensor
            A new tensor holding 1.0 where either operand is nonzero and
            0.0 elsewhere.
        """
        ...
