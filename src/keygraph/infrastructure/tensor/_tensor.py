"""
Concrete Tensor implementation (NumPy backend).

This module provides the reference `Tensor` satisfying the domain-level
`ITensor` protocol. CPU tensors are backed by float32 NumPy arrays; any other
device placement is accepted as a descriptor but operations on it raise
`DeviceNotSupportedError`.

Design notes
------------
- NumPy stays inside this module. Vertices and other infrastructure code
  only talk to `Tensor` methods and operators.
- Broadcasting is intentionally not implemented; binary ops require exact
  shape matches, which is the contract graph vertices are written against.
- Value-returning operators always allocate fresh storage. In-place
  operators (`+=`, `-=`, `*=`) write into the left operand's storage and
  never touch the right operand.
"""

from __future__ import annotations

from typing import Optional, Union

import numpy as np

from ...domain._errors import DeviceMismatchError, DeviceNotSupportedError
from ...domain._tensor import ITensor
from ...domain.device._device import Device
from ...domain.device._device_protocol import DeviceLike

Number = Union[int, float]


class Tensor(ITensor):
    """
    NumPy-backed tensor.

    Parameters
    ----------
    shape : tuple[int, ...]
        Tensor shape.
    device : DeviceLike, optional
        Device placement. Defaults to the CPU.

    Notes
    -----
    - Storage is allocated zero-filled at construction for CPU tensors.
    - For non-CPU devices no storage is allocated; the tensor can be
      described (`shape`, `device`, `repr`) but not computed with.
    """

    def __init__(
        self, shape: tuple[int, ...], device: Optional[DeviceLike] = None
    ) -> None:
        self._shape = tuple(int(s) for s in shape)
        self._device = device if device is not None else Device("cpu")
        if self._device.is_cpu():
            self._data = np.zeros(self._shape, dtype=np.float32)
        else:
            self._data = None

    def __repr__(self) -> str:
        if self._data is None:
            return f"Tensor(shape={self._shape}, device={self._device}, data=None)"
        return (
            f"Tensor(shape={self._shape}, device={self._device}, "
            f"dtype={self._data.dtype})"
        )

    # ----------------------------
    # Factories
    # ----------------------------
    @staticmethod
    def _from_numpy(arr, *, device: Optional[DeviceLike] = None) -> "Tensor":
        """
        Construct a Tensor by copying a NumPy array (or array-like).

        Parameters
        ----------
        arr : array-like
            Source data. Its shape determines the tensor shape.
        device : DeviceLike, optional
            Target device. Defaults to the CPU.

        Returns
        -------
        Tensor
            A new tensor whose contents are a float32 copy of `arr`.
        """
        arr = np.asarray(arr, dtype=np.float32)
        t = Tensor(shape=arr.shape, device=device)
        t.copy_from_numpy(arr)
        return t

    @staticmethod
    def full(
        shape: tuple[int, ...],
        fill_value: float,
        *,
        device: Optional[DeviceLike] = None,
    ) -> "Tensor":
        """Create a tensor with every element set to `fill_value`."""
        t = Tensor(shape=shape, device=device)
        t.fill(fill_value)
        return t

    @staticmethod
    def zeros(
        *, shape: tuple[int, ...], device: Optional[DeviceLike] = None
    ) -> "Tensor":
        """Create a zero-filled tensor."""
        return Tensor.full(shape, 0.0, device=device)

    @staticmethod
    def ones(
        *, shape: tuple[int, ...], device: Optional[DeviceLike] = None
    ) -> "Tensor":
        """Create a tensor filled with ones."""
        return Tensor.full(shape, 1.0, device=device)

    # ----------------------------
    # Core properties
    # ----------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def device(self) -> DeviceLike:
        return self._device

    def size(self, dim: int) -> int:
        """
        Return the extent of the tensor along `dim`.

        Parameters
        ----------
        dim : int
            Dimension index; negative values count from the end.

        Raises
        ------
        IndexError
            If `dim` is out of range for this tensor's rank.
        """
        rank = len(self._shape)
        if not -rank <= dim < rank:
            raise IndexError(
                f"Dimension {dim} out of range for tensor of rank {rank}"
            )
        return self._shape[dim]

    def numel(self) -> int:
        n = 1
        for s in self._shape:
            n *= s
        return n

    # ----------------------------
    # Storage access
    # ----------------------------
    def to_numpy(self) -> np.ndarray:
        """
        Return the underlying CPU storage.

        Raises
        ------
        DeviceNotSupportedError
            If the tensor is not on the CPU.
        """
        self._require_cpu("to_numpy")
        return self._data

    def copy_from_numpy(self, arr: np.ndarray) -> None:
        """
        Copy a NumPy array into this tensor's storage.

        Raises
        ------
        ValueError
            If the array shape does not match this tensor's shape.
        """
        self._require_cpu("copy_from_numpy")
        arr = np.asarray(arr, dtype=np.float32)
        if arr.shape != self._shape:
            raise ValueError(
                f"Shape mismatch: tensor {self._shape} vs array {arr.shape}"
            )
        self._data[...] = arr

    def fill(self, value: float) -> None:
        self._require_cpu("fill")
        self._data.fill(value)

    def clone(self) -> "Tensor":
        """
        Return an independent copy of this tensor.

        Returns
        -------
        Tensor
            A tensor with the same shape, device and values, backed by its
            own storage.
        """
        self._require_cpu("clone")
        out = Tensor(shape=self._shape, device=self._device)
        out._data[...] = self._data
        return out

    # ----------------------------
    # Internal helpers
    # ----------------------------
    def _require_cpu(self, op: str) -> None:
        if not self._device.is_cpu():
            raise DeviceNotSupportedError(op=op, device=str(self._device))

    @staticmethod
    def _as_tensor_like(x: Union["Tensor", Number], like: "Tensor") -> "Tensor":
        """
        Lift a Python scalar to a tensor shaped like `like`.

        Raises
        ------
        TypeError
            If `x` is neither a Tensor nor an int/float.
        """
        if isinstance(x, Tensor):
            return x
        if isinstance(x, (int, float)):
            return Tensor.full(like.shape, float(x), device=like.device)
        raise TypeError(f"Unsupported operand type: {type(x)!r}")

    def _binary_operand(self, other: Union["Tensor", Number], op: str) -> "Tensor":
        """
        Validate and return the right-hand operand of a binary op.

        Raises
        ------
        DeviceNotSupportedError
            If either operand is not on the CPU.
        DeviceMismatchError
            If the operands live on different devices.
        ValueError
            If the shapes differ (no broadcasting).
        """
        self._require_cpu(op)
        other_t = self._as_tensor_like(other, self)
        if str(other_t.device) != str(self._device):
            raise DeviceMismatchError(str(self._device), str(other_t.device))
        other_t._require_cpu(op)
        if other_t.shape != self._shape:
            raise ValueError(f"Shape mismatch: {self._shape} vs {other_t.shape}")
        return other_t

    def _new_from(self, arr: np.ndarray) -> "Tensor":
        out = Tensor(shape=self._shape, device=self._device)
        out._data[...] = arr
        return out

    # ----------------------------
    # Value-returning arithmetic
    # ----------------------------
    def __neg__(self) -> "Tensor":
        self._require_cpu("neg")
        return self._new_from(-self._data)

    def __add__(self, other: Union["Tensor", Number]) -> "Tensor":
        other_t = self._binary_operand(other, "add")
        return self._new_from(self._data + other_t._data)

    def __radd__(self, other: Number) -> "Tensor":
        return self.__add__(other)

    def __sub__(self, other: Union["Tensor", Number]) -> "Tensor":
        other_t = self._binary_operand(other, "sub")
        return self._new_from(self._data - other_t._data)

    def __rsub__(self, other: Number) -> "Tensor":
        return self._as_tensor_like(other, self).__sub__(self)

    def __mul__(self, other: Union["Tensor", Number]) -> "Tensor":
        other_t = self._binary_operand(other, "mul")
        return self._new_from(self._data * other_t._data)

    def __rmul__(self, other: Number) -> "Tensor":
        return self.__mul__(other)

    # ----------------------------
    # In-place arithmetic
    # ----------------------------
    def __iadd__(self, other: Union["Tensor", Number]) -> "Tensor":
        other_t = self._binary_operand(other, "iadd")
        self._data += other_t._data
        return self

    def __isub__(self, other: Union["Tensor", Number]) -> "Tensor":
        other_t = self._binary_operand(other, "isub")
        self._data -= other_t._data
        return self

    def __imul__(self, other: Union["Tensor", Number]) -> "Tensor":
        other_t = self._binary_operand(other, "imul")
        self._data *= other_t._data
        return self

    # ----------------------------
    # Mask combinators
    # ----------------------------
    def logical_or(self, other: "Tensor") -> "Tensor":
        """
        Elementwise logical OR.

        Parameters
        ----------
        other : Tensor
            Second operand with the same shape and device.

        Returns
        -------
        Tensor
            A new tensor holding 1.0 where either operand is nonzero and
            0.0 elsewhere.
        """
        other_t = self._binary_operand(other, "logical_or")
        return self._new_from(np.logical_or(self._data != 0, other_t._data != 0))
