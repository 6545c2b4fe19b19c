"""
Computation device descriptors.

`Device` normalizes user-facing device strings ("cpu", "cuda:<index>") into
a small validated value object. It does not allocate or manage any backend
resource; the NumPy tensor backend only executes on the CPU and reports any
other placement through `DeviceNotSupportedError`.
"""

from __future__ import annotations

from enum import Enum
import re


class DeviceType(Enum):
    """
    Category of a computation device, independent of its index.
    """

    CPU = "cpu"
    CUDA = "cuda"


class Device:
    """
    Validated device descriptor.

    Parameters
    ----------
    device : str
        Either "cpu" or "cuda:<index>" with a non-negative integer index.

    Raises
    ------
    ValueError
        If the device string is not one of the accepted forms.

    Notes
    -----
    Two descriptors compare equal when they print the same, so tensors
    created from separate `Device("cpu")` instances are interoperable.
    """

    __slots__ = ("type", "index")

    _CUDA_PATTERN = re.compile(r"^cuda:(\d+)$")

    def __init__(self, device: str = "cpu") -> None:
        if device == "cpu":
            self.type = DeviceType.CPU
            self.index = None
            return

        m = self._CUDA_PATTERN.match(device)
        if not m:
            raise ValueError(
                f"Invalid device '{device}'. Expected 'cpu' or 'cuda:<index>'"
            )
        self.type = DeviceType.CUDA
        self.index = int(m.group(1))

    def __str__(self) -> str:
        return "cpu" if self.type is DeviceType.CPU else f"cuda:{self.index}"

    def __repr__(self) -> str:
        return f"Device('{self}')"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Device):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def is_cpu(self) -> bool:
        """Return True if this descriptor names the CPU."""
        return self.type is DeviceType.CPU

    def is_cuda(self) -> bool:
        """Return True if this descriptor names a CUDA GPU."""
        return self.type is DeviceType.CUDA
