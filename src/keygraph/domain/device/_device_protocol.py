"""
Duck-typed device contract.

Tensors and vertices only need to ask a device whether it is the CPU and
how it prints; `DeviceLike` captures exactly that, so test doubles and
alternative descriptors can be used without subclassing `Device`.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class DeviceLike(Protocol):
    """
    Structural device descriptor.

    Any object exposing these members is accepted wherever a device is
    expected.
    """

    type: object
    index: Optional[int]

    def is_cpu(self) -> bool: ...
    def is_cuda(self) -> bool: ...
    def __str__(self) -> str: ...
