"""
Vertex- and tensor-related exceptions for keygraph.

This module defines the error taxonomy raised by graph vertices and by the
tensor layer underneath them. Every error is raised synchronously at the
point of violation and is meant to propagate to the host graph; none of them
is retried or swallowed inside the library.

Vertex errors
-------------
- `StateError`: an operation was invoked before its required state existed
  (e.g., backward before forward).
- `InvalidArityError`: the number of inputs does not fit the operator.
- `UnsupportedOperationError`: an operator outside the closed enumeration.
- `ConfigurationError`: the host graph tried to wire something the vertex
  cannot accept (e.g., a gradient buffer on a parameter-free vertex).

Tensor errors
-------------
- `DeviceNotSupportedError`, `DeviceMismatchError`.
"""

from typing import Optional


class StateError(RuntimeError):
    """
    Raised when a vertex operation is invoked out of lifecycle order.

    Typical causes are a forward pass without inputs, or a backward pass
    without upstream errors or without a preceding forward pass.
    """


class InvalidArityError(ValueError):
    """
    Raised when the number of inputs is not valid for an operator.

    Attributes
    ----------
    op : str
        Name of the operator that rejected the inputs.
    expected : Optional[int]
        The required input count, if the operator has a fixed one.
    actual : int
        The number of inputs actually supplied.
    """

    def __init__(
        self, op: str, actual: int, expected: Optional[int] = None, message: str = ""
    ) -> None:
        if not message:
            if expected is None:
                message = f"{op} does not support {actual} input(s)."
            else:
                message = (
                    f"{op} requires exactly {expected} inputs, got {actual}."
                )
        super().__init__(message)
        self.op = op
        self.expected = expected
        self.actual = actual


class UnsupportedOperationError(NotImplementedError):
    """
    Raised when an element-wise operator is unknown.

    This indicates a programming defect (an operator value outside the
    closed enumeration) rather than a recoverable runtime condition.

    Attributes
    ----------
    op : object
        The offending operator value.
    """

    def __init__(self, op: object) -> None:
        super().__init__(f"Unknown op: {op!r}")
        self.op = op


class ConfigurationError(RuntimeError):
    """
    Raised when a vertex is wired with state it cannot own.
    """


class DeviceNotSupportedError(RuntimeError):
    """
    Raised when a tensor operation is requested on a device backend
    that is not implemented.

    Attributes
    ----------
    op : str
        The name of the operation that was attempted (e.g., "add", "mul").
    device : str
        String representation of the device on which the operation
        was attempted.
    """

    def __init__(self, op: str, device: str) -> None:
        super().__init__(f"{op} is not implemented for device '{device}'.")
        self.op = op
        self.device = device


class DeviceMismatchError(RuntimeError):
    """
    Raised when an operation is attempted between tensors on different devices.
    """

    def __init__(self, device_a: str, device_b: str) -> None:
        super().__init__(f"Device mismatch: '{device_a}' vs '{device_b}'.")
        self.device_a = device_a
        self.device_b = device_b
