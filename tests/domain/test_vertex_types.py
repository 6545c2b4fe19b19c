import unittest

from keygraph.domain._errors import (
    ConfigurationError,
    InvalidArityError,
    StateError,
    UnsupportedOperationError,
)
from keygraph.domain._vertex import ElementWiseOp, IGraphVertex, MaskState
from keygraph.domain.device._device import Device, DeviceType
from keygraph.infrastructure.graph._elementwise_vertex import ElementWiseVertex


class TestElementWiseOpParse(unittest.TestCase):
    def test_members_pass_through(self):
        for op in ElementWiseOp:
            self.assertIs(ElementWiseOp.parse(op), op)

    def test_names_are_case_insensitive(self):
        self.assertIs(ElementWiseOp.parse("add"), ElementWiseOp.ADD)
        self.assertIs(ElementWiseOp.parse("Subtract"), ElementWiseOp.SUBTRACT)
        self.assertIs(ElementWiseOp.parse("PRODUCT"), ElementWiseOp.PRODUCT)
        self.assertIs(ElementWiseOp.parse(" product "), ElementWiseOp.PRODUCT)

    def test_unknown_name_raises(self):
        with self.assertRaises(UnsupportedOperationError) as cm:
            ElementWiseOp.parse("divide")
        self.assertEqual(cm.exception.op, "divide")

    def test_non_string_raises(self):
        with self.assertRaises(UnsupportedOperationError):
            ElementWiseOp.parse(3)

    def test_str_is_value(self):
        self.assertEqual(str(ElementWiseOp.ADD), "Add")
        self.assertEqual(MaskState.ACTIVE.value, "Active")


class TestErrorTaxonomy(unittest.TestCase):
    def test_builtin_bases(self):
        self.assertTrue(issubclass(StateError, RuntimeError))
        self.assertTrue(issubclass(InvalidArityError, ValueError))
        self.assertTrue(issubclass(UnsupportedOperationError, NotImplementedError))
        self.assertTrue(issubclass(ConfigurationError, RuntimeError))

    def test_invalid_arity_attributes_and_default_message(self):
        err = InvalidArityError(op="Subtract", actual=3, expected=2)
        self.assertEqual(err.op, "Subtract")
        self.assertEqual(err.actual, 3)
        self.assertEqual(err.expected, 2)
        self.assertIn("exactly 2", str(err))

    def test_invalid_arity_custom_message(self):
        err = InvalidArityError(op="Subtract", actual=1, message="boom")
        self.assertEqual(str(err), "boom")
        self.assertIsNone(err.expected)


class TestDevice(unittest.TestCase):
    def test_cpu(self):
        d = Device("cpu")
        self.assertTrue(d.is_cpu())
        self.assertFalse(d.is_cuda())
        self.assertIs(d.type, DeviceType.CPU)
        self.assertEqual(str(d), "cpu")

    def test_cuda_index(self):
        d = Device("cuda:1")
        self.assertTrue(d.is_cuda())
        self.assertEqual(d.index, 1)
        self.assertEqual(str(d), "cuda:1")

    def test_invalid_string(self):
        with self.assertRaises(ValueError):
            Device("gpu")

    def test_equality_by_value(self):
        self.assertEqual(Device("cpu"), Device("cpu"))
        self.assertNotEqual(Device("cpu"), Device("cuda:0"))
        self.assertEqual(hash(Device("cuda:0")), hash(Device("cuda:0")))


class TestVertexProtocol(unittest.TestCase):
    def test_elementwise_vertex_conforms(self):
        v = ElementWiseVertex("ew", 0, 2, ElementWiseOp.ADD)
        self.assertIsInstance(v, IGraphVertex)


if __name__ == "__main__":
    unittest.main()
