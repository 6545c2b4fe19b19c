import unittest

import numpy as np

from keygraph.domain._errors import DeviceMismatchError, DeviceNotSupportedError
from keygraph.domain._tensor import ITensor
from keygraph.domain.device._device import Device
from keygraph.infrastructure.tensor._tensor import Tensor


def _t(arr) -> Tensor:
    return Tensor._from_numpy(np.asarray(arr, dtype=np.float32), device=Device("cpu"))


class TestTensorConstruction(unittest.TestCase):
    def test_default_device_is_cpu_and_zero_filled(self):
        t = Tensor((2, 3))
        self.assertTrue(t.device.is_cpu())
        self.assertEqual(t.to_numpy().dtype, np.float32)
        np.testing.assert_array_equal(t.to_numpy(), np.zeros((2, 3), dtype=np.float32))

    def test_factories(self):
        np.testing.assert_array_equal(
            Tensor.ones(shape=(2,)).to_numpy(), np.ones((2,), dtype=np.float32)
        )
        np.testing.assert_array_equal(
            Tensor.zeros(shape=(1, 2)).to_numpy(), np.zeros((1, 2), dtype=np.float32)
        )
        np.testing.assert_array_equal(
            Tensor.full((3,), 2.5).to_numpy(), np.full((3,), 2.5, dtype=np.float32)
        )

    def test_copy_from_numpy_shape_mismatch(self):
        t = Tensor((2, 2))
        with self.assertRaises(ValueError):
            t.copy_from_numpy(np.zeros((3,), dtype=np.float32))

    def test_from_numpy_copies(self):
        src = np.array([1.0, 2.0], dtype=np.float32)
        t = _t(src)
        src[0] = 100.0
        np.testing.assert_array_equal(t.to_numpy(), np.array([1.0, 2.0], dtype=np.float32))

    def test_satisfies_itensor(self):
        self.assertIsInstance(_t([1.0]), ITensor)


class TestTensorShapeQueries(unittest.TestCase):
    def test_size_and_numel(self):
        t = Tensor((4, 5, 6))
        self.assertEqual(t.size(0), 4)
        self.assertEqual(t.size(-1), 6)
        self.assertEqual(t.numel(), 120)

    def test_size_out_of_range(self):
        with self.assertRaises(IndexError):
            Tensor((2, 3)).size(2)


class TestTensorArithmetic(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(0)
        self.a_np = rng.standard_normal((3, 4)).astype(np.float32)
        self.b_np = rng.standard_normal((3, 4)).astype(np.float32)
        self.a = _t(self.a_np)
        self.b = _t(self.b_np)

    def test_value_ops(self):
        np.testing.assert_allclose((self.a + self.b).to_numpy(), self.a_np + self.b_np)
        np.testing.assert_allclose((self.a - self.b).to_numpy(), self.a_np - self.b_np)
        np.testing.assert_allclose((self.a * self.b).to_numpy(), self.a_np * self.b_np)
        np.testing.assert_allclose((-self.a).to_numpy(), -self.a_np)

    def test_value_ops_do_not_mutate_operands(self):
        _ = self.a + self.b
        _ = self.a * self.b
        _ = -self.a
        np.testing.assert_array_equal(self.a.to_numpy(), self.a_np)
        np.testing.assert_array_equal(self.b.to_numpy(), self.b_np)

    def test_scalar_operands(self):
        np.testing.assert_allclose((self.a + 1.0).to_numpy(), self.a_np + 1.0)
        np.testing.assert_allclose((2 * self.a).to_numpy(), 2 * self.a_np)
        np.testing.assert_allclose((1.0 - self.a).to_numpy(), 1.0 - self.a_np)

    def test_inplace_ops_write_left_operand_only(self):
        c = self.a.clone()
        c_id = id(c)
        c += self.b
        c *= self.b
        c -= self.a
        self.assertEqual(id(c), c_id)
        expected = (self.a_np + self.b_np) * self.b_np - self.a_np
        np.testing.assert_allclose(c.to_numpy(), expected)
        np.testing.assert_array_equal(self.a.to_numpy(), self.a_np)
        np.testing.assert_array_equal(self.b.to_numpy(), self.b_np)

    def test_clone_is_independent(self):
        c = self.a.clone()
        c += 1.0
        np.testing.assert_array_equal(self.a.to_numpy(), self.a_np)
        self.assertIsNot(c.to_numpy(), self.a.to_numpy())

    def test_shape_mismatch_raises(self):
        with self.assertRaises(ValueError):
            _ = self.a + Tensor((4, 3))

    def test_unsupported_operand_type(self):
        with self.assertRaises(TypeError):
            _ = self.a + "x"


class TestTensorLogicalOr(unittest.TestCase):
    def test_or_of_binary_masks(self):
        out = _t([1, 0, 1]).logical_or(_t([0, 0, 1]))
        np.testing.assert_array_equal(out.to_numpy(), np.array([1, 0, 1], dtype=np.float32))

    def test_nonzero_counts_as_true(self):
        out = _t([0.5, 0.0, -2.0]).logical_or(_t([0.0, 0.0, 0.0]))
        np.testing.assert_array_equal(out.to_numpy(), np.array([1, 0, 1], dtype=np.float32))


class TestTensorDevices(unittest.TestCase):
    def test_cuda_tensor_ops_not_supported(self):
        t = Tensor((2,), Device("cuda:0"))
        self.assertIn("cuda:0", repr(t))
        with self.assertRaises(DeviceNotSupportedError):
            t.clone()
        with self.assertRaises(DeviceNotSupportedError):
            t.to_numpy()

    def test_device_mismatch(self):
        with self.assertRaises(DeviceMismatchError):
            _ = _t([1.0, 2.0]) + Tensor((2,), Device("cuda:0"))


if __name__ == "__main__":
    unittest.main()
