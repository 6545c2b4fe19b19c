import json
import unittest

from keygraph.domain._errors import UnsupportedOperationError
from keygraph.domain._vertex import ElementWiseOp
from keygraph.infrastructure.graph import (
    ElementWiseVertex,
    vertex_from_config,
    vertex_from_json,
    vertex_to_config,
    vertex_to_json,
)


class TestVertexSerialization(unittest.TestCase):
    def test_get_config(self):
        v = ElementWiseVertex("merge", 4, 3, ElementWiseOp.PRODUCT)
        self.assertEqual(
            v.get_config(),
            {"name": "merge", "index": 4, "num_inputs": 3, "op": "Product"},
        )

    def test_from_config_roundtrip(self):
        for op in ElementWiseOp:
            v = ElementWiseVertex("v", 1, 2, op)
            w = ElementWiseVertex.from_config(v.get_config())
            self.assertIs(w.op, op)
            self.assertEqual(w.name, "v")
            self.assertEqual(w.index, 1)
            self.assertEqual(w.num_inputs, 2)
            self.assertIsNone(w.last_input_count)

    def test_registry_node(self):
        v = ElementWiseVertex("sub", 0, 2, "subtract")
        node = vertex_to_config(v)
        self.assertEqual(node["type"], "ElementWiseVertex")
        w = vertex_from_config(node)
        self.assertIsInstance(w, ElementWiseVertex)
        self.assertEqual(repr(w), repr(v))

    def test_json_roundtrip(self):
        v = ElementWiseVertex("add", 7, 5, ElementWiseOp.ADD)
        s = vertex_to_json(v)
        self.assertEqual(json.loads(s)["config"]["op"], "Add")
        self.assertEqual(repr(vertex_from_json(s)), repr(v))

    def test_unknown_type_raises(self):
        with self.assertRaises(ValueError):
            vertex_from_config({"type": "NoSuchVertex", "config": {}})

    def test_unknown_op_in_config_raises(self):
        node = {
            "type": "ElementWiseVertex",
            "config": {"name": "x", "index": 0, "num_inputs": 2, "op": "Divide"},
        }
        with self.assertRaises(UnsupportedOperationError):
            vertex_from_config(node)


if __name__ == "__main__":
    unittest.main()
