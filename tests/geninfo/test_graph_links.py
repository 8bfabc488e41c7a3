from lix_backend.features.geninfo import Edge, Literal, as_edge, classify_input
from lix_backend.features.geninfo.graph_links import iter_wellformed_nodes, node_inputs, node_title, node_type


def test_as_edge_accepts_string_and_int_ids():
    assert as_edge(["6", 0]) == Edge("6", 0)
    assert as_edge([6, 1]) == Edge("6", 1)
    assert as_edge(("A", "0")) == Edge("A", 0)
    assert as_edge(["12:3", 0]) == Edge("12:3", 0)


def test_as_edge_rejects_non_links():
    assert as_edge("a cat") is None
    assert as_edge(7) is None
    assert as_edge(["6"]) is None
    assert as_edge(["6", 0, 1]) is None
    assert as_edge(["", 0]) is None
    assert as_edge([True, 0]) is None
    assert as_edge(["6", "out"]) is None
    assert as_edge(["6", None]) is None


def test_classify_input_sum_type():
    assert classify_input(["6", 0]) == Edge("6", 0)
    assert classify_input("a cat") == Literal("a cat")
    assert classify_input(None) == Literal(None)


def test_node_accessors_tolerate_malformed_nodes():
    assert node_type(None) == ""
    assert node_type({"class_type": "CLIPTextEncode"}) == "CLIPTextEncode"
    assert node_inputs({"class_type": "X"}) is None
    assert node_inputs({"inputs": ["not", "a", "dict"]}) is None
    assert node_inputs({"inputs": {"text": "x"}}) == {"text": "x"}
    assert node_title({"_meta": {"title": "Negative"}}) == "Negative"
    assert node_title({"_meta": "oops"}) == ""
    assert node_title({}) == ""


def test_iter_wellformed_nodes_skips_nodes_without_inputs():
    nodes = {
        "1": {"class_type": "A", "inputs": {}},
        "2": {"class_type": "B"},
        "3": "garbage",
        "4": {"class_type": "C", "inputs": {"x": 1}},
    }
    assert [node_id for node_id, _, _ in iter_wellformed_nodes(nodes)] == ["1", "4"]
