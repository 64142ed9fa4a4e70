from nfbuilder.graph.call_extractor import extract_calls
from nfbuilder.graph.dependency_resolver import DependencyResolver
from nfbuilder.graph.graph_schema import GraphEdge, GraphNode


def _nodes(*names):
    return [GraphNode(id=name, display_name=name) for name in names]


def _edge(source, target):
    return GraphEdge(id=GraphEdge.edge_id(source, target), source=source, target=target)


def test_infers_edges_from_channel_outputs():
    known = ["A", "B", "C"]
    calls = extract_calls("A(x)\nB(A.out.reads)\nC(A.out, B.out)", known)

    edges = DependencyResolver().infer_edges(calls, known)

    assert [(edge.source, edge.target) for edge in edges] == [("A", "B"), ("A", "C"), ("B", "C")]
    assert edges[0].id == "A->B"


def test_duplicate_and_self_references_are_dropped():
    known = ["A", "B"]
    calls = extract_calls("B(A.out, A.out.x)\nB(A.out)\nA(A.out)", known)

    edges = DependencyResolver().infer_edges(calls, known)

    assert [(edge.source, edge.target) for edge in edges] == [("A", "B")]


def test_unknown_sources_are_ignored():
    calls = extract_calls("B(Z.out)", ["B"])

    assert DependencyResolver().infer_edges(calls, ["B"]) == []


def test_layers_are_kahn_waves():
    resolver = DependencyResolver()
    nodes = _nodes("A", "B", "C", "D")
    edges = [_edge("A", "C"), _edge("B", "C"), _edge("C", "D")]

    layers, unplaced = resolver.layers(nodes, edges)

    assert layers == [["A", "B"], ["C"], ["D"]]
    assert unplaced == []


def test_cycle_members_and_descendants_are_unplaced():
    resolver = DependencyResolver()
    nodes = _nodes("A", "B", "C", "D")
    edges = [_edge("A", "B"), _edge("B", "C"), _edge("C", "B"), _edge("C", "D")]

    layers, unplaced = resolver.layers(nodes, edges)

    assert layers == [["A"]]
    assert unplaced == ["B", "C", "D"]


def test_in_degree_ignores_edges_to_missing_nodes():
    resolver = DependencyResolver()
    degree = resolver.in_degree(_nodes("A", "B"), [_edge("A", "B"), _edge("A", "Z")])

    assert degree == {"A": 0, "B": 1}
