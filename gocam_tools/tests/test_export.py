from gocam_tools.graph.export import escape_dot, to_cytoscape, to_dot
from gocam_tools.graph.overlaps import merge_models


def test_cytoscape_elements(make_document) -> None:
    doc = make_document()
    first = doc.activity("A1", "GO:0004672", "protein kinase activity")
    second = doc.activity("A2", "GO:0004721", "phosphoprotein phosphatase activity")
    doc.fact(first, "directly positively regulates", second)

    elements = to_cytoscape(doc.graph())

    assert elements["nodes"] == [
        {"data": {"id": "A1", "label": "protein kinase activity"}},
        {"data": {"id": "A2", "label": "phosphoprotein phosphatase activity"}},
    ]
    assert elements["edges"] == [
        {
            "data": {
                "id": "A1-RO:0002629-A2",
                "label": "directly positively regulates",
                "source": "A1",
                "target": "A2",
            }
        }
    ]


def test_cytoscape_ids_of_merged_graph_include_model(make_document) -> None:
    first = make_document("gomodel:1")
    first.chemical("C1", "CHEBI:15377", "water")
    second = make_document("gomodel:2")
    second.chemical("C1", "CHEBI:15377", "water")

    merged = merge_models("merged", "merged", [first.graph(), second.graph()])
    ids = [element["data"]["id"] for element in to_cytoscape(merged)["nodes"]]

    assert ids == ["gomodel:1/C1", "gomodel:2/C1"]


def test_cytoscape_edge_ids_of_merged_graph_are_unique(make_document) -> None:
    graphs = []
    for model_id in ("gomodel:1", "gomodel:2"):
        doc = make_document(model_id)
        doc.fact(doc.activity("A1"), "causally upstream of", doc.activity("A2"))
        graphs.append(doc.graph())

    merged = merge_models("merged", "merged", graphs)
    elements = to_cytoscape(merge_models("outer", "outer", [merged]))

    ids = [element["data"]["id"] for element in elements["nodes"] + elements["edges"]]
    assert len(ids) == len(set(ids))
    assert [edge["data"]["id"] for edge in elements["edges"]] == [
        "gomodel:1/A1-RO:0002411-A2",
        "gomodel:2/A1-RO:0002411-A2",
    ]
    assert elements["edges"][1]["data"]["source"] == "gomodel:2/A1"


def test_dot_uses_enabler_label_when_present(make_document) -> None:
    doc = make_document()
    first = doc.activity("A1", "GO:0004672", "protein kinase activity")
    doc.fact(first, "enabled by", doc.gene("G1", "PomBase:SPBC11B10.09", "cdc2"))
    second = doc.activity("A2", "GO:0004721", "phosphatase activity")
    doc.fact(first, "directly positively regulates", second)

    dot = to_dot(doc.graph())

    assert dot.startswith('digraph "GoCam" {')
    assert '"A1" [label="cdc2"];' in dot
    assert '"A2" [label="phosphatase activity"];' in dot
    assert '"A1" -> "A2" [label="directly positively regulates"];' in dot
    assert dot.endswith("}")


def test_dot_escapes_labels(make_document) -> None:
    doc = make_document()
    doc.chemical("C1", "CHEBI:1", 'say "hi"\\now')

    dot = to_dot(doc.graph())

    assert '[label="say \\"hi\\"\\\\now"]' in dot
    assert escape_dot("line\nbreak") == "line\\nbreak"
