import logging

import pytest

from gocam_tools.config import AnalysisConfig
from gocam_tools.graph.builder import build_graph
from gocam_tools.graph.models import NO_ID, NO_LABEL, EnablerKind, Fact, GoCamModel, Individual, IndividualType, NodeType

from conftest import CHEMICAL_ENTITY, MOLECULAR_FUNCTION, PROTEIN_COMPLEX


def test_activity_with_gene_enabler_and_process(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "enabled by", doc.gene("G1", "PomBase:SPAC1.01", "cdc2"))
    doc.fact(activity, "part of", doc.process("P1", "GO:0008150"))

    graph = doc.graph()

    assert len(graph) == 1
    node = next(iter(graph))
    assert node.node_type is NodeType.ACTIVITY
    assert node.enabler is not None
    assert node.enabler.kind is EnablerKind.GENE
    assert node.enabler.id == "PomBase:SPAC1.01"
    assert node.part_of_process is not None
    assert node.part_of_process.id == "GO:0008150"
    assert graph.edges == ()


@pytest.mark.parametrize(
    ("enabler_id", "expected"),
    [
        ("PomBase:SPBC11B10.09", EnablerKind.GENE),
        ("UniProtKB:P04551", EnablerKind.GENE),
        ("FB:FBgn0004106", EnablerKind.GENE),
        ("CHEBI:29108", EnablerKind.CHEMICAL),
        ("GO:0005847", EnablerKind.COMPLEX),
        ("ComplexPortal:CPX-560", EnablerKind.COMPLEX),
        ("PR:000027562", EnablerKind.MODIFIED_PROTEIN),
    ],
)
def test_enabler_kind_follows_namespace(make_document, enabler_id: str, expected: EnablerKind) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "enabled by", doc.individual("E1", enabler_id, "enabler", [CHEMICAL_ENTITY]))

    node = next(iter(doc.graph()))

    assert node.enabler is not None
    assert node.enabler.kind is expected
    assert node.node_type is NodeType.ACTIVITY


def test_unrecognised_enabler_is_logged_and_left_unset(make_document, caplog: pytest.LogCaptureFixture) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "enabled by", doc.individual("E1", "RNAcentral:URS0000", "some RNA", [CHEMICAL_ENTITY]))

    with caplog.at_level(logging.WARNING, logger="gocam_tools.graph.builder"):
        graph = doc.graph()

    node = next(iter(graph))
    assert node.enabler is None
    assert node.node_type is NodeType.UNKNOWN
    assert node.is_activity
    assert "E1" in caplog.text


def test_configured_gene_prefixes_extend_the_allow_list(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "enabled by", doc.gene("G1", "CGD:CAL0001", "orf19.1"))

    default_node = next(iter(doc.graph()))
    custom_node = next(iter(doc.graph(AnalysisConfig(gene_prefixes=("CGD:",)))))

    assert default_node.enabler is None
    assert custom_node.enabler is not None
    assert custom_node.enabler.kind is EnablerKind.GENE


def test_complex_enabler_collects_constituent_genes(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    complex_id = doc.individual("C1", "GO:0005847", "mRNA cleavage factor complex", [PROTEIN_COMPLEX])
    doc.fact(complex_id, "has part", doc.gene("G1", "PomBase:SPAC1.01"))
    doc.fact(complex_id, "has part", doc.gene("G2", "PomBase:SPAC2.02"))
    doc.fact(activity, "enabled by", complex_id)

    node = next(iter(doc.graph()))

    assert node.enabler is not None
    assert node.enabler.kind is EnablerKind.COMPLEX
    assert node.enabler.parts == ("PomBase:SPAC1.01", "PomBase:SPAC2.02")


def test_inputs_outputs_and_locations_keep_fact_order(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "has input", doc.chemical("C1", "CHEBI:15422", "ATP"))
    doc.fact(activity, "has input", doc.chemical("C2", "CHEBI:15377", "water"))
    doc.fact(activity, "has input", "C1")
    doc.fact(activity, "has output", doc.chemical("C3", "CHEBI:16761", "ADP"))
    doc.fact(activity, "occurs in", doc.component("L1", "GO:0005634", "nucleus"))
    doc.fact(activity, "located in", doc.component("L2", "GO:0005737", "cytoplasm"))
    doc.fact(activity, "happens during", doc.process("T1", "GO:0000080", "mitotic G1 phase"))

    graph = doc.graph()
    node = graph.node((None, "A1"))

    assert node is not None
    assert [item.label for item in node.has_input] == ["ATP", "water", "ATP"]
    assert [item.label for item in node.has_output] == ["ADP"]
    assert [item.label for item in node.occurs_in] == ["nucleus"]
    assert [item.label for item in node.located_in] == ["cytoplasm"]
    assert node.happens_during is not None and node.happens_during.label == "mitotic G1 phase"


def test_first_part_of_and_enabled_by_facts_win(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "part of", doc.process("P1", "GO:0000001", "first process"))
    doc.fact(activity, "part of", doc.process("P2", "GO:0000002", "second process"))
    doc.fact(activity, "enabled by", doc.gene("G1", "PomBase:SPAC1.01"))
    doc.fact(activity, "enabled by", doc.gene("G2", "PomBase:SPAC2.02"))

    node = next(iter(doc.graph()))

    assert node.part_of_process is not None and node.part_of_process.id == "GO:0000001"
    assert node.enabler is not None and node.enabler.id == "PomBase:SPAC1.01"


def test_edges_only_between_nodes_and_parallel_edges_allowed(make_document) -> None:
    doc = make_document()
    first = doc.activity("A1")
    second = doc.activity("A2")
    doc.fact(first, "directly positively regulates", second)
    doc.fact(first, "causally upstream of", second)
    doc.fact(first, "has output", doc.chemical("C1", "CHEBI:15422", "ATP"))
    doc.fact(first, "enabled by", doc.gene("G1", "PomBase:SPAC1.01"))
    doc.fact(first, "occurs in", doc.component("L1"))

    graph = doc.graph()

    relations = sorted(edge.relation_label for edge in graph.edges)
    assert relations == ["causally upstream of", "directly positively regulates", "has output"]
    for edge in graph.edges:
        assert edge.source in graph.nodes
        assert edge.target in graph.nodes


def test_dangling_facts_are_dropped_silently(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "has input", "missing-individual")
    doc.fact("missing-subject", "part of", activity)
    doc.fact(activity, "causally upstream of", "missing-activity")

    graph = doc.graph()

    assert len(graph) == 1
    assert graph.edges == ()
    node = next(iter(graph))
    assert node.has_input == ()


def test_chemicals_become_nodes_but_generic_protein_does_not(make_document) -> None:
    doc = make_document()
    doc.chemical("C1", "CHEBI:15377", "water")
    doc.chemical("C2", "CHEBI:36080", "protein")
    doc.gene("G1", "PomBase:SPAC1.01")
    doc.process("P1")

    graph = doc.graph()

    assert list(graph.nodes) == [(None, "C1")]
    assert graph.node((None, "C1")).node_type is NodeType.CHEMICAL


def test_non_chebi_entities_only_appear_as_enablers(make_document) -> None:
    doc = make_document()
    activity = doc.activity("A1")
    doc.fact(activity, "enabled by", doc.individual("M1", "PomBase:SPAC1.01.1", "cdc2 mRNA", [CHEMICAL_ENTITY]))
    doc.individual("M2", "SO:0000234", "mRNA", [CHEMICAL_ENTITY])
    doc.individual("P1", "PR:000027562", "phosphorylated Cdc2", [CHEMICAL_ENTITY])
    doc.chemical("C1", "CHEBI:15377", "water")

    graph = doc.graph()

    assert {key: node.node_type for key, node in graph.nodes.items()} == {
        (None, "A1"): NodeType.ACTIVITY,
        (None, "C1"): NodeType.CHEMICAL,
    }
    assert graph.node((None, "A1")).enabler.kind is EnablerKind.GENE


def test_individual_without_types_is_skipped() -> None:
    model = GoCamModel(
        id="gomodel:untyped",
        individuals=(
            Individual(id="X1", types=(), root_types=(IndividualType(id="GO:0003674"),)),
            Individual(
                id="A1",
                types=(IndividualType(),),
                root_types=(IndividualType(id=MOLECULAR_FUNCTION["id"]),),
            ),
        ),
        facts=(Fact(subject="A1", object="X1", property="RO:0002233", property_label="has input"),),
    )

    graph = build_graph(model)

    assert list(graph.nodes) == [(None, "A1")]
    node = graph.node((None, "A1"))
    assert node.id == NO_ID
    assert node.label == NO_LABEL
    assert node.has_input == ()
