from __future__ import annotations

from herbapedia_tools.corpus.documents import ReferenceDataset
from herbapedia_tools.vocabulary import ConceptGraph


def _graph(*concepts: dict) -> ConceptGraph:
    return ConceptGraph.from_datasets([ReferenceDataset.from_payload({"@graph": list(concepts)}, "natures")])


def test_relations_are_linked_in_both_directions() -> None:
    graph = _graph(
        {"@id": "nature/warm", "broader": {"@id": "nature/yang"}},
        {"@id": "nature/yang"},
        {"@id": "nature/hot", "related": [{"@id": "nature/warm"}]},
    )
    assert len(graph) == 3
    assert [item.id for item in graph.neighbours("nature/yang", "narrower")] == ["nature/warm"]
    assert [item.id for item in graph.neighbours("nature/warm", "related")] == ["nature/hot"]
    assert graph.namespaces == {"nature/"}


def test_ancestors_terminate_on_cycles() -> None:
    graph = _graph(
        {"@id": "nature/a", "broader": {"@id": "nature/b"}},
        {"@id": "nature/b", "broader": {"@id": "nature/c"}},
        {"@id": "nature/c", "broader": {"@id": "nature/a"}},
    )
    assert [item.id for item in graph.ancestors("nature/a")] == ["nature/b", "nature/c"]


def test_duplicates_and_dangling_relations_are_recorded() -> None:
    graph = _graph(
        {"@id": "nature/warm", "narrower": {"@id": "nature/missing"}},
        {"@id": "https://www.herbapedia.org/nature/warm"},
    )
    assert len(graph) == 1
    assert graph.duplicates == ["nature/warm"]
    assert [(item.source, item.relation, item.target) for item in graph.dangling] == [
        ("nature/warm", "narrower", "nature/missing")
    ]
    assert "https://www.herbapedia.org/nature/warm" in graph
    assert graph.get("nature/missing") is None


def test_namespaces_track_added_concepts() -> None:
    graph = _graph({"@id": "nature/warm"})
    graph.add({"@id": "flavor/sweet"}, dataset="flavors")
    graph.add({"prefLabel": {"en": "no id"}})
    assert graph.namespaces == {"nature/", "flavor/"}
    assert "flavor/sweet" in graph
