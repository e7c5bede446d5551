"""Controlled-vocabulary concepts stored as an arena with integer adjacency lists."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Literal

from herbapedia_tools.core.logging import get_logger
from herbapedia_tools.core.uris import id_prefix, iter_references, local_id, reference_id
from herbapedia_tools.corpus.documents import ReferenceDataset

LOGGER = get_logger(__name__)

Relation = Literal["broader", "narrower", "related"]
RELATIONS: tuple[Relation, ...] = ("broader", "narrower", "related")


@dataclass(slots=True)
class Concept:
    id: str
    dataset: str
    pref_label: dict[str, Any] = field(default_factory=dict)
    description: dict[str, Any] = field(default_factory=dict)
    payload: dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass(slots=True, frozen=True)
class DanglingRelation:
    source: str
    relation: Relation
    target: str


class ConceptGraph:
    """Concepts addressed by index; relations may form cycles."""

    def __init__(self) -> None:
        self._concepts: list[Concept] = []
        self._index: dict[str, int] = {}
        self._edges: dict[Relation, list[list[int]]] = {relation: [] for relation in RELATIONS}
        self.duplicates: list[str] = []
        self.dangling: list[DanglingRelation] = []
        self._namespaces: set[str] = set()

    @classmethod
    def from_datasets(cls, datasets: Iterable[ReferenceDataset]) -> "ConceptGraph":
        graph = cls()
        pending: list[tuple[int, dict[str, Any]]] = []
        for dataset in datasets:
            for item in dataset.concepts:
                position = graph.add(item, dataset=dataset.slug)
                if position is not None:
                    pending.append((position, item))
        for position, item in pending:
            graph._link(position, item)
        LOGGER.debug(
            "vocabulary.graph_built",
            concepts=len(graph),
            duplicates=len(graph.duplicates),
            dangling=len(graph.dangling),
        )
        return graph

    def add(self, item: dict[str, Any], *, dataset: str = "") -> int | None:
        identifier = reference_id(item)
        if identifier is None:
            return None
        key = local_id(identifier)
        if key in self._index:
            self.duplicates.append(key)
            return None
        position = len(self._concepts)
        label = item.get("prefLabel")
        description = item.get("description")
        self._concepts.append(
            Concept(
                id=key,
                dataset=dataset,
                pref_label=label if isinstance(label, dict) else {},
                description=description if isinstance(description, dict) else {},
                payload=item,
            )
        )
        self._index[key] = position
        prefix = id_prefix(key)
        if prefix:
            self._namespaces.add(prefix)
        for adjacency in self._edges.values():
            adjacency.append([])
        return position

    def _link(self, position: int, item: dict[str, Any]) -> None:
        source = self._concepts[position].id
        for relation in RELATIONS:
            for value in iter_references(item.get(relation)):
                target_id = reference_id(value)
                if target_id is None:
                    continue
                target = self._index.get(local_id(target_id))
                if target is None:
                    self.dangling.append(DanglingRelation(source, relation, local_id(target_id)))
                    continue
                self._connect(position, relation, target)

    def _connect(self, source: int, relation: Relation, target: int) -> None:
        _append_unique(self._edges[relation][source], target)
        if relation == "broader":
            _append_unique(self._edges["narrower"][target], source)
        elif relation == "narrower":
            _append_unique(self._edges["broader"][target], source)
        else:
            _append_unique(self._edges["related"][target], source)

    def __len__(self) -> int:
        return len(self._concepts)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and local_id(identifier) in self._index

    def __iter__(self) -> Iterator[Concept]:
        return iter(self._concepts)

    def get(self, identifier: str) -> Concept | None:
        position = self._index.get(local_id(identifier))
        return self._concepts[position] if position is not None else None

    def neighbours(self, identifier: str, relation: Relation) -> list[Concept]:
        position = self._index.get(local_id(identifier))
        if position is None:
            return []
        return [self._concepts[item] for item in self._edges[relation][position]]

    def ancestors(self, identifier: str) -> list[Concept]:
        """Transitive ``broader`` closure in breadth-first order; terminates on cycles."""
        start = self._index.get(local_id(identifier))
        if start is None:
            return []
        seen = {start}
        queue = deque(self._edges["broader"][start])
        ordered: list[Concept] = []
        while queue:
            position = queue.popleft()
            if position in seen:
                continue
            seen.add(position)
            ordered.append(self._concepts[position])
            queue.extend(self._edges["broader"][position])
        return ordered

    @property
    def namespaces(self) -> frozenset[str]:
        """Identifier prefixes (``nature/``) with at least one loaded concept."""
        return frozenset(self._namespaces)


def _append_unique(items: list[int], value: int) -> None:
    if value not in items:
        items.append(value)
