"""
온톨로지 그래프

SNOMED CT 개념과 타입이 있는 관계로 구성된 방향 그래프입니다.
개념은 밀집 인덱스 배열에 저장되고 간선은 인덱스로 대상 개념을 가리킵니다.

is-a 계층은 다중 부모를 허용하며 데이터상 순환이 있을 수 있으므로
모든 탐색은 방문 집합으로 보호합니다.

사용 예시:
    from medinterp.ontology import OntologyGraph

    graph = OntologyGraph.from_files(concepts_path, relationships_path, descriptions_path)
    ancestors = graph.ancestors_via_hierarchy(386661006)
    candidates = graph.fuzzy_concept_search(["fever"])
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from ..exceptions import InvalidArgumentError, MissingReferenceError
from ..utils.levenshtein import normalized_distance
from .models import (
    IS_A_TYPE_ID,
    PREFERRED_NAME_TYPE_ID,
    SYNONYM_TYPE_ID,
    Concept,
    ConceptRecord,
    DescriptionRecord,
    Nomenclature,
    RelationEdge,
    RelationshipRecord,
    SearchMethod,
)
from .rf2_loader import RF2Loader

logger = logging.getLogger(__name__)


class OntologyGraph:
    """개념 그래프 (구성 후 읽기 전용)"""

    def __init__(
        self,
        is_a_type_id: int = IS_A_TYPE_ID,
        preferred_name_type_id: int = PREFERRED_NAME_TYPE_ID,
        synonym_type_id: int = SYNONYM_TYPE_ID,
        levenshtein_threshold: float = 0.1,
    ):
        """빈 그래프 생성 (from_records / from_files 사용 권장)

        Args:
            is_a_type_id: 계층 관계 타입 ID
            preferred_name_type_id: 선호명 명칭 타입 ID
            synonym_type_id: 동의어 명칭 타입 ID
            levenshtein_threshold: 퍼지 검색 허용 거리 (미만이어야 매칭)
        """
        self.is_a_type_id = is_a_type_id
        self.preferred_name_type_id = preferred_name_type_id
        self.synonym_type_id = synonym_type_id
        self.levenshtein_threshold = levenshtein_threshold

        self._concepts: List[Concept] = []
        self._index_of: Dict[int, int] = {}
        self._adjacency: List[List[RelationEdge]] = []
        self._concept_names: Dict[int, Nomenclature] = {}
        self._relation_names: Dict[int, Nomenclature] = {}
        self._relation_type_ids: Set[int] = set()
        self._relationship_count = 0
        self._skipped_names = 0

        # 퍼지 검색용 (concept_id, 소문자 명칭 목록)
        self._search_table: List[Tuple[int, List[str]]] = []

    # ================================================================
    # 생성
    # ================================================================

    @classmethod
    def from_records(
        cls,
        concepts: Iterable[ConceptRecord],
        relationships: Iterable[RelationshipRecord],
        descriptions: Iterable[DescriptionRecord],
        skip_orphan_names: bool = False,
        **kwargs,
    ) -> "OntologyGraph":
        """레코드 스트림으로 그래프 구성

        Args:
            concepts: 개념 레코드
            relationships: 관계 레코드
            descriptions: 명칭 레코드
            skip_orphan_names: 소유자를 찾을 수 없는 명칭을 오류 대신 건너뛸지 여부
            **kwargs: OntologyGraph 생성자 인자

        Returns:
            OntologyGraph

        Raises:
            MissingReferenceError: 관계나 명칭이 없는 개념을 참조하는 경우
        """
        graph = cls(**kwargs)
        graph._load_concepts(concepts)
        graph._load_relationships(relationships)
        graph._load_descriptions(descriptions, skip_orphan_names)
        graph._build_search_table()

        logger.info(
            f"온톨로지 그래프 구성 완료: {len(graph._concepts)} 개념, "
            f"{graph._relationship_count} 관계, {len(graph._concept_names)} 명칭 보유 개념"
        )
        return graph

    @classmethod
    def from_files(
        cls,
        concepts_path: Union[str, Path],
        relationships_path: Union[str, Path],
        descriptions_path: Union[str, Path],
        skip_orphan_names: bool = False,
        **kwargs,
    ) -> "OntologyGraph":
        """RF2 스냅샷 파일로 그래프 구성"""
        return cls.from_records(
            RF2Loader.read_concepts(concepts_path),
            RF2Loader.read_relationships(relationships_path),
            RF2Loader.read_descriptions(descriptions_path),
            skip_orphan_names=skip_orphan_names,
            **kwargs,
        )

    def _load_concepts(self, records: Iterable[ConceptRecord]) -> None:
        for record in records:
            if not record.active or record.id in self._index_of:
                continue
            index = len(self._concepts)
            self._concepts.append(Concept(id=record.id, index=index, active=True))
            self._index_of[record.id] = index
            self._adjacency.append([])

    def _load_relationships(self, records: Iterable[RelationshipRecord]) -> None:
        for record in records:
            if not record.active:
                continue
            source = self._index_of.get(record.source_id)
            target = self._index_of.get(record.destination_id)
            if source is None or target is None:
                missing = record.source_id if source is None else record.destination_id
                raise MissingReferenceError(
                    f"관계 {record.id}가 존재하지 않는 개념을 참조합니다: {missing}"
                )
            self._adjacency[source].append(
                RelationEdge(id=record.id, type_id=record.type_id, target=target, group=record.group)
            )
            self._relation_type_ids.add(record.type_id)
            self._relationship_count += 1

    def _load_descriptions(self, records: Iterable[DescriptionRecord], skip_orphan_names: bool) -> None:
        for record in records:
            if not record.active:
                continue
            if record.owner_id in self._relation_type_ids:
                table = self._relation_names
            elif record.owner_id in self._index_of:
                table = self._concept_names
            elif skip_orphan_names:
                self._skipped_names += 1
                continue
            else:
                raise MissingReferenceError(
                    f"명칭 '{record.term}'의 소유자를 찾을 수 없습니다: {record.owner_id}"
                )

            names = table.setdefault(record.owner_id, Nomenclature())
            if record.type_id == self.preferred_name_type_id and names.preferred_name is None:
                names.preferred_name = record.term
            else:
                names.synonyms.append(record.term)

        if self._skipped_names:
            logger.warning(f"소유자 없는 명칭 {self._skipped_names}건 건너뜀")

    def _build_search_table(self) -> None:
        for concept in self._concepts:
            names = self._concept_names.get(concept.id)
            if names is None:
                continue
            lowered = [name.lower() for name in names.all_names()]
            if lowered:
                self._search_table.append((concept.id, lowered))

    # ================================================================
    # 조회
    # ================================================================

    def __len__(self) -> int:
        return len(self._concepts)

    def __contains__(self, concept_id: int) -> bool:
        return concept_id in self._index_of

    def _index(self, concept_id: int) -> int:
        index = self._index_of.get(concept_id)
        if index is None:
            raise MissingReferenceError(f"알 수 없는 개념 ID: {concept_id}")
        return index

    def concept(self, concept_id: int) -> Concept:
        """ID로 개념 조회"""
        return self._concepts[self._index(concept_id)]

    def names_of(self, concept_id: int) -> Nomenclature:
        """개념 명칭 (없으면 빈 Nomenclature)"""
        self._index(concept_id)
        return self._concept_names.get(concept_id, Nomenclature())

    def relation_name(self, type_id: int) -> Optional[str]:
        """관계 타입 이름 (선호명 우선)"""
        names = self._relation_names.get(type_id)
        if names is None:
            return None
        all_names = names.all_names()
        return all_names[0] if all_names else None

    @property
    def relation_type_ids(self) -> Set[int]:
        return set(self._relation_type_ids)

    def out_neighbors(self, concept_id: int) -> List[Tuple[RelationEdge, Concept]]:
        """모든 타입의 나가는 간선과 대상 개념"""
        return [(edge, self._concepts[edge.target]) for edge in self._adjacency[self._index(concept_id)]]

    def parents(self, concept_id: int) -> List[int]:
        """is-a 부모 개념 ID 목록"""
        return [
            self._concepts[edge.target].id
            for edge in self._adjacency[self._index(concept_id)]
            if edge.is_hierarchy(self.is_a_type_id)
        ]

    def statistics(self) -> Dict[str, int]:
        """그래프 통계"""
        return {
            "concepts": len(self._concepts),
            "relationships": self._relationship_count,
            "relation_types": len(self._relation_type_ids),
            "named_concepts": len(self._concept_names),
            "named_relation_types": len(self._relation_names),
            "skipped_names": self._skipped_names,
        }

    # ================================================================
    # 계층 탐색
    # ================================================================

    def ancestors_via_hierarchy(self, concept_id: int) -> Set[int]:
        """is-a 간선으로 도달 가능한 모든 개념 (시작 개념 포함)

        Args:
            concept_id: 시작 개념 ID

        Returns:
            조상 개념 ID 집합

        Raises:
            MissingReferenceError: 알 수 없는 개념 ID
        """
        start = self._index(concept_id)
        visited = {start}
        stack = [start]

        while stack:
            current = stack.pop()
            for edge in self._adjacency[current]:
                if edge.is_hierarchy(self.is_a_type_id) and edge.target not in visited:
                    visited.add(edge.target)
                    stack.append(edge.target)

        return {self._concepts[index].id for index in visited}

    def path_to_root(self, concept_id: int) -> List[int]:
        """첫 번째 is-a 부모를 따라 루트까지의 경로 (시작 개념 포함)"""
        current = self._index(concept_id)
        path = [current]
        seen = {current}

        while True:
            parent = next(
                (edge.target for edge in self._adjacency[current] if edge.is_hierarchy(self.is_a_type_id)),
                None,
            )
            if parent is None or parent in seen:
                break
            path.append(parent)
            seen.add(parent)
            current = parent

        return [self._concepts[index].id for index in path]

    # ================================================================
    # 명칭 검색
    # ================================================================

    def _best_distance(self, query: str, names: List[str], limit: float) -> float:
        """명칭 목록 중 최소 정규화 거리 (limit 이상은 계산 생략)"""
        best = 1.0
        for name in names:
            longest = max(len(query), len(name))
            if longest == 0:
                return 0.0
            # 길이 차이는 편집 거리의 하한
            if abs(len(query) - len(name)) / longest >= limit:
                continue
            best = min(best, normalized_distance(query, name))
            if best == 0.0:
                break
        return best

    def fuzzy_concept_search(self, words: List[str]) -> List[int]:
        """다중 단어 퍼지 개념 검색

        단어를 공백으로 이어 붙인 질의와 모든 개념의 선호명/동의어 사이
        정규화 편집 거리를 계산하여 임계값 미만인 개념을 모두 반환합니다.

        Args:
            words: 질의 단어 목록

        Returns:
            매칭된 개념 ID 목록 (인덱스 순)
        """
        if words is None:
            raise InvalidArgumentError("검색 단어 목록이 없습니다 (None)")

        query = " ".join(words).lower()
        threshold = self.levenshtein_threshold
        return [
            concept_id
            for concept_id, names in self._search_table
            if self._best_distance(query, names, threshold) < threshold
        ]

    def search_concepts(
        self,
        words: List[str],
        method: SearchMethod = SearchMethod.REGEX,
    ) -> Set[int]:
        """단어별 검색 결과의 교집합 (모든 단어가 매칭되어야 함)

        Args:
            words: 질의 단어 목록
            method: REGEX(부분 문자열) 또는 LEVENSHTEIN(전체 명칭과의 편집 거리)

        Returns:
            개념 ID 집합
        """
        if not words:
            return set()

        method = SearchMethod(method)
        result: Optional[Set[int]] = None

        for word in words:
            found = set()
            if method == SearchMethod.REGEX:
                pattern = re.compile(re.escape(word), re.IGNORECASE)
                for concept_id, names in self._search_table:
                    if any(pattern.search(name) for name in names):
                        found.add(concept_id)
            else:
                query = word.lower()
                for concept_id, names in self._search_table:
                    if self._best_distance(query, names, self.levenshtein_threshold) < self.levenshtein_threshold:
                        found.add(concept_id)

            result = found if result is None else result & found
            if not result:
                break

        return result or set()

    def sweep_concept_search(self, words: List[str]) -> List[int]:
        """단어 체인을 늘려가며 퍼지 검색

        왼쪽부터 단어를 하나씩 붙여 질의를 확장하고, 매칭이 끊기기 직전의
        결과를 채택한 뒤 다음 단어부터 다시 시작합니다.
        """
        found: List[int] = []
        start = 0

        while start < len(words):
            last_result: List[int] = []
            last_end = start
            for end in range(start, len(words)):
                result = self.fuzzy_concept_search(words[start:end + 1])
                if result:
                    last_result, last_end = result, end
                elif last_result:
                    break

            if last_result:
                found.extend(last_result)
                start = last_end + 1
            else:
                start += 1

        return found
