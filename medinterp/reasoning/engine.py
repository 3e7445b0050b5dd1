"""
추론 엔진

패턴이 기대하는 슬롯 바인딩과 추출된 트리플렛을 비교하여 채택 점수를 계산합니다.

슬롯 평가 순서:
    1. 단어 없음 + nullable → 1.0 (nullable이 아니면 0.0)
    2. 명시적 단어 목록에 모든 단어가 포함 → 1.0
    3. 한 글자 단어 하나뿐 → 0.0
    4. 모든 단어의 synset이 바인딩 sense와 교차 → 1.0
    5. 퍼지 개념 검색 결과 중 조상에 바인딩 개념이 있는 것 → 1.0 (발견 ID 기록)
    6. 그 외 → 0.0

트리플렛 점수 = 주어 × 서술어 × 목적어 (한 슬롯이라도 실패하면 0)
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from ..ontology.graph import OntologyGraph
from ..patterns.pattern_tree import SlotKind
from ..patterns.syntactical_pattern import SyntacticalPattern
from ..patterns.triplet import Triplet
from ..thesaurus.graph import ThesaurusGraph
from .resource_bindings import ResourceBindings

logger = logging.getLogger(__name__)

_SLOT_ORDER = (SlotKind.SUBJECT, SlotKind.PREDICATE, SlotKind.OBJECT)


class SlotEvaluation(NamedTuple):
    """슬롯 평가 결과"""
    score: float
    found_ontology_ids: List[int]


class TripletEvaluation(NamedTuple):
    """트리플렛 평가 결과"""
    score: float
    found_ontology_ids: List[int]
    slot_scores: Tuple[float, float, float] = (0.0, 0.0, 0.0)


class ReasoningEngine:
    """리소스 기반 트리플렛 채점기

    인스턴스 상태를 변경하지 않으므로 여러 스레드에서 동시에 호출할 수 있습니다.
    """

    def __init__(
        self,
        bindings: ResourceBindings,
        ontology: Optional[OntologyGraph] = None,
        thesaurus: Optional[ThesaurusGraph] = None,
    ):
        """초기화

        Args:
            bindings: 슬롯 바인딩 테이블
            ontology: 온톨로지 그래프 (없으면 5단계 생략)
            thesaurus: 시소러스 그래프 (없으면 4단계 생략)
        """
        self.bindings = bindings
        self.ontology = ontology
        self.thesaurus = thesaurus

    def evaluate(self, pattern: SyntacticalPattern, triplet: Triplet) -> TripletEvaluation:
        """트리플렛 점수 계산

        Args:
            pattern: 슬롯 이름을 제공하는 패턴
            triplet: 추출된 트리플렛

        Returns:
            TripletEvaluation(score, found_ontology_ids, slot_scores)

        Raises:
            UnknownSlotError: 패턴 슬롯이 바인딩 테이블에 없는 경우
        """
        logger.debug(f"Evaluating: {triplet}")

        score = 1.0
        found_ids: List[int] = []
        slot_scores = []

        for kind in _SLOT_ORDER:
            result = self.evaluate_slot(pattern.slot_name(kind), triplet.words_for(kind))
            slot_scores.append(result.score)
            found_ids.extend(result.found_ontology_ids)
            score *= result.score

        logger.debug(f"평가 결과: {triplet} → {score:.2f} (슬롯 {slot_scores})")
        return TripletEvaluation(score=score, found_ontology_ids=found_ids, slot_scores=tuple(slot_scores))

    def evaluate_slot(self, slot_name: str, words: Optional[List[str]]) -> SlotEvaluation:
        """슬롯 하나 평가

        Args:
            slot_name: 메타모델 슬롯 이름
            words: 추출된 단어 (없으면 None)

        Returns:
            SlotEvaluation(score, found_ontology_ids)
        """
        binding = self.bindings.get(slot_name)

        if words is None:
            return SlotEvaluation(1.0 if binding.nullable else 0.0, [])

        if not words:
            return SlotEvaluation(0.0, [])

        # 명시적 단어
        if binding.explicit_words and all(binding.accepts_word(word) for word in words):
            return SlotEvaluation(1.0, [])

        # 한 글자는 근거로 보지 않음
        if len(words) == 1 and len(words[0]) == 1:
            return SlotEvaluation(0.0, [])

        # 시소러스 sense
        if binding.thesaurus_senses and self.thesaurus is not None:
            if all(self.thesaurus.senses_intersect(word, binding.thesaurus_senses) for word in words):
                return SlotEvaluation(1.0, [])

        # 온톨로지 계층
        if binding.ontology_concepts and self.ontology is not None:
            found = [
                candidate
                for candidate in self.ontology.fuzzy_concept_search(words)
                if not binding.ontology_concepts.isdisjoint(self.ontology.ancestors_via_hierarchy(candidate))
            ]
            if found:
                logger.debug(f"온톨로지 매칭 {slot_name}: {words} → {found}")
                return SlotEvaluation(1.0, found)

        return SlotEvaluation(0.0, [])
