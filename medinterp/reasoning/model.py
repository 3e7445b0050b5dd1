"""
모델 누적기

임계값 이상으로 채점된 트리플렛만 남기고, 남은 패턴과 발견된
온톨로지 개념 ID를 문서 단위로 누적합니다.
"""

import logging
from typing import Any, Dict, Iterable, List, Tuple

from ..exceptions import InvalidArgumentError
from ..patterns.syntactical_pattern import MatchedPattern
from ..patterns.triplet import Triplet
from .engine import ReasoningEngine

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.75


class ModelAccumulator:
    """채택된 패턴/트리플렛 누적기"""

    def __init__(self, engine: ReasoningEngine, threshold: float = DEFAULT_THRESHOLD):
        """초기화

        Args:
            engine: 트리플렛 채점기
            threshold: 채택 임계값 (점수 >= threshold)
        """
        self.engine = engine
        self.threshold = threshold
        self.matched_patterns: List[MatchedPattern] = []
        self.found_ontology_ids: List[int] = []

    def add_matched_patterns(self, matched_patterns: Iterable[MatchedPattern]) -> int:
        """매칭된 패턴들을 채점하여 누적

        각 패턴의 트리플렛 목록은 채택된 것만 남도록 교체됩니다.

        Args:
            matched_patterns: 구문 패턴 매칭 결과

        Returns:
            이번 호출에서 채택된 트리플렛 수

        Raises:
            InvalidArgumentError: 입력이 None인 경우
        """
        if matched_patterns is None:
            raise InvalidArgumentError("매칭 패턴 목록이 없습니다 (None)")

        accepted_count = 0
        for matched in matched_patterns:
            accepted: List[Triplet] = []
            for triplet in matched.triplets:
                evaluation = self.engine.evaluate(matched.pattern, triplet)
                if evaluation.score >= self.threshold:
                    accepted.append(triplet)
                    self.found_ontology_ids.extend(evaluation.found_ontology_ids)

            matched.replace_triplets(accepted)
            if accepted:
                self.matched_patterns.append(matched)
                accepted_count += len(accepted)

        logger.debug(f"트리플렛 채택: {accepted_count}개 (누적 패턴 {len(self.matched_patterns)}개)")
        return accepted_count

    def __len__(self) -> int:
        return len(self.matched_patterns)

    def triplets(self) -> List[Tuple[MatchedPattern, Triplet]]:
        """채택된 (패턴, 트리플렛) 쌍"""
        return [(matched, triplet) for matched in self.matched_patterns for triplet in matched.triplets]

    def summary(self) -> Dict[str, Any]:
        return {
            "patterns": len(self.matched_patterns),
            "triplets": sum(len(m.triplets) for m in self.matched_patterns),
            "found_ontology_ids": len(self.found_ontology_ids),
            "threshold": self.threshold,
        }
