"""
해석 파이프라인

읽기 전용 리소스(온톨로지, 시소러스, 패턴 DB, 바인딩)를 소유하고
문서의 구문 트리들을 패턴 매칭 → 채점 → 누적 순으로 처리합니다.

사용 예시:
    from medinterp.reasoning import create_pipeline

    pipeline = create_pipeline()
    model = pipeline.analyze_bracketed([
        "(S (NP (NN patient)) (VP (VBZ has) (NP (NN fever))))",
    ])
    print(model.summary(), model.found_ontology_ids)
"""

import logging
import time
from typing import Iterable, Optional

from ..config import Settings, get_settings
from ..ontology.graph import OntologyGraph
from ..patterns.parse_tree import ParseTree
from ..patterns.pattern_db import SyntacticalPatternDB
from ..thesaurus.graph import ThesaurusGraph
from ..thesaurus.models import WordClass
from .engine import ReasoningEngine
from .model import DEFAULT_THRESHOLD, ModelAccumulator
from .resource_bindings import ResourceBindings

logger = logging.getLogger(__name__)


class InterpretationPipeline:
    """문서 해석 파이프라인"""

    def __init__(
        self,
        pattern_db: SyntacticalPatternDB,
        bindings: ResourceBindings,
        ontology: Optional[OntologyGraph] = None,
        thesaurus: Optional[ThesaurusGraph] = None,
        threshold: float = DEFAULT_THRESHOLD,
    ):
        self.pattern_db = pattern_db
        self.bindings = bindings
        self.ontology = ontology
        self.thesaurus = thesaurus
        self.threshold = threshold
        self.engine = ReasoningEngine(bindings, ontology=ontology, thesaurus=thesaurus)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        load_ontology: bool = True,
        load_thesaurus: bool = True,
    ) -> "InterpretationPipeline":
        """설정된 경로에서 모든 리소스 로드

        Args:
            settings: 설정 (기본: get_settings())
            load_ontology: SNOMED CT 그래프 로드 여부
            load_thesaurus: WordNet 그래프 로드 여부

        Returns:
            InterpretationPipeline
        """
        settings = settings or get_settings()
        paths = settings.paths

        ontology = None
        if load_ontology:
            start = time.time()
            ontology = OntologyGraph.from_files(
                paths.resolve("snomed_concepts"),
                paths.resolve("snomed_relationships"),
                paths.resolve("snomed_descriptions"),
                skip_orphan_names=settings.ontology.skip_orphan_names,
                is_a_type_id=settings.ontology.is_a_type_id,
                preferred_name_type_id=settings.ontology.preferred_name_type_id,
                synonym_type_id=settings.ontology.synonym_type_id,
                levenshtein_threshold=settings.ontology.levenshtein_threshold,
            )
            logger.info(f"온톨로지 로드 시간: {time.time() - start:.1f}s")

        thesaurus = None
        if load_thesaurus:
            start = time.time()
            thesaurus = ThesaurusGraph.from_files(
                {
                    WordClass.NOUN: paths.resolve("wordnet_noun"),
                    WordClass.VERB: paths.resolve("wordnet_verb"),
                    WordClass.ADV: paths.resolve("wordnet_adv"),
                    WordClass.ADJ: paths.resolve("wordnet_adj"),
                },
                header_lines=settings.thesaurus.header_lines,
                pointer_symbols=settings.thesaurus.pointer_symbols,
            )
            logger.info(f"시소러스 로드 시간: {time.time() - start:.1f}s")

        return cls(
            pattern_db=SyntacticalPatternDB.load(paths.resolve("patterns")),
            bindings=ResourceBindings.load(paths.resolve("bindings")),
            ontology=ontology,
            thesaurus=thesaurus,
            threshold=settings.reasoning.threshold,
        )

    def analyze(self, trees: Iterable[ParseTree], document_id: Optional[str] = None) -> ModelAccumulator:
        """한 문서의 구문 트리들을 해석

        Args:
            trees: 문장별 구문 트리
            document_id: 로그용 문서 식별자

        Returns:
            채택된 패턴과 발견 개념 ID를 담은 ModelAccumulator
        """
        model = ModelAccumulator(self.engine, threshold=self.threshold)
        sentence_count = 0

        for tree in trees:
            sentence_count += 1
            model.add_matched_patterns(self.pattern_db.get_matching_patterns(tree))

        label = document_id or "<document>"
        summary = model.summary()
        logger.info(
            f"문서 해석 완료 {label}: {sentence_count} 문장, "
            f"{summary['patterns']} 패턴, {summary['triplets']} 트리플렛, "
            f"{summary['found_ontology_ids']} 개념"
        )
        return model

    def analyze_bracketed(self, lines: Iterable[str], document_id: Optional[str] = None) -> ModelAccumulator:
        """괄호 표기 구문 트리 문자열들을 해석 (빈 줄 무시)"""
        trees = (ParseTree.from_bracketed(line) for line in lines if line.strip())
        return self.analyze(trees, document_id=document_id)


def create_pipeline(settings: Optional[Settings] = None) -> InterpretationPipeline:
    """InterpretationPipeline 생성 헬퍼"""
    return InterpretationPipeline.from_settings(settings)
