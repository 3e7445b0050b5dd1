"""
medinterp - 의료 서술문 해석 엔진

구문 트리에서 (주어, 서술어, 목적어) 트리플렛을 추출하고
SNOMED CT 온톨로지와 WordNet 시소러스로 검증합니다.

모듈 구성:
- ontology: SNOMED CT 개념 그래프 (계층 조상, 퍼지 개념 검색)
- thesaurus: WordNet synset 그래프 (최단 조상 경로)
- patterns: 패턴 트리 컴파일과 구문 트리 매칭
- reasoning: 슬롯 바인딩, 트리플렛 채점, 결과 누적, 파이프라인
- evaluation: UMLS CUI 내보내기
"""

from .config import get_settings, reload_settings

__version__ = "0.1.0"

__all__ = [
    "get_settings",
    "reload_settings",
    "__version__",
]
