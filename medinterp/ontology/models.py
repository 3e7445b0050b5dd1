"""
온톨로지 데이터 모델

SNOMED CT RF2 스냅샷에서 읽은 레코드와 그래프 구성 요소를 정의합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================
# 상수
# ============================================================

IS_A_TYPE_ID = 116680003
PREFERRED_NAME_TYPE_ID = 900000000000003001  # Fully Specified Name
SYNONYM_TYPE_ID = 900000000000013009


class SearchMethod(str, Enum):
    """다중 단어 개념 검색 방식"""
    REGEX = "regex"  # 대소문자 무시 부분 문자열
    LEVENSHTEIN = "levenshtein"  # 정규화 편집 거리


# ============================================================
# RF2 레코드
# ============================================================

@dataclass(frozen=True)
class ConceptRecord:
    """개념 레코드 (sct2_Concept)"""
    id: int
    active: bool = True


@dataclass(frozen=True)
class RelationshipRecord:
    """관계 레코드 (sct2_Relationship)"""
    id: int
    source_id: int
    destination_id: int
    type_id: int
    active: bool = True
    group: int = 0


@dataclass(frozen=True)
class DescriptionRecord:
    """명칭 레코드 (sct2_Description)"""
    owner_id: int
    term: str
    type_id: int
    active: bool = True


# ============================================================
# 그래프 구성 요소
# ============================================================

@dataclass(frozen=True)
class Concept:
    """그래프 노드

    index는 그래프 인스턴스 안에서만 유효한 밀집 인덱스입니다.
    """
    id: int
    index: int
    active: bool = True


@dataclass(frozen=True)
class RelationEdge:
    """타입이 있는 방향 간선 (target은 개념 인덱스)"""
    id: int
    type_id: int
    target: int
    group: int = 0

    def is_hierarchy(self, is_a_type_id: int = IS_A_TYPE_ID) -> bool:
        """계층(is-a) 간선 여부"""
        return self.type_id == is_a_type_id


@dataclass
class Nomenclature:
    """개념/관계 타입의 명칭 (선호명 + 동의어)"""
    preferred_name: Optional[str] = None
    synonyms: List[str] = field(default_factory=list)

    def all_names(self) -> List[str]:
        """선호명을 앞에 둔 전체 명칭 목록"""
        names = [self.preferred_name] if self.preferred_name else []
        return names + self.synonyms

    def to_dict(self) -> Dict[str, Any]:
        return {
            "preferred_name": self.preferred_name,
            "synonyms": list(self.synonyms),
        }
