"""
시소러스 데이터 모델

WordNet data.* 파일의 synset 레코드와 그래프 노드를 정의합니다.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List


class WordClass(str, Enum):
    """품사 (synset 인덱스는 품사별로 구분됨)"""
    NOUN = "n"
    VERB = "v"
    ADV = "r"
    ADJ = "a"

    @classmethod
    def from_pos_char(cls, pos: str) -> "WordClass":
        """포인터의 품사 문자를 변환 ('s' 위성 형용사는 ADJ)"""
        if pos == "s":
            return cls.ADJ
        return cls(pos)


# 경로 탐색에 쓰는 포인터 기호 (반의어 '!'와 하위어 '~', '~i'는 제외)
DEFAULT_POINTER_SYMBOLS: FrozenSet[str] = frozenset({
    "@", "@i", "#m", "#s", "#p", "&", "^", "$", "=", "+", "\\", "*", ">",
})

# 상위어 포인터 (parents / paths_to_root 용)
HYPERNYM_SYMBOLS: FrozenSet[str] = frozenset({"@", "@i"})


@dataclass(frozen=True)
class Pointer:
    """synset 간 포인터"""
    symbol: str
    target_offset: int
    target_class: WordClass


@dataclass
class SynsetRecord:
    """data.* 파일 한 줄"""
    offset: int
    word_class: WordClass
    words: List[str] = field(default_factory=list)
    pointers: List[Pointer] = field(default_factory=list)


@dataclass(frozen=True)
class Synset:
    """시소러스 그래프 노드"""
    index: int
    word_class: WordClass
    offset: int
    words: tuple = ()

    @property
    def name(self) -> str:
        return " ".join(self.words)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "word_class": self.word_class.value,
            "offset": self.offset,
            "words": list(self.words),
        }
