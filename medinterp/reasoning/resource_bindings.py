"""
리소스 바인딩 테이블

메타모델 슬롯(예: Person, Suffer, Symptom)마다 허용 조건을 정의합니다.

파일 형식 (한 줄에 하나, 3글자 접두어):
    mm_<슬롯>      새 슬롯 블록 시작
    wn_<sense>     시소러스 synset 인덱스
    sn_<concept>   온톨로지 개념 ID
    ow_<word>      명시적 허용 단어
    nl_<아무거나>   값이 없어도 됨 (nullable)
빈 줄과 '#'으로 시작하는 줄은 무시합니다.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from ..exceptions import MalformedResourceError, UnknownSlotError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceBinding:
    """슬롯 하나의 허용 조건"""
    slot: str
    nullable: bool = False
    explicit_words: Optional[Tuple[str, ...]] = None
    thesaurus_senses: Optional[FrozenSet[int]] = None
    ontology_concepts: Optional[FrozenSet[int]] = None

    def accepts_word(self, word: str) -> bool:
        """명시적 단어 목록에 대소문자 무시로 포함되는지"""
        if not self.explicit_words:
            return False
        lowered = word.lower()
        return any(lowered == entry.lower() for entry in self.explicit_words)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot": self.slot,
            "nullable": self.nullable,
            "explicit_words": list(self.explicit_words) if self.explicit_words else None,
            "thesaurus_senses": sorted(self.thesaurus_senses) if self.thesaurus_senses else None,
            "ontology_concepts": sorted(self.ontology_concepts) if self.ontology_concepts else None,
        }


class _BindingBuilder:
    """로딩 중 슬롯 블록 누적"""

    def __init__(self, slot: str):
        self.slot = slot
        self.nullable = False
        self.words: List[str] = []
        self.senses: List[int] = []
        self.concepts: List[int] = []

    def build(self) -> ResourceBinding:
        return ResourceBinding(
            slot=self.slot,
            nullable=self.nullable,
            explicit_words=tuple(self.words) if self.words else None,
            thesaurus_senses=frozenset(self.senses) if self.senses else None,
            ontology_concepts=frozenset(self.concepts) if self.concepts else None,
        )


class ResourceBindings:
    """슬롯 이름 → ResourceBinding 테이블 (로드 후 읽기 전용)"""

    PREFIXES = ("mm_", "wn_", "sn_", "ow_", "nl_")

    def __init__(self, bindings: Iterable[ResourceBinding] = ()):
        self._bindings: Dict[str, ResourceBinding] = {b.slot: b for b in bindings}

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str = "<memory>") -> "ResourceBindings":
        """줄 목록에서 바인딩 테이블 구성

        Raises:
            MalformedResourceError: 알 수 없는 접두어, 블록 밖 속성, 숫자가 아닌 ID
        """
        builders: Dict[str, _BindingBuilder] = {}
        current: Optional[_BindingBuilder] = None

        for line_no, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            prefix, value = stripped[:3], stripped[3:].strip()
            if prefix not in cls.PREFIXES:
                raise MalformedResourceError(f"{source}:{line_no}: 알 수 없는 접두어 '{prefix}'")

            if prefix == "mm_":
                if not value:
                    raise MalformedResourceError(f"{source}:{line_no}: 슬롯 이름이 없습니다")
                # 같은 슬롯이 다시 나오면 새 블록으로 교체
                current = builders[value] = _BindingBuilder(value)
                continue

            if current is None:
                raise MalformedResourceError(f"{source}:{line_no}: mm_ 블록 이전의 속성 '{stripped}'")

            try:
                if prefix == "wn_":
                    current.senses.append(int(value))
                elif prefix == "sn_":
                    current.concepts.append(int(value))
                elif prefix == "ow_":
                    if value:
                        current.words.append(value)
                else:
                    current.nullable = True
            except ValueError as e:
                raise MalformedResourceError(f"{source}:{line_no}: 숫자 ID가 아닙니다 '{value}'") from e

        return cls(builder.build() for builder in builders.values())

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ResourceBindings":
        """바인딩 파일 로드"""
        logger.info(f"리소스 바인딩 로드: {path}")
        with open(path, "r", encoding="utf-8") as f:
            bindings = cls.from_lines(f, source=str(path))
        logger.info(f"리소스 바인딩 로드 완료: {len(bindings)}개 슬롯")
        return bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, slot: str) -> bool:
        return slot in self._bindings

    def slots(self) -> List[str]:
        return list(self._bindings)

    def get(self, slot: str) -> ResourceBinding:
        """슬롯 바인딩 조회

        Raises:
            UnknownSlotError: 테이블에 없는 슬롯
        """
        binding = self._bindings.get(slot)
        if binding is None:
            raise UnknownSlotError(f"바인딩 테이블에 없는 슬롯: {slot}")
        return binding

    def can_be_null(self, slot: str) -> bool:
        return self.get(slot).nullable

    def explicit_words(self, slot: str) -> Optional[Tuple[str, ...]]:
        return self.get(slot).explicit_words

    def thesaurus_senses(self, slot: str) -> Optional[FrozenSet[int]]:
        return self.get(slot).thesaurus_senses

    def ontology_concepts(self, slot: str) -> Optional[FrozenSet[int]]:
        return self.get(slot).ontology_concepts

    def describe(self) -> str:
        """사람이 읽을 수 있는 요약"""
        lines = []
        for slot, binding in self._bindings.items():
            parts = []
            if binding.nullable:
                parts.append("nullable")
            if binding.explicit_words:
                parts.append(f"words={list(binding.explicit_words)}")
            if binding.thesaurus_senses:
                parts.append(f"wn={sorted(binding.thesaurus_senses)}")
            if binding.ontology_concepts:
                parts.append(f"sn={sorted(binding.ontology_concepts)}")
            lines.append(f"{slot}: {', '.join(parts) if parts else '-'}")
        return "\n".join(lines)
