"""
트리플렛

구문 패턴 매칭으로 추출한 (주어, 서술어, 목적어) 단어 묶음과
매칭 정확도를 표현합니다.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..exceptions import InvalidArgumentError, MergeConflictError
from .pattern_tree import SlotKind

_FIELDS = ("subject", "predicate", "object")


def _validate_words(name: str, words: Optional[Sequence[str]]) -> Optional[Tuple[str, ...]]:
    if words is None:
        return None
    if isinstance(words, str):
        raise InvalidArgumentError(f"{name}: 단어 목록이어야 합니다 (문자열 받음)")
    words = tuple(words)
    for word in words:
        if word is None or not isinstance(word, str):
            raise InvalidArgumentError(f"{name}: 잘못된 단어 {word!r}")
    return words


def _as_list(words: Optional[Tuple[str, ...]]) -> Optional[List[str]]:
    return list(words) if words is not None else None


@dataclass(frozen=True)
class Triplet:
    """추출된 트리플렛 (불변)

    단어 목록은 생성 시 검증 후 튜플로 저장합니다.
    """
    subject: Optional[Tuple[str, ...]] = None
    predicate: Optional[Tuple[str, ...]] = None
    object: Optional[Tuple[str, ...]] = None
    accuracy: float = 1.0

    def __post_init__(self):
        for name in _FIELDS:
            object.__setattr__(self, name, _validate_words(name, getattr(self, name)))

    @classmethod
    def empty(cls) -> "Triplet":
        """필드가 없는 트리플렛 (앵커 매칭)"""
        return cls()

    @classmethod
    def for_slot(cls, kind: SlotKind, words: Sequence[str], accuracy: float = 1.0) -> "Triplet":
        """한 슬롯만 채운 부분 트리플렛"""
        if kind == SlotKind.SUBJECT:
            return cls(subject=words, accuracy=accuracy)
        if kind == SlotKind.PREDICATE:
            return cls(predicate=words, accuracy=accuracy)
        return cls(object=words, accuracy=accuracy)

    def words_for(self, kind: SlotKind) -> Optional[List[str]]:
        """슬롯 단어 목록 사본 (없으면 None)"""
        if kind == SlotKind.SUBJECT:
            words = self.subject
        elif kind == SlotKind.PREDICATE:
            words = self.predicate
        else:
            words = self.object
        return _as_list(words)

    def populated_fields(self) -> List[str]:
        return [name for name in _FIELDS if getattr(self, name) is not None]

    def merge(self, other: "Triplet") -> "Triplet":
        """서로 다른 필드를 채운 두 트리플렛 병합

        정확도는 두 값의 평균입니다.

        Raises:
            MergeConflictError: 같은 필드를 두 쪽 모두 채운 경우
        """
        conflicts = set(self.populated_fields()) & set(other.populated_fields())
        if conflicts:
            raise MergeConflictError(
                f"트리플렛 병합 충돌 ({', '.join(sorted(conflicts))}): {self} + {other}"
            )

        return Triplet(
            subject=self.subject if self.subject is not None else other.subject,
            predicate=self.predicate if self.predicate is not None else other.predicate,
            object=self.object if self.object is not None else other.object,
            accuracy=(self.accuracy + other.accuracy) / 2,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject": _as_list(self.subject),
            "predicate": _as_list(self.predicate),
            "object": _as_list(self.object),
            "accuracy": self.accuracy,
        }

    def __str__(self) -> str:
        def fmt(words):
            return " ".join(words) if words is not None else "-"
        return f"S[{fmt(self.subject)}] P[{fmt(self.predicate)}] O[{fmt(self.object)}]"
