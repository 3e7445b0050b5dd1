"""
패턴 트리

구문 패턴의 트리 모양을 표현합니다. 내부 노드 라벨은 구문 트리 라벨과
정확히 일치해야 하며, 리프 라벨이 _SUBJECT / _RELATIONSHIP / _OBJECT로
끝나면 해당 슬롯의 단어를 추출하는 지점입니다.

문자열 형식 (공백 없음):
    (S(NP(PERSON_SUBJECT))(VP(VBP(SUFFER_RELATIONSHIP))(PP(SYMPTOM_OBJECT))))
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..exceptions import MalformedPatternError


class SlotKind(str, Enum):
    """트리플렛 슬롯 (값은 리프 라벨 접미사)"""
    SUBJECT = "_SUBJECT"
    PREDICATE = "_RELATIONSHIP"
    OBJECT = "_OBJECT"

    @classmethod
    def from_label(cls, label: str) -> Optional["SlotKind"]:
        for kind in cls:
            if label.endswith(kind.value):
                return kind
        return None


@dataclass(frozen=True)
class PatternTree:
    """불변 패턴 트리 노드"""
    label: str
    children: Tuple["PatternTree", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def slot_kind(self) -> Optional[SlotKind]:
        """추출 리프이면 슬롯 종류, 아니면 None"""
        if not self.is_leaf:
            return None
        return SlotKind.from_label(self.label)

    @property
    def depth(self) -> int:
        depth = 0
        level = [self]
        while level:
            depth += 1
            level = [child for node in level for child in node.children]
        return depth

    def iter_nodes(self) -> Iterator["PatternTree"]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def slot_leaves(self) -> List["PatternTree"]:
        """추출 리프 목록 (왼쪽부터)"""
        return [node for node in self.iter_nodes() if node.slot_kind is not None]

    @classmethod
    def parse(cls, text: str) -> "PatternTree":
        """괄호 문자열을 패턴 트리로 변환

        Raises:
            MalformedPatternError: 괄호 불균형, 빈 라벨, 잘못된 문자, 루트 개수 오류
        """
        # [label, children] 형태로 먼저 만든 뒤 불변 트리로 변환
        holder: list = ["", []]
        stack = [holder]
        i = 0
        n = len(text)

        while i < n:
            char = text[i]
            if char == "(":
                j = i + 1
                while j < n and text[j] not in "()" and not text[j].isspace():
                    j += 1
                label = text[i + 1:j]
                if not label:
                    raise MalformedPatternError(f"빈 노드 라벨 (위치 {i}): {text}")
                node: list = [label, []]
                stack[-1][1].append(node)
                stack.append(node)
                i = j
            elif char == ")":
                if len(stack) == 1:
                    raise MalformedPatternError(f"닫는 괄호가 많습니다 (위치 {i}): {text}")
                stack.pop()
                i += 1
            else:
                raise MalformedPatternError(f"예상치 못한 문자 '{char}' (위치 {i}): {text}")

        if len(stack) != 1:
            raise MalformedPatternError(f"괄호가 닫히지 않았습니다: {text}")
        if len(holder[1]) != 1:
            raise MalformedPatternError(f"패턴 루트는 하나여야 합니다 ({len(holder[1])}개): {text}")

        return cls._freeze(holder[1][0])

    @classmethod
    def _freeze(cls, node: list) -> "PatternTree":
        label, children = node
        return cls(label=label, children=tuple(cls._freeze(child) for child in children))

    def to_string(self) -> str:
        return f"({self.label}{''.join(child.to_string() for child in self.children)})"

    def __str__(self) -> str:
        return self.to_string()
