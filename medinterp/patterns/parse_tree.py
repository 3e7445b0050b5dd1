"""
구문 분석 트리

외부 구문 분석기가 만든 성분 트리를 표현합니다. 내부 노드는 문법 범주
라벨을, 리프 노드는 표층 단어를 가집니다.

괄호 표기(Penn Treebank 형식) 문자열에서 읽을 수 있습니다:
    (ROOT (S (NP (NN patient)) (VP (VBZ has) (NP (NN fever)))))
"""

import re
from dataclasses import dataclass, field
from typing import Iterator, List

from ..exceptions import InvalidArgumentError

_TOKEN = re.compile(r"\(|\)|[^\s()]+")


@dataclass
class ParseTree:
    """라벨이 붙은 트리 노드"""
    label: str
    children: List["ParseTree"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @classmethod
    def from_bracketed(cls, text: str) -> "ParseTree":
        """괄호 표기 문자열을 트리로 변환

        Args:
            text: "(S (NP (NN fever)))" 형식 문자열

        Returns:
            최상위 노드

        Raises:
            InvalidArgumentError: 괄호가 맞지 않거나 라벨이 없는 경우
        """
        if text is None:
            raise InvalidArgumentError("구문 트리 문자열이 없습니다 (None)")

        tokens = _TOKEN.findall(text)
        holder = cls(label="")
        stack = [holder]
        expect_label = False

        for token in tokens:
            if token == "(":
                if expect_label:
                    # "((S ...))" 형식의 이름 없는 최상위 괄호
                    node = cls(label="")
                    stack[-1].children.append(node)
                    stack.append(node)
                expect_label = True
            elif token == ")":
                if expect_label or len(stack) == 1:
                    raise InvalidArgumentError(f"괄호가 맞지 않습니다: {text}")
                stack.pop()
            elif expect_label:
                node = cls(label=token)
                stack[-1].children.append(node)
                stack.append(node)
                expect_label = False
            else:
                if len(stack) == 1:
                    raise InvalidArgumentError(f"괄호 밖의 토큰: {token}")
                stack[-1].children.append(cls(label=token))

        if len(stack) != 1 or expect_label:
            raise InvalidArgumentError(f"괄호가 맞지 않습니다: {text}")
        if len(holder.children) != 1:
            raise InvalidArgumentError(f"최상위 노드는 하나여야 합니다: {text}")

        root = holder.children[0]
        # 이름 없는 감싸기 괄호 제거
        while root.label == "" and len(root.children) == 1:
            root = root.children[0]
        return root

    def iter_nodes(self) -> Iterator["ParseTree"]:
        """전위 순회 (명시적 스택)"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def leaves(self) -> List["ParseTree"]:
        """왼쪽에서 오른쪽 순서의 리프 노드"""
        return [node for node in self.iter_nodes() if node.is_leaf]

    def words(self) -> List[str]:
        """리프 단어 목록"""
        return [leaf.label for leaf in self.leaves()]

    def to_bracketed(self) -> str:
        if self.is_leaf:
            return self.label
        inner = " ".join(child.to_bracketed() for child in self.children)
        return f"({self.label} {inner})"

    def __str__(self) -> str:
        return self.to_bracketed()
