"""
구문 패턴

패턴 파일 한 줄(주어 슬롯, 서술어 슬롯, 목적어 슬롯, 트리)을 컴파일하고
구문 트리에 매칭하여 트리플렛을 추출합니다.

매칭 규칙:
    - 구문 트리의 모든 노드를 패턴 루트 후보로 시도
    - 내부 패턴 노드는 라벨이 정확히 같아야 함
    - 패턴 자식들은 트리 자식들 안에서 같은 좌→우 순서로 나타나야 하며
      사이의 트리 자식은 건너뛸 수 있음 (백트래킹)
    - 추출 리프는 대응 서브트리의 모든 리프 단어를 해당 슬롯 단어로 사용
    - 라벨이 같은 리프는 필드 없는 앵커 매칭
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..exceptions import InvalidArgumentError, MalformedPatternError
from .parse_tree import ParseTree
from .pattern_tree import PatternTree, SlotKind
from .triplet import Triplet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyntacticalPattern:
    """컴파일된 구문 패턴 (불변)"""
    subject_slot: str
    predicate_slot: str
    object_slot: str
    tree: PatternTree

    @classmethod
    def parse(cls, line: str) -> "SyntacticalPattern":
        """패턴 파일 한 줄 컴파일

        Args:
            line: "subject_slot predicate_slot object_slot (TREE)"

        Returns:
            SyntacticalPattern

        Raises:
            MalformedPatternError: 필드 수가 4가 아니거나 트리 형식 오류
        """
        fields = line.split()
        if len(fields) != 4:
            raise MalformedPatternError(f"패턴 필드는 4개여야 합니다 ({len(fields)}개): {line.strip()}")

        subject_slot, predicate_slot, object_slot, tree_text = fields
        tree = PatternTree.parse(tree_text)

        # 한 정렬에서 같은 슬롯이 두 번 채워지면 병합이 불가능
        kinds = [leaf.slot_kind for leaf in tree.slot_leaves()]
        duplicated = sorted({kind.name for kind in kinds if kinds.count(kind) > 1})
        if duplicated:
            raise MalformedPatternError(f"추출 리프 중복 ({', '.join(duplicated)}): {tree_text}")

        return cls(
            subject_slot=subject_slot,
            predicate_slot=predicate_slot,
            object_slot=object_slot,
            tree=tree,
        )

    def slot_names(self) -> Tuple[str, str, str]:
        return (self.subject_slot, self.predicate_slot, self.object_slot)

    def slot_name(self, kind: SlotKind) -> str:
        if kind == SlotKind.SUBJECT:
            return self.subject_slot
        if kind == SlotKind.PREDICATE:
            return self.predicate_slot
        return self.object_slot

    # ================================================================
    # 매칭
    # ================================================================

    def match(self, parse_tree: ParseTree) -> List[Triplet]:
        """구문 트리의 모든 노드에서 패턴을 시도하여 트리플렛 추출

        Args:
            parse_tree: 구문 트리

        Returns:
            완전한 정렬마다 하나씩의 트리플렛
        """
        if parse_tree is None:
            raise InvalidArgumentError("구문 트리가 없습니다 (None)")

        triplets: List[Triplet] = []
        for node in parse_tree.iter_nodes():
            triplets.extend(self._match_node(self.tree, node))
        return triplets

    def _match_node(self, pattern: PatternTree, node: ParseTree) -> List[Triplet]:
        """패턴 노드와 트리 노드의 모든 매칭 (재귀 깊이는 패턴 깊이로 제한)"""
        if pattern.is_leaf:
            if node.label == pattern.label:
                return [Triplet.empty()]
            kind = pattern.slot_kind
            if kind is not None:
                return [Triplet.for_slot(kind, node.words())]
            return []

        if pattern.label != node.label:
            return []

        results: List[Triplet] = []
        pattern_children = pattern.children
        tree_children = node.children

        # 선택 지점: (패턴 자식 위치, 다음 트리 자식 위치, 부분 트리플렛)
        stack: List[Tuple[int, int, Triplet]] = [(0, 0, Triplet.empty())]

        while stack:
            p, t, partial = stack.pop()
            if p == len(pattern_children):
                results.append(partial)
                continue

            choices = []
            for ti in range(t, len(tree_children)):
                for sub in self._match_node(pattern_children[p], tree_children[ti]):
                    choices.append((p + 1, ti + 1, partial.merge(sub)))
            # 왼쪽 선택이 먼저 나오도록 역순 push
            stack.extend(reversed(choices))

        return results

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject_slot": self.subject_slot,
            "predicate_slot": self.predicate_slot,
            "object_slot": self.object_slot,
            "tree": self.tree.to_string(),
        }

    def __str__(self) -> str:
        return f"{self.subject_slot} {self.predicate_slot} {self.object_slot} {self.tree}"


@dataclass
class MatchedPattern:
    """패턴과 그 패턴이 추출한 트리플렛 목록

    트리플렛 목록은 replace_triplets로만 교체합니다.
    """
    pattern: SyntacticalPattern
    triplets: List[Triplet] = field(default_factory=list)

    def replace_triplets(self, triplets: List[Triplet]) -> None:
        self.triplets = list(triplets)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": str(self.pattern),
            "triplets": [t.to_dict() for t in self.triplets],
        }
