"""
시소러스 그래프

WordNet synset을 노드로, 인식된 포인터를 방향 간선으로 하는 그래프입니다.
두 synset 집합 사이의 최단 조상 경로(SAP)를 양방향 BFS 한 번으로 계산합니다.

사용 예시:
    from medinterp.thesaurus import ThesaurusGraph, WordClass

    graph = ThesaurusGraph.from_files({
        WordClass.NOUN: "data.noun",
        WordClass.VERB: "data.verb",
        WordClass.ADV: "data.adv",
        WordClass.ADJ: "data.adj",
    })
    graph.distance("fever", "pain")
"""

import logging
from collections import deque
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union

import numpy as np

from ..exceptions import InvalidArgumentError
from .indexer import SynsetIndexer
from .loader import read_synsets
from .models import (
    DEFAULT_POINTER_SYMBOLS,
    HYPERNYM_SYMBOLS,
    Synset,
    SynsetRecord,
    WordClass,
)

logger = logging.getLogger(__name__)

# 로드 순서
WORD_CLASS_ORDER = [WordClass.NOUN, WordClass.VERB, WordClass.ADV, WordClass.ADJ]

_SIDE_V = 0
_SIDE_W = 1


class ThesaurusGraph:
    """synset 그래프 (구성 후 읽기 전용)"""

    def __init__(self, pointer_symbols: Optional[Iterable[str]] = None):
        self.pointer_symbols = frozenset(pointer_symbols) if pointer_symbols is not None else DEFAULT_POINTER_SYMBOLS

        self._indexer = SynsetIndexer()
        self._synsets: List[Optional[Synset]] = []
        self._adjacency: List[List[int]] = []
        self._hypernyms: List[List[int]] = []
        self._word_index: Dict[str, List[int]] = {}
        self._lower_index: Dict[str, List[int]] = {}
        self._edge_count = 0

    # ================================================================
    # 생성
    # ================================================================

    @classmethod
    def from_records(
        cls,
        streams: Mapping[WordClass, Iterable[SynsetRecord]],
        pointer_symbols: Optional[Iterable[str]] = None,
    ) -> "ThesaurusGraph":
        """품사별 레코드 스트림으로 그래프 구성

        1단계에서 모든 레코드와 인식된 포인터의 대상에 인덱스를 부여하고,
        2단계에서 인접 리스트를 채웁니다.

        Args:
            streams: 품사 → SynsetRecord 스트림
            pointer_symbols: 간선으로 인정할 포인터 기호 (None이면 기본값)

        Returns:
            ThesaurusGraph
        """
        graph = cls(pointer_symbols)

        # 1단계: 인덱스 부여
        records: List[Tuple[int, SynsetRecord]] = []
        for word_class in WORD_CLASS_ORDER:
            for record in streams.get(word_class, ()):
                index = graph._indexer.get_index(record.offset, word_class)
                for pointer in record.pointers:
                    # 인식된 포인터의 대상만 인덱스 부여
                    if pointer.symbol in graph.pointer_symbols:
                        graph._indexer.get_index(pointer.target_offset, pointer.target_class)
                records.append((index, record))

        # 2단계: 노드/간선 채우기
        size = len(graph._indexer)
        graph._synsets = [None] * size
        graph._adjacency = [[] for _ in range(size)]
        graph._hypernyms = [[] for _ in range(size)]

        for index, record in records:
            graph._populate(index, record)

        dangling = sum(1 for synset in graph._synsets if synset is None)
        if dangling:
            logger.warning(f"레코드 없이 참조만 된 synset: {dangling}개")

        logger.info(
            f"시소러스 그래프 구성 완료: {size} synset, {graph._edge_count} 간선, "
            f"{len(graph._word_index)} 단어"
        )
        return graph

    @classmethod
    def from_files(
        cls,
        paths: Mapping[WordClass, Union[str, Path]],
        header_lines: int = 29,
        pointer_symbols: Optional[Iterable[str]] = None,
    ) -> "ThesaurusGraph":
        """WordNet data.* 파일로 그래프 구성"""
        streams = {
            word_class: read_synsets(path, word_class, header_lines)
            for word_class, path in paths.items()
        }
        return cls.from_records(streams, pointer_symbols)

    def _populate(self, index: int, record: SynsetRecord) -> None:
        self._synsets[index] = Synset(
            index=index,
            word_class=record.word_class,
            offset=record.offset,
            words=tuple(record.words),
        )

        for word in record.words:
            for table, key in ((self._word_index, word), (self._lower_index, word.lower())):
                members = table.setdefault(key, [])
                if index not in members:
                    members.append(index)

        for pointer in record.pointers:
            if pointer.symbol not in self.pointer_symbols:
                continue
            target = self._indexer.find(pointer.target_offset, pointer.target_class)
            self._adjacency[index].append(target)
            self._edge_count += 1
            if pointer.symbol in HYPERNYM_SYMBOLS:
                self._hypernyms[index].append(target)

    # ================================================================
    # 조회
    # ================================================================

    def __len__(self) -> int:
        return len(self._synsets)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._synsets):
            raise InvalidArgumentError(f"synset 인덱스 범위 초과: {index} (0..{len(self._synsets) - 1})")

    def synset(self, index: int) -> Optional[Synset]:
        """인덱스로 synset 조회 (참조만 된 synset은 None)"""
        self._check_index(index)
        return self._synsets[index]

    def synset_name(self, index: int) -> str:
        """synset 단어들을 공백으로 이은 이름"""
        synset = self.synset(index)
        return synset.name if synset is not None else ""

    def index_of(self, offset: int, word_class: WordClass) -> Optional[int]:
        """(offset, 품사)의 인덱스"""
        return self._indexer.find(offset, word_class)

    def synsets_of(self, word: str) -> List[int]:
        """단어가 속한 synset 인덱스 (정확히 일치 → 소문자 순으로 조회)"""
        if word in self._word_index:
            return list(self._word_index[word])
        return list(self._lower_index.get(word.lower(), []))

    def is_word(self, word: str) -> bool:
        return bool(self.synsets_of(word))

    def words(self) -> List[str]:
        return list(self._word_index)

    def search_keys(self, query: str) -> List[str]:
        """부분 문자열로 단어 검색 (완전 일치를 파생어보다 앞에 둠)"""
        needle = query.lower()
        matches = [word for word in self._word_index if needle in word.lower()]
        complete = sorted(word for word in matches if len(word) == len(needle))
        derived = sorted(word for word in matches if len(word) != len(needle))
        return complete + derived

    def neighbors(self, index: int) -> List[int]:
        """인식된 모든 포인터의 대상"""
        self._check_index(index)
        return list(self._adjacency[index])

    def parents(self, index: int) -> List[int]:
        """상위어(@, @i) synset 인덱스"""
        self._check_index(index)
        return list(self._hypernyms[index])

    def paths_to_root(self, index: int) -> List[List[int]]:
        """상위어를 따라 루트까지의 모든 단순 경로"""
        self._check_index(index)
        paths = []
        stack = [[index]]

        while stack:
            path = stack.pop()
            parents = [p for p in self._hypernyms[path[-1]] if p not in path]
            if not parents:
                paths.append(path)
                continue
            for parent in reversed(parents):
                stack.append(path + [parent])

        return paths

    def statistics(self) -> Dict[str, int]:
        return {
            "synsets": len(self._synsets),
            "edges": self._edge_count,
            "words": len(self._word_index),
        }

    # ================================================================
    # 최단 조상 경로 (SAP)
    # ================================================================

    def _sap_search(self, v_set: Iterable[int], w_set: Iterable[int]) -> Tuple[Optional[int], Optional[int]]:
        """양방향 BFS로 (최단 길이, 그 길이를 만든 공통 조상) 계산

        두 집합의 모든 원소를 거리 0으로 하나의 FIFO 큐에 넣고 번갈아 확장합니다.
        꺼낸 노드가 반대편에서도 방문된 노드이면 거리 합을 후보로 기록하고,
        현재 최단 후보 이상 거리의 노드는 더 확장하지 않습니다.
        """
        v_nodes = list(v_set)
        w_nodes = list(w_set)
        if not v_nodes or not w_nodes:
            return None, None
        for index in v_nodes + w_nodes:
            self._check_index(index)

        size = len(self._synsets)
        marked = np.zeros((2, size), dtype=bool)
        dist = np.full((2, size), -1, dtype=np.int64)
        queue: deque = deque()

        for side, nodes in ((_SIDE_V, v_nodes), (_SIDE_W, w_nodes)):
            for node in nodes:
                if not marked[side, node]:
                    marked[side, node] = True
                    dist[side, node] = 0
                    queue.append((side, node))

        best_length: Optional[int] = None
        best_ancestor: Optional[int] = None

        while queue:
            side, node = queue.popleft()
            other = 1 - side
            node_dist = int(dist[side, node])

            if marked[other, node]:
                candidate = node_dist + int(dist[other, node])
                if best_length is None or candidate < best_length:
                    best_length, best_ancestor = candidate, node

            # 더 긴 우회로는 최단 후보를 개선할 수 없음
            if best_length is not None and best_length <= node_dist:
                continue

            for neighbor in self._adjacency[node]:
                if not marked[side, neighbor]:
                    marked[side, neighbor] = True
                    dist[side, neighbor] = node_dist + 1
                    queue.append((side, neighbor))

        return best_length, best_ancestor

    def shortest_ancestral_path_length(self, v_set: Iterable[int], w_set: Iterable[int]) -> Optional[int]:
        """두 synset 집합 사이 최단 조상 경로 길이 (경로가 없으면 None)

        Raises:
            InvalidArgumentError: 범위를 벗어난 인덱스
        """
        length, _ = self._sap_search(v_set, w_set)
        return length

    def shortest_common_ancestor(self, v_set: Iterable[int], w_set: Iterable[int]) -> Optional[int]:
        """최단 조상 경로를 만드는 공통 조상 synset (경로가 없으면 None)"""
        _, ancestor = self._sap_search(v_set, w_set)
        return ancestor

    # ================================================================
    # 단어 단위
    # ================================================================

    def _word_synsets(self, word: str) -> List[int]:
        synsets = self.synsets_of(word)
        if not synsets:
            raise InvalidArgumentError(f"시소러스에 없는 단어: {word}")
        return synsets

    def distance(self, word_a: str, word_b: str) -> Optional[int]:
        """두 단어의 synset 집합 사이 최단 조상 경로 길이"""
        return self.shortest_ancestral_path_length(self._word_synsets(word_a), self._word_synsets(word_b))

    def sap(self, word_a: str, word_b: str) -> Optional[str]:
        """두 단어의 최단 공통 조상 synset 이름"""
        ancestor = self.shortest_common_ancestor(self._word_synsets(word_a), self._word_synsets(word_b))
        return self.synset_name(ancestor) if ancestor is not None else None

    def senses_intersect(self, word: str, senses: Set[int]) -> bool:
        """단어의 synset 중 하나라도 주어진 sense 집합에 속하는지"""
        return any(index in senses for index in self.synsets_of(word))
