"""ThesaurusGraph 단위 테스트"""

import random
from collections import deque

import pytest

from medinterp.exceptions import InvalidArgumentError
from medinterp.thesaurus import Pointer, SynsetIndexer, SynsetRecord, ThesaurusGraph, WordClass

from conftest import (
    ABSTRACTION,
    ENTITY,
    FEEL_V,
    FEVER_N,
    HEADACHE_N,
    ISLAND,
    MIGRAINE_FEVER,
    PAIN,
    SUFFER_V,
    SYMPTOM,
)


def _noun(graph, offset):
    return graph.index_of(offset, WordClass.NOUN)


def _bfs_distances(graph, start):
    """단일 시작점 BFS 거리 (브루트포스 검증용)"""
    dist = {start: 0}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        for neighbor in graph.neighbors(node):
            if neighbor not in dist:
                dist[neighbor] = dist[node] + 1
                queue.append(neighbor)
    return dist


def _brute_force_sap(graph, v_set, w_set):
    """모든 (v, w, 공통 조상) 조합의 최소 거리 합"""
    best = None
    for v in v_set:
        dv = _bfs_distances(graph, v)
        for w in w_set:
            dw = _bfs_distances(graph, w)
            for ancestor in set(dv) & set(dw):
                total = dv[ancestor] + dw[ancestor]
                if best is None or total < best:
                    best = total
    return best


def _random_graph(rng, size, edge_count):
    records = []
    for offset in range(size):
        targets = rng.sample(range(size), k=min(size, rng.randint(0, edge_count)))
        pointers = [Pointer("@", target, WordClass.NOUN) for target in targets if target != offset]
        records.append(SynsetRecord(offset, WordClass.NOUN, [f"w{offset}"], pointers))
    # 파일 순서와 발견 순서가 다르도록 섞음
    rng.shuffle(records)
    return ThesaurusGraph.from_records({WordClass.NOUN: records})


class TestIndexer:
    """SynsetIndexer 테스트"""

    def test_dense_and_stable(self):
        """처음 본 순서로 밀집 인덱스"""
        indexer = SynsetIndexer()
        assert indexer.get_index(500, WordClass.NOUN) == 0
        assert indexer.get_index(100, WordClass.NOUN) == 1
        assert indexer.get_index(500, WordClass.NOUN) == 0
        assert len(indexer) == 2

    def test_scoped_per_word_class(self):
        """같은 offset도 품사가 다르면 다른 인덱스"""
        indexer = SynsetIndexer()
        noun = indexer.get_index(100, WordClass.NOUN)
        verb = indexer.get_index(100, WordClass.VERB)
        assert noun != verb
        assert indexer.key_of(verb) == (100, WordClass.VERB)
        assert indexer.find(100, WordClass.ADV) is None


class TestConstruction:
    """그래프 구성 테스트"""

    def test_forward_reference(self, thesaurus):
        """아직 읽지 않은 synset을 가리키는 포인터"""
        headache = _noun(thesaurus, HEADACHE_N)
        pain = _noun(thesaurus, PAIN)
        assert thesaurus.neighbors(headache) == [pain]
        assert thesaurus.synset(pain).words == ("pain", "hurting")

    def test_unrecognized_pointers_ignored(self, thesaurus):
        """반의어/하위어 포인터는 간선 아님"""
        assert thesaurus.neighbors(_noun(thesaurus, FEVER_N)) == [_noun(thesaurus, SYMPTOM)]
        assert thesaurus.neighbors(_noun(thesaurus, PAIN)) == [_noun(thesaurus, SYMPTOM)]

    def test_unrecognized_forward_pointer_keeps_indices(self):
        """인식하지 않는 포인터가 가리키는 미확인 synset은 인덱스 순서에 영향 없음"""
        graph = ThesaurusGraph.from_records({WordClass.NOUN: [
            SynsetRecord(1, WordClass.NOUN, ["a"], [Pointer("!", 3, WordClass.NOUN)]),
            SynsetRecord(2, WordClass.NOUN, ["b"]),
            SynsetRecord(3, WordClass.NOUN, ["c"]),
        ]})
        assert [graph.synsets_of(word) for word in ("a", "b", "c")] == [[0], [1], [2]]
        assert graph.neighbors(0) == []

    def test_recognized_forward_pointer_allocates_target(self):
        """인식된 포인터의 대상은 포인터를 읽을 때 인덱스 부여"""
        graph = ThesaurusGraph.from_records({WordClass.NOUN: [
            SynsetRecord(1, WordClass.NOUN, ["a"], [Pointer("@", 3, WordClass.NOUN)]),
            SynsetRecord(2, WordClass.NOUN, ["b"]),
            SynsetRecord(3, WordClass.NOUN, ["c"]),
        ]})
        assert [graph.synsets_of(word) for word in ("a", "b", "c")] == [[0], [2], [1]]
        assert graph.parents(0) == [1]

    def test_dangling_reference(self):
        """레코드가 없는 대상은 None synset"""
        graph = ThesaurusGraph.from_records({
            WordClass.NOUN: [SynsetRecord(1, WordClass.NOUN, ["orphan"], [Pointer("@", 2, WordClass.NOUN)])],
        })
        target = graph.index_of(2, WordClass.NOUN)
        assert graph.synset(target) is None
        assert graph.synset_name(target) == ""
        assert graph.distance("orphan", "orphan") == 0

    def test_custom_pointer_symbols(self):
        """포인터 기호 설정"""
        records = {WordClass.NOUN: [
            SynsetRecord(1, WordClass.NOUN, ["a"], [Pointer("!", 2, WordClass.NOUN)]),
            SynsetRecord(2, WordClass.NOUN, ["b"]),
        ]}
        assert ThesaurusGraph.from_records(records).shortest_ancestral_path_length([0], [1]) is None
        assert ThesaurusGraph.from_records(records, pointer_symbols=["!"]).shortest_ancestral_path_length([0], [1]) == 1

    def test_statistics(self, thesaurus):
        stats = thesaurus.statistics()
        assert stats["synsets"] == 10
        assert stats["edges"] == 8


class TestWords:
    """단어 조회 테스트"""

    def test_synsets_of(self, thesaurus):
        """정확히 일치 → 소문자 순"""
        assert thesaurus.synsets_of("fever") == [_noun(thesaurus, FEVER_N)]
        assert thesaurus.synsets_of("FEVER") == [_noun(thesaurus, FEVER_N)]
        assert thesaurus.synsets_of("febricity") == [_noun(thesaurus, FEVER_N)]
        assert thesaurus.synsets_of("unknown") == []

    def test_is_word(self, thesaurus):
        assert thesaurus.is_word("suffer")
        assert not thesaurus.is_word("sufferer")

    def test_search_keys(self, thesaurus):
        """완전 일치가 파생어보다 먼저"""
        assert thesaurus.search_keys("fever") == ["fever", "feverish_headache"]
        assert thesaurus.search_keys("xyz") == []

    def test_senses_intersect(self, thesaurus):
        assert thesaurus.senses_intersect("have", {thesaurus.index_of(SUFFER_V, WordClass.VERB)})
        assert not thesaurus.senses_intersect("fever", {thesaurus.index_of(SUFFER_V, WordClass.VERB)})


class TestShortestAncestralPath:
    """SAP 테스트"""

    def test_word_distance(self, thesaurus):
        """fever(→symptom 1) + headache(→pain→symptom 2) = 3"""
        assert thesaurus.distance("fever", "headache") == 3
        assert thesaurus.sap("fever", "headache") == "symptom"

    def test_same_word(self, thesaurus):
        assert thesaurus.distance("fever", "pyrexia") == 0
        assert thesaurus.sap("fever", "pyrexia") == "fever pyrexia Febricity"

    def test_ancestor_in_set(self, thesaurus):
        """한 쪽이 다른 쪽의 조상"""
        assert thesaurus.distance("feverish_headache", "fever") == 1
        assert thesaurus.shortest_common_ancestor(
            [_noun(thesaurus, MIGRAINE_FEVER)], [_noun(thesaurus, ENTITY)]
        ) == _noun(thesaurus, ENTITY)

    def test_sets(self, thesaurus):
        """집합 중 최소"""
        v = [_noun(thesaurus, HEADACHE_N), _noun(thesaurus, FEVER_N)]
        w = [_noun(thesaurus, ABSTRACTION)]
        assert thesaurus.shortest_ancestral_path_length(v, w) == 2

    def test_no_path(self, thesaurus):
        """연결되지 않으면 None"""
        assert thesaurus.distance("island", "fever") is None
        assert thesaurus.sap("island", "fever") is None
        # 품사가 달라 연결 없음
        assert thesaurus.distance("feel", "fever") is None

    def test_empty_set(self, thesaurus):
        assert thesaurus.shortest_ancestral_path_length([], [0]) is None
        assert thesaurus.shortest_common_ancestor([0], []) is None

    def test_out_of_range(self, thesaurus):
        with pytest.raises(InvalidArgumentError):
            thesaurus.shortest_ancestral_path_length([0], [len(thesaurus)])
        with pytest.raises(InvalidArgumentError):
            thesaurus.shortest_ancestral_path_length([-1], [0])

    def test_unknown_word(self, thesaurus):
        with pytest.raises(InvalidArgumentError):
            thesaurus.distance("fever", "unknownword")

    def test_brute_force_cross_check(self):
        """작은 무작위 그래프에서 브루트포스와 일치"""
        rng = random.Random(7)
        for _ in range(30):
            size = rng.randint(2, 14)
            graph = _random_graph(rng, size, edge_count=3)
            for _ in range(10):
                v_set = rng.sample(range(len(graph)), k=min(len(graph), rng.randint(1, 3)))
                w_set = rng.sample(range(len(graph)), k=min(len(graph), rng.randint(1, 3)))
                expected = _brute_force_sap(graph, v_set, w_set)
                assert graph.shortest_ancestral_path_length(v_set, w_set) == expected

                ancestor = graph.shortest_common_ancestor(v_set, w_set)
                if expected is None:
                    assert ancestor is None
                else:
                    dv = min(_bfs_distances(graph, v).get(ancestor, 10 ** 9) for v in v_set)
                    dw = min(_bfs_distances(graph, w).get(ancestor, 10 ** 9) for w in w_set)
                    assert dv + dw == expected

    def test_cycle_terminates(self):
        """순환 그래프에서도 종료"""
        graph = ThesaurusGraph.from_records({WordClass.NOUN: [
            SynsetRecord(1, WordClass.NOUN, ["a"], [Pointer("@", 2, WordClass.NOUN)]),
            SynsetRecord(2, WordClass.NOUN, ["b"], [Pointer("@", 3, WordClass.NOUN)]),
            SynsetRecord(3, WordClass.NOUN, ["c"], [Pointer("@", 1, WordClass.NOUN)]),
        ]})
        assert graph.distance("a", "c") == 1


class TestHierarchy:
    """parents / paths_to_root 테스트"""

    def test_parents(self, thesaurus):
        assert thesaurus.parents(_noun(thesaurus, FEVER_N)) == [_noun(thesaurus, SYMPTOM)]
        assert thesaurus.parents(_noun(thesaurus, ENTITY)) == []

    def test_paths_to_root_multiple_parents(self, thesaurus):
        """다중 상위어면 경로 여러 개"""
        def n(offset):
            return _noun(thesaurus, offset)

        paths = thesaurus.paths_to_root(n(MIGRAINE_FEVER))
        assert sorted(map(tuple, paths)) == sorted([
            (n(MIGRAINE_FEVER), n(FEVER_N), n(SYMPTOM), n(ABSTRACTION), n(ENTITY)),
            (n(MIGRAINE_FEVER), n(HEADACHE_N), n(PAIN), n(SYMPTOM), n(ABSTRACTION), n(ENTITY)),
        ])

    def test_verb_hierarchy(self, thesaurus):
        suffer = thesaurus.index_of(SUFFER_V, WordClass.VERB)
        feel = thesaurus.index_of(FEEL_V, WordClass.VERB)
        assert thesaurus.paths_to_root(suffer) == [[suffer, feel]]
        assert thesaurus.paths_to_root(_noun(thesaurus, ISLAND)) == [[_noun(thesaurus, ISLAND)]]
