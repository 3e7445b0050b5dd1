"""Triplet / MatchedPattern 단위 테스트"""

import pytest

from medinterp.exceptions import InvalidArgumentError, MergeConflictError
from medinterp.patterns import MatchedPattern, SlotKind, SyntacticalPattern, Triplet


class TestTriplet:
    """Triplet 테스트"""

    def test_defaults(self):
        """기본값"""
        t = Triplet.empty()
        assert t.subject is None
        assert t.predicate is None
        assert t.object is None
        assert t.accuracy == 1.0
        assert t.populated_fields() == []

    def test_for_slot(self):
        assert Triplet.for_slot(SlotKind.SUBJECT, ["a"]).subject == ("a",)
        assert Triplet.for_slot(SlotKind.PREDICATE, ["b"]).predicate == ("b",)
        assert Triplet.for_slot(SlotKind.OBJECT, ["c"]).object == ("c",)

    def test_merge_disjoint(self):
        """서로 다른 필드 병합, 정확도는 평균"""
        merged = Triplet(subject=["a"], accuracy=0.5).merge(Triplet(object=["b"], accuracy=1.0))
        assert merged.subject == ("a",)
        assert merged.object == ("b",)
        assert merged.predicate is None
        assert merged.accuracy == pytest.approx(0.75)

    def test_merge_conflict(self):
        """같은 필드를 채운 두 트리플렛 병합은 오류"""
        with pytest.raises(MergeConflictError):
            Triplet(subject=["a"]).merge(Triplet(subject=["b"]))

    def test_merge_with_empty(self):
        """앵커(빈 트리플렛)와 병합"""
        merged = Triplet.empty().merge(Triplet(predicate=["has"]))
        assert merged.predicate == ("has",)
        assert merged.accuracy == 1.0

    def test_merge_does_not_mutate(self):
        left = Triplet(subject=["a"])
        left.merge(Triplet(object=["b"]))
        assert left.object is None

    def test_invalid_words(self):
        """None 단어나 문자열 인자는 오류"""
        with pytest.raises(InvalidArgumentError):
            Triplet(subject=["a", None])
        with pytest.raises(InvalidArgumentError):
            Triplet(object="fever")

    def test_words_are_copied(self):
        words = ["fever"]
        t = Triplet(object=words)
        words.append("x")
        assert t.object == ("fever",)

    def test_words_immutable(self):
        """필드는 튜플, words_for는 사본 리스트"""
        t = Triplet(subject=["a"])
        words = t.words_for(SlotKind.SUBJECT)
        words.append("b")
        assert words == ["a", "b"]
        assert t.subject == ("a",)
        assert t.words_for(SlotKind.OBJECT) is None
        assert isinstance(t.to_dict()["subject"], list)

    def test_str(self):
        t = Triplet(subject=["the", "patient"], object=["fever"])
        assert str(t) == "S[the patient] P[-] O[fever]"

    def test_to_dict(self):
        d = Triplet(subject=["a"]).to_dict()
        assert d == {"subject": ["a"], "predicate": None, "object": None, "accuracy": 1.0}


class TestMatchedPattern:
    """MatchedPattern 테스트"""

    def test_replace_triplets(self):
        pattern = SyntacticalPattern.parse("A B C (NP(X_OBJECT))")
        matched = MatchedPattern(pattern=pattern, triplets=[Triplet(object=["a"]), Triplet(object=["b"])])
        kept = [matched.triplets[1]]
        matched.replace_triplets(kept)
        kept.append(Triplet())
        assert [t.object for t in matched.triplets] == [("b",)]
        assert matched.to_dict()["pattern"] == "A B C (NP(X_OBJECT))"
