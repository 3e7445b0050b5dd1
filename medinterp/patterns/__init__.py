"""
구문 패턴 모듈

패턴 트리 컴파일, 구문 트리 매칭, 트리플렛 추출을 제공합니다.

사용 예시:
    from medinterp.patterns import ParseTree, SyntacticalPatternDB

    db = SyntacticalPatternDB.load("data/resources/patterns.txt")
    tree = ParseTree.from_bracketed("(S (NP (NN patient)) (VP (VBZ has) (NP (NN fever))))")
    for matched in db.get_matching_patterns(tree):
        print(matched.pattern, matched.triplets)
"""

from .parse_tree import ParseTree
from .pattern_tree import PatternTree, SlotKind
from .triplet import Triplet
from .syntactical_pattern import SyntacticalPattern, MatchedPattern
from .pattern_db import SyntacticalPatternDB

__all__ = [
    "ParseTree",
    "PatternTree",
    "SlotKind",
    "Triplet",
    "SyntacticalPattern",
    "MatchedPattern",
    "SyntacticalPatternDB",
]
