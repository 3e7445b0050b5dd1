"""
편집 거리 (Levenshtein)

삽입/삭제/치환 비용이 모두 1인 편집 거리와 정규화 버전을 제공합니다.
두 행만 유지하는 동적 계획법으로 메모리는 O(min(m, n))입니다.
"""

from typing import Optional

from ..exceptions import InvalidArgumentError


def _check(s1: Optional[str], s2: Optional[str]) -> None:
    if s1 is None or s2 is None:
        raise InvalidArgumentError("편집 거리 입력 문자열이 없습니다 (None)")


def distance(s1: str, s2: str) -> int:
    """두 문자열 사이의 편집 거리

    Args:
        s1: 첫 번째 문자열
        s2: 두 번째 문자열

    Returns:
        최소 편집 횟수

    Raises:
        InvalidArgumentError: 입력이 None인 경우
    """
    _check(s1, s2)
    if s1 == s2:
        return 0

    # a가 짧은 쪽
    a, b = (s1, s2) if len(s1) <= len(s2) else (s2, s1)
    if not a:
        return len(b)

    prev = list(range(len(a) + 1))
    for j, cb in enumerate(b, start=1):
        cur = [j] + [0] * len(a)
        for i, ca in enumerate(a, start=1):
            cost = 0 if ca == cb else 1
            cur[i] = min(prev[i] + 1, cur[i - 1] + 1, prev[i - 1] + cost)
        prev = cur
    return prev[-1]


def normalized_distance(s1: str, s2: str) -> float:
    """긴 문자열 길이로 나눈 편집 거리 (0 = 동일, 1 = 완전히 다름)"""
    _check(s1, s2)
    if s1 == s2:
        return 0.0
    return distance(s1, s2) / max(len(s1), len(s2))
