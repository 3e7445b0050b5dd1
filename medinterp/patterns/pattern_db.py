"""
구문 패턴 DB

패턴 파일을 읽어 컴파일된 패턴 목록을 보관합니다.
형식이 잘못된 줄은 경고 후 건너뛰고 나머지 줄은 계속 읽습니다.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from ..exceptions import MalformedPatternError
from .parse_tree import ParseTree
from .syntactical_pattern import MatchedPattern, SyntacticalPattern

logger = logging.getLogger(__name__)


class SyntacticalPatternDB:
    """구문 패턴 저장소 (로드 후 읽기 전용)"""

    def __init__(self, patterns: Iterable[SyntacticalPattern] = ()):
        self._patterns: List[SyntacticalPattern] = list(patterns)
        self.skipped_lines: List[int] = []

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str = "<memory>") -> "SyntacticalPatternDB":
        """줄 목록에서 패턴 컴파일

        빈 줄과 '#'로 시작하는 줄은 무시합니다.
        """
        db = cls()
        for line_no, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            try:
                db._patterns.append(SyntacticalPattern.parse(stripped))
            except MalformedPatternError as e:
                logger.warning(f"패턴 건너뜀 {source}:{line_no}: {e}")
                db.skipped_lines.append(line_no)
        return db

    @classmethod
    def load(cls, path: Union[str, Path]) -> "SyntacticalPatternDB":
        """패턴 파일 로드

        Args:
            path: 패턴 파일 경로

        Returns:
            SyntacticalPatternDB
        """
        logger.info(f"패턴 파일 로드: {path}")
        with open(path, "r", encoding="utf-8") as f:
            db = cls.from_lines(f, source=str(path))
        logger.info(f"패턴 로드 완료: {len(db)}개 (건너뜀 {len(db.skipped_lines)}줄)")
        return db

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[SyntacticalPattern]:
        return iter(self._patterns)

    @property
    def patterns(self) -> List[SyntacticalPattern]:
        return list(self._patterns)

    def get_matching_patterns(self, parse_tree: ParseTree) -> List[MatchedPattern]:
        """트리플렛을 하나 이상 추출한 패턴만 반환

        Args:
            parse_tree: 구문 트리

        Returns:
            MatchedPattern 목록 (패턴 순서)
        """
        matched = []
        for pattern in self._patterns:
            triplets = pattern.match(parse_tree)
            if triplets:
                logger.debug(f"패턴 매칭: {pattern} → {len(triplets)}개 트리플렛")
                matched.append(MatchedPattern(pattern=pattern, triplets=triplets))
        return matched
