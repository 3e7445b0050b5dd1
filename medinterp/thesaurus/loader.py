"""
WordNet data.* 파일 로더

한 줄 형식:
    offset lex_filenum ss_type w_cnt(16진수) [word lex_id]... p_cnt [ptr offset pos src/tgt]... | gloss
"""

import logging
import re
from pathlib import Path
from typing import Iterator, Union

from ..exceptions import MalformedResourceError
from .models import Pointer, SynsetRecord, WordClass

logger = logging.getLogger(__name__)

# 형용사 통사 표지 제거: long(a), galore(ip)
_ADJ_MARKER = re.compile(r"\((a|p|ip)\)$")


def parse_synset_line(line: str, word_class: WordClass) -> SynsetRecord:
    """data.* 한 줄을 SynsetRecord로 변환

    Args:
        line: 원본 줄
        word_class: 파일의 품사

    Returns:
        SynsetRecord

    Raises:
        ValueError, IndexError: 형식 오류 (호출 측에서 위치 정보와 함께 변환)
    """
    body = line.split("|", 1)[0]
    fields = body.split()

    offset = int(fields[0])
    word_count = int(fields[3], 16)
    pos = 4

    words = []
    for _ in range(word_count):
        words.append(_ADJ_MARKER.sub("", fields[pos]))
        pos += 2

    pointer_count = int(fields[pos])
    pos += 1

    pointers = []
    for _ in range(pointer_count):
        symbol, target_offset, target_pos = fields[pos], fields[pos + 1], fields[pos + 2]
        pointers.append(Pointer(
            symbol=symbol,
            target_offset=int(target_offset),
            target_class=WordClass.from_pos_char(target_pos),
        ))
        pos += 4

    return SynsetRecord(offset=offset, word_class=word_class, words=words, pointers=pointers)


def read_synsets(
    path: Union[str, Path],
    word_class: WordClass,
    header_lines: int = 29,
) -> Iterator[SynsetRecord]:
    """data.* 파일 읽기

    Args:
        path: 파일 경로
        word_class: 파일의 품사
        header_lines: 건너뛸 라이선스 헤더 줄 수

    Yields:
        SynsetRecord

    Raises:
        MalformedResourceError: 해석할 수 없는 줄
    """
    logger.info(f"시소러스 파일 로드: {path} ({word_class.name})")
    count = 0

    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            if line_no <= header_lines or not line.strip():
                continue
            try:
                record = parse_synset_line(line, word_class)
            except (ValueError, IndexError) as e:
                raise MalformedResourceError(f"{path}:{line_no}: synset 레코드 형식 오류 ({e})") from e
            count += 1
            yield record

    logger.info(f"시소러스 파일 로드 완료: {path} ({count} synset)")
