"""
시소러스 모듈

WordNet data.* 파일 기반 synset 그래프와 최단 조상 경로 질의를 제공합니다.
"""

from .models import (
    WordClass,
    Pointer,
    SynsetRecord,
    Synset,
    DEFAULT_POINTER_SYMBOLS,
    HYPERNYM_SYMBOLS,
)
from .indexer import SynsetIndexer
from .loader import parse_synset_line, read_synsets
from .graph import ThesaurusGraph, WORD_CLASS_ORDER

__all__ = [
    # Models
    "WordClass",
    "Pointer",
    "SynsetRecord",
    "Synset",
    "DEFAULT_POINTER_SYMBOLS",
    "HYPERNYM_SYMBOLS",
    # Indexer / Loader
    "SynsetIndexer",
    "parse_synset_line",
    "read_synsets",
    # Graph
    "ThesaurusGraph",
    "WORD_CLASS_ORDER",
]
