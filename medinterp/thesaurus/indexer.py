"""
Synset 인덱서

(offset, 품사) 쌍에 밀집 인덱스를 부여합니다. 아직 읽지 않은 synset을
가리키는 포인터도 처음 등장할 때 인덱스를 할당받습니다.
"""

from typing import Dict, List, Optional, Tuple

from .models import WordClass


class SynsetIndexer:
    """(offset, WordClass) ↔ 밀집 인덱스 양방향 매핑"""

    def __init__(self):
        self._index: Dict[Tuple[int, WordClass], int] = {}
        self._keys: List[Tuple[int, WordClass]] = []

    def __len__(self) -> int:
        return len(self._keys)

    def get_index(self, offset: int, word_class: WordClass) -> int:
        """인덱스 조회 (없으면 새로 할당)"""
        key = (offset, word_class)
        index = self._index.get(key)
        if index is None:
            index = len(self._keys)
            self._index[key] = index
            self._keys.append(key)
        return index

    def find(self, offset: int, word_class: WordClass) -> Optional[int]:
        """할당 없이 조회"""
        return self._index.get((offset, word_class))

    def key_of(self, index: int) -> Tuple[int, WordClass]:
        return self._keys[index]
