"""
UMLS CUI 매핑

MRCONSO.RRF에서 SNOMED CT 개념 ID → UMLS CUI 매핑을 만들고,
문서에서 발견한 개념들을 CUI 목록 파일로 내보냅니다 (평가용).
"""

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

# MRCONSO.RRF 컬럼 (행 끝의 '|' 때문에 빈 컬럼이 하나 더 있음)
MRCONSO_COLUMNS = [
    "CUI", "LAT", "TS", "LUI", "STT", "SUI", "ISPREF", "AUI", "SAUI",
    "SCUI", "SDUI", "SAB", "TTY", "CODE", "STR", "SRL", "SUPPRESS", "CVF",
]


class UmlsMapper:
    """SNOMED CT 개념 ID → CUI"""

    CHUNK_SIZE = 500_000

    def __init__(self, mapping: Optional[Dict[int, str]] = None):
        self._mapping: Dict[int, str] = dict(mapping or {})
        self.conflicts = 0

    @classmethod
    def from_file(cls, path: Union[str, Path], source_prefix: str = "SNOMEDCT") -> "UmlsMapper":
        """MRCONSO.RRF 로드

        ISPREF가 'N'이거나 TS가 'P'인 행은 건너뛰고, SAB가 source_prefix로
        시작하는 행만 사용합니다. 같은 개념이 여러 번 나오면 마지막 행이 우선합니다.

        Args:
            path: MRCONSO.RRF 경로
            source_prefix: 사용할 소스 약어 접두어

        Returns:
            UmlsMapper
        """
        logger.info(f"UMLS MRCONSO 로드: {path}")
        mapper = cls()

        reader = pd.read_csv(
            path,
            sep="|",
            header=None,
            usecols=[0, 2, 6, 9, 11],
            names=MRCONSO_COLUMNS + ["_"],
            dtype=str,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            chunksize=cls.CHUNK_SIZE,
            encoding="utf-8",
        )

        for chunk in reader:
            chunk = chunk[
                (chunk["ISPREF"] != "N")
                & (chunk["TS"] != "P")
                & chunk["SAB"].str.startswith(source_prefix)
                & chunk["SCUI"].str.isdigit()
            ]
            for scui, cui in zip(chunk["SCUI"], chunk["CUI"]):
                mapper._add(int(scui), cui)

        if mapper.conflicts:
            logger.warning(f"서로 다른 CUI로 중복 매핑된 개념: {mapper.conflicts}건 (마지막 값 사용)")
        logger.info(f"UMLS 매핑 로드 완료: {len(mapper)}개 개념")
        return mapper

    def _add(self, concept_id: int, cui: str) -> None:
        previous = self._mapping.get(concept_id)
        if previous is not None and previous != cui:
            self.conflicts += 1
        self._mapping[concept_id] = cui

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, concept_id: int) -> bool:
        return concept_id in self._mapping

    def cui_of(self, concept_id: int) -> Optional[str]:
        return self._mapping.get(concept_id)

    def map_concepts(self, concept_ids: Iterable[int]) -> List[str]:
        """매핑 가능한 개념들의 CUI (입력 순서, 매핑 없는 개념은 제외)"""
        cuis = []
        missing = 0
        for concept_id in concept_ids:
            cui = self._mapping.get(concept_id)
            if cui is None:
                missing += 1
                continue
            cuis.append(cui)
        if missing:
            logger.debug(f"CUI 매핑 없는 개념: {missing}개")
        return cuis


def write_extracted_cuis(
    path: Union[str, Path],
    concept_ids: Iterable[int],
    mapper: UmlsMapper,
) -> List[str]:
    """발견한 개념들의 CUI를 공백으로 구분해 파일로 저장

    Returns:
        저장한 CUI 목록
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    cuis = mapper.map_concepts(concept_ids)
    with open(path, "w", encoding="utf-8") as f:
        f.write(" ".join(cuis))

    logger.info(f"CUI 저장 완료: {path} ({len(cuis)}개)")
    return cuis
