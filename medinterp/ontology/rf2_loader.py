"""
RF2 스냅샷 로더

탭 구분 SNOMED CT 릴리즈 파일(Concept, Relationship, Description)을
pandas로 읽어 활성 레코드만 반환합니다.
"""

import csv
import logging
from pathlib import Path
from typing import Iterator, List, Union

import pandas as pd

from .models import ConceptRecord, RelationshipRecord, DescriptionRecord

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class RF2Loader:
    """RF2 탭 구분 파일 로더"""

    CONCEPT_COLUMNS = [
        "id", "effectiveTime", "active", "moduleId", "definitionStatusId",
    ]
    RELATIONSHIP_COLUMNS = [
        "id", "effectiveTime", "active", "moduleId", "sourceId", "destinationId",
        "relationshipGroup", "typeId", "characteristicTypeId", "modifierId",
    ]
    DESCRIPTION_COLUMNS = [
        "id", "effectiveTime", "active", "moduleId", "conceptId", "languageCode",
        "typeId", "term", "caseSignificanceId",
    ]

    @staticmethod
    def _read(path: PathLike, columns: List[str]) -> pd.DataFrame:
        """헤더 행이 있는 RF2 파일을 문자열 DataFrame으로 읽기"""
        df = pd.read_csv(
            path,
            sep="\t",
            header=0,
            names=columns,
            usecols=range(len(columns)),
            dtype=str,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            encoding="utf-8",
        )
        # 활성(active == "1") 레코드만
        return df[df["active"].str.strip() == "1"]

    @classmethod
    def read_concepts(cls, path: PathLike) -> Iterator[ConceptRecord]:
        """개념 파일 읽기"""
        logger.info(f"개념 파일 로드: {path}")
        df = cls._read(path, cls.CONCEPT_COLUMNS)
        logger.info(f"활성 개념: {len(df)}건")
        for concept_id in df["id"]:
            yield ConceptRecord(id=int(concept_id), active=True)

    @classmethod
    def read_relationships(cls, path: PathLike) -> Iterator[RelationshipRecord]:
        """관계 파일 읽기"""
        logger.info(f"관계 파일 로드: {path}")
        df = cls._read(path, cls.RELATIONSHIP_COLUMNS)
        logger.info(f"활성 관계: {len(df)}건")
        for row in df.itertuples(index=False):
            yield RelationshipRecord(
                id=int(row.id),
                source_id=int(row.sourceId),
                destination_id=int(row.destinationId),
                type_id=int(row.typeId),
                active=True,
                group=int(row.relationshipGroup or 0),
            )

    @classmethod
    def read_descriptions(cls, path: PathLike) -> Iterator[DescriptionRecord]:
        """명칭 파일 읽기"""
        logger.info(f"명칭 파일 로드: {path}")
        df = cls._read(path, cls.DESCRIPTION_COLUMNS)
        logger.info(f"활성 명칭: {len(df)}건")
        for row in df.itertuples(index=False):
            yield DescriptionRecord(
                owner_id=int(row.conceptId),
                term=row.term,
                type_id=int(row.typeId),
                active=True,
            )
