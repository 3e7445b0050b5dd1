"""
평가 모듈

발견한 SNOMED CT 개념을 UMLS CUI로 변환하여 내보냅니다.
"""

from .umls import UmlsMapper, write_extracted_cuis, MRCONSO_COLUMNS

__all__ = [
    "UmlsMapper",
    "write_extracted_cuis",
    "MRCONSO_COLUMNS",
]
