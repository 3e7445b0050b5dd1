"""
온톨로지 모듈

SNOMED CT RF2 스냅샷 기반 개념 그래프를 제공합니다.

사용 예시:
    from medinterp.ontology import OntologyGraph

    graph = OntologyGraph.from_files(concepts, relationships, descriptions)
    graph.ancestors_via_hierarchy(386661006)
"""

from .models import (
    IS_A_TYPE_ID,
    PREFERRED_NAME_TYPE_ID,
    SYNONYM_TYPE_ID,
    SearchMethod,
    ConceptRecord,
    RelationshipRecord,
    DescriptionRecord,
    Concept,
    RelationEdge,
    Nomenclature,
)
from .rf2_loader import RF2Loader
from .graph import OntologyGraph

__all__ = [
    # Constants
    "IS_A_TYPE_ID",
    "PREFERRED_NAME_TYPE_ID",
    "SYNONYM_TYPE_ID",
    "SearchMethod",
    # Records
    "ConceptRecord",
    "RelationshipRecord",
    "DescriptionRecord",
    # Models
    "Concept",
    "RelationEdge",
    "Nomenclature",
    # Loader / Graph
    "RF2Loader",
    "OntologyGraph",
]
