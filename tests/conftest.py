"""공용 테스트 픽스처 (작은 합성 리소스)"""

import pytest

from medinterp.ontology import (
    IS_A_TYPE_ID,
    PREFERRED_NAME_TYPE_ID,
    SYNONYM_TYPE_ID,
    ConceptRecord,
    DescriptionRecord,
    OntologyGraph,
    RelationshipRecord,
)
from medinterp.thesaurus import Pointer, SynsetRecord, ThesaurusGraph, WordClass


# SNOMED CT 개념 ID
ROOT = 138875005
CLINICAL_FINDING = 404684003
FEVER = 386661006
HEADACHE = 25064002
PALPITATION = 80313002
PERSON = 125676002
PATIENT = 116154003
FINDING_SITE = 363698007


def concept_records():
    return [
        ConceptRecord(ROOT),
        ConceptRecord(CLINICAL_FINDING),
        ConceptRecord(FEVER),
        ConceptRecord(HEADACHE),
        ConceptRecord(PALPITATION),
        ConceptRecord(PERSON),
        ConceptRecord(PATIENT),
        ConceptRecord(999999001, active=False),
    ]


def relationship_records():
    return [
        RelationshipRecord(1, CLINICAL_FINDING, ROOT, IS_A_TYPE_ID),
        RelationshipRecord(2, PERSON, ROOT, IS_A_TYPE_ID),
        RelationshipRecord(3, FEVER, CLINICAL_FINDING, IS_A_TYPE_ID),
        RelationshipRecord(4, HEADACHE, CLINICAL_FINDING, IS_A_TYPE_ID),
        RelationshipRecord(5, PALPITATION, CLINICAL_FINDING, IS_A_TYPE_ID),
        RelationshipRecord(6, PATIENT, PERSON, IS_A_TYPE_ID),
        RelationshipRecord(7, HEADACHE, ROOT, FINDING_SITE, group=1),
        # 비활성 관계는 없는 개념을 참조해도 무시됨
        RelationshipRecord(8, FEVER, 999999001, IS_A_TYPE_ID, active=False),
    ]


def description_records():
    return [
        DescriptionRecord(ROOT, "SNOMED CT Concept", PREFERRED_NAME_TYPE_ID),
        DescriptionRecord(CLINICAL_FINDING, "Clinical finding", PREFERRED_NAME_TYPE_ID),
        DescriptionRecord(FEVER, "Fever", PREFERRED_NAME_TYPE_ID),
        DescriptionRecord(FEVER, "Pyrexia", SYNONYM_TYPE_ID),
        DescriptionRecord(HEADACHE, "Headache", PREFERRED_NAME_TYPE_ID),
        DescriptionRecord(PALPITATION, "Palpitation", PREFERRED_NAME_TYPE_ID),
        DescriptionRecord(PERSON, "Person", PREFERRED_NAME_TYPE_ID),
        # 선호명 없이 동의어만 있는 개념
        DescriptionRecord(PATIENT, "Patient", SYNONYM_TYPE_ID),
        DescriptionRecord(IS_A_TYPE_ID, "Is a", PREFERRED_NAME_TYPE_ID),
        DescriptionRecord(FINDING_SITE, "Finding site", SYNONYM_TYPE_ID),
        DescriptionRecord(FEVER, "Febrile", SYNONYM_TYPE_ID, active=False),
    ]


@pytest.fixture
def ontology():
    """합성 SNOMED CT 그래프"""
    return OntologyGraph.from_records(
        concept_records(),
        relationship_records(),
        description_records(),
    )


# WordNet offset (NOUN)
ENTITY, ABSTRACTION, SYMPTOM, FEVER_N, PAIN, HEADACHE_N, MIGRAINE_FEVER, ISLAND = (
    100, 200, 300, 400, 500, 600, 800, 900,
)
# WordNet offset (VERB, 명사와 같은 offset 사용)
SUFFER_V, FEEL_V = 100, 200


def _hypernym(offset, word_class=WordClass.NOUN):
    return Pointer("@", offset, word_class)


def thesaurus_streams():
    return {
        WordClass.NOUN: [
            SynsetRecord(ENTITY, WordClass.NOUN, ["entity"]),
            SynsetRecord(ABSTRACTION, WordClass.NOUN, ["abstraction"], [_hypernym(ENTITY)]),
            SynsetRecord(SYMPTOM, WordClass.NOUN, ["symptom"], [_hypernym(ABSTRACTION)]),
            # 정방향 참조: PAIN은 아직 읽지 않았음
            SynsetRecord(HEADACHE_N, WordClass.NOUN, ["headache", "cephalalgia"], [_hypernym(PAIN)]),
            SynsetRecord(FEVER_N, WordClass.NOUN, ["fever", "pyrexia", "Febricity"], [
                _hypernym(SYMPTOM),
                Pointer("!", ISLAND, WordClass.NOUN),  # 반의어는 간선 아님
            ]),
            SynsetRecord(PAIN, WordClass.NOUN, ["pain", "hurting"], [
                _hypernym(SYMPTOM),
                Pointer("~", HEADACHE_N, WordClass.NOUN),  # 하위어는 간선 아님
            ]),
            SynsetRecord(MIGRAINE_FEVER, WordClass.NOUN, ["feverish_headache"], [
                _hypernym(FEVER_N),
                _hypernym(HEADACHE_N),
            ]),
            SynsetRecord(ISLAND, WordClass.NOUN, ["island"]),
        ],
        WordClass.VERB: [
            SynsetRecord(SUFFER_V, WordClass.VERB, ["suffer", "have"], [_hypernym(FEEL_V, WordClass.VERB)]),
            SynsetRecord(FEEL_V, WordClass.VERB, ["feel"]),
        ],
    }


@pytest.fixture
def thesaurus():
    """합성 WordNet 그래프"""
    return ThesaurusGraph.from_records(thesaurus_streams())
