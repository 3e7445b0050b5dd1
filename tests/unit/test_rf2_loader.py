"""RF2Loader 단위 테스트"""

import pytest

from medinterp.ontology import IS_A_TYPE_ID, OntologyGraph, RF2Loader


CONCEPTS = """id\teffectiveTime\tactive\tmoduleId\tdefinitionStatusId
138875005\t20020131\t1\t900000000000207008\t900000000000074008
404684003\t20020131\t1\t900000000000207008\t900000000000074008
386661006\t20020131\t1\t900000000000207008\t900000000000074008
100000001\t20020131\t0\t900000000000207008\t900000000000074008
"""

RELATIONSHIPS = """id\teffectiveTime\tactive\tmoduleId\tsourceId\tdestinationId\trelationshipGroup\ttypeId\tcharacteristicTypeId\tmodifierId
1001\t20020131\t1\t900000000000207008\t404684003\t138875005\t0\t116680003\t900000000000011006\t900000000000451002
1002\t20020131\t1\t900000000000207008\t386661006\t404684003\t0\t116680003\t900000000000011006\t900000000000451002
1003\t20020131\t0\t900000000000207008\t100000001\t404684003\t0\t116680003\t900000000000011006\t900000000000451002
"""

DESCRIPTIONS = """id\teffectiveTime\tactive\tmoduleId\tconceptId\tlanguageCode\ttypeId\tterm\tcaseSignificanceId
2001\t20020131\t1\t900000000000207008\t386661006\ten\t900000000000003001\tFever\t900000000000448009
2002\t20020131\t1\t900000000000207008\t386661006\ten\t900000000000013009\tPyrexia "high" temperature\t900000000000448009
2003\t20020131\t1\t900000000000207008\t404684003\ten\t900000000000003001\tClinical finding\t900000000000448009
2004\t20020131\t0\t900000000000207008\t386661006\ten\t900000000000013009\tFebrile\t900000000000448009
2005\t20020131\t1\t900000000000207008\t116680003\ten\t900000000000003001\tIs a\t900000000000448009
"""


@pytest.fixture
def rf2_files(tmp_path):
    """RF2 스냅샷 파일 3종"""
    paths = {}
    for name, content in [
        ("concepts", CONCEPTS),
        ("relationships", RELATIONSHIPS),
        ("descriptions", DESCRIPTIONS),
    ]:
        path = tmp_path / f"sct2_{name}.txt"
        path.write_text(content, encoding="utf-8")
        paths[name] = path
    return paths


class TestRF2Loader:
    """RF2 레코드 읽기 테스트"""

    def test_read_concepts_active_only(self, rf2_files):
        """활성 개념만"""
        records = list(RF2Loader.read_concepts(rf2_files["concepts"]))
        assert [r.id for r in records] == [138875005, 404684003, 386661006]
        assert all(r.active for r in records)

    def test_read_relationships(self, rf2_files):
        """관계 필드 매핑"""
        records = list(RF2Loader.read_relationships(rf2_files["relationships"]))
        assert len(records) == 2
        first = records[0]
        assert first.source_id == 404684003
        assert first.destination_id == 138875005
        assert first.type_id == IS_A_TYPE_ID
        assert first.group == 0

    def test_read_descriptions_keeps_quotes(self, rf2_files):
        """따옴표가 있는 명칭도 그대로"""
        records = list(RF2Loader.read_descriptions(rf2_files["descriptions"]))
        terms = [r.term for r in records]
        assert 'Pyrexia "high" temperature' in terms
        assert "Febrile" not in terms


class TestGraphFromFiles:
    """파일에서 그래프 구성"""

    def test_from_files(self, rf2_files):
        """RF2 파일로 그래프 구성"""
        graph = OntologyGraph.from_files(
            rf2_files["concepts"],
            rf2_files["relationships"],
            rf2_files["descriptions"],
        )
        assert len(graph) == 3
        assert graph.ancestors_via_hierarchy(386661006) == {386661006, 404684003, 138875005}
        assert graph.fuzzy_concept_search(["fever"]) == [386661006]
        assert graph.relation_name(IS_A_TYPE_ID) == "Is a"
