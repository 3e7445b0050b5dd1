"""
문서 해석 배치 스크립트

구문 트리 파일(한 줄에 괄호 표기 트리 하나)을 읽어 트리플렛을 추출/검증하고
채택된 결과와 발견 개념을 출력합니다.

Usage:
    python scripts/run_interpretation.py data/samples/fever.trees
    python scripts/run_interpretation.py doc.trees --no-thesaurus --output results.json
    python scripts/run_interpretation.py doc.trees --cui-output doc.cui
"""

import sys
import json
import argparse
from pathlib import Path

# 프로젝트 루트를 path에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from medinterp.config import configure_logging, get_settings
from medinterp.evaluation import UmlsMapper, write_extracted_cuis
from medinterp.reasoning import InterpretationPipeline, ModelAccumulator


def print_model_summary(document_id: str, model: ModelAccumulator):
    """해석 결과 요약 출력"""
    print("\n" + "=" * 60)
    print(f"해석 결과: {document_id}")
    print("=" * 60)

    summary = model.summary()
    print(f"\n채택 패턴: {summary['patterns']}개")
    print(f"채택 트리플렛: {summary['triplets']}개 (임계값 {summary['threshold']})")
    print("-" * 40)

    for matched, triplet in model.triplets():
        slots = " / ".join(matched.pattern.slot_names())
        print(f"  - {triplet}  [{slots}]")

    if model.found_ontology_ids:
        print(f"\n발견 개념: {len(model.found_ontology_ids)}개")
        for concept_id in model.found_ontology_ids[:20]:
            print(f"  - {concept_id}")
        if len(model.found_ontology_ids) > 20:
            print(f"  ... 외 {len(model.found_ontology_ids) - 20}개")


def main():
    parser = argparse.ArgumentParser(description="의료 서술문 트리플렛 추출/검증")
    parser.add_argument("trees", type=str, help="괄호 표기 구문 트리 파일 (한 줄에 하나)")
    parser.add_argument("--no-ontology", action="store_true",
                        help="SNOMED CT 그래프를 로드하지 않음")
    parser.add_argument("--no-thesaurus", action="store_true",
                        help="WordNet 그래프를 로드하지 않음")
    parser.add_argument("--output", type=str, default=None,
                        help="결과 JSON 저장 경로")
    parser.add_argument("--cui-output", type=str, default=None,
                        help="발견 개념의 UMLS CUI 저장 경로 (MRCONSO 필요)")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    pipeline = InterpretationPipeline.from_settings(
        settings,
        load_ontology=not args.no_ontology,
        load_thesaurus=not args.no_thesaurus,
    )

    trees_path = Path(args.trees)
    with open(trees_path, "r", encoding="utf-8") as f:
        model = pipeline.analyze_bracketed(f, document_id=trees_path.name)

    print_model_summary(trees_path.name, model)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump({
                "document": trees_path.name,
                "summary": model.summary(),
                "matched_patterns": [m.to_dict() for m in model.matched_patterns],
                "found_ontology_ids": model.found_ontology_ids,
            }, f, indent=2, ensure_ascii=False)
        print(f"\n결과 저장: {output_path}")

    if args.cui_output:
        mapper = UmlsMapper.from_file(settings.paths.resolve("umls_mrconso"))
        cuis = write_extracted_cuis(args.cui_output, model.found_ontology_ids, mapper)
        print(f"CUI 저장: {args.cui_output} ({len(cuis)}개)")


if __name__ == "__main__":
    main()
