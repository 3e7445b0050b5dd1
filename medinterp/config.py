"""
프로젝트 설정 관리 모듈

환경변수(.env)와 설정 파일(configs/settings.yaml)을 통합 로딩하여
타입 안전한 설정 객체를 제공합니다.

사용 예시:
    from medinterp.config import get_settings
    settings = get_settings()
    print(settings.ontology.levenshtein_threshold)
"""

import logging
import os
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import yaml
from dotenv import load_dotenv


# 프로젝트 루트 디렉토리
PROJECT_ROOT = Path(__file__).parent.parent

logger = logging.getLogger(__name__)


@dataclass
class OntologySettings:
    """온톨로지(SNOMED CT) 설정"""
    is_a_type_id: int = 116680003  # is-a 관계 타입
    preferred_name_type_id: int = 900000000000003001  # FSN
    synonym_type_id: int = 900000000000013009
    levenshtein_threshold: float = 0.1  # 정규화 편집거리 상한 (미만이어야 매칭)
    skip_orphan_names: bool = False  # 소유자 없는 명칭 레코드 무시 여부


@dataclass
class ThesaurusSettings:
    """시소러스(WordNet) 설정"""
    header_lines: int = 29  # 라이선스 헤더 줄 수
    pointer_symbols: List[str] = field(default_factory=lambda: [
        "@", "@i", "#m", "#s", "#p", "&", "^", "$", "=", "+", "\\", "*", ">",
    ])


@dataclass
class ReasoningSettings:
    """추론 엔진 설정"""
    threshold: float = 0.75  # 트리플렛 채택 임계값


@dataclass
class LoggingSettings:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class PathSettings:
    """경로 설정

    상대 경로는 resources_dir 기준으로 해석됩니다.
    """
    project_root: Path = field(default_factory=lambda: PROJECT_ROOT)
    resources_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "data" / "resources")
    configs_dir: Path = field(default_factory=lambda: PROJECT_ROOT / "configs")
    snomed_concepts: Path = Path("snomed/sct2_Concept_Snapshot.txt")
    snomed_relationships: Path = Path("snomed/sct2_Relationship_Snapshot.txt")
    snomed_descriptions: Path = Path("snomed/sct2_Description_Snapshot.txt")
    wordnet_noun: Path = Path("wordnet/data.noun")
    wordnet_verb: Path = Path("wordnet/data.verb")
    wordnet_adv: Path = Path("wordnet/data.adv")
    wordnet_adj: Path = Path("wordnet/data.adj")
    patterns: Path = Path("patterns.txt")
    bindings: Path = Path("mapping.txt")
    umls_mrconso: Path = Path("umls/MRCONSO.RRF")

    def resolve(self, name: str) -> Path:
        """설정된 리소스 경로를 절대 경로로 변환

        Args:
            name: 경로 필드 이름 (예: "patterns")

        Returns:
            resources_dir 기준으로 해석된 경로
        """
        path = Path(getattr(self, name))
        if path.is_absolute():
            return path
        return Path(self.resources_dir) / path


@dataclass
class Settings:
    """
    프로젝트 전체 설정

    환경변수와 설정 파일을 통합하여 관리합니다.
    """
    ontology: OntologySettings = field(default_factory=OntologySettings)
    thesaurus: ThesaurusSettings = field(default_factory=ThesaurusSettings)
    reasoning: ReasoningSettings = field(default_factory=ReasoningSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    paths: PathSettings = field(default_factory=PathSettings)


def _load_yaml_settings(settings_path: Path) -> dict:
    """YAML 설정 파일 로드"""
    if not settings_path.exists():
        return {}

    with open(settings_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _build_section(cls, section: str, values: Dict[str, Any]):
    """YAML 섹션을 설정 데이터클래스로 변환 (알 수 없는 키는 경고 후 무시)"""
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(values) - known)
    for key in unknown:
        logger.warning(f"알 수 없는 설정 키 무시: {section}.{key}")
    return cls(**{k: v for k, v in values.items() if k in known})


def _validate_settings(settings: "Settings") -> None:
    """설정 검증

    리소스 디렉토리가 없거나 임계값이 범위를 벗어나면 경고 로그를 출력합니다.
    """
    warnings = []

    if not Path(settings.paths.resources_dir).exists():
        warnings.append(f"리소스 디렉토리가 없습니다: {settings.paths.resources_dir}")

    if not 0.0 <= settings.ontology.levenshtein_threshold <= 1.0:
        warnings.append(
            f"levenshtein_threshold 범위 오류 (0~1): {settings.ontology.levenshtein_threshold}"
        )

    if not 0.0 <= settings.reasoning.threshold <= 1.0:
        warnings.append(f"reasoning.threshold 범위 오류 (0~1): {settings.reasoning.threshold}")

    for warning in warnings:
        logger.warning(warning)


def _create_settings() -> Settings:
    """설정 객체 생성"""
    # .env 파일 로드
    load_dotenv(PROJECT_ROOT / ".env")

    # YAML 설정 로드
    yaml_config = _load_yaml_settings(PROJECT_ROOT / "configs" / "settings.yaml")

    settings = Settings()

    # YAML 설정 적용
    if "ontology" in yaml_config:
        settings.ontology = _build_section(OntologySettings, "ontology", yaml_config["ontology"])

    if "thesaurus" in yaml_config:
        settings.thesaurus = _build_section(ThesaurusSettings, "thesaurus", yaml_config["thesaurus"])

    if "reasoning" in yaml_config:
        settings.reasoning = _build_section(ReasoningSettings, "reasoning", yaml_config["reasoning"])

    if "logging" in yaml_config:
        settings.logging = _build_section(LoggingSettings, "logging", yaml_config["logging"])

    if "paths" in yaml_config:
        path_values = {k: Path(v) for k, v in yaml_config["paths"].items()}
        settings.paths = _build_section(PathSettings, "paths", path_values)

    # 환경변수 오버라이드
    resources_dir = os.getenv("MEDINTERP_RESOURCES_DIR")
    if resources_dir:
        path = Path(resources_dir)
        settings.paths.resources_dir = path if path.is_absolute() else PROJECT_ROOT / path

    log_level = os.getenv("MEDINTERP_LOG_LEVEL")
    if log_level:
        settings.logging.level = log_level.upper()

    # 설정 검증
    _validate_settings(settings)

    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    설정 객체 반환 (싱글톤)

    처음 호출 시 설정을 로드하고, 이후 호출에서는 캐시된 객체를 반환합니다.

    Returns:
        Settings: 프로젝트 설정 객체

    Example:
        >>> settings = get_settings()
        >>> print(settings.reasoning.threshold)
        0.75
    """
    return _create_settings()


def reload_settings() -> Settings:
    """
    설정 다시 로드

    캐시를 무효화하고 설정을 다시 로드합니다.
    주로 테스트나 동적 설정 변경 시 사용합니다.

    Returns:
        Settings: 새로 로드된 설정 객체
    """
    get_settings.cache_clear()
    return get_settings()


def configure_logging(settings: Settings) -> None:
    """설정에 따라 루트 로거 구성"""
    logging.basicConfig(
        level=getattr(logging, settings.logging.level.upper(), logging.INFO),
        format=settings.logging.format,
    )


if __name__ == "__main__":
    settings = get_settings()
    print("=== Settings Loaded ===")
    print(f"Project Root: {settings.paths.project_root}")
    print(f"Resources Dir: {settings.paths.resources_dir}")
    print(f"Levenshtein Threshold: {settings.ontology.levenshtein_threshold}")
    print(f"Reasoning Threshold: {settings.reasoning.threshold}")
    print(f"WordNet Header Lines: {settings.thesaurus.header_lines}")
