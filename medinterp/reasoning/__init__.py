"""
추론 모듈

리소스 바인딩, 트리플렛 채점, 채택 결과 누적, 문서 해석 파이프라인을 제공합니다.
"""

from .resource_bindings import ResourceBinding, ResourceBindings
from .engine import ReasoningEngine, SlotEvaluation, TripletEvaluation
from .model import ModelAccumulator, DEFAULT_THRESHOLD
from .analyzer import InterpretationPipeline, create_pipeline

__all__ = [
    # Bindings
    "ResourceBinding",
    "ResourceBindings",
    # Engine
    "ReasoningEngine",
    "SlotEvaluation",
    "TripletEvaluation",
    # Model
    "ModelAccumulator",
    "DEFAULT_THRESHOLD",
    # Pipeline
    "InterpretationPipeline",
    "create_pipeline",
]
