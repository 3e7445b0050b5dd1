"""공용 유틸리티"""

from .levenshtein import distance, normalized_distance

__all__ = ["distance", "normalized_distance"]
