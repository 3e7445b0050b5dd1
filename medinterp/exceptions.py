"""
예외 정의

리소스 로드와 질의 과정에서 발생하는 오류를 분류합니다.
내장 예외(ValueError, KeyError)를 함께 상속하므로 호출 측에서
기존 방식대로 처리할 수도 있습니다.
"""


class MedInterpError(Exception):
    """medinterp 예외 기본 클래스"""


class MalformedPatternError(MedInterpError, ValueError):
    """패턴 파일 한 줄을 해석할 수 없음 (필드 수, 괄호 불균형, 빈 라벨)"""


class MissingReferenceError(MedInterpError, KeyError):
    """관계/명칭 레코드가 존재하지 않는 개념 ID를 참조함"""

    def __str__(self) -> str:
        # KeyError는 메시지를 repr로 감싸므로 원문을 그대로 반환
        return str(self.args[0]) if self.args else ""


class UnknownSlotError(MedInterpError, KeyError):
    """바인딩 테이블에 없는 슬롯 이름"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class InvalidArgumentError(MedInterpError, ValueError):
    """필수 인자가 없거나 잘못됨"""


class MergeConflictError(MedInterpError, ValueError):
    """두 부분 트리플렛이 같은 필드를 채우고 있음"""


class MalformedResourceError(MedInterpError, ValueError):
    """리소스 파일(바인딩, 시소러스 등) 형식 오류"""
