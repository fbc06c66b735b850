"""
네이버 API MCP 서버 예외 정의
"""

from typing import List, Optional


class NaverMcpError(Exception):
    """모든 서버 예외의 기본 클래스"""


class ConfigurationError(NaverMcpError):
    """인증 정보 누락 등 설정 오류 (서버 시작 시 치명적)"""


class ValidationError(NaverMcpError):
    """
    도구 인자 검증 실패

    Args:
        violations: 위반된 제약 조건 목록 (첫 번째 위반만이 아닌 전체)
    """

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__("입력값 검증 실패\n" + "\n".join(f"- {v}" for v in self.violations))


class UpstreamApiError(NaverMcpError):
    """네이버 API 가 2xx 이외의 상태 코드를 반환한 경우"""

    def __init__(self, status_code: int, payload: str):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"네이버 API 오류: {status_code} - {payload}")


class TransportError(NaverMcpError):
    """DNS, 타임아웃, 연결 끊김 등 네트워크 수준 오류"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(f"네이버 API 요청 중 오류 발생: {message}")


class ResponseFormatError(NaverMcpError):
    """2xx 응답이지만 본문이 예상한 형식이 아닌 경우"""

    def __init__(self, message: str, payload: str = ""):
        self.payload = payload
        super().__init__(f"네이버 API 응답 형식 오류: {message}")
