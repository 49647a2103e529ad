"""
Mowen Errors
墨问(Mowen) MCP 서버 예외 계층 정의

모든 예외는 MowenError를 상속하므로 한 번에 잡을 수 있습니다.
각 계층(클라이언트 → 디스패처)은 with_prefix()로 짧은 작업 접두사를 붙여
다시 raise 합니다. 예외 클래스와 context는 그대로 유지됩니다.
"""

from typing import Any, Dict, Optional


class MowenError(Exception):
    """Mowen 기본 예외"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def _clone(self, message: str) -> "MowenError":
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.message = message
        clone.args = (message,)
        return clone

    def with_prefix(self, prefix: str) -> "MowenError":
        """
        동일한 타입/context를 가진 예외를 접두사 메시지로 생성

        Args:
            prefix: 작업 식별 접두사 (예: "failed to create note")

        Returns:
            "{prefix}: {message}" 메시지를 가진 새 예외
        """
        return self._clone(f"{prefix}: {self.message}")


class ConfigurationError(MowenError):
    """설정 오류 (API 키 누락 등) - 시작 시점에 치명적"""
    pass


class ArgumentError(MowenError):
    """도구 인자 디코딩 실패 - 네트워크 호출 전에 거부"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        if not message.startswith("invalid arguments"):
            message = f"invalid arguments: {message}"
        super().__init__(message, context)


class TransportError(MowenError):
    """네트워크 오류, 타임아웃, 연결 실패"""
    pass


class BackendError(MowenError):
    """200 이외의 HTTP 상태 또는 디코딩 불가능한 응답 본문"""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_status(cls, status_code: int, body: str) -> "BackendError":
        return cls(
            f"API request failed with status {status_code}: {body}",
            status_code=status_code,
            body=body,
        )


class MissingFieldError(MowenError):
    """응답 매핑에서 필드가 없거나 타입이 맞지 않음"""

    def __init__(self, field: str, expected: str = "value"):
        super().__init__(
            f"missing {field} in response",
            {"field": field, "expected": expected},
        )
        self.field = field


class UploadProtocolError(MowenError):
    """로컬 파일 업로드 핸드셰이크 실패 (prepare 응답 오류, 파일 열기 실패)"""

    def __init__(self, message: str, step: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.step = step


class ToolExecutionError(MowenError):
    """디스패처 레벨 래퍼 - 실패한 도구 이름을 함께 전달"""

    def __init__(self, message: str, tool_name: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.tool_name = tool_name
