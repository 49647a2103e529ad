"""
Mowen Service - MowenClient Facade
MCP 도구 6개 라우팅

인자 디코딩 → 요청 구성 → API 호출 → 사람이 읽을 수 있는 요약 텍스트
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .mowen_client import MowenClient
from .mowen_config import MowenSettings
from .mowen_errors import ArgumentError, MowenError, ToolExecutionError
from .mowen_request_builder import (
    build_create_request,
    build_edit_request,
    build_local_upload_request,
    build_privacy_request,
    build_reset_request,
    build_upload_via_url_request,
)
from .mowen_response import MowenResponse
from .mowen_types import (
    CreateNoteArgs,
    EditNoteArgs,
    ResetAPIKeyArgs,
    SetNotePrivacyArgs,
    UploadFileArgs,
    UploadFileViaURLArgs,
)

logger = logging.getLogger(__name__)

ToolArguments = Union[bytes, str, Dict[str, Any], None]
ArgsModel = TypeVar("ArgsModel", bound=BaseModel)


def decode_arguments(model: Type[ArgsModel], arguments: ToolArguments) -> ArgsModel:
    """
    도구 인자 디코딩

    Args:
        model: 인자 Pydantic 모델
        arguments: 원시 JSON 바이트/문자열 또는 이미 파싱된 dict (None은 빈 인자)

    Returns:
        검증된 인자 모델

    Raises:
        ArgumentError: JSON 형식 오류, 필수 필드 누락, 타입 불일치
    """
    try:
        if arguments is None:
            return model.model_validate({})
        if isinstance(arguments, (bytes, bytearray, str)):
            return model.model_validate_json(arguments)
        return model.model_validate(arguments)
    except ValidationError as e:
        raise ArgumentError(f"invalid arguments: {e}") from e


def format_response(headline: str, response: MowenResponse, notice: Optional[str] = None) -> str:
    """성공 응답 요약 텍스트 생성"""
    parts = [headline]
    if notice:
        parts.append(notice)
    parts.append(f"응답 상세:\n{response.to_text()}")
    return "\n\n".join(parts)


class MowenService:
    """
    MowenClient의 Facade (도구 디스패처)

    - 도구별 인자 검증 (네트워크 호출 전)
    - 요청 구성 후 클라이언트에 위임
    - 실패 시 도구별 접두사를 붙여 그대로 전파 (재시도 없음)
    """

    def __init__(
        self,
        client: Optional[MowenClient] = None,
        settings: Optional[MowenSettings] = None,
    ):
        self._client = client
        self._settings = settings
        self._initialized = False
        self._tools: Dict[str, Callable[[ToolArguments], Awaitable[str]]] = {
            "create_note": self.create_note,
            "edit_note": self.edit_note,
            "set_note_privacy": self.set_note_privacy,
            "reset_api_key": self.reset_api_key,
            "upload_file": self.upload_file,
            "upload_file_via_url": self.upload_file_via_url,
        }

    async def initialize(self) -> bool:
        """서비스 초기화"""
        if self._initialized:
            return True

        if self._client is None:
            self._client = MowenClient.from_settings(self._settings)

        if await self._client.initialize():
            self._initialized = True
            logger.info("MowenService initialized")
            return True
        return False

    def _ensure_initialized(self):
        """초기화 확인"""
        if not self._initialized or not self._client:
            raise RuntimeError("MowenService not initialized. Call initialize() first.")

    async def close(self):
        """리소스 정리"""
        if self._client:
            await self._client.close()
            self._client = None
        self._initialized = False

    @property
    def tool_names(self):
        return list(self._tools)

    async def call_tool(self, name: str, arguments: ToolArguments = None) -> str:
        """
        이름으로 도구 실행

        Args:
            name: 도구 이름
            arguments: 도구 인자

        Returns:
            요약 텍스트
        """
        handler = self._tools.get(name)
        if handler is None:
            raise ToolExecutionError(f"Unknown tool: {name}", tool_name=name)
        return await handler(arguments)

    async def _execute(
        self,
        operation: str,
        call: Callable[[], Awaitable[MowenResponse]],
    ) -> MowenResponse:
        self._ensure_initialized()
        try:
            return await call()
        except MowenError as e:
            logger.error(f"{operation}: {e.message}")
            raise e.with_prefix(f"failed to {operation}") from e

    # ========================================================================
    # 노트 도구
    # ========================================================================

    async def create_note(self, arguments: ToolArguments) -> str:
        """create_note: 새 노트 생성"""
        args = decode_arguments(CreateNoteArgs, arguments)
        request = build_create_request(args)
        result = await self._execute("create note", lambda: self._client.create_note(request))
        return format_response("노트 생성 성공!", result)

    async def edit_note(self, arguments: ToolArguments) -> str:
        """edit_note: 기존 노트 본문 교체"""
        args = decode_arguments(EditNoteArgs, arguments)
        request = build_edit_request(args)
        result = await self._execute("edit note", lambda: self._client.edit_note(request))
        return format_response("노트 편집 성공!", result)

    async def set_note_privacy(self, arguments: ToolArguments) -> str:
        """set_note_privacy: 노트 공개 범위 설정"""
        args = decode_arguments(SetNotePrivacyArgs, arguments)
        request = build_privacy_request(args)
        result = await self._execute(
            "set note privacy", lambda: self._client.set_note_privacy(request)
        )
        return format_response("노트 공개 범위 설정 성공!", result)

    async def reset_api_key(self, arguments: ToolArguments = None) -> str:
        """reset_api_key: API 키 재설정"""
        args = decode_arguments(ResetAPIKeyArgs, arguments)
        request = build_reset_request(args)
        result = await self._execute("reset API key", lambda: self._client.reset_api_key(request))
        return format_response(
            "API 키 재설정 성공!",
            result,
            notice="⚠️ 주의: 이 작업으로 현재 키는 즉시 무효화됩니다",
        )

    # ========================================================================
    # 파일 업로드 도구
    # ========================================================================

    async def upload_file(self, arguments: ToolArguments) -> str:
        """upload_file: 로컬 파일 업로드 (prepare → multipart POST)"""
        args = decode_arguments(UploadFileArgs, arguments)
        request = build_local_upload_request(args)
        result = await self._execute("upload file", lambda: self._client.upload_file(request))
        return format_response("파일 업로드 성공!", result)

    async def upload_file_via_url(self, arguments: ToolArguments) -> str:
        """upload_file_via_url: URL 기반 파일 업로드"""
        args = decode_arguments(UploadFileViaURLArgs, arguments)
        request = build_upload_via_url_request(args)
        result = await self._execute(
            "upload file via URL", lambda: self._client.upload_file_via_url(request)
        )
        return format_response("URL 파일 업로드 성공!", result)
