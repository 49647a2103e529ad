"""
Mowen API Client
墨问(Mowen) 오픈 API 클라이언트
Bearer API 키 인증 + JSON over HTTP, 로컬 파일 2단계 업로드
"""

import asyncio
import json
import logging
from typing import Optional, Dict, Any

import aiohttp

from .mowen_config import MowenSettings
from .mowen_errors import ConfigurationError, MowenError, TransportError, BackendError
from .mowen_response import MowenResponse
from .mowen_upload import LocalFileUpload
from .mowen_types import (
    KeyResetRequest,
    LocalUploadRequest,
    NoteCreateRequest,
    NoteEditRequest,
    NoteSetRequest,
    UploadViaURLRequest,
)

logger = logging.getLogger(__name__)


class MowenClient:
    """
    墨问 API 클라이언트

    API 키, base URL, 세션(커넥션 풀)은 생성 이후 읽기 전용이므로
    여러 도구 호출이 동시에 같은 인스턴스를 사용해도 됩니다.
    재시도는 하지 않습니다.
    """

    BASE_URL = "https://open.mowen.cn"
    DEFAULT_TIMEOUT = 30.0

    NOTE_CREATE_ENDPOINT = "/api/open/api/v1/note/create"
    NOTE_EDIT_ENDPOINT = "/api/open/api/v1/note/edit"
    NOTE_SET_ENDPOINT = "/api/open/api/v1/note/set"
    KEY_RESET_ENDPOINT = "/api/open/api/v1/auth/key/reset"
    UPLOAD_PREPARE_ENDPOINT = "/api/open/api/v1/upload/prepare"
    UPLOAD_URL_ENDPOINT = "/api/open/api/v1/upload/url"

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        클라이언트 초기화

        Args:
            api_key: 墨问 API 키
            base_url: API base URL
            timeout: 요청당 타임아웃 (초)
            session: 외부에서 주입할 aiohttp 세션 (없으면 initialize()에서 생성)

        Raises:
            ConfigurationError: API 키가 비어 있는 경우
        """
        if not api_key:
            raise ConfigurationError("MOWEN_API_KEY environment variable is required")

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session
        self._owns_session = session is None
        self._initialized = session is not None

    @classmethod
    def from_settings(cls, settings: Optional[MowenSettings] = None) -> "MowenClient":
        """설정(환경 변수)으로부터 클라이언트 생성"""
        settings = settings or MowenSettings()
        return cls(
            api_key=settings.require_api_key(),
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def initialize(self) -> bool:
        """클라이언트 초기화"""
        if self._initialized:
            return True

        self._session = aiohttp.ClientSession()
        self._owns_session = True
        self._initialized = True
        logger.info("MowenClient initialized")
        return True

    async def close(self):
        """리소스 정리"""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None
        self._initialized = False

    async def __aenter__(self) -> "MowenClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    # ========================================================================
    # 공통 요청 처리
    # ========================================================================

    async def post(
        self,
        url: str,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> MowenResponse:
        """
        POST 요청 수행 후 응답 디코딩

        Args:
            url: 전체 URL
            data: 요청 본문 (bytes 또는 aiohttp.FormData)
            headers: 요청 헤더
            timeout: 타임아웃 (초, 없으면 클라이언트 기본값)

        Returns:
            디코딩된 응답

        Raises:
            TransportError: 네트워크 오류/타임아웃
            BackendError: 200 이외의 상태 또는 JSON 객체가 아닌 본문
        """
        if not self._initialized:
            await self.initialize()

        timeout = timeout if timeout is not None else self._timeout

        try:
            async with self._session.post(
                url,
                data=data,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                status = response.status
                raw = await response.read()
        except asyncio.TimeoutError as e:
            logger.error(f"API 요청 타임아웃: {url} ({timeout}s)")
            raise TransportError(
                f"request timed out after {timeout}s", {"url": url}
            ) from e
        except aiohttp.ClientError as e:
            logger.error(f"API 요청 오류: {url} - {str(e)}")
            raise TransportError(f"failed to send request: {e}", {"url": url}) from e

        body = raw.decode("utf-8", errors="replace")

        if status != 200:
            logger.error(f"API 요청 실패: {status} - {body}")
            raise BackendError.from_status(status, body)

        return MowenResponse.from_body(body, status)

    async def request_json(
        self,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> MowenResponse:
        """
        고정 base URL 엔드포인트로 인증된 JSON POST 요청

        Args:
            endpoint: API 엔드포인트 경로
            body: JSON 직렬화할 요청 본문
            timeout: 타임아웃 (초)

        Returns:
            디코딩된 응답
        """
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }
        payload = json.dumps(body, ensure_ascii=False).encode("utf-8") if body is not None else None

        logger.debug(f"POST {endpoint}")
        return await self.post(
            f"{self._base_url}{endpoint}", data=payload, headers=headers, timeout=timeout
        )

    async def _call(
        self,
        operation: str,
        endpoint: str,
        body: Optional[Dict[str, Any]],
        timeout: Optional[float],
    ) -> MowenResponse:
        try:
            return await self.request_json(endpoint, body, timeout=timeout)
        except MowenError as e:
            raise e.with_prefix(operation) from e

    # ========================================================================
    # 노트 관련 메서드
    # ========================================================================

    async def create_note(
        self, request: NoteCreateRequest, timeout: Optional[float] = None
    ) -> MowenResponse:
        """노트 생성"""
        return await self._call(
            "note create request", self.NOTE_CREATE_ENDPOINT, request.to_dict(), timeout
        )

    async def edit_note(
        self, request: NoteEditRequest, timeout: Optional[float] = None
    ) -> MowenResponse:
        """노트 편집 (본문 전체 교체)"""
        return await self._call(
            "note edit request", self.NOTE_EDIT_ENDPOINT, request.to_dict(), timeout
        )

    async def set_note_privacy(
        self, request: NoteSetRequest, timeout: Optional[float] = None
    ) -> MowenResponse:
        """노트 공개 범위 설정"""
        return await self._call(
            "note set request", self.NOTE_SET_ENDPOINT, request.to_dict(), timeout
        )

    async def reset_api_key(
        self, request: Optional[KeyResetRequest] = None, timeout: Optional[float] = None
    ) -> MowenResponse:
        """API 키 재설정 (현재 키는 즉시 무효화됨)"""
        request = request or KeyResetRequest()
        return await self._call(
            "key reset request", self.KEY_RESET_ENDPOINT, request.to_dict(), timeout
        )

    # ========================================================================
    # 파일 업로드 메서드
    # ========================================================================

    async def upload_file_via_url(
        self, request: UploadViaURLRequest, timeout: Optional[float] = None
    ) -> MowenResponse:
        """URL 기반 파일 업로드"""
        return await self._call(
            "upload via url request", self.UPLOAD_URL_ENDPOINT, request.to_dict(), timeout
        )

    async def upload_file(
        self, request: LocalUploadRequest, timeout: Optional[float] = None
    ) -> MowenResponse:
        """
        로컬 파일 업로드 (prepare → multipart POST)

        Args:
            request: 로컬 업로드 요청
            timeout: 각 단계의 타임아웃 (초)

        Returns:
            업로드 응답
        """
        upload = LocalFileUpload(self, request, timeout=timeout)
        return await upload.run()
