"""
Mowen Upload
로컬 파일 2단계 업로드 핸드셰이크

    NOT_STARTED → PREPARED → UPLOADED
          └──────────┴──────→ FAILED

1. prepare 엔드포인트에 {file_type, file_name} POST → data.upload_url, data.form_data
2. form_data + 파일 바이트를 multipart로 upload_url에 POST (인증 헤더 없음)

실패 시 준비된 업로드 슬롯을 정리하지 않으며 재시도도 하지 않습니다.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

import aiohttp

from .mowen_errors import MissingFieldError, MowenError, UploadProtocolError
from .mowen_response import MowenResponse
from .mowen_types import LocalUploadRequest

if TYPE_CHECKING:
    from .mowen_client import MowenClient

logger = logging.getLogger(__name__)


class UploadState(str, Enum):
    """업로드 핸드셰이크 상태"""
    NOT_STARTED = "not_started"
    PREPARED = "prepared"
    UPLOADED = "uploaded"
    FAILED = "failed"


class UploadStep(str, Enum):
    """실패 시 보고되는 단계 이름"""
    PREPARE = "prepare"
    OPEN_FILE = "open_file"
    UPLOAD = "upload"


_TRANSITIONS = {
    UploadState.NOT_STARTED: {UploadState.PREPARED, UploadState.FAILED},
    UploadState.PREPARED: {UploadState.UPLOADED, UploadState.FAILED},
    UploadState.UPLOADED: set(),
    UploadState.FAILED: set(),
}


class LocalFileUpload:
    """로컬 파일 업로드 핸드셰이크 (단방향 상태 머신)"""

    def __init__(
        self,
        client: "MowenClient",
        request: LocalUploadRequest,
        timeout: Optional[float] = None,
    ):
        self._client = client
        self._request = request
        self._timeout = timeout

        self.state = UploadState.NOT_STARTED
        self.failed_step: Optional[UploadStep] = None
        self.failure_reason: Optional[str] = None
        self.upload_url: Optional[str] = None
        self.form_data: Dict[str, str] = {}
        self.result: Optional[MowenResponse] = None

    def _transition(self, new_state: UploadState):
        if new_state not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"invalid upload state transition: {self.state.value} -> {new_state.value}"
            )
        self.state = new_state

    def _fail(self, step: UploadStep, error: MowenError) -> MowenError:
        error.context = {**error.context, "step": step.value}
        self.failed_step = step
        self.failure_reason = error.message
        self._transition(UploadState.FAILED)
        logger.error(f"파일 업로드 실패 ({step.value}): {error.message}")
        return error

    async def prepare(self) -> None:
        """1단계: 업로드 URL과 폼 필드 발급"""
        prepare_request = self._request.prepare_request()
        try:
            response = await self._client.request_json(
                self._client.UPLOAD_PREPARE_ENDPOINT,
                prepare_request.to_dict(),
                timeout=self._timeout,
            )
        except MowenError as e:
            raise self._fail(UploadStep.PREPARE, e.with_prefix("failed to prepare upload")) from e

        try:
            data = response.require_dict("data")
            upload_url = data.require_str("upload_url")
            form_data = data.require_str_map("form_data")
        except MissingFieldError as e:
            error = UploadProtocolError(
                f"invalid prepare response: {e.message}",
                step=UploadStep.PREPARE.value,
                context=dict(e.context),
            )
            raise self._fail(UploadStep.PREPARE, error) from e

        self.upload_url = upload_url
        self.form_data = form_data
        self._transition(UploadState.PREPARED)
        logger.info(f"파일 업로드 준비 완료: {self._request.file_name}")

    async def send(self) -> MowenResponse:
        """2단계: multipart 본문을 upload_url로 전송"""
        if self.state is not UploadState.PREPARED:
            raise RuntimeError(f"upload is not prepared (state: {self.state.value})")

        try:
            file_obj = open(self._request.file_path, "rb")
        except OSError as e:
            error = UploadProtocolError(
                f"failed to open file: {e}",
                step=UploadStep.OPEN_FILE.value,
                context={"file_path": self._request.file_path},
            )
            raise self._fail(UploadStep.OPEN_FILE, error) from e

        with file_obj:
            form = aiohttp.FormData()
            for key, value in self.form_data.items():
                form.add_field(key, value)
            form.add_field(
                "file",
                file_obj,
                filename=self._request.file_name,
                content_type="application/octet-stream",
            )

            try:
                result = await self._client.post(self.upload_url, data=form, timeout=self._timeout)
            except MowenError as e:
                raise self._fail(UploadStep.UPLOAD, e.with_prefix("upload request failed")) from e

        self.result = result
        self._transition(UploadState.UPLOADED)
        logger.info(f"파일 업로드 완료: {self._request.file_name}")
        return result

    async def run(self) -> MowenResponse:
        """prepare → send 순차 실행"""
        if self.state is not UploadState.NOT_STARTED:
            raise RuntimeError(f"upload handshake already ran (state: {self.state.value})")
        await self.prepare()
        return await self.send()
