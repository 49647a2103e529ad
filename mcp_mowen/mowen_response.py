"""
Mowen Response
백엔드 JSON 응답을 감싸는 읽기 전용 매핑

응답 스키마는 정적으로 모델링하지 않습니다. 호출 측은 알려진 키만
접근자로 조회하며, require_* 접근자는 실패 시 MissingFieldError를 발생시킵니다.
"""

import json
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from .mowen_errors import BackendError, MissingFieldError


class MowenResponse(Mapping):
    """墨问 API 응답 (문자열 키 → 임의 JSON 값)"""

    def __init__(self, data: Dict[str, Any], path: str = ""):
        self._data = data
        self._path = path

    @classmethod
    def from_body(cls, body: str, status_code: int = 200) -> "MowenResponse":
        """
        응답 본문 디코딩

        Args:
            body: 응답 본문 텍스트
            status_code: HTTP 상태 코드 (오류 메시지용)

        Returns:
            MowenResponse

        Raises:
            BackendError: 본문이 JSON 객체가 아닌 경우
        """
        try:
            data = json.loads(body)
        except ValueError as e:
            raise BackendError(
                f"failed to unmarshal response: {e}",
                status_code=status_code,
                body=body,
            ) from e

        if not isinstance(data, dict):
            raise BackendError(
                "failed to unmarshal response: expected a JSON object",
                status_code=status_code,
                body=body,
            )
        return cls(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"MowenResponse({self._data!r})"

    def _field_path(self, key: str) -> str:
        return f"{self._path}.{key}" if self._path else key

    def to_dict(self) -> Dict[str, Any]:
        return self._data

    def get_dict(self, key: str) -> Optional["MowenResponse"]:
        value = self._data.get(key)
        if isinstance(value, dict):
            return MowenResponse(value, self._field_path(key))
        return None

    def get_str(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return value if isinstance(value, str) else None

    def require_dict(self, key: str) -> "MowenResponse":
        value = self.get_dict(key)
        if value is None:
            raise MissingFieldError(self._field_path(key), "object")
        return value

    def require_str(self, key: str) -> str:
        value = self.get_str(key)
        if value is None:
            raise MissingFieldError(self._field_path(key), "string")
        return value

    def require_str_map(self, key: str) -> Dict[str, str]:
        """문자열 값만 남긴 매핑 반환 (문자열이 아닌 값은 건너뜀)"""
        value = self.require_dict(key)
        return {k: v for k, v in value.items() if isinstance(v, str)}

    def to_text(self) -> str:
        return json.dumps(self._data, ensure_ascii=False, indent=2)
