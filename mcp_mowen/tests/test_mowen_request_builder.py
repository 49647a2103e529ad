"""
Mowen Request Builder Tests
도구 인자 → API 요청 본문 직렬화 테스트
"""

import json

import pytest

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mcp_mowen.mowen_request_builder import (
    build_create_request,
    build_edit_request,
    build_local_upload_request,
    build_privacy_request,
    build_reset_request,
    build_upload_via_url_request,
)
from mcp_mowen.mowen_types import (
    CreateNoteArgs,
    EditNoteArgs,
    NoteCreateRequest,
    ResetAPIKeyArgs,
    SetNotePrivacyArgs,
    UploadFileArgs,
    UploadFileViaURLArgs,
)


class TestCreateRequest:
    """노트 생성 요청 테스트"""

    def test_settings_always_present(self):
        """autoPublish=false, tags 없음 → settings는 빈 객체로 전송"""
        args = CreateNoteArgs(paragraphs=[{"texts": [{"text": "hi"}]}])

        body = build_create_request(args).to_dict()

        assert body["settings"] == {}
        assert body["body"]["type"] == "doc"

    def test_settings_with_publish_and_tags(self):
        args = CreateNoteArgs(
            paragraphs=[{"texts": [{"text": "hi"}]}],
            auto_publish=True,
            tags=["work", "idea"],
        )

        body = build_create_request(args).to_dict()

        assert body["settings"] == {"autoPublish": True, "tags": ["work", "idea"]}

    def test_json_round_trip(self):
        """직렬화 → 역직렬화 → 재직렬화 결과가 동일"""
        args = CreateNoteArgs.model_validate({
            "paragraphs": [
                {"texts": [{"text": "plain"}, {"text": "bold", "bold": True, "link": "https://a.b"}]},
                {"type": "quote", "texts": [{"text": "q", "highlight": True}]},
                {"type": "note", "note_id": "n-1"},
                {"type": "file", "file": {"file_type": "audio", "source_type": "url", "source_path": "f-9"}},
            ],
            "tags": ["t"],
        })
        request = build_create_request(args)

        encoded = json.dumps(request.to_dict(), ensure_ascii=False)
        decoded = NoteCreateRequest.from_dict(json.loads(encoded))

        assert decoded.to_dict() == request.to_dict()
        assert json.dumps(decoded.to_dict(), ensure_ascii=False) == encoded


class TestEditRequest:
    def test_edit_request_body(self):
        args = EditNoteArgs(note_id="note-1", paragraphs=[{"texts": [{"text": "new"}]}])

        body = build_edit_request(args).to_dict()

        assert body == {
            "noteId": "note-1",
            "body": {
                "type": "doc",
                "content": [{"type": "paragraph", "content": [{"type": "text", "text": "new"}]}],
            },
        }


class TestPrivacyRequest:
    """노트 공개 범위 요청 테스트"""

    def test_rule_with_expiry(self):
        """expire_at은 10진 문자열로 직렬화"""
        args = SetNotePrivacyArgs(
            note_id="abc", privacy_type="rule", no_share=True, expire_at=1640995200
        )

        body = build_privacy_request(args).to_dict()

        assert body == {
            "noteId": "abc",
            "section": 1,
            "settings": {
                "privacy": {
                    "type": "rule",
                    "rule": {"noShare": True, "expireAt": "1640995200"},
                }
            },
        }
        assert '"expireAt": "1640995200"' in json.dumps(body)

    def test_public_has_no_rule(self):
        """rule 이외 유형은 no_share/expire_at을 무시"""
        args = SetNotePrivacyArgs(
            note_id="abc", privacy_type="public", no_share=True, expire_at=100
        )

        body = build_privacy_request(args).to_dict()

        assert body["settings"] == {"privacy": {"type": "public"}}

    def test_rule_without_options(self):
        args = SetNotePrivacyArgs(note_id="abc", privacy_type="rule")

        body = build_privacy_request(args).to_dict()

        assert body["settings"]["privacy"] == {"type": "rule", "rule": {}}

    def test_rule_expire_zero_means_never(self):
        args = SetNotePrivacyArgs(note_id="abc", privacy_type="rule", expire_at=0)

        body = build_privacy_request(args).to_dict()

        assert body["settings"]["privacy"]["rule"] == {"expireAt": "0"}

    def test_unknown_privacy_type_passed_through(self):
        """privacy_type 값 검증은 백엔드 몫"""
        args = SetNotePrivacyArgs(note_id="abc", privacy_type="friends")

        body = build_privacy_request(args).to_dict()

        assert body["settings"]["privacy"] == {"type": "friends"}


class TestOtherRequests:
    def test_reset_request_is_empty_object(self):
        assert build_reset_request(ResetAPIKeyArgs()).to_dict() == {}

    def test_upload_via_url_with_name(self):
        args = UploadFileViaURLArgs(file_url="https://x/y.png", file_type=1, file_name="y.png")

        assert build_upload_via_url_request(args).to_dict() == {
            "url": "https://x/y.png",
            "file_type": 1,
            "file_name": "y.png",
        }

    def test_upload_via_url_without_name(self):
        """file_name이 비어 있으면 생략"""
        args = UploadFileViaURLArgs(file_url="https://x/y.pdf", file_type=3)

        assert build_upload_via_url_request(args).to_dict() == {
            "url": "https://x/y.pdf",
            "file_type": 3,
        }

    def test_local_upload_prepare_request(self):
        args = UploadFileArgs(file_path="/tmp/a.mp3", file_type=2, file_name="a.mp3")

        request = build_local_upload_request(args)

        assert request.file_path == "/tmp/a.mp3"
        assert request.prepare_request().to_dict() == {"file_type": 2, "file_name": "a.mp3"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
