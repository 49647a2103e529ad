"""
Mowen Request Builder
도구 인자 → 墨问 API 요청 객체 1:1 매핑

유효성 검증은 타입 수준까지만 수행합니다. privacy_type 같은 값은
그대로 백엔드에 전달되며, 백엔드가 유효성 판단의 주체입니다.
"""

from .mowen_converter import convert_paragraphs_to_note_atom
from .mowen_types import (
    CreateNoteArgs,
    EditNoteArgs,
    KeyResetRequest,
    LocalUploadRequest,
    NoteCreateRequest,
    NoteCreateSettings,
    NoteEditRequest,
    NotePrivacyRule,
    NotePrivacySet,
    NoteSetRequest,
    PrivacyType,
    ResetAPIKeyArgs,
    SetNotePrivacyArgs,
    SettingsSection,
    UploadFileArgs,
    UploadFileViaURLArgs,
    UploadViaURLRequest,
)


def build_create_request(args: CreateNoteArgs) -> NoteCreateRequest:
    """노트 생성 요청 구성"""
    return NoteCreateRequest(
        body=convert_paragraphs_to_note_atom(args.paragraphs),
        settings=NoteCreateSettings(
            auto_publish=args.auto_publish,
            tags=list(args.tags),
        ),
    )


def build_edit_request(args: EditNoteArgs) -> NoteEditRequest:
    """노트 편집 요청 구성 (본문 전체 교체, 병합 없음)"""
    return NoteEditRequest(
        note_id=args.note_id,
        body=convert_paragraphs_to_note_atom(args.paragraphs),
    )


def build_privacy_request(args: SetNotePrivacyArgs) -> NoteSetRequest:
    """
    노트 공개 범위 설정 요청 구성

    rule 유형일 때만 규칙을 붙이며, 전달되지 않은 no_share/expire_at은
    생략합니다. expire_at은 10진 문자열로 직렬화됩니다.

    Args:
        args: set_note_privacy 도구 인자

    Returns:
        section 1(공개 범위) 대상 설정 요청
    """
    privacy = NotePrivacySet(type=args.privacy_type)

    if args.privacy_type == PrivacyType.RULE.value:
        rule = NotePrivacyRule()
        if args.no_share is not None:
            rule.no_share = args.no_share
        if args.expire_at is not None:
            rule.expire_at = str(args.expire_at)
        privacy.rule = rule

    return NoteSetRequest(
        note_id=args.note_id,
        privacy=privacy,
        section=SettingsSection.PRIVACY,
    )


def build_reset_request(args: ResetAPIKeyArgs) -> KeyResetRequest:
    return KeyResetRequest()


def build_upload_via_url_request(args: UploadFileViaURLArgs) -> UploadViaURLRequest:
    return UploadViaURLRequest(
        url=args.file_url,
        file_type=args.file_type,
        file_name=args.file_name,
    )


def build_local_upload_request(args: UploadFileArgs) -> LocalUploadRequest:
    return LocalUploadRequest(
        file_path=args.file_path,
        file_type=args.file_type,
        file_name=args.file_name,
    )
