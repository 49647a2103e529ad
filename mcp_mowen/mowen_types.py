"""
Mowen Types
墨问(Mowen) 노트 API 타입 정의

- NoteAtom: 백엔드 문서 노드 (doc / paragraph / text / note / 파일 / 마크)
- 도구 인자: Pydantic 모델로 런타임 유효성 검증
- 요청: dataclass + to_dict() (빈 값 생략 규칙 포함)
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, ConfigDict


class AtomType(str, Enum):
    """노드 유형"""
    DOC = "doc"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    NOTE = "note"
    BOLD = "bold"
    HIGHLIGHT = "highlight"
    LINK = "link"
    IMAGE = "image"
    AUDIO = "audio"
    PDF = "pdf"


class ParagraphKind(str, Enum):
    """
    단락 종류

    알 수 없는 태그(또는 태그 없음)는 PLAIN으로 처리합니다.
    """
    PLAIN = ""
    QUOTE = "quote"
    NOTE_REFERENCE = "note"
    FILE_REFERENCE = "file"

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> "ParagraphKind":
        for kind in cls:
            if kind.value == tag:
                return kind
        return cls.PLAIN


class PrivacyType(str, Enum):
    """노트 공개 범위"""
    PUBLIC = "public"
    PRIVATE = "private"
    RULE = "rule"


class SettingsSection(IntEnum):
    """노트 설정 카테고리"""
    PRIVACY = 1


class UploadFileType(IntEnum):
    """업로드 파일 유형 코드"""
    IMAGE = 1
    AUDIO = 2
    PDF = 3


# ============================================================================
# 문서 모델
# ============================================================================

@dataclass
class NoteAtom:
    """노트 원자 노드"""
    type: str
    text: str = ""
    content: Optional[List["NoteAtom"]] = None
    marks: Optional[List["NoteAtom"]] = None
    attrs: Optional[Dict[str, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.text:
            data["text"] = self.text
        if self.content:
            data["content"] = [child.to_dict() for child in self.content]
        if self.marks:
            data["marks"] = [mark.to_dict() for mark in self.marks]
        if self.attrs:
            data["attrs"] = dict(self.attrs)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NoteAtom":
        content = data.get("content")
        marks = data.get("marks")
        attrs = data.get("attrs")
        return cls(
            type=data.get("type", ""),
            text=data.get("text", ""),
            content=[cls.from_dict(c) for c in content] if content is not None else None,
            marks=[cls.from_dict(m) for m in marks] if marks is not None else None,
            attrs=dict(attrs) if attrs is not None else None,
        )


# ============================================================================
# MCP 도구 인자 (Pydantic)
# ============================================================================

class TextNode(BaseModel):
    """텍스트 노드"""

    model_config = ConfigDict(extra='ignore')

    text: str = Field(..., description="텍스트 내용")
    bold: bool = Field(False, description="굵게 여부")
    highlight: bool = Field(False, description="하이라이트 여부")
    link: str = Field("", description="링크 주소")


class FileNode(BaseModel):
    """파일 노드"""

    model_config = ConfigDict(extra='ignore')

    file_type: str = Field(..., description="파일 유형: image, audio, pdf")
    source_type: str = Field(..., description="출처 유형: local, url")
    source_path: str = Field(..., description="파일 경로 또는 URL")
    metadata: Dict[str, str] = Field(default_factory=dict, description="파일 메타데이터")


class Paragraph(BaseModel):
    """단락"""

    model_config = ConfigDict(extra='ignore')

    type: str = Field("", description="단락 유형: quote(인용), note(내부 노트 링크), file(파일)")
    texts: List[TextNode] = Field(default_factory=list, description="텍스트 노드 목록")
    note_id: str = Field("", description="링크할 노트 ID (type이 note일 때만 사용)")
    file: Optional[FileNode] = Field(None, description="파일 노드 (type이 file일 때만 사용)")

    @property
    def kind(self) -> ParagraphKind:
        return ParagraphKind.from_tag(self.type)


class CreateNoteArgs(BaseModel):
    """create_note 도구 인자"""

    model_config = ConfigDict(extra='ignore')

    paragraphs: List[Paragraph] = Field(..., description="리치 텍스트 단락 목록")
    auto_publish: bool = Field(False, description="자동 발행 여부")
    tags: List[str] = Field(default_factory=list, description="노트 태그 목록")


class EditNoteArgs(BaseModel):
    """edit_note 도구 인자"""

    model_config = ConfigDict(extra='ignore')

    note_id: str = Field(..., description="편집할 노트 ID")
    paragraphs: List[Paragraph] = Field(..., description="기존 내용을 완전히 대체할 단락 목록")


class SetNotePrivacyArgs(BaseModel):
    """set_note_privacy 도구 인자"""

    model_config = ConfigDict(extra='ignore')

    note_id: str = Field(..., description="노트 ID")
    privacy_type: str = Field(..., description="공개 범위 (public/private/rule)")
    no_share: Optional[bool] = Field(None, description="공유 금지 여부 (rule 유형에서만 유효)")
    expire_at: Optional[int] = Field(None, description="만료 타임스탬프 (rule 유형에서만 유효, 0은 만료 없음)")


class ResetAPIKeyArgs(BaseModel):
    """reset_api_key 도구 인자 (없음)"""

    model_config = ConfigDict(extra='ignore')


class UploadFileArgs(BaseModel):
    """upload_file 도구 인자 (로컬 파일)"""

    model_config = ConfigDict(extra='ignore')

    file_path: str = Field(..., description="업로드할 파일 경로")
    file_type: int = Field(..., description="파일 유형: 1-이미지, 2-오디오, 3-PDF")
    file_name: str = Field(..., description="파일 이름")


class UploadFileViaURLArgs(BaseModel):
    """upload_file_via_url 도구 인자"""

    model_config = ConfigDict(extra='ignore')

    file_url: str = Field(..., description="업로드할 파일 URL")
    file_type: int = Field(..., description="파일 유형: 1-이미지, 2-오디오, 3-PDF")
    file_name: str = Field("", description="파일 이름 (선택)")


# ============================================================================
# API 요청
# ============================================================================

@dataclass
class NoteCreateSettings:
    """노트 생성 설정"""
    auto_publish: bool = False
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.auto_publish:
            data["autoPublish"] = True
        if self.tags:
            data["tags"] = list(self.tags)
        return data


@dataclass
class NoteCreateRequest:
    """노트 생성 요청"""
    body: NoteAtom
    settings: NoteCreateSettings = field(default_factory=NoteCreateSettings)

    def to_dict(self) -> Dict[str, Any]:
        return {"body": self.body.to_dict(), "settings": self.settings.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NoteCreateRequest":
        settings = data.get("settings", {}) or {}
        return cls(
            body=NoteAtom.from_dict(data.get("body", {})),
            settings=NoteCreateSettings(
                auto_publish=settings.get("autoPublish", False),
                tags=list(settings.get("tags", [])),
            ),
        )


@dataclass
class NoteEditRequest:
    """노트 편집 요청 (본문 전체 교체)"""
    note_id: str
    body: NoteAtom

    def to_dict(self) -> Dict[str, Any]:
        return {"noteId": self.note_id, "body": self.body.to_dict()}


@dataclass
class NotePrivacyRule:
    """공개 규칙"""
    no_share: bool = False
    expire_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.no_share:
            data["noShare"] = True
        if self.expire_at:
            data["expireAt"] = self.expire_at
        return data


@dataclass
class NotePrivacySet:
    """노트 공개 범위 설정"""
    type: str
    rule: Optional[NotePrivacyRule] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.rule is not None:
            data["rule"] = self.rule.to_dict()
        return data


@dataclass
class NoteSetRequest:
    """노트 설정 요청"""
    note_id: str
    privacy: NotePrivacySet
    section: int = SettingsSection.PRIVACY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "noteId": self.note_id,
            "section": int(self.section),
            "settings": {"privacy": self.privacy.to_dict()},
        }


@dataclass
class KeyResetRequest:
    """API 키 재설정 요청 (본문 없음)"""

    def to_dict(self) -> Dict[str, Any]:
        return {}


@dataclass
class UploadViaURLRequest:
    """URL 기반 업로드 요청"""
    url: str
    file_type: int
    file_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url, "file_type": self.file_type}
        if self.file_name:
            data["file_name"] = self.file_name
        return data


@dataclass
class UploadPrepareRequest:
    """로컬 업로드 준비 요청"""
    file_type: int
    file_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"file_type": self.file_type, "file_name": self.file_name}


@dataclass
class LocalUploadRequest:
    """로컬 파일 업로드 (prepare → multipart POST)"""
    file_path: str
    file_type: int
    file_name: str

    def prepare_request(self) -> UploadPrepareRequest:
        return UploadPrepareRequest(file_type=self.file_type, file_name=self.file_name)
