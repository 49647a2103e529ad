"""
MCP Mowen Module
墨问(Mowen) 오픈 API를 사용한 노트 서비스
"""

from .mowen_service import MowenService
from .mowen_client import MowenClient
from .mowen_config import MowenSettings
from .mowen_converter import convert_paragraphs_to_note_atom, convert_texts_to_content
from .mowen_response import MowenResponse
from .mowen_upload import LocalFileUpload, UploadState
from .mowen_errors import (
    MowenError,
    ConfigurationError,
    ArgumentError,
    TransportError,
    BackendError,
    MissingFieldError,
    UploadProtocolError,
    ToolExecutionError,
)
from .mowen_types import (
    NoteAtom,
    Paragraph,
    ParagraphKind,
    TextNode,
    FileNode,
    CreateNoteArgs,
    EditNoteArgs,
    SetNotePrivacyArgs,
    ResetAPIKeyArgs,
    UploadFileArgs,
    UploadFileViaURLArgs,
    NoteCreateRequest,
    NoteEditRequest,
    NoteSetRequest,
)

__all__ = [
    # Service
    "MowenService",
    # Client
    "MowenClient",
    "MowenSettings",
    "MowenResponse",
    "LocalFileUpload",
    "UploadState",
    # Converter
    "convert_paragraphs_to_note_atom",
    "convert_texts_to_content",
    # Errors
    "MowenError",
    "ConfigurationError",
    "ArgumentError",
    "TransportError",
    "BackendError",
    "MissingFieldError",
    "UploadProtocolError",
    "ToolExecutionError",
    # Types
    "NoteAtom",
    "Paragraph",
    "ParagraphKind",
    "TextNode",
    "FileNode",
    "CreateNoteArgs",
    "EditNoteArgs",
    "SetNotePrivacyArgs",
    "ResetAPIKeyArgs",
    "UploadFileArgs",
    "UploadFileViaURLArgs",
    "NoteCreateRequest",
    "NoteEditRequest",
    "NoteSetRequest",
]

__version__ = "1.0.0"
