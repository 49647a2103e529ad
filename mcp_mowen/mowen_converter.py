"""
Mowen Converter
MCP 단락 인자를 墨问 API 문서(NoteAtom) 형식으로 변환

마크 순서(bold → highlight → link)와 파일 노드의 속성 병합 규칙
(메타데이터가 uuid/sourceType을 덮어씀)은 백엔드 렌더러와의 호환을 위해
그대로 유지해야 합니다.
"""

from typing import List, Sequence

from .mowen_types import (
    AtomType,
    NoteAtom,
    Paragraph,
    ParagraphKind,
    TextNode,
)


def convert_texts_to_content(texts: Sequence[TextNode]) -> List[NoteAtom]:
    """
    텍스트 노드 목록을 text 노드 목록으로 변환

    입력 하나당 정확히 하나의 노드를 같은 순서로 생성합니다.
    마크가 없으면 marks는 None으로 남깁니다 (빈 리스트가 아님).

    Args:
        texts: 텍스트 노드 목록

    Returns:
        text 타입 NoteAtom 목록
    """
    content: List[NoteAtom] = []

    for text in texts:
        text_atom = NoteAtom(type=AtomType.TEXT.value, text=text.text)

        marks: List[NoteAtom] = []
        if text.bold:
            marks.append(NoteAtom(type=AtomType.BOLD.value))
        if text.highlight:
            marks.append(NoteAtom(type=AtomType.HIGHLIGHT.value))
        if text.link:
            marks.append(NoteAtom(type=AtomType.LINK.value, attrs={"href": text.link}))

        if marks:
            text_atom.marks = marks

        content.append(text_atom)

    return content


def _convert_paragraph(paragraph: Paragraph) -> NoteAtom:
    kind = paragraph.kind

    if kind is ParagraphKind.QUOTE:
        return NoteAtom(
            type=AtomType.PARAGRAPH.value,
            attrs={"blockquote": "true"},
            content=convert_texts_to_content(paragraph.texts),
        )

    if kind is ParagraphKind.NOTE_REFERENCE:
        return NoteAtom(type=AtomType.NOTE.value, attrs={"uuid": paragraph.note_id})

    if kind is ParagraphKind.FILE_REFERENCE:
        file = paragraph.file
        # source_path는 백엔드 계약상 uuid 속성으로 전달
        attrs = {"uuid": file.source_path, "sourceType": file.source_type}
        attrs.update(file.metadata)
        return NoteAtom(type=file.file_type, attrs=attrs)

    return NoteAtom(
        type=AtomType.PARAGRAPH.value,
        content=convert_texts_to_content(paragraph.texts),
    )


def convert_paragraphs_to_note_atom(paragraphs: Sequence[Paragraph]) -> NoteAtom:
    """
    단락 목록을 doc 노드로 변환

    - quote: blockquote 속성을 가진 paragraph
    - note: uuid 속성을 가진 note 노드
    - file: 파일 유형 노드 (file 필드가 없으면 건너뜀)
    - 그 외(태그 없음/알 수 없는 태그): 일반 paragraph

    Args:
        paragraphs: 단락 목록

    Returns:
        doc 타입 NoteAtom
    """
    doc = NoteAtom(type=AtomType.DOC.value, content=[])

    for paragraph in paragraphs:
        if paragraph.kind is ParagraphKind.FILE_REFERENCE and paragraph.file is None:
            continue
        doc.content.append(_convert_paragraph(paragraph))

    return doc
