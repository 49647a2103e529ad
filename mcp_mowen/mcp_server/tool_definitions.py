"""
MCP Tool Definitions for the Mowen MCP Server
"""
from typing import List, Dict, Any

_TEXT_NODE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "text": {"type": "string", "description": "Text content"},
        "bold": {"type": "boolean", "description": "Bold text"},
        "highlight": {"type": "boolean", "description": "Highlighted text"},
        "link": {"type": "string", "description": "Link URL"}
    },
    "required": ["text"]
}

_FILE_NODE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "file_type": {"type": "string", "enum": ["image", "audio", "pdf"], "description": "File kind"},
        "source_type": {"type": "string", "enum": ["local", "url"], "description": "Source kind"},
        "source_path": {"type": "string", "description": "File path or URL (uploaded file id)"},
        "metadata": {
            "type": "object",
            "additionalProperties": {"type": "string"},
            "description": "Extra attributes merged into the file node"
        }
    },
    "required": ["file_type", "source_type", "source_path"]
}

_PARAGRAPHS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "description": "Rich text paragraphs",
    "items": {
        "type": "object",
        "properties": {
            "type": {
                "type": "string",
                "description": "Paragraph type: quote, note (linked note), file. Omit for a plain paragraph"
            },
            "texts": {"type": "array", "items": _TEXT_NODE_SCHEMA, "description": "Text runs"},
            "note_id": {"type": "string", "description": "Linked note id (type=note only)"},
            "file": _FILE_NODE_SCHEMA
        }
    }
}

MCP_TOOLS: List[Dict[str, Any]] = [
    {
        "name": "create_note",
        "description": "Create a new Mowen note from rich text paragraphs",
        "inputSchema": {
            "type": "object",
            "properties": {
                "paragraphs": _PARAGRAPHS_SCHEMA,
                "auto_publish": {"type": "boolean", "description": "Publish automatically", "default": False},
                "tags": {"type": "array", "items": {"type": "string"}, "description": "Note tags"}
            },
            "required": ["paragraphs"]
        }
    },
    {
        "name": "edit_note",
        "description": "Replace the content of an existing note with rich text paragraphs",
        "inputSchema": {
            "type": "object",
            "properties": {
                "note_id": {"type": "string", "description": "Note id to edit"},
                "paragraphs": _PARAGRAPHS_SCHEMA
            },
            "required": ["note_id", "paragraphs"]
        }
    },
    {
        "name": "set_note_privacy",
        "description": "Set the privacy of a note",
        "inputSchema": {
            "type": "object",
            "properties": {
                "note_id": {"type": "string", "description": "Note id"},
                "privacy_type": {"type": "string", "enum": ["public", "private", "rule"], "description": "Privacy type"},
                "no_share": {"type": "boolean", "description": "Forbid sharing (rule only)"},
                "expire_at": {"type": "integer", "description": "Expiry unix timestamp (rule only, 0 means never)"}
            },
            "required": ["note_id", "privacy_type"]
        }
    },
    {
        "name": "reset_api_key",
        "description": "Reset the Mowen API key. The current key stops working immediately",
        "inputSchema": {
            "type": "object",
            "properties": {}
        }
    },
    {
        "name": "upload_file",
        "description": "Upload a local file (image, audio or PDF) to Mowen",
        "inputSchema": {
            "type": "object",
            "properties": {
                "file_path": {"type": "string", "description": "Local file path"},
                "file_type": {"type": "integer", "enum": [1, 2, 3], "description": "File type: 1-image, 2-audio, 3-PDF"},
                "file_name": {"type": "string", "description": "File name"}
            },
            "required": ["file_path", "file_type", "file_name"]
        }
    },
    {
        "name": "upload_file_via_url",
        "description": "Upload a file (image, audio or PDF) to Mowen from a URL",
        "inputSchema": {
            "type": "object",
            "properties": {
                "file_url": {"type": "string", "description": "File URL"},
                "file_type": {"type": "integer", "enum": [1, 2, 3], "description": "File type: 1-image, 2-audio, 3-PDF"},
                "file_name": {"type": "string", "description": "File name (optional)"}
            },
            "required": ["file_url", "file_type"]
        }
    }
]


def get_tool_config(tool_name: str) -> Dict[str, Any]:
    """Lookup MCP tool definition by name"""
    for tool in MCP_TOOLS:
        if tool.get("name") == tool_name:
            return tool
    return {}
