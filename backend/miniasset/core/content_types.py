"""Content-Type Resolver — extension → MIME type. Total, pure."""

STYLESHEET_TYPE = "text/css"
SCRIPT_TYPE = "application/javascript"
DEFAULT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    "css": STYLESHEET_TYPE,
    "js": SCRIPT_TYPE,
}


def content_type_for(ext: str) -> str:
    """MIME type for a build extension; octet-stream when unrecognized."""
    return CONTENT_TYPES.get(ext, DEFAULT_TYPE)
