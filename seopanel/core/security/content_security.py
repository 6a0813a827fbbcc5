"""Content security validation for free-text SEO fields"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Tuple


@dataclass
class ContentSecurityResult:
    """Outcome of scanning a piece of text"""
    is_secure: bool
    threats: List[str] = field(default_factory=list)


# (threat category, pattern) in detection order
THREAT_PATTERNS: List[Tuple[str, Pattern[str]]] = [
    ("script_injection", re.compile(r"<\s*/?\s*script\b", re.IGNORECASE)),
    ("javascript_protocol", re.compile(r"(?:java|vb)script\s*:", re.IGNORECASE)),
    ("event_handler", re.compile(r"\bon[a-z]+\s*=", re.IGNORECASE)),
    (
        "dangerous_tag",
        re.compile(
            r"<\s*/?\s*(?:iframe|object|embed|form|input|textarea|select|button|style|link|meta|svg|base)\b",
            re.IGNORECASE,
        ),
    ),
    ("data_uri", re.compile(r"data\s*:(?!\s*image/)[a-z]+/[a-z0-9.+-]+", re.IGNORECASE)),
    (
        "sql_injection",
        re.compile(
            r"(?:\bunion\b\s+(?:all\s+)?\bselect\b"
            r"|\b(?:drop|truncate|alter)\s+table\b"
            r"|\bdelete\s+from\b"
            r"|\binsert\s+into\b"
            r"|'\s*or\s+'?\d+'?\s*=\s*'?\d+"
            r"|;\s*--"
            r"|/\*.*?\*/)",
            re.IGNORECASE,
        ),
    ),
    ("template_injection", re.compile(r"\{\{.*?\}\}|\$\{.*?\}")),
    ("null_byte", re.compile(r"\x00|%00")),
]

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#x27;": "'",
    "&#39;": "'",
    "&#x2F;": "/",
    "&nbsp;": " ",
}


def validate_content_security(text: Optional[str]) -> ContentSecurityResult:
    """
    Scan text for injection and XSS patterns.

    Args:
        text: Text to scan; None and empty strings are secure

    Returns:
        ContentSecurityResult with the detected threat categories
    """
    if not text:
        return ContentSecurityResult(is_secure=True)

    threats: List[str] = []
    for category, pattern in THREAT_PATTERNS:
        if pattern.search(text) and category not in threats:
            threats.append(category)

    return ContentSecurityResult(is_secure=not threats, threats=threats)


def validate_fields_security(fields: Dict[str, Optional[str]]) -> Dict[str, List[str]]:
    """
    Scan several named fields at once.

    Returns:
        Mapping of field name to threat list, only for flagged fields
    """
    flagged: Dict[str, List[str]] = {}
    for name, value in fields.items():
        result = validate_content_security(value)
        if not result.is_secure:
            flagged[name] = result.threats
    return flagged


def sanitize_text(text: Optional[str]) -> str:
    """Remove all HTML tags and decode common entities"""
    if not text:
        return ""

    sanitized = _TAG_RE.sub("", text)
    for entity, char in _ENTITIES.items():
        sanitized = sanitized.replace(entity, char)
    return sanitized.strip()
