from __future__ import annotations

import re
from urllib.parse import unquote

from .models import OutputFormat

_TOKEN = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+"
_QUOTED_STRING = r'"(?:[^"\\\x00-\x1f\x7f]|\\[\t\x20-\x7e])*"'
_TYPE_RE = re.compile(rf"\s*({_TOKEN})")
_PARAM_RE = re.compile(rf"\s*;\s*({_TOKEN})\s*=\s*({_TOKEN}|{_QUOTED_STRING})")
_TRAILER_RE = re.compile(r"\s*;?\s*")
_EXT_VALUE_RE = re.compile(
    r"^([A-Za-z0-9!#$%&+\-^_`{}~]+)'([A-Za-z0-9\-]*)'"
    r"((?:%[0-9A-Fa-f]{2}|[A-Za-z0-9!#$&+\-.^_`|~])+)$"
)
_EXT_CHARSETS = {"utf-8", "iso-8859-1"}


def parse_content_disposition(header: str | None) -> tuple[str, dict[str, str]] | None:
    """
    Parse a Content-Disposition value into (disposition_type, params).

    Parameter names are lower-cased and quoted-string values are unescaped.
    Returns None when the value does not follow the header grammar, including
    repeated parameters.

    Examples:
        >>> parse_content_disposition('attachment; filename="a b.md"')
        ('attachment', {'filename': 'a b.md'})
        >>> parse_content_disposition('attachment; filename="unterminated') is None
        True
    """
    if not header:
        return None
    match = _TYPE_RE.match(header)
    if match is None:
        return None
    disposition_type = match.group(1).lower()
    params: dict[str, str] = {}
    position = match.end()
    while position < len(header):
        param = _PARAM_RE.match(header, position)
        if param is None:
            trailer = _TRAILER_RE.fullmatch(header, position)
            if trailer is None:
                return None
            break
        name = param.group(1).lower()
        if name in params:
            return None
        value = param.group(2)
        if value.startswith('"'):
            value = re.sub(r"\\(.)", r"\1", value[1:-1])
        params[name] = value
        position = param.end()
    return disposition_type, params


def _decode_ext_value(value: str) -> str | None:
    match = _EXT_VALUE_RE.match(value)
    if match is None:
        return None
    charset = match.group(1).lower()
    if charset not in _EXT_CHARSETS:
        return None
    try:
        return unquote(match.group(3), encoding=charset, errors="strict")
    except UnicodeDecodeError:
        return None


def _safe_filename(name: str | None) -> str | None:
    if name is None:
        return None
    candidate = name.strip()
    if candidate in {"", ".", ".."}:
        return None
    if "/" in candidate or "\\" in candidate:
        return None
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in candidate):
        return None
    return candidate


def filename_from_content_disposition(header: str | None) -> str | None:
    """Return the suggested filename, preferring ``filename*`` over ``filename``."""
    parsed = parse_content_disposition(header)
    if parsed is None:
        return None
    _, params = parsed
    if "filename*" in params:
        extended = _safe_filename(_decode_ext_value(params["filename*"]))
        if extended:
            return extended
    return _safe_filename(params.get("filename"))


def resolve_download_filename(header: str | None, output_format: OutputFormat) -> str:
    """
    Pick the save-as name for a converted artifact.

    Examples:
        >>> resolve_download_filename(None, OutputFormat.TEXT)
        'merged.txt'
        >>> resolve_download_filename('attachment; filename="report.md"', OutputFormat.MARKDOWN)
        'report.md'
        >>> resolve_download_filename('attachment; filename="../etc/passwd"', OutputFormat.MARKDOWN)
        'merged.md'
    """
    return filename_from_content_disposition(header) or output_format.default_filename
