import pytest

from docmerge.domain.content_disposition import (
    filename_from_content_disposition,
    parse_content_disposition,
    resolve_download_filename,
)
from docmerge.domain.models import OutputFormat


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ('attachment; filename="report.md"', "report.md"),
        ("attachment; filename=report.md", "report.md"),
        ('attachment;filename="merged notes.txt"', "merged notes.txt"),
        ('ATTACHMENT; FILENAME="upper.md"', "upper.md"),
        ('attachment; filename="a\\"b.md"', 'a"b.md'),
        ('attachment; filename="trailing.md";', "trailing.md"),
        (
            "attachment; filename*=UTF-8''na%C3%AFve%20notes.md; filename=\"fallback.md\"",
            "naïve notes.md",
        ),
        ("attachment; filename*=UTF-8''%FF.md; filename=\"plain.md\"", "plain.md"),
    ],
)
def test_filename_from_valid_headers(header: str, expected: str) -> None:
    assert filename_from_content_disposition(header) == expected


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "inline",
        "attachment; filename=",
        'attachment; filename="unterminated',
        'attachment; filename="a.md"; filename="b.md"',
        'attachment; filename="../secret.md"',
        'attachment; filename="dir\\\\file.md"',
        'attachment; filename=".."',
        'attachment; filename="   "',
        "attachment; filename=report.md garbage",
        "attachment; filename*=latin9''x.md",
    ],
)
def test_filename_rejects_malformed_or_unsafe_headers(header: str | None) -> None:
    assert filename_from_content_disposition(header) is None


def test_parse_content_disposition_lowercases_names() -> None:
    parsed = parse_content_disposition('Attachment; FileName="X.md"; size=10')

    assert parsed == ("attachment", {"filename": "X.md", "size": "10"})


def test_resolve_download_filename_defaults_by_format() -> None:
    assert resolve_download_filename(None, OutputFormat.MARKDOWN) == "merged.md"
    assert resolve_download_filename(None, OutputFormat.TEXT) == "merged.txt"
    assert resolve_download_filename("attachment", OutputFormat.TEXT) == "merged.txt"


def test_resolve_download_filename_prefers_header() -> None:
    header = 'attachment; filename="report.md"'

    assert resolve_download_filename(header, OutputFormat.TEXT) == "report.md"
