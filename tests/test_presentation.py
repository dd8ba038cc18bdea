from datetime import datetime, timezone

from docmerge.domain.models import AcceptedFile
from docmerge.domain.presentation import file_detail_rows, format_added_date, format_size_mb


def test_format_size_mb() -> None:
    assert format_size_mb(0) == "0.00 MB"
    assert format_size_mb(1048576) == "1.00 MB"
    assert format_size_mb(1572864) == "1.50 MB"


def test_file_detail_rows() -> None:
    accepted = AcceptedFile(
        file_id="f-1",
        name="a.docx",
        size=2097152,
        mime_type="",
        content=b"",
        added_at=datetime(2025, 3, 9, 12, 0, tzinfo=timezone.utc),
    )

    rows = file_detail_rows(accepted)

    assert rows == [
        ("File name", "a.docx"),
        ("Size", "2.00 MB"),
        ("File type", "unknown"),
        ("Added", "09/03/2025"),
    ]


def test_format_added_date_defaults_to_today() -> None:
    assert format_added_date(None) == datetime.now().astimezone().strftime("%d/%m/%Y")
