from __future__ import annotations

from datetime import datetime

from .models import AcceptedFile


def format_size_mb(size_bytes: int) -> str:
    """
    Format a byte count the way the file list shows it.

    Examples:
        >>> format_size_mb(0)
        '0.00 MB'
        >>> format_size_mb(1572864)
        '1.50 MB'
    """
    return f"{size_bytes / 1024 / 1024:.2f} MB"


def format_added_date(added_at: datetime | None) -> str:
    moment = added_at or datetime.now().astimezone()
    return moment.strftime("%d/%m/%Y")


def file_detail_rows(accepted: AcceptedFile) -> list[tuple[str, str]]:
    return [
        ("File name", accepted.name),
        ("Size", format_size_mb(accepted.size)),
        ("File type", accepted.mime_type or "unknown"),
        ("Added", format_added_date(accepted.added_at)),
    ]
