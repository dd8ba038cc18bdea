from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(_REPO_ROOT / ".env", override=False)

_DEFAULT_BACKEND_URL = "http://localhost:5000"


def _optional_float(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    return float(value)


BACKEND_URL = (os.getenv("DOCMERGE_BACKEND_URL", "").strip() or _DEFAULT_BACKEND_URL).rstrip("/")
SUPABASE_URL = os.getenv("SUPABASE_URL", "").strip().rstrip("/")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
STORAGE_BUCKET = os.getenv("DOCMERGE_STORAGE_BUCKET", "docx-files")
CONVERT_TIMEOUT = _optional_float(os.getenv("DOCMERGE_CONVERT_TIMEOUT"))
AUTH_TIMEOUT = float(os.getenv("DOCMERGE_AUTH_TIMEOUT", "20"))
LOG_LEVEL = os.getenv("DOCMERGE_LOG_LEVEL", "INFO")
DOWNLOAD_DIR = os.getenv("DOCMERGE_DOWNLOAD_DIR", "./downloads")
