from __future__ import annotations

import argparse
import mimetypes
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from docmerge.adapters.local_download_sink import LocalFolderDownloadSink
from docmerge.container import build_services
from docmerge.domain.models import CandidateFile, OutputFormat
from docmerge.errors import AuthError
from docmerge.logging_config import configure_logging
from docmerge.settings import DOWNLOAD_DIR, LOG_LEVEL


def _read_candidates(paths: list[str]) -> list[CandidateFile]:
    candidates: list[CandidateFile] = []
    for raw_path in paths:
        path = Path(raw_path)
        if not path.is_file():
            raise SystemExit(f"Not a file: {path}")
        mime_type, _ = mimetypes.guess_type(path.name)
        candidates.append(
            CandidateFile(name=path.name, mime_type=mime_type or "", content=path.read_bytes())
        )
    return candidates


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Upload Word documents, merge them remotely and save the result."
    )
    parser.add_argument("files", nargs="+", help="DOC/DOCX files, merged in the given order.")
    parser.add_argument(
        "--format",
        choices=[item.value for item in OutputFormat],
        default=OutputFormat.MARKDOWN.value,
    )
    parser.add_argument("--out-dir", default=DOWNLOAD_DIR, help="Folder for the merged file.")
    parser.add_argument("--email", default=os.getenv("DOCMERGE_EMAIL", ""))
    parser.add_argument(
        "--password",
        default=os.getenv("DOCMERGE_PASSWORD", ""),
        help="Omit to reuse the session saved in the OS keychain.",
    )
    args = parser.parse_args()
    configure_logging(LOG_LEVEL)

    downloads = LocalFolderDownloadSink(args.out_dir)
    services = build_services(downloads)
    session = services["session"]
    workspace = services["workspace"]
    session.start()
    try:
        if session.user is None:
            if not args.email or not args.password:
                print("No saved session; pass --email and --password.", file=sys.stderr)
                return 1
            try:
                session.sign_in(args.email, args.password)
            except AuthError as exc:
                print(f"Sign in failed: {exc}", file=sys.stderr)
                return 1

        intake = workspace.add_files(_read_candidates(args.files))
        if intake is not None:
            for rejected in intake.rejected:
                print(f"Skipped (not a Word document): {rejected.name}")
        if workspace.error:
            # Uploads are a side channel; conversion still runs on the selection.
            print(workspace.error, file=sys.stderr)
        if not workspace.files:
            print("Nothing to convert.", file=sys.stderr)
            return 1

        result = workspace.convert_and_download(args.format)
        if result is None:
            print(workspace.error or "Conversion did not run.", file=sys.stderr)
            return 1
        for saved in downloads.saved_paths:
            print(f"Saved {saved}")
        return 0
    finally:
        workspace.close()
        session.stop()


if __name__ == "__main__":
    raise SystemExit(main())
