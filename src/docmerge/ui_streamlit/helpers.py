from __future__ import annotations

from typing import Any, Iterable

import streamlit as st

from docmerge.container import build_services
from docmerge.domain.models import CandidateFile
from docmerge.ui_streamlit.download_sink import READY_DOWNLOAD_KEY, SessionStateDownloadSink


def _init_state() -> None:
    st.session_state.setdefault("services", None)
    st.session_state.setdefault("upload_key", 0)
    st.session_state.setdefault("expanded_file_id", None)
    st.session_state.setdefault(READY_DOWNLOAD_KEY, None)


def _get_services() -> dict[str, Any]:
    if st.session_state["services"] is None:
        st.session_state["services"] = build_services(SessionStateDownloadSink(st.session_state))
    return st.session_state["services"]


def _to_candidates(uploaded_files: Iterable[Any]) -> list[CandidateFile]:
    return [
        CandidateFile(
            name=uploaded.name,
            mime_type=uploaded.type or "",
            content=uploaded.getvalue(),
        )
        for uploaded in uploaded_files
    ]


def _reset_uploader() -> None:
    # A new widget key is the only way to empty st.file_uploader.
    st.session_state["upload_key"] += 1


def _trigger_rerun() -> None:
    if hasattr(st, "rerun"):
        st.rerun()
    else:
        st.experimental_rerun()
