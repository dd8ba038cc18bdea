from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))

from docmerge.domain.models import OutputFormat, SessionStatus
from docmerge.domain.presentation import file_detail_rows, format_size_mb
from docmerge.logging_config import configure_logging
from docmerge.services.workspace import Workspace
from docmerge.settings import LOG_LEVEL
from docmerge.ui_streamlit.auth import render_sign_in
from docmerge.ui_streamlit.download_sink import READY_DOWNLOAD_KEY
from docmerge.ui_streamlit.helpers import (
    _get_services,
    _init_state,
    _reset_uploader,
    _to_candidates,
    _trigger_rerun,
)


def _render_header(services: dict) -> None:
    session = services["session"]
    cols = st.columns([3, 1])
    cols[0].caption(f"Signed in as: **{session.user.email}**")
    if cols[1].button("Sign out"):
        session.sign_out()
        st.session_state[READY_DOWNLOAD_KEY] = None
        _trigger_rerun()


def _render_uploader(workspace: Workspace) -> None:
    uploaded = st.file_uploader(
        "Drag and drop DOCX / DOC files here, or click to choose",
        type=["docx", "doc"],
        accept_multiple_files=True,
        key=f"uploader-{st.session_state['upload_key']}",
        disabled=workspace.is_busy,
    )
    if not uploaded:
        return
    with st.spinner("Uploading files..."):
        workspace.add_files(_to_candidates(uploaded))
    _reset_uploader()
    _trigger_rerun()


def _render_file_list(workspace: Workspace) -> None:
    files = workspace.files
    if not files:
        st.info("No files uploaded yet")
        return
    st.subheader(f"Uploaded files ({len(files)})")
    for accepted in files:
        cols = st.columns([6, 1])
        with cols[0].expander(f"{accepted.name} ({format_size_mb(accepted.size)})"):
            for label, value in file_detail_rows(accepted):
                st.markdown(f"**{label}:** {value}")
        if cols[1].button("Remove", key=f"remove_{accepted.file_id}", disabled=workspace.is_busy):
            workspace.remove_file(accepted.file_id)
            _trigger_rerun()


def _render_actions(workspace: Workspace) -> None:
    cols = st.columns(2)
    markdown_clicked = cols[0].button(
        "Download Markdown",
        type="primary",
        disabled=not workspace.can_convert,
    )
    text_clicked = cols[1].button("Download Text", disabled=not workspace.can_convert)
    requested = None
    if markdown_clicked:
        requested = OutputFormat.MARKDOWN
    elif text_clicked:
        requested = OutputFormat.TEXT
    if requested is not None:
        st.session_state[READY_DOWNLOAD_KEY] = None
        with st.spinner("Converting files..."):
            workspace.convert_and_download(requested)

    ready = st.session_state.get(READY_DOWNLOAD_KEY)
    if ready:
        st.success(f"Conversion complete: {ready['file_name']}")
        st.download_button(
            label=f"Save {ready['file_name']}",
            data=ready["data"],
            file_name=ready["file_name"],
            mime=ready["mime"],
        )


def main() -> None:
    st.set_page_config(page_title="DOCX to Markdown Converter", page_icon="📄", layout="centered")
    configure_logging(LOG_LEVEL)
    _init_state()
    try:
        services = _get_services()
    except RuntimeError as exc:
        st.error(str(exc))
        return
    session = services["session"]
    workspace: Workspace = services["workspace"]

    if session.status is SessionStatus.LOADING:
        with st.spinner("Checking session..."):
            session.start()

    st.title("DOCX to Markdown Converter")
    if session.user is None:
        if render_sign_in(session):
            _trigger_rerun()
        return

    _render_header(services)
    _render_uploader(workspace)
    _render_file_list(workspace)
    _render_actions(workspace)
    if workspace.error:
        st.error(workspace.error)


if __name__ == "__main__":
    main()
