from __future__ import annotations

import streamlit as st

from docmerge.errors import AuthError
from docmerge.services.session_watcher import SessionWatcher


def render_sign_in(session: SessionWatcher) -> bool:
    """Render the sign-in form. Returns True once a session was started."""
    st.subheader("Sign in")
    with st.form("sign_in_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        cols = st.columns(2)
        sign_in_clicked = cols[0].form_submit_button("Sign in", type="primary")
        sign_up_clicked = cols[1].form_submit_button("Create account")

    if not (sign_in_clicked or sign_up_clicked):
        return False
    if not email.strip() or not password:
        st.error("Email and password are required.")
        return False
    try:
        if sign_in_clicked:
            session.sign_in(email.strip(), password)
            return True
        user = session.sign_up(email.strip(), password)
    except AuthError as exc:
        st.error(str(exc))
        return False
    if user is None:
        st.info("Check your inbox to confirm the account, then sign in.")
        return False
    return True
