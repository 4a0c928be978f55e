# Main page content for the Audio Transcriber.
import logging

import requests
import streamlit as st

from ui.api_client import RelayClient
from ui.export import (
    DOC_FILENAME,
    DOC_MIME,
    TEXT_FILENAME,
    TEXT_MIME,
    export_doc,
    export_text,
    summary_list_html,
)
from ui.session import ClientSession

logger = logging.getLogger(__name__)

ACCEPTED_AUDIO_FORMATS = ["mp3", "wav", "m4a", "ogg", "flac"]


def get_session() -> ClientSession:
    """Return this browser session's ClientSession, creating it on first render."""
    if "relay_session" not in st.session_state:
        st.session_state.relay_session = ClientSession()
    return st.session_state.relay_session


def _status_badge(label: str, color: str) -> None:
    """Render a colored status badge."""
    st.markdown(
        f'<div style="background:{color};color:white;padding:6px 14px;border-radius:6px;'
        'display:inline-block;font-weight:500;">{}</div>'.format(label),
        unsafe_allow_html=True,
    )


def run_main() -> None:
    """Render the transcriber page: upload, status check, transcript, summary and exports."""
    st.set_page_config(page_title="Audio Transcriber", layout="centered")
    st.title("🎙️ Audio Transcriber")

    session = get_session()
    client = RelayClient()

    # -------------------------
    # Upload
    # -------------------------
    uploaded = st.file_uploader(
        "Drag & drop an audio file or click to upload",
        type=ACCEPTED_AUDIO_FORMATS,
        accept_multiple_files=False,
        key="audio_upload",
    )
    if uploaded is not None and uploaded.name != session.selected_file:
        logger.info("File selected: %s", uploaded.name)
        session.select_file(uploaded.name)

    if st.button("⬆️ Upload & Transcribe", key="upload_btn"):
        if uploaded is None:
            st.warning("Please upload an audio file.")
        else:
            try:
                job_id = client.submit_audio(uploaded.name, uploaded.getvalue(), uploaded.type or "application/octet-stream")
                session.record_submission(job_id)
            except (requests.exceptions.RequestException, KeyError, ValueError):
                logger.exception("Error uploading file")

    # -------------------------
    # Status (manual polling)
    # -------------------------
    if session.job_id:
        if st.button("🔄 Check Transcription Status", key="status_btn"):
            try:
                payload = client.poll(session.job_id)
                logger.info("API Response: %s", payload)
                session.record_poll(payload)
            except (requests.exceptions.RequestException, ValueError):
                logger.exception("Error checking transcription")
        if session.status_text == "Completed":
            _status_badge(session.status_text, "#28a745")
        elif session.status_text:
            st.caption(session.status_text)

    # -------------------------
    # Transcript + summary
    # -------------------------
    if session.transcript_text:
        st.subheader("Transcription")
        st.write(session.transcript_text)

        if session.show_summarize and st.button("🧾 Generate Summary", key="summary_btn"):
            try:
                summary = client.summarize(session.transcript_text)
                session.record_summary(summary)
            except (requests.exceptions.RequestException, ValueError):
                logger.exception("Error generating summary")

        if session.show_summary:
            st.subheader("Summary")
            st.markdown(summary_list_html(session.summary_text), unsafe_allow_html=True)

            col_txt, col_doc = st.columns(2)
            with col_txt:
                st.download_button(
                    "Export to .txt",
                    data=export_text(session.transcript_text, session.summary_text),
                    file_name=TEXT_FILENAME,
                    mime=TEXT_MIME,
                    key="export_txt",
                )
            with col_doc:
                st.download_button(
                    "Export to .doc",
                    data=export_doc(session.transcript_text, session.summary_text),
                    file_name=DOC_FILENAME,
                    mime=DOC_MIME,
                    key="export_doc",
                )
