"""Client session state for the transcriber page.

The phase is derived from which fields are filled in, and the two reveal flags
only ever switch on. Nothing here talks to the network; the page calls the
relay and feeds the responses in.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

NO_TRANSCRIPTION = "No transcription available"
NO_SUMMARY = "No summary available."


class Phase(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    SUBMITTED = "submitted"
    TRANSCRIPT_READY = "transcript_ready"
    SUMMARY_READY = "summary_ready"


@dataclass
class ClientSession:
    selected_file: Optional[str] = None
    job_id: Optional[str] = None
    status_text: str = ""
    transcript_text: str = ""
    summary_text: str = ""
    show_summarize: bool = False
    show_summary: bool = False

    @property
    def phase(self) -> Phase:
        if self.summary_text:
            return Phase.SUMMARY_READY
        if self.transcript_text:
            return Phase.TRANSCRIPT_READY
        if self.job_id:
            return Phase.SUBMITTED
        if self.selected_file:
            return Phase.FILE_SELECTED
        return Phase.IDLE

    def select_file(self, name: str) -> None:
        self.selected_file = name

    def record_submission(self, job_id: str) -> None:
        """Store the job id returned by the relay; the user checks status manually from here on."""
        self.job_id = job_id
        self.status_text = "Processing..."

    def record_poll(self, payload: dict) -> None:
        """Apply one poll response. A completed job fills the transcript and reveals the summarize action; any other status only updates the status line."""
        status = payload.get("status") or ""
        if status == "completed":
            self.transcript_text = payload.get("transcription") or NO_TRANSCRIPTION
            self.status_text = "Completed"
            self.show_summarize = True
        elif status == "error":
            self.status_text = f"error: {payload.get('error') or 'unknown'}"
        else:
            self.status_text = status

    def record_summary(self, summary: str) -> None:
        self.summary_text = summary or NO_SUMMARY
        self.show_summary = True

    def summary_items(self) -> List[str]:
        """One display item per newline-delimited summary line."""
        return self.summary_text.split("\n") if self.summary_text else []
