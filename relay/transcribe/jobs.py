"""Transcription jobs: a read-only view of provider job state, rebuilt on every poll."""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

QUEUED = "queued"
PROCESSING = "processing"
COMPLETED = "completed"
ERROR = "error"

NO_TRANSCRIPTION = "No transcription available."
TRANSCRIPTION_FAILED = "Transcription failed."


class TranscriptionProvider(Protocol):
    def upload(self, path: str) -> str: ...

    def create_transcript(self, audio_url: str) -> str: ...

    def get_transcript(self, transcript_id: str) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class Job:
    """One provider transcription job: id, status (queued | processing | completed | error), transcript text once completed, provider error message if it failed.
    The relay never stores or mutates jobs; each poll builds a fresh one."""

    job_id: str
    status: str
    transcript_text: Optional[str] = None
    error: Optional[str] = None


def submit_audio(provider: TranscriptionProvider, path: str) -> str:
    """Upload the staged file, request transcription and return the job id without waiting for the result."""
    audio_url = provider.upload(path)
    return provider.create_transcript(audio_url)


def poll_job(provider: TranscriptionProvider, job_id: str) -> Job:
    """Query the provider once and normalize its answer into a Job."""
    data = provider.get_transcript(job_id)
    status = data.get("status") or ERROR

    if status == COMPLETED:
        return Job(job_id=job_id, status=COMPLETED, transcript_text=data.get("text") or NO_TRANSCRIPTION)
    if status == ERROR:
        return Job(job_id=job_id, status=ERROR, error=data.get("error") or TRANSCRIPTION_FAILED)
    return Job(job_id=job_id, status=status)
