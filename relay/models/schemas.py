from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class SubmitResponse(BaseModel):
    """Response for POST /transcribe: the provider job id, returned before transcription finishes."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", min_length=1, description="Provider transcription job id")


class PollResponse(BaseModel):
    """Response for GET /transcription/{job_id}. transcription is present only once status is completed; error only when status is error."""

    status: str = Field(..., description="queued | processing | completed | error")
    transcription: Optional[str] = None
    error: Optional[str] = None


class SummarizeRequest(BaseModel):
    text: Optional[str] = Field(None, description="Completed transcript text to summarize")


class SummarizeResponse(BaseModel):
    summary: str = Field(..., description="One summary point per line, no leading bullet characters")


class ErrorResponse(BaseModel):
    error: str
