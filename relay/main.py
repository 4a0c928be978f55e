"""Relay server. Run from repo root: uvicorn relay.main:app --reload"""
import logging
from typing import Optional

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.core.config import Settings
from relay.models.schemas import (
    ErrorResponse,
    PollResponse,
    SubmitResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from relay.extract.summarizer import Summarizer
from relay.guardrails.errors import (
    ClientInputError,
    ProviderError,
    as_http_400,
    as_http_500,
    error_envelope_handler,
    validation_error_handler,
)
from relay.observability.middleware import RequestTimingMiddleware, get_request_id
from relay.transcribe.assemblyai import AssemblyAIClient
from relay.transcribe.jobs import ERROR, poll_job, submit_audio
from relay.transcribe.uploads import staged_upload

logger = logging.getLogger(__name__)

APP_TITLE = "Audio Transcription Relay"


def create_app(settings: Settings) -> FastAPI:
    """Build the relay application. Provider clients are created from settings here and kept on app.state; they hold configuration only, no per-request state."""
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title=APP_TITLE)
    app.state.settings = settings
    app.state.transcriber = AssemblyAIClient(settings.assemblyai_api_key, settings.assemblyai_base_url)
    app.state.summarizer = Summarizer(settings)

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, error_envelope_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # -------------------------
    # Root
    # -------------------------

    @app.get("/")
    def root():
        """Returns a minimal welcome payload with app name and docs URL."""
        return {"app": APP_TITLE, "docs": "/docs"}

    @app.get("/health")
    def health():
        """Returns 200 OK with status. Used by load balancers and probes to check if the relay is up."""
        return {"status": "ok"}

    # -------------------------
    # Submit audio
    # -------------------------

    @app.post(
        "/transcribe",
        response_model=SubmitResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def transcribe(request: Request, audio: Optional[UploadFile] = File(None)):
        """Stages the uploaded audio, forwards it to the transcription provider and returns the provider job id.
        Does not wait for the transcript; the staged file is deleted once the provider calls return, on success or failure."""
        try:
            if audio is None:
                raise ClientInputError("No audio file provided.")
            with staged_upload(audio.file, audio.filename, settings.upload_dir) as path:
                job_id = submit_audio(request.app.state.transcriber, path)
        except ClientInputError as e:
            raise as_http_400(e)
        except ProviderError as e:
            raise as_http_500(e, request_id=get_request_id(request))

        logger.info("submitted job_id=%s file=%s", job_id, audio.filename)
        return SubmitResponse(job_id=job_id)

    # -------------------------
    # Poll job
    # -------------------------

    @app.get(
        "/transcription/{job_id}",
        response_model=PollResponse,
        response_model_exclude_none=True,
    )
    def transcription(job_id: str, request: Request):
        """Returns the job's current status, plus the transcript once completed.
        Provider failures come back as {"status": "error", "error": ...} so the client never parses provider error shapes."""
        try:
            job = poll_job(request.app.state.transcriber, job_id)
        except ProviderError as e:
            logger.error("poll_failed job_id=%s request_id=%s: %s", job_id, get_request_id(request), e, exc_info=e)
            return JSONResponse(
                status_code=500,
                content={"status": ERROR, "error": "Internal server error"},
            )

        return PollResponse(status=job.status, transcription=job.transcript_text, error=job.error)

    # -------------------------
    # Summarize
    # -------------------------

    @app.post(
        "/summarize",
        response_model=SummarizeResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def summarize(req: SummarizeRequest, request: Request):
        """Summarizes completed transcript text into newline-delimited points. Empty text is rejected before any provider call."""
        try:
            summary = request.app.state.summarizer.summarize(req.text)
        except ClientInputError as e:
            raise as_http_400(e)
        except ProviderError as e:
            raise as_http_500(e, "Failed to generate summary.", get_request_id(request))

        return SummarizeResponse(summary=summary)

    return app


app = create_app(Settings.from_env())
