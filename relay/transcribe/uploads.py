import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from relay.guardrails.errors import ClientInputError

ACCEPTED_AUDIO_FORMATS = ("mp3", "wav", "m4a", "ogg", "flac")


def audio_suffix(filename: Optional[str]) -> str:
    """Return the lower-cased extension (with dot) of an accepted audio file name; raise ClientInputError otherwise."""
    name = (filename or "").strip()
    if not name:
        raise ClientInputError("No audio file provided.")
    ext = os.path.splitext(name)[1].lower().lstrip(".")
    if ext not in ACCEPTED_AUDIO_FORMATS:
        raise ClientInputError(
            f"Unsupported audio format '{ext or name}'. Accepted: {', '.join(ACCEPTED_AUDIO_FORMATS)}."
        )
    return "." + ext


@contextmanager
def staged_upload(source: BinaryIO, filename: Optional[str], upload_dir: str) -> Iterator[str]:
    """Copy an uploaded stream into a temporary file under upload_dir and yield its path.
    The file is removed when the block exits, whether the provider accepted it or not."""
    suffix = audio_suffix(filename)
    os.makedirs(upload_dir, exist_ok=True)
    fd, path = tempfile.mkstemp(suffix=suffix, dir=upload_dir)
    try:
        with os.fdopen(fd, "wb") as out:
            shutil.copyfileobj(source, out)
        yield path
    finally:
        if os.path.exists(path):
            os.remove(path)
