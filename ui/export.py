"""Local export of the transcript and summary; no relay round-trip."""
import html

TEXT_FILENAME = "transcription.txt"
TEXT_MIME = "text/plain"
DOC_FILENAME = "transcription.doc"
DOC_MIME = "application/msword"


def summary_list_html(summary: str) -> str:
    """One escaped <li> per newline-delimited summary line, so model markdown is shown as plain text."""
    items = "".join(f"<li>{html.escape(line)}</li>" for line in summary.split("\n"))
    return f"<ul>{items}</ul>"


def export_text(transcript: str, summary: str) -> str:
    """Plain text with a labeled transcript section followed by a labeled summary section."""
    return f"Transcription:\n{transcript}\n\nSummary:\n{summary}"


def export_doc(transcript: str, summary: str) -> str:
    """Minimal HTML document (opened by word processors as .doc): transcript in one paragraph, one list item per summary line."""
    return (
        "<html><head><title>Transcription</title></head><body>"
        f"<h1>Transcription</h1><p>{html.escape(transcript)}</p>"
        f"<h2>Summary</h2>{summary_list_html(summary)}"
        "</body></html>"
    )
