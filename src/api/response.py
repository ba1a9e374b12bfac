"""Response builders for the CV endpoint."""

from urllib.parse import quote

from fastapi.responses import PlainTextResponse, StreamingResponse

from src.config.constants import CV_CACHE_CONTROL, PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE
from src.infrastructure.storage.blob_client import BlobDownload
from src.services.errors import CvGateError


def build_text_response(status_code: int, message: str) -> PlainTextResponse:
    """Plain-text response used for every failure branch."""
    return PlainTextResponse(
        content=message,
        status_code=status_code,
        headers={"Content-Type": TEXT_MEDIA_TYPE},
    )


def build_error_response(error: CvGateError) -> PlainTextResponse:
    return build_text_response(error.status_code, error.message)


def content_disposition(filename: str) -> str:
    """Build an inline Content-Disposition header value for ``filename``.

    Names outside ASCII get an RFC 5987 ``filename*`` parameter next to an
    ASCII fallback, since header values must be latin-1 encodable.
    """
    fallback = filename.replace('"', "'")
    if fallback.isascii():
        return f'inline; filename="{fallback}"'
    ascii_name = fallback.encode("ascii", "replace").decode("ascii")
    return f"inline; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def build_pdf_response(download: BlobDownload) -> StreamingResponse:
    """Stream a blob download back as an inline PDF."""
    headers = {
        "Content-Disposition": content_disposition(download.blob_name),
        "Cache-Control": CV_CACHE_CONTROL,
    }
    if download.size is not None:
        headers["Content-Length"] = str(download.size)

    return StreamingResponse(
        download.chunks,
        status_code=200,
        media_type=PDF_MEDIA_TYPE,
        headers=headers,
    )
