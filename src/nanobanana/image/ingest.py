"""
Normalization of image references into inline request parts.

An image argument may be a data URL, a bare or truncated base64 string, or an
http(s) URL. Every form is turned into an ImagePart holding a MIME type and a
base64 payload.
"""

import base64
import re

import aiohttp

from nanobanana.config.logging_config import get_logger
from nanobanana.image.errors import FetchError
from nanobanana.image.types import DEFAULT_MIME_TYPE, ImagePart

log = get_logger(__name__)

DATA_URL_PATTERN = re.compile(r"data:([^;]+);base64,(.+)")
BASE64_MARKER = "base64,"


def parse_data_url(value: str) -> ImagePart | None:
    """Split a `data:<mime>;base64,<payload>` string, or return None."""
    match = DATA_URL_PATTERN.fullmatch(value)
    if match is None:
        return None
    return ImagePart(mime_type=match.group(1), data=match.group(2))


def is_remote_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


async def fetch_image(
    url: str, session: aiohttp.ClientSession | None = None
) -> ImagePart:
    """Download an image and return it base64-encoded.

    Raises:
        FetchError: If the server answers with a non-2xx status.
    """
    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await fetch_image(url, own_session)

    log.debug(f"Fetching input image from {url}")
    async with session.get(url) as response:
        if not 200 <= response.status < 300:
            reason = response.reason or ""
            raise FetchError(
                f"Failed to fetch image from URL: {reason}",
                status=response.status,
                text=reason,
            )
        body = await response.read()
        content_type = response.headers.get("Content-Type")

    log.debug(f"Fetched {len(body)} bytes ({content_type or 'no content type'})")
    return ImagePart(
        mime_type=content_type or DEFAULT_MIME_TYPE,
        data=base64.b64encode(body).decode("ascii"),
    )


async def ingest_image(
    reference: str, session: aiohttp.ClientSession | None = None
) -> ImagePart:
    """Normalize an image reference into an ImagePart.

    Forms are checked in this order:

    1. `data:<mime>;base64,<payload>` keeps the declared MIME type.
    2. Any string containing `base64,` uses the text after the last marker.
    3. `http://` and `https://` URLs are downloaded.
    4. Anything else is passed through unchanged as the payload.

    The payload is not validated; a malformed string is sent as-is.
    """
    part = parse_data_url(reference)
    if part is not None:
        return part

    if BASE64_MARKER in reference:
        _, _, payload = reference.rpartition(BASE64_MARKER)
        return ImagePart(mime_type=DEFAULT_MIME_TYPE, data=payload)

    if is_remote_url(reference):
        return await fetch_image(reference, session)

    return ImagePart(mime_type=DEFAULT_MIME_TYPE, data=reference)
