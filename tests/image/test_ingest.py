import base64

import pytest

from nanobanana.image.errors import FetchError
from nanobanana.image.ingest import ingest_image, parse_data_url


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "mime_type,payload",
    [
        ("image/png", "iVBORw0KGgo="),
        ("image/jpeg", "/9j/4AAQSkZJRg=="),
        ("image/webp", "UklGRg"),
    ],
)
async def test_data_url_yields_declared_mime_and_payload(mime_type, payload):
    part = await ingest_image(f"data:{mime_type};base64,{payload}")
    assert part.mime_type == mime_type
    assert part.data == payload


def test_parse_data_url_rejects_other_strings():
    assert parse_data_url("https://example.com/a.png") is None
    assert parse_data_url("data:image/png;base64,") is None


@pytest.mark.asyncio
async def test_partial_base64_uses_text_after_last_marker():
    part = await ingest_image("garbage;base64,AAA;base64,BBBB")
    assert part.mime_type == "image/png"
    assert part.data == "BBBB"


@pytest.mark.asyncio
async def test_truncated_data_url_falls_back_to_png():
    part = await ingest_image("data:;base64,QUJD")
    assert part.mime_type == "image/png"
    assert part.data == "QUJD"


@pytest.mark.asyncio
async def test_plain_string_passes_through(http_session):
    part = await ingest_image("QUJDREVG")
    assert part.mime_type == "image/png"
    assert part.data == "QUJDREVG"
    assert http_session.calls == []


@pytest.mark.asyncio
async def test_url_is_fetched_and_encoded(http_session):
    url = "https://example.com/cat.jpg"
    http_session.respond_get(url, body=b"\xff\xd8jpeg", headers={"Content-Type": "image/jpeg"})

    part = await ingest_image(url)

    assert part.mime_type == "image/jpeg"
    assert base64.b64decode(part.data) == b"\xff\xd8jpeg"
    assert http_session.gets == [("GET", url, {})]


@pytest.mark.asyncio
async def test_url_without_content_type_defaults_to_png(http_session):
    url = "http://example.com/blob"
    http_session.respond_get(url, body=b"png-bytes")

    part = await ingest_image(url)

    assert part.mime_type == "image/png"
    assert part.data == base64.b64encode(b"png-bytes").decode()


@pytest.mark.asyncio
async def test_failed_fetch_raises_with_status_text(http_session):
    url = "https://example.com/missing.png"
    http_session.respond_get(url, status=404, reason="Not Found")

    with pytest.raises(FetchError, match="Failed to fetch image from URL: Not Found") as exc:
        await ingest_image(url)
    assert exc.value.status == 404


@pytest.mark.asyncio
async def test_explicit_session_is_used(http_session):
    url = "https://example.com/a.gif"
    http_session.respond_get(url, body=b"GIF89a", headers={"Content-Type": "image/gif"})

    part = await ingest_image(url, session=http_session)
    assert part.mime_type == "image/gif"
