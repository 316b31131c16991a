"""Tests for nanobanana CLI commands."""

from __future__ import annotations

import base64
import json

from click.testing import CliRunner

from nanobanana.cli import cli

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
IMAGE_RESPONSE = {
    "candidates": [
        {
            "content": {
                "parts": [
                    {
                        "inlineData": {
                            "mimeType": "image/png",
                            "data": base64.b64encode(PNG_BYTES).decode(),
                        }
                    }
                ]
            }
        }
    ]
}


class TestSchemaCommand:
    def test_text_to_image(self):
        result = CliRunner().invoke(cli, ["schema"])
        assert result.exit_code == 0
        param = json.loads(result.output)
        assert param["function"]["name"] == "nano_banana_text_to_image"

    def test_image_to_image(self):
        result = CliRunner().invoke(cli, ["schema", "--mode", "image-to-image"])
        assert result.exit_code == 0
        param = json.loads(result.output)
        assert param["function"]["parameters"]["required"] == ["prompt", "image"]


class TestSettingsCommand:
    def test_secret_is_masked(self, monkeypatch):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "super-secret-key")
        result = CliRunner().invoke(cli, ["settings"])
        assert result.exit_code == 0
        assert "****" in result.output
        assert "super-secret-key" not in result.output


class TestGenerateCommand:
    def test_prints_data_url(self, monkeypatch, http_session):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "cli-key")
        http_session.respond_post(json_data=IMAGE_RESPONSE)

        result = CliRunner().invoke(cli, ["generate", "a banana", "--model-version", "3"])

        assert result.exit_code == 0
        assert "data:image/png;base64," in result.output
        (_, url, kwargs), = http_session.posts
        assert url.endswith("/gemini-3-pro-image-preview:generateContent")
        assert kwargs["headers"]["x-goog-api-key"] == "cli-key"

    def test_writes_output_file(self, monkeypatch, http_session, tmp_path):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "cli-key")
        http_session.respond_post(json_data=IMAGE_RESPONSE)
        target = tmp_path / "out" / "banana.png"

        result = CliRunner().invoke(
            cli,
            [
                "generate",
                "a banana",
                "--aspect-ratio",
                "16:9",
                "--config",
                '{"temperature": 0.5}',
                "-o",
                str(target),
            ],
        )

        assert result.exit_code == 0
        assert target.read_bytes() == PNG_BYTES
        config = http_session.posts[0][2]["json"]["generationConfig"]
        assert config["imageConfig"] == {"aspectRatio": "16:9"}
        assert config["temperature"] == 0.5

    def test_image_option_switches_mode(self, monkeypatch, http_session):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "cli-key")
        http_session.respond_post(json_data=IMAGE_RESPONSE)

        result = CliRunner().invoke(
            cli, ["generate", "add a hat", "--image", "data:image/jpeg;base64,QUJD"]
        )

        assert result.exit_code == 0
        parts = http_session.posts[0][2]["json"]["contents"][0]["parts"]
        assert parts[0] == {"inline_data": {"mime_type": "image/jpeg", "data": "QUJD"}}

    def test_raw_response_is_printed(self, monkeypatch, http_session):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "cli-key")
        http_session.respond_post(
            json_data={"candidates": [{"content": {"parts": [{"text": "no"}]}, "finishReason": "SAFETY"}]}
        )

        result = CliRunner().invoke(cli, ["generate", "x"])

        assert result.exit_code == 0
        assert '"finishReason": "SAFETY"' in result.output

    def test_missing_api_key(self, http_session):
        result = CliRunner().invoke(cli, ["generate", "a banana"])
        assert result.exit_code == 1
        assert "Nano Banana API Key is required" in result.output
        assert http_session.calls == []

    def test_api_error(self, monkeypatch, http_session):
        monkeypatch.setenv("NANO_BANANA_API_KEY", "cli-key")
        http_session.respond_post(status=500, body=b"boom")

        result = CliRunner().invoke(cli, ["generate", "a banana"])

        assert result.exit_code == 1
        assert "Failed to generate image with Nano Banana" in result.output
