import copy
import json

from nanobanana.image.response import extract_result, normalize_inline_data
from nanobanana.image.types import ImageResult, RawResult


def test_first_image_part_wins_across_dialects():
    response = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"inline_data": {"mime_type": "image/png", "data": "FIRST"}},
                        {"inlineData": {"mimeType": "image/jpeg", "data": "SECOND"}},
                    ]
                }
            }
        ]
    }
    result = extract_result(response)
    assert isinstance(result, ImageResult)
    assert result.to_string() == "data:image/png;base64,FIRST"


def test_camel_case_dialect():
    response = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Here is your image"},
                        {"inlineData": {"mimeType": "image/webp", "data": "WEBP"}},
                    ]
                }
            }
        ]
    }
    assert extract_result(response).to_string() == "data:image/webp;base64,WEBP"


def test_only_first_candidate_is_examined():
    response = {
        "candidates": [
            {"content": {"parts": [{"text": "no image"}]}},
            {"content": {"parts": [{"inline_data": {"mime_type": "image/png", "data": "X"}}]}},
        ]
    }
    assert isinstance(extract_result(response), RawResult)


def test_missing_mime_type_defaults_to_png():
    part = normalize_inline_data({"inline_data": {"data": "QUJD"}})
    assert part is not None
    assert part.mime_type == "image/png"


def test_part_without_data_is_skipped():
    assert normalize_inline_data({"inline_data": {"mime_type": "image/png", "data": ""}}) is None
    assert normalize_inline_data({"text": "hello"}) is None
    assert normalize_inline_data("not a part") is None


def test_no_image_returns_lossless_raw_response():
    response = {
        "candidates": [
            {
                "content": {"parts": [{"text": "I can't draw that."}]},
                "finishReason": "SAFETY",
                "safetyRatings": [{"category": "HARM_CATEGORY_HARASSMENT", "probability": "HIGH"}],
            }
        ],
        "usageMetadata": {"promptTokenCount": 7},
        "modelVersion": "gemini-2.5-flash-image",
    }
    original = copy.deepcopy(response)

    result = extract_result(response)

    assert isinstance(result, RawResult)
    assert json.loads(result.to_string()) == original


def test_no_candidates_returns_raw_response():
    response = {"promptFeedback": {"blockReason": "PROHIBITED_CONTENT"}}
    result = extract_result(response)
    assert isinstance(result, RawResult)
    assert json.loads(result.to_string()) == response


def test_unexpected_shapes_return_raw_response():
    for response in (
        {"candidates": "nope"},
        {"candidates": [{"content": None}]},
        {"candidates": [{"content": {"parts": {"0": {}}}}]},
        [],
    ):
        result = extract_result(response)
        assert isinstance(result, RawResult)
        assert json.loads(result.to_string()) == response


def test_raw_result_keeps_non_ascii_text():
    response = {"candidates": [{"content": {"parts": [{"text": "Bananen 🍌"}]}}]}
    assert "🍌" in extract_result(response).to_string()
