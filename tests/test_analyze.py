"""Tests for frame analysis (OpenAI client mocked)."""

from unittest.mock import MagicMock, patch

import pytest

from activities.analyze import FALLBACK_ANSWER, analyze_frame, build_prompt
from utils import llm


def _completion(text):
    resp = MagicMock()
    resp.choices = [MagicMock()]
    resp.choices[0].message.content = text
    return resp


@pytest.fixture
def fake_openai():
    client = MagicMock()
    with patch.object(llm, "get_client", return_value=client):
        yield client


def test_prompt_embeds_mode_and_weight():
    prompt = build_prompt("HEAT", 0.4493)
    assert "HEAT" in prompt
    assert "0.4493" in prompt
    assert "00**11--1" in prompt


def test_sends_image_as_data_url(fake_openai):
    fake_openai.chat.completions.create.return_value = _completion("Two nodes align.")
    assert analyze_frame("QUJD", "MATRIX", 0.5) == "Two nodes align."

    kwargs = fake_openai.chat.completions.create.call_args.kwargs
    parts = kwargs["messages"][1]["content"]
    assert parts[0]["type"] == "text"
    assert parts[1]["image_url"]["url"] == "data:image/jpeg;base64,QUJD"


def test_existing_data_url_kept(fake_openai):
    fake_openai.chat.completions.create.return_value = _completion("ok")
    analyze_frame("data:image/png;base64,QUJD", "MATRIX", 0.5)
    parts = fake_openai.chat.completions.create.call_args.kwargs["messages"][1]["content"]
    assert parts[1]["image_url"]["url"] == "data:image/png;base64,QUJD"


def test_empty_answer_falls_back(fake_openai):
    fake_openai.chat.completions.create.return_value = _completion("")
    assert analyze_frame("QUJD", "GHOST", 0.0) == FALLBACK_ANSWER
