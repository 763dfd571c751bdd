"""
Activity: Analyze Frame — sends a still frame to the multimodal model and
returns a short free-text reading shaped by the active mode and weight.

Independent of the link/job state machine; it only reads the published
weight.
"""

from __future__ import annotations

import logging

import config
from features.jobs.weight import PI_SQUARED_INV
from utils.llm import chat_with_image

log = logging.getLogger(__name__)

FALLBACK_ANSWER = "Signal divergence."

SYSTEM_PROMPT = (
    "You are the Zenith QML engine, a narrator for a camera overlay. "
    "Never mention or infer location data. Limit answers to 2 sentences."
)


def build_prompt(mode: str, weight: float) -> str:
    return (
        f"Mode: {mode}. Q-Weight: {weight:.4f}. "
        f"Zenith Key: {config.PARITY_KEY}. Damping: {PI_SQUARED_INV:.8f}.\n"
        f"Identify semantic blueprint nodes in this room being shaped by the {mode} future."
    )


def analyze_frame(image_b64: str, mode: str, weight: float) -> str:
    """Analyze one frame. Blocking; run it in an executor from async code."""
    log.info("Analyzing frame (mode=%s, weight=%.4f, %d bytes)", mode, weight, len(image_b64))
    answer = chat_with_image(SYSTEM_PROMPT, build_prompt(mode, weight), image_b64)
    return answer.strip() or FALLBACK_ANSWER
