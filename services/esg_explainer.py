"""
ESG news explainer -- turns a policy news item into a short MSME brief
via an OpenAI-compatible chat completion.
"""

from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAI

import config_env

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a concise ESG policy analyst for Indian MSMEs. "
    "Explain updates in plain English, be pragmatic, and focus on actions small firms can take. "
    "Prefer bullets. Avoid hype. Cite no private data."
)


class ExplainerNotConfigured(RuntimeError):
    """No LLM API key is configured on the server."""


def build_prompt(
    title: Optional[str] = None,
    summary: Optional[str] = None,
    source: Optional[str] = None,
    published_at: Optional[str] = None,
) -> str:
    lines = [
        "News item:",
        f"Title: {title}" if title else None,
        f"Source: {source}" if source else None,
        f"Published: {published_at}" if published_at else None,
        f"Summary: {summary}" if summary else None,
        "",
        "Write a short MSME-focused brief with sections:",
        "• What it means",
        "• Who is affected",
        "• Immediate actions (3 bullet points)",
        "Keep it under 160 words.",
    ]
    # keep the blank separator line, drop absent fields
    return "\n".join(line for line in lines if line is not None)


class ESGExplainer:
    """Thin wrapper around the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        api_key = api_key if api_key is not None else config_env.LLM_API_KEY
        if client is None and not api_key:
            raise ExplainerNotConfigured("OPENAI_API_KEY is not set on the server")
        self.model = model or config_env.ESG_EXPLAIN_MODEL
        self.temperature = (
            temperature if temperature is not None else config_env.ESG_EXPLAIN_TEMPERATURE
        )
        self.client = client or OpenAI(
            api_key=api_key,
            base_url=base_url or config_env.LLM_BASE_URL,
            timeout=config_env.LLM_TIMEOUT,
        )

    def explain(
        self,
        title: Optional[str] = None,
        summary: Optional[str] = None,
        source: Optional[str] = None,
        published_at: Optional[str] = None,
    ) -> str:
        prompt = build_prompt(title, summary, source, published_at)
        logger.info("Explaining ESG item with %s: %s", self.model, (title or summary or "")[:80])
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            )
        except Exception as e:
            logger.error("ESG explain request failed: %s", e)
            raise

        if not completion.choices:
            return ""
        return (completion.choices[0].message.content or "").strip()
