# app/analysis.py
"""
LLM-backed product analysis.

Implements:
- Language-aware prompt construction for one product record
- A single low-temperature chat completion per product (no retries)
- Tolerant reply parsing (Markdown fences stripped, schema validated)
- Uniform "analysis failed" error for every downstream failure
- Structured logging and timings
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Mapping

import openai
from pydantic import ValidationError

from app.config import LLM_MODEL, LLM_TEMPERATURE, OPENAI_API_KEY, get_logger
from app.language import resolve_language
from app.prompts import build_prompt
from app.schemas import ModelReply, ProductDetails
from app.taxonomy import PATH_SEPARATOR

logger = get_logger(__name__)


class AnalysisError(RuntimeError):
    """Product analysis could not be completed. Maps to a 500 response."""


# ----------------------------- Client ----------------------------------------
def create_client(api_key: str = OPENAI_API_KEY) -> openai.AsyncOpenAI:
    """Build the authenticated client shared by all requests."""
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY is missing. Set it in your .env before running.")
    return openai.AsyncOpenAI(api_key=api_key)


# ----------------------------- Reply parsing ---------------------------------
@dataclass(frozen=True)
class ReplyParseResult:
    reply: ModelReply | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.reply is not None


def _strip_fences(text: str) -> str:
    text = text.strip()
    # ```json ... ``` or ``` ... ```
    if text.startswith("```"):
        lines = text.split("\n")
        text = "\n".join(lines[1:-1] if lines[-1].strip() == "```" else lines[1:])
    return text


def parse_model_reply(raw: str | None) -> ReplyParseResult:
    """Decode and validate the model's JSON reply without raising."""
    if not raw or not raw.strip():
        return ReplyParseResult(error="empty model reply")

    try:
        data = json.loads(_strip_fences(raw))
    except json.JSONDecodeError as e:
        return ReplyParseResult(error=f"reply is not valid JSON: {e}")

    try:
        return ReplyParseResult(reply=ModelReply.model_validate(data))
    except ValidationError as e:
        return ReplyParseResult(error=f"reply does not match the expected fields: {e.error_count()} error(s)")


def shape_result(reply: ModelReply) -> ProductDetails:
    hierarchical = f"{reply.main_category}{PATH_SEPARATOR}{reply.subcategory}"
    return ProductDetails(
        category_identifiers=[hierarchical, reply.main_category],
        hierarchical_categories={"lvl0": reply.main_category, "lvl1": hierarchical},
        product_characteristics=reply.characteristics or [],
    )


# ----------------------------- Analyzer --------------------------------------
class ProductAnalyzer:
    """Categorizes a product record with one chat completion."""

    def __init__(self, client: Any, model: str = LLM_MODEL, temperature: float = LLM_TEMPERATURE):
        self.client = client
        self.model = model
        self.temperature = temperature

    async def _complete(self, prompt: str) -> str | None:
        t0 = time.perf_counter()
        resp: Any = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
        )
        llm_ms = (time.perf_counter() - t0) * 1000
        logger.info(f"Model {self.model} answered in {llm_ms:.1f} ms")
        return resp.choices[0].message.content

    async def analyze(self, record: Mapping[str, Any], industry: str) -> ProductDetails:
        """
        Resolve language -> build prompt -> call model -> parse -> shape.

        Any failure along the way is logged and re-raised as AnalysisError;
        callers never see a partial result.
        """
        try:
            language = resolve_language(record)
            prompt = build_prompt(record, industry, language)
            logger.debug(f"Prompt (language={language}, industry={industry}):\n{prompt}")

            content = await self._complete(prompt)
            parsed = parse_model_reply(content)
            if not parsed.ok:
                raise ValueError(parsed.error)

            assert parsed.reply is not None
            return shape_result(parsed.reply)
        except Exception as e:
            logger.error(f"Error analyzing product: {e}")
            raise AnalysisError("Product analysis failed") from e
