# app/prompts.py
import json
from typing import Any, Mapping

LANGUAGE_INSTRUCTIONS = {
    "en": "Analyze this product and respond in English",
    "es": "Analiza este producto y responde en español",
    "fr": "Analysez ce produit et répondez en français",
    "de": "Analysieren Sie dieses Produkt und antworten Sie auf Deutsch",
    "it": "Analizza questo prodotto e rispondi in italiano",
}
GENERIC_INSTRUCTION = "Analyze this product"

RESPONSE_REQUIREMENTS = """
Response Requirements:
- Respond in the same language as the product data
- main_category: Broadest product category
- subcategory: More specific product type
- characteristics: Array of notable product features

Example Response Structure (English):
{
    "main_category": "Jewelry",
    "subcategory": "Ear Cuffs",
    "characteristics": ["gold", "handcrafted"]
}"""


def _scalar_text(value: Any) -> str | None:
    """Render strings, numbers and booleans; anything else is not product data."""
    if isinstance(value, bool):
        # bool before int: True is an int in Python
        return json.dumps(value)
    if isinstance(value, (int, float, str)):
        return str(value)
    return None


def build_prompt(record: Mapping[str, Any], industry: str, language: str) -> str:
    """
    Build the categorization prompt for one product.

    Scalar fields are listed in the record's own key order, so the same
    record, industry and language always produce the same prompt.
    """
    instruction = LANGUAGE_INSTRUCTIONS.get(language, GENERIC_INSTRUCTION)

    lines = [
        f"{instruction}. Return JSON with:",
        "1. Category hierarchy (main category and subcategories)",
        "2. General product characteristics",
        f"This categorization should be based on the {industry} industry",
        "Product Data:",
    ]
    for key, value in record.items():
        text = _scalar_text(value)
        if text is not None:
            lines.append(f"- {key}: {text}")

    return "\n".join(lines) + "\n" + RESPONSE_REQUIREMENTS
