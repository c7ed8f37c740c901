# app/taxonomy.py
from typing import Any, Dict, List, Mapping

from app.config import get_logger
from app.schemas import CategoryHierarchyResult

logger = get_logger(__name__)

PATH_SEPARATOR = " > "


class CategoryInputError(ValueError):
    """Caller supplied an unusable category list. Maps to a 400 response."""


def split_path(path: str) -> List[str]:
    # Only the first "/" is treated as a separator, e.g. "Home/Kitchen > Pans"
    return [part.strip() for part in path.replace("/", ">", 1).split(">")]


def build_hierarchy(paths: List[str]) -> Dict[str, List[str]]:
    """
    Turn flat category paths into cumulative per-level labels.

    ["Jewelry > Earrings > Studs", "Jewelry > Rings"] gives
      - lvl0: ["Jewelry"]
      - lvl1: ["Jewelry > Earrings", "Jewelry > Rings"]
      - lvl2: ["Jewelry > Earrings > Studs"]

    Values keep their first-appearance order and never repeat within a level.
    """
    hierarchy: Dict[str, List[str]] = {}

    for path in paths:
        parts = split_path(path)
        for i in range(len(parts)):
            level = hierarchy.setdefault(f"lvl{i}", [])
            value = PATH_SEPARATOR.join(parts[: i + 1])
            if value not in level:
                level.append(value)

    return hierarchy


def _attribute_values(record: Mapping[str, Any], attribute: str) -> List[str]:
    value = record.get(attribute) if isinstance(attribute, str) else None
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


def process_categories(categories: Any, record: Mapping[str, Any]) -> CategoryHierarchyResult:
    """
    Build the category output straight from record attributes, no model involved.

    Each category descriptor names the record attributes holding its paths:
    {"type": "collection", "attributes": ["collection_path", "tags"]}
    """
    if not isinstance(categories, list) or not categories:
        raise CategoryInputError("No valid categories provided.")

    values: List[str] = []
    for category in categories:
        category = category if isinstance(category, dict) else {}
        attributes = category.get("attributes")
        if not isinstance(attributes, list) or not attributes:
            raise CategoryInputError(f"Invalid attributes in category '{category.get('type')}'")

        for attribute in attributes:
            values.extend(_attribute_values(record, attribute))

    logger.info(f"Resolved {len(values)} category values from {len(categories)} categories")
    return CategoryHierarchyResult(
        category_identifiers=values,
        hierarchical_categories=build_hierarchy(values),
    )
