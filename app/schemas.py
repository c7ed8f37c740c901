# app/schemas.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ModelReply(BaseModel):
    """
    JSON object the language model is asked to return.
    Example:
    {
      "main_category": "Jewelry",
      "subcategory": "Ear Cuffs",
      "characteristics": ["gold", "handcrafted"]
    }
    """
    main_category: str
    subcategory: str
    characteristics: Optional[List[str]] = None

    @field_validator("characteristics", mode="before")
    @classmethod
    def _coerce_characteristics(cls, value: Any) -> Any:
        # models sometimes send numbers in the list, or one comma-joined string
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, list):
            return [str(v).lower() if isinstance(v, bool) else str(v) for v in value if v is not None]
        return value


class ProductDetails(BaseModel):
    """
    Normalized analysis result, serialized with camelCase keys.
    Example:
    {
      "categoryIdentifiers": ["Jewelry > Ear Cuffs", "Jewelry"],
      "hierarchicalCategories": {"lvl0": "Jewelry", "lvl1": "Jewelry > Ear Cuffs"},
      "productCharacteristics": ["gold", "handcrafted"]
    }
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category_identifiers: List[str] = Field(alias="categoryIdentifiers")
    hierarchical_categories: Dict[str, str] = Field(alias="hierarchicalCategories")
    product_characteristics: List[str] = Field(default_factory=list, alias="productCharacteristics")


class CategoryHierarchyResult(BaseModel):
    """
    Output of the offline category path: every resolved path plus its levels.
    Example:
    {
      "categoryIdentifiers": ["Home > Kitchen", "Home > Garden"],
      "hierarchicalCategories": {
        "lvl0": ["Home"],
        "lvl1": ["Home > Kitchen", "Home > Garden"]
      }
    }
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    category_identifiers: List[str] = Field(alias="categoryIdentifiers")
    hierarchical_categories: Dict[str, List[str]] = Field(alias="hierarchicalCategories")


class SuccessResponse(BaseModel):
    message: str = "Successfully processed the request"
    product_details: Dict[str, Any] = Field(alias="productDetails")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
