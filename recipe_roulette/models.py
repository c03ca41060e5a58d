"""
Recipe and view-state models for the Random Recipe viewer.

NormalizedRecipe is the only recipe shape the presenter and the UI see. Connectors map the
provider's raw records into it (see connectors.edamam_connector.normalize_recipe).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class NormalizedRecipe(BaseModel):
    """
    A recipe reduced to what the card needs.

    Every field has a default so a record missing any subset of fields still normalizes.
    """
    title: str = Field(default="Untitled", description="Recipe title")
    image: str = Field(default="", description="Image URL, empty when the provider has none")
    url: str = Field(default="#", description="Link to the original recipe page")
    source: str = Field(default="", description="Publisher name, empty when unknown")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "Greek Salad",
                "image": "https://edamam-product-images.s3.amazonaws.com/web-img/greek-salad.jpg",
                "url": "https://www.example.com/greek-salad",
                "source": "Example Kitchen",
            }
        }
    )


class FetchState(str, Enum):
    """Lifecycle of the presenter's current fetch."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
