# printshop/schemas/products.py

from pydantic import BaseModel, Field, ConfigDict, AliasChoices, PlainValidator, field_validator, model_validator
from enum import Enum
from typing import Any, Annotated, ClassVar, Tuple

from printshop.services.paper import Paper

class PrintSide(str, Enum):
    recto = "recto"
    recto_verso = "recto_verso"

class CardFinish(str, Enum):
    recto = "recto"
    laminated = "laminated"

class PageFormat(str, Enum):
    a4 = "a4"
    a5 = "a5"

class PosterFormat(str, Enum):
    a3 = "a3"
    a3plus = "a3plus"

# Paper codes are resolved to the Paper variant once, at parsing time
PaperCode = Annotated[Paper, PlainValidator(Paper.parse)]

LAMINATION_WORDS = {"with": True, "without": False, "none": False}

# ===================================================================
#  Option models, one per product family
# ===================================================================
class ProductOptions(BaseModel):
    """
    Common behaviour for product options.

    Missing, None and empty-string values fall back to the field default, and
    string values are matched case-insensitively.
    """
    model_config = ConfigDict(extra="allow", frozen=True, arbitrary_types_allowed=True)

    # Fields that keep their casing; paper codes are matched case-insensitively when parsed
    RAW_TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("binding", "paper", "inner_paper", "cover_paper")

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value.strip().lower() if isinstance(value, str) and key not in cls.RAW_TEXT_FIELDS else value
                for key, value in data.items()
                if value is not None and value != ""
            }
        return data

class FlyerOptions(ProductOptions):
    side: PrintSide = Field(
        PrintSide.recto,
        validation_alias=AliasChoices("side", "mode"),
        description="Printed on one side (recto) or both (recto_verso)."
    )
    paper: PaperCode = Field(Paper.parse("coated-90-matte"), description="Paper code, e.g. coated-135-gloss.")

class CardOptions(ProductOptions):
    finish: CardFinish = Field(CardFinish.recto, description="Standard or laminated card.")
    paper: PaperCode = Field(Paper.parse("coated-300-matte"))

class LeafletOptions(ProductOptions):
    paper: PaperCode = Field(Paper.parse("coated-115-matte"))

class LetterheadOptions(ProductOptions):
    paper: PaperCode = Field(Paper.parse("offset-80"))

class PosterOptions(ProductOptions):
    format: PosterFormat = Field(PosterFormat.a3, description="a3, or the oversized a3plus (+20%).")
    paper: PaperCode = Field(Paper.parse("coated-135-matte"))

class BoundOptions(ProductOptions):
    """Options shared by page-based products (brochures and books)."""
    pages: int = Field(..., gt=0, description="Number of printed pages per copy.")
    format: PageFormat = Field(PageFormat.a4, description="a4, or the half-size a5.")
    cover_side: PrintSide = Field(
        PrintSide.recto,
        validation_alias=AliasChoices("cover_side", "cover_type"),
        description="Cover printed on one side or both."
    )
    lamination: bool = Field(False, description="Laminate the covers.")
    inner_paper: PaperCode
    cover_paper: PaperCode = Field(Paper.parse("coated-250-matte"))
    binding: str

    @field_validator("lamination", mode="before")
    @classmethod
    def parse_lamination(cls, value: Any) -> Any:
        if isinstance(value, str) and value in LAMINATION_WORDS:
            return LAMINATION_WORDS[value]
        return value

class BrochureOptions(BoundOptions):
    pages: int = Field(8, gt=0)
    inner_paper: PaperCode = Field(Paper.parse("coated-90-matte"))
    binding: str = Field("Saddle stitched")

class BookOptions(BoundOptions):
    pages: int = Field(50, gt=0)
    inner_paper: PaperCode = Field(Paper.parse("offset-80"))
    binding: str = Field("Plastic coil")
