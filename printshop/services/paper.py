# printshop/services/paper.py

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Coated stock up to this grammage carries no surcharge
COATED_BASE_GRAMMAGE = 90
OFFSET_PREMIUM_GRAMMAGE = 100

class PaperFamily(str, Enum):
    COATED = "coated"
    OFFSET = "offset"
    OTHER = "other"

class PaperFinish(str, Enum):
    MATTE = "matte"
    GLOSS = "gloss"

@dataclass(frozen=True)
class Paper:
    """
    Paper stock resolved from its code.

    Codes look like "coated-135-matte", "coated-250-gloss", "offset-80" or
    "offset-100". Anything else is kept as an OTHER paper carrying the raw code.
    """
    family: PaperFamily
    code: str
    grammage: Optional[int] = None
    finish: Optional[PaperFinish] = None

    @classmethod
    def parse(cls, code: Union[str, "Paper"]) -> "Paper":
        if isinstance(code, Paper):
            return code
        code = str(code).strip()
        parts = code.lower().split("-")

        if parts[0] == PaperFamily.COATED.value and len(parts) >= 2 and parts[1].isdigit():
            # Only "matte" reads as matte; any other finish word prints as gloss
            finish = PaperFinish.MATTE if len(parts) > 2 and parts[2] == "matte" else PaperFinish.GLOSS
            return cls(PaperFamily.COATED, code, int(parts[1]), finish)

        if parts[0] == PaperFamily.OFFSET.value and len(parts) == 2 and parts[1].isdigit():
            return cls(PaperFamily.OFFSET, code, int(parts[1]))

        logger.debug(f"Unrecognized paper code kept as-is: {code!r}")
        return cls(PaperFamily.OTHER, code)

    @property
    def display_name(self) -> str:
        return paper_display_name(self)

def paper_surcharge(
    paper: Union[str, Paper],
    sheet_count: float,
    offset_100_rate: float,
    coated_gram_rate: float
) -> float:
    """
    Surcharge for printing `sheet_count` sheets on the given stock.

    Args:
        paper: Paper or paper code
        sheet_count: Number of physical sheets
        offset_100_rate: Flat per-sheet surcharge for 100gsm offset
        coated_gram_rate: Per-sheet, per-gram surcharge for coated stock above 90gsm

    Returns:
        Surcharge amount (0 for standard stock or no sheets)
    """
    if not sheet_count:
        return 0.0
    paper = Paper.parse(paper)

    if paper.family is PaperFamily.OFFSET and paper.grammage == OFFSET_PREMIUM_GRAMMAGE:
        return sheet_count * offset_100_rate

    if paper.family is PaperFamily.COATED and paper.grammage > COATED_BASE_GRAMMAGE:
        return sheet_count * (paper.grammage - COATED_BASE_GRAMMAGE) * coated_gram_rate

    return 0.0

def paper_display_name(paper: Union[str, Paper, None]) -> str:
    """Human-readable paper name; unknown codes are returned unchanged."""
    if not paper:
        return ""
    paper = Paper.parse(paper)

    if paper.family is PaperFamily.OFFSET:
        if paper.grammage == 80:
            return "Offset 80gsm Standard"
        if paper.grammage == OFFSET_PREMIUM_GRAMMAGE:
            return "Offset 100gsm Premium"
        return paper.code

    if paper.family is PaperFamily.COATED:
        finish = "Matte" if paper.finish is PaperFinish.MATTE else "Gloss"
        return f"Coated {paper.grammage}gsm {finish}"

    return paper.code
