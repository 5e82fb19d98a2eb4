"""Sheet sizes a layout can be printed on."""

from dataclasses import dataclass
from enum import Enum


class PageSize(str, Enum):
    """Supported sheet sizes."""

    US_LETTER = "us-letter"
    A4 = "a4"
    A5 = "a5"


@dataclass(frozen=True)
class PageSizeInfo:
    """Physical dimensions of a sheet.

    Attributes:
        name: Human-readable name
        width: Width in points (72 DPI)
        height: Height in points (72 DPI)
        display_size: Size as shown to the user
    """

    name: str
    width: float
    height: float
    display_size: str


PAGE_SIZES: dict[PageSize, PageSizeInfo] = {
    PageSize.US_LETTER: PageSizeInfo("US Letter", 612, 792, '8.5" × 11"'),
    PageSize.A4: PageSizeInfo("A4", 595, 842, '8.27" × 11.69"'),
    PageSize.A5: PageSizeInfo("A5", 420, 595, '5.83" × 8.27"'),
}


def get_page_size_info(page_size: PageSize | str) -> PageSizeInfo:
    """Look up dimensions for a page size.

    Args:
        page_size: PageSize member or its string value

    Returns:
        PageSizeInfo for the sheet

    Raises:
        ValueError: If the page size is unknown
    """
    return PAGE_SIZES[PageSize(page_size)]
