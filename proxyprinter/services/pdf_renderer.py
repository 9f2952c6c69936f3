"""PDF serialization for positioned print documents."""

import logging
from collections.abc import Mapping
from io import BytesIO
from typing import Protocol

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from proxyprinter.models.layout import GuideLine, PlacedItem, PositionedDocument

logger = logging.getLogger(__name__)

# Cut guides: thin and gray so they disappear under a blade
GUIDE_LINE_WIDTH = 0.5
GUIDE_GRAY = 0.5


class DocumentRenderer(Protocol):
    """Turns a positioned document plus resolved images into file bytes."""

    def __call__(self, document: PositionedDocument, images: Mapping[str, bytes]) -> bytes: ...


def render_pdf(
    document: PositionedDocument,
    images: Mapping[str, bytes],
    title: str = "Deck printout",
) -> bytes:
    """
    Render the document as a PDF.

    - One PDF page per positioned page, sized from the layout config.
    - Each card image is scaled into its cell (aspect ratio preserved).
    - Cards whose image is missing or cannot be decoded are left blank.

    Args:
        document: Positioned pages (top-left coordinates)
        images: Image bytes keyed by image source
        title: PDF document title

    Returns:
        PDF file content
    """
    config = document.config
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=(config.page_width, config.page_height))
    c.setTitle(title)

    # Decode each distinct image once, even if it is printed many times
    readers: dict[str, ImageReader | None] = {}

    for page in document.pages:
        for item in page.items:
            reader = _reader_for(item, images, readers)
            if reader is not None:
                _draw_item(c, item, reader, config.page_height)

        _draw_guides(c, page.guides, config.page_height)
        c.showPage()

    c.save()
    return buffer.getvalue()


def _reader_for(
    item: PlacedItem,
    images: Mapping[str, bytes],
    readers: dict[str, ImageReader | None],
) -> ImageReader | None:
    source = item.image_source
    if not source:
        return None

    if source not in readers:
        data = images.get(source)
        if data is None:
            readers[source] = None
        else:
            try:
                readers[source] = ImageReader(BytesIO(data))
            except Exception as e:
                logger.warning("Could not decode image %s: %s", source, e)
                readers[source] = None

    return readers[source]


def _draw_item(
    c: canvas.Canvas,
    item: PlacedItem,
    reader: ImageReader,
    page_height: float,
) -> None:
    # PDF origin is bottom-left
    pdf_y = page_height - item.y - item.height
    try:
        c.drawImage(
            reader,
            item.x,
            pdf_y,
            width=item.width,
            height=item.height,
            preserveAspectRatio=True,
            anchor="c",
            mask="auto",  # Respect transparent corners (PNG with alpha)
        )
    except Exception as e:
        logger.warning(
            "Could not draw %s on page %d: %s", item.image_source, item.page_index + 1, e
        )


def _draw_guides(c: canvas.Canvas, guides: tuple[GuideLine, ...], page_height: float) -> None:
    if not guides:
        return

    c.setLineWidth(GUIDE_LINE_WIDTH)
    c.setStrokeGray(GUIDE_GRAY)
    for guide in guides:
        c.line(guide.x1, page_height - guide.y1, guide.x2, page_height - guide.y2)
