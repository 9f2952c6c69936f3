"""
Print endpoints.

`/print/layout` previews where every card lands; `/print/pdf` runs the full
print job and returns the PDF.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from proxyprinter.api.dependencies import get_image_resolver
from proxyprinter.api.schemas import DocumentModel, PrintRequest
from proxyprinter.models.failure import NothingToPrintError
from proxyprinter.services.image_resolver import ImageResolver
from proxyprinter.services.layout_engine import expand_placements, layout_document
from proxyprinter.services.print_coordinator import PrintCoordinator

router = APIRouter(prefix="/print", tags=["print"])


@router.post("/layout", response_model=DocumentModel)
async def preview_layout(request: PrintRequest) -> DocumentModel:
    """
    Lay out the deck without fetching any image.

    An empty deck (or a page too small for one card) yields zero pages.
    """
    document = layout_document(
        expand_placements(request.deck.to_domain()),
        request.layout.to_config(),
    )
    return DocumentModel.from_domain(document)


@router.post(
    "/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def print_pdf(
    request: PrintRequest,
    resolver: Annotated[ImageResolver, Depends(get_image_resolver)],
) -> Response:
    """
    Render the deck as a printable PDF.

    Cards whose image cannot be loaded are left blank; X-Failed-Images
    carries how many distinct images failed.

    Raises:
        NothingToPrintError: The deck is empty or no card fits on the page
    """
    coordinator = PrintCoordinator(resolver)
    result = await coordinator.run(request.deck.to_domain(), request.layout.to_config())
    if result is None:
        raise NothingToPrintError("The deck is empty or no card fits on the page.")

    return Response(
        content=result.output,
        media_type="application/pdf",
        headers={
            "Content-Disposition": 'attachment; filename="deck.pdf"',
            "X-Page-Count": str(result.page_count),
            "X-Failed-Images": str(len(result.failed_sources)),
        },
    )
