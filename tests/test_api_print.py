"""Tests for print endpoints."""

from io import BytesIO
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from pypdf import PdfReader

from proxyprinter.api.dependencies import get_image_resolver
from proxyprinter.main import app
from proxyprinter.models.failure import ImageResolutionError

GOOD_URL = "https://img/good.png"
BAD_URL = "https://img/bad.png"


class StubResolver:
    """Serves one PNG for every source except BAD_URL."""

    def __init__(self, image: bytes) -> None:
        self.image = image

    async def resolve(self, source: str) -> bytes:
        if source == BAD_URL:
            raise ImageResolutionError(source, "HTTP 404")
        return self.image


@pytest.fixture
async def client(png_bytes: bytes):
    """Provide an async test client with a stubbed image resolver."""

    async def override_get_image_resolver():
        yield StubResolver(png_bytes)

    app.dependency_overrides[get_image_resolver] = override_get_image_resolver

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def _deck(**quantities: int) -> dict[str, Any]:
    entries = {
        card_id: {
            "id": card_id,
            "name": card_id.title(),
            "quantity": quantity,
            "image_url": BAD_URL if card_id == "bad" else GOOD_URL,
        }
        for card_id, quantity in quantities.items()
    }
    return {"entries": entries, "total": sum(quantities.values())}


# Same geometry as the a4_config fixture: a 3x3 grid
LAYOUT = {"paper_size": "a4", "spacing": 0.5, "padding": 26.0}


class TestLayoutEndpoint:
    """Tests for POST /print/layout."""

    async def test_preview(self, client: AsyncClient) -> None:
        response = await client.post(
            "/print/layout",
            json={"deck": _deck(a=2, b=3), "layout": {**LAYOUT, "guide_style": "border-lines"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["page_count"] == 1
        page = data["pages"][0]
        assert [item["entry_id"] for item in page["items"]] == ["a", "a", "b", "b", "b"]
        assert page["items"][0]["x"] == pytest.approx(26.0)
        assert len(page["guides"]) == 8

    async def test_paginates(self, client: AsyncClient) -> None:
        response = await client.post("/print/layout", json={"deck": _deck(a=10), "layout": LAYOUT})

        assert response.json()["page_count"] == 2

    async def test_empty_deck(self, client: AsyncClient) -> None:
        response = await client.post("/print/layout", json={"deck": _deck()})

        assert response.json()["page_count"] == 0

    async def test_invalid_layout(self, client: AsyncClient) -> None:
        response = await client.post(
            "/print/layout", json={"deck": _deck(a=1), "layout": {"spacing": -1}}
        )

        assert response.status_code == 422


class TestPdfEndpoint:
    """Tests for POST /print/pdf."""

    async def test_returns_pdf(self, client: AsyncClient) -> None:
        response = await client.post("/print/pdf", json={"deck": _deck(a=12), "layout": LAYOUT})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["x-page-count"] == "2"
        assert len(PdfReader(BytesIO(response.content)).pages) == 2

    async def test_failed_images_counted(self, client: AsyncClient) -> None:
        response = await client.post(
            "/print/pdf", json={"deck": _deck(a=1, bad=2), "layout": LAYOUT}
        )

        assert response.status_code == 200
        assert response.headers["x-failed-images"] == "1"

    async def test_empty_deck_is_404(self, client: AsyncClient) -> None:
        response = await client.post("/print/pdf", json={"deck": _deck()})

        assert response.status_code == 404
        data = response.json()
        assert data["kind"] == "empty_result"
        assert data["message"] == "There is nothing to print."

    async def test_card_too_big_is_404(self, client: AsyncClient) -> None:
        response = await client.post(
            "/print/pdf",
            json={"deck": _deck(a=1), "layout": {"item_width": 2000, "item_height": 2000}},
        )

        assert response.status_code == 404
