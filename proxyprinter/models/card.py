from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    A card as returned by the card-data provider.

    Attributes:
        id: Provider's stable card ID (one per printing)
        name: Card name (e.g., "Lightning Bolt")
        mana_cost: Display mana cost (e.g., "{R}"), empty for lands
        type_line: Full type line (e.g., "Creature — Goblin Scout")
        image_uris: Image URLs by size (small, normal, large, png, ...)
        face_image_uris: First face's image URLs for double-faced cards
        set_code: Set code of this printing (e.g., "leb")
        set_name: Set name of this printing (e.g., "Limited Edition Beta")
    """

    id: str
    name: str
    mana_cost: str = ""
    type_line: str = ""
    image_uris: dict[str, str] = field(default_factory=dict)
    face_image_uris: dict[str, str] = field(default_factory=dict)
    set_code: str | None = None
    set_name: str | None = None

    @property
    def image_url(self) -> str | None:
        """Best print-quality image URL for this printing."""
        return (
            self.image_uris.get("normal")
            or self.image_uris.get("png")
            or self.face_image_uris.get("normal")
            or None
        )

    @property
    def thumbnail_url(self) -> str | None:
        return self.image_uris.get("small") or self.face_image_uris.get("small") or None

    @classmethod
    def from_scryfall(cls, data: dict[str, Any]) -> "CardRecord":
        """
        Build a record from a Scryfall card object.

        Double-faced cards have no top-level image_uris or mana_cost;
        those fall back to the first face.
        """
        faces = data.get("card_faces") or []
        first_face: dict[str, Any] = faces[0] if faces else {}

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            mana_cost=data.get("mana_cost") or first_face.get("mana_cost", ""),
            type_line=data.get("type_line") or first_face.get("type_line", ""),
            image_uris=dict(data.get("image_uris") or {}),
            face_image_uris=dict(first_face.get("image_uris") or {}),
            set_code=data.get("set"),
            set_name=data.get("set_name"),
        )
