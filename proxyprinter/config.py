from pydantic_settings import BaseSettings, SettingsConfigDict
from reportlab.lib.pagesizes import A4, legal, letter
from reportlab.lib.units import mm

from proxyprinter.models.layout import GuideStyle, PageLayoutConfig


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="PROXYPRINTER_")

    app_name: str = "ProxyPrinter"
    debug: bool = False
    log_level: str = "INFO"

    scryfall_api_url: str = "https://api.scryfall.com"
    user_agent: str = "ProxyPrinter/1.0"
    request_timeout: float = 30.0

    # Scryfall asks for 50-100ms between requests
    rate_limit_delay: float = 0.1
    image_timeout: float = 15.0

    paper_size: str = "a4"
    page_padding: float = 20.0
    item_spacing: float = 1 * mm
    guide_style: GuideStyle = GuideStyle.NONE
    crosshair_arm_length: float = 10.0


settings = Settings()


# =============================================================================
# PRINT GEOMETRY
# =============================================================================

# Standard Magic card: 63mm x 88mm
CARD_WIDTH_PT = 63 * mm
CARD_HEIGHT_PT = 88 * mm

PAPER_SIZES_PT: dict[str, tuple[float, float]] = {
    "a4": A4,
    "letter": letter,
    "legal": legal,
}


def default_layout_config(config: Settings | None = None) -> PageLayoutConfig:
    """
    Build the page layout for the configured paper size.

    Raises:
        ValueError: If the paper size is not one of PAPER_SIZES_PT
    """
    config = config or settings
    paper = config.paper_size.lower()
    if paper not in PAPER_SIZES_PT:
        raise ValueError(
            f"Invalid paper size: {config.paper_size}. "
            f"Must be one of {sorted(PAPER_SIZES_PT)}"
        )

    page_width, page_height = PAPER_SIZES_PT[paper]
    return PageLayoutConfig(
        page_width=page_width,
        page_height=page_height,
        item_width=CARD_WIDTH_PT,
        item_height=CARD_HEIGHT_PT,
        spacing=config.item_spacing,
        padding=config.page_padding,
        guide_style=config.guide_style,
        crosshair_arm_length=config.crosshair_arm_length,
    )
