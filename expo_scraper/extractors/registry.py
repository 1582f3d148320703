"""PageType -> extraction adapter."""

from __future__ import annotations

from expo_scraper.extractors.a2z import A2ZAdapter
from expo_scraper.extractors.base import ExtractionAdapter
from expo_scraper.extractors.generic import GenericAdapter
from expo_scraper.extractors.listing import affiliate_summit, goeshow
from expo_scraper.extractors.manifest import ManifestAdapter
from expo_scraper.extractors.mapyourshow import MapYourShowAdapter
from expo_scraper.extractors.smallworldlabs import SmallWorldLabsAdapter
from expo_scraper.extractors.surfexpo import SurfExpoAdapter
from expo_scraper.extractors.wpma import WPMAAdapter
from expo_scraper.models.schemas import PageType

ADAPTERS: dict[PageType, ExtractionAdapter] = {
    PageType.MANIFEST: ManifestAdapter(),
    PageType.MAPYOURSHOW: MapYourShowAdapter(),
    PageType.A2Z: A2ZAdapter(),
    PageType.SMALLWORLDLABS: SmallWorldLabsAdapter(),
    PageType.AFFILIATESUMMIT: affiliate_summit,
    PageType.GOESHOW: goeshow,
    PageType.WPMA: WPMAAdapter(),
    PageType.SURFEXPO: SurfExpoAdapter(),
    PageType.GENERIC: GenericAdapter(),
}


def get_adapter(page_type: PageType) -> ExtractionAdapter:
    return ADAPTERS.get(page_type, ADAPTERS[PageType.GENERIC])
