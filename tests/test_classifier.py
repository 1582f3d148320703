import pytest

from expo_scraper.extractors import ADAPTERS, classify, get_adapter
from expo_scraper.models import PageType


class TestClassify:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://manife.st/attendees", PageType.MANIFEST),
            ("https://expo25.mapyourshow.com/8_0/explore/exhibitor-gallery.cfm", PageType.MAPYOURSHOW),
            ("https://s23.a2zinc.net/clients/show/Public/Exhibitors.aspx", PageType.A2Z),
            ("https://expo.smallworldlabs.com/exhibitors", PageType.SMALLWORLDLABS),
            ("https://www.affiliatesummit.com/east/exhibitors", PageType.AFFILIATESUMMIT),
            ("https://www.goeshow.com/show/exhibitors", PageType.GOESHOW),
            ("https://www.wpma.com/expo/floorplan", PageType.WPMA),
            ("https://www.surfexpo.com/exhibitor-list", PageType.SURFEXPO),
        ],
    )
    def test_known_templates(self, url, expected):
        assert classify(url) == expected

    def test_unknown_site_is_generic(self):
        assert classify("https://www.some-trade-fair.org/exhibitors") == PageType.GENERIC
        assert classify("") == PageType.GENERIC

    def test_first_pattern_in_table_order_wins(self):
        # An A2Z page that links back to MapYourShow still reads as MapYourShow
        assert classify("https://s1.a2zinc.net/?ref=mapyourshow.com") == PageType.MAPYOURSHOW

    def test_deterministic(self):
        url = "https://expo.smallworldlabs.com/exhibitors?page=2"
        assert {classify(url) for _ in range(5)} == {PageType.SMALLWORLDLABS}


class TestRegistry:
    def test_every_page_type_has_an_adapter(self):
        for page_type in PageType:
            assert ADAPTERS[page_type].page_type == page_type

    def test_get_adapter(self):
        assert get_adapter(PageType.WPMA).page_type == PageType.WPMA
