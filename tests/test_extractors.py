"""Template adapters run against static HTML snapshots."""

from expo_scraper.extractors import RecordCollector, get_adapter
from expo_scraper.models import PageType
from tests.fakes import swl_page

BASE = "https://expo.example.com/exhibitors"


def _names(records):
    return [r.company_name for r in records]


class TestRecordCollector:
    def test_dedupe_is_case_insensitive(self):
        collector = RecordCollector(PageType.GENERIC)
        assert collector.add("Acme Inc")
        assert not collector.add("ACME INC")
        assert not collector.add("  acme inc ")
        assert _names(collector.records) == ["Acme Inc"]

    def test_same_name_in_different_groups(self):
        collector = RecordCollector(PageType.SURFEXPO)
        collector.add("Acme Inc", group="Apparel", category="Apparel")
        collector.add("Acme Inc", group="Hardgoods", category="Hardgoods")
        assert len(collector) == 2

    def test_invalid_name_is_skipped_not_raised(self):
        collector = RecordCollector(PageType.GENERIC)
        assert not collector.add("A")
        assert not collector.add("x" * 201)
        assert len(collector) == 0


class TestSmallWorldLabs:
    def test_table_rows(self):
        html = swl_page([("1", "Acme Co", "B101"), ("2", "Beta LLC", "B102")], current=1, last=1)
        records = get_adapter(PageType.SMALLWORLDLABS).extract(html, BASE)

        assert [(r.company_name, r.booth, r.website) for r in records] == [
            ("Acme Co", "B101", ""),
            ("Beta LLC", "B102", ""),
        ]
        assert all(r.source == PageType.SMALLWORLDLABS for r in records)

    def test_header_and_booth_rows_are_dropped(self):
        html = swl_page([("0", "Name", ""), ("1", "Booth #12", "12"), ("2", "Acme Co", "B1")], current=1, last=1)
        assert _names(get_adapter(PageType.SMALLWORLDLABS).extract(html, BASE)) == ["Acme Co"]

    def test_outbound_link_becomes_website(self):
        html = swl_page(
            [("1", "Acme Co", "B101")],
            current=1,
            last=1,
            extra_cells={"Acme Co": '<td><a href="https://acmeco.com">acmeco.com</a></td>'},
        )
        (record,) = get_adapter(PageType.SMALLWORLDLABS).extract(html, BASE)
        assert record.website == "https://acmeco.com"


class TestManifest:
    def test_break_separated_block(self):
        html = '<html><body><p class="company-name">Acme Co<br>Beta LLC<br>A - F</p></body></html>'
        records = get_adapter(PageType.MANIFEST).extract(html, "https://manife.st/attendees")
        assert _names(records) == ["Acme Co", "Beta LLC"]

    def test_numeric_and_intro_lines_are_filtered(self):
        html = (
            '<html><body><p class="company-name">Companies Who Attend Include:<br>'
            "Acme Co<br>123<br>#4-5<br>G - M<br>Gamma Ltd</p></body></html>"
        )
        records = get_adapter(PageType.MANIFEST).extract(html, "https://manife.st/attendees")
        assert _names(records) == ["Acme Co", "Gamma Ltd"]

    def test_falls_back_to_body_text(self):
        html = "<html><body><div>Acme Co</div><div>Beta LLC</div><div>Companies attending</div></body></html>"
        records = get_adapter(PageType.MANIFEST).extract(html, "https://manife.st/attendees")
        assert _names(records) == ["Acme Co", "Beta LLC"]


class TestA2Z:
    def test_booth_table(self):
        html = (
            "<table><tbody>"
            '<tr data-boothid="11"><td class="companyName"><a class="exhibitorName">Acme Co</a></td>'
            '<td class="boothLabel"><a class="boothLabel" data-boothlabels="1201">x</a></td></tr>'
            '<tr data-boothid="12"><td class="companyName"><a class="exhibitorName">Beta LLC</a></td>'
            '<td class="boothLabel"><a class="boothLabel">1305</a></td></tr>'
            "</tbody></table>"
        )
        records = get_adapter(PageType.A2Z).extract(html, "https://s1.a2zinc.net/show/EventMap.aspx")
        assert [(r.company_name, r.booth, r.website) for r in records] == [
            ("Acme Co", "1201", ""),
            ("Beta LLC", "1305", ""),
        ]

    def test_listing_fallback_skips_eventmap_links(self):
        html = (
            '<div class="exhibitor-item"><a class="exhibitor-name" href="/Exhibitor/1">Acme Co</a>'
            '<a href="https://s1.a2zinc.net/EventMap.aspx?id=1">Booth</a>'
            '<a href="https://acme.io">acme.io</a></div>'
        )
        (record,) = get_adapter(PageType.A2Z).extract(html, "https://s1.a2zinc.net/show/Exhibitors.aspx")
        assert record.company_name == "Acme Co"
        assert record.website == "https://acme.io"


class TestMapYourShow:
    def test_exhibitor_items(self):
        html = (
            '<div class="exhibitor-item"><h3>Acme Co</h3><a href="https://acme.com">Website</a></div>'
            '<div class="exhibitor-item"><h3>Beta LLC</h3><a href="/booth/2">Booth 2</a></div>'
        )
        records = get_adapter(PageType.MAPYOURSHOW).extract(html, "https://expo.mapyourshow.com/gallery")
        assert [r.website for r in records] == ["https://acme.com", ""]


class TestWPMA:
    def test_booth_tooltip(self):
        content = (
            "<strong>Acme Pallets</strong><br><strong>Portland, OR</strong><br>"
            "Company Description: We build pallets."
        )
        html = (
            '<div id="graphic-container">'
            f'<div id="booth1" class="booth bus-type-3 bus-type-7" data-bs-title="Booth #M779" data-bs-content="{content}"></div>'
            '<div id="booth2" data-bs-title="Booth #M780" data-bs-content="&lt;strong&gt;HOLD&lt;/strong&gt;"></div>'
            "</div>"
        )
        (record,) = get_adapter(PageType.WPMA).extract(html, "https://www.wpma.com/expo")
        assert record.company_name == "Acme Pallets"
        assert record.booth == "M779"
        assert record.location == "Portland, OR"
        assert record.description == "We build pallets."
        assert record.business_types == "3, 7"

    def test_holdings_is_not_a_placeholder(self):
        html = '<div id="booth9" data-val="12" data-bs-content="&lt;strong&gt;Acme Holdings&lt;/strong&gt;"></div>'
        (record,) = get_adapter(PageType.WPMA).extract(html, "https://www.wpma.com/expo")
        assert record.company_name == "Acme Holdings"
        assert record.booth == "M12"


class TestSurfExpo:
    def test_category_headers(self):
        html = (
            '<div class="et_pb_text_inner">'
            "<h4><strong>Apparel</strong></h4><p>Acme Surf<br>Beta Boards</p>"
            "<h4><strong>Hardgoods</strong></h4><p>Acme Surf</p>"
            "</div>"
        )
        records = get_adapter(PageType.SURFEXPO).extract(html, "https://www.surfexpo.com/exhibitors")
        assert [(r.company_name, r.category) for r in records] == [
            ("Acme Surf", "Apparel"),
            ("Beta Boards", "Apparel"),
            ("Acme Surf", "Hardgoods"),
        ]


class TestClassPattern:
    def test_affiliate_summit(self):
        html = '<div class="exhibitor-card"><a href="https://acme.com">Acme Co</a></div>'
        (record,) = get_adapter(PageType.AFFILIATESUMMIT).extract(html, "https://affiliatesummit.com/x")
        assert (record.company_name, record.website) == ("Acme Co", "https://acme.com")


class TestGeneric:
    def test_list_links_and_stopwords(self):
        html = (
            "<ul>"
            '<li><a href="https://acme.com">Acme Corp</a></li>'
            '<li><a href="/exhibitor/2">Beta LLC</a></li>'
            '<li><a href="/more">More</a></li>'
            '<li><a href="https://twitter.com/x">Gamma Inc</a></li>'
            "</ul>"
        )
        records = get_adapter(PageType.GENERIC).extract(html, BASE)
        by_name = {r.company_name: r.website for r in records}
        assert by_name == {"Acme Corp": "https://acme.com", "Beta LLC": "", "Gamma Inc": ""}

    def test_nothing_to_find(self):
        assert get_adapter(PageType.GENERIC).extract("<html><body></body></html>", BASE) == []
