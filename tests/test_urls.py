from expo_scraper.models import ExhibitorRecord, PageType
from expo_scraper.utils.urls import absolutize, is_blocked_website, resolve_website


class TestAbsolutize:
    def test_relative_href_joins_base(self):
        assert absolutize("/co/1", "https://expo.example.com/list") == "https://expo.example.com/co/1"

    def test_protocol_relative(self):
        assert absolutize("//acme.com", "https://expo.example.com") == "https://acme.com"

    def test_fragments_and_javascript_are_dropped(self):
        assert absolutize("#", "https://expo.example.com") is None
        assert absolutize("javascript:void(0)", "https://expo.example.com") is None
        assert absolutize("", "https://expo.example.com") is None


class TestResolveWebsite:
    def test_accepts_company_site(self):
        assert resolve_website("https://acme.com", link_text="Visit website") == "https://acme.com"

    def test_rejects_platform_and_social(self):
        assert resolve_website("https://expo.mapyourshow.com/booth/1") == ""
        assert resolve_website("https://www.linkedin.com/company/acme") == ""

    def test_relevance_needs_indicator_or_tld(self):
        assert resolve_website("https://acme.de/about", link_text="About us") == ""
        assert resolve_website("https://acme.de", link_text="Website") == "https://acme.de"
        assert resolve_website("https://acme.de", require_relevance=False) == "https://acme.de"


class TestRecordWebsite:
    def test_blocked_website_is_blanked(self):
        record = ExhibitorRecord(company_name="Acme Co", website="https://facebook.com/acme")
        assert record.website == ""
        assert is_blocked_website("https://facebook.com/acme")

    def test_non_http_website_is_blanked(self):
        assert ExhibitorRecord(company_name="Acme Co", website="mailto:hi@acme.com").website == ""

    def test_assignment_is_validated(self):
        record = ExhibitorRecord(company_name="Acme Co", source=PageType.A2Z)
        record.website = "https://www.twitter.com/acme"
        assert record.website == ""
        record.website = "https://acme.com"
        assert record.website == "https://acme.com"

    def test_camel_case_wire_names(self):
        record = ExhibitorRecord(company_name="  Acme Co ", business_types="OEM")
        dumped = record.model_dump(by_alias=True, exclude_none=True)
        assert dumped["companyName"] == "Acme Co"
        assert dumped["businessTypes"] == "OEM"
        assert dumped["source"] == "generic"
