from __future__ import annotations

from hypothesis import given, strategies as st

from riskmap.services.advisories import (
    extract_advisories,
    normalize_key,
    reportable,
    strip_html,
    unescape_js_literal,
)

FEED = r"""
<script>
  var FranceWarning = 'Test\nwarning';
  var SaudiArabiaWarning = '<p>Risk of \'errant\' missiles</p>';
  var SaudiArabiaNews = 'Updated 2 March';
  var IcelandNews = 'Volcano monitoring only';
  var EmptyWarning = '';
</script>
<ul>
  <li data-feed-item-country="Saudi Arabia" data-x="1" data-feed-item-warn-level="1">Saudi Arabia</li>
  <li data-feed-item-country="France" data-feed-item-warn-level="2">France</li>
  <li data-feed-item-country="Congo DRC" data-feed-item-warn-level="4">Congo DRC</li>
</ul>
"""


class TestExtractAdvisories:
    def test_warning_literal_is_unescaped(self):
        records = extract_advisories(FEED)
        assert records["France"].warning == "Test\nwarning"
        assert records["SaudiArabia"].warning == "<p>Risk of 'errant' missiles</p>"

    def test_listing_folds_into_unspaced_token(self):
        rec = extract_advisories(FEED)["SaudiArabia"]
        assert rec.display_name == "Saudi Arabia"
        assert rec.level == 1
        assert rec.news == "Updated 2 March"

    def test_listing_without_literals_creates_record(self):
        rec = extract_advisories(FEED)["CongoDRC"]
        assert rec.display_name == "Congo DRC"
        assert rec.level == 4
        assert rec.warning is None

    def test_empty_literal_is_ignored(self):
        assert "Empty" not in extract_advisories(FEED)

    def test_discovery_order(self):
        assert list(extract_advisories(FEED)) == ["France", "SaudiArabia", "Iceland", "CongoDRC"]

    def test_case_insensitive_listing_match(self):
        page = "ivorycoastWarning = 'x'; " '<li data-feed-item-country="Ivory Coast" data-feed-item-warn-level="3">'
        records = extract_advisories(page)
        assert list(records) == ["ivorycoast"]
        assert records["ivorycoast"].display_name == "Ivory Coast"
        assert records["ivorycoast"].level == 3

    def test_first_match_wins_on_ambiguous_tokens(self):
        page = (
            "NIGERWarning = 'a'; NigerWarning = 'b'; "
            '<li data-feed-item-country="niger" data-feed-item-warn-level="2">'
        )
        records = extract_advisories(page)
        assert records["NIGER"].level == 2
        assert records["Niger"].level is None

    def test_out_of_range_level_is_ignored(self):
        page = '<li data-feed-item-country="Atlantis" data-feed-item-warn-level="7">'
        assert extract_advisories(page) == {}

    def test_malformed_literal_yields_nothing(self):
        page = "FranceWarning = 'unterminated \\'; GermanyWarning = \"double quoted\";"
        assert extract_advisories(page) == {}

    def test_garbage_never_raises(self):
        assert extract_advisories("<<<'''\\\\>>>Warning=") == {}


class TestReportable:
    def test_news_only_records_are_dropped(self):
        keys = [r.key for r in reportable(extract_advisories(FEED).values())]
        assert keys == ["France", "SaudiArabia", "CongoDRC"]

    def test_effective_level_defaults_to_three(self):
        rec = extract_advisories("LibyaWarning = 'x';")["Libya"]
        assert rec.level is None
        assert rec.effective_level == 3


class TestHelpers:
    def test_unescape_keeps_unknown_escapes(self):
        assert unescape_js_literal(r"a\'b\nc\\d\q") == "a'b\nc\\d\\q"

    def test_strip_html(self):
        assert strip_html("<p>One<br/>Two &amp; <b>three</b>&nbsp;</p>") == "One\nTwo & three"

    def test_normalize_key(self):
        assert normalize_key(" Central  African\tRepublic ") == "CentralAfricanRepublic"


@given(
    st.lists(
        st.tuples(
            st.from_regex(r"[A-Z][a-z]{2,8}", fullmatch=True),
            st.text(alphabet="abc xyz.,", min_size=1, max_size=20),
        ),
        max_size=8,
    )
)
def test_extraction_is_deterministic_and_one_record_per_key(items):
    page = "\n".join(f"{k}Warning = '{v}';" for k, v in items)
    first = extract_advisories(page)
    second = extract_advisories(page)
    assert [r.model_dump() for r in first.values()] == [r.model_dump() for r in second.values()]
    assert set(first) == {k for k, _ in items}
