#!/usr/bin/env python3
"""
End-to-end conversion of HTML documents.

Covers:
- Conversions of every unit family, plural and singular names
- Ranges, fractions and temperature changes
- Quantities split over several elements
- Idempotence and text preservation
- Document-level entry points and display toggles
"""

import pytest
from bs4 import BeautifulSoup

from unitconv import DisplayMode, convert, convert_html
from unitconv.core.config import ConfigLoader


class TestConversionScenarios:
    """Test the conversions readers actually see."""

    def test_distances(self, assert_converts):
        test_cases = [
            ("<p>I walked 100 km yesterday.</p>", ["62.6 miles"]),
            ("<p>We rode 4 1/2 miles.</p>", ["7.24 km"]),
            ("<p>Only .25 mile to go</p>", ["0.402 km"]),
            ("<p>A 10 ft wall</p>", ["3.04 m"]),
            ("<p>100 yards out</p>", ["91.4 m"]),
            ("<p>5 m deep</p>", ["16.4 ft"]),
        ]
        for markup, expected in test_cases:
            assert_converts(markup, expected)

    def test_masses(self, assert_converts):
        test_cases = [
            ("<p>She weighs 150 lbs.</p>", ["68.1 kg"]),
            ("<p>A 3 stone dog</p>", ["19 kg"]),
            ("<p>2 kilos of flour</p>", ["4.4 lbs"]),
        ]
        for markup, expected in test_cases:
            assert_converts(markup, expected)

    def test_speeds(self, assert_converts):
        assert_converts("<p>cruising at 30 mph</p>", ["48.2 kph"])
        assert_converts("<p>limited to 50 kph</p>", ["31.3 mph"])

    def test_absolute_temperatures(self, assert_converts):
        test_cases = [
            ("<p>Water boils at 100 °C</p>", ["212 °F"]),
            ("<p>It is 212 °F</p>", ["100 °C"]),
            ("<p>Freezing at 32 °F</p>", ["0 °C"]),
            ("<p>It was -40 degrees F</p>", ["-40 °C"]),
        ]
        for markup, expected in test_cases:
            assert_converts(markup, expected)

    def test_temperature_change_inside_delta_container(self, assert_converts):
        assert_converts('<div class="unit-delta">It rose by 5 °C overnight.</div>', ["9 °F"])
        # The marker applies to descendants too
        assert_converts('<div class="unit-delta"><p>down <b>9 °F</b></p></div>', ["5 °C"])

    def test_ranges(self, assert_converts):
        soup = assert_converts("<p>20-25 km</p>", ["12.5-15.6 miles"])
        nums = [span.get_text() for span in soup.select("span.unit-auxiliary span.num")]
        assert nums == ["12.5", "15.6"]
        assert_converts("<p>1-2 km</p>", ["0.626-1.25 miles"])

    def test_singular_only_when_value_reads_one(self, assert_converts):
        assert_converts("<p>1.6 km</p>", ["1 mile"])
        assert_converts("<p>1 kg</p>", ["2.2 lbs"])
        assert_converts("<p>0 km</p>", ["0 miles"])

    def test_custom_precision_and_separator(self, assert_converts):
        config = ConfigLoader.from_dict({"conversion": {"significant_digits": 2, "range_separator": " to "}})
        assert_converts("<p>20-25 km</p>", ["12 to 15 miles"], config=config)

    def test_text_without_quantities(self, assert_converts):
        soup = assert_converts("<p>5 cats and 1.000,5 kg</p>", [])
        assert str(soup) == "<p>5 cats and 1.000,5 kg</p>"


class TestTreeStructure:
    """Test how the annotations sit in the tree."""

    def test_quantity_split_across_elements(self, assert_converts):
        soup = assert_converts("<p>4 <b>1/2</b> miles</p>", ["7.24 km"])
        primaries = soup.select("span.unit-primary")
        assert [span.get_text() for span in primaries] == ["4 ", "1/2", " miles"]
        assert all("unit-imp" in span["class"] for span in primaries)

    def test_auxiliary_microformat(self, converted):
        soup = converted("<p>I walked 100 km yesterday.</p>")
        auxiliary = soup.select_one("span.unit-auxiliary")

        assert auxiliary["class"] == ["unit-processed", "unit-auxiliary", "unit-imp", "hmeasure"]
        assert auxiliary["title"] == "100 km"
        assert auxiliary.select_one("span.num").get_text() == "62.6"
        assert auxiliary.select_one("span.unit").get_text() == "miles"
        assert auxiliary.previous_sibling["class"] == ["unit-processed", "unit-primary", "unit-si"]

    def test_skipped_elements_are_untouched(self, converted):
        markup = '<script>var d = "5 km";</script><textarea>10 km</textarea><p>5 km</p>'
        soup = converted(markup)
        assert soup.script.string == 'var d = "5 km";'
        assert soup.textarea.string == "10 km"
        assert len(soup.select("span.unit-auxiliary")) == 1

    def test_text_is_preserved(self, converted):
        markup = "".join(
            f"<p>Stage {i}: <b>{i}</b> km, then {i} 1/2 <i>miles</i> at {i}0 °C.</p>" for i in range(1, 30)
        )
        original_text = BeautifulSoup(markup, "html.parser").get_text()
        soup = converted(markup)

        assert len(soup.select("span.unit-auxiliary")) == 3 * 29
        for auxiliary in soup.select("span.unit-auxiliary"):
            auxiliary.decompose()
        for primary in soup.select("span.unit-primary"):
            primary.unwrap()
        assert soup.get_text() == original_text


class TestIdempotence:
    """Test that a converted document converts to itself."""

    def test_second_pass_changes_nothing(self, converted, default_config):
        test_cases = [
            "<p>I walked 100 km yesterday.</p>",
            "<p>4 <b>1/2</b> miles and 20-25 km</p>",
            '<div class="unit-delta">5 °C</div> <p>150 lbs</p>',
        ]
        for markup in test_cases:
            soup = converted(markup)
            once = str(soup)
            convert(soup, config=default_config)
            assert str(soup) == once, f"Input '{markup}' should convert to '{once}', got '{soup}'"

    def test_serialized_output_converts_to_itself(self, default_config):
        once = convert_html("<p>I walked 100 km yesterday.</p>", config=default_config)
        assert convert_html(once, config=default_config) == once


class TestEntryPoints:
    """Test the document-level API."""

    def test_document_converts_body_only(self, default_config):
        soup = BeautifulSoup(
            "<html><head><title>5 km loop</title></head><body><p>5 km loop</p></body></html>", "html.parser"
        )
        convert(document=soup, config=default_config)

        assert soup.title.string == "5 km loop"
        assert len(soup.body.select("span.unit-auxiliary")) == 1

    def test_subtree_only(self, default_config):
        soup = BeautifulSoup("<p>5 km</p><p id='x'>10 km</p>", "html.parser")
        convert(soup.find(id="x"), config=default_config)
        assert [span.get_text() for span in soup.select("span.unit-auxiliary")] == ["6.26 miles"]

    def test_missing_root(self):
        with pytest.raises(ValueError):
            convert()

    def test_convert_html_sets_display_mode_on_body(self, default_config):
        result = convert_html("<html><body><p>100 km</p></body></html>", display_mode="si", config=default_config)
        assert BeautifulSoup(result, "html.parser").body["class"] == ["unit-show-si"]

    def test_convert_html_wraps_fragment_for_display_mode(self, default_config):
        result = convert_html("<p>100 km</p>", display_mode=DisplayMode.ALL, config=default_config)
        assert result.startswith('<div class="unit-show-all"><p>')

    def test_convert_html_without_display_mode(self, default_config):
        result = convert_html("<p>100 km</p>", config=default_config)
        assert result.startswith("<p>")
        assert "unit-show" not in result

    def test_display_mode_from_config(self):
        config = ConfigLoader.from_dict({"html": {"display_mode": "imp-only"}})
        result = convert_html("<body><p>5 km</p></body>", config=config)
        assert 'class="unit-show-imp-only"' in result

    def test_unknown_display_mode(self, default_config):
        with pytest.raises(ValueError):
            convert_html("<p>5 km</p>", display_mode="kelvin", config=default_config)
