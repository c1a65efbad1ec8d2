"""Tests for option-list translation."""

from __future__ import annotations

from collections.abc import Callable

from crudschema.i18n import I18n, set_i18n
from crudschema.options import filter_options


class TestFilterOptions:
    def test_translates_label(self, upper: Callable[[str], str]) -> None:
        assert filter_options([{"label": "x"}], translate=upper) == [{"label": "X"}]

    def test_label_field_writes_literal_key(self, upper: Callable[[str], str]) -> None:
        """The alias target is the key literally named 'labelField'."""
        result = filter_options([{"label": "x"}], "alt", translate=upper)
        assert result == [{"label": "x", "labelField": "X"}]
        assert "alt" not in result[0]

    def test_label_field_reads_alias_value(self, upper: Callable[[str], str]) -> None:
        result = filter_options(
            [{"value": 1, "label": "x", "title": "mister"}], "title", translate=upper
        )
        assert result[0]["labelField"] == "MISTER"
        assert result[0]["title"] == "mister"
        assert result[0]["label"] == "x"

    def test_corrected_mode_writes_alias_key(self, upper: Callable[[str], str]) -> None:
        result = filter_options(
            [{"title": "mister"}], "title", translate=upper, legacy_label_field=False
        )
        assert result == [{"title": "MISTER"}]

    def test_preserves_order_and_values(self, upper: Callable[[str], str]) -> None:
        options = [{"value": v, "label": f"l{v}"} for v in (3, 1, 2)]
        result = filter_options(options, translate=upper)
        assert [o["value"] for o in result] == [3, 1, 2]
        assert [o["label"] for o in result] == ["L3", "L1", "L2"]

    def test_input_records_untouched(self, upper: Callable[[str], str]) -> None:
        options = [{"label": "x"}]
        filter_options(options, translate=upper)
        assert options == [{"label": "x"}]

    def test_none_and_missing_labels(self, upper: Callable[[str], str]) -> None:
        assert filter_options(None, translate=upper) == []
        assert filter_options([{"value": 1}], translate=upper) == [{"value": 1}]

    def test_defaults_to_package_translator(self) -> None:
        set_i18n(I18n({"en": {"status": {"on": "Enabled"}}}))
        try:
            assert filter_options([{"label": "status.on"}]) == [{"label": "Enabled"}]
        finally:
            set_i18n(I18n())
