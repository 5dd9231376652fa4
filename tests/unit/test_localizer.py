"""Tests for translation lookup."""

import json

from lotdues.services.localizer import load_translations, t


class TestLocalizer:
    """Translation lookup with placeholders and fallbacks."""

    def test_simple_lookup(self) -> None:
        assert t("status.current") == "Al día"
        assert t("status.overdue") == "Atrasado"
        assert t("funds.works") == "Obras"

    def test_placeholder_substitution(self) -> None:
        assert t("errors.lot_not_found", lot_id="E2-1") == "Lote E2-1 no encontrado"

    def test_missing_placeholder_returns_template(self) -> None:
        assert t("errors.lot_not_found") == "Lote {lot_id} no encontrado"

    def test_unknown_key_returns_key(self) -> None:
        assert t("status.advance") == "status.advance"

    def test_group_key_returns_key(self) -> None:
        assert t("status") == "status"


class TestLoadTranslations:
    """Reading translation files."""

    def test_nested_groups_flattened(self, tmp_path) -> None:
        path = tmp_path / "translations.json"
        path.write_text(
            json.dumps({"funds": {"works": "Obras"}, "reports": {"lots": {"title": "Lotes"}}}),
            encoding="utf-8",
        )

        assert load_translations(path) == {"funds.works": "Obras", "reports.lots.title": "Lotes"}

    def test_non_text_values_skipped(self, tmp_path) -> None:
        path = tmp_path / "translations.json"
        path.write_text(json.dumps({"labels": {"count": 3, "lot": "Lote"}}), encoding="utf-8")

        assert load_translations(path) == {"labels.lot": "Lote"}

    def test_missing_file_yields_empty_mapping(self, tmp_path, caplog) -> None:
        assert load_translations(tmp_path / "absent.json") == {}
        assert "Failed to load translations" in caplog.text

    def test_malformed_file_yields_empty_mapping(self, tmp_path) -> None:
        path = tmp_path / "translations.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_translations(path) == {}
