import pytest

from app.services.milestone_catalog import CatalogIntegrityViolation, load_catalog


def _entry(day, title=None):
    return {
        "day": day,
        "title": title or f"Day {day}",
        "description": "...",
        "reference": "ref",
        "link": "https://example.com",
    }


def test_builtin_catalog_is_ascending_and_unique():
    catalog = load_catalog(strict=True)
    days = [m.day for m in catalog]
    assert days == sorted(days)
    assert len(days) == len(set(days))
    for day in (1, 3, 7, 14, 30, 90, 180, 365):
        assert day in days


def test_builtin_catalog_entries_have_references():
    for m in load_catalog():
        assert m.title and m.description and m.reference
        assert m.link.startswith("https://")


def test_strict_mode_rejects_out_of_order():
    with pytest.raises(CatalogIntegrityViolation):
        load_catalog([_entry(30), _entry(7)], strict=True)


def test_strict_mode_rejects_duplicate_thresholds():
    with pytest.raises(CatalogIntegrityViolation):
        load_catalog([_entry(7), _entry(7, "Again")], strict=True)


def test_release_mode_sorts_and_drops_duplicates(caplog):
    catalog = load_catalog([_entry(30), _entry(7, "First seven"), _entry(7, "Second seven")])
    assert [m.day for m in catalog] == [7, 30]
    assert catalog[0].title == "First seven"
    assert "repaired" in caplog.text


def test_catalog_is_immutable():
    catalog = load_catalog()
    with pytest.raises(Exception):
        catalog[0].day = 99
