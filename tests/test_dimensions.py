"""Tests for doughnut/dimensions.py: values, levels and the per-band store."""
import math
import pytest
from doughnut.constants import INNER, OUTER
from doughnut.dimensions import (
    Valid, Invalid, INVALID, parse_value, normalize_label,
    DimensionStore, DimensionIndexError,
)


def triples(store):
    return {(d.name, lvl.value, lvl.label) for d in store for lvl in d.levels}


# --- parse_value ---

@pytest.mark.parametrize("raw, ceiling, expected", [
    (76, 100, Valid(76)),
    ("81", 100, Valid(81)),
    (" 42 ", 100, Valid(42)),
    ("12abc", 100, Valid(12)),
    ("-7", 100, Valid(-7)),
    (7.9, 100, Valid(7)),
    (150, 100, Valid(100)),
    (200, 150, Valid(150)),
    (-100, 150, Valid(-100)),
    (-150, 150, INVALID),
    ("abc", 100, INVALID),
    ("", 100, INVALID),
    ("NaN", 100, INVALID),
    (None, 100, INVALID),
    (math.nan, 100, INVALID),
    (math.inf, 100, INVALID),
])
def test_parse_value(raw, ceiling, expected):
    assert parse_value(raw, ceiling) == expected


def test_value_text_forms():
    assert str(Valid(5)) == "5"
    assert str(INVALID) == "NaN"
    assert isinstance(INVALID, Invalid)


@pytest.mark.parametrize("label, expected", [
    (None, ""), ("", ""), ("undefined", ""), ("male", "male"),
    (" male ", "male"), (" undefined", ""), ("imports, exports", "imports; exports"),
])
def test_normalize_label(label, expected):
    assert normalize_label(label) == expected


# --- DimensionStore ---

class TestAddLevel:
    def test_two_levels_one_dimension(self):
        s = DimensionStore(INNER)
        s.add_level("income", 76, "male")
        s.add_level("income", 81, "female")
        assert s.count() == 1
        assert s.to_delimited_text() == "inner,income,76,male\ninner,income,81,female"

    def test_same_label_updates_in_place(self):
        s = DimensionStore(INNER)
        s.add_level("income", 76, "male")
        s.add_level("income", 50, "male")
        assert len(s.get(0).levels) == 1
        assert s.get(0).levels[0].value == Valid(50)

    def test_undefined_label_matches_unlabelled_level(self):
        s = DimensionStore(OUTER)
        s.add_level("water", 30, "")
        s.add_level("water", 40, "undefined")
        assert len(s.get(0).levels) == 1
        assert s.get(0).levels[0].value == Valid(40)
        assert s.get(0).levels[0].label == ""

    def test_outer_clamps_to_150(self):
        s = DimensionStore(OUTER)
        s.add_level("climate change", 200, "")
        assert s.get(0).levels[0].value == Valid(150)

    def test_below_floor_becomes_invalid(self):
        s = DimensionStore(OUTER)
        s.add_level("climate change", -150, "")
        assert s.get(0).levels[0].value == INVALID

    def test_empty_name_is_ignored(self):
        s = DimensionStore(INNER)
        s.add_level("", 10, "x")
        s.add_level(None, 10, "x")
        assert s.count() == 0

    def test_order_preserved(self):
        s = DimensionStore(INNER)
        for name in ("water", "food", "health"):
            s.add_level(name, 10)
        assert [d.name for d in s] == ["water", "food", "health"]


class TestDelete:
    def test_delete_level(self):
        s = DimensionStore(INNER)
        s.add_level("income", 76, "male")
        s.add_level("income", 81, "female")
        s.delete_level(0, 0)
        assert [lvl.label for lvl in s.get(0).levels] == ["female"]

    def test_deleting_last_level_removes_dimension(self):
        s = DimensionStore(INNER)
        s.add_level("food", 20)
        s.add_level("water", 30)
        s.delete_level(0, 0)
        assert [d.name for d in s] == ["water"]

    def test_out_of_range_dimension(self):
        s = DimensionStore(INNER)
        with pytest.raises(DimensionIndexError, match="no dimension 0"):
            s.delete_level(0, 0)

    def test_out_of_range_level(self):
        s = DimensionStore(INNER)
        s.add_level("food", 20)
        with pytest.raises(DimensionIndexError, match="no level 3"):
            s.delete_level(0, 3)

    def test_get_out_of_range(self):
        with pytest.raises(IndexError):
            DimensionStore(OUTER).get(-1)

    def test_delete_last_dimension(self):
        s = DimensionStore(OUTER)
        s.add_level("a", 1); s.add_level("b", 2)
        s.delete_last_dimension()
        assert [d.name for d in s] == ["a"]
        s.delete_last_dimension(); s.delete_last_dimension()
        assert len(s) == 0

    def test_clear(self):
        s = DimensionStore(OUTER)
        s.add_level("a", 1)
        s.clear()
        assert s.count() == 0


def test_unknown_band():
    with pytest.raises(ValueError, match="Unknown band"):
        DimensionStore("middle")


def test_summary_format():
    s = DimensionStore(INNER)
    s.add_level("income", 76, "male")
    s.add_level("income", 81, "female")
    s.add_level("food", 20)
    assert s.summary() == "income:male=76,female=81 / food:20"


def test_summary_empty():
    assert DimensionStore(INNER).summary() == ""


class TestDelimitedText:
    def test_round_trip(self):
        src = DimensionStore(OUTER)
        src.add_level("climate change", 76)
        src.add_level("ozone", -20, "south")
        src.add_level("ozone", 40, "north")
        src.add_level("land", "bogus")
        dst = DimensionStore(OUTER)
        assert dst.merge_from_delimited_text(src.to_delimited_text()) == 0
        assert triples(dst) == triples(src)

    def test_round_trip_padded_and_separator_text(self):
        src = DimensionStore(INNER)
        src.add_level("food", 20, " imports")
        src.add_level("water ", 30, "")
        src.add_level("food", 40, "imports, exports")
        src.add_level("rent, bills", 10, "")
        assert [d.name for d in src] == ["food", "water", "rent; bills"]
        assert src.to_delimited_text().splitlines() == [
            "inner,food,20,imports", "inner,food,40,imports; exports",
            "inner,water,30,", "inner,rent; bills,10,"]
        dst = DimensionStore(INNER)
        assert dst.merge_from_delimited_text(src.to_delimited_text()) == 0
        assert triples(dst) == triples(src)

    def test_padded_name_updates_existing_dimension(self):
        s = DimensionStore(INNER)
        s.add_level("food", 20, "imports")
        s.add_level(" food ", 25, "imports ")
        assert s.count() == 1
        assert s.get(0).levels[0].value == Valid(25)

    def test_blank_name_ignored(self):
        s = DimensionStore(INNER)
        s.add_level("   ", 20)
        assert s.count() == 0

    def test_import_twice_is_idempotent(self):
        text = "inner,income,76,male\ninner,income,81,female\ninner,food,20,"
        s = DimensionStore(INNER)
        s.merge_from_delimited_text(text)
        s.merge_from_delimited_text(text)
        assert s.count() == 2
        assert len(s.get(0).levels) == 2

    def test_malformed_rows_counted(self):
        text = "inner,food,20,\ninner,food\nouter,a,b,c,d\ninner,water,5,x"
        s = DimensionStore(INNER)
        assert s.merge_from_delimited_text(text) == 2
        assert [d.name for d in s] == ["food", "water"]

    def test_other_band_ignored_not_counted(self):
        s = DimensionStore(INNER)
        assert s.merge_from_delimited_text("outer,ozone,5,\ninner,food,6,") == 0
        assert [d.name for d in s] == ["food"]

    def test_band_tag_case_sensitive(self):
        s = DimensionStore(INNER)
        assert s.merge_from_delimited_text("Inner,food,6,") == 0
        assert s.count() == 0

    def test_fields_are_stripped(self):
        s = DimensionStore(INNER)
        s.merge_from_delimited_text(" inner , food , 20 , imports \r\n")
        assert s.get(0).name == "food"
        assert s.get(0).levels[0].label == "imports"
        assert s.get(0).levels[0].value == Valid(20)

    def test_blank_lines_skipped(self):
        s = DimensionStore(INNER)
        assert s.merge_from_delimited_text("\ninner,food,20,\n\n") == 0
        assert s.count() == 1

    def test_skip_header(self):
        text = "type,name,value,label\ninner,food,20,"
        without = DimensionStore(INNER)
        assert without.merge_from_delimited_text(text) == 0
        assert without.count() == 1      # header is well formed, tagged "type"
        s = DimensionStore(INNER)
        s.merge_from_delimited_text("inner,header,1,\ninner,food,20,", skip_header=True)
        assert [d.name for d in s] == ["food"]

    def test_invalid_exported_as_nan(self):
        s = DimensionStore(INNER)
        s.add_level("food", -500)
        assert s.to_delimited_text() == "inner,food,NaN,"
