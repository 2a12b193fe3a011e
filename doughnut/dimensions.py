"""Dimension store: per-band ordered dimensions holding ordered levels.

Values are a tagged variant, Valid(number) or Invalid, fixed at insertion:
out-of-range numbers are clamped or made invalid, never rejected.
"""
import logging
import math
import re
from dataclasses import dataclass, field
from typing import NamedTuple

from doughnut.constants import (
    BANDS, BAND_CEILINGS, VALUE_FLOOR,
    FIELD_SEPARATOR, SEPARATOR_STANDIN, ROW_FIELDS, INVALID_TEXT,
)

log = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class DimensionIndexError(IndexError):
    """Raised when a dimension or level index does not exist."""


# ============================================================
# Values
# ============================================================
class Valid(NamedTuple):
    number: int

    def __str__(self):
        return str(self.number)


class Invalid(NamedTuple):
    def __str__(self):
        return INVALID_TEXT


INVALID = Invalid()
Value = Valid | Invalid


def parse_value(raw, ceiling: int) -> Value:
    """Integer value of *raw*, saturated at *ceiling*; invalid below the floor.

    Strings are read like a leading-integer parse ("76", " 81 ", "12abc");
    anything without a leading integer is invalid.
    """
    if isinstance(raw, bool):
        raw = int(raw)
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return INVALID
        number = int(raw)
    elif isinstance(raw, int):
        number = raw
    else:
        m = _LEADING_INT.match(str(raw))
        if not m:
            return INVALID
        number = int(m.group(1))
    if number > ceiling:
        return Valid(ceiling)
    if number < VALUE_FLOOR:
        return INVALID
    return Valid(number)


def clean_field(text) -> str:
    """Name or label as it survives an export: stripped, no field separator."""
    return str(text).strip().replace(FIELD_SEPARATOR, SEPARATOR_STANDIN)


def normalize_label(label) -> str:
    """None, "" and the literal "undefined" all mean "no label"."""
    if label is None:
        return ""
    label = clean_field(label)
    return "" if label == "undefined" else label


# ============================================================
# Records
# ============================================================
@dataclass
class Level:
    value: Value
    label: str = ""


@dataclass
class Dimension:
    name: str
    levels: list[Level] = field(default_factory=list)

    def find_level(self, label: str) -> int:
        for i, lvl in enumerate(self.levels):
            if lvl.label == label:
                return i
        return -1


# ============================================================
# Store
# ============================================================
class DimensionStore:
    """Ordered, name-unique dimensions of one band."""

    def __init__(self, band: str):
        if band not in BANDS:
            raise ValueError(f"Unknown band: {band!r}")
        self.band = band
        self.ceiling = BAND_CEILINGS[band]
        self.dimensions: list[Dimension] = []

    def __len__(self):
        return len(self.dimensions)

    def __iter__(self):
        return iter(self.dimensions)

    def count(self) -> int:
        return len(self.dimensions)

    def find(self, name: str) -> int:
        for i, dim in enumerate(self.dimensions):
            if dim.name == name:
                return i
        return -1

    def get(self, index: int) -> Dimension:
        self._check_dim(index)
        return self.dimensions[index]

    def add_level(self, name: str, raw_value, label: str = "") -> None:
        """Add or update a level; a blank *name* is ignored.

        An existing dimension with a level of the same label has that level's
        value replaced in place, otherwise a new level is appended.
        """
        name = clean_field(name) if name else ""
        if not name:
            return
        value = parse_value(raw_value, self.ceiling)
        label = normalize_label(label)
        index = self.find(name)
        if index < 0:
            self.dimensions.append(Dimension(name, [Level(value, label)]))
            return
        dim = self.dimensions[index]
        lvl_index = dim.find_level(label)
        if lvl_index >= 0:
            dim.levels[lvl_index].value = value
        else:
            dim.levels.append(Level(value, label))

    def delete_level(self, dim_index: int, level_index: int) -> None:
        """Remove one level; a dimension left without levels is removed too."""
        self._check_dim(dim_index)
        levels = self.dimensions[dim_index].levels
        if not 0 <= level_index < len(levels):
            raise DimensionIndexError(
                f"{self.band} dimension {dim_index} has no level {level_index} "
                f"({len(levels)} levels)")
        del levels[level_index]
        if not levels:
            del self.dimensions[dim_index]

    def delete_last_dimension(self) -> None:
        if self.dimensions:
            self.dimensions.pop()

    def clear(self) -> None:
        self.dimensions = []

    def _check_dim(self, index: int) -> None:
        if not 0 <= index < len(self.dimensions):
            raise DimensionIndexError(
                f"{self.band} band has no dimension {index} "
                f"({len(self.dimensions)} dimensions)")

    # --- text forms ---

    def summary(self) -> str:
        """One-line listing, e.g. "income:male=76,female=81 / food:20"."""
        parts = []
        for dim in self.dimensions:
            lvls = ",".join(f"{lvl.label}={lvl.value}" if lvl.label else str(lvl.value)
                            for lvl in dim.levels)
            parts.append(f"{dim.name}:{lvls}")
        return " / ".join(parts)

    def to_delimited_text(self) -> str:
        """Rows of band,name,value,label in dimension-then-level order."""
        rows = []
        for dim in self.dimensions:
            for lvl in dim.levels:
                rows.append(FIELD_SEPARATOR.join((self.band, dim.name, str(lvl.value), lvl.label)))
        return "\n".join(rows)

    def merge_from_delimited_text(self, text: str, skip_header: bool = False) -> int:
        """Apply rows tagged with this band; return the number of malformed rows.

        A row is malformed when it does not have exactly four fields.  Rows for
        the other band are skipped without being counted, as are blank lines.
        """
        errors = 0
        rows = text.splitlines()
        if skip_header:
            rows = rows[1:]
        for row in rows:
            if not row.strip():
                continue
            cols = [c.strip() for c in row.split(FIELD_SEPARATOR)]
            if len(cols) != ROW_FIELDS:
                errors += 1
                continue
            band, name, value, label = cols
            if band == self.band:
                self.add_level(name, value, label)
        if errors:
            log.debug("%s band: %d malformed rows", self.band, errors)
        return errors
