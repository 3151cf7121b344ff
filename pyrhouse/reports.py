"""CSV reports of assets and stock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

ASSET_REPORT_FILENAME = "raport_sprzetu.csv"
STOCK_REPORT_FILENAME = "raport_magazynu.csv"

ASSET_REPORT_HEADER = (
    "ID",
    "Kategoria",
    "Numer seryjny",
    "Kod PYR",
    "Pochodzenie",
    "Status",
    "Typ kategorii",
    "Lokalizacja",
)
STOCK_REPORT_HEADER = ("ID", "Kategoria", "Pochodzenie", "Ilość", "Lokalizacja")


@dataclass
class AssetReportRow:
    """One asset as listed in the asset report."""

    id: int
    category_label: str = ""
    serial: Optional[str] = None
    pyr_code: Optional[str] = None
    origin: str = ""
    status: str = ""
    category_type: str = ""
    location_name: str = ""


@dataclass
class StockReportRow:
    """One stock entry as listed in the stock report."""

    id: int
    category_label: str = ""
    origin: str = ""
    quantity: int = 0
    location_name: str = ""


def _needs_quotes(field: str) -> bool:
    if field == "":
        return False
    if field == "\\.":
        return True
    if any(char in field for char in ',"\r\n'):
        return True
    return field[0].isspace()


def _field(value: str) -> str:
    if _needs_quotes(value):
        return '"' + value.replace('"', '""') + '"'
    return value


def _csv(records: Iterable[Sequence[str]]) -> str:
    return "".join(",".join(_field(value) for value in record) + "\n" for record in records)


def assets_report_csv(rows: Iterable[AssetReportRow]) -> str:
    """The asset report: a header line and one line per asset."""
    records = [ASSET_REPORT_HEADER]
    records.extend(
        (
            str(row.id),
            row.category_label,
            row.serial or "",
            row.pyr_code or "",
            row.origin,
            row.status,
            row.category_type,
            row.location_name,
        )
        for row in rows
    )
    return _csv(records)


def stock_report_csv(rows: Iterable[StockReportRow]) -> str:
    """The stock report: a header line and one line per stock entry."""
    records = [STOCK_REPORT_HEADER]
    records.extend(
        (
            str(row.id),
            row.category_label,
            row.origin,
            str(row.quantity),
            row.location_name,
        )
        for row in rows
    )
    return _csv(records)