import csv
import io

from pyrhouse.reports import (
    AssetReportRow,
    StockReportRow,
    assets_report_csv,
    stock_report_csv,
)


def parse(text):
    return list(csv.reader(io.StringIO(text)))


def test_assets_report_header_only():
    assert assets_report_csv([]) == (
        "ID,Kategoria,Numer seryjny,Kod PYR,Pochodzenie,Status,Typ kategorii,Lokalizacja\n"
    )


def test_stock_report_header_only():
    assert stock_report_csv([]) == "ID,Kategoria,Pochodzenie,Ilość,Lokalizacja\n"


def test_assets_report_round_trip():
    rows = [
        AssetReportRow(7, "Laptop", "SN-1", "PYR-L1", "purchase", "available", "asset", "Magazyn"),
        AssetReportRow(8, "Router", None, None, "rental", "in_stock", "asset", "Hala A"),
    ]
    records = parse(assets_report_csv(rows))
    assert len(records) == 3
    assert records[1] == ["7", "Laptop", "SN-1", "PYR-L1", "purchase", "available", "asset", "Magazyn"]
    assert records[2] == ["8", "Router", "", "", "rental", "in_stock", "asset", "Hala A"]


def test_assets_report_quotes_special_characters():
    label = 'Kabel "HDMI", 2m'
    records = parse(assets_report_csv([AssetReportRow(1, label, "SN-1", "PYR-K1")]))
    assert records[1][1] == label
    assert records[1][0] == "1"


def test_report_quotes_leading_space():
    text = stock_report_csv([StockReportRow(1, "Kable", "purchase", 4, " Magazyn")])
    assert text.splitlines()[1].endswith('," Magazyn"')
    assert parse(text)[1][4] == " Magazyn"


def test_stock_report_round_trip():
    rows = [
        StockReportRow(3, "Taśma", "purchase", 12, "Magazyn"),
        StockReportRow(4, "Kable\nzapas", "donation", 0, "Hala B"),
    ]
    text = stock_report_csv(rows)
    records = parse(text)
    assert records[1] == ["3", "Taśma", "purchase", "12", "Magazyn"]
    assert records[2] == ["4", "Kable\nzapas", "donation", "0", "Hala B"]


def test_report_lines_end_with_newline_only():
    text = assets_report_csv([AssetReportRow(1, "Laptop"), AssetReportRow(2, "Router")])
    assert "\r" not in text
    assert text.endswith("\n")
    assert text.count("\n") == 3