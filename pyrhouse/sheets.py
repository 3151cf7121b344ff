"""Quest lists read from the delivery spreadsheet."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

log = logging.getLogger(__name__)

HEADER_FIELDS = {
    "Rzeczy": "item_name",
    "Ilość": "quantity",
    "Pawilon": "pavilion",
    "Miejsce": "location",
    "Stan": "status",
    "Dostawa do": "delivery_date",
    "Osoba odpowiedzialna za budżet": "budget_responsible",
    "Do kogo ma trafić": "recipient",
    "UWAGI": "notes",
}

STATUS_DELIVERED = "Wysłane"
OPEN_STATUSES = ("Zamówione", "Zatwierdzone")

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass
class QuestItem:
    """A single line of a quest."""

    item_name: str = ""
    quantity: int = 0
    notes: str = ""
    status: str = ""


@dataclass
class Quest:
    """Spreadsheet rows aggregated by recipient, date, location and pavilion."""

    recipient: str = ""
    delivery_date: str = ""
    location: str = ""
    pavilion: str = ""
    status: str = ""
    items: list[QuestItem] = field(default_factory=list)


def _parse_int(text: str) -> Optional[int]:
    """Parse a strict decimal integer that fits in 64 bits, or return None."""
    if not _INTEGER.fullmatch(text):
        return None
    number = int(text)
    if _INT64_MIN <= number <= _INT64_MAX:
        return number
    return None


def map_headers(headers: Sequence[Any]) -> dict[int, str]:
    """Map column indexes to field names for the headers that are recognised."""
    return {
        index: HEADER_FIELDS[header]
        for index, header in enumerate(headers)
        if isinstance(header, str) and header in HEADER_FIELDS
    }


def parse_quests(values: Sequence[Sequence[Any]]) -> list[Quest]:
    """Aggregate spreadsheet rows (header row first) into quests."""
    log.debug("parsing %d spreadsheet rows", len(values))
    if len(values) < 2:
        log.debug("too few rows: a header row and at least one data row are needed")
        return []

    header_map = map_headers(values[0])
    quests: dict[str, Quest] = {}

    for row in values[1:]:
        cells: dict[str, str] = {}
        quantity = 0
        for index, cell in enumerate(row):
            name = header_map.get(index)
            if name is None or not isinstance(cell, str):
                continue
            if name == "quantity":
                parsed = _parse_int(cell)
                if parsed is not None:
                    quantity = parsed
            else:
                cells[name] = cell

        recipient = cells.get("recipient", "")
        delivery_date = cells.get("delivery_date", "")
        location = cells.get("location", "")
        pavilion = cells.get("pavilion", "")
        status = cells.get("status", "")

        key = "|".join((recipient, delivery_date, location, pavilion))
        quest = quests.get(key)
        if quest is None:
            quest = Quest(
                recipient=recipient,
                delivery_date=delivery_date,
                location=location,
                pavilion=pavilion,
                status=status,
            )
            quests[key] = quest

        quest.items.append(
            QuestItem(
                item_name=cells.get("item_name", ""),
                quantity=quantity,
                notes=cells.get("notes", ""),
                status=status,
            )
        )

    log.debug("built %d quests", len(quests))
    return list(quests.values())


def filter_quests_by_status(quests: Sequence[Quest], status: str) -> list[Quest]:
    """Keep delivered quests for "delivered", open ones for an empty status."""
    if status == "delivered":
        return [quest for quest in quests if quest.status == STATUS_DELIVERED]
    if status == "":
        return [quest for quest in quests if quest.status in OPEN_STATUSES]
    return []


def quests_from_values(
    values: Optional[Sequence[Sequence[Any]]], status: str = ""
) -> list[Quest]:
    """Parse spreadsheet values and filter the quests by the requested status."""
    if not values:
        log.info("no data found in the spreadsheet")
        return []
    quests = parse_quests(values)
    filtered = filter_quests_by_status(quests, status)
    log.info("processed %d quests, %d after filtering", len(quests), len(filtered))
    return filtered