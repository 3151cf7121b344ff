"""Item categories: creation, updates and their PYR identifiers."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Optional, Protocol, Sequence

from pyrhouse.models import ForeignKeyViolationError, ItemCategory

DEFAULT_CATEGORY_TYPE = "asset"
CATEGORY_IN_USE = "Nie można zmienić typu kategorii, ponieważ ma przypisane przedmioty"


class _CategoryRepository(Protocol):
    def check_pyr_id_uniqueness(self, pyr_id: str, exclude_id: Optional[int]) -> bool: ...

    def persist_item_category(self, category: ItemCategory) -> ItemCategory: ...

    def update_item_category(self, category_id: int, updates: dict[str, Any]) -> None: ...

    def get_categories(self) -> Sequence[ItemCategory]: ...

    def delete_item_category(self, category_id: str) -> None: ...

    def get_category_type(self, category_id: int) -> str: ...


class CategoryService:
    """Creates and maintains item categories.

    ``name_from_label`` derives a category's name from its label and
    ``pyr_id_generator`` proposes a PYR id for a category.
    """

    def __init__(
        self,
        repository: _CategoryRepository,
        name_from_label: Callable[[str], str],
        pyr_id_generator: Callable[[ItemCategory], str],
    ) -> None:
        self.repository = repository
        self.name_from_label = name_from_label
        self.pyr_id_generator = pyr_id_generator

    def _is_unique(self, pyr_id: str, exclude_id: Optional[int] = None) -> bool:
        try:
            return self.repository.check_pyr_id_uniqueness(pyr_id, exclude_id)
        except Exception as exc:
            raise RuntimeError(
                f"nie udało się sprawdzić unikalności PyrID: {exc}"
            ) from exc

    def create_category(self, category: ItemCategory) -> ItemCategory:
        """Validate, complete and store a new category."""
        if not category.label:
            raise ValueError("label jest wymagane")

        category = dataclasses.replace(category)
        if not category.type:
            category.type = DEFAULT_CATEGORY_TYPE
        category.name = self.name_from_label(category.label)

        if not category.pyr_id:
            self.generate_unique_pyr_id(category)
        elif not self._is_unique(category.pyr_id):
            raise ValueError(f"PyrID '{category.pyr_id}' jest już używane")

        return self.repository.persist_item_category(category)

    def update_category(self, category_id: int, updates: dict[str, Any]) -> None:
        """Apply field updates, making sure a new PYR id is not taken."""
        if not updates:
            raise ValueError("brak pól do aktualizacji")

        pyr_id = updates.get("pyr_id")
        if isinstance(pyr_id, str) and not self._is_unique(pyr_id, category_id):
            raise ValueError(f"PyrID '{pyr_id}' jest już używane")

        self.repository.update_item_category(category_id, updates)

    def get_categories(self) -> list[ItemCategory]:
        """All categories."""
        return list(self.repository.get_categories())

    def delete_category(self, category_id: str) -> None:
        """Remove a category."""
        self.repository.delete_item_category(category_id)

    def get_category_type(self, category_id: int) -> str:
        """Whether a category holds assets or stock."""
        return self.repository.get_category_type(category_id)

    def generate_unique_pyr_id(self, category: ItemCategory) -> str:
        """Give the category a free PYR id, trying digit suffixes 1 to 9 first.

        When every suffix is taken a fresh id is proposed and suffixed with 1.
        """
        if not category.pyr_id:
            category.pyr_id = self.pyr_id_generator(category)

        if not self._is_unique(category.pyr_id):
            base = category.pyr_id
            for digit in range(1, 10):
                candidate = f"{base}{digit}"
                if self._is_unique(candidate):
                    category.pyr_id = candidate
                    return candidate
            category.pyr_id = f"{self.pyr_id_generator(category)}1"

        return category.pyr_id


def build_category_updates(
    category_id: int,
    label: Optional[str] = None,
    category_type: Optional[str] = None,
    pyr_id: Optional[str] = None,
    has_related_items: Callable[[str], bool] = lambda _: False,
) -> dict[str, Any]:
    """Collect the fields of a category patch.

    The type may only change while no items belong to the category.
    """
    updates: dict[str, Any] = {}
    if label is not None:
        updates["label"] = label
    if category_type is not None:
        if has_related_items(str(category_id)):
            raise ForeignKeyViolationError(CATEGORY_IN_USE)
        updates["category_type"] = category_type
    if pyr_id is not None:
        updates["pyr_id"] = pyr_id

    if not updates:
        raise ValueError("Brak pól do aktualizacji")
    return updates