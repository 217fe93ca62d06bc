"""Category catalog.

The catalog supports flat lookup by code and keeps parent links as codes.
Children are derived from an index instead of being owned by the parent, so
a flat catalog and a hierarchical one share the same shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Optional

from boojet.domain.entities import Category, CategoryDefinition, CategoryType
from boojet.domain.errors import ReferenceNotFoundError, category_not_found

SYSTEM_CATEGORIES: tuple[tuple[Category, str, CategoryType], ...] = (
    (Category.INCOME, "Income", CategoryType.INCOME),
    (Category.FOOD, "Food", CategoryType.EXPENSE),
    (Category.RENT, "Rent", CategoryType.EXPENSE),
    (Category.UTILITIES, "Utilities", CategoryType.EXPENSE),
    (Category.TRANSPORTATION, "Transportation", CategoryType.EXPENSE),
    (Category.ENTERTAINMENT, "Entertainment", CategoryType.EXPENSE),
    (Category.HEALTH, "Health", CategoryType.EXPENSE),
    (Category.SHOPPING, "Shopping", CategoryType.EXPENSE),
    (Category.SAVINGS, "Savings", CategoryType.EXPENSE),
    (Category.OTHER, "Other", CategoryType.EXPENSE),
)


def normalize_code(code: str | Enum) -> str:
    """Return the canonical upper-case code for a category or code string."""
    if isinstance(code, Enum):
        code = code.value
    return str(code).strip().upper()


def system_definitions() -> list[CategoryDefinition]:
    """Definitions for the built-in flat catalog."""
    return [
        CategoryDefinition(
            code=category.value,
            name=name,
            type=category_type,
            sort_order=index * 100,
        )
        for index, (category, name, category_type) in enumerate(SYSTEM_CATEGORIES)
    ]


class CategoryCatalog:
    """Ordered, read-only view over category definitions."""

    def __init__(self, definitions: Iterable[CategoryDefinition]):
        indexed = list(enumerate(definitions))
        # sort_order first, registration order breaks ties
        indexed.sort(key=lambda pair: (pair[1].sort_order, pair[0]))
        self._definitions: dict[str, CategoryDefinition] = {}
        self._children: dict[str, list[str]] = {}
        for _, definition in indexed:
            code = normalize_code(definition.code)
            self._definitions[code] = definition
        for code, definition in self._definitions.items():
            if definition.parent_code is not None:
                parent = normalize_code(definition.parent_code)
                self._children.setdefault(parent, []).append(code)

    @classmethod
    def default(cls) -> "CategoryCatalog":
        return cls(system_definitions())

    def __contains__(self, code: object) -> bool:
        if not isinstance(code, (str, Enum)):
            return False
        return normalize_code(code) in self._definitions

    def __iter__(self) -> Iterator[CategoryDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def codes(self) -> list[str]:
        """All codes in reporting order."""
        return list(self._definitions)

    def get(self, code: str | Enum) -> Optional[CategoryDefinition]:
        return self._definitions.get(normalize_code(code))

    def require(self, code: str | Enum) -> CategoryDefinition:
        """Get a definition or raise ReferenceNotFoundError."""
        definition = self.get(code)
        if definition is None:
            raise ReferenceNotFoundError(category_not_found(normalize_code(code)))
        return definition

    def children_of(self, code: str | Enum) -> list[str]:
        return list(self._children.get(normalize_code(code), []))

    def is_leaf(self, code: str | Enum) -> bool:
        return not self._children.get(normalize_code(code))

    def root_of(self, code: str | Enum) -> str:
        """Walk parent links up to the top-level category."""
        current = self.require(code)
        seen = {normalize_code(current.code)}
        while current.parent_code is not None:
            parent = self.get(current.parent_code)
            if parent is None or normalize_code(parent.code) in seen:
                break
            seen.add(normalize_code(parent.code))
            current = parent
        return normalize_code(current.code)

    def descendants(self, code: str | Enum) -> set[str]:
        """Return the code itself plus every code below it."""
        root = normalize_code(code)
        result = {root}
        pending = [root]
        while pending:
            current = pending.pop()
            for child in self._children.get(current, []):
                if child not in result:
                    result.add(child)
                    pending.append(child)
        return result
