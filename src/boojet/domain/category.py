"""Category domain service."""

from dataclasses import replace
from typing import Optional

from boojet.database.base import Database
from boojet.domain.catalog import CategoryCatalog, normalize_code, system_definitions
from boojet.domain.entities import CategoryDefinition
from boojet.domain.errors import (
    ConflictError,
    InvalidInputError,
    ReferenceNotFoundError,
    category_not_found,
    invalid_field,
)
from boojet.logging_config import get_logger

logger = get_logger("category")

# System categories are spaced this far apart in sort order
_SORT_STEP = 100


class CategoryService:
    """Service for managing the category catalog."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def ensure_system_categories(self) -> int:
        """Insert any missing built-in categories.

        Returns:
            Number of categories created
        """
        created = 0
        for definition in system_definitions():
            if self.db.get_category(definition.code) is None:
                self.db.create_category(definition)
                created += 1
        if created:
            logger.info("system categories seeded count=%d", created)
        return created

    def catalog(self, include_inactive: bool = True) -> CategoryCatalog:
        """Build the catalog from stored definitions.

        Inactive categories are included by default so historical
        transactions keep resolving.
        """
        definitions = self.db.list_categories()
        if not include_inactive:
            definitions = [d for d in definitions if d.active]
        return CategoryCatalog(definitions)

    def get_category(self, code: str) -> Optional[CategoryDefinition]:
        """Get category by code.

        Args:
            code: Category code (case-insensitive)

        Returns:
            Category definition or None if not found
        """
        return self.db.get_category(normalize_code(code))

    def require_category(self, code: str) -> CategoryDefinition:
        """Get category by code or raise ReferenceNotFoundError."""
        definition = self.get_category(code)
        if definition is None:
            raise ReferenceNotFoundError(category_not_found(normalize_code(code)))
        return definition

    def require_usable(self, code: str) -> CategoryDefinition:
        """Get a category that new transactions may use.

        Raises:
            ReferenceNotFoundError: If the category does not exist
            InvalidInputError: If the category has been deactivated
        """
        definition = self.require_category(code)
        if not definition.active:
            raise InvalidInputError(
                invalid_field("category", f"'{definition.code}' is inactive")
            )
        return definition

    def create_category(
        self,
        code: str,
        name: str,
        parent_code: str,
        essential: Optional[bool] = None,
    ) -> int:
        """Create a user subcategory under an existing category.

        Args:
            code: New category code
            name: Display name
            parent_code: Code of the parent category
            essential: Optional essential flag

        Returns:
            Category ID

        Raises:
            InvalidInputError: If code or name is blank
            ConflictError: If the code is already in use
            ReferenceNotFoundError: If the parent category doesn't exist
        """
        normalized = normalize_code(code)
        if not normalized:
            raise InvalidInputError(invalid_field("code", "must not be blank"))
        if name is None or not name.strip():
            raise InvalidInputError(invalid_field("name", "must not be blank"))
        if self.db.get_category(normalized) is not None:
            raise ConflictError(f"Category '{normalized}' already exists")

        parent = self.require_usable(parent_code)
        catalog = self.catalog()
        root = catalog.require(catalog.root_of(parent.code))
        ordered = _subtree_order(catalog, root.code, parent.code, normalized)
        if len(ordered) > _SORT_STEP:
            raise InvalidInputError(
                f"Category '{root.code}' cannot hold more subcategories"
            )

        # Renumber the root's subtree so children follow their parent
        positions = {code: root.sort_order + offset for offset, code in enumerate(ordered)}
        for code in ordered[1:]:
            existing = catalog.get(code)
            if existing is not None and existing.sort_order != positions[code]:
                self.db.update_category(replace(existing, sort_order=positions[code]))

        definition = CategoryDefinition(
            code=normalized,
            name=name.strip(),
            type=parent.type,
            parent_code=parent.code,
            essential=essential,
            system=False,
            active=True,
            sort_order=positions[normalized],
        )
        category_id = self.db.create_category(definition)
        logger.info("category created code=%s parent=%s", normalized, parent.code)
        return category_id

    def deactivate_category(self, code: str) -> None:
        """Soft-delete a category.

        Existing transactions keep their category; new ones cannot use it.

        Raises:
            ReferenceNotFoundError: If the category doesn't exist
        """
        definition = self.require_category(code)
        if not definition.active:
            return
        self.db.update_category(replace(definition, active=False))
        logger.info("category deactivated code=%s", definition.code)


def _subtree_order(
    catalog: CategoryCatalog, root_code: str, parent_code: str, new_code: str
) -> list[str]:
    """Depth-first codes under ``root_code`` with ``new_code`` as the last child of its parent."""
    ordered = []
    pending = [root_code]
    while pending:
        code = pending.pop()
        ordered.append(code)
        children = catalog.children_of(code)
        if code == parent_code:
            children.append(new_code)
        pending.extend(reversed(children))
    return ordered
