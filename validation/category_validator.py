"""Category lookup for manifest merging.

A merged manifest holds exactly the categories listed in
:class:`~models.manifest.CategoryName`.  An input category outside that set
cannot be merged and fails the whole run.
"""

from pathlib import Path

from app.utils.logging import get_logger
from models.errors import SchemaMismatchError
from models.manifest import AssetCategory, CategoryName, Manifest

logger = get_logger("validation.category_validator")

ALLOWED_CATEGORIES: tuple[str, ...] = tuple(c.value for c in CategoryName)


class CategoryValidator:
    """Maps input category names onto the categories of a merge target."""

    allowed: tuple[str, ...] = ALLOWED_CATEGORIES

    def validate(self, name: str, source: Path) -> CategoryName:
        """Return the :class:`CategoryName` for *name*.

        Raises:
            SchemaMismatchError: If *name* is not one of the allowed names.
        """
        if name in self.allowed:
            return CategoryName(name)

        logger.error(
            "unknown_category",
            category=name,
            allowed=list(self.allowed),
            path=str(source),
        )
        raise SchemaMismatchError(source, name, list(self.allowed))

    def lookup(self, target: Manifest, name: str, source: Path) -> AssetCategory:
        """Return the category of *target* that input category *name* merges into.

        Args:
            target: The manifest being built.
            name: Category name read from the manifest at *source*.
            source: Path of the input manifest, reported on failure.

        Raises:
            SchemaMismatchError: If *name* is unknown or *target* lacks it.
        """
        category = target.find_category(self.validate(name, source).value)
        if category is None:
            raise SchemaMismatchError(source, name, target.category_names())
        return category
