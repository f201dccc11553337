"""Cache key builders. Single place for key format (DRY).

Keys are flat: "<ResourceCategory>/<Identifier>". The category must not
contain the separator, otherwise prefix scans would match other categories.
"""

from sweeper.core.constants import CACHE_KEY_SEP


def _validate_category(category: str) -> None:
    """Raise ValueError if category is empty or contains the separator."""
    if not category:
        raise ValueError("Cache key category must not be empty")
    if CACHE_KEY_SEP in category:
        raise ValueError(
            f"Cache key category {category!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def category_prefix(category: str) -> str:
    """Prefix shared by every cache key of a category (e.g. 'Patient/')."""
    _validate_category(category)
    return f"{category}{CACHE_KEY_SEP}"


def resource_key(category: str, resource_id: str) -> str:
    """Cache key for one record (e.g. 'AuditEvent/123')."""
    return f"{category_prefix(category)}{resource_id}"
