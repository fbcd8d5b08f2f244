"""
Urn construction through caller-supplied factories.
Parsing belongs to the urn types themselves; this module only centralizes error wrapping.
"""

from typing import Callable, Dict, Optional, TypeVar

U = TypeVar("U")

UrnFactory = Callable[[str], U]


class InvalidUrnError(ValueError):
    """Urn text could not be turned into an urn instance."""
    pass


def get_urn(urn: str, factory: Optional[UrnFactory]) -> U:
    """
    Given urn string and urn factory, return urn instance.

    Args:
        urn: urn string
        factory: callable building an urn from its string form, e.g. a create_from_string classmethod

    Raises:
        InvalidUrnError: factory is missing or fails on the text
    """
    if factory is None:
        raise InvalidUrnError(f"URN conversion error for {urn}: no urn factory supplied")
    try:
        return factory(urn)
    except Exception as e:
        raise InvalidUrnError(f"URN conversion error for {urn}") from e


class UrnResolver:
    """Registry of urn factories keyed by entity kind."""

    def __init__(self, factories: Optional[Dict[str, UrnFactory]] = None):
        self._factories: Dict[str, UrnFactory] = dict(factories or {})

    def register(self, kind: str, factory: UrnFactory) -> None:
        self._factories[kind] = factory

    def kinds(self):
        return sorted(self._factories)

    def resolve(self, urn: str, kind: str):
        """Build an urn of the given kind; unknown kinds raise InvalidUrnError."""
        return get_urn(urn, self._factories.get(kind))
