"""Object mapper: field-for-field translation between entities and DTOs.

Maps are registered per (source type, target type) pair. A map onto a
pydantic model with no member overrides is handed to
``model_validate(..., from_attributes=True)``, so the DTO's own aliases
decide which attribute each field reads and nested DTOs map themselves.
Every other map copies the target's fields by name, or from the source
attribute or callable named in ``members``.

Mapping is purely structural; validation of client input happens on the
DTO before it reaches the mapper.

Example::

    mapper = Mapper()
    mapper.register(Author, AuthorDTO)
    mapper.register(AuthorCreateDTO, Author, firstname="first_name")
    dto = mapper.map(author, AuthorDTO)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, TypeVar

T = TypeVar("T")

Member = str | Callable[[Any], Any]


class MappingError(Exception):
    """Raised when no map is registered for a source/target pair."""


# ---------------------------------------------------------------------------
# Map definition
# ---------------------------------------------------------------------------

@dataclass
class TypeMap:
    """How to build one target type from one source type."""

    source: type
    target: type
    members: dict[str, Member] = field(default_factory=dict)

    def target_fields(self) -> list[str]:
        model_fields = getattr(self.target, "model_fields", None)
        if model_fields is not None:
            return list(model_fields)
        table = getattr(self.target, "__table__", None)
        if table is not None:
            return [col.key for col in table.columns]
        return list(getattr(self.target, "__annotations__", {}))

    def build(self, source: Any) -> Any:
        if not self.members and hasattr(self.target, "model_validate"):
            return self.target.model_validate(source, from_attributes=True)

        values: dict[str, Any] = {}
        for name in self.target_fields():
            member = self.members.get(name, name)
            if callable(member):
                values[name] = member(source)
            elif _has_member(source, member):
                values[name] = _get_member(source, member)
        return self.target(**values)


def _has_member(source: Any, name: str) -> bool:
    if isinstance(source, dict):
        return name in source
    return hasattr(source, name)


def _get_member(source: Any, name: str) -> Any:
    if isinstance(source, dict):
        return source[name]
    return getattr(source, name)


# ---------------------------------------------------------------------------
# Mapper
# ---------------------------------------------------------------------------

class Mapper:
    """Registry of type maps with a single ``map`` entry point."""

    def __init__(self):
        self._maps: dict[tuple[type, type], TypeMap] = {}

    def register(self, source: type, target: type, **members: Member) -> None:
        """Register a map; ``members`` names the source attribute per target field."""
        self._maps[(source, target)] = TypeMap(
            source=source,
            target=target,
            members=dict(members),
        )

    def has_map(self, source: type, target: type) -> bool:
        return self._find(source, target) is not None

    def map(self, source: Any, target: type[T]) -> T:
        """Map a single object to ``target``."""
        type_map = self._find(type(source), target)
        if type_map is None:
            raise MappingError(
                f"No map registered from {type(source).__name__} to {target.__name__}"
            )
        return type_map.build(source)

    def map_all(self, sources: Iterable[Any], target: type[T]) -> list[T]:
        """Map every element of a sequence to ``target``."""
        return [self.map(source, target) for source in sources]

    # -- internals --

    def _find(self, source: type, target: type) -> TypeMap | None:
        for klass in source.__mro__:
            type_map = self._maps.get((klass, target))
            if type_map is not None:
                return type_map
        return None
