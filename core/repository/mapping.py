"""
Entity-shape mapping: ordered field descriptors and table naming for one table model.

A mapping is generated once per shape from the SQLModel table metadata and cached;
repositories read and write entities only through it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Optional, Tuple, Type, TypeVar

from sqlalchemy.types import TypeEngine
from sqlmodel import SQLModel

T = TypeVar("T", bound=SQLModel)

ID_FIELD = "id"


def derive_table_name(model: Type[Any]) -> str:
    """Table name for an entity shape: type name + "s" (no irregular plurals)."""
    return f"{model.__name__}s"


@dataclass(frozen=True)
class FieldDescriptor:
    """One mapped field: attribute name, column name and column type."""
    name: str
    column: str
    type_: Optional[TypeEngine] = None

    def get(self, entity: Any) -> Any:
        return getattr(entity, self.name, None)

    def set(self, entity: Any, value: Any) -> None:
        setattr(entity, self.name, value)


@dataclass(frozen=True)
class EntityMapping(Generic[T]):
    model: Type[T]
    table_name: str
    identifier: FieldDescriptor
    fields: Tuple[FieldDescriptor, ...]

    @classmethod
    def from_model(cls, model: Type[T], table_name: Optional[str] = None) -> "EntityMapping[T]":
        """Build the mapping from a table model's fields, in declaration order."""
        table = getattr(model, "__table__", None)
        if table is None:
            raise TypeError(f"{model.__name__} is not a table model (declare it with table=True)")
        if ID_FIELD not in model.model_fields:
            raise TypeError(f"{model.__name__} has no '{ID_FIELD}' identifier field")

        descriptors = []
        for name in model.model_fields:
            column = table.c.get(name)
            if column is None:
                continue
            descriptors.append(FieldDescriptor(name=name, column=column.name, type_=column.type))

        identifier = next(d for d in descriptors if d.name == ID_FIELD)
        return cls(
            model=model,
            table_name=table_name or table.name,
            identifier=identifier,
            fields=tuple(d for d in descriptors if d.name != ID_FIELD),
        )

    @property
    def descriptors(self) -> Tuple[FieldDescriptor, ...]:
        """Identifier first, then the other fields."""
        return (self.identifier,) + self.fields

    def identity_of(self, entity: T) -> Any:
        return self.identifier.get(entity)

    def values(self, entity: T) -> Dict[str, Any]:
        """Bind values for every non-identifier field, keyed by field name."""
        return {field.name: field.get(entity) for field in self.fields}

    def materialize(self, row: Mapping[str, Any]) -> T:
        """Rebuild an entity from a column -> value mapping.

        Column names are matched case-sensitively; unknown columns are ignored and
        fields missing from the row keep the model default.
        """
        entity = self.model()
        for descriptor in self.descriptors:
            if descriptor.column in row:
                descriptor.set(entity, row[descriptor.column])
        return entity


_mappings: Dict[Tuple[type, Optional[str]], EntityMapping] = {}
_table_owners: Dict[str, type] = {}


def mapping_for(model: Type[T], table_name: Optional[str] = None) -> EntityMapping[T]:
    """Get (or build and register) the mapping for a shape.

    Raises ValueError when two shapes resolve to the same table name.
    """
    key = (model, table_name)
    mapping = _mappings.get(key)
    if mapping is not None:
        return mapping

    mapping = EntityMapping.from_model(model, table_name)
    owner = _table_owners.get(mapping.table_name)
    if owner is not None and owner is not model:
        raise ValueError(
            f"Table '{mapping.table_name}' is already mapped to {owner.__name__}; "
            f"cannot map {model.__name__} to it"
        )
    _table_owners[mapping.table_name] = model
    _mappings[key] = mapping
    return mapping
