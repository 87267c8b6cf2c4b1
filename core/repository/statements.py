"""
Parameterized SQL text for the five repository operations of one entity shape.

Only table and column names (quoted by the dialect) are written into the SQL text;
every value is a bound parameter.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Dialect
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.sql.selectable import TextualSelect

from .mapping import EntityMapping, FieldDescriptor


@dataclass(frozen=True)
class StatementSet:
    select_all: TextualSelect
    select_by_id: TextualSelect
    insert: TextClause
    update: Optional[TextClause]  # None when the shape has no fields besides the identifier
    delete: TextClause


def _bind(descriptor: FieldDescriptor):
    return bindparam(descriptor.name, type_=descriptor.type_)


def build_statements(mapping: EntityMapping, dialect: Dialect) -> StatementSet:
    quote = dialect.identifier_preparer.quote
    table = quote(mapping.table_name)
    ident = mapping.identifier
    id_clause = f"{quote(ident.column)} = :{ident.name}"

    # Typed result columns so values come back as the field's Python type
    result_types = {d.column: d.type_ for d in mapping.descriptors if d.type_ is not None}

    select_all = text(f"SELECT * FROM {table}").columns(**result_types)
    select_by_id = (
        text(f"SELECT * FROM {table} WHERE {id_clause}")
        .bindparams(_bind(ident))
        .columns(**result_types)
    )

    if mapping.fields:
        columns = ", ".join(quote(f.column) for f in mapping.fields)
        placeholders = ", ".join(f":{f.name}" for f in mapping.fields)
        insert = text(f"INSERT INTO {table} ({columns}) VALUES ({placeholders})").bindparams(
            *[_bind(f) for f in mapping.fields]
        )
        set_clause = ", ".join(f"{quote(f.column)} = :{f.name}" for f in mapping.fields)
        update = text(f"UPDATE {table} SET {set_clause} WHERE {id_clause}").bindparams(
            _bind(ident), *[_bind(f) for f in mapping.fields]
        )
    else:
        if dialect.name in ("mysql", "mariadb"):
            insert = text(f"INSERT INTO {table} () VALUES ()")
        else:
            insert = text(f"INSERT INTO {table} DEFAULT VALUES")
        update = None

    delete = text(f"DELETE FROM {table} WHERE {id_clause}").bindparams(_bind(ident))

    return StatementSet(
        select_all=select_all,
        select_by_id=select_by_id,
        insert=insert,
        update=update,
        delete=delete,
    )
