"""Relational model: columns, tables and database schemas."""

from __future__ import annotations

from dataclasses import dataclass, field

SqlType = str


@dataclass
class Column:
    """A named, typed column."""

    name: str
    sql_type: SqlType

    def out(self) -> str:
        """Return the column definition as used in CREATE TABLE."""
        return f"{self.name} {self.sql_type}"

    def ident(self) -> str:
        return self.name

    def type(self) -> SqlType:
        return self.sql_type


@dataclass
class NamedRelation:
    """A relation visible under a name, such as a table or an alias."""

    name: str
    columns: list[Column] = field(default_factory=list)


@dataclass
class Table:
    """A table belonging to a database schema."""

    schema: str
    name: str
    cols: list[Column] = field(default_factory=list)

    def out(self) -> str:
        """Return the CREATE TABLE statement, without a trailing semicolon."""
        body = ",\n".join(f"    {col.out()}" for col in self.cols)
        if body:
            body += "\n"
        return f"CREATE TABLE {self.ident()} (\n{body})"

    def ident(self) -> str:
        return self.name

    def columns(self) -> list[Column]:
        return self.cols


@dataclass
class Operator:
    """A binary operator with its operand and result types."""

    name: str
    lhs: SqlType
    rhs: SqlType
    res: SqlType

    def ident(self) -> str:
        return self.name


@dataclass
class Schema:
    """A database schema: its tables and operators."""

    tables: list[Table] = field(default_factory=list)
    operators: list[Operator] = field(default_factory=list)

    def out(self) -> str:
        """Return the DDL for every table, each statement ending in ';'."""
        return "\n\n".join(f"{table.out()};" for table in self.tables)


@dataclass
class RelationColumn:
    """A column together with the relation it is reached through."""

    rel: NamedRelation
    col: Column