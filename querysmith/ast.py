"""Abstract syntax tree of generated queries and the scope they are built in."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Protocol

from querysmith.schema import Column, NamedRelation, RelationColumn, Schema, SqlType


@dataclass
class Scope:
    """Tables and references visible while generating a query.

    ``tables`` may be named in a FROM clause; ``refs`` may be referenced in
    SELECT and WHERE clauses. ``stmt_seq`` counts identifiers already handed
    out so that none is reused; it is shared between nested scopes.
    """

    tables: list[NamedRelation] = field(default_factory=list)
    refs: list[NamedRelation] = field(default_factory=list)
    schema: Optional[Schema] = None
    stmt_seq: Counter = field(default_factory=Counter)
    parent: Optional[Scope] = None

    def available_types(self) -> list[SqlType]:
        """Return the type of every referenceable column; may hold duplicates."""
        return [col.sql_type for rel in self.refs for col in rel.columns]

    def refs_of_type(self, sql_type: SqlType) -> list[RelationColumn]:
        """Return every referenceable column of the given type."""
        return [
            RelationColumn(rel=rel, col=col)
            for rel in self.refs
            for col in rel.columns
            if col.sql_type == sql_type
        ]


@dataclass
class Prod:
    """A node position in the tree: its depth and the scope in force."""

    parent: Optional[Prod] = None
    level: int = 0
    scope: Optional[Scope] = None

    def child(self) -> Prod:
        """Return a production one level deeper sharing this scope."""
        return Prod(parent=self, level=self.level + 1, scope=self.scope)

    def indent(self) -> str:
        return " " * self.level


class ValueExpr(Protocol):
    """An expression that yields a value."""

    def out(self) -> str: ...

    def type(self) -> SqlType: ...


@dataclass
class ColumnReference:
    """A reference to a column of a visible relation."""

    reference: str
    sql_type: SqlType

    def out(self) -> str:
        return self.reference

    def type(self) -> SqlType:
        return self.sql_type


@dataclass
class ConstExpr:
    """A literal value."""

    value: str
    sql_type: SqlType

    def out(self) -> str:
        return self.value

    def type(self) -> SqlType:
        return self.sql_type


@dataclass
class BoolExpr:
    """A binary comparison yielding a boolean."""

    left: ValueExpr
    op: str
    right: ValueExpr

    def out(self) -> str:
        return f"{self.left.out()} {self.op} {self.right.out()}"

    def type(self) -> SqlType:
        return "BOOLEAN"


@dataclass
class TableRef:
    """A table reference in a FROM clause and the relations it introduces."""

    prod: Prod
    refs: list[NamedRelation] = field(default_factory=list)

    def out(self) -> str:
        return ", ".join(ref.name for ref in self.refs)


@dataclass
class FromClause:
    """The FROM part of a query."""

    prod: Prod
    table_refs: list[TableRef] = field(default_factory=list)

    def out(self) -> str:
        return "FROM " + ", ".join(ref.out() for ref in self.table_refs)


@dataclass
class SelectClause:
    """The list of expressions of a SELECT, each with its derived column."""

    value_exprs: list[ValueExpr] = field(default_factory=list)
    derived_columns: list[Column] = field(default_factory=list)

    def out(self) -> str:
        return ", ".join(
            f"{expr.out()} AS {col.ident()}"
            for expr, col in zip(self.value_exprs, self.derived_columns)
        )


@dataclass
class SelectStmt:
    """A SELECT query."""

    prod: Prod
    local_scope: Scope
    set_quantifier: str = ""
    select_list: Optional[SelectClause] = None
    from_clause: Optional[FromClause] = None
    where_clause: Optional[BoolExpr] = None
    limit_clause: str = ""

    @property
    def scope(self) -> Scope:
        return self.local_scope

    @property
    def level(self) -> int:
        return self.prod.level

    def out(self) -> str:
        """Return the SQL text of the query."""
        if self.select_list is None or self.from_clause is None or self.where_clause is None:
            raise ValueError("select statement is incomplete")
        head = "SELECT "
        if self.set_quantifier:
            head += self.set_quantifier + " "
        lines = [
            head + self.select_list.out(),
            self.from_clause.out(),
            "WHERE " + self.where_clause.out(),
        ]
        if self.limit_clause:
            lines.append(self.limit_clause)
        return "\n".join(lines)


def new_select_stmt(prod: Prod, scope: Scope, lateral: bool) -> SelectStmt:
    """Create an empty SELECT one level below ``prod`` with its own scope.

    The new scope copies the visible tables; with ``lateral`` it also copies
    the outer references. The identifier counter stays shared.
    """
    child = prod.child()
    local = Scope(
        tables=list(scope.tables),
        refs=list(scope.refs) if lateral else [],
        schema=scope.schema,
        stmt_seq=scope.stmt_seq,
        parent=scope,
    )
    child.scope = local
    return SelectStmt(prod=child, local_scope=local)