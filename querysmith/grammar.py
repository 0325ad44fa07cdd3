"""Random generation of schemas and SELECT statements."""

from __future__ import annotations

import random

from querysmith.ast import (
    BoolExpr,
    ColumnReference,
    ConstExpr,
    FromClause,
    Prod,
    Scope,
    SelectClause,
    SelectStmt,
    TableRef,
    ValueExpr,
    new_select_stmt,
)
from querysmith.dice import d6, d20, d100, random_pick
from querysmith.schema import Column, NamedRelation, Schema, SqlType, Table

TYPES: list[SqlType] = [
    "INTEGER", "REAL", "TEXT", "BLOB", "NUMERIC",
    "BOOLEAN", "DATE", "TIME", "DATETIME", "NULL",
]

OPERATORS = ["=", "<>", "<", ">", "<=", ">="]


def generate_table(num: int) -> Schema:
    """Return a schema of ``num`` tables, each with 2 to 10 random columns."""
    schema = Schema()
    for i in range(num):
        n_cols = 2 + random.randrange(9)
        table = Table(
            schema="public",
            name=f"t{i}",
            cols=[Column(name=f"c{j}", sql_type=random_pick(TYPES)) for j in range(n_cols)],
        )
        schema.tables.append(table)
    return schema


def generate_statement(scope: Scope) -> SelectStmt:
    """Generate a random statement within ``scope``."""
    return generate_select(Prod(scope=scope), scope)


def generate_select(prod: Prod, scope: Scope) -> SelectStmt:
    """Generate a random SELECT statement below ``prod``."""
    stmt = new_select_stmt(prod, scope, True)

    if d100() == 1:
        stmt.set_quantifier = "distinct"

    stmt.from_clause = generate_from_clause(stmt.prod)
    # The FROM clause introduces the references the rest relies on.
    stmt.select_list = generate_select_clause(stmt.prod)
    stmt.where_clause = generate_bool_expression(stmt.prod)

    if d6() > 2:
        stmt.limit_clause = f"LIMIT {d100() + d100()}"

    return stmt


def generate_from_clause(prod: Prod) -> FromClause:
    """Generate a FROM clause and make its relations referenceable."""
    clause = FromClause(prod=prod, table_refs=[generate_table_ref(prod)])
    prod.scope.refs.extend(clause.table_refs[0].refs)
    return clause


def generate_select_clause(prod: Prod) -> SelectClause:
    """Generate at least one aliased expression for a SELECT list."""
    clause = SelectClause()
    seq = prod.scope.stmt_seq
    while True:
        sql_type = random_pick(prod.scope.available_types())
        clause.value_exprs.append(generate_value_expression(prod, sql_type))
        clause.derived_columns.append(Column(name=f"c{seq['c']}", sql_type=sql_type))
        seq["c"] += 1
        if d6() <= 1:
            break
    return clause


def generate_table_ref(prod: Prod) -> TableRef:
    """Pick a visible table and give it a fresh alias."""
    table = random_pick(prod.scope.tables)
    seq = prod.scope.stmt_seq
    alias = f"t{seq['table']}"
    seq["table"] += 1
    return TableRef(prod=prod, refs=[NamedRelation(name=alias, columns=table.columns)])


def generate_column_reference(prod: Prod, sql_type: SqlType) -> ColumnReference:
    """Reference a visible column, of ``sql_type`` when one is given.

    Raises ValueError when no visible column has the requested type.
    """
    if not sql_type:
        rel = random_pick(prod.scope.refs)
        col = random_pick(rel.columns)
        return ColumnReference(reference=f"{rel.name}.{col.name}", sql_type=col.sql_type)

    pairs = prod.scope.refs_of_type(sql_type)
    if not pairs:
        raise ValueError(f"no column of type {sql_type} is visible")
    pick = random_pick(pairs)
    return ColumnReference(reference=f"{pick.rel.name}.{pick.col.name}", sql_type=pick.col.sql_type)


def generate_value_expression(prod: Prod, sql_type: SqlType) -> ValueExpr:
    """Generate a column reference when possible, otherwise a constant."""
    if prod.scope.refs and d20() > 1:
        return generate_column_reference(prod, sql_type)
    return generate_constant_expression(prod, sql_type)


def _random_real() -> str:
    return f"{random.randrange(100) / (random.randrange(10) + 1):.6f}"


def _random_date() -> str:
    year = 2000 + random.randrange(23)
    month = 1 + random.randrange(12)
    day = 1 + random.randrange(28)
    return f"{year:04d}-{month:02d}-{day:02d}"


def _random_time() -> str:
    hour = random.randrange(24)
    minute = random.randrange(60)
    second = random.randrange(60)
    return f"{hour:02d}:{minute:02d}:{second:02d}"


def generate_constant_expression(prod: Prod, sql_type: SqlType) -> ConstExpr:
    """Generate a literal of ``sql_type``, or of a random type if none is given."""
    if not sql_type:
        sql_type = random_pick(TYPES)

    match sql_type:
        case "INTEGER":
            value = str(d100())
        case "REAL":
            value = _random_real()
        case "TEXT":
            value = f"'text{d100()}'"
        case "BLOB":
            value = "X'" + "".join(f"{random.randrange(256):02x}" for _ in range(4)) + "'"
        case "NUMERIC":
            value = str(d100()) if d6() > 3 else _random_real()
        case "BOOLEAN":
            value = "TRUE" if d6() > 3 else "FALSE"
        case "DATE":
            value = f"'{_random_date()}'"
        case "TIME":
            value = f"'{_random_time()}'"
        case "DATETIME":
            date = _random_date()
            value = f"'{date} {_random_time()}'"
        case _:
            value = "NULL"

    return ConstExpr(value=value, sql_type=sql_type)


def generate_bool_expression(prod: Prod) -> BoolExpr:
    """Generate a boolean expression for a WHERE clause."""
    return generate_comparison_operation(prod)


def generate_comparison_operation(prod: Prod) -> BoolExpr:
    """Compare two expressions of the same visible type."""
    sql_type = random_pick(prod.scope.available_types())
    left = generate_value_expression(prod, sql_type)
    op = random_pick(OPERATORS)
    right = generate_value_expression(prod, sql_type)
    return BoolExpr(left=left, op=op, right=right)