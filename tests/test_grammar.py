import random
import re
import sqlite3
from collections import Counter
from datetime import datetime

import pytest

from querysmith.ast import ColumnReference, Prod, Scope
from querysmith.grammar import (
    TYPES,
    generate_bool_expression,
    generate_column_reference,
    generate_constant_expression,
    generate_from_clause,
    generate_select,
    generate_select_clause,
    generate_statement,
    generate_table,
    generate_table_ref,
    generate_value_expression,
)
from querysmith.schema import Column, NamedRelation


def _named(schema):
    return [NamedRelation(name=t.name, columns=t.cols) for t in schema.tables]


def _fresh_scope(schema):
    return Scope(tables=_named(schema), schema=schema, refs=[], stmt_seq=Counter())


def _scope_with_refs(columns):
    rel = NamedRelation(name="t0", columns=columns)
    return Scope(tables=[rel], refs=[rel], stmt_seq=Counter())


def test_select_generation_executes_in_sqlite():
    random.seed(2024)
    failures = []
    executed = 0
    for _ in range(100):
        schema = generate_table(1)
        schema_sql = schema.out()
        conn = sqlite3.connect(":memory:")
        try:
            for stmt in schema_sql.split(";"):
                if stmt.strip():
                    conn.execute(stmt)
            for _ in range(30):
                select_sql = generate_statement(_fresh_scope(schema)).out()
                try:
                    cursor = conn.execute(select_sql)
                    cursor.fetchall()
                except sqlite3.Error as exc:
                    failures.append(f"{exc}\nSchema: {schema_sql}\nSQL: {select_sql}")
                    continue
                names = [d[0] for d in cursor.description]
                assert len(names) >= 1
                assert names == [f"c{i}" for i in range(len(names))]
                executed += 1
        finally:
            conn.close()
    assert failures == []
    assert executed == 100 * 30


def test_generate_table_shape():
    random.seed(3)
    schema = generate_table(5)
    assert [t.name for t in schema.tables] == ["t0", "t1", "t2", "t3", "t4"]
    for table in schema.tables:
        assert table.schema == "public"
        assert 2 <= len(table.cols) <= 10
        assert [c.name for c in table.cols] == [f"c{i}" for i in range(len(table.cols))]
        assert all(c.sql_type in TYPES for c in table.cols)


def test_generate_table_zero():
    assert generate_table(0).tables == []


def test_statement_structure():
    random.seed(11)
    schema = generate_table(1)
    scope = _fresh_scope(schema)
    stmt = generate_statement(scope)
    sql = stmt.out()
    assert sql.startswith("SELECT ")
    assert "\nFROM t0\nWHERE " in sql
    assert stmt.level == 1
    assert scope.refs == []
    assert [r.name for r in stmt.scope.refs] == ["t0"]
    if stmt.limit_clause:
        n = int(stmt.limit_clause.removeprefix("LIMIT "))
        assert 2 <= n <= 200


def test_generate_select_uses_lateral_refs():
    random.seed(5)
    schema = generate_table(1)
    outer = _fresh_scope(schema)
    outer.refs.append(NamedRelation(name="outer", columns=[Column("c0", "INTEGER")]))
    stmt = generate_select(Prod(scope=outer), outer)
    assert [r.name for r in stmt.scope.refs] == ["outer", "t0"]
    assert [r.name for r in outer.refs] == ["outer"]


def test_table_ref_aliases_are_sequential():
    schema = generate_table(1)
    scope = _fresh_scope(schema)
    prod = Prod(scope=scope)
    first = generate_table_ref(prod)
    second = generate_table_ref(prod)
    assert first.out() == "t0"
    assert second.out() == "t1"
    assert scope.stmt_seq["table"] == 2
    assert first.refs[0].columns == schema.tables[0].cols


def test_from_clause_adds_refs():
    schema = generate_table(1)
    scope = _fresh_scope(schema)
    clause = generate_from_clause(Prod(scope=scope))
    assert clause.out() == "FROM t0"
    assert scope.refs == clause.table_refs[0].refs


def test_select_clause_derived_names_and_types():
    random.seed(8)
    scope = _scope_with_refs([Column("a", "INTEGER"), Column("b", "TEXT")])
    clause = generate_select_clause(Prod(scope=scope))
    n = len(clause.value_exprs)
    assert n >= 1
    assert [c.name for c in clause.derived_columns] == [f"c{i}" for i in range(n)]
    assert scope.stmt_seq["c"] == n
    for expr, col in zip(clause.value_exprs, clause.derived_columns):
        assert expr.type() == col.sql_type


def test_column_reference_of_type():
    random.seed(1)
    scope = _scope_with_refs([Column("a", "INTEGER"), Column("b", "TEXT")])
    ref = generate_column_reference(Prod(scope=scope), "TEXT")
    assert ref.out() == "t0.b"
    assert ref.type() == "TEXT"


def test_column_reference_any_type():
    random.seed(1)
    scope = _scope_with_refs([Column("a", "INTEGER"), Column("b", "TEXT")])
    ref = generate_column_reference(Prod(scope=scope), "")
    assert ref.out() in {"t0.a", "t0.b"}


def test_column_reference_missing_type_raises():
    scope = _scope_with_refs([Column("a", "INTEGER")])
    with pytest.raises(ValueError):
        generate_column_reference(Prod(scope=scope), "BLOB")


def test_value_expression_without_refs_is_constant():
    scope = Scope(stmt_seq=Counter())
    expr = generate_value_expression(Prod(scope=scope), "BOOLEAN")
    assert expr.out() in {"TRUE", "FALSE"}


def test_value_expression_with_refs_keeps_type():
    random.seed(4)
    scope = _scope_with_refs([Column("a", "INTEGER")])
    exprs = [generate_value_expression(Prod(scope=scope), "INTEGER") for _ in range(200)]
    assert all(e.type() == "INTEGER" for e in exprs)
    assert any(isinstance(e, ColumnReference) for e in exprs)


_PATTERNS = {
    "INTEGER": r"\d+",
    "REAL": r"\d+\.\d{6}",
    "TEXT": r"'text\d+'",
    "BLOB": r"X'[0-9a-f]{8}'",
    "NUMERIC": r"\d+(\.\d{6})?",
    "BOOLEAN": r"TRUE|FALSE",
    "NULL": r"NULL",
}


@pytest.mark.parametrize("sql_type, pattern", sorted(_PATTERNS.items()))
def test_constant_formats(sql_type, pattern):
    random.seed(9)
    for _ in range(50):
        expr = generate_constant_expression(Prod(), sql_type)
        assert re.fullmatch(pattern, expr.out())
        assert expr.type() == sql_type


def test_constant_dates_and_times_are_valid():
    random.seed(10)
    for _ in range(100):
        date = datetime.strptime(generate_constant_expression(Prod(), "DATE").out(), "'%Y-%m-%d'")
        assert 2000 <= date.year <= 2022 and date.day <= 28
        datetime.strptime(generate_constant_expression(Prod(), "TIME").out(), "'%H:%M:%S'")
        stamp = datetime.strptime(
            generate_constant_expression(Prod(), "DATETIME").out(), "'%Y-%m-%d %H:%M:%S'"
        )
        assert 2000 <= stamp.year <= 2022 and stamp.day <= 28


def test_constant_unknown_type_is_null():
    expr = generate_constant_expression(Prod(), "FOO")
    assert expr.out() == "NULL"
    assert expr.type() == "FOO"


def test_constant_without_type_picks_one():
    random.seed(12)
    for _ in range(50):
        assert generate_constant_expression(Prod(), "").type() in TYPES


def test_bool_expression_sides_share_type():
    random.seed(13)
    scope = _scope_with_refs([Column("a", "INTEGER"), Column("b", "TEXT")])
    for _ in range(50):
        expr = generate_bool_expression(Prod(scope=scope))
        assert expr.op in {"=", "<>", "<", ">", "<=", ">="}
        assert expr.left.type() == expr.right.type()
        assert expr.type() == "BOOLEAN"