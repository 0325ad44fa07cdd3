# querysmith

querysmith generates random SQL schemas and random `SELECT` queries over
them, for fuzzing SQL engines such as SQLite. Each query is built to be
syntactically and semantically valid for the schema it came from.

## Installation

```
pip install querysmith
```

## Usage

```python
import sqlite3

from querysmith.ast import Scope
from querysmith.grammar import generate_statement, generate_table
from querysmith.schema import NamedRelation

schema = generate_table(1)

conn = sqlite3.connect(":memory:")
for stmt in schema.out().split(";"):
    if stmt.strip():
        conn.execute(stmt)

tables = [NamedRelation(t.name, t.cols) for t in schema.tables]
scope = Scope(tables=tables, schema=schema)
query = generate_statement(scope).out()
print(query)
conn.execute(query)
```

A generated query looks like this:

```
SELECT t0.c1 AS c0, t0.c3 AS c1
FROM t0
WHERE t0.c2 <= 'text17'
LIMIT 88
```

Randomness comes from Python's `random` module. Call `random.seed(...)` to
make a run reproducible.

## Modules

- `querysmith.schema`: the relational model: `Column`, `NamedRelation`,
  `Table`, `Schema`, `Operator` and `RelationColumn`. `Table.out()` renders
  a `CREATE TABLE` statement; `Schema.out()` renders every table, each
  followed by `;` and separated by a blank line.
- `querysmith.ast`: the syntax tree of generated queries: `SelectStmt`,
  `FromClause`, `SelectClause`, `TableRef`, `ColumnReference`, `ConstExpr`
  and `BoolExpr`, each with an `out()` method giving its SQL text. `Scope`
  tracks the tables that may appear in `FROM`, the relations that may be
  referenced in `SELECT` and `WHERE`, and a shared counter of the aliases
  already handed out. `new_select_stmt(prod, scope, lateral)` creates an
  empty `SELECT` with its own scope.
- `querysmith.grammar`: the random generators.
  - `generate_table(num)` builds a schema of `num` tables named `t0`, `t1`,
    ..., each with 2 to 10 columns of types drawn from `TYPES` (`INTEGER`,
    `REAL`, `TEXT`, `BLOB`, `NUMERIC`, `BOOLEAN`, `DATE`, `TIME`,
    `DATETIME`, `NULL`).
  - `generate_statement(scope)` builds a `SelectStmt`.
  - `generate_select`, `generate_from_clause`, `generate_select_clause`,
    `generate_table_ref`, `generate_column_reference`,
    `generate_value_expression`, `generate_constant_expression`,
    `generate_bool_expression` and `generate_comparison_operation` build
    the individual parts. `generate_column_reference` raises `ValueError`
    when no visible column has the requested type.
- `querysmith.dice`: dice rolls `d6`, `d9`, `d12`, `d20`, `d42`, `d100`
  and `random_pick(items)`, which raises `IndexError` on an empty sequence.

## What it does not do

- There is no command-line program; the package is used as a library.
- It generates `SELECT` statements only. Each has a single aliased table in
  `FROM`, a single comparison in `WHERE`, an optional `LIMIT` and, rarely,
  `distinct`. There are no joins, subqueries, aggregates or functions.
- Generated tables have no constraints, keys or defaults.
- It does not run queries itself; executing them against an engine is left
  to the caller.

## Running the tests

```
pip install querysmith[test]
pytest
```