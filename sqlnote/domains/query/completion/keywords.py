"""Keyword source for SQL completion.

Static ANSI SQL keywords and common function names, optionally extended
with dialect words reported by the connected server.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from textual import log

if TYPE_CHECKING:
    from sqlnote.domains.connections.app.session import ConnectionSession

# SQL keywords grouped by category
SQL_KEYWORDS = {
    "dml": [
        "SELECT", "FROM", "WHERE", "JOIN", "LEFT", "RIGHT", "INNER", "OUTER", "CROSS", "FULL",
        "NATURAL", "ON", "USING", "AND", "OR", "NOT", "IN", "EXISTS", "BETWEEN", "LIKE", "IS",
        "NULL", "ORDER", "BY", "ASC", "DESC", "GROUP", "HAVING", "LIMIT", "OFFSET", "FETCH",
        "DISTINCT", "AS", "UNION", "INTERSECT", "EXCEPT", "ALL", "ANY", "SOME", "INSERT", "INTO",
        "VALUES", "UPDATE", "SET", "DELETE", "MERGE", "MATCHED", "WITH", "RECURSIVE", "WINDOW",
        "OVER", "PARTITION", "ROWS", "RANGE", "PRECEDING", "FOLLOWING", "UNBOUNDED", "CURRENT",
        "ROW", "ONLY", "FIRST", "NEXT", "LATERAL", "ESCAPE", "TRUE", "FALSE", "UNKNOWN",
    ],
    "ddl": [
        "CREATE", "ALTER", "DROP", "TRUNCATE", "RENAME", "INDEX", "VIEW", "TABLE", "DATABASE",
        "SCHEMA", "CONSTRAINT", "PRIMARY", "KEY", "FOREIGN", "REFERENCES", "UNIQUE", "CHECK",
        "DEFAULT", "COLUMN", "ADD", "TEMPORARY", "CASCADE", "RESTRICT", "TRIGGER", "PROCEDURE",
        "FUNCTION", "SEQUENCE", "DOMAIN", "COLLATE", "CHARACTER",
    ],
    "control": [
        "CASE", "WHEN", "THEN", "ELSE", "END", "IF", "BEGIN", "COMMIT", "ROLLBACK", "SAVEPOINT",
        "TRANSACTION", "START", "WORK", "GRANT", "REVOKE", "PRIVILEGES", "TO", "PUBLIC",
        "EXPLAIN", "DESCRIBE", "SHOW", "USE", "CALL", "EXECUTE", "DECLARE", "CURSOR", "FOR",
    ],
    "types": [
        "INT", "INTEGER", "BIGINT", "SMALLINT", "TINYINT", "DECIMAL", "NUMERIC", "FLOAT", "REAL",
        "DOUBLE", "PRECISION", "VARCHAR", "CHAR", "TEXT", "NCHAR", "NVARCHAR", "VARYING", "DATE",
        "TIME", "DATETIME", "TIMESTAMP", "INTERVAL", "ZONE", "BOOLEAN", "BIT", "BLOB", "CLOB",
        "BINARY", "VARBINARY", "JSON", "UUID", "XML", "ENUM",
    ],
}

# Common SQL functions grouped by category
SQL_FUNCTIONS = {
    "aggregate": [
        "COUNT", "SUM", "AVG", "MIN", "MAX", "GROUP_CONCAT", "STRING_AGG", "ARRAY_AGG",
        "LISTAGG", "STDDEV", "VARIANCE",
    ],
    "string": [
        "CONCAT", "CONCAT_WS", "SUBSTRING", "SUBSTR", "TRIM", "LTRIM", "RTRIM", "UPPER",
        "LOWER", "LENGTH", "CHAR_LENGTH", "POSITION", "REPLACE", "REVERSE", "LPAD", "RPAD",
        "INSTR", "LOCATE",
    ],
    "numeric": [
        "ABS", "ROUND", "FLOOR", "CEILING", "CEIL", "POWER", "SQRT", "MOD", "SIGN", "RAND",
        "RANDOM", "TRUNCATE", "EXP", "LN", "LOG",
    ],
    "datetime": [
        "NOW", "CURRENT_DATE", "CURRENT_TIME", "CURRENT_TIMESTAMP", "DATE_ADD", "DATE_SUB",
        "DATEDIFF", "EXTRACT", "YEAR", "MONTH", "DAY", "HOUR", "MINUTE", "SECOND",
        "DATE_FORMAT", "DATE_TRUNC", "TO_DATE", "TO_CHAR",
    ],
    "conversion": ["CAST", "CONVERT"],
    "null_handling": ["COALESCE", "NULLIF", "IFNULL", "ISNULL", "NVL"],
    "window": [
        "ROW_NUMBER", "RANK", "DENSE_RANK", "NTILE", "LAG", "LEAD", "FIRST_VALUE",
        "LAST_VALUE", "CUME_DIST", "PERCENT_RANK",
    ],
}


def get_all_keywords() -> list[str]:
    """Get all SQL keywords as a flat list."""
    keywords: list[str] = []
    for category in SQL_KEYWORDS.values():
        keywords.extend(category)
    return list(set(keywords))


def get_all_functions() -> list[str]:
    """Get all SQL functions as a flat list."""
    functions: list[str] = []
    for category in SQL_FUNCTIONS.values():
        functions.extend(category)
    return list(set(functions))


def normalize_keywords(words: Iterable[str]) -> set[str]:
    """Split comma-separated driver output and upper-case each word.

    Drivers report dialect words either one per row or as a single
    comma-separated string, so both shapes are accepted.
    """
    result: set[str] = set()
    for entry in words:
        if not isinstance(entry, str):
            continue
        for word in entry.split(","):
            word = word.strip()
            if word:
                result.add(word.upper())
    return result


def static_keywords() -> frozenset[str]:
    """The built-in keyword and function vocabulary."""
    return frozenset(get_all_keywords()) | frozenset(get_all_functions())


def load_keywords(
    session: ConnectionSession | None = None,
    *,
    include_driver_keywords: bool = True,
    timeout: float | None = None,
) -> frozenset[str]:
    """Build the keyword vocabulary for a session.

    Dialect words come from the adapter through the session executor.
    Failing to read them is not fatal: the static vocabulary is returned.
    """
    keywords = set(static_keywords())
    if session is None or not include_driver_keywords or session.is_closed:
        return frozenset(keywords)

    try:
        driver_words = session.executor.run(
            session.adapter.get_sql_keywords, session.connection, timeout=timeout
        )
    except Exception as error:
        log.warning(f"Could not read dialect keywords for '{session.name}': {error}")
        return frozenset(keywords)
    keywords |= normalize_keywords(driver_words)
    return frozenset(keywords)
