"""SQL functions that compile differently per dialect."""
from sqlalchemy import String
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement


class casefold(FunctionElement):
    """
    Unicode case folding, for case-insensitive comparisons.

    PostgreSQL's lower() already folds non-ASCII letters. SQLite's only folds
    ASCII, so there it calls a Python function registered on each connection.
    """
    type = String()
    name = "casefold"
    inherit_cache = True


@compiles(casefold)
def _compile_casefold(element, compiler, **kw):
    return f"lower({compiler.process(element.clauses, **kw)})"


@compiles(casefold, "sqlite")
def _compile_casefold_sqlite(element, compiler, **kw):
    return f"casefold({compiler.process(element.clauses, **kw)})"


def _fold(value: str | None) -> str | None:
    if value is None:
        return None
    return value.casefold()


def register_sqlite_functions(dbapi_connection, connection_record) -> None:
    """Connect hook installing the Python side of ``casefold`` on SQLite."""
    dbapi_connection.create_function("casefold", 1, _fold)
