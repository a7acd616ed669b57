"""
``json_text``: the generic slot rendered as text, per dialect.

A JSON string renders without its quotes, numbers and booleans render
as their literal text, arrays and objects as their JSON text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement
from sqlalchemy.types import Text

if TYPE_CHECKING:
    from sqlalchemy.sql.compiler import SQLCompiler


class json_text(FunctionElement[str]):  # noqa: N801
    type = Text()
    name = "json_text"
    inherit_cache = True


@compiles(json_text)
def _json_text_default(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    return f"CAST({compiler.process(element.clauses, **kw)} AS VARCHAR)"


@compiles(json_text, "postgresql")
def _json_text_postgresql(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    return f"({compiler.process(element.clauses, **kw)} #>> '{{}}')"


@compiles(json_text, "sqlite")
def _json_text_sqlite(element: Any, compiler: SQLCompiler, **kw: Any) -> str:
    # json_extract turns JSON true/false into 1/0, so booleans are spelled out
    arg = compiler.process(element.clauses, **kw)
    return (
        f"CASE json_type({arg}) "
        f"WHEN 'true' THEN 'true' WHEN 'false' THEN 'false' "
        f"ELSE CAST(json_extract({arg}, '$') AS TEXT) END"
    )
