import json
import math
import re
from datetime import date, datetime, time

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


class SqlLiteral:
    """Raw SQL fragment emitted verbatim, e.g. ``sql_literal("CURRENT_TIMESTAMP")``."""

    def __init__(self, sql):
        self.sql = sql

    def __eq__(self, other):
        return isinstance(other, SqlLiteral) and other.sql == self.sql

    def __hash__(self):
        return hash(self.sql)

    def __repr__(self):
        return f"<SqlLiteral {self.sql}>"

    def __str__(self):
        return self.sql


def sql_literal(sql):
    return SqlLiteral(sql)


def snake_case(name):
    s = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    s = _WORD_BOUNDARY.sub(r"\1_\2", s)
    return s.replace("-", "_").replace(" ", "_").lower()


def quote_string(value):
    return "'" + value.replace("'", "''") + "'"


def format_default_value(value):
    """Render a Python value as a SQLite DEFAULT literal."""
    if value is None:
        return "NULL"
    if isinstance(value, SqlLiteral):
        return value.sql
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if math.isnan(value):
            return "NULL"
        if math.isinf(value):
            # out-of-range literals read back as +/-Infinity in SQLite
            return "9e999" if value > 0 else "-9e999"
        return repr(value)
    if isinstance(value, int):
        return repr(value)
    if isinstance(value, (bytes, bytearray)):
        return f"X'{bytes(value).hex().upper()}'"
    if isinstance(value, (datetime, date, time)):
        return quote_string(value.isoformat())
    if isinstance(value, (dict, list)):
        return quote_string(json.dumps(value))
    return quote_string(str(value))


def convert_value(value):
    """Coerce a Python value into something the sqlite3 driver binds natively."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value
