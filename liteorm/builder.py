import re

from liteorm.utils import convert_value


class QueryBuilder:
    def __init__(self):
        self._safe_ident_pattern = re.compile(r'^[a-zA-Z_][a-zA-Z0-9_]*$')

    def _quote(self, identifier):
        if not identifier or not self._safe_ident_pattern.match(str(identifier)):
            raise ValueError(f"Unsafe SQL identifier: {identifier}")
        return f'"{identifier}"'

    def _build_where(self, where):
        """``{"a": 1, "b": None}`` -> ``' WHERE "a" = ? AND "b" IS NULL'``, ``(1,)``"""
        if not where:
            return "", []
        where_parts = []
        params = []
        for col, val in where.items():
            quoted_col = self._quote(col)
            val = convert_value(val)
            if val is None:
                where_parts.append(f"{quoted_col} IS NULL")
            else:
                where_parts.append(f"{quoted_col} = ?")
                params.append(val)
        return " WHERE " + " AND ".join(where_parts), params

    def _build_order(self, order):
        order_clauses = []
        for item in order or ():
            if isinstance(item, str):
                col, direction = item, "ASC"
            else:
                col, direction = item
            if not col:
                continue
            direction = "DESC" if str(direction).upper() == "DESC" else "ASC"
            order_clauses.append(f"{self._quote(col)} {direction}")
        if not order_clauses:
            return ""
        return " ORDER BY " + ", ".join(order_clauses)

    def build_select(self, table_name, where=None, order=None, limit=None, offset=None, columns=None):
        table = self._quote(table_name)
        cols = ", ".join(self._quote(c) for c in columns) if columns else "*"
        sql = f"SELECT {cols} FROM {table}"

        where_sql, params = self._build_where(where)
        sql += where_sql
        sql += self._build_order(order)

        has_limit = limit is not None and limit >= 0
        has_offset = offset is not None and offset >= 0
        if has_limit:
            sql += f" LIMIT {int(limit)}"
            if has_offset:
                sql += f" OFFSET {int(offset)}"
        elif has_offset:
            sql += f" LIMIT -1 OFFSET {int(offset)}"

        return sql, tuple(params)

    def build_count(self, table_name, where=None):
        where_sql, params = self._build_where(where)
        return f"SELECT COUNT(*) FROM {self._quote(table_name)}{where_sql}", tuple(params)

    def build_insert(self, table_name, data):
        """Build INSERT SQL from table name and data dict."""
        table = self._quote(table_name)
        if not data:
            return f"INSERT INTO {table} DEFAULT VALUES", ()
        fields = list(data.keys())
        quoted_fields = [self._quote(f) for f in fields]
        placeholders = ", ".join(["?" for _ in fields])
        values = [convert_value(data[f]) for f in fields]
        sql = f"INSERT INTO {table} ({', '.join(quoted_fields)}) VALUES ({placeholders})"
        return sql, tuple(values)

    def build_update(self, table_name, data, where=None):
        if not data:
            raise ValueError("update data must not be empty")
        table = self._quote(table_name)
        set_parts = []
        params = []
        for col, val in data.items():
            set_parts.append(f"{self._quote(col)} = ?")
            params.append(convert_value(val))
        where_sql, where_params = self._build_where(where)
        sql = f"UPDATE {table} SET {', '.join(set_parts)}{where_sql}"
        return sql, tuple(params + where_params)

    def build_delete(self, table_name, where=None):
        where_sql, params = self._build_where(where)
        return f"DELETE FROM {self._quote(table_name)}{where_sql}", tuple(params)

    def build_drop(self, table_name, if_exists=True):
        exists = "IF EXISTS " if if_exists else ""
        return f"DROP TABLE {exists}{self._quote(table_name)}", ()
