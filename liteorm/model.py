from liteorm.exceptions import LiteORMError


class Model:
    """CRUD helpers bound to one table definition. Rows come back as dicts keyed by attribute name."""

    def __init__(self, database, name, definition):
        self.db = database
        self.name = name
        self.definition = definition
        self.table_name = definition.table_name
        self._attribute_by_column = {col: attr for attr, col in definition.column_names.items()}

    def __repr__(self):
        return f"<Model {self.name} table={self.table_name} columns=[{', '.join(self.definition.attributes)}]>"

    @property
    def engine(self):
        return self.db.engine

    @property
    def builder(self):
        return self.db.query_builder

    def _to_columns(self, values):
        if not values:
            return {}
        return {self.definition.resolve_column(key): value for key, value in values.items()}

    def _to_attributes(self, row):
        return {self._attribute_by_column.get(key, key): row[key] for key in row.keys()}

    def _order_columns(self, order):
        if not order:
            return order
        resolved = []
        for item in order:
            if isinstance(item, str):
                resolved.append(self.definition.resolve_column(item))
            else:
                col, direction = item
                resolved.append((self.definition.resolve_column(col) if col else col, direction))
        return resolved

    def sync(self, drop_first=False):
        self.db.generator.create_all(self.engine, [self.definition], drop_first=drop_first)

    def drop(self):
        sql, params = self.builder.build_drop(self.table_name)
        self.engine.execute(sql, params)
        self.engine.autocommit()

    def find_all(self, where=None, order=None, limit=None, offset=None):
        sql, params = self.builder.build_select(
            self.table_name,
            where=self._to_columns(where),
            order=self._order_columns(order),
            limit=limit,
            offset=offset,
        )
        return [self._to_attributes(row) for row in self.engine.execute(sql, params)]

    def find_one(self, where=None, order=None):
        rows = self.find_all(where=where, order=order, limit=1)
        return rows[0] if rows else None

    def find_by_pk(self, value):
        keys = self.definition.primary_key
        if not keys:
            return self.find_one({"rowid": value})
        if len(keys) == 1:
            return self.find_one({keys[0]: value})
        if not isinstance(value, dict):
            raise LiteORMError(
                f"{self.name} has a composite primary key ({', '.join(keys)}); pass a dict of values"
            )
        return self.find_one({key: value.get(key) for key in keys})

    def count(self, where=None):
        sql, params = self.builder.build_count(self.table_name, self._to_columns(where))
        return self.engine.execute(sql, params)[0][0]

    def create(self, values):
        """Insert one row and return it as stored, defaults and generated columns included."""
        sql, params = self.builder.build_insert(self.table_name, self._to_columns(values))
        rowid = self.engine.execute_insert(sql, params)
        self.engine.autocommit()

        if self.definition.options.without_rowid:
            return dict(values)
        sql, params = self.builder.build_select(self.table_name, where={"rowid": rowid}, limit=1)
        rows = self.engine.execute(sql, params)
        return self._to_attributes(rows[0]) if rows else dict(values)

    def update(self, values, where=None):
        sql, params = self.builder.build_update(
            self.table_name, self._to_columns(values), self._to_columns(where)
        )
        count = self.engine.execute_write(sql, params)
        self.engine.autocommit()
        return count

    def destroy(self, where=None):
        sql, params = self.builder.build_delete(self.table_name, self._to_columns(where))
        count = self.engine.execute_write(sql, params)
        self.engine.autocommit()
        return count
