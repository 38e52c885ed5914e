from datetime import date, datetime, time

# Logical type tag -> native SQLite storage type
TYPE_MAP = {
    "STRING": "TEXT",
    "TEXT": "TEXT",
    "CHAR": "TEXT",
    "CITEXT": "TEXT",
    "UUID": "TEXT",
    "ENUM": "TEXT",
    "JSON": "TEXT",
    "DATE": "TEXT",
    "DATEONLY": "TEXT",
    "TIME": "TEXT",
    "INTEGER": "INTEGER",
    "BIGINT": "INTEGER",
    "SMALLINT": "INTEGER",
    "MEDIUMINT": "INTEGER",
    "TINYINT": "INTEGER",
    "BOOLEAN": "INTEGER",
    "FLOAT": "REAL",
    "REAL": "REAL",
    "DOUBLE": "REAL",
    "DECIMAL": "NUMERIC",
    "NUMERIC": "NUMERIC",
    "BLOB": "BLOB",
    "ANY": "ANY",
}

PYTHON_TYPE_MAP = {
    str: "TEXT",
    int: "INTEGER",
    bool: "INTEGER",
    float: "REAL",
    bytes: "BLOB",
    datetime: "TEXT",
    date: "TEXT",
    time: "TEXT",
    dict: "TEXT",
    list: "TEXT",
}

DEFAULT_SQL_TYPE = "TEXT"


def map_data_type(dtype):
    if dtype is None:
        return DEFAULT_SQL_TYPE
    if isinstance(dtype, type):
        return PYTHON_TYPE_MAP.get(dtype, DEFAULT_SQL_TYPE)
    # parameterised tags such as STRING(255) or DECIMAL(10, 2) map by their base name
    tag = str(dtype).split("(", 1)[0].strip().upper()
    return TYPE_MAP.get(tag, DEFAULT_SQL_TYPE)


class Column:
    def __init__(self, dtype, pk=False, nullable=True, unique=False, default=None, **extra):
        self.dtype = dtype
        self.pk = pk
        self.nullable = nullable
        self.unique = unique
        self.default = default
        self.extra = extra

    def __repr__(self):
        return f"<Column {self.dtype} pk={self.pk} nullable={self.nullable}>"

    def to_attribute(self):
        attr = {
            "type": self.dtype,
            "primary_key": self.pk,
            "unique": self.unique,
        }
        if not self.nullable:
            attr["allow_null"] = False
        if self.default is not None:
            attr["default_value"] = self.default
        attr.update(self.extra)
        return attr


class Text(Column):
    def __init__(self, pk=False, nullable=True, unique=False, default=None, **extra):
        super().__init__("TEXT", pk, nullable, unique, default, **extra)


class Integer(Column):
    def __init__(self, pk=False, nullable=True, unique=False, default=None, autoincrement=False, **extra):
        super().__init__("INTEGER", pk, nullable, unique, default, **extra)
        if autoincrement:
            self.extra["auto_increment"] = True


class Real(Column):
    def __init__(self, pk=False, nullable=True, unique=False, default=None, **extra):
        super().__init__("REAL", pk, nullable, unique, default, **extra)


class Boolean(Column):
    def __init__(self, nullable=True, default=None, **extra):
        super().__init__("BOOLEAN", False, nullable, False, default, **extra)


class Blob(Column):
    def __init__(self, nullable=True, default=None, **extra):
        super().__init__("BLOB", False, nullable, False, default, **extra)


class DateTime(Column):
    def __init__(self, pk=False, nullable=True, unique=False, default=None, **extra):
        super().__init__("DATE", pk, nullable, unique, default, **extra)


class ForeignKey(Column):
    def __init__(self, target_table, target_column="id", dtype="INTEGER", pk=False, nullable=True,
                 unique=False, on_delete=None, on_update=None, deferrable=False, deferred=False, **extra):
        super().__init__(dtype, pk, nullable, unique, None, **extra)
        self.target_table = target_table
        self.target_column = target_column
        self.on_delete = on_delete
        self.on_update = on_update
        self.deferrable = deferrable
        self.deferred = deferred

    def to_attribute(self):
        attr = super().to_attribute()
        attr["references"] = {"table": self.target_table, "column": self.target_column}
        if self.on_delete:
            attr["on_delete"] = self.on_delete
        if self.on_update:
            attr["on_update"] = self.on_update
        if self.deferrable:
            attr["deferrable"] = True
            attr["deferred"] = self.deferred
        return attr
