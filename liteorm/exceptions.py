class LiteORMError(Exception):
    """Base class for every error raised by liteorm."""


class InvalidVirtualTableSpec(LiteORMError, ValueError):
    def __init__(self, table_name):
        self.table_name = table_name
        super().__init__(
            f"Virtual table '{table_name}' requires a module name in options.virtual.using"
        )


class DefinitionError(LiteORMError, ValueError):
    pass


class QueryError(LiteORMError):
    def __init__(self, sql, params=None, message=None):
        self.sql = sql
        self.params = params
        super().__init__(message or f"Query failed: {sql}")


class ModelNotFound(LiteORMError, KeyError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Model '{name}' has not been defined")
