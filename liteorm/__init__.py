# LiteORM - a small model layer over sqlite3
from liteorm.base import LiteBase
from liteorm.builder import QueryBuilder
from liteorm.database import Database, DatabaseEngine
from liteorm.definition import AttributeSpec, ModelDefinition, TableOptions
from liteorm.exceptions import (
    DefinitionError,
    InvalidVirtualTableSpec,
    LiteORMError,
    ModelNotFound,
    QueryError,
)
from liteorm.generator import SchemaGenerator, generate
from liteorm.model import Model
from liteorm.utils import sql_literal

__version__ = "0.1.0"
__all__ = [
    "LiteBase", "QueryBuilder", "Database", "DatabaseEngine", "AttributeSpec",
    "ModelDefinition", "TableOptions", "DefinitionError", "InvalidVirtualTableSpec",
    "LiteORMError", "ModelNotFound", "QueryError", "SchemaGenerator", "generate",
    "Model", "sql_literal",
]
