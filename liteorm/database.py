import logging
import sqlite3
from contextlib import contextmanager

from liteorm.builder import QueryBuilder
from liteorm.definition import ModelDefinition
from liteorm.exceptions import ModelNotFound, QueryError
from liteorm.generator import SchemaGenerator
from liteorm.model import Model


class DatabaseEngine:
    logger = logging.getLogger("LiteORM")
    if not logger.handlers:
        logging.basicConfig(level=logging.INFO)

    def __init__(self, db_path=":memory:", echo=True, foreign_keys=True):
        self.db_path = db_path
        self.echo = echo
        self.connection = sqlite3.connect(db_path)
        self.connection.row_factory = sqlite3.Row
        self.in_transaction = False
        if foreign_keys:
            self.connection.execute("PRAGMA foreign_keys = ON")

    def _log(self, sql, params=None):
        if not self.echo:
            return
        msg = f"[SQL EXECUTE]: {sql}"
        if params:
            msg += f" | [PARAMS]: {params}"
        self.logger.info(msg)

    def run(self, sql, params=None):
        self._log(sql, params)
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, params or ())
        except sqlite3.Error as e:
            self.logger.error(f"[SQL ERROR]: {e} | [SQL]: {sql} | [PARAMS]: {params}")
            raise QueryError(sql, params, f"{e} (while executing: {sql})") from e
        return cursor

    def execute(self, sql, params=None):
        return self.run(sql, params).fetchall()

    def execute_insert(self, sql, params=None):
        return self.run(sql, params).lastrowid

    def execute_write(self, sql, params=None):
        return self.run(sql, params).rowcount

    def autocommit(self):
        """Commit unless an explicit transaction is open."""
        if not self.in_transaction:
            self.commit()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()

    def close(self):
        self.connection.close()


class Database:
    """
    Entry point: owns the engine and the models defined against it.

        db = Database("app.sqlite")
        Users = db.define("Users", {"id": {"type": "STRING", "primaryKey": True}})
        Users.create({"id": "1"})
    """

    def __init__(self, path=":memory:", echo=True, foreign_keys=True, engine=None):
        self.engine = engine or DatabaseEngine(path, echo=echo, foreign_keys=foreign_keys)
        self.generator = SchemaGenerator()
        self.query_builder = QueryBuilder()
        self.models = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _resolve_table_name(self, name, options):
        if options.table_name:
            return options.table_name
        if options.freeze_table_name or name.endswith("s"):
            return name
        return name + "s"

    def define(self, name, attributes, options=None, sync=True):
        options = ModelDefinition.coerce({"table_name": name, "options": options}).options
        definition = ModelDefinition.coerce({
            "table_name": self._resolve_table_name(name, options),
            "attributes": attributes,
            "options": options,
        })
        return self.add_model(name, definition, sync=sync)

    def register(self, cls, sync=True):
        """Bind a declarative ``LiteBase`` subclass to this database."""
        return self.add_model(cls.__name__, cls.definition(), sync=sync)

    def add_model(self, name, definition, sync=True):
        model = Model(self, name, ModelDefinition.coerce(definition))
        self.models[name] = model
        if sync:
            model.sync()
        return model

    def model(self, name):
        try:
            return self.models[name]
        except KeyError:
            raise ModelNotFound(name) from None

    def sync(self, drop_first=False):
        self.generator.create_all(
            self.engine, [m.definition for m in self.models.values()], drop_first=drop_first
        )

    def query(self, sql, params=None):
        """
        Run raw SQL. Statements that return rows give a list of dicts,
        anything else gives the number of affected rows.
        """
        cursor = self.engine.run(sql, params)
        if cursor.description is not None:
            # RETURNING makes a write produce rows; it still has to be committed
            rows = [dict(row) for row in cursor.fetchall()]
            self.engine.autocommit()
            return rows
        self.engine.autocommit()
        return cursor.rowcount

    @contextmanager
    def transaction(self):
        if self.engine.in_transaction:
            yield self
            return
        self.engine.in_transaction = True
        try:
            yield self
            self.engine.commit()
        except Exception:
            self.engine.rollback()
            raise
        finally:
            self.engine.in_transaction = False

    def close(self):
        self.engine.close()
