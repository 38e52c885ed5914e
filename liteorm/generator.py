import logging

from liteorm.definition import InlineUnique, ModelDefinition, NamedUnique
from liteorm.exceptions import InvalidVirtualTableSpec
from liteorm.orm_types import map_data_type
from liteorm.utils import format_default_value

logger = logging.getLogger("LiteORM")


def _deferrable_clause(deferred):
    return f"DEFERRABLE INITIALLY {'DEFERRED' if deferred else 'IMMEDIATE'}"


class SchemaGenerator:
    """Turns model definitions into SQLite DDL. Holds no state between calls."""

    def generate(self, definition):
        definition = ModelDefinition.coerce(definition)
        if definition.options.virtual is not None:
            return self.generate_virtual_table(definition)
        return self.generate_create_table(definition)

    def generate_create_table(self, definition):
        definition = ModelDefinition.coerce(definition)
        options = definition.options
        column_pk, table_pk = definition.resolve_primary_key()

        columns = []
        table_constraints = []

        for name, attr in definition.attributes.items():
            col_name = definition.column_name(name)
            sql_type = map_data_type(attr.type)
            parts = [col_name, sql_type]

            if name == column_pk:
                parts.append("PRIMARY KEY")
                if attr.auto_increment:
                    parts.append("AUTOINCREMENT")
            elif attr.primary_key and attr.auto_increment:
                logger.warning(
                    f"[SCHEMA]: AUTOINCREMENT dropped for {definition.table_name}.{col_name}, "
                    f"primary key is declared at table level"
                )

            if attr.allow_null is False:
                parts.append("NOT NULL")

            if isinstance(attr.unique, InlineUnique):
                parts.append("UNIQUE")
            elif isinstance(attr.unique, NamedUnique):
                table_constraints.append(f"CONSTRAINT {attr.unique.name} UNIQUE ({col_name})")

            if attr.has_default:
                parts.append(f"DEFAULT {format_default_value(attr.default_value)}")

            if attr.check:
                parts.append(f"CHECK ({attr.check})")

            if sql_type == "TEXT" and attr.collate:
                parts.append(f"COLLATE {attr.collate}")

            if attr.generated:
                kind = "STORED" if attr.generated.stored else "VIRTUAL"
                parts.append(f"GENERATED ALWAYS AS ({attr.generated.expression}) {kind}")

            if attr.references:
                parts.append(f"REFERENCES {attr.references.table}({attr.references.column})")
                if attr.on_delete:
                    parts.append(f"ON DELETE {attr.on_delete}")
                if attr.on_update:
                    parts.append(f"ON UPDATE {attr.on_update}")
                if attr.deferrable:
                    parts.append(_deferrable_clause(attr.deferred))

            columns.append(" ".join(parts))

        if table_pk:
            table_constraints.append(f"PRIMARY KEY ({self._column_list(definition, table_pk)})")

        table_constraints.extend(self._table_constraints(definition))

        modifiers = []
        if options.strict:
            modifiers.append("STRICT")
        if options.without_rowid:
            modifiers.append("WITHOUT ROWID")

        create = "CREATE TEMPORARY TABLE" if options.temporary else "CREATE TABLE"
        if_not_exists = "IF NOT EXISTS " if options.if_not_exists else ""
        body = ", ".join(columns + table_constraints)
        sql = f"{create} {if_not_exists}{definition.table_name} ({body}) {', '.join(modifiers)}".strip()
        logger.debug(f"[SCHEMA]: {sql}")
        return sql

    def generate_virtual_table(self, definition):
        definition = ModelDefinition.coerce(definition)
        virtual = definition.options.virtual
        if virtual is None or not virtual.using:
            raise InvalidVirtualTableSpec(definition.table_name)

        if_not_exists = "IF NOT EXISTS " if definition.options.if_not_exists else ""
        sql = (
            f"CREATE VIRTUAL TABLE {if_not_exists}{definition.table_name} "
            f"USING {virtual.using} ({', '.join(virtual.args)})"
        )
        logger.debug(f"[SCHEMA]: {sql}")
        return sql

    def create_all(self, engine, definitions, drop_first=False):
        """Create every table in ``definitions`` on ``engine``; commits unless a transaction is open."""
        definitions = [ModelDefinition.coerce(d) for d in definitions]
        if drop_first:
            # children first so foreign keys never point at a dropped parent
            for definition in reversed(definitions):
                engine.execute(f'DROP TABLE IF EXISTS "{definition.table_name}"')
        for definition in definitions:
            engine.execute(self.generate(definition))
        engine.autocommit()

    def _column_list(self, definition, names):
        return ", ".join(definition.resolve_column(name) for name in names)

    def _table_constraints(self, definition):
        constraints = definition.options.constraints
        out = []

        for name, fields in constraints.unique.items():
            if fields:
                out.append(f"CONSTRAINT {name} UNIQUE ({self._column_list(definition, fields)})")

        for name, expression in constraints.check.items():
            out.append(f"CONSTRAINT {name} CHECK ({expression})")

        for name, fk in constraints.foreign_key.items():
            if not fk.fields or not fk.references:
                continue
            parts = [f"CONSTRAINT {name} FOREIGN KEY ({self._column_list(definition, fk.fields)})"]
            if fk.references.fields:
                parts.append(f"REFERENCES {fk.references.table}({', '.join(fk.references.fields)})")
            else:
                # SQLite resolves a bare reference to the parent's primary key
                parts.append(f"REFERENCES {fk.references.table}")
            if fk.on_delete:
                parts.append(f"ON DELETE {fk.on_delete}")
            if fk.on_update:
                parts.append(f"ON UPDATE {fk.on_update}")
            if fk.deferrable:
                parts.append(_deferrable_clause(fk.deferred))
            out.append(" ".join(parts))

        return out


_default_generator = SchemaGenerator()


def generate(definition):
    return _default_generator.generate(definition)
