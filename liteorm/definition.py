"""
Model definitions consumed by the schema generator.

A definition is an immutable description of one table: its name, an ordered
mapping of attributes (declaration order is column order) and table options.
Keys are accepted in snake_case or in camelCase (``allow_null`` / ``allowNull``).
"""
from collections.abc import Mapping
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from liteorm.exceptions import DefinitionError
from liteorm.orm_types import Column
from liteorm.utils import snake_case


class _Spec(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
        arbitrary_types_allowed=True,
    )


def _as_list(value):
    if isinstance(value, str):
        return [value]
    return value


class Reference(_Spec):
    table: str
    column: str = "id"


class Generated(_Spec):
    expression: str
    stored: bool = False


class InlineUnique(_Spec):
    kind: Literal["inline"] = "inline"


class NamedUnique(_Spec):
    kind: Literal["named"] = "named"
    name: str


Unique = Union[InlineUnique, NamedUnique]


class AttributeSpec(_Spec):
    type: Any = None
    allow_null: Optional[bool] = None
    primary_key: bool = False
    auto_increment: bool = False
    unique: Optional[Unique] = None
    default_value: Any = None
    check: Optional[str] = None
    collate: Optional[str] = None
    generated: Optional[Generated] = None
    references: Optional[Reference] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    deferrable: bool = False
    deferred: bool = False

    @field_validator("unique", mode="before")
    @classmethod
    def normalize_unique(cls, value):
        if isinstance(value, (InlineUnique, NamedUnique)):
            return value
        if value is True:
            return InlineUnique()
        if isinstance(value, str):
            return NamedUnique(name=value)
        if isinstance(value, Mapping):
            return NamedUnique(name=value["name"]) if value.get("name") else None
        return None

    @property
    def has_default(self):
        # distinguishes an explicit default of None (DEFAULT NULL) from no default
        return "default_value" in self.model_fields_set


class ForeignKeyReference(_Spec):
    table: str
    fields: List[str] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def coerce_fields(cls, value):
        return _as_list(value)


class ForeignKeyConstraint(_Spec):
    fields: List[str] = Field(default_factory=list)
    references: Optional[ForeignKeyReference] = None
    on_delete: Optional[str] = None
    on_update: Optional[str] = None
    deferrable: bool = False
    deferred: bool = False

    @field_validator("fields", mode="before")
    @classmethod
    def coerce_fields(cls, value):
        return _as_list(value)


class TableConstraints(_Spec):
    unique: Dict[str, List[str]] = Field(default_factory=dict)
    check: Dict[str, str] = Field(default_factory=dict)
    foreign_key: Dict[str, ForeignKeyConstraint] = Field(default_factory=dict)

    @field_validator("unique", mode="before")
    @classmethod
    def coerce_unique(cls, value):
        if isinstance(value, Mapping):
            return {name: _as_list(fields) for name, fields in value.items()}
        return value


class VirtualTable(_Spec):
    using: Optional[str] = None
    args: List[str] = Field(default_factory=list)

    @field_validator("args", mode="before")
    @classmethod
    def default_args(cls, value):
        return [] if value is None else value


class TableOptions(_Spec):
    primary_key: Optional[Union[str, List[str]]] = None
    constraints: TableConstraints = Field(default_factory=TableConstraints)
    strict: bool = False
    without_rowid: bool = False
    temporary: bool = False
    if_not_exists: bool = False
    underscored: bool = False
    virtual: Optional[VirtualTable] = None
    table_name: Optional[str] = None
    freeze_table_name: bool = False

    @field_validator("virtual", mode="before")
    @classmethod
    def normalize_virtual(cls, value):
        if value is True:
            return VirtualTable()
        if value is False:
            return None
        if isinstance(value, str):
            return VirtualTable(using=value)
        return value

    @field_validator("constraints", mode="before")
    @classmethod
    def default_constraints(cls, value):
        return TableConstraints() if value is None else value


class ModelDefinition(_Spec):
    table_name: str
    attributes: Dict[str, AttributeSpec] = Field(default_factory=dict)
    options: TableOptions = Field(default_factory=TableOptions)

    @field_validator("attributes", mode="before")
    @classmethod
    def expand_attributes(cls, value):
        if not isinstance(value, Mapping):
            return value
        expanded = {}
        for name, attr in value.items():
            if isinstance(attr, Column):
                attr = attr.to_attribute()
            elif isinstance(attr, (str, type)):
                # shorthand: ``{"name": "STRING"}``
                attr = {"type": attr}
            expanded[name] = attr
        return expanded

    @field_validator("options", mode="before")
    @classmethod
    def default_options(cls, value):
        return TableOptions() if value is None else value

    @classmethod
    def coerce(cls, value):
        """Return ``value`` as a definition, validating plain mappings."""
        if isinstance(value, cls):
            return value
        try:
            return cls.model_validate(value)
        except ValidationError as e:
            raise DefinitionError(f"Invalid model definition: {e}") from e

    def column_name(self, name):
        return snake_case(name) if self.options.underscored else name

    def resolve_column(self, name):
        """Column name for ``name`` if it is a declared attribute, else ``name`` unchanged."""
        if name in self.attributes:
            return self.column_name(name)
        return name

    @property
    def column_names(self):
        return {name: self.column_name(name) for name in self.attributes}

    def resolve_primary_key(self):
        """
        Decide where the primary key is declared.

        Returns ``(column_pk, table_pk)``: the attribute that carries an inline
        ``PRIMARY KEY`` clause, or the list of names for a table-level
        ``PRIMARY KEY (...)`` constraint. At most one of the two is set.

        A list in ``options.primary_key`` always wins over column flags. A single
        name keeps the inline clause only when that attribute is itself flagged.
        Several flagged attributes without an options key form a composite key.
        """
        flagged = [name for name, attr in self.attributes.items() if attr.primary_key]
        declared = self.options.primary_key

        if isinstance(declared, str):
            if declared in flagged:
                return declared, []
            return None, [declared]
        if declared:
            return None, list(declared)

        if len(flagged) == 1:
            return flagged[0], []
        return None, flagged

    @property
    def primary_key(self):
        column_pk, table_pk = self.resolve_primary_key()
        return [column_pk] if column_pk else table_pk
