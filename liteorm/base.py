from liteorm.definition import ModelDefinition
from liteorm.orm_types import Column


class LiteBase:
    """
    Declarative model base. Columns are class attributes, table options live in
    an inner ``Meta`` class:

        class Post(LiteBase):
            id = Integer(pk=True, autoincrement=True)
            title = Text(nullable=False)

            class Meta:
                table_name = "posts"
                strict = True
    """

    _registry = {}
    _definition = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        columns = {}
        for klass in reversed(cls.__mro__):
            for name, col in vars(klass).items():
                if isinstance(col, Column):
                    columns[name] = col

        meta_cls = cls.__dict__.get("Meta")
        meta_attrs = {}
        if meta_cls:
            for attr in dir(meta_cls):
                if not attr.startswith('_'):
                    meta_attrs[attr] = getattr(meta_cls, attr)

        if meta_attrs.pop("abstract", False):
            cls._definition = None
            return

        table_name = meta_attrs.pop("table_name", cls.__name__ + "s")
        cls._definition = ModelDefinition.coerce({
            "table_name": table_name,
            "attributes": columns,
            "options": meta_attrs,
        })
        LiteBase._registry[cls] = cls._definition

    @classmethod
    def definition(cls):
        if cls._definition is None:
            raise TypeError(f"{cls.__name__} is abstract and has no table")
        return cls._definition
