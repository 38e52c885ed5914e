import pytest

from liteorm.base import LiteBase
from liteorm.generator import generate
from liteorm.orm_types import DateTime, Integer, Real, Text


def test_columns_and_meta_become_a_definition():
    class Product(LiteBase):
        sku = Text(pk=True)
        price = Real(nullable=False, check="price >= 0")
        stock = Integer(default=0)

        class Meta:
            table_name = "products"
            strict = True

    definition = Product.definition()
    assert definition.table_name == "products"
    assert list(definition.attributes) == ["sku", "price", "stock"]
    assert definition.options.strict
    assert generate(definition) == (
        "CREATE TABLE products (sku TEXT PRIMARY KEY, price REAL NOT NULL CHECK (price >= 0), "
        "stock INTEGER DEFAULT 0) STRICT"
    )
    assert LiteBase._registry[Product] is definition


def test_default_table_name_and_inherited_columns():
    class Stamped(LiteBase):
        created_at = DateTime(nullable=False)

        class Meta:
            abstract = True

    class Invoice(Stamped):
        id = Integer(pk=True)

    assert Invoice.definition().table_name == "Invoices"
    assert list(Invoice.definition().attributes) == ["created_at", "id"]
    with pytest.raises(TypeError):
        Stamped.definition()


def test_composite_key_in_meta():
    class Enrollment(LiteBase):
        student = Integer()
        course = Integer()

        class Meta:
            primary_key = ["student", "course"]
            without_rowid = True

    assert generate(Enrollment.definition()) == (
        "CREATE TABLE Enrollments (student INTEGER, course INTEGER, "
        "PRIMARY KEY (student, course)) WITHOUT ROWID"
    )
