"""Document lifecycle integration tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from embedded_documents import Document, EmbeddedDocument
from embedded_documents.key_definitions import CoercionError
from embedded_documents.schema_registry import ValidationRule


def test_schema_grows_across_hierarchy_after_instances_exist() -> None:
    class Person(Document):
        pass

    class Employee(Person):
        pass

    class Phone(EmbeddedDocument):
        pass

    class Address(EmbeddedDocument):
        pass

    Phone.key("number", str, required=True)
    Address.key("city", str)
    Address.many("phones", Phone)
    Person.key("name", str, required=True)
    Person.many("addresses", Address)
    Employee.key("salary", Decimal, numeric=True)

    employee = Employee(
        name="Ada",
        salary="1200.50",
        addresses=[{"city": "London", "phones": [{"number": 20}]}],
    )

    Person.key("born", date)
    employee.born = "1815-12-10"

    assert list(Employee.keys()) == ["name", "salary", "born"]
    assert "salary" not in Person.keys()
    assert employee.salary == Decimal("1200.50")
    assert employee.born == date(1815, 12, 10)
    assert employee.born_before_typecast == "1815-12-10"
    assert employee.flattened_attributes() == {
        "name": "Ada",
        "salary": Decimal("1200.50"),
        "born": date(1815, 12, 10),
        "addresses": [{"city": "London", "phones": [{"number": "20"}]}],
    }
    assert [request.rule for request in Employee.validation_requests()] == [
        ValidationRule.PRESENCE,
        ValidationRule.NUMERICALITY,
    ]
    assert repr(employee) == "<Employee name: Ada, salary: 1200.50, born: 1815-12-10>"


def test_failed_write_keeps_raw_value_and_clears_typed_value() -> None:
    class Reading(EmbeddedDocument):
        pass

    Reading.key("value", float)

    reading = Reading(value=1.5)
    with pytest.raises(CoercionError):
        reading.value = "warm"

    assert reading.value is None
    assert reading.value_before_typecast == "warm"
    assert reading.attributes == {}


def test_documents_with_equal_nested_documents_are_equal() -> None:
    class Address(EmbeddedDocument):
        pass

    class Person(Document):
        pass

    Address.key("city", str)
    Person.key("name", str)
    Person.key("home", Address)

    first = Person(name="Ada", home={"city": "London"})
    second = Person(name="Ada", home=Address(city="London"))

    assert first == second
    assert first != Person(name="Ada", home={"city": "Paris"})
