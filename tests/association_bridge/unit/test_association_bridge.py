"""Association bridge tests."""

from __future__ import annotations

import pytest
from embedded_documents.association_bridge import (
    Association,
    AssociationCycleError,
    Cardinality,
    associations_for,
    commit_associations,
    embedded_association_attributes,
    split_associations,
    stage_associations,
)
from embedded_documents.attribute_store import ReservedKeyNameError
from embedded_documents.document_model import Document, EmbeddedDocument
from embedded_documents.key_definitions import CoercionError


class Phone(EmbeddedDocument):
    pass


class Address(EmbeddedDocument):
    pass


class Company(Document):
    pass


class Person(Document):
    pass


Phone.key("number", str)
Address.key("city", str)
Address.many("phones", Phone)
Company.key("name", str)
Person.key("name", str)
Person.many("addresses", Address)
Person.many("employers", Company)
Person.one("primary_address", Address)


def test_flattening_lists_each_embedded_document_mapping() -> None:
    person = Person(name="Ada", addresses=[{"city": "London"}, {"city": "Paris"}])

    assert embedded_association_attributes(person) == {
        "addresses": [
            {"city": "London"},
            {"city": "Paris"},
        ]
    }


def test_flattening_merges_nested_many_associations_into_each_element() -> None:
    london = Address(city="London", phones=[{"number": "020"}, {"number": "021"}])
    paris = Address(city="Paris")
    person = Person(name="Ada", addresses=[london, paris])

    flattened = embedded_association_attributes(person)

    assert flattened["addresses"][0] == {
        "city": "London",
        "phones": [{"number": "020"}, {"number": "021"}],
    }
    assert flattened["addresses"][1] == {"city": "Paris"}


def test_flattening_skips_persistable_targets_and_single_associations() -> None:
    person = Person(
        name="Ada",
        employers=[Company(name="Analytical Engines")],
        primary_address={"city": "London"},
    )

    assert embedded_association_attributes(person) == {}


def test_empty_collection_is_kept_and_unset_collection_is_omitted() -> None:
    assert embedded_association_attributes(Person(name="Ada")) == {}
    assert embedded_association_attributes(Person(name="Ada", addresses=[])) == {"addresses": []}


def test_split_stage_and_commit_route_association_entries() -> None:
    person = Person()
    attrs = {"name": "Ada", "addresses": [{"city": "London"}]}

    routed, remaining = split_associations(Person, attrs)
    staged = stage_associations(Person, routed)

    assert remaining == {"name": "Ada"}
    assert "addresses" in attrs
    assert person.addresses is None

    commit_associations(person, staged)

    assert isinstance(person.addresses[0], Address)
    assert person.addresses[0].city == "London"


def test_association_setter_coerces_cardinality() -> None:
    person = Person()
    person.primary_address = {"city": "Lisbon"}

    assert isinstance(person.primary_address, Address)
    with pytest.raises(CoercionError):
        person.addresses = "London"
    with pytest.raises(CoercionError):
        person.addresses = [42]


def test_associations_are_inherited_without_leaking_upwards() -> None:
    class Employee(Person):
        pass

    Employee.many("phones", Phone)

    assert list(associations_for(Employee)) == [
        "addresses",
        "employers",
        "primary_address",
        "phones",
    ]
    assert "phones" not in associations_for(Person)
    assert associations_for(Person)["addresses"] == Association(
        "addresses", Cardinality.MANY, Address
    )


def test_self_referencing_embedded_many_association_is_rejected() -> None:
    class Node(EmbeddedDocument):
        pass

    with pytest.raises(AssociationCycleError):
        Node.many("children", Node)


def test_indirect_embedded_cycle_is_rejected() -> None:
    class Left(EmbeddedDocument):
        pass

    class Right(EmbeddedDocument):
        pass

    Left.many("rights", Right)

    with pytest.raises(AssociationCycleError):
        Right.many("lefts", Left)


def test_cycle_through_a_subclass_is_rejected() -> None:
    class Category(EmbeddedDocument):
        pass

    class SubCategory(Category):
        pass

    with pytest.raises(AssociationCycleError):
        Category.many("children", SubCategory)


def test_association_name_colliding_with_key_is_rejected() -> None:
    class Invoice(Document):
        pass

    Invoice.key("lines", list)

    with pytest.raises(ReservedKeyNameError):
        Invoice.many("lines", Address)
