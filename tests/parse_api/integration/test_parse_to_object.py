"""Pydantic-backed parse_to_object tests."""

from __future__ import annotations

from enum import Enum
from typing import Literal

import pytest
from interactive_parse.parse_api import parse_to_object
from interactive_parse.prompting.scripted_prompts import ScriptedPromptGateway
from interactive_parse.walking.value_assembly import ValueAssemblyError
from pydantic import BaseModel, Field


class Address(BaseModel):
    street: str
    number: int | None = None


class Person(BaseModel):
    name: str
    tags: list[str]
    address: Address
    active: bool


class Color(str, Enum):
    RED = "red"
    GREEN = "green"


class Paint(BaseModel):
    color: Color
    coats: tuple[int, float]


class Code(BaseModel):
    value: str = Field(min_length=3)


class Cat(BaseModel):
    pet_type: Literal["cat"]
    lives: int


class Dog(BaseModel):
    pet_type: Literal["dog"]
    name: str


class Owner(BaseModel):
    pet: Cat | Dog = Field(discriminator="pet_type")


def test_nested_model_is_built_from_answers() -> None:
    prompts = ScriptedPromptGateway(["Ann", True, "t1", False, "Main St", True, "5", True])

    outcome = parse_to_object(Person, prompts=prompts)

    assert outcome.aborted is False
    assert outcome.value == Person(
        name="Ann",
        tags=["t1"],
        address=Address(street="Main St", number=5),
        active=True,
    )
    assert prompts.remaining == 0


def test_backtrack_inside_nested_model_reasks_previous_field() -> None:
    prompts = ScriptedPromptGateway(
        ["Ann", False, "Main St", "<back>", "Side St", False, False]
    )

    outcome = parse_to_object(Person, prompts=prompts)

    assert outcome.value == Person(
        name="Ann", tags=[], address=Address(street="Side St"), active=False
    )


def test_enum_classes_and_tuples_validate_into_target_types() -> None:
    prompts = ScriptedPromptGateway(["green", "2", "0.5"])

    outcome = parse_to_object(Paint, prompts=prompts)

    assert outcome.value == Paint(color=Color.GREEN, coats=(2, 0.5))
    assert prompts.asked[0].options == ("red", "green")


def test_plain_types_are_supported() -> None:
    outcome = parse_to_object(list[int], prompts=ScriptedPromptGateway([True, "1", False]))

    assert outcome.value == [1]


def test_cancel_returns_aborted_outcome() -> None:
    outcome = parse_to_object(Person, prompts=ScriptedPromptGateway(["<cancel>"]))

    assert outcome.aborted is True
    assert outcome.value is None


def test_answers_failing_model_validation_raise_value_assembly_error() -> None:
    with pytest.raises(ValueAssemblyError, match="generated this value"):
        parse_to_object(Code, prompts=ScriptedPromptGateway(["ab"]))


def test_discriminated_union_fills_literal_tag_without_prompting() -> None:
    prompts = ScriptedPromptGateway(["Dog", "Rex"])

    outcome = parse_to_object(Owner, prompts=prompts)

    assert outcome.value == Owner(pet=Dog(pet_type="dog", name="Rex"))
    assert [prompt.kind for prompt in prompts.asked] == ["select", "text"]
    assert prompts.asked[0].options == ("Cat", "Dog")
