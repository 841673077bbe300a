"""Tests for command definitions and their validation."""

from __future__ import annotations

import pytest

from commandfile.definition import (
    ArgumentDeclaration,
    ArgumentMode,
    CommandCallback,
    CommandDefinition,
    OptionDeclaration,
    OptionMode,
    find_problems,
    validate_definition,
)
from commandfile.exceptions import CommandDefinitionError, CommandFileError


class Greeter:
    def greet(self, name: str, punctuation: str = "!") -> str:
        return f"Hello, {name}{punctuation}"


def make_definition(**kwargs: object) -> CommandDefinition:
    callback = CommandCallback(Greeter(), "greet")
    return CommandDefinition("greet", callback, **kwargs)  # type: ignore[arg-type]


class TestCommandCallback:
    """Tests for CommandCallback."""

    def test_calls_bound_method(self) -> None:
        callback = CommandCallback(Greeter(), "greet")
        assert callback("Ada") == "Hello, Ada!"
        assert callback("Ada", punctuation="?") == "Hello, Ada?"

    def test_resolve_returns_bound_method(self) -> None:
        greeter = Greeter()
        method = CommandCallback(greeter, "greet").resolve()
        assert method.__self__ is greeter

    def test_equality_uses_same_instance(self) -> None:
        greeter = Greeter()
        assert CommandCallback(greeter, "greet") == CommandCallback(greeter, "greet")
        assert CommandCallback(greeter, "greet") != CommandCallback(Greeter(), "greet")


class TestCommandDefinition:
    """Tests for CommandDefinition building methods."""

    def test_defaults(self) -> None:
        definition = make_definition()
        assert definition.pass_through is None
        assert definition.description == ""
        assert definition.help == ""
        assert definition.aliases == []
        assert definition.usages == []
        assert definition.arguments == []
        assert definition.options == []

    def test_add_methods_append_in_order(self) -> None:
        definition = make_definition()
        definition.add_usage("greet Ada")
        definition.add_usage("greet Ada ?")
        definition.add_argument("name", ArgumentMode.REQUIRED, "Who")
        definition.add_argument("punctuation", ArgumentMode.OPTIONAL, "", "!")
        definition.add_option("loud", "l", OptionMode.FLAG, "Shout")

        assert definition.usages == ["greet Ada", "greet Ada ?"]
        assert definition.arguments == [
            ArgumentDeclaration("name", ArgumentMode.REQUIRED, "Who", None),
            ArgumentDeclaration("punctuation", ArgumentMode.OPTIONAL, "", "!"),
        ]
        assert definition.options == [OptionDeclaration("loud", "l", OptionMode.FLAG, "Shout")]

    def test_option_parameter_name(self) -> None:
        option = OptionDeclaration("dry-run", "", OptionMode.FLAG)
        assert option.parameter_name == "dry_run"

    def test_modes_are_strings(self) -> None:
        assert ArgumentMode.VARIADIC == "variadic"
        assert OptionMode.VALUE_OPTIONAL == "value-optional"


class TestValidation:
    """Tests for find_problems and validate_definition."""

    def test_sound_definition(self) -> None:
        definition = make_definition()
        definition.add_argument("name", ArgumentMode.REQUIRED)
        definition.add_argument("count", ArgumentMode.OPTIONAL, default=1)
        definition.add_argument("rest", ArgumentMode.VARIADIC, default=[])
        definition.add_option("verbose", "v", OptionMode.FLAG)
        definition.add_option("format", "", OptionMode.VALUE_OPTIONAL, default="json")

        assert find_problems(definition) == []
        validate_definition(definition)

    def test_variadic_not_last(self) -> None:
        definition = make_definition()
        definition.add_argument("rest", ArgumentMode.VARIADIC, default=[])
        definition.add_argument("name", ArgumentMode.OPTIONAL)
        assert find_problems(definition) == ["argument 'name' follows variadic argument"]

    def test_two_variadics(self) -> None:
        definition = make_definition()
        definition.add_argument("a", ArgumentMode.VARIADIC, default=[])
        definition.add_argument("b", ArgumentMode.VARIADIC, default=[])
        assert find_problems(definition) == ["argument 'b' follows variadic argument"]

    def test_required_after_optional(self) -> None:
        definition = make_definition()
        definition.add_argument("a", ArgumentMode.OPTIONAL)
        definition.add_argument("b", ArgumentMode.REQUIRED)
        assert find_problems(definition) == [
            "required argument 'b' follows an optional argument"
        ]

    def test_duplicates(self) -> None:
        definition = make_definition()
        definition.add_argument("a", ArgumentMode.REQUIRED)
        definition.add_argument("a", ArgumentMode.REQUIRED)
        definition.add_option("x", "q", OptionMode.FLAG)
        definition.add_option("x", "q", OptionMode.FLAG)
        assert find_problems(definition) == [
            "argument 'a' is declared twice",
            "option '--x' is declared twice",
            "shortcut '-q' is declared twice",
        ]

    def test_empty_names_and_long_shortcut(self) -> None:
        definition = CommandDefinition("", CommandCallback(Greeter(), "greet"))
        definition.add_argument("", ArgumentMode.REQUIRED)
        definition.add_option("", "", OptionMode.FLAG)
        definition.add_option("verbose", "vv", OptionMode.FLAG)
        assert find_problems(definition) == [
            "command name is empty",
            "argument #1 has an empty name",
            "option with an empty name",
            "shortcut 'vv' of option '--verbose' must be a single character",
        ]

    def test_validate_raises_with_all_problems(self) -> None:
        definition = make_definition()
        definition.add_argument("a", ArgumentMode.VARIADIC, default=[])
        definition.add_argument("a", ArgumentMode.VARIADIC, default=[])

        with pytest.raises(CommandDefinitionError) as exc_info:
            validate_definition(definition)

        assert exc_info.value.command_name == "greet"
        assert exc_info.value.problems == [
            "argument 'a' is declared twice",
            "argument 'a' follows variadic argument",
        ]
        assert "Invalid command 'greet'" in str(exc_info.value)
        assert isinstance(exc_info.value, CommandFileError)
