"""Command definitions: the framework-ready output of the command factory.

A :class:`CommandDefinition` carries everything a command-line framework
needs to register one command. Definitions compare by value, so building
commands twice from the same command file yields equal lists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from commandfile.exceptions import CommandDefinitionError


class ArgumentMode(StrEnum):
    """How a positional argument consumes values."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    VARIADIC = "variadic"


class OptionMode(StrEnum):
    """Whether an option accepts a value."""

    FLAG = "flag"
    VALUE_OPTIONAL = "value-optional"


@dataclass(frozen=True)
class ArgumentDeclaration:
    """A positional argument of a command."""

    name: str
    mode: ArgumentMode
    description: str = ""
    default: Any = None


@dataclass(frozen=True)
class OptionDeclaration:
    """An option of a command. ``shortcut`` is empty when the option has none."""

    name: str
    shortcut: str
    mode: OptionMode
    description: str = ""
    default: Any = None

    @property
    def parameter_name(self) -> str:
        """Keyword the command method receives this option's value under."""
        return self.name.replace("-", "_")


@dataclass(frozen=True)
class CommandCallback:
    """A command file instance paired with the name of the method to invoke."""

    instance: Any
    method_name: str

    def resolve(self) -> Any:
        return getattr(self.instance, self.method_name)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.resolve()(*args, **kwargs)


@dataclass
class CommandDefinition:
    """A fully configured command, ready to hand to the command-line framework.

    ``pass_through`` is forwarded to the running command untouched.
    """

    name: str
    callback: CommandCallback
    pass_through: Any = None
    description: str = ""
    help: str = ""
    aliases: list[str] = field(default_factory=list)
    usages: list[str] = field(default_factory=list)
    arguments: list[ArgumentDeclaration] = field(default_factory=list)
    options: list[OptionDeclaration] = field(default_factory=list)

    def add_usage(self, usage: str) -> None:
        self.usages.append(usage)

    def add_argument(
        self,
        name: str,
        mode: ArgumentMode,
        description: str = "",
        default: Any = None,
    ) -> None:
        self.arguments.append(ArgumentDeclaration(name, mode, description, default))

    def add_option(
        self,
        name: str,
        shortcut: str,
        mode: OptionMode,
        description: str = "",
        default: Any = None,
    ) -> None:
        self.options.append(OptionDeclaration(name, shortcut, mode, description, default))


def find_problems(definition: CommandDefinition) -> list[str]:
    """Return every structural problem in *definition*, empty when it is sound."""
    problems: list[str] = []

    if not definition.name:
        problems.append("command name is empty")

    seen_arguments: set[str] = set()
    variadic_at: int | None = None
    optional_seen = False
    for index, argument in enumerate(definition.arguments):
        if not argument.name:
            problems.append(f"argument #{index + 1} has an empty name")
        elif argument.name in seen_arguments:
            problems.append(f"argument '{argument.name}' is declared twice")
        seen_arguments.add(argument.name)

        if variadic_at is not None:
            problems.append(f"argument '{argument.name}' follows variadic argument")
        if argument.mode is ArgumentMode.VARIADIC:
            variadic_at = index
        elif argument.mode is ArgumentMode.REQUIRED and optional_seen:
            problems.append(f"required argument '{argument.name}' follows an optional argument")
        elif argument.mode is ArgumentMode.OPTIONAL:
            optional_seen = True

    seen_options: set[str] = set()
    seen_shortcuts: set[str] = set()
    for option in definition.options:
        if not option.name:
            problems.append("option with an empty name")
        elif option.name in seen_options:
            problems.append(f"option '--{option.name}' is declared twice")
        seen_options.add(option.name)

        if option.shortcut:
            if len(option.shortcut) != 1:
                problems.append(
                    f"shortcut '{option.shortcut}' of option '--{option.name}' "
                    "must be a single character"
                )
            elif option.shortcut in seen_shortcuts:
                problems.append(f"shortcut '-{option.shortcut}' is declared twice")
            seen_shortcuts.add(option.shortcut)

    return problems


def validate_definition(definition: CommandDefinition) -> None:
    """Reject a definition the command-line framework would misinterpret.

    Raises:
        CommandDefinitionError: Listing every problem found.
    """
    problems = find_problems(definition)
    if problems:
        raise CommandDefinitionError(definition.name, problems)
