"""Command metadata records and the ``@command`` decorator.

A :class:`CommandInfo` describes one command file method: its public name,
description and help, aliases, usage examples, and the ordered arguments and
options the command accepts. Argument and option modes are explicit tagged
values rather than being inferred from the shape of a default.

Example command file:
    from commandfile import command

    class Deploy:
        @command(
            aliases=["ship"],
            usages={"deploy prod --force": "Deploy prod without confirmation"},
            arguments={"target": "Environment to deploy"},
            options={"force": "Skip confirmation"},
            shortcuts={"force": "f"},
        )
        def deploy(self, target, retries=3, *, force=False, output="text"):
            ...

    The docstring of ``deploy`` supplies the description (first paragraph)
    and the help (the rest).
"""

from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final

from commandfile.discovery import resolve_class
from commandfile.exceptions import CommandInfoError


class _RequiredSentinel:
    """Marker type for :data:`PARAM_IS_REQUIRED`."""

    _instance: _RequiredSentinel | None = None

    def __new__(cls) -> _RequiredSentinel:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "PARAM_IS_REQUIRED"

    def __copy__(self) -> _RequiredSentinel:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _RequiredSentinel:
        return self


PARAM_IS_REQUIRED: Final = _RequiredSentinel()


@dataclass(frozen=True)
class RequiredArgument:
    """A positional argument that must be supplied."""


@dataclass(frozen=True)
class OptionalArgument:
    """A positional argument that falls back to ``default`` when omitted."""

    default: Any = None


@dataclass(frozen=True)
class VariadicArgument:
    """A positional argument collecting every remaining value."""

    defaults: list[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Defensive copy to prevent external mutation of the defaults
        object.__setattr__(self, "defaults", list(self.defaults))


@dataclass(frozen=True)
class FlagOption:
    """An option that takes no value; its presence is the signal."""


@dataclass(frozen=True)
class ValuedOption:
    """An option whose value may be omitted, falling back to ``default``."""

    default: Any = None


ArgumentValue = RequiredArgument | OptionalArgument | VariadicArgument
OptionValue = FlagOption | ValuedOption


def classify_argument(value: Any) -> ArgumentValue:
    """Turn a raw argument value into its tagged form.

    The :data:`PARAM_IS_REQUIRED` sentinel means required, a list or tuple
    means variadic with those defaults, and anything else is the default of
    an optional argument. Tagged values are returned unchanged.
    """
    if isinstance(value, (RequiredArgument, OptionalArgument, VariadicArgument)):
        return value
    if value is PARAM_IS_REQUIRED:
        return RequiredArgument()
    if isinstance(value, (list, tuple)):
        return VariadicArgument(list(value))
    return OptionalArgument(value)


def classify_option(value: Any) -> OptionValue:
    """Turn a raw option value into its tagged form.

    Booleans become flags; any other value is the default of an option whose
    value may be omitted. Tagged values are returned unchanged.
    """
    if isinstance(value, (FlagOption, ValuedOption)):
        return value
    if isinstance(value, bool):
        return FlagOption()
    return ValuedOption(value)


def split_option_specifier(specifier: str) -> tuple[str, str]:
    """Split ``"long|s"`` into ``("long", "s")``; without a bar the shortcut is empty.

    Only the first bar splits, and a bar in the first position does not split.
    """
    if specifier.find("|") > 0:
        long_name, shortcut = specifier.split("|", 1)
        return long_name, shortcut
    return specifier, ""


def _to_cli_name(name: str) -> str:
    """Convert PythonName to cli-name (camelCase to kebab-case, underscores to hyphens).

    Args:
        name: Python identifier (e.g. "listItems" or "list_items").

    Returns:
        CLI-friendly name (e.g. "list-items").
    """
    s = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", name)
    return s.lower().replace("_", "-")


def _to_option_name(name: str) -> str:
    return name.replace("_", "-")


def split_docstring(doc: str | None) -> tuple[str, str]:
    """Split a docstring into a one-line description and the remaining help text."""
    if not doc:
        return "", ""
    cleaned = inspect.cleandoc(doc)
    first, _, rest = cleaned.partition("\n\n")
    description = " ".join(line.strip() for line in first.splitlines())
    return description, rest.strip()


@dataclass(frozen=True)
class CommandMetadata:
    """Metadata stored on @command-decorated methods."""

    name: str = ""
    description: str = ""
    help: str = ""
    aliases: tuple[str, ...] = ()
    usages: dict[str, str] = field(default_factory=dict)
    argument_descriptions: dict[str, str] = field(default_factory=dict)
    option_descriptions: dict[str, str] = field(default_factory=dict)
    shortcuts: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Defensive copies to prevent external mutation of the dicts
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "usages", dict(self.usages))
        object.__setattr__(self, "argument_descriptions", dict(self.argument_descriptions))
        object.__setattr__(
            self,
            "option_descriptions",
            {_to_option_name(k): v for k, v in self.option_descriptions.items()},
        )
        object.__setattr__(
            self, "shortcuts", {_to_option_name(k): v for k, v in self.shortcuts.items()}
        )


def command(
    name: str = "",
    *,
    description: str = "",
    help: str = "",  # noqa: A002 - shadows builtin but matches click convention
    aliases: Iterable[str] = (),
    usages: Mapping[str, str] | None = None,
    arguments: Mapping[str, str] | None = None,
    options: Mapping[str, str] | None = None,
    shortcuts: Mapping[str, str] | None = None,
) -> Callable[[Any], Any]:
    """Decorator attaching command metadata to a command file method.

    Decorating is optional: every eligible method becomes a command. The
    decorator only adds what the signature and docstring cannot express.

    Args:
        name: Public command name. Defaults to the kebab-cased method name.
        description: One-line description. Defaults to the docstring's first paragraph.
        help: Long help. Defaults to the rest of the docstring.
        aliases: Alternate invocation names.
        usages: Usage example string mapped to its explanation.
        arguments: Argument name mapped to its description.
        options: Option name mapped to its description.
        shortcuts: Option name mapped to a one-letter shortcut.

    Returns:
        Decorator returning the function unchanged apart from ``_command_meta``.
    """
    meta = CommandMetadata(
        name=name,
        description=description,
        help=help,
        aliases=tuple(aliases),
        usages=dict(usages or {}),
        argument_descriptions=dict(arguments or {}),
        option_descriptions=dict(options or {}),
        shortcuts=dict(shortcuts or {}),
    )

    def decorator(func: Any) -> Any:
        # Stacked on @staticmethod or @classmethod: store on the wrapped function
        target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
        target._command_meta = meta
        return func

    return decorator


@dataclass(frozen=True)
class CommandInfo:
    """Structured description of one command file method.

    Use :meth:`from_method` to build a record from a method's signature,
    docstring and ``@command`` metadata, or :meth:`create` to build one from
    raw values.
    """

    name: str
    method_name: str
    description: str = ""
    help: str = ""
    aliases: tuple[str, ...] = ()
    example_usages: dict[str, str] = field(default_factory=dict)
    arguments: dict[str, ArgumentValue] = field(default_factory=dict)
    argument_descriptions: dict[str, str] = field(default_factory=dict)
    options: dict[str, OptionValue] = field(default_factory=dict)
    option_descriptions: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.method_name:
            raise CommandInfoError("CommandInfo.method_name must be non-empty")
        for arg_name, value in self.arguments.items():
            if not isinstance(value, (RequiredArgument, OptionalArgument, VariadicArgument)):
                raise CommandInfoError(
                    f"Argument '{arg_name}' of '{self.name}' is not a tagged argument value: "
                    f"{value!r}. Use CommandInfo.create() for raw values."
                )
        for specifier, value in self.options.items():
            if not isinstance(value, (FlagOption, ValuedOption)):
                raise CommandInfoError(
                    f"Option '{specifier}' of '{self.name}' is not a tagged option value: "
                    f"{value!r}. Use CommandInfo.create() for raw values."
                )
        object.__setattr__(self, "aliases", tuple(self.aliases))
        object.__setattr__(self, "example_usages", dict(self.example_usages))
        object.__setattr__(self, "arguments", dict(self.arguments))
        object.__setattr__(self, "argument_descriptions", dict(self.argument_descriptions))
        object.__setattr__(self, "options", dict(self.options))
        object.__setattr__(self, "option_descriptions", dict(self.option_descriptions))

    def get_argument_description(self, name: str) -> str:
        return self.argument_descriptions.get(name, "")

    def get_option_description(self, name: str) -> str:
        return self.option_descriptions.get(name, "")

    @classmethod
    def create(
        cls,
        name: str,
        method_name: str | None = None,
        *,
        description: str = "",
        help: str = "",  # noqa: A002
        aliases: Iterable[str] = (),
        example_usages: Mapping[str, str] | None = None,
        arguments: Mapping[str, Any] | None = None,
        argument_descriptions: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
        option_descriptions: Mapping[str, str] | None = None,
    ) -> CommandInfo:
        """Build a record from raw values.

        Argument values may be :data:`PARAM_IS_REQUIRED`, a list or tuple of
        defaults (variadic), or a scalar default. Option values may be a bool
        (flag) or a scalar default. Tagged values are accepted as well.
        """
        return cls(
            name=name,
            method_name=method_name or name,
            description=description,
            help=help,
            aliases=tuple(aliases),
            example_usages=dict(example_usages or {}),
            arguments={k: classify_argument(v) for k, v in (arguments or {}).items()},
            argument_descriptions=dict(argument_descriptions or {}),
            options={k: classify_option(v) for k, v in (options or {}).items()},
            option_descriptions=dict(option_descriptions or {}),
        )

    @classmethod
    def from_method(cls, target: Any, method_name: str) -> CommandInfo:
        """Build the record for *method_name* on a command file class or instance.

        Positional parameters become arguments: no default means required, a
        list or tuple default means variadic, any other default optional.
        ``*args`` is variadic. Keyword-only parameters become options: a bool
        default makes a flag, anything else an option with that default.

        Raises:
            CommandInfoError: If the name does not resolve to a method.
        """
        klass = resolve_class(target)
        try:
            static_attr = inspect.getattr_static(klass, method_name)
        except AttributeError:
            raise CommandInfoError(
                f"'{klass.__name__}' has no method named '{method_name}'"
            ) from None
        method = getattr(klass, method_name)
        if not callable(method):
            raise CommandInfoError(f"'{klass.__name__}.{method_name}' is not callable")

        meta: CommandMetadata = getattr(method, "_command_meta", None) or CommandMetadata()
        doc_description, doc_help = split_docstring(inspect.getdoc(method))

        try:
            parameters = list(inspect.signature(method).parameters.values())
        except (TypeError, ValueError) as exc:
            raise CommandInfoError(
                f"Cannot inspect signature of '{klass.__name__}.{method_name}': {exc}"
            ) from exc
        # Plain functions looked up on the class still expect the instance first
        if inspect.isfunction(static_attr) and parameters:
            parameters = parameters[1:]

        arguments: dict[str, Any] = {}
        options: dict[str, Any] = {}
        for param in parameters:
            if param.kind is inspect.Parameter.VAR_KEYWORD:
                continue
            if param.kind is inspect.Parameter.VAR_POSITIONAL:
                arguments[param.name] = VariadicArgument([])
            elif param.kind is inspect.Parameter.KEYWORD_ONLY:
                default = None if param.default is inspect.Parameter.empty else param.default
                long_name = _to_option_name(param.name)
                shortcut = meta.shortcuts.get(long_name, "")
                specifier = f"{long_name}|{shortcut}" if shortcut else long_name
                options[specifier] = default
            elif param.default is inspect.Parameter.empty:
                arguments[param.name] = PARAM_IS_REQUIRED
            else:
                arguments[param.name] = param.default

        return cls.create(
            name=meta.name or _to_cli_name(method_name),
            method_name=method_name,
            description=meta.description or doc_description,
            help=meta.help or doc_help,
            aliases=meta.aliases,
            example_usages=meta.usages,
            arguments=arguments,
            argument_descriptions=meta.argument_descriptions,
            options=options,
            option_descriptions=meta.option_descriptions,
        )
