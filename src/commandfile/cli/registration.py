"""Register command definitions with Click.

This module converts :class:`CommandDefinition` objects into Click commands
and collects them in a :class:`CommandFileGroup`, a Click group that also
resolves command aliases.
"""

from __future__ import annotations

from typing import Any

import click

from commandfile import console as cf_console
from commandfile.config import get_settings
from commandfile.definition import (
    ArgumentDeclaration,
    ArgumentMode,
    CommandDefinition,
    OptionDeclaration,
    OptionMode,
)
from commandfile.discovery import resolve_class
from commandfile.exceptions import CommandError, CommandFileError
from commandfile.factory import AnnotationCommandFactory
from commandfile.logging import command_context, configure_logging, get_logger

LOG = get_logger(__name__)


class DefinitionCommand(click.Command):
    """Click command built from a CommandDefinition, which it keeps for introspection."""

    def __init__(self, definition: CommandDefinition, **kwargs: Any) -> None:
        super().__init__(definition.name, **kwargs)
        self.definition = definition


def _make_argument(declaration: ArgumentDeclaration) -> click.Argument:
    if declaration.mode is ArgumentMode.REQUIRED:
        return click.Argument([declaration.name], required=True)
    if declaration.mode is ArgumentMode.VARIADIC:
        return click.Argument(
            [declaration.name],
            nargs=-1,
            required=False,
            default=tuple(declaration.default or ()),
        )
    return click.Argument([declaration.name], required=False, default=declaration.default)


def _make_option(declaration: OptionDeclaration) -> click.Option:
    decls = [f"--{declaration.name}"]
    if declaration.shortcut:
        decls.append(f"-{declaration.shortcut}")
    help_text = declaration.description or None

    if declaration.mode is OptionMode.FLAG:
        return click.Option(decls, is_flag=True, default=False, help=help_text)

    kwargs: dict[str, Any] = {"default": declaration.default, "help": help_text}
    if declaration.default is not None:
        # Given without a value, the option takes its default
        kwargs.update(is_flag=False, flag_value=declaration.default, show_default=True)
    return click.Option(decls, **kwargs)


def _format_epilog(usages: list[str]) -> str | None:
    if not usages:
        return None
    lines = "\n".join(f"  {usage}" for usage in usages)
    return f"\b\nExamples:\n{lines}"


def to_click_command(definition: CommandDefinition) -> DefinitionCommand:
    """Create a Click command that invokes the definition's bound method.

    Arguments are passed to the method positionally in declaration order,
    with variadic values spread; options are passed as keywords.

    Args:
        definition: Command definition to convert.

    Returns:
        Click command ready for registration.
    """
    arguments = [(_make_argument(decl), decl) for decl in definition.arguments]
    options = [(_make_option(decl), decl) for decl in definition.options]

    def callback(**kwargs: Any) -> None:
        args: list[Any] = []
        for param, decl in arguments:
            value = kwargs[param.name]
            if decl.mode is ArgumentMode.VARIADIC:
                args.extend(value)
            else:
                args.append(value)
        opts = {decl.parameter_name: kwargs[param.name] for param, decl in options}

        try:
            with command_context(definition.name, definition.callback.method_name):
                result = definition.callback(*args, **opts)
        except (
            SystemExit,
            KeyboardInterrupt,
            click.Abort,
            click.ClickException,
            click.exceptions.Exit,
        ):
            raise  # Let these propagate normally
        except CommandError as exc:
            cf_console.error(exc.user_message)
            raise SystemExit(1) from exc
        except Exception as exc:  # noqa: BLE001 - CLI boundary: user-facing error, no traceback
            LOG.exception(
                "command_failed",
                command=definition.name,
                method=definition.callback.method_name,
                exc_type=type(exc).__name__,
            )
            cf_console.error(f"Command failed: {exc}")
            raise SystemExit(1) from exc

        if result is not None:
            click.echo(result)

    help_text = definition.description
    if definition.help:
        help_text = f"{help_text}\n\n{definition.help}" if help_text else definition.help

    context_settings: dict[str, Any] = {}
    if definition.pass_through is not None:
        context_settings["obj"] = definition.pass_through

    return DefinitionCommand(
        definition,
        callback=callback,
        params=[param for param, _ in arguments] + [param for param, _ in options],
        help=help_text or None,
        short_help=definition.description or None,
        epilog=_format_epilog(definition.usages),
        context_settings=context_settings,
    )


class CommandFileGroup(click.Group):
    """Click group of command file commands that resolves aliases.

    Aliases are not listed separately in help; they reach the same command.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._aliases: dict[str, str] = {}

    @property
    def aliases(self) -> dict[str, str]:
        """Alias → command name, for every registered alias."""
        return dict(self._aliases)

    def _name_taken(self, name: str) -> bool:
        return name in self.commands or name in self._aliases

    def add_definition(self, definition: CommandDefinition) -> DefinitionCommand:
        """Register a definition and its aliases.

        Raises:
            CommandFileError: If the name or an alias is already registered.
        """
        for name in [definition.name, *definition.aliases]:
            if self._name_taken(name):
                raise CommandFileError(f"Command name '{name}' is already registered")

        click_command = to_click_command(definition)
        self.add_command(click_command)
        for alias in definition.aliases:
            self._aliases[alias] = definition.name
        return click_command

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        click_command = super().get_command(ctx, cmd_name)
        if click_command is None and cmd_name in self._aliases:
            return super().get_command(ctx, self._aliases[cmd_name])
        return click_command

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        # Report the canonical name, not the alias that was typed
        _, click_command, rest = super().resolve_command(ctx, args)
        return (click_command.name if click_command else None), click_command, rest


def _configure_from_settings(verbose: int = 0) -> None:
    settings = get_settings()
    level = configure_logging(
        level=settings.log_level, json_output=settings.log_json, verbose=verbose
    )
    LOG.debug("logging_configured", effective_level=level, json=settings.log_json)


def create_app(
    *command_files: Any,
    name: str | None = None,
    help: str | None = None,  # noqa: A002 - matches click convention
    pass_through: Any = None,
    factory: AnnotationCommandFactory | None = None,
) -> CommandFileGroup:
    """Build a Click group exposing the commands of one or more command files.

    Command files may be instances, classes (instantiated without arguments),
    or import paths naming a class.

    Args:
        *command_files: Command files to expose.
        name: Group name shown in usage lines.
        help: Group help text.
        pass_through: Value handed to every command as the Click context ``obj``.
        factory: Factory to build definitions with. Defaults to one configured
            from settings.

    Returns:
        A CommandFileGroup; call it to run the CLI.

    Raises:
        CommandFileError: If two commands share a name or alias.
    """
    factory = factory or AnnotationCommandFactory()
    group = CommandFileGroup(
        name=name,
        help=help,
        callback=_configure_from_settings,
        params=[
            click.Option(
                ["--verbose", "-v"],
                count=True,
                help="Increase log verbosity (-v info, -vv debug)",
            )
        ],
    )

    for command_file in command_files:
        instance = (
            resolve_class(command_file)() if isinstance(command_file, (type, str)) else command_file
        )
        for definition in factory.create_commands_from_class(instance, pass_through):
            group.add_definition(definition)

    LOG.debug("app_created", name=name, commands=sorted(group.commands), aliases=group.aliases)
    return group
