"""Build command definitions from the methods of a command file.

The factory runs in two stages that can also be called separately:

1. :meth:`AnnotationCommandFactory.get_command_info_list_from_class` finds
   the eligible methods and builds a :class:`CommandInfo` for each.
2. :meth:`AnnotationCommandFactory.create_commands_from_class_info` turns
   records into :class:`CommandDefinition` objects.

Callers may filter or replace records between the two stages.

Example:
    factory = AnnotationCommandFactory()
    infos = [i for i in factory.get_command_info_list_from_class(Deploy) if i.name != "debug"]
    commands = factory.create_commands_from_class_info(infos, Deploy())
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from commandfile.command_info import (
    CommandInfo,
    FlagOption,
    RequiredArgument,
    VariadicArgument,
    classify_argument,
    classify_option,
    split_option_specifier,
)
from commandfile.config import get_settings
from commandfile.definition import (
    ArgumentMode,
    CommandCallback,
    CommandDefinition,
    OptionMode,
    validate_definition,
)
from commandfile.discovery import discover_command_methods
from commandfile.logging import get_logger

LOG = get_logger(__name__)


class AnnotationCommandFactory:
    """Turns command file classes into lists of command definitions.

    Args:
        strict: Validate each definition after assembly. ``None`` uses the
            ``COMMANDFILE_STRICT`` setting.
        exclude_pattern: Regex of method names that never become commands.
            ``None`` uses the ``COMMANDFILE_EXCLUDE_PATTERN`` setting.
    """

    def __init__(self, strict: bool | None = None, exclude_pattern: str | None = None) -> None:
        settings = get_settings()
        self.strict = settings.strict if strict is None else strict
        self.exclude_pattern = (
            settings.exclude_pattern if exclude_pattern is None else exclude_pattern
        )

    def create_commands_from_class(
        self, command_file: Any, pass_through: Any = None
    ) -> list[CommandDefinition]:
        """Discover, describe and assemble every command on *command_file*."""
        info_list = self.get_command_info_list_from_class(command_file)
        return self.create_commands_from_class_info(info_list, command_file, pass_through)

    def get_command_info_list_from_class(self, class_or_instance: Any) -> list[CommandInfo]:
        """Return one record per eligible method, in discovery order.

        Raises:
            CommandInfoError: If a record cannot be built for a discovered method.
        """
        method_names = discover_command_methods(class_or_instance, self.exclude_pattern)
        return [CommandInfo.from_method(class_or_instance, name) for name in method_names]

    def create_commands_from_class_info(
        self,
        info_list: Iterable[CommandInfo],
        command_file: Any,
        pass_through: Any = None,
    ) -> list[CommandDefinition]:
        return [self.create_command(info, command_file, pass_through) for info in info_list]

    def create_command(
        self, info: CommandInfo, command_file: Any, pass_through: Any = None
    ) -> CommandDefinition:
        """Assemble one command definition from its record.

        Args:
            info: Metadata record of the command.
            command_file: Instance whose method the command invokes.
            pass_through: Opaque value handed to the command when it runs.

        Returns:
            The populated CommandDefinition.

        Raises:
            CommandDefinitionError: If strict validation is on and the
                definition is malformed.
        """
        callback = CommandCallback(command_file, info.method_name)
        definition = CommandDefinition(info.name, callback, pass_through)
        self._set_command_info(definition, info)
        self._set_command_arguments(definition, info)
        self._set_command_options(definition, info)
        if self.strict:
            validate_definition(definition)
        LOG.debug(
            "command_created",
            command=definition.name,
            method=info.method_name,
            arguments=len(definition.arguments),
            options=len(definition.options),
        )
        return definition

    def _set_command_info(self, definition: CommandDefinition, info: CommandInfo) -> None:
        definition.description = info.description
        definition.help = info.help
        definition.aliases = list(info.aliases)
        # Only the usage string is kept; click has no slot for a per-usage
        # description, which stays available on the record.
        for usage in info.example_usages:
            definition.add_usage(usage)

    def _set_command_arguments(self, definition: CommandDefinition, info: CommandInfo) -> None:
        # Records edited between stages may hold raw values
        for name, raw in info.arguments.items():
            value = classify_argument(raw)
            description = info.get_argument_description(name)
            if isinstance(value, RequiredArgument):
                definition.add_argument(name, ArgumentMode.REQUIRED, description)
            elif isinstance(value, VariadicArgument):
                definition.add_argument(
                    name, ArgumentMode.VARIADIC, description, list(value.defaults)
                )
            else:
                definition.add_argument(name, ArgumentMode.OPTIONAL, description, value.default)

    def _set_command_options(self, definition: CommandDefinition, info: CommandInfo) -> None:
        for specifier, raw in info.options.items():
            value = classify_option(raw)
            full_name, shortcut = split_option_specifier(specifier)
            description = info.get_option_description(full_name)
            if isinstance(value, FlagOption):
                definition.add_option(full_name, shortcut, OptionMode.FLAG, description)
            else:
                definition.add_option(
                    full_name, shortcut, OptionMode.VALUE_OPTIONAL, description, value.default
                )
