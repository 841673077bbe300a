"""Click integration for command file commands."""

from commandfile.cli.registration import (
    CommandFileGroup,
    DefinitionCommand,
    create_app,
    to_click_command,
)

__all__ = [
    "CommandFileGroup",
    "DefinitionCommand",
    "create_app",
    "to_click_command",
]
