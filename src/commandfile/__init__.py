"""commandfile - Turn the methods of a class into CLI commands.

Write plain methods on a command file class; commandfile discovers them,
reads their signatures and docstrings, and assembles command definitions
that register with Click.

This package provides:
- Method discovery with accessor and special-method filtering
- Metadata records with explicit argument and option modes
- A factory assembling framework-ready command definitions
- A Click group that resolves command aliases

Example:
    >>> from commandfile import command, create_app
    >>> class Tasks:
    ...     @command(aliases=["hi"], shortcuts={"shout": "s"})
    ...     def greet(self, name, *, shout=False):
    ...         '''Greet someone.'''
    ...         return name.upper() if shout else name
    >>> app = create_app(Tasks(), name="tasks")
"""

from commandfile.cli import CommandFileGroup, create_app, to_click_command
from commandfile.command_info import (
    PARAM_IS_REQUIRED,
    CommandInfo,
    CommandMetadata,
    FlagOption,
    OptionalArgument,
    RequiredArgument,
    ValuedOption,
    VariadicArgument,
    classify_argument,
    classify_option,
    command,
)
from commandfile.config import CommandFileSettings, get_settings
from commandfile.definition import (
    ArgumentDeclaration,
    ArgumentMode,
    CommandCallback,
    CommandDefinition,
    OptionDeclaration,
    OptionMode,
    validate_definition,
)
from commandfile.discovery import discover_command_methods, is_command_method_name
from commandfile.exceptions import (
    CommandDefinitionError,
    CommandError,
    CommandFileError,
    CommandInfoError,
)
from commandfile.factory import AnnotationCommandFactory

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Decorator and metadata records
    "command",
    "CommandInfo",
    "CommandMetadata",
    "PARAM_IS_REQUIRED",
    "RequiredArgument",
    "OptionalArgument",
    "VariadicArgument",
    "FlagOption",
    "ValuedOption",
    "classify_argument",
    "classify_option",
    # Discovery
    "discover_command_methods",
    "is_command_method_name",
    # Definitions
    "ArgumentDeclaration",
    "ArgumentMode",
    "CommandCallback",
    "CommandDefinition",
    "OptionDeclaration",
    "OptionMode",
    "validate_definition",
    # Factory
    "AnnotationCommandFactory",
    # Click integration
    "CommandFileGroup",
    "create_app",
    "to_click_command",
    # Configuration
    "CommandFileSettings",
    "get_settings",
    # Exceptions
    "CommandFileError",
    "CommandInfoError",
    "CommandDefinitionError",
    "CommandError",
]
