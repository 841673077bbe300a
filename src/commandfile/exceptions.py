"""Custom exceptions for commandfile package."""


class CommandFileError(Exception):
    """Base exception class for all commandfile errors."""


class CommandInfoError(CommandFileError):
    """Raised when a command metadata record cannot be produced for a method."""


class CommandDefinitionError(CommandFileError):
    """Raised when strict validation rejects an assembled command definition.

    Attributes:
        command_name: Name of the offending command.
        problems: Every problem found, in the order they were detected.
    """

    def __init__(self, command_name: str, problems: list[str]) -> None:
        self.command_name = command_name
        self.problems = list(problems)
        super().__init__(f"Invalid command '{command_name}': {'; '.join(self.problems)}")


class CommandError(CommandFileError):
    """Expected command failure with a user-facing message.

    Command methods raise this for anticipated errors (validation failures,
    missing input). The CLI displays user_message cleanly without traceback.

    Example:
        raise CommandError("Target must exist")
    """

    def __init__(self, user_message: str) -> None:
        self.user_message = user_message
        super().__init__(user_message)
