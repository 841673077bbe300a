"""Notes command file - in-memory notebook example.

This command file demonstrates:
- Required, optional and variadic arguments from a method signature
- Flags and options from keyword-only parameters
- Aliases, usage examples and descriptions via @command
- Accessors (getFoo/setFoo) and private helpers that never become commands
- CommandError for user-facing failures

Usage:
    python examples/notes.py add groceries milk eggs --pin
    python examples/notes.py ls --format=json
    python examples/notes.py show groceries
    python examples/notes.py --help
"""

import json

from commandfile import CommandError, command, create_app


class Notes:
    """Keeps notes in memory for the lifetime of the process."""

    def __init__(self) -> None:
        self._notes: dict[str, list[str]] = {"welcome": ["try", "notes", "add"]}
        self._pinned: set[str] = set()

    @command(
        arguments={"title": "Note title", "words": "Words of the note"},
        options={"pin": "Pin the note to the top of the list"},
        shortcuts={"pin": "p"},
        usages={"add groceries milk eggs --pin": "Add a pinned shopping list"},
    )
    def add(self, title, *words, pin=False):
        """Add a note."""
        self._notes[title] = list(words)
        if pin:
            self._pinned.add(title)
        return f"Added '{title}'"

    @command(aliases=["ls"], options={"format": "Output format: text or json"})
    def listNotes(self, *, format="text"):  # noqa: A002
        """List note titles.

        Pinned notes are listed first.
        """
        titles = sorted(self._notes, key=lambda t: (t not in self._pinned, t))
        if format == "json":
            return json.dumps(titles)
        return "\n".join(titles)

    def show(self, title, separator=" "):
        """Print one note."""
        if title not in self._notes:
            raise CommandError(f"No note named '{title}'")
        return separator.join(self._notes[title])

    def getNotes(self):
        return dict(self._notes)

    def setNotes(self, notes):
        self._notes = dict(notes)


app = create_app(Notes(), name="notes", help="Manage notes")

if __name__ == "__main__":
    app()
