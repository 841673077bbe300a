"""Find the methods of a command file class that become commands."""

from __future__ import annotations

import importlib
import inspect
import re
from typing import Any

from commandfile.config import DEFAULT_EXCLUDE_PATTERN
from commandfile.exceptions import CommandFileError
from commandfile.logging import get_logger

LOG = get_logger(__name__)


def is_command_method_name(name: str, pattern: str = DEFAULT_EXCLUDE_PATTERN) -> bool:
    """Return True if a method called *name* may become a command.

    Special methods (``_`` prefix) and accessors such as ``getFoo`` or
    ``setFoo`` are excluded, while ``set``, ``setup`` and ``settings`` are
    kept: the letter after ``get``/``set`` must be uppercase to exclude.
    """
    return re.match(pattern, name) is None


def resolve_class(target: Any) -> type:
    """Return the class behind a class, an instance, or an import path.

    Import paths may use either ``package.module:ClassName`` or
    ``package.module.ClassName``.

    Raises:
        CommandFileError: If an import path cannot be resolved to a class.
    """
    if isinstance(target, type):
        return target
    if not isinstance(target, str):
        return type(target)

    if ":" in target:
        module_name, _, attr_path = target.partition(":")
    else:
        module_name, _, attr_path = target.rpartition(".")
    if not module_name or not attr_path:
        raise CommandFileError(f"Invalid command file path: '{target}'")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise CommandFileError(f"Cannot import module '{module_name}': {exc}") from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise CommandFileError(
                f"Module '{module_name}' has no attribute '{attr_path}'"
            ) from None
    if not isinstance(obj, type):
        raise CommandFileError(f"'{target}' does not name a class")
    return obj


def _declared_methods(cls: type) -> list[str]:
    """List method names in declaration order: the class first, then its bases."""
    names: list[str] = []
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, (staticmethod, classmethod)) or inspect.isfunction(attr):
                names.append(name)
    return names


def discover_command_methods(target: Any, pattern: str = DEFAULT_EXCLUDE_PATTERN) -> list[str]:
    """Return the names of methods on *target* that qualify as commands.

    Args:
        target: A command file class, an instance of one, or an import path.
        pattern: Regex of method names to exclude.

    Returns:
        Eligible method names, declaration order preserved.
    """
    cls = resolve_class(target)
    names = [name for name in _declared_methods(cls) if is_command_method_name(name, pattern)]
    LOG.debug("command_methods_discovered", command_file=cls.__name__, methods=names)
    return names
