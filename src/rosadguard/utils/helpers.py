"""Helper utilities."""

import asyncio
from functools import wraps
from typing import Any, Callable

from typer.core import TyperGroup

_TRUE_STRINGS = ("yes", "true")


def async_to_sync(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to run async functions synchronously."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(func(*args, **kwargs))

    return wrapper


def ordered_group(order: list[str]) -> type[TyperGroup]:
    """Create a TyperGroup subclass that orders commands."""

    class _OrderedGroup(TyperGroup):
        def list_commands(self, ctx: Any) -> list[str]:
            commands = super().list_commands(ctx)
            rank = {n: i for i, n in enumerate(order)}
            return sorted(commands, key=lambda n: rank.get(n, 99))

    return _OrderedGroup


def ros_bool(value: Any) -> bool:
    """Interpret a RouterOS flag value.

    The REST API returns flags as ``"true"``/``"false"`` strings, the
    console prints ``yes``/``no`` and decoded JSON may hold real booleans.
    Only ``"yes"``, ``"true"`` and ``True`` count as set.

    Args:
        value: Raw field value

    Returns:
        True if the flag is set
    """
    if value is True:
        return True
    return isinstance(value, str) and value in _TRUE_STRINGS


def ros_flag(value: bool) -> str:
    """Render a boolean the way RouterOS expects it in a write."""
    return "yes" if value else "no"
