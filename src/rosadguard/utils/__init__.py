"""Utility functions and helpers."""

from .helpers import (
    async_to_sync,
    ordered_group,
    ros_bool,
    ros_flag,
)
from .log import configure_logging
from .menu import select_menu
from .output import (
    confirm,
    console,
    create_table,
    print_cancelled,
    print_error,
    print_info,
    print_success,
    print_warning,
    prompt,
    styled_state,
)

__all__ = [
    "async_to_sync",
    "configure_logging",
    "confirm",
    "console",
    "create_table",
    "ordered_group",
    "print_cancelled",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "prompt",
    "ros_bool",
    "ros_flag",
    "select_menu",
    "styled_state",
]
