"""UI components for Alex."""

from .console import cls, console, create_table, print_error, print_info, print_warning

__all__ = [
    "cls",
    "console",
    "create_table",
    "print_error",
    "print_info",
    "print_warning",
]
