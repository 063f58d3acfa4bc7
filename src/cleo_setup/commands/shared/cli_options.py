"""
Common CLI option handling.

Options either always take a value or never do. CLEO's
--persistent option takes an optional value (`-p` alone means `User`),
which is handled here by filling in the default before the command parses
the arguments.
"""

from typing import Iterable, List, Optional, Sequence, Type

import typer
from typer.core import TyperCommand


def fill_optional_value(
    args: Sequence[str],
    option_names: Iterable[str],
    default: str,
    choices: Iterable[str],
) -> List[str]:
    """
    Insert `default` after every bare occurrence of an optional-value option.

    An occurrence is bare when it is the last argument or when the next
    argument is not one of `choices` (compared case-insensitively).

    Args:
        args: Raw command line arguments
        option_names: Spellings of the option, e.g. ("--persistent", "-p")
        default: Value used when the option is given without one
        choices: Values the option accepts

    Returns:
        List[str]: Arguments the parser accepts with a required-value option
    """
    names = set(option_names)
    accepted = {choice.lower() for choice in choices}
    result: List[str] = []

    for index, arg in enumerate(args):
        if arg == "--":
            result.extend(args[index:])
            break
        result.append(arg)
        if arg in names:
            following: Optional[str] = args[index + 1] if index + 1 < len(args) else None
            if following is None or following.lower() not in accepted:
                result.append(default)

    return result


def optional_value_command(
    option_names: Iterable[str],
    default: str,
    choices: Iterable[str],
) -> Type[TyperCommand]:
    """Create a command class whose given option may be passed without a value"""
    names = tuple(option_names)
    values = tuple(choices)

    class OptionalValueCommand(TyperCommand):
        def parse_args(self, ctx: typer.Context, args: List[str]) -> List[str]:
            return super().parse_args(
                ctx, fill_optional_value(args, names, default, values)
            )

    return OptionalValueCommand
