# date_tasks/utils/errors.py
from typing import Optional


class UserInputError(RuntimeError):
    """
    Raised for invalid user-provided input (date strings, timezone names, ...).
    Should NOT print traceback.
    """


class ParseError(UserInputError, ValueError):
    """
    Text does not match the date grammar it was parsed with.
    """

    def __init__(self, text: str, fmt: str, reason: Optional[str] = None):
        self.text = text
        self.fmt = fmt
        self.reason = reason

        msg = f"cannot parse {text!r} as {fmt}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
