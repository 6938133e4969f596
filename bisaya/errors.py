from typing import Optional
from bisaya.types import ErrorVal


class BisayaError(Exception):
    """Exception type used to propagate Bisaya++ errors to the caller."""
    def __init__(self, err: ErrorVal):
        if err.line:
            super().__init__(f"{err.name} at {err.line}:{err.column}: {err.message}")
        else:
            super().__init__(f"{err.name}: {err.message}")
        self.err = err

    @property
    def name(self) -> str:
        return self.err.name


def error(name: str, message: str, token: Optional[object] = None) -> BisayaError:
    """Build a BisayaError, taking the position from `token` when given."""
    line = getattr(token, 'line', 0) or 0
    column = getattr(token, 'column', 0) or 0
    return BisayaError(ErrorVal(name, message, line, column))
