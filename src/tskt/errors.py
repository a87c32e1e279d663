from typing import Optional


class TranslationError(Exception):
    """
    Raised when a declaration cannot be represented on the Kotlin side.
    Callers scanning a whole file skip and report the offending declaration.
    """

    def __init__(
        self,
        message: str,
        *,
        node_type: Optional[str] = None,
        line: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.node_type = node_type
        self.line = line


class RestParameterShapeError(TranslationError):
    def __init__(self, *, node_type: Optional[str] = None, line: Optional[int] = None):
        super().__init__(
            "rest parameter must be an array type", node_type=node_type, line=line
        )


class ArrayArityError(AssertionError):
    """
    An ``Array`` generic reached the rest parameter unwrapping with a type
    argument count other than one. This is an internal invariant violation.
    """
