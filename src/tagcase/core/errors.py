class TagcaseError(Exception):
    """Base class for errors that abort a lint run."""


class ResolutionError(TagcaseError):
    def __init__(self, specifier: str, reason: str) -> None:
        self.specifier = specifier
        self.reason = reason
        super().__init__(f"cannot resolve target '{specifier}': {reason}")


class ParseError(TagcaseError):
    def __init__(self, path: str, line: int, column: int, message: str) -> None:
        self.path = path
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{path}:{line}:{column}: {message}")
