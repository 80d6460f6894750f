from __future__ import annotations


class LuaLitError(Exception):
    pass


class UnsupportedNodeKind(LuaLitError, ValueError):
    """A node of the lua syntax tree that cannot be reduced to a value."""

    node_type: str | None
    line: int | None

    def __init__(
        self,
        message: str,
        node_type: str | None = None,
        line: int | None = None,
    ) -> None:
        self.node_type = node_type
        self.line = line
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(f"{prefix}{message}")


class UnsupportedValueKind(LuaLitError, TypeError):
    """A runtime value that has no lua literal representation."""

    value_type: type

    def __init__(self, message: str, value_type: type) -> None:
        self.value_type = value_type
        super().__init__(message)


class DepthExceeded(LuaLitError, ValueError):
    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Maximum nesting depth exceeded ({max_depth})")
