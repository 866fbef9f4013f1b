import logging
from contextlib import contextmanager
from typing import Iterator

from attrs import define, field


@define
class LogContext:
    """Nested, indented tracing of what the core is doing.

    A context is created per invocation and handed to the objects that use
    it. Each `scope` indents the messages logged inside it by one level.
    """

    logger: logging.Logger = field(factory=lambda: logging.getLogger("coursefork.trace"))
    enabled: bool = True
    depth: int = 0
    indent: str = "  "

    def log(self, message: str) -> None:
        if self.enabled:
            self.logger.debug(f"{self.indent * self.depth}{message}")

    @contextmanager
    def scope(self, message: str) -> Iterator["LogContext"]:
        self.log(message)
        self.depth += 1
        try:
            yield self
        finally:
            self.depth -= 1

    @classmethod
    def disabled(cls) -> "LogContext":
        return cls(enabled=False)
