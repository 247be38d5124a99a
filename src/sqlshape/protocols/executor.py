"""Executor protocol definitions.

The library never talks to a database driver directly. Anything that can
run a parameterized statement and hand back named, positional rows can
serve as the executor of a session.
"""

from typing import Any, Iterator, Mapping, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class ResultRows(Protocol):
    """Rows returned by an executor.

    ``keys()`` gives the result column names in order; iterating yields one
    positional sequence per row, aligned with ``keys()``.
    """

    def keys(self) -> Sequence[str]:
        ...

    def __iter__(self) -> Iterator[Sequence[Any]]:
        ...


@runtime_checkable
class QueryExecutor(Protocol):
    """Protocol for components that run built statements.

    Implementations must propagate their own errors unchanged; the caller
    sees the backend exception as raised.
    """

    def query(
        self,
        sql: str,
        args: Sequence[Any],
        context: Optional[Mapping[str, Any]] = None,
    ) -> ResultRows:
        """Run ``sql`` with positional ``args``.

        Args:
            sql: Statement text using the session dialect's placeholders
            args: Arguments in placeholder order
            context: Opaque per-call options forwarded by the caller
                (timeouts, cancellation hints)

        Returns:
            The result rows
        """
        ...
