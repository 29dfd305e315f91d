"""Registry of tests waiting to be dispatched."""

from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

type Thunk = Callable[[], Iterable[Any] | Awaitable[Iterable[Any]]]


@dataclass(frozen=True, kw_only=True)
class ExecutableTest:
    """A runnable test: its label path and a zero-argument thunk.

    The thunk returns the test's assertion outcomes, either directly or
    through an awaitable.
    """

    __test__ = False

    labels: Sequence[str]
    thunk: Thunk = field(repr=False)


@dataclass(frozen=True)
class TestRegistry:
    """Pending tests keyed by dense integer id."""

    __test__ = False

    _entries: dict[int, ExecutableTest] = field(default_factory=dict)

    @classmethod
    def from_tests(cls, tests: Iterable[ExecutableTest]) -> "TestRegistry":
        """Index tests 0..n-1 in enumeration order."""
        return cls(dict(enumerate(tests)))

    def lookup_and_remove(self, index: int) -> ExecutableTest | None:
        """Return the entry for `index` and remove it.

        A second call for the same index returns None.
        """
        return self._entries.pop(index, None)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, index: object) -> bool:
        return index in self._entries
