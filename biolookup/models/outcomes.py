"""
Result types for batch lookups.

Every key handed to a batch fetcher yields exactly one outcome at the same
position: a ``Success`` carrying the retrieved record or a ``Failure``
carrying a description of what went wrong.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Union, overload

LEGACY_FAILURE_TEMPLATE = "Lookup failed for {key}"


@dataclass(frozen=True)
class Success:
    """
    A record retrieved for one key.

    Attributes:
        key: The identifier that was looked up
        record: Whatever the lookup service returned (parsed JSON, XML text, ...)
    """
    key: str
    record: Any

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self, include_cause: bool = True) -> Dict[str, Any]:
        """``include_cause`` is accepted to match ``Failure.to_dict``; successes have no cause."""
        return {"key": self.key, "record": self.record}


@dataclass(frozen=True)
class Failure:
    """
    A key whose lookup failed.

    Attributes:
        key: The identifier that was looked up
        description: Human readable reason
        error: The exception raised by the lookup, if kept
    """
    key: str
    description: str
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self, include_cause: bool = True) -> Dict[str, Any]:
        if not include_cause:
            return {"key": self.key, "error": LEGACY_FAILURE_TEMPLATE.format(key=self.key)}
        data: Dict[str, Any] = {"key": self.key, "error": self.description}
        if self.error is not None:
            data["error_type"] = type(self.error).__name__
            status_code = getattr(self.error, "status_code", None)
            if status_code is not None:
                data["status_code"] = status_code
        return data


FetchOutcome = Union[Success, Failure]


class BatchResult(Sequence[FetchOutcome]):
    """Ordered, immutable collection of per-key outcomes."""

    __slots__ = ("_outcomes",)

    def __init__(self, outcomes: Iterable[FetchOutcome] = ()):
        self._outcomes = tuple(outcomes)

    @overload
    def __getitem__(self, index: int) -> FetchOutcome: ...

    @overload
    def __getitem__(self, index: slice) -> "BatchResult": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BatchResult(self._outcomes[index])
        return self._outcomes[index]

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[FetchOutcome]:
        return iter(self._outcomes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BatchResult):
            return self._outcomes == other._outcomes
        if isinstance(other, (list, tuple)):
            return self._outcomes == tuple(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"BatchResult({list(self._outcomes)!r})"

    @property
    def keys(self) -> List[str]:
        return [o.key for o in self._outcomes]

    @property
    def successes(self) -> List[Success]:
        return [o for o in self._outcomes if isinstance(o, Success)]

    @property
    def failures(self) -> List[Failure]:
        return [o for o in self._outcomes if isinstance(o, Failure)]

    @property
    def failed_keys(self) -> List[str]:
        return [o.key for o in self.failures]

    @property
    def records(self) -> List[Any]:
        """Record per position, ``None`` where the lookup failed."""
        return [o.record if isinstance(o, Success) else None for o in self._outcomes]

    @property
    def all_ok(self) -> bool:
        return all(o.ok for o in self._outcomes)

    def to_list(self, include_cause: bool = True) -> List[Dict[str, Any]]:
        """
        JSON-ready representation, one dict per key.

        With ``include_cause=False`` failures collapse to a fixed marker that
        names only the key, the format produced by the old stored procedures.
        """
        return [o.to_dict(include_cause=include_cause) for o in self._outcomes]


__all__ = [
    "Success",
    "Failure",
    "FetchOutcome",
    "BatchResult",
    "LEGACY_FAILURE_TEMPLATE",
]
