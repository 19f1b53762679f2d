"""Connect metrics to traces by attaching exemplar labels.

Fields of the current span, selected by an :class:`ExemplarExtractor`, are
made available through :func:`get_exemplar`. Alternatively, trace and span
identifiers of a span context can be turned into labels with
:func:`span_context_labels`.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

__all__ = [
    "TraceLabels",
    "ExemplarExtractor",
    "get_exemplar",
    "span_context_labels",
]

TraceLabels = Dict[str, str]

_SPAN_LABELS: ContextVar[Tuple[TraceLabels, ...]] = ContextVar(
    "autometrics_span_labels", default=()
)


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return repr(value)


@dataclass(frozen=True)
class ExemplarExtractor:
    """Selects which span fields become exemplar labels."""

    fields: Tuple[str, ...]

    @classmethod
    def from_fields(cls, fields: Iterable[str]) -> "ExemplarExtractor":
        """Create an extractor for the given field names."""
        if isinstance(fields, str):
            fields = (fields,)
        return cls(tuple(fields))

    def extract(self, values: Mapping[str, Any]) -> TraceLabels:
        """Return the labels among ``values`` whose names are in ``fields``."""
        labels: TraceLabels = {}
        for name, value in values.items():
            if name in self.fields and name not in labels:
                labels[name] = _format_value(value)
        return labels

    @contextmanager
    def span(self, **kwargs: Any) -> Iterator[TraceLabels]:
        """Enter a span whose selected fields serve as exemplar labels within it."""
        labels = self.extract(kwargs)
        token = None
        if labels:
            token = _SPAN_LABELS.set(_SPAN_LABELS.get() + (labels,))
        try:
            yield dict(labels)
        finally:
            if token is not None:
                _SPAN_LABELS.reset(token)


def get_exemplar() -> Optional[TraceLabels]:
    """Return the labels of the innermost enclosing span that has any, else ``None``."""
    stack = _SPAN_LABELS.get()
    if not stack:
        return None
    return dict(stack[-1])


def _as_int(identifier: Union[int, str]) -> int:
    if isinstance(identifier, int):
        return identifier
    try:
        return int(identifier, 16)
    except ValueError:
        raise ValueError(f"invalid hexadecimal identifier: {identifier!r}") from None


def span_context_labels(
    trace_id: Union[int, str], span_id: Union[int, str]
) -> Optional[TraceLabels]:
    """Return ``trace_id`` and ``span_id`` labels, or ``None`` if the context is invalid.

    A span context is valid when both identifiers are non-zero.
    """
    trace = _as_int(trace_id)
    span = _as_int(span_id)
    if not (0 < trace < 1 << 128) or not (0 < span < 1 << 64):
        return None
    return {"trace_id": f"{trace:032x}", "span_id": f"{span:016x}"}