"""Override the ``result`` label that enum values produce.

Decorating an :class:`enum.Enum` with :func:`result_labels` declares which of
its members count as ``"ok"`` or ``"error"`` regardless of whether they were
returned or raised. Members left out keep the label inferred from context.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, TypeVar

from .constants import ERROR_KEY, OK_KEY

__all__ = ["ResultLabelError", "result_labels", "get_result_label"]

_ACCEPTED_LABELS = (ERROR_KEY, OK_KEY)
_LABELS_ATTR = "__autometrics_result_labels__"

E = TypeVar("E", bound=type)


class ResultLabelError(ValueError):
    """Raised when result labels are declared incorrectly."""


def _validate(cls: type, labels: Mapping[str, Any]) -> Mapping[str, str]:
    if not (isinstance(cls, type) and issubclass(cls, Enum)):
        raise ResultLabelError("ResultLabels only works with 'Enum's.")
    members = cls.__members__
    checked = {}
    for member_name, label in labels.items():
        if member_name not in members:
            raise ResultLabelError(
                f"{cls.__name__} has no member named {member_name!r}"
            )
        if not isinstance(label, str):
            raise ResultLabelError(
                f"Only {OK_KEY!r} or {ERROR_KEY!r}, as string literals, "
                "are accepted as result values"
            )
        if label not in _ACCEPTED_LABELS:
            raise ResultLabelError(
                f"Only {OK_KEY!r} or {ERROR_KEY!r} are accepted as result values"
            )
        checked[members[member_name].name] = label
    return MappingProxyType(checked)


def result_labels(**kwargs: str) -> Callable[[E], E]:
    """Class decorator mapping enum member names to ``"ok"`` or ``"error"``."""

    def decorate(cls: E) -> E:
        setattr(cls, _LABELS_ATTR, _validate(cls, kwargs))
        return cls

    return decorate


def get_result_label(value: Any) -> Optional[str]:
    """Return the declared result label for ``value``, or ``None`` if it has none."""
    if not isinstance(value, Enum):
        return None
    labels = getattr(type(value), _LABELS_ATTR, None)
    if labels is None:
        return None
    return labels.get(value.name)