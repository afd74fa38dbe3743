"""Originator and memento halves of the calculator's undo support.

``Calculator`` holds the live value; ``Snapshot`` is a frozen copy of it
taken by :meth:`Calculator.save` and handed back to
:meth:`Calculator.restore` when the history moves.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from .expression import Token, compile_expression, eval_rpn

logger = logging.getLogger(__name__)

INITIAL_LABEL = "initial"
CLEAR_LABEL = "clear"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Snapshot:
    value: float
    label: str
    created_at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> Dict[str, Union[float, str]]:
        return {
            "value": self.value,
            "label": self.label,
            "timestamp": self.created_at.isoformat(),
        }


class Calculator:
    def __init__(self):
        self._current_value = 0.0
        self._last_operation = INITIAL_LABEL

    @property
    def current_value(self) -> float:
        return self._current_value

    @property
    def last_operation(self) -> str:
        return self._last_operation

    def evaluate(self, expression: str, rpn: Optional[List[Token]] = None) -> float:
        """Evaluate ``expression`` and make its result the current value.

        ``rpn`` is the already compiled postfix form of ``expression``, if the
        caller has it. Parse and arithmetic errors propagate and leave the
        state untouched. The stripped expression text becomes the operation
        label.
        """
        if rpn is None:
            rpn = compile_expression(expression)
        result = eval_rpn(rpn)
        self._current_value = result
        self._last_operation = expression.strip()
        logger.debug("value=%s after %r", result, self._last_operation)
        return result

    def clear(self) -> None:
        self._current_value = 0.0
        self._last_operation = CLEAR_LABEL
        logger.debug("calculator cleared")

    def save(self) -> Snapshot:
        return Snapshot(self._current_value, self._last_operation)

    def restore(self, snapshot: Snapshot) -> None:
        # Label is copied verbatim, never prefixed.
        if not isinstance(snapshot, Snapshot):
            raise TypeError(f"expected Snapshot, got {type(snapshot).__name__}")
        self._current_value = snapshot.value
        self._last_operation = snapshot.label
        logger.debug("restored value=%s label=%r", snapshot.value, snapshot.label)

    def get_state(self) -> Dict[str, Union[float, str]]:
        return {
            "current_value": self._current_value,
            "last_operation": self._last_operation,
        }
