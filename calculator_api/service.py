import logging
import threading
from typing import Any, Dict

from .errors import PreconditionError
from .expression import compile_expression
from .history import History
from .memento import Calculator

logger = logging.getLogger(__name__)


class CalculatorService:
    """The calculator session as seen by the HTTP layer.

    One calculator and its history are created together and the initial
    state is recorded immediately, so it can never be undone past. Every
    operation holds ``_lock`` so requests never interleave on the session.
    """

    def __init__(self):
        self._calculator = Calculator()
        self._history = History()
        self._lock = threading.Lock()
        self._history.push(self._calculator.save())

    def _flags(self) -> Dict[str, bool]:
        return {
            "can_undo": self._history.can_undo(),
            "can_redo": self._history.can_redo(),
        }

    def evaluate(self, expression: str) -> Dict[str, Any]:
        with self._lock:
            rpn = compile_expression(expression)
            result = self._calculator.evaluate(expression, rpn)
            self._history.push(self._calculator.save())
            logger.info("evaluated %r = %s", self._calculator.last_operation, result)
            return {
                "result": result,
                "expression": self._calculator.last_operation,
                "rpn": [tok.text for tok in rpn],
                **self._flags(),
            }

    def clear(self) -> Dict[str, Any]:
        with self._lock:
            self._calculator.clear()
            self._history.push(self._calculator.save())
            return {**self._calculator.get_state(), **self._flags()}

    def undo(self) -> Dict[str, Any]:
        with self._lock:
            if not self._history.can_undo():
                raise PreconditionError("nothing to undo")
            self._calculator.restore(self._history.undo())
            return {**self._calculator.get_state(), **self._flags()}

    def redo(self) -> Dict[str, Any]:
        with self._lock:
            if not self._history.can_redo():
                raise PreconditionError("nothing to redo")
            self._calculator.restore(self._history.redo())
            return {**self._calculator.get_state(), **self._flags()}

    def get_state(self) -> Dict[str, Any]:
        with self._lock:
            return {
                **self._calculator.get_state(),
                "history_info": self._history.get_info(),
            }

    def get_history(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "history": self._history.get_history(),
                "info": self._history.get_info(),
            }
