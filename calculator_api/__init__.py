from .errors import CalculatorError, DivisionByZeroError, ParseError, PreconditionError
from .expression import evaluate_expression
from .history import History
from .memento import Calculator, Snapshot
from .service import CalculatorService

__version__ = "1.0.0"

__all__ = [
    "Calculator",
    "CalculatorError",
    "CalculatorService",
    "DivisionByZeroError",
    "History",
    "ParseError",
    "PreconditionError",
    "Snapshot",
    "evaluate_expression",
]
