class CalculatorError(Exception):
    """Base class for every error the calculator reports to clients."""


class ParseError(CalculatorError):
    pass


class DivisionByZeroError(CalculatorError, ArithmeticError):
    pass


class PreconditionError(CalculatorError):
    """Undo or redo requested while the history cannot move."""
