import logging
from dataclasses import dataclass
from typing import Callable, Optional

from exprcalc.context import Context, ContextError
from exprcalc.parser import BinaryOperation, Constant, Expression, UnaryOperation, Variable

logger = logging.getLogger(__name__)


@dataclass
class CalcRuntimeError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"Evaluation error: {self.errmsg}"


def evaluate(expression: Expression, context: Optional[Context] = None) -> float:
    """Evaluates ``expression``, resolving variables through ``context``.

    Without a context only variable-free expressions can be evaluated.
    Numeric failures raised by an operator (division by zero, math domain
    errors, overflow) are reported as ``CalcRuntimeError``.
    """
    if context is None:
        context = Context()
    result = evaluate_expression(expression, context)
    logger.debug("Evaluated to %r", result)
    return result


def evaluate_expression(expression: Expression, context: Context) -> float:
    if isinstance(expression, Constant):
        return expression.value
    elif isinstance(expression, Variable):
        try:
            return context.get_variable(expression.name)
        except ContextError as e:
            raise CalcRuntimeError(f"Undefined variable {expression.name!r}") from e
    elif isinstance(expression, UnaryOperation):
        operand = evaluate_expression(expression.operand, context)
        return _apply(expression.name, expression.fn, operand)
    elif isinstance(expression, BinaryOperation):
        left = evaluate_expression(expression.left, context)
        right = evaluate_expression(expression.right, context)
        return _apply(expression.symbol, expression.fn, left, right)
    else:
        raise CalcRuntimeError(f"Unexpected expression type: {expression!r}")


def _apply(op_name: str, fn: Callable[..., float], *args: float) -> float:
    try:
        return fn(*args)
    except ZeroDivisionError as e:
        raise CalcRuntimeError(f"Division by zero in {op_name!r}") from e
    except OverflowError as e:
        raise CalcRuntimeError(f"Numeric overflow in {op_name!r}") from e
    except ValueError as e:
        raise CalcRuntimeError(f"{op_name!r} is not defined for {_format_args(args)}") from e


def _format_args(args: tuple[float, ...]) -> str:
    return ", ".join(repr(a) for a in args)
