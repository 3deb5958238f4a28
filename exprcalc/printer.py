from exprcalc.parser import BinaryOperation, Constant, Expression, UnaryOperation, Variable


def format_number(value: float) -> str:
    """At most two fractional digits, trailing zeros trimmed: 2.50 -> 2.5, 3.00 -> 3."""
    formatted = f"{value:.2f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    if formatted == "-0":
        return "0"
    return formatted


def render(expression: Expression) -> str:
    """Canonical text for ``expression``.

    Every binary operation is parenthesized and implicit multiplications are
    spelled out, so the result parses back to an equivalent expression.
    Constants are rounded to two fractional digits.
    """
    if isinstance(expression, Constant):
        return format_number(expression.value)
    elif isinstance(expression, Variable):
        return expression.name
    elif isinstance(expression, UnaryOperation):
        return f"{expression.name}({render(expression.operand)})"
    elif isinstance(expression, BinaryOperation):
        return f"({render(expression.left)}{expression.symbol}{render(expression.right)})"
    else:
        raise TypeError(f"Unexpected expression type: {expression!r}")
