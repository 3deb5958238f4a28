import math

import pytest

from exprcalc.context import Context
from exprcalc.parser import parse
from exprcalc.runtime import CalcRuntimeError, evaluate


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("1 + 23.74", 24.74),
        pytest.param("4,5 * 3.0", 13.5),
        pytest.param("1 - 2", -1.0),
        pytest.param("5 * 2", 10.0),
        pytest.param("1+2*3/4^5", 1 + 2 * 3 / 4**5),
        # tiers
        pytest.param("1 - 2 + 3", 2.0),
        pytest.param("1 + 2 - 3 * 4 / 5", 0.6),
        pytest.param("4 / 5 * -3 + 2 + 1", 0.6),
        # same tier chains group to the right
        pytest.param("8 - 4 - 2", 6.0, id="sub-chain"),
        pytest.param("10 / 5 / 2 / 2", 2.0, id="div-chain"),
        pytest.param("2^3^2", 512.0, id="pow-chain"),
        # unary signs
        pytest.param("--1", 1.0),
        pytest.param("---1", -1.0),
        pytest.param("- - 1", 1.0),
        pytest.param("+ + 1", 1.0),
        pytest.param("1 + - 2", -1.0),
        pytest.param("2^-1", 0.5),
        # constants and functions
        pytest.param("e", math.e),
        pytest.param("pi", math.pi),
        pytest.param("e + pi", math.e + math.pi),
        pytest.param("sin(pi)", 0.0),
        pytest.param("sin((180 * pi) / 180)", 0.0),
        pytest.param("cos(pi)", -1.0),
        pytest.param("cos(-pi)", -1.0),
        pytest.param("cos(pi/2)", 0.0),
        pytest.param("tan(0)", 0.0),
        pytest.param("log(100)", 2.0),
        pytest.param("ln(e)", 1.0),
        pytest.param("exp(0)", 1.0),
        pytest.param("sqrt(16)", 4.0),
        pytest.param("abs(-2)", 2.0),
        pytest.param("|2+4|", 6.0),
        pytest.param("|1 - 5| / 2", 2.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert evaluate(parse(code)) == pytest.approx(expected_ret_val, abs=1e-9)


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("t", 2.0),
        pytest.param("3t", 6.0),
        pytest.param("3t * 8", 48.0),
        pytest.param("8 + 3t", 14.0),
        pytest.param("8 + -3t", 2.0),
        pytest.param("4 + 7t^2", 32.0),
        pytest.param("4 + (2+7t^2+3)", 37.0),
        pytest.param("t t", 4.0),
        pytest.param("|t - 5|", 3.0),
        pytest.param("sqrt(8t)", 4.0),
    ],
)
def test_eval_with_variable(code: str, expected_ret_val: float) -> None:
    context = Context({"t": 2})
    assert evaluate(parse(code), context) == pytest.approx(expected_ret_val)


def test_context_is_resolved_at_evaluation_time() -> None:
    expression = parse("3t + 7")
    context = Context()
    for t in range(5):
        context.set_variable("t", t)
        assert evaluate(expression, context) == 3 * t + 7


def test_evaluation_leaves_context_untouched() -> None:
    context = Context({"t": 1.5})
    evaluate(parse("t^2 + t"), context)
    assert context.variables == {"t": 1.5}


def test_undefined_variable() -> None:
    with pytest.raises(CalcRuntimeError, match="Undefined variable 't'"):
        evaluate(parse("t"))


def test_undefined_variable_in_subexpression() -> None:
    with pytest.raises(CalcRuntimeError):
        evaluate(parse("1 + sin(2t)"), Context({"x": 1}))


@pytest.mark.parametrize(
    "code, errmsg",
    [
        pytest.param("1 / 0", "Division by zero in '/'"),
        pytest.param("1 / (t - t)", "Division by zero in '/'"),
        pytest.param("ln(0)", "'ln' is not defined for 0.0"),
        pytest.param("log(-1)", "'log' is not defined for -1.0"),
        pytest.param("sqrt(-1)", "'sqrt' is not defined for -1.0"),
        pytest.param("0^-1", "'^' is not defined for 0.0, -1.0"),
        pytest.param("(-8)^(1/3)", "'^' is not defined for"),
        pytest.param("10^400", "Numeric overflow in '^'"),
        pytest.param("exp(1000)", "Numeric overflow in 'exp'"),
    ],
)
def test_numeric_domain_errors(code: str, errmsg: str) -> None:
    with pytest.raises(CalcRuntimeError) as exc_info:
        evaluate(parse(code), Context({"t": 3}))
    assert errmsg in exc_info.value.errmsg


def test_unexpected_expression_type() -> None:
    with pytest.raises(CalcRuntimeError, match="Unexpected expression type"):
        evaluate("1 + 2")  # type: ignore
