import math
from typing import Callable

UnaryFunc = Callable[[float], float]
BinaryFunc = Callable[[float, float], float]

UNARY_FUNCS: dict[str, UnaryFunc] = dict()


def register_unary_func(name: str):
    def decorator(fn: UnaryFunc) -> UnaryFunc:
        if name in UNARY_FUNCS:
            raise ValueError(f"Unary function {name!r} is already registered")
        UNARY_FUNCS[name] = fn
        return fn

    return decorator


register_unary_func("sin")(math.sin)
register_unary_func("cos")(math.cos)
register_unary_func("tan")(math.tan)
register_unary_func("exp")(math.exp)
register_unary_func("sqrt")(math.sqrt)
register_unary_func("abs")(abs)


@register_unary_func("log")
def log_(arg: float) -> float:
    return math.log10(arg)


@register_unary_func("ln")
def ln_(arg: float) -> float:
    # natural log only, no base argument
    return math.log(arg)


CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}

VARIABLES = frozenset({"t"})
