from dataclasses import dataclass
from typing import Optional


@dataclass
class ContextError(Exception):
    errmsg: str
    name: str

    def __str__(self) -> str:
        return f"Context error: {self.errmsg}"


class Context:
    """Variable bindings consulted by ``evaluate``.

    Expressions hold variable names only, so one context can be updated
    between evaluations of the same expression. Not synchronized: callers
    sharing a context between threads must lock around it themselves.
    """

    def __init__(self, variables: Optional[dict[str, float]] = None) -> None:
        self._variables: dict[str, float] = dict()
        for name, value in (variables or {}).items():
            self.set_variable(name, value)

    def set_variable(self, name: str, value: float) -> None:
        self._variables[name] = float(value)

    def get_variable(self, name: str) -> float:
        try:
            return self._variables[name]
        except KeyError:
            raise ContextError(f"Undefined variable {name!r}", name=name) from None

    def has_variable(self, name: str) -> bool:
        return name in self._variables

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    @property
    def variables(self) -> dict[str, float]:
        return dict(self._variables)

    def __repr__(self) -> str:
        return f"Context({self._variables!r})"
