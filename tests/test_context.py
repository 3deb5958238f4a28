import pytest

from exprcalc.context import Context, ContextError


def test_set_and_get() -> None:
    context = Context()
    context.set_variable("t", 2)
    assert context.get_variable("t") == 2.0
    assert isinstance(context.get_variable("t"), float)


def test_set_updates_existing() -> None:
    context = Context({"t": 1})
    context.set_variable("t", 5.5)
    assert context.get_variable("t") == 5.5
    assert context.variables == {"t": 5.5}


def test_has_variable() -> None:
    context = Context({"t": 0})
    assert context.has_variable("t")
    assert "t" in context
    assert not context.has_variable("x")
    assert "x" not in context


def test_get_missing_variable() -> None:
    with pytest.raises(ContextError) as exc_info:
        Context().get_variable("t")
    assert exc_info.value.name == "t"
    assert str(exc_info.value) == "Context error: Undefined variable 't'"


def test_initial_bindings_are_copied() -> None:
    bindings = {"t": 1.0}
    context = Context(bindings)
    bindings["t"] = 2.0
    assert context.get_variable("t") == 1.0


def test_variables_is_a_snapshot() -> None:
    context = Context({"t": 1.0})
    snapshot = context.variables
    snapshot["t"] = 3.0
    assert context.get_variable("t") == 1.0
