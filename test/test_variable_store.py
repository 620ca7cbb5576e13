from SketchSolver.core.variables import VariableStore


def test_overwrite_not_accumulate():
    store = VariableStore()
    store.set("x", "3")
    store.set("x", "5")
    assert store.get("x") == "5"
    assert len(store) == 1


def test_missing_symbol():
    assert VariableStore().get("y") is None


def test_reset_clears_bindings():
    store = VariableStore()
    store.set("a", "1")
    store.set("b", "2")
    store.reset()
    assert len(store) == 0
    assert "a" not in store
    assert store.as_dict() == {}


def test_as_dict_is_a_copy():
    store = VariableStore()
    store.set("x", "3")
    payload = store.as_dict()
    payload["x"] = "changed"
    assert store.get("x") == "3"
