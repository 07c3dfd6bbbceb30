"""
Core guarantees of the engine's capability registry:

1. Last-writer-wins for any sequence of register_function calls.
2. Extensions with disjoint names combine to the union, in any order.
3. One extension attached to two engines yields independent mappings.
4. A failing extension leaves earlier capabilities in place.
"""

import itertools
import random
import threading

import pytest

from hailtpl import RegistrationError
from tests.infrastructure import DictExtension, FailingExtension, case_extension, make_engine


def _fn(tag):
    return lambda *a: tag


class TestLastWriterWins:

    @pytest.mark.parametrize("seed", range(5))
    def test_random_sequences(self, seed):
        """The mapping holds the behavior from the last call for every name."""
        rnd = random.Random(seed)
        engine = make_engine()
        expected = {}
        for i in range(50):
            name = rnd.choice(["a", "b", "c", "d", "e"])
            fn = _fn(i)
            engine.register_function(name, fn)
            expected[name] = fn

        assert engine.capabilities() == expected

    def test_overwrite_returns_latest(self):
        engine = make_engine()
        x, y = _fn("x"), _fn("y")

        engine.register_function("upper", x)
        engine.register_function("upper", y)

        assert engine.get_function("upper") is y
        assert engine.function_names() == ["upper"]


class TestExtensionComposition:

    def test_disjoint_extensions_union_in_any_order(self):
        a_fns = {"a1": _fn("a1"), "a2": _fn("a2")}
        b_fns = {"b1": _fn("b1")}

        results = []
        for order in itertools.permutations(["a", "b"]):
            engine = make_engine()
            for key in order:
                engine.register_extension(DictExtension(a_fns if key == "a" else b_fns, name=key))
            results.append(engine.capabilities())

        assert results[0] == results[1] == {**a_fns, **b_fns}

    def test_empty_engine_plus_case_extension(self):
        engine = make_engine()
        assert engine.function_names() == []

        engine.register_extension(case_extension())

        assert set(engine.function_names()) == {"upper", "lower"}

    def test_same_extension_two_engines_independent(self):
        ext = case_extension()
        first, second = make_engine(), make_engine()

        first.register_extension(ext)
        second.register_extension(ext)
        first.register_function("only_first", _fn(1))
        second.drop_function("upper")

        assert set(first.function_names()) == {"upper", "lower", "only_first"}
        assert set(second.function_names()) == {"lower"}
        assert ext.calls == 2


class TestNoRollback:

    def test_failing_extension_keeps_earlier_capabilities(self):
        engine = make_engine()
        engine.register_extension(case_extension())

        with pytest.raises(RegistrationError):
            engine.register_extension(FailingExtension())

        assert set(engine.function_names()) == {"upper", "lower"}

    def test_partial_registration_is_kept(self):
        """Capabilities added before the hook failed stay registered."""
        engine = make_engine()
        failing = FailingExtension({"half": _fn("half")})

        with pytest.raises(RegistrationError) as exc:
            engine.register_extension(failing)

        assert exc.value.missing == ["database"]
        assert engine.has_function("half")
        assert failing not in engine.extensions


class TestConcurrentRendering:

    def test_render_during_reregistration(self):
        """Renders running while an extension re-registers always resolve the capability."""
        engine = make_engine()
        engine.register_function("tag", lambda v: f"<{v}>")
        failures = []

        def renderer():
            for _ in range(100):
                out = engine.render_string("${ x|tag }", {"x": "a"})
                if out not in ("<a>", "[a]"):
                    failures.append(out)

        def registrar():
            for i in range(100):
                engine.register_function("tag", (lambda v: f"[{v}]") if i % 2 else (lambda v: f"<{v}>"))

        threads = [threading.Thread(target=renderer) for _ in range(4)] + [threading.Thread(target=registrar)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert failures == []
