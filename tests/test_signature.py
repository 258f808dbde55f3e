import inspect
from decimal import Decimal
import pytest
from reflectmock import ConfigurationError, validate_stub_signature
from reflectmock.stubs.signature import resolve_method, return_shape, shape_of
from ledger import Ledger
from subjects import Calc, ScientificCalc


def test_matching_stub_is_accepted() -> None:
    def fake_add(self, a: int, b: int) -> int:
        return 0

    validate_stub_signature(Calc(), "add", fake_add)


def test_missing_receiver_is_reported() -> None:
    def fake_add(a: int, b: int) -> int:
        return 0

    with pytest.raises(ConfigurationError, match="receiver arg") as exc:
        validate_stub_signature(Calc(), "add", fake_add)
    assert "Calc.add" in str(exc.value)
    assert "3 expected, 2 given" in str(exc.value)


def test_non_callable_stub_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="must be callable"):
        validate_stub_signature(Calc(), "add", 42)


def test_unknown_method_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match=r"method_name \(subtract\) must be a method of Calc"):
        validate_stub_signature(Calc(), "subtract", lambda self, a, b: 0)


@pytest.mark.parametrize("name", ["total", "helper", "make", "history"])
def test_non_instance_methods_are_rejected(name: str) -> None:
    with pytest.raises(ConfigurationError, match="must be a method of"):
        validate_stub_signature(Calc(), name, lambda self: 0)


def test_param_type_mismatch_names_position() -> None:
    def fake_add(self, a: int, b: str) -> int:
        return 0

    with pytest.raises(ConfigurationError, match="param #2") as exc:
        validate_stub_signature(Calc(), "add", fake_add)
    assert "int (expected) is not str (actual)" in str(exc.value)


def test_untyped_param_does_not_match_typed_one() -> None:
    def fake_add(self, a, b: int) -> int:
        return 0

    with pytest.raises(ConfigurationError, match="param #1") as exc:
        validate_stub_signature(Calc(), "add", fake_add)
    assert "<untyped> (actual)" in str(exc.value)


def test_return_type_mismatch() -> None:
    def fake_add(self, a: int, b: int) -> str:
        return ""

    with pytest.raises(ConfigurationError, match="return #0"):
        validate_stub_signature(Calc(), "add", fake_add)


def test_return_count_mismatch() -> None:
    def fake_divmod(self, a: int, b: int) -> int:
        return 0

    with pytest.raises(ConfigurationError, match=r"return count .*\(2 expected, 1 given\)"):
        validate_stub_signature(Calc(), "divmod", fake_divmod)


def test_tuple_returns_compare_member_types() -> None:
    def good(self, a: int, b: int) -> tuple[int, int]:
        return 0, 0

    def bad(self, a: int, b: int) -> tuple[int, str]:
        return 0, ""

    validate_stub_signature(Calc(), "divmod", good)
    with pytest.raises(ConfigurationError, match="return #1"):
        validate_stub_signature(Calc(), "divmod", bad)


def test_parameter_kind_mismatch() -> None:
    def fake_scale(self, a: int, factor: int) -> int:
        return 0

    with pytest.raises(ConfigurationError, match="same kind"):
        validate_stub_signature(Calc(), "scale", fake_scale)


def test_receiver_may_be_annotated_with_subject_class() -> None:
    def fake_add(self: Calc, a: int, b: int) -> int:
        return 0

    validate_stub_signature(ScientificCalc(), "add", fake_add)


def test_receiver_annotated_with_other_class_fails() -> None:
    def fake_add(self: str, a: int, b: int) -> int:
        return 0

    with pytest.raises(ConfigurationError, match="param #0"):
        validate_stub_signature(Calc(), "add", fake_add)


def test_untyped_method_accepts_untyped_stub() -> None:
    validate_stub_signature(Calc(), "echo", lambda self, value: value)


def test_builtin_method_descriptor() -> None:
    def fake_append(self, item, /):
        pass

    validate_stub_signature([], "append", fake_append)
    with pytest.raises(ConfigurationError, match="same kind"):
        validate_stub_signature([], "append", lambda self, item: None)


def test_resolve_method_returns_unbound_function() -> None:
    calc = ScientificCalc()
    assert resolve_method(calc, "add") is Calc.add
    assert resolve_method(calc, "power") is ScientificCalc.power
    assert resolve_method(calc, "missing") is None
    assert resolve_method(calc, "total") is None


def test_return_shape() -> None:
    assert return_shape(None) == ()
    assert return_shape(tuple[int, str]) == (int, str)
    assert return_shape(tuple[int, ...]) == (tuple[int, ...],)
    assert return_shape(int) == (int,)
    assert return_shape(inspect.Parameter.empty) == (inspect.Parameter.empty,)


def test_shape_counts_receiver() -> None:
    shape = shape_of(Calc.greet)
    assert len(shape.params) == 3
    assert shape.params[0].annotation is inspect.Parameter.empty
    assert shape.params[1].annotation is str
    assert shape.arity == 1


def test_type_checking_only_annotations_resolve_per_name() -> None:
    shape = shape_of(Ledger.post)
    assert shape.params[1].annotation == "Decimal"
    assert shape.arity == 0
    assert shape_of(Ledger.balance).returns == ("int", "Decimal")
    assert shape_of(Ledger.memo).params[2].annotation is str


def test_stub_matches_type_checking_only_annotations() -> None:
    def fake_post(self, amount: Decimal) -> None:
        pass

    def fake_balance(self, currency: str) -> tuple[int, Decimal]:
        return 0, Decimal(0)

    validate_stub_signature(Ledger(), "post", fake_post)
    validate_stub_signature(Ledger(), "balance", fake_balance)


def test_unresolved_annotation_still_rejects_wrong_type() -> None:
    def fake_post(self, amount: int) -> None:
        pass

    with pytest.raises(ConfigurationError, match="param #1") as exc:
        validate_stub_signature(Ledger(), "post", fake_post)
    assert "Decimal (expected) is not int (actual)" in str(exc.value)


def test_text_return_shapes() -> None:
    assert return_shape("None") == ()
    assert return_shape("tuple[int, dict[str, int]]") == ("int", "dict[str, int]")
    assert return_shape("tuple[()]") == ()
    assert return_shape("tuple[int, ...]") == ("tuple[int, ...]",)
    assert return_shape("Decimal") == ("Decimal",)


def test_alias_spellings_are_the_same_type() -> None:
    def fake_tags(self, names: list[str]) -> str | None:
        return None

    def wrong_tags(self, names: list[int]) -> str | None:
        return None

    validate_stub_signature(Ledger(), "tags", fake_tags)
    with pytest.raises(ConfigurationError, match="param #1"):
        validate_stub_signature(Ledger(), "tags", wrong_tags)
