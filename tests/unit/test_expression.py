"""Unit tests for the formula tokenizer and ExpressionEvaluator.

These tests verify:
- Literal numbers and numeric strings evaluate to themselves
- Operator precedence, parentheses and unary signs
- Rounding of formula results, halves away from zero
- Typed errors for syntax, unknown variables and arithmetic failures
- Variable extraction and the non-raising try_evaluate
"""

import threading

import pytest

from casework.domain.errors import (
    FormulaArithmeticError,
    FormulaError,
    FormulaSyntaxError,
    UnknownVariableError,
)
from casework.domain.services.expression import (
    ExpressionEvaluator,
    Evaluation,
    TokenKind,
    base_environment,
    evaluate,
    extend_environment,
    round_half_away,
    tokenize,
)
from casework.domain.value_objects import CorpusSpec, ModuleSizes

ENV = {"width": 600.0, "height": 890.0, "depth": 560.0, "thickness": 19.0}


class TestLiterals:
    """Literal values bypass parsing."""

    @pytest.mark.parametrize("literal", [0, 42, 12.5, 1234.5678])
    def test_numbers_evaluate_to_themselves(self, literal: float) -> None:
        assert evaluate(literal, ENV) == literal

    def test_literal_ignores_unrelated_environment(self) -> None:
        assert evaluate(100, {}) == evaluate(100, {"width": 1.0, "other": 7.0})

    def test_numeric_string_is_parsed(self) -> None:
        assert evaluate("12.5", {}) == 12.5
        assert evaluate(".5", {}) == 0.5

    def test_bool_is_rejected(self) -> None:
        with pytest.raises(TypeError):
            evaluate(True, ENV)

    def test_other_types_are_rejected(self) -> None:
        with pytest.raises(TypeError):
            evaluate(None, ENV)  # type: ignore[arg-type]


class TestArithmetic:
    """Grammar and precedence."""

    def test_width_minus_two_thicknesses(self) -> None:
        assert evaluate("width - 2*thickness", {"width": 600, "thickness": 19}) == 562

    def test_parenthesised_formula(self) -> None:
        assert evaluate("width - (thickness * 2)", ENV) == 562

    @pytest.mark.parametrize(
        "formula, expected",
        [
            ("2 + 3 * 4", 14),
            ("(2 + 3) * 4", 20),
            ("10 - 4 - 3", 3),
            ("100 / 10 / 2", 5),
            ("-width + 10", -590),
            ("+5", 5),
            ("-(2 + 3)", -5),
            ("2 * -3", -6),
            ("(height - 35 - 4) / 3", 283.67),
        ],
    )
    def test_precedence_and_signs(self, formula: str, expected: float) -> None:
        assert evaluate(formula, ENV) == expected

    def test_whitespace_is_insignificant(self) -> None:
        assert evaluate("  width-5 ", ENV) == evaluate("width - 5", ENV)

    def test_dotted_names(self) -> None:
        env = {"facades.door.count": 2.0}
        assert evaluate("facades.door.count * 2", env) == 4

    def test_names_match_whole_tokens(self) -> None:
        env = {"width": 600.0, "widthOuter": 650.0}
        assert evaluate("widthOuter - width", env) == 50
        assert evaluate("width-widthOuter", env) == -50

    def test_name_prefix_is_not_a_match(self) -> None:
        with pytest.raises(UnknownVariableError) as exc_info:
            evaluate("widthOuter", {"width": 600.0})
        assert exc_info.value.name == "widthOuter"


class TestRounding:
    """Formula results are rounded to two decimals, halves away from zero."""

    def test_thirds(self) -> None:
        assert evaluate("1 / 3", {}) == 0.33
        assert evaluate("2 / 3", {}) == 0.67

    def test_half_rounds_away_from_zero(self) -> None:
        assert evaluate("2.675 * 1", {}) == 2.68
        assert evaluate("-2.675 * 1", {}) == -2.68

    def test_round_half_away_digits(self) -> None:
        assert round_half_away(0.125) == 0.13
        assert round_half_away(-2.5, 0) == -3.0
        assert round_half_away(2.5, 0) == 3.0

    def test_huge_values_pass_through(self) -> None:
        assert round_half_away(1e20) == 1e20

    def test_evaluator_digits(self) -> None:
        assert ExpressionEvaluator(digits=0).evaluate("10 / 4", {}) == 3


class TestErrors:
    """Every failure is a typed FormulaError."""

    @pytest.mark.parametrize(
        "formula",
        ["", "   ", "width +", "width * * 2", "(width", "width)", "width depth", "2 (3)"],
    )
    def test_syntax_errors(self, formula: str) -> None:
        with pytest.raises(FormulaSyntaxError):
            evaluate(formula, ENV)

    def test_disallowed_character_reports_position(self) -> None:
        with pytest.raises(FormulaSyntaxError) as exc_info:
            evaluate("width $ 2", ENV)
        assert exc_info.value.position == 6
        assert exc_info.value.formula == "width $ 2"

    @pytest.mark.parametrize("formula", ["__import__('os')", "width ** 2", "width % 3", "a; b"])
    def test_code_is_not_executed(self, formula: str) -> None:
        with pytest.raises(FormulaSyntaxError):
            evaluate(formula, {"a": 1.0, "b": 2.0, **ENV})

    def test_unknown_variable(self) -> None:
        with pytest.raises(UnknownVariableError) as exc_info:
            evaluate("width - plinth", ENV)
        assert exc_info.value.name == "plinth"

    def test_division_by_zero(self) -> None:
        with pytest.raises(FormulaArithmeticError) as exc_info:
            evaluate("width / (depth - depth)", ENV)
        assert isinstance(exc_info.value, ArithmeticError)

    def test_non_finite_result(self) -> None:
        with pytest.raises(FormulaArithmeticError):
            evaluate("big * big", {"big": 1e200})

    def test_errors_share_base_class(self) -> None:
        assert issubclass(FormulaSyntaxError, FormulaError)
        assert issubclass(UnknownVariableError, FormulaError)
        assert issubclass(FormulaArithmeticError, FormulaError)


class TestTryEvaluate:
    def test_success(self) -> None:
        result = ExpressionEvaluator().try_evaluate("width / 2", ENV)
        assert result.ok
        assert result.unwrap() == 300

    def test_failure_is_captured(self) -> None:
        result = ExpressionEvaluator().try_evaluate("width / 0", ENV)
        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, FormulaArithmeticError)
        with pytest.raises(FormulaArithmeticError):
            result.unwrap()

    @pytest.mark.parametrize(
        "kwargs", [{}, {"value": 1.0, "error": FormulaError("bad", "x")}], ids=["empty", "both"]
    )
    def test_needs_exactly_one_outcome(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            Evaluation(**kwargs)

    def test_zero_value_unwraps(self) -> None:
        assert Evaluation(value=0.0).unwrap() == 0


class TestIntrospection:
    def test_tokenize(self) -> None:
        kinds = [t.kind for t in tokenize("(a + 1)")]
        assert kinds == [
            TokenKind.LPAREN,
            TokenKind.NAME,
            TokenKind.OP,
            TokenKind.NUMBER,
            TokenKind.RPAREN,
            TokenKind.END,
        ]

    def test_extract_variables(self) -> None:
        assert ExpressionEvaluator.extract_variables("width - (thickness * 2) + width") == [
            "width",
            "thickness",
        ]

    def test_missing_variables(self) -> None:
        evaluator = ExpressionEvaluator()
        assert evaluator.missing_variables("width + plinth", ["width"]) == ["plinth"]

    @pytest.mark.parametrize(
        "value, expected",
        [("width", True), ("100", False), (" 12.5 ", False), (100, False), ("", False)],
    )
    def test_is_formula(self, value: object, expected: bool) -> None:
        assert ExpressionEvaluator.is_formula(value) is expected


class TestEnvironment:
    def test_base_environment(self) -> None:
        env = base_environment(ModuleSizes(600, 890, 560), CorpusSpec(thickness=16))
        assert dict(env) == {"width": 600, "height": 890, "depth": 560, "thickness": 16}

    def test_environment_is_read_only(self) -> None:
        env = base_environment(ModuleSizes(600, 890, 560), CorpusSpec())
        with pytest.raises(TypeError):
            env["width"] = 1  # type: ignore[index]

    def test_extend_does_not_mutate(self) -> None:
        env = base_environment(ModuleSizes(600, 890, 560), CorpusSpec())
        extended = extend_environment(env, {"details.count": 3})
        assert "details.count" in extended
        assert "details.count" not in env


class TestConcurrency:
    def test_shared_evaluator_across_threads(self) -> None:
        """One evaluator serves concurrent calls with different environments."""
        evaluator = ExpressionEvaluator()
        results: dict[int, float] = {}

        def work(n: int) -> None:
            for _ in range(200):
                results[n] = evaluator.evaluate("width * 2", {"width": float(n)})

        threads = [threading.Thread(target=work, args=(n,)) for n in range(1, 9)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {n: n * 2 for n in range(1, 9)}
