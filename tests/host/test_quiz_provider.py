"""Tests for arithmetic quiz generation."""

import re

import numpy as np
import pytest
from pydantic import ValidationError

from sprintsim.host import ArithmeticQuizProvider, MathConfig, MathProblem, Operation


def provider(*operations, seed=0, **kwargs):
    config = MathConfig(operations=list(operations), **kwargs)
    return ArithmeticQuizProvider(config, rng=np.random.default_rng(seed))


class TestMathConfig:
    """Tests for quiz settings."""

    def test_requires_an_operation(self):
        with pytest.raises(ValidationError):
            MathConfig(operations=[])

    def test_duplicates_removed(self):
        config = MathConfig(operations=[Operation.ADD, Operation.ADD, Operation.MULTIPLY])
        assert config.operations == [Operation.ADD, Operation.MULTIPLY]

    @pytest.mark.parametrize("num_terms", [1, 6])
    def test_term_range(self, num_terms):
        with pytest.raises(ValidationError):
            MathConfig(num_terms=num_terms)


class TestArithmeticQuizProvider:
    """Tests for generated problems."""

    @pytest.mark.parametrize("operation", list(Operation))
    def test_choices(self, operation):
        quiz = provider(operation, seed=11)
        for _ in range(200):
            problem = quiz.generate()
            assert len(problem.choices) == 4
            assert len(set(problem.choices)) == 4
            assert problem.answer in problem.choices
            assert all(c > 0 for c in problem.choices if c != problem.answer)

    @pytest.mark.parametrize("operation", list(Operation))
    def test_answer_matches_question(self, operation):
        quiz = provider(operation, seed=5, num_terms=3)
        for _ in range(100):
            problem = quiz.generate()
            operands = [int(n) for n in re.findall(r"\d+", problem.question)]
            assert len(operands) == 3
            expected = operands[0]
            for n in operands[1:]:
                expected = operation.apply(expected, n)
            assert problem.answer == expected
            assert f" {operation.symbol} " in problem.question
            assert problem.question.endswith(" = ?")

    def test_subtraction_never_negative(self):
        quiz = provider(Operation.SUBTRACT, seed=3, max_number=20, num_terms=4)
        for _ in range(500):
            assert quiz.generate().answer >= 0

    def test_operands_within_range(self):
        quiz = provider(Operation.ADD, seed=9, max_number=5)
        for _ in range(200):
            operands = [int(n) for n in re.findall(r"\d+", quiz.generate().question)]
            assert all(1 <= n <= 5 for n in operands)

    def test_multiplication_operands_capped(self):
        quiz = provider(Operation.MULTIPLY, seed=2, max_number=50)
        for _ in range(200):
            operands = [int(n) for n in re.findall(r"\d+", quiz.generate().question)]
            assert all(1 <= n <= 10 for n in operands)

    def test_seeded_provider_is_reproducible(self):
        first, second = (provider(Operation.ADD, Operation.SUBTRACT, seed=4) for _ in range(2))
        assert [first.generate() for _ in range(5)] == [second.generate() for _ in range(5)]

    def test_check(self):
        problem = MathProblem(question="2 + 2 = ?", answer=4, choices=[3, 4, 5, 6])
        assert problem.check(4)
        assert not problem.check(5)
