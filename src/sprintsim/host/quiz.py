"""Arithmetic quiz generation for checkpoint gates.

The race core only ever sees whether an answer was correct and how long it
took; this module is the host-side provider of the questions themselves.
"""

from enum import Enum
from typing import Protocol

import numpy as np
from pydantic import BaseModel, Field, field_validator


class Operation(str, Enum):
    """Supported arithmetic operations."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"

    @property
    def symbol(self) -> str:
        return {"add": "+", "subtract": "-", "multiply": "×"}[self.value]

    def apply(self, a: int, b: int) -> int:
        if self is Operation.ADD:
            return a + b
        if self is Operation.SUBTRACT:
            return a - b
        return a * b


class MathConfig(BaseModel):
    """Difficulty settings for generated problems."""

    operations: list[Operation] = Field(
        default_factory=lambda: [Operation.ADD],
        min_length=1,
        description="Operations to draw from",
    )
    max_number: int = Field(default=10, ge=1, description="Largest operand")
    num_terms: int = Field(default=2, ge=2, le=5, description="Operands per problem")

    @field_validator("operations")
    @classmethod
    def _unique(cls, value: list[Operation]) -> list[Operation]:
        return list(dict.fromkeys(value))


class MathProblem(BaseModel):
    """A multiple-choice question."""

    question: str
    answer: int
    choices: list[int]

    def check(self, choice: int) -> bool:
        return choice == self.answer


class QuizProvider(Protocol):
    """Anything that can hand the host a problem for a checkpoint."""

    def generate(self) -> MathProblem: ...


class ArithmeticQuizProvider:
    """Generates small arithmetic problems with four answer choices."""

    MULTIPLY_MAX = 10
    WRONG_ANSWERS = 3

    def __init__(self, config: MathConfig | None = None, rng: np.random.Generator | None = None):
        """Initialize the provider.

        Args:
            config: Operations and operand range
            rng: Random number generator
        """
        self.config = config if config is not None else MathConfig()
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate(self) -> MathProblem:
        """Build one problem from the configured operations."""
        operation = self.config.operations[int(self.rng.integers(len(self.config.operations)))]
        operands = self._operands(operation)

        answer = operands[0]
        for operand in operands[1:]:
            answer = operation.apply(answer, operand)

        question = f" {operation.symbol} ".join(str(n) for n in operands) + " = ?"
        choices = [answer, *self._wrong_answers(answer)]
        order = self.rng.permutation(len(choices))
        return MathProblem(
            question=question,
            answer=answer,
            choices=[choices[int(i)] for i in order],
        )

    def _randint(self, low: int, high: int) -> int:
        """Inclusive random integer."""
        return int(self.rng.integers(low, high + 1))

    def _operands(self, operation: Operation) -> list[int]:
        max_number = self.config.max_number
        terms = self.config.num_terms

        if operation is Operation.SUBTRACT:
            # Keep the result non-negative: start big, subtract what remains
            first = self._randint(-(-max_number // 2), max_number)
            operands = [first]
            remaining = first
            for i in range(1, terms):
                max_subtract = remaining // (terms - i)
                n = self._randint(0, min(max_subtract, max_number))
                operands.append(n)
                remaining -= n
            return operands

        if operation is Operation.MULTIPLY:
            upper = min(max_number, self.MULTIPLY_MAX)
            return [self._randint(1, upper) for _ in range(terms)]

        return [self._randint(1, max_number) for _ in range(terms)]

    def _wrong_answers(self, answer: int) -> list[int]:
        """Three distinct positive distractors close to the answer."""
        wrong: list[int] = []
        for _ in range(100):
            if len(wrong) == self.WRONG_ANSWERS:
                break
            offset = self._randint(1, 5) * (1 if self.rng.random() > 0.5 else -1)
            candidate = answer + offset
            if candidate > 0 and candidate != answer and candidate not in wrong:
                wrong.append(candidate)

        # Fallback: walk outward 1, -1, 2, -2, ...
        step = 1
        while len(wrong) < self.WRONG_ANSWERS:
            candidate = answer + step
            if candidate > 0 and candidate != answer and candidate not in wrong:
                wrong.append(candidate)
            step = -step if step > 0 else -step + 1
        return wrong
