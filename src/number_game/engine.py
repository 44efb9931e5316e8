"""
Game Engine - Holds the secret number and evaluates guesses.

A Game is built once per round. It draws its secret from an injected random
source and then only changes when a guess is evaluated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from .logging_config import setup_logger

logger = setup_logger(__name__)


class GameConfigError(ValueError):
    """Raised when a game cannot be built from the given configuration."""


class InvalidRange(GameConfigError):
    """The lower bound is greater than the upper bound."""

    def __init__(self, minimum: int, maximum: int):
        super().__init__(f"minimum ({minimum}) must not be greater than maximum ({maximum})")
        self.minimum = minimum
        self.maximum = maximum


class InvalidAttempts(GameConfigError):
    """The starting number of attempts is negative."""

    def __init__(self, attempts: int):
        super().__init__(f"attempts must be zero or more, got {attempts}")
        self.attempts = attempts


class Outcome(str, Enum):
    CORRECT = "correct"
    TOO_LOW = "too_low"
    TOO_HIGH = "too_high"
    NO_MORE_LIVES = "no_more_lives"


@dataclass(frozen=True)
class GameConfig:
    """Range bounds and starting attempts for one round."""

    minimum: int = 1
    maximum: int = 20
    attempts: int = 10

    def validate(self):
        if self.minimum > self.maximum:
            raise InvalidRange(self.minimum, self.maximum)
        if self.attempts < 0:
            raise InvalidAttempts(self.attempts)


def compare(guess: int, secret: int) -> Outcome:
    """Compare a guess against the secret number."""
    if guess == secret:
        return Outcome.CORRECT
    if guess < secret:
        return Outcome.TOO_LOW
    return Outcome.TOO_HIGH


class Game:
    """A single round of the number guessing game.

    The random source only needs a ``randint(a, b)`` method returning an
    integer uniformly drawn from the inclusive range. It is consumed once
    here and not kept on the instance.
    """

    def __init__(self, random_source, config: Optional[GameConfig] = None):
        config = config or GameConfig()
        config.validate()

        self._minimum = config.minimum
        self._maximum = config.maximum
        self._attempts_remaining = config.attempts
        self._secret = random_source.randint(config.minimum, config.maximum)

        logger.debug(f"New game: range [{self._minimum}, {self._maximum}], "
                     f"{self._attempts_remaining} attempts, secret {self._secret}")

    @classmethod
    def create(cls, random_source, minimum: Optional[int] = None,
               maximum: Optional[int] = None, attempts: Optional[int] = None) -> "Game":
        """Build a game, overriding only the settings that are given."""
        defaults = GameConfig()
        config = GameConfig(
            minimum=defaults.minimum if minimum is None else minimum,
            maximum=defaults.maximum if maximum is None else maximum,
            attempts=defaults.attempts if attempts is None else attempts,
        )
        return cls(random_source, config)

    @property
    def minimum(self) -> int:
        return self._minimum

    @property
    def maximum(self) -> int:
        return self._maximum

    @property
    def attempts_remaining(self) -> int:
        return self._attempts_remaining

    @property
    def secret(self) -> int:
        return self._secret

    @property
    def is_exhausted(self) -> bool:
        return self._attempts_remaining == 0

    def evaluate(self, guess: int) -> Outcome:
        """Evaluate a guess and charge an attempt if it missed.

        Once no attempts remain every call returns NO_MORE_LIVES and
        leaves the state alone.
        """
        if self.is_exhausted:
            logger.debug(f"Guess {guess} ignored, no attempts left")
            return Outcome.NO_MORE_LIVES

        outcome = compare(guess, self._secret)
        if outcome is not Outcome.CORRECT:
            self._attempts_remaining -= 1

        logger.debug(f"Guess {guess}: {outcome.value} ({self._attempts_remaining} attempts left)")
        return outcome
