"""
Terminal Session - The presentation layer for a human player.

The session renders prompts, turns typed text into guesses, and maps each
outcome to a message. It holds exactly one Game at a time and builds a new
one, with a freshly seeded random source, for every round.
"""

import random
import re
from dataclasses import dataclass
from typing import Callable, List, Optional
import click
from .engine import Game, GameConfig, Outcome
from .logging_config import setup_logger

logger = setup_logger(__name__)

GUESS_PATTERN = re.compile(r"-?[0-9]+")

INVALID_INPUT_MESSAGE = "Please enter a valid number."

MESSAGES = {
    Outcome.CORRECT: "Congratulations! You guessed the number!",
    Outcome.TOO_HIGH: "Too high! Try again.",
    Outcome.TOO_LOW: "Too low! Try again.",
}


class InvalidGuess(ValueError):
    """Raised when player input is not a whole number."""


@dataclass
class RoundResult:
    won: bool
    guesses: int
    secret: int


def new_random_source() -> random.Random:
    """Return a random source seeded from OS entropy."""
    return random.Random()


def parse_guess(text: str) -> int:
    """Parse raw player input into an integer guess."""
    if not isinstance(text, str) or not GUESS_PATTERN.fullmatch(text.strip()):
        raise InvalidGuess(f"not a number: {text!r}")
    return int(text.strip())


def describe(outcome: Outcome, game: Game) -> str:
    """Return the text shown to the player for an outcome."""
    if outcome is Outcome.NO_MORE_LIVES:
        return f"No more lives left. The secret number was {game.secret}"
    return MESSAGES[outcome]


class GameSession:
    """One player's session at the terminal, possibly spanning many rounds."""

    def __init__(self, config: Optional[GameConfig] = None,
                 source_factory: Optional[Callable[[], object]] = None,
                 prompt: Callable = click.prompt,
                 echo: Callable = click.echo,
                 confirm: Callable = click.confirm):
        self.config = config or GameConfig()
        self.config.validate()
        self.source_factory = source_factory
        self.prompt = prompt
        self.echo = echo
        self.confirm = confirm
        self.game = None
        self.guesses = 0
        self.won = False

    def new_round(self) -> Game:
        """Discard the current game and start a new one."""
        # Looked up at call time so every round gets its own fresh source
        factory = self.source_factory or new_random_source
        self.game = Game(factory(), self.config)
        self.guesses = 0
        self.won = False
        logger.info(f"New round: [{self.game.minimum}, {self.game.maximum}] "
                    f"with {self.game.attempts_remaining} attempts")
        return self.game

    @property
    def round_over(self) -> bool:
        return self.game is None or self.won or self.game.is_exhausted

    def submit(self, text: str) -> Optional[Outcome]:
        """Handle one line of player input.

        Starts a round first if none is in progress. Returns the outcome, or
        None if the input was not a number and the game was left untouched.
        """
        if self.game is None:
            self.new_round()

        try:
            guess = parse_guess(text)
        except InvalidGuess:
            logger.debug(f"Rejected input {text!r}")
            self.echo(INVALID_INPUT_MESSAGE)
            return None

        outcome = self.game.evaluate(guess)
        if outcome is not Outcome.NO_MORE_LIVES:
            self.guesses += 1
        if outcome is Outcome.CORRECT:
            self.won = True

        self.echo(describe(outcome, self.game))

        # The miss that uses the last attempt also ends the round
        if outcome in (Outcome.TOO_LOW, Outcome.TOO_HIGH) and self.game.is_exhausted:
            self.echo(describe(Outcome.NO_MORE_LIVES, self.game))

        return outcome

    def play_round(self) -> RoundResult:
        """Play a single round until the secret is found or attempts run out."""
        self.new_round()

        if self.game.is_exhausted:
            self.echo(describe(Outcome.NO_MORE_LIVES, self.game))

        while not self.round_over:
            self.echo(f"Guess a number between {self.game.minimum} and {self.game.maximum} "
                      f"({self.game.attempts_remaining} attempts left):")
            self.submit(self.prompt("Guess"))

        result = RoundResult(won=self.won, guesses=self.guesses, secret=self.game.secret)
        logger.info(f"Round over: {'won' if result.won else 'lost'} after {result.guesses} guesses")
        return result

    def run(self) -> List[RoundResult]:
        """Play rounds until the player declines to play again."""
        results = []
        while True:
            results.append(self.play_round())
            if not self.confirm("Play again?", default=False):
                break
        return results
