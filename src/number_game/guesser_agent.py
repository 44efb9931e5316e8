"""
Guesser Agent - Lets the LLM guesser play rounds against the game engine.
"""

import asyncio
from typing import List, Optional
from .engine import Game, GameConfig, Outcome
from .llm_agent import LLMNumberGuesser
from .logging_config import setup_logger
from .session import RoundResult, new_random_source

logger = setup_logger(__name__)


class GuesserAgent:
    """Agent that plays whole rounds with an LLM choosing the guesses."""

    def __init__(self, guesser: LLMNumberGuesser, config: Optional[GameConfig] = None,
                 source_factory=None):
        self.guesser = guesser
        self.config = config or GameConfig()
        self.config.validate()
        self.source_factory = source_factory

    async def play_round(self) -> RoundResult:
        """Play one round on a brand-new game."""
        factory = self.source_factory or new_random_source
        game = Game(factory(), self.config)
        self.guesser.start(game.minimum, game.maximum)

        guesses = 0
        won = False
        while not game.is_exhausted:
            guess = await self.guesser.next_guess(game.attempts_remaining)
            outcome = game.evaluate(guess)
            guesses += 1
            self.guesser.record(guess, outcome)
            logger.info(f"Guessed {guess}: {outcome.value}")
            if outcome is Outcome.CORRECT:
                won = True
                break

        return RoundResult(won=won, guesses=guesses, secret=game.secret)

    async def play(self, rounds: int) -> List[RoundResult]:
        results = []
        for number in range(1, rounds + 1):
            logger.info(f"Starting round {number}/{rounds}")
            result = await self.play_round()
            if result.won:
                logger.info(f"Round {number}: found {result.secret} in {result.guesses} guesses")
            else:
                logger.info(f"Round {number}: out of attempts, the secret was {result.secret}")
            results.append(result)
        return results


def guesser_main(rounds: int, minimum: int, maximum: int, attempts: int,
                 model: str = None) -> List[RoundResult]:
    """Main entry point for the autoplay command."""
    config = GameConfig(minimum=minimum, maximum=maximum, attempts=attempts)
    config.validate()
    agent = GuesserAgent(LLMNumberGuesser(model), config)
    results = asyncio.run(agent.play(rounds))

    wins = sum(1 for result in results if result.won)
    logger.info(f"Won {wins} of {len(results)} rounds")
    return results
