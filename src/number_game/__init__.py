"""
Number Guessing Game - Find the secret number before your lives run out.

A hidden integer is drawn from a configurable range and the player guesses
until they find it or use up their attempts:
- engine: the game state and the single guess-evaluation step
- session: the terminal presentation layer for a human player
- guesser_agent: an LLM player that plays rounds on its own
"""

__version__ = "1.0.0"
