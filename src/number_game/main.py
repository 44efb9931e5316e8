#!/usr/bin/env python3
"""
Main entry point for the Number Guessing Game.

This module provides the CLI for playing in the terminal or watching an LLM play.
"""

import click
from .logging_config import set_log_level

# Same as the GameConfig defaults. The engine is imported inside the commands, after logging is set up
DEFAULT_MINIMUM = 1
DEFAULT_MAXIMUM = 20
DEFAULT_ATTEMPTS = 10


@click.group()
@click.version_option(package_name='number-guessing-game')
@click.option('--log-level', default='WARNING',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Set logging level')
def cli(log_level):
    """Number Guessing Game - find the secret number before your lives run out!

    Commands:
    - play: guess the number yourself in the terminal
    - autoplay: let an LLM guess, falling back to bisection
    """
    set_log_level(log_level)


@cli.command()
@click.option('--min', 'minimum', default=DEFAULT_MINIMUM, envvar='NUMBER_GAME_MIN',
              show_default=True, help='Lowest possible secret number')
@click.option('--max', 'maximum', default=DEFAULT_MAXIMUM, envvar='NUMBER_GAME_MAX',
              show_default=True, help='Highest possible secret number')
@click.option('--attempts', default=DEFAULT_ATTEMPTS, envvar='NUMBER_GAME_ATTEMPTS',
              show_default=True, help='Wrong guesses allowed per round')
def play(minimum, maximum, attempts):
    """Play the guessing game in the terminal."""
    from .engine import GameConfig, GameConfigError
    from .session import GameSession

    try:
        session = GameSession(GameConfig(minimum=minimum, maximum=maximum, attempts=attempts))
    except GameConfigError as e:
        raise click.UsageError(str(e))

    results = session.run()
    wins = sum(1 for result in results if result.won)
    click.echo(f"Thanks for playing! You won {wins} of {len(results)} rounds.")


@cli.command()
@click.option('--rounds', default=1, type=click.IntRange(min=1), help='Number of rounds to play')
@click.option('--min', 'minimum', default=DEFAULT_MINIMUM, envvar='NUMBER_GAME_MIN',
              show_default=True, help='Lowest possible secret number')
@click.option('--max', 'maximum', default=DEFAULT_MAXIMUM, envvar='NUMBER_GAME_MAX',
              show_default=True, help='Highest possible secret number')
@click.option('--attempts', default=DEFAULT_ATTEMPTS, envvar='NUMBER_GAME_ATTEMPTS',
              show_default=True, help='Wrong guesses allowed per round')
@click.option('--model', default=None, help='LLM model name (defaults to env var LLM_MODEL)')
def autoplay(rounds, minimum, maximum, attempts, model):
    """Let an LLM play - needs LLM_URL and LLM_API_KEY in the environment."""
    from .engine import GameConfigError
    from .guesser_agent import guesser_main

    try:
        results = guesser_main(rounds, minimum, maximum, attempts, model)
    except GameConfigError as e:
        raise click.UsageError(str(e))
    except ValueError as e:
        raise click.ClickException(str(e))

    for number, result in enumerate(results, start=1):
        status = "won" if result.won else "lost"
        click.echo(f"Round {number}: {status} in {result.guesses} guesses (secret was {result.secret})")


if __name__ == '__main__':
    cli()
