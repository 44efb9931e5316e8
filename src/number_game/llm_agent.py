"""
LLM-powered guesser that proposes numbers for the guessing game.
"""

import os
import re
from typing import Dict, List, Tuple
import openai
from .engine import Outcome
from .logging_config import setup_logger

logger = setup_logger(__name__)

INTEGER_PATTERN = re.compile(r'-?[0-9]+')


def bisect(low: int, high: int) -> int:
    """Return the midpoint of the inclusive interval."""
    return low + (high - low) // 2


class LLMAgent:
    """Base class for LLM-powered agents supporting any OpenAI-compatible endpoint."""

    def __init__(self, model: str = None):
        self._setup_llm(model)

    def _setup_llm(self, model: str = None):
        """Setup LLM connection using generic environment variables."""
        self.model = model or os.getenv("LLM_MODEL")
        llm_url = os.getenv("LLM_URL")
        llm_api_key = os.getenv("LLM_API_KEY")

        if not self.model or not llm_url or not llm_api_key:
            logger.error("LLM configuration incomplete in environment! "
                         "Required: LLM_MODEL, LLM_URL, and LLM_API_KEY")
            raise ValueError("Missing required LLM environment variables")

        self.client = openai.AsyncOpenAI(
            base_url=llm_url,
            api_key=llm_api_key
        )

        logger.info(f"Using LLM: {self.model}")
        logger.debug(f"Endpoint: {llm_url}")

    async def ask_llm(self, messages: List[Dict[str, str]], max_tokens: int = 20) -> str:
        """Send a request to the LLM and get a response, or '' if the call failed."""
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=0.2
            )
        except openai.OpenAIError as e:
            logger.warning(f"LLM error: {e}")
            return ""
        return (response.choices[0].message.content or "").strip()


class LLMNumberGuesser(LLMAgent):
    """Asks the LLM for each guess and keeps track of what the answers ruled out."""

    def __init__(self, model: str = None):
        super().__init__(model)
        self.low = 0
        self.high = 0
        self.history: List[Tuple[int, Outcome]] = []

    def start(self, minimum: int, maximum: int):
        """Forget the previous round and search the new range."""
        self.low = minimum
        self.high = maximum
        self.history = []

    def record(self, guess: int, outcome: Outcome):
        """Narrow the search interval with the engine's answer."""
        self.history.append((guess, outcome))
        if outcome is Outcome.TOO_LOW:
            self.low = max(self.low, guess + 1)
        elif outcome is Outcome.TOO_HIGH:
            self.high = min(self.high, guess - 1)

    def parse_reply(self, reply: str):
        """Return the last integer in the reply if it is still possible, else None."""
        matches = INTEGER_PATTERN.findall(reply)
        if not matches:
            return None
        value = int(matches[-1])
        if self.low <= value <= self.high:
            return value
        return None

    async def next_guess(self, attempts_remaining: int) -> int:
        """Use the LLM to pick the next guess, bisecting when the reply is unusable."""
        if self.history:
            history_text = "\n".join(f"- {guess}: {outcome.value.replace('_', ' ')}"
                                     for guess, outcome in self.history)
        else:
            history_text = "No guesses yet."

        messages = [
            {
                "role": "system",
                "content": "You are playing a number guessing game. After each guess you are told whether it "
                           "was too low or too high. Find the secret number in as few guesses as possible. "
                           "Respond with ONLY one integer."
            },
            {
                "role": "user",
                "content": f"The secret number is between {self.low} and {self.high} inclusive.\n"
                           f"Attempts left: {attempts_remaining}\n"
                           f"Previous guesses:\n{history_text}\n\nWhat is your next guess?"
            }
        ]

        reply = await self.ask_llm(messages)
        guess = self.parse_reply(reply)
        if guess is None:
            guess = bisect(self.low, self.high)
            logger.debug(f"Unusable LLM reply {reply!r}, bisecting to {guess}")
        return guess
