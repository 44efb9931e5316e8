import asyncio
import math
from types import SimpleNamespace

import openai
import pytest

from number_game.engine import GameConfig, InvalidRange, Outcome
from number_game.guesser_agent import GuesserAgent, guesser_main
from number_game.llm_agent import LLMNumberGuesser, bisect


@pytest.fixture
def llm_env(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "test-model")
    monkeypatch.setenv("LLM_URL", "http://localhost:11434/v1")
    monkeypatch.setenv("LLM_API_KEY", "test-key")


def scripted_guesser(replies):
    """A guesser whose LLM answers come from a list; '' once the list runs out."""
    guesser = LLMNumberGuesser()
    replies = list(replies)
    prompts = []

    async def ask_llm(messages, max_tokens=20):
        prompts.append(messages)
        return replies.pop(0) if replies else ""

    guesser.ask_llm = ask_llm
    guesser.prompts = prompts
    return guesser


def test_bisect():
    assert bisect(1, 20) == 10
    assert bisect(11, 20) == 15
    assert bisect(4, 4) == 4
    assert bisect(-10, -1) == -6


def test_missing_llm_configuration(monkeypatch):
    for name in ("LLM_MODEL", "LLM_URL", "LLM_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(ValueError):
        LLMNumberGuesser()


def test_record_narrows_interval(llm_env):
    guesser = LLMNumberGuesser()
    guesser.start(1, 20)
    guesser.record(8, Outcome.TOO_LOW)
    guesser.record(15, Outcome.TOO_HIGH)
    assert (guesser.low, guesser.high) == (9, 14)
    assert guesser.history == [(8, Outcome.TOO_LOW), (15, Outcome.TOO_HIGH)]


def test_uses_reply_inside_interval(llm_env):
    guesser = scripted_guesser(["I think 7"])
    guesser.start(1, 20)
    assert asyncio.run(guesser.next_guess(10)) == 7


def test_bisects_on_unusable_reply(llm_env):
    guesser = scripted_guesser(["50", "no idea"])
    guesser.start(1, 20)
    assert asyncio.run(guesser.next_guess(10)) == 10
    assert asyncio.run(guesser.next_guess(9)) == 10


def test_prompt_includes_history(llm_env):
    guesser = scripted_guesser([])
    guesser.start(1, 20)
    guesser.record(10, Outcome.TOO_LOW)
    asyncio.run(guesser.next_guess(9))
    prompt = guesser.prompts[-1][1]["content"]
    assert "between 11 and 20" in prompt
    assert "- 10: too low" in prompt
    assert "Attempts left: 9" in prompt


def test_llm_error_returns_empty_reply(llm_env):
    guesser = LLMNumberGuesser()

    async def create(**kwargs):
        raise openai.OpenAIError("connection refused")

    guesser.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    assert asyncio.run(guesser.ask_llm([{"role": "user", "content": "guess"}])) == ""


def test_llm_reply_is_stripped(llm_env):
    guesser = LLMNumberGuesser()

    async def create(**kwargs):
        message = SimpleNamespace(content="  12\n")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    guesser.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    assert asyncio.run(guesser.ask_llm([{"role": "user", "content": "guess"}])) == "12"


def test_bisection_always_wins(llm_env, fixed_source):
    config = GameConfig(minimum=1, maximum=20, attempts=10)
    limit = math.ceil(math.log2(20 + 1))
    for secret in range(1, 21):
        agent = GuesserAgent(scripted_guesser([]), config, source_factory=lambda: fixed_source(secret))
        result = asyncio.run(agent.play_round())
        assert result.won
        assert result.secret == secret
        assert result.guesses <= limit


def test_round_lost_when_attempts_run_out(llm_env, fixed_source):
    # The model keeps picking the low end, so two attempts are not enough
    guesser = scripted_guesser(["1", "2"])
    agent = GuesserAgent(guesser, GameConfig(minimum=1, maximum=20, attempts=2),
                         source_factory=lambda: fixed_source(20))
    result = asyncio.run(agent.play_round())
    assert not result.won
    assert result.guesses == 2


def test_play_multiple_rounds(llm_env, fixed_source):
    secrets = [3, 17]
    agent = GuesserAgent(scripted_guesser([]), GameConfig(),
                         source_factory=lambda: fixed_source(secrets.pop(0)))
    results = asyncio.run(agent.play(2))
    assert [result.secret for result in results] == [3, 17]
    assert all(result.won for result in results)


def test_guesser_main_rejects_inverted_range(llm_env):
    with pytest.raises(InvalidRange):
        guesser_main(1, 10, 1, 5)


def test_uses_last_integer_in_reply(llm_env):
    guesser = scripted_guesser(["Between 1 and 20, I pick 7"])
    guesser.start(1, 20)
    assert asyncio.run(guesser.next_guess(10)) == 7
