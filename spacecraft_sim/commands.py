"""
Spacecraft Mission Simulation - Operator Command Port

The orbit hold asks the operator for a return command in two steps: a
return-request token, then a yes/no confirmation. Only the first character
of a response counts, so "return" and "yes" are accepted. Any unrecognized
token, and any missing response, cancels the request; it is never an error.

Sources:
  - ScriptedCommandSource: fixed token sequence (tests, batch runs)
  - ConsoleCommandSource:  blocking input() on a terminal
  - QueueCommandSource:    polled queue with a timeout
"""

import logging
import queue
from enum import Enum, auto
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

RETURN_TOKENS = frozenset({'r'})
CONFIRM_TOKENS = frozenset({'y'})

RETURN_PROMPT = "[COMMAND] Press 'r' to return to Earth: "
CONFIRM_PROMPT = "[CONFIRM] Confirm return to Earth? (y/n): "


class ReturnDecision(Enum):
    ACCEPTED = auto()
    NO_COMMAND = auto()          # Source gave no response
    INVALID_COMMAND = auto()     # First token was not a return request
    CANCELLED = auto()           # Confirmation was not affirmative


class CommandSource:
    """Producer of single operator tokens."""

    def read_token(self, prompt: str) -> Optional[str]:
        """Return the next token, or None when no response arrives."""
        raise NotImplementedError


class ScriptedCommandSource(CommandSource):
    """Replays a fixed sequence of tokens, then reports no response."""

    def __init__(self, tokens: Iterable[str] = ()):
        self._tokens = iter(list(tokens))
        self.prompts = []

    def read_token(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return next(self._tokens, None)


class ConsoleCommandSource(CommandSource):
    """Reads tokens from a terminal. End of input counts as no response."""

    def __init__(self, input_fn: Callable[[str], str] = input):
        self.input_fn = input_fn

    def read_token(self, prompt: str) -> Optional[str]:
        try:
            return self.input_fn(prompt)
        except EOFError:
            logger.warning("Command input closed")
            return None


class QueueCommandSource(CommandSource):
    """Polls a queue fed by another producer, giving up after a timeout."""

    def __init__(self, commands: "queue.Queue[str]", timeout: Optional[float] = None):
        self.commands = commands
        self.timeout = timeout

    def read_token(self, prompt: str) -> Optional[str]:
        try:
            return self.commands.get(timeout=self.timeout)
        except queue.Empty:
            logger.warning(f"No operator response within {self.timeout} s")
            return None


def _normalize(token: Optional[str]) -> Optional[str]:
    """Reduce a response to its lowercased first character ("yes" -> "y")."""
    if token is None:
        return None
    return token.strip()[:1].lower()


def request_return_confirmation(source: CommandSource) -> ReturnDecision:
    """
    Run the two-step return handshake against a command source.

    Returns:
        ReturnDecision.ACCEPTED only for a return token followed by an
        affirmative confirmation.
    """
    command = _normalize(source.read_token(RETURN_PROMPT))
    if command is None:
        logger.info("No return command received; craft stays in orbit")
        return ReturnDecision.NO_COMMAND
    if command not in RETURN_TOKENS:
        logger.info(f"Invalid command {command!r}; craft stays in orbit")
        return ReturnDecision.INVALID_COMMAND

    confirm = _normalize(source.read_token(CONFIRM_PROMPT))
    if confirm not in CONFIRM_TOKENS:
        logger.info("Return cancelled; craft stays in orbit")
        return ReturnDecision.CANCELLED
    return ReturnDecision.ACCEPTED
