import enum
import logging
import string
from dataclasses import dataclass, field
from typing import List, Optional

from config import (
    MAX_GUESSES,
    REVEAL_COMMAND,
    REVEAL_STEP_MS,
    SET_TARGET_COMMAND,
    WORD_LENGTH,
)
from errors import GameOver, Incomplete, InvalidTarget, NoTargetSet, NotInDictionary
from words import WordSource

LOG = logging.getLogger(__name__)


class Status(enum.Enum):
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


# Key statuses only ever move up this ladder.
RANK = {Status.ABSENT: 0, Status.PRESENT: 1, Status.CORRECT: 2}


class State(enum.Enum):
    LOADING = "loading"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Reveal:
    """One tile flip, to be played ``delay_ms`` after the commit."""

    position: int
    letter: str
    status: Status
    delay_ms: int


@dataclass
class Row:
    word: str
    statuses: List[Status]


@dataclass
class CommitResult:
    action: str
    message: str = ""
    statuses: List[Status] = field(default_factory=list)
    reveals: List[Reveal] = field(default_factory=list)
    message_delay_ms: int = 0


def score_guess(guess: str, target: str) -> List[Status]:
    """Score ``guess`` against ``target`` letter by letter.

    Exact matches are taken out of both words first. Every remaining
    guess letter then uses up at most one unmatched occurrence of that
    letter in the target, so a letter repeated in the guess is never
    marked more often than it occurs in the target.
    """
    res: List[Optional[Status]] = [None] * len(target)
    target_letters: List[Optional[str]] = list(target)
    guess_letters: List[Optional[str]] = list(guess)

    for i, ch in enumerate(guess_letters):
        if ch == target_letters[i]:
            res[i] = Status.CORRECT
            target_letters[i] = None
            guess_letters[i] = None

    for i, ch in enumerate(guess_letters):
        if ch is None:
            continue
        if ch in target_letters:
            res[i] = Status.PRESENT
            target_letters[target_letters.index(ch)] = None
        else:
            res[i] = Status.ABSENT

    return res


def reveal_schedule(guess: str, statuses, step_ms=REVEAL_STEP_MS) -> List[Reveal]:
    return [
        Reveal(i, letter, status, i * step_ms)
        for i, (letter, status) in enumerate(zip(guess, statuses))
    ]


class GameSession:
    """All state of one game, driven one keystroke at a time.

    A session starts out loading. It is playing once a :class:`WordSource`
    with a target is installed, and becomes won or lost on the final
    guess. ``setting_target`` is the admin mode in which the next commit
    replaces the target instead of being scored.
    """

    def __init__(self, word_source=None, max_guesses=MAX_GUESSES, word_length=WORD_LENGTH):
        self.max_guesses = max_guesses
        self.word_length = word_length
        self.word_source = None
        self.reset()
        if word_source is not None:
            self.start(word_source)

    def reset(self):
        self.buffer = ""
        self.round = 0
        self.game_over = False
        self.won = False
        self.setting_target = False
        self.history: List[Row] = []
        self.key_states = {}

    @property
    def state(self) -> State:
        if self.word_source is None:
            return State.LOADING
        if self.game_over:
            return State.WON if self.won else State.LOST
        return State.PLAYING

    def start(self, word_source: WordSource):
        word_source.current_target()
        self.word_source = word_source

    def new_game(self, loader, rng=None):
        """Throw away the current game and start one on freshly loaded words.

        ``loader`` returns the word list. If it raises, the session is
        left in the loading state.
        """
        self.word_source = None
        self.reset()
        words = loader()
        source = WordSource(words, word_length=self.word_length)
        source.pick_random_target(words, rng)
        self.start(source)
        LOG.info("New game started with %d words", len(source))
        LOG.debug("Target is %s", source.current_target())

    # input

    def append_letter(self, letter: str) -> bool:
        if self.state is not State.PLAYING:
            return False
        letter = letter.upper()
        if len(letter) != 1 or letter not in string.ascii_uppercase:
            return False
        if len(self.buffer) >= self.word_length:
            return False
        self.buffer += letter
        return True

    def delete_letter(self) -> bool:
        if self.state is not State.PLAYING or not self.buffer:
            return False
        self.buffer = self.buffer[:-1]
        return True

    def press(self, key: str) -> Optional[CommitResult]:
        key = key.upper()
        if key == "ENTER":
            return self.commit()
        if key == "BACKSPACE":
            self.delete_letter()
        else:
            self.append_letter(key)
        return None

    def commit(self) -> CommitResult:
        if self.word_source is None:
            raise NoTargetSet()
        if self.game_over:
            raise GameOver()

        result = self._run_command()
        if result is not None:
            return result
        if self.setting_target:
            return self.set_new_target()

        if len(self.buffer) != self.word_length:
            raise Incomplete()
        if not self.word_source.contains(self.buffer):
            raise NotInDictionary()
        guess = self.buffer
        self.buffer = ""
        return self.evaluate(guess)

    def _run_command(self):
        if self.buffer == REVEAL_COMMAND:
            self.buffer = ""
            LOG.info("Reveal command used")
            return CommitResult("reveal", f"The word is: {self.word_source.current_target()}.")
        if self.buffer == SET_TARGET_COMMAND:
            self.buffer = ""
            self.setting_target = True
            LOG.info("Entered set-target mode")
            return CommitResult("set_mode", "Type to set new word.")
        return None

    # scoring

    def evaluate(self, guess: str) -> CommitResult:
        target = self.word_source.current_target()
        statuses = score_guess(guess, target)
        self.history.append(Row(guess, statuses))
        for letter, status in zip(guess, statuses):
            self._update_key(letter, status)
        reveals = reveal_schedule(guess, statuses)

        if guess == target:
            self.game_over = True
            self.won = True
            for letter in target:
                self.key_states[letter] = Status.CORRECT
            LOG.info("Game won in %d guesses", len(self.history))
            return CommitResult(
                "guess", "You won! 🎉", statuses, reveals,
                message_delay_ms=self.word_length * REVEAL_STEP_MS,
            )
        if self.round == self.max_guesses - 1:
            self.game_over = True
            LOG.info("Game lost")
            return CommitResult("guess", f"Game Over! The word was {target}.", statuses, reveals)

        self.round += 1
        return CommitResult("guess", "", statuses, reveals)

    def _update_key(self, letter, status):
        current = self.key_states.get(letter)
        if current is None or RANK[status] > RANK[current]:
            self.key_states[letter] = status

    def set_new_target(self, candidate=None) -> CommitResult:
        # The candidate is used up and the mode left whatever the outcome.
        if candidate is None:
            candidate = self.buffer
        self.buffer = ""
        self.setting_target = False
        if len(candidate) != self.word_length or not self.word_source.contains(candidate):
            LOG.info("Rejected new target %r", candidate)
            raise InvalidTarget()
        self.word_source.set_target(candidate)
        LOG.info("Target replaced by admin command")
        return CommitResult("set_target", f"New word set to: {candidate}")

    # serialisation

    def to_dict(self):
        return {
            "target": self.word_source.current_target() if self.word_source else None,
            "buffer": self.buffer,
            "round": self.round,
            "game_over": self.game_over,
            "won": self.won,
            "setting_target": self.setting_target,
            "history": [
                {"word": row.word, "feedback": [s.value for s in row.statuses]}
                for row in self.history
            ],
            "key_states": {k: v.value for k, v in self.key_states.items()},
        }

    @classmethod
    def from_dict(cls, data, words):
        game = cls()
        if data.get("target"):
            game.start(WordSource(words, target=data["target"]))
        game.buffer = data.get("buffer", "")
        game.round = data.get("round", 0)
        game.game_over = data.get("game_over", False)
        game.won = data.get("won", False)
        game.setting_target = data.get("setting_target", False)
        game.history = [
            Row(row["word"], [Status(s) for s in row["feedback"]])
            for row in data.get("history", [])
        ]
        game.key_states = {k: Status(v) for k, v in data.get("key_states", {}).items()}
        return game
