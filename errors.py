class WordleError(Exception):
    """Base error; ``message`` is shown to the player as is."""

    status_code = 400
    message = "Something went wrong."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Incomplete(WordleError):
    message = "Not enough letters."


class NotInDictionary(WordleError):
    message = "Not a valid word."


class InvalidTarget(WordleError):
    message = "Invalid word. It must be 5 letters and in the word list."


class GameOver(WordleError):
    message = "Game is over. Press Reset to play again."


class EmptyWordList(WordleError):
    status_code = 503
    message = "Word list is empty."


class DictionaryUnavailable(WordleError):
    status_code = 503
    message = "Failed to load game. Try again."


class NoTargetSet(WordleError):
    status_code = 500
    message = "No word has been chosen yet."
