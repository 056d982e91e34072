import os

MAX_GUESSES = 6
WORD_LENGTH = 5

# Reserved words typed through the normal guess input.
REVEAL_COMMAND = "BLANB"
SET_TARGET_COMMAND = "BLANC"
RESERVED_WORDS = frozenset({REVEAL_COMMAND, SET_TARGET_COMMAND})

# Delay between two tile flips, in milliseconds.
REVEAL_STEP_MS = 200

WORD_LIST_URL = os.environ.get(
    "WORD_LIST_URL",
    "https://gist.githubusercontent.com/dracos/dd0668f281e685bad51479e5acaadb93"
    "/raw/6bfa15d263d6d5b63840a8e5b64e04b382fdb079/valid-wordle-words.txt",
)
WORD_LIST_PATH = os.environ.get("WORD_LIST_PATH")
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "10"))

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-key")
