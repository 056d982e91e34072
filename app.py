import logging

from flask import Flask, g, jsonify, render_template, request, session

import config
from errors import DictionaryUnavailable, InvalidTarget, NotInDictionary, WordleError
from game import GameSession, State
from words import load_words

LOG = logging.getLogger(__name__)

app = Flask(__name__)

app.secret_key = config.SECRET_KEY
app.config.update(
    WORD_LIST_URL=config.WORD_LIST_URL,
    WORD_LIST_PATH=config.WORD_LIST_PATH,
    REQUEST_TIMEOUT=config.REQUEST_TIMEOUT,
)

DICTIONARY_KEY = "wordguess.dictionary"


def load_dictionary():
    words = load_words(
        url=app.config["WORD_LIST_URL"],
        path=app.config["WORD_LIST_PATH"],
        timeout=app.config["REQUEST_TIMEOUT"],
    )
    app.extensions[DICTIONARY_KEY] = frozenset(words)
    return words


def dictionary():
    words = app.extensions.get(DICTIONARY_KEY)
    if words is None:
        words = load_dictionary()
    return words


def current_game():
    data = session.get("game")
    if data and data.get("target"):
        try:
            game = GameSession.from_dict(data, dictionary())
        except InvalidTarget:
            # The word list was reloaded without this game's target.
            LOG.warning("Stored game no longer matches the word list, starting a new one")
            return new_game()
    else:
        game = GameSession()
    g.game = game
    return game


def save_game(game):
    session["game"] = game.to_dict()
    session.modified = True


def new_game():
    # Every new game fetches the word list again, so a failed load is retried here.
    game = GameSession()
    g.game = game
    try:
        game.new_game(load_dictionary)
    finally:
        save_game(game)
    return game


def require_loaded(game):
    if game.state is State.LOADING:
        raise DictionaryUnavailable()


def state_payload(game):
    lost = game.state is State.LOST
    return {
        "status": game.state.value,
        "guesses": game.to_dict()["history"],
        "buffer": game.buffer,
        "round": game.round,
        "setting_target": game.setting_target,
        "keys": {k: v.value for k, v in game.key_states.items()},
        "win": game.state is State.WON,
        "lose": lost,
        "target": game.word_source.current_target() if lost else None,
    }


def result_payload(result):
    if result is None:
        return None
    return {
        "action": result.action,
        "message": result.message,
        "feedback": [s.value for s in result.statuses],
        "reveals": [
            {
                "position": r.position,
                "letter": r.letter,
                "status": r.status.value,
                "delay_ms": r.delay_ms,
            }
            for r in result.reveals
        ],
        "message_delay_ms": result.message_delay_ms,
    }


@app.errorhandler(WordleError)
def wordle_error(e):
    body = {"error": e.message}
    game = g.get("game")
    if game is not None:
        body["state"] = state_payload(game)
    return jsonify(body), e.status_code


@app.route("/")
def index():
    message = ""
    try:
        if "game" not in session or current_game().state is not State.PLAYING:
            new_game()
    except WordleError as e:
        LOG.error("Could not start a game: %s", e.message)
        message = e.message
    return render_template("index.html", title="Word Guess", message=message)


@app.route("/state", methods=["GET"])
def state():
    return jsonify(state_payload(current_game()))


@app.route("/key", methods=["POST"])
def key():
    data = request.get_json(silent=True) or {}
    pressed = (data.get("key") or "").strip()

    game = current_game()
    require_loaded(game)
    try:
        result = game.press(pressed)
    finally:
        save_game(game)

    return jsonify({"result": result_payload(result), **state_payload(game)})


@app.route("/guess", methods=["POST"])
def guess():
    data = request.get_json(silent=True) or {}
    guess_word = (data.get("guess") or "").strip().upper()

    game = current_game()
    require_loaded(game)
    malformed = len(guess_word) > game.word_length or (guess_word and not guess_word.isalpha())

    try:
        while game.delete_letter():
            pass
        if malformed and game.state is State.PLAYING:
            # Cannot be typed, so it never reaches the buffer.
            if not game.setting_target:
                raise NotInDictionary()
            result = game.set_new_target(guess_word)
        else:
            for letter in guess_word:
                game.append_letter(letter)
            result = game.commit()
    finally:
        save_game(game)

    return jsonify({"result": result_payload(result), **state_payload(game)})


@app.route("/reset", methods=["POST"])
def reset():
    game = new_game()
    return jsonify({"message": "Game reset.", **state_payload(game)})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    app.run(debug=True)
