"""
Demo for colored log lines

Logs a message at every level, then an error with a chained exception and
its stack trace. Run within source repository:
  python demo/logging_demo.py
"""

import logging

import colorline

log = logging.getLogger("demo")


# Deep call chain example - each function in a different frame
def process_user_data(user_id):
    """Top level: fetch and process user data."""
    raw_data = fetch_user_from_api(user_id, retries=3)
    return transform_user_data(raw_data)


def fetch_user_from_api(user_id, retries):
    """Second level: simulate API call."""
    try:
        return prepare_query_params(user_id, "SELECT * FROM users WHERE id = ?")
    except ZeroDivisionError as e:
        raise LookupError(f"user {user_id} not found") from e


def prepare_query_params(user_id, query):
    """Third level: prepare params - this will fail."""
    return {"value": user_id * 2 + 100 / (user_id - 500), "query": query}


def transform_user_data(data):
    return data


def main():
    colorline.load(include_stacktraces=True, stack_limit=5)
    logging.getLogger().setLevel(logging.DEBUG)
    log.debug("Starting up")
    log.info("Fetching user", extra={"user_id": 500})
    log.warning("Cache is cold")
    try:
        process_user_data(500)
    except LookupError:
        log.exception("Request failed")
    log.critical("Giving up")

    # Levels without a stdlib counterpart, rendered directly
    formatter = colorline.ColoredLineFormatter()
    for level in (colorline.Level.NOTICE, colorline.Level.ALERT, colorline.Level.EMERGENCY):
        print(formatter.format(colorline.LogRecord(level, level.name.title())), end="")


if __name__ == "__main__":
    main()
