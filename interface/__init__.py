import logging

# The full-screen UI owns the terminal; log records go nowhere unless main() adds a file handler.
logging.getLogger("todo_tui").addHandler(logging.NullHandler())
