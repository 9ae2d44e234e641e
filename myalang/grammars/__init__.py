"""Lark grammars shipped with myalang."""

import os

GRAMMAR_PATH = os.path.join(os.path.dirname(__file__), "mya.lark")


def read_grammar(path: str = GRAMMAR_PATH) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
