"""
myalang: off-side-rule indentation preprocessor for the MYA language.
"""

from myalang.errors import MYAError, MYAParseError
from myalang.main import MYA
from myalang.parser import parse
from myalang.preprocessor import (
    Diagnostic,
    IndentationPreprocessor,
    ScopeInfo,
    Token,
    TokenKind,
)
from myalang.scopes import ScopeLedger
from myalang.token_stream import MYAIndentedLexer, TokenStreamAdapter

__version__ = "0.1.0"

__all__ = [
    "MYA",
    "Diagnostic",
    "IndentationPreprocessor",
    "MYAError",
    "MYAIndentedLexer",
    "MYAParseError",
    "ScopeInfo",
    "ScopeLedger",
    "Token",
    "TokenKind",
    "TokenStreamAdapter",
    "parse",
]
