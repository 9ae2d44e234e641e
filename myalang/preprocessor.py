"""
Indentation Preprocessor for MYA

This preprocessor turns leading whitespace into explicit INDENT and DEDENT
tokens, similar to Python's indentation handling, and records every opened
scope in a ledger keyed by indentation column, line and scope category.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

INDENT_TEXT = "<INDENT>"
DEDENT_TEXT = "<DEDENT>"
EOF_TEXT = "<EOF>"
NEWLINE_TEXT = "\n"

COMMENT_PREFIX = "$"

# Ordered prefix rules used to classify a scope, first match wins.
SCOPE_RULES = (
    ("fn ", "function"),
    ("Main", "function"),
    ("render", "render"),
    ("asm", "asm"),
    ("struct", "struct"),
    ("if ", "conditional"),
    ("for ", "loop"),
    ("filter", "filter"),
)
DEFAULT_SCOPE = "block"


class TokenKind(enum.Enum):
    INDENT = "INDENT"
    DEDENT = "DEDENT"
    NEWLINE = "NEWLINE"
    CODE = "CODE"
    END_OF_FILE = "END_OF_FILE"


@dataclass(frozen=True)
class Token:
    """A single preprocessed token."""

    kind: TokenKind
    payload: str
    line: int
    column: int = 0


@dataclass(frozen=True)
class ScopeInfo:
    """One scope opening, recorded for lateral navigation."""

    indent_level: int
    line: int
    scope_type: str = DEFAULT_SCOPE


@dataclass(frozen=True)
class Diagnostic:
    line: int
    message: str
    kind: str = "dedent-misalignment"


def classify_scope(line: str) -> str:
    """Return the coarse scope category of a scope-opening line."""
    trimmed = line.lstrip(" \t")
    for prefix, scope_type in SCOPE_RULES:
        if trimmed.startswith(prefix):
            return scope_type
    return DEFAULT_SCOPE


def is_blank_or_comment(line: str) -> bool:
    content = line.lstrip(" \t")
    return not content or content.startswith(COMMENT_PREFIX)


def split_lines(source: str) -> List[str]:
    """
    Split source text into physical lines.

    A trailing newline terminates the last line instead of starting an
    empty one, and a trailing carriage return on each line is dropped.
    """
    lines = source.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class IndentationPreprocessor:
    """Preprocessor that adds INDENT/DEDENT tokens based on indentation."""

    def __init__(
        self,
        tab_width: int = 4,
        emit_newlines: bool = False,
        warn_mixed_indentation: bool = False,
    ):
        if isinstance(tab_width, bool) or not isinstance(tab_width, int) or tab_width < 1:
            raise ValueError(f"tab_width must be a positive integer, got {tab_width!r}")

        self.tab_width = tab_width
        self.emit_newlines = emit_newlines
        self.warn_mixed_indentation = warn_mixed_indentation

        self.indent_stack = [0]
        self._tokens: List[Token] = []
        self._ledger: List[ScopeInfo] = []
        self._diagnostics: List[Diagnostic] = []

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return tuple(self._tokens)

    @property
    def scope_ledger(self) -> Tuple[ScopeInfo, ...]:
        return tuple(self._ledger)

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        """Non-fatal problems found by the last call to process()."""
        return tuple(self._diagnostics)

    def measure_indent(self, line: str) -> int:
        """Width of the leading whitespace, tabs counted as tab_width spaces."""
        width = 0
        for char in line:
            if char == " ":
                width += 1
            elif char == "\t":
                width += self.tab_width
            else:
                break
        return width

    def process(self, source: str) -> Tuple[Tuple[Token, ...], Tuple[ScopeInfo, ...]]:
        """
        Process source text into a token stream and a scope ledger.

        Args:
            source: Raw MYA source text

        Returns:
            A (tokens, ledger) pair. The token stream is always balanced and
            ends with exactly one END_OF_FILE token, even when indentation
            is malformed.
        """
        self.indent_stack = [0]
        self._tokens = []
        self._ledger = []
        self._diagnostics = []

        previous_indent = 0
        header: Optional[str] = None
        current_line = 1

        for line in split_lines(source):
            # Blank lines and comments are transparent to indentation
            if is_blank_or_comment(line):
                current_line += 1
                continue

            current_indent = self.measure_indent(line)
            content = line.lstrip(" \t")

            if self.warn_mixed_indentation:
                self._check_mixed(line[: len(line) - len(content)], current_line)

            if current_indent > previous_indent:
                # Entering a new scope, typed after the line that opened it
                self.indent_stack.append(current_indent)
                self._emit(TokenKind.INDENT, INDENT_TEXT, current_line)
                scope_type = classify_scope(header if header is not None else content)
                self._ledger.append(ScopeInfo(current_indent, current_line, scope_type))
            elif current_indent < previous_indent:
                # Leaving one or more scopes
                while self.indent_stack[-1] > current_indent:
                    self.indent_stack.pop()
                    self._emit(TokenKind.DEDENT, DEDENT_TEXT, current_line)

                if self.indent_stack[-1] != current_indent:
                    self._report(
                        Diagnostic(
                            current_line,
                            f"Indentation error at line {current_line}: dedent to "
                            f"column {current_indent} does not match any enclosing "
                            f"level (nearest is {self.indent_stack[-1]})",
                        )
                    )

            self._emit(TokenKind.CODE, content, current_line, current_indent)
            if self.emit_newlines:
                self._emit(
                    TokenKind.NEWLINE,
                    NEWLINE_TEXT,
                    current_line,
                    current_indent + len(content),
                )

            header = content
            previous_indent = current_indent
            current_line += 1

        # Close all remaining scopes
        while len(self.indent_stack) > 1:
            self.indent_stack.pop()
            self._emit(TokenKind.DEDENT, DEDENT_TEXT, current_line)

        self._emit(TokenKind.END_OF_FILE, EOF_TEXT, current_line)

        logger.debug(
            "Preprocessed %d tokens, %d scopes, %d diagnostics",
            len(self._tokens),
            len(self._ledger),
            len(self._diagnostics),
        )
        return self.tokens, self.scope_ledger

    def _emit(self, kind: TokenKind, payload: str, line: int, column: int = 0):
        self._tokens.append(Token(kind, payload, line, column))

    def _report(self, diagnostic: Diagnostic):
        self._diagnostics.append(diagnostic)
        logger.warning(diagnostic.message)

    def _check_mixed(self, prefix: str, line: int):
        if " " in prefix and "\t" in prefix:
            self._report(
                Diagnostic(
                    line,
                    f"Mixed tabs and spaces in indentation at line {line}",
                    "mixed-indentation",
                )
            )
