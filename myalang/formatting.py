"""
Pretty-printing helpers for preprocessed tokens and the scope ledger.
"""

from typing import Iterable

from myalang.preprocessor import ScopeInfo, Token, TokenKind

TOKEN_LABELS = {
    TokenKind.INDENT: "[INDENT]",
    TokenKind.DEDENT: "[DEDENT]",
    TokenKind.NEWLINE: "[NEWLINE]",
    TokenKind.CODE: "[CODE]",
    TokenKind.END_OF_FILE: "[EOF]",
}


def format_tokens(tokens: Iterable[Token]) -> str:
    """Format tokens one per line, e.g. ``Line 3: [CODE] let x = 1;``."""
    lines = []
    for token in tokens:
        label = TOKEN_LABELS[token.kind]
        if token.kind is TokenKind.CODE:
            label = f"{label} {token.payload}"
        lines.append(f"Line {token.line}: {label}")
    return "\n".join(lines)


def format_scope_ledger(ledger: Iterable[ScopeInfo]) -> str:
    lines = ["=== Scope Ledger (Lateral Navigation Map) ==="]
    for i, scope in enumerate(ledger):
        lines.append(
            f"Scope {i}: Level={scope.indent_level}, Line={scope.line}, Type={scope.scope_type}"
        )
    return "\n".join(lines)


def render_canonical(tokens: Iterable[Token], indent_width: int = 4) -> str:
    """
    Serialize a token stream back to source text.

    Every CODE payload is indented by indent_width spaces per open scope, so
    preprocessing the result again gives the same token kinds and payloads.
    """
    if indent_width < 1:
        raise ValueError(f"indent_width must be positive, got {indent_width!r}")

    depth = 0
    lines = []
    for token in tokens:
        if token.kind is TokenKind.INDENT:
            depth += 1
        elif token.kind is TokenKind.DEDENT:
            depth -= 1
        elif token.kind is TokenKind.CODE:
            lines.append(" " * (indent_width * depth) + token.payload)

    return "".join(line + "\n" for line in lines)
