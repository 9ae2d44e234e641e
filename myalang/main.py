import logging

from myalang.formatting import render_canonical
from myalang.parser import outline, parse
from myalang.preprocessor import IndentationPreprocessor
from myalang.scopes import ScopeLedger

logger = logging.getLogger(__name__)

EXAMPLE_SOURCE = """
$ MYA Language Example
$ Demonstrates recursive linear and lateral parsing

Main() fn:
    let x: int = 10;
    let y: int = 20;
    print "Starting MYA program";

    filter x > 0 pass:
        print "X is positive";

    for i in range 0 to 5:
        print "Iteration:", i;
        multiply(x, i);

fn multiply(a: int, b: int) -> int:
    let result: int = a * b;
    print "Result:", result;
    return result;

struct Point:
    x: int
    y: int
    z: int
end

render:
    viewport: 800x600
    camera:
        position: 0, 0, 10
        target: 0, 0, 0

    object: cube
        position: 0, 0, 0
        scale: 1, 1, 1
end

asm:
    mov eax, 0
    mov ebx, 1
    add eax, ebx
end
"""


class MYA:
    """MYA source file, preprocessed into tokens and a scope ledger."""

    def __init__(self, from_file=None, from_string=None, tab_width=4):
        if (from_file is None) == (from_string is None):
            raise ValueError("exactly one of from_file or from_string is required")

        self._file_path = from_file
        self._tab_width = tab_width
        self._preprocessor = IndentationPreprocessor(tab_width=tab_width)
        self._tree = None

        if from_file is not None:
            logger.info("Reading source file: %s", from_file)
            with open(from_file, "r", encoding="utf-8") as f:
                self._source = f.read()
        else:
            self._source = from_string

        self._tokens, ledger = self._preprocessor.process(self._source)
        self._ledger = ScopeLedger(ledger)

    @property
    def source(self):
        return self._source

    @property
    def tokens(self):
        return self._tokens

    @property
    def scope_ledger(self):
        return self._ledger

    @property
    def diagnostics(self):
        """Non-fatal indentation problems found while preprocessing."""
        return self._preprocessor.diagnostics

    @property
    def tree(self):
        """Lark parse tree, built on first access."""
        if self._tree is None:
            self._tree = parse(self._source, tab_width=self._tab_width)
        return self._tree

    def outline(self):
        """Block-opening statements as (header, line, depth) tuples."""
        return outline(self.tree)

    def to_canonical(self, indent_width=4):
        """Re-indent the source with indent_width spaces per scope."""
        return render_canonical(self._tokens, indent_width=indent_width)
