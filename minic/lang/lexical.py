"""Lexical analysis for the minic language. Turns source text into Tokens, one at a time, for the parser in grammar.py.

Tokens can be loosely defined as follows (rules are tried in this order at every position; the longest match wins
and, between matches of equal length, the earlier rule wins):

```
TYPE       ::= "int" | "void" | "char" | "float" | "double"
IF         ::= "if"
ELSE       ::= "else"
WHILE      ::= "while"
RETURN     ::= "return"
IDENTIFIER ::= [A-Za-z_][A-Za-z0-9_]*   ; "integer" is an IDENTIFIER, "int" is a TYPE
NUMBER     ::= [0-9]+                   ; no sign, no decimal point, no exponent
STRING     ::= '"' [^"]* '"'            ; no escapes, may span lines
ASSIGN     ::= "="
SEMICOLON  ::= ";"
COMMA      ::= ","
LBRACE     ::= "{"
RBRACE     ::= "}"
LPAREN     ::= "("
RPAREN     ::= ")"
OP         ::= "+" | "-" | "*" | "/"    ; the parser never looks at which operator it was

<comment>  ::= "/*" <char>* "*/" | "//" <char>* <newline>
<space>    ::= " " | "\t" | "\r" | "\n"
```

Comments and whitespace produce no Token. Any other character is dropped without an error: the lexer never fails.
"""

import enum
import logging
import re
from dataclasses import dataclass


logger = logging.getLogger(__name__)


class TokenKind(enum.Enum):
    """Kinds of Tokens. Values are used in messages and reprs."""
    TYPE = "type"
    IDENTIFIER = "identifier"
    NUMBER = "number"
    STRING = "string"
    SEMICOLON = "';'"
    LBRACE = "'{'"
    RBRACE = "'}'"
    LPAREN = "'('"
    RPAREN = "')'"
    ASSIGN = "'='"
    OP = "operator"
    IF = "'if'"
    ELSE = "'else'"
    WHILE = "'while'"
    RETURN = "'return'"
    COMMA = "','"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """Smallest classified unit of source text. line and column are 1-based and point at the first character."""
    kind: TokenKind
    lexeme: str
    line: int
    column: int

    @property
    def end(self):
        """(line, column) just past the last character of this Token. Strings may span lines."""
        newlines = self.lexeme.count("\n")
        if newlines:
            return self.line + newlines, len(self.lexeme) - self.lexeme.rfind("\n")
        return self.line, self.column + len(self.lexeme)

    def __repr__(self):
        return f"Token({self.kind.name}, {self.lexeme!r}, {self.line}:{self.column})"


class Lexer:
    """Produces Tokens from source text on demand. Iterating over a Lexer yields every Token, ending with exactly one
    EOF Token.
    """
    # (kind, pattern): kind None means the match is discarded
    RULES = [
        (TokenKind.TYPE, re.compile(r"int|void|char|float|double")),
        (TokenKind.IF, re.compile(r"if")),
        (TokenKind.ELSE, re.compile(r"else")),
        (TokenKind.WHILE, re.compile(r"while")),
        (TokenKind.RETURN, re.compile(r"return")),
        (TokenKind.IDENTIFIER, re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
        (TokenKind.NUMBER, re.compile(r"[0-9]+")),
        (TokenKind.STRING, re.compile(r'"[^"]*"')),
        (TokenKind.ASSIGN, re.compile(r"=")),
        (TokenKind.SEMICOLON, re.compile(r";")),
        (TokenKind.COMMA, re.compile(r",")),
        (TokenKind.LBRACE, re.compile(r"\{")),
        (TokenKind.RBRACE, re.compile(r"\}")),
        (TokenKind.LPAREN, re.compile(r"\(")),
        (TokenKind.RPAREN, re.compile(r"\)")),
        (TokenKind.OP, re.compile(r"[+\-*/]")),
        (None, re.compile(r"/\*.*?\*/", re.DOTALL)),  # block comment
        (None, re.compile(r"//[^\n]*")),             # line comment
        (None, re.compile(r"[ \t\r\n]+")),           # whitespace
    ]

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.discarded = 0  # number of unrecognized characters dropped so far

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def next_token(self):
        """Returns the next Token, or an EOF Token once the source is exhausted (and on every call after that)."""
        while self.pos < len(self.source):
            line, column = self.line, self.column
            match = self._longest_match()

            if match is None:
                # unrecognized character: skip it and keep going
                char = self.source[self.pos]
                logger.debug("discarding unrecognized character %r at %d:%d", char, line, column)
                self.discarded += 1
                self._consume(char)
                continue

            kind, lexeme = match
            self._consume(lexeme)
            if kind is not None:
                return Token(kind, lexeme, line, column)

        return Token(TokenKind.EOF, "", self.line, self.column)

    def _longest_match(self):
        """Returns (kind, lexeme) of the longest rule match at self.pos, earliest rule first on ties. None if no rule
        matches.
        """
        best = None
        for kind, pattern in Lexer.RULES:
            match = pattern.match(self.source, self.pos)
            if match and match.end() > self.pos and (best is None or len(match.group()) > len(best[1])):
                best = (kind, match.group())
        return best

    def _consume(self, text):
        """Advances the read position past text, keeping line and column up to date."""
        self.pos += len(text)

        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)


def tokenize(source):
    """Returns the list of Tokens in source, including the trailing EOF Token."""
    return list(Lexer(source))
