"""Recursive-descent recognizer for the minic language. Nothing is built: a rule either consumes a valid prefix of the
Token stream or raises a GenericException naming what it expected. There is no backtracking, every choice is made by
looking at the kind of the current Token only.

The grammar, with terminals in quotes and TYPE/IDENT/NUMBER/STRING/OP being Token kinds (see lexical.py):

```
<program>     ::= <func_list> | ε                       ; ε only when input is empty
<func_list>   ::= <func>*                              ; continues while the lookahead is a TYPE
<func>        ::= TYPE IDENT "(" <params> ")" <block>
<params>      ::= ε | <param_list>                     ; ε when the lookahead is ")"
<param_list>  ::= TYPE IDENT ("," TYPE IDENT)*
<block>       ::= "{" <stmt_list> "}"
<stmt_list>   ::= <stmt>*                              ; continues until "}" or end of input
<stmt>        ::= TYPE IDENT ("=" <expr>)? <call_suffix>? ";"
                | "return" <expr> <call_suffix>? ";"
                | IDENT ("(" <arg_list> ")" | "=" <expr>) ";"
                | "if" "(" <expr> ")" <block> ("else" <block>)?
                | "while" "(" <expr> ")" <block>
                | <block>
<call_suffix> ::= "(" <expr> ("," <expr>)* ")"         ; so `int x(5);` and `return f (a, b);` are accepted
<arg_list>    ::= <expr> ("," <expr>)*
<expr>        ::= <term> (OP <term>)*                  ; flat chain, all operators are equal
<term>        ::= IDENT | "return" | NUMBER | STRING | "(" <expr> ")"
```

Whatever follows the last function at top level is not looked at, unless the Parser is strict.
"""

import logging
import sys
from contextlib import contextmanager

from minic.lang.error import GenericException
from minic.lang.lexical import Lexer, Token, TokenKind


logger = logging.getLogger(__name__)

# every nested block costs three frames (block, stmt_list, stmt) and every nested parenthesis two (term, expr)
RECURSION_LIMIT = 20000


@contextmanager
def recursion_limit(limit=RECURSION_LIMIT):
    """Raises the interpreter's recursion limit to at least limit while the block runs."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class Parser:
    """Holds the single lookahead Token and implements one method per grammar rule."""

    def __init__(self, tokens, strict=False):
        """tokens is any iterable of Tokens (usually a Lexer). If strict, a program must end after its last function."""
        self.strict = strict
        self.consumed = 0

        self._tokens = iter(tokens)
        self._current = None
        self.advance()

    def current(self):
        """The lookahead: the single next unconsumed Token."""
        return self._current

    def advance(self):
        """Consumes the lookahead and replaces it with the next Token. Once EOF is reached it stays the lookahead."""
        previous = self._current
        if previous is not None and previous.kind is TokenKind.EOF:
            return previous

        self._current = next(self._tokens, None)
        if self._current is None:
            line, column = previous.end if previous else (1, 1)
            self._current = Token(TokenKind.EOF, "", line, column)

        if previous is not None:
            self.consumed += 1
        return previous

    def peek(self, *kinds):
        """Whether or not the lookahead is of one of kinds."""
        return self._current.kind in kinds

    def check(self, kind):
        """Consumes the lookahead if it is of kind. Returns whether or not it was consumed."""
        if self.peek(kind):
            self.advance()
            return True
        return False

    def expect(self, kind, msg):
        """Consumes the lookahead, raising a GenericException with msg if it is not of kind."""
        if not self.check(kind):
            raise GenericException(msg, self._current)

    def program(self):
        if self.peek(TokenKind.EOF):
            return

        with recursion_limit():
            self.func_list()

        if self.strict and not self.peek(TokenKind.EOF):
            raise GenericException("expected end of input", self._current)
        logger.debug("program accepted after %d tokens", self.consumed)

    def statements(self):
        """Recognizes a bare statement list spanning the whole input, e.g. the body of a function without its braces."""
        with recursion_limit():
            self.stmt_list()

        if not self.peek(TokenKind.EOF):
            raise GenericException("expected end of input", self._current)
        logger.debug("statements accepted after %d tokens", self.consumed)

    def func_list(self):
        while self.peek(TokenKind.TYPE):
            self.func()

    def func(self):
        self.expect(TokenKind.TYPE, "expected return type")
        self.expect(TokenKind.IDENTIFIER, "expected function name")
        self.expect(TokenKind.LPAREN, "expected '('")
        self.params()
        self.expect(TokenKind.RPAREN, "expected ')'")
        self.block()

    def params(self):
        if self.peek(TokenKind.RPAREN):
            return
        self.param_list()

    def param_list(self):
        self.expect(TokenKind.TYPE, "expected type")
        self.expect(TokenKind.IDENTIFIER, "expected identifier")

        while self.check(TokenKind.COMMA):
            self.expect(TokenKind.TYPE, "expected type")
            self.expect(TokenKind.IDENTIFIER, "expected identifier")

    def block(self):
        self.expect(TokenKind.LBRACE, "expected '{'")
        self.stmt_list()
        self.expect(TokenKind.RBRACE, "missing '}'")

    def stmt_list(self):
        while not self.peek(TokenKind.RBRACE, TokenKind.EOF):
            self.stmt()

    def stmt(self):
        """Dispatches on the lookahead to one of the six statement forms."""
        if self.check(TokenKind.TYPE):
            self.expect(TokenKind.IDENTIFIER, "expected identifier in declaration")
            if self.check(TokenKind.ASSIGN):
                self.expr()
            self.call_suffix()
            self.expect(TokenKind.SEMICOLON, "missing ';'")

        elif self.check(TokenKind.RETURN):
            self.expr()
            self.call_suffix()
            self.expect(TokenKind.SEMICOLON, "missing ';'")

        elif self.check(TokenKind.IDENTIFIER):
            if self.check(TokenKind.LPAREN):
                self.arg_list()
                self.expect(TokenKind.RPAREN, "expected ')'")
            else:
                self.expect(TokenKind.ASSIGN, "expected '='")
                self.expr()
            self.expect(TokenKind.SEMICOLON, "missing ';'")

        elif self.check(TokenKind.IF):
            self.condition()
            self.block()
            if self.check(TokenKind.ELSE):
                self.block()

        elif self.check(TokenKind.WHILE):
            self.condition()
            self.block()

        elif self.peek(TokenKind.LBRACE):
            self.block()

        else:
            raise GenericException("unknown statement", self._current)

    def condition(self):
        """Parenthesized expression after 'if' and 'while'."""
        self.expect(TokenKind.LPAREN, "expected '('")
        self.expr()
        self.expect(TokenKind.RPAREN, "expected ')'")

    def call_suffix(self):
        """Optional "(" <arg_list> ")" after a declaration or a return expression."""
        if self.check(TokenKind.LPAREN):
            self.arg_list()
            self.expect(TokenKind.RPAREN, "expected ')'")

    def arg_list(self):
        self.expr()
        while self.check(TokenKind.COMMA):
            self.expr()

    def expr(self):
        self.term("expected expression")
        while self.check(TokenKind.OP):
            self.term("expected term")

    def term(self, msg):
        """Consumes one term, raising a GenericException with msg if the lookahead cannot start one."""
        if self.check(TokenKind.IDENTIFIER) or self.check(TokenKind.RETURN):
            return
        if self.check(TokenKind.NUMBER) or self.check(TokenKind.STRING):
            return

        if self.check(TokenKind.LPAREN):
            self.expr()
            self.expect(TokenKind.RPAREN, "expected ')'")
            return

        raise GenericException(msg, self._current)


def validate(source, strict=False):
    """Checks that source is a valid minic program. Returns True, or raises a GenericException on the first error."""
    Parser(Lexer(source), strict=strict).program()
    return True


def validate_statements(source):
    """Checks that source is a valid list of minic statements. Returns True, or raises a GenericException on the first
    error.
    """
    Parser(Lexer(source)).statements()
    return True
