import unittest

from minic.lang.lexical import Lexer, Token, TokenKind, tokenize


def kinds(source):
    return [token.kind for token in tokenize(source)]


class LexerTestCase(unittest.TestCase):

    def test_keywords(self):
        cases = {
            "int": TokenKind.TYPE,
            "void": TokenKind.TYPE,
            "char": TokenKind.TYPE,
            "float": TokenKind.TYPE,
            "double": TokenKind.TYPE,
            "if": TokenKind.IF,
            "else": TokenKind.ELSE,
            "while": TokenKind.WHILE,
            "return": TokenKind.RETURN,
        }
        for case, kind in cases.items():
            self.assertEqual([kind, TokenKind.EOF], kinds(case), case)

    def test_identifiers(self):
        should_pass = ["x", "_tmp", "main", "integer", "int2", "iffy", "returns", "Double", "a_1_b"]
        for case in should_pass:
            tokens = tokenize(case)
            self.assertEqual(TokenKind.IDENTIFIER, tokens[0].kind, case)
            self.assertEqual(case, tokens[0].lexeme, case)

    def test_literals(self):
        cases = {
            "0": (TokenKind.NUMBER, "0"),
            "12345": (TokenKind.NUMBER, "12345"),
            '"hello"': (TokenKind.STRING, '"hello"'),
            '""': (TokenKind.STRING, '""'),
            '"a\nb"': (TokenKind.STRING, '"a\nb"'),
            '"/* not a comment */"': (TokenKind.STRING, '"/* not a comment */"'),
        }
        for case, (kind, lexeme) in cases.items():
            token = tokenize(case)[0]
            self.assertEqual((kind, lexeme), (token.kind, token.lexeme), case)

    def test_number_has_no_fraction(self):
        self.assertEqual([TokenKind.NUMBER, TokenKind.NUMBER, TokenKind.EOF], kinds("3.14"))
        self.assertEqual([TokenKind.OP, TokenKind.NUMBER, TokenKind.EOF], kinds("-1"))

    def test_punctuation_and_operators(self):
        expected = [
            TokenKind.ASSIGN, TokenKind.SEMICOLON, TokenKind.COMMA, TokenKind.LBRACE, TokenKind.RBRACE,
            TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.OP, TokenKind.OP, TokenKind.OP, TokenKind.OP, TokenKind.EOF,
        ]
        self.assertEqual(expected, kinds("= ; , { } ( ) + - * /"))

    def test_comments_and_whitespace(self):
        should_be_empty = ["", " \t\r\n", "// line comment", "/* block */", "/* multi\nline\n*/", "/**/"]
        for case in should_be_empty:
            self.assertEqual([TokenKind.EOF], kinds(case), repr(case))

        self.assertEqual([TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF], kinds("a // b\nc"))
        self.assertEqual([TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF], kinds("a /* b */ c /* d */"))
        self.assertEqual([TokenKind.NUMBER, TokenKind.OP, TokenKind.NUMBER, TokenKind.EOF], kinds("1 / 2"))

    def test_unterminated_comment_is_operators(self):
        self.assertEqual([TokenKind.OP, TokenKind.OP, TokenKind.IDENTIFIER, TokenKind.EOF], kinds("/* x"))

    def test_unknown_characters_are_discarded(self):
        should_be_empty = ["@", "#$%^&", "!", "<>", "\\", "`~?", "[]", ":."]
        for case in should_be_empty:
            self.assertEqual([TokenKind.EOF], kinds(case), case)

        self.assertEqual([TokenKind.IDENTIFIER, TokenKind.IDENTIFIER, TokenKind.EOF], kinds("a@b"))

        lexer = Lexer("x # y $")
        list(lexer)
        self.assertEqual(2, lexer.discarded)

    def test_unterminated_string(self):
        # the lone quote is dropped and lexing carries on after it
        self.assertEqual([TokenKind.IDENTIFIER, TokenKind.EOF], kinds('"abc'))

    def test_positions(self):
        tokens = tokenize("int main()\n{\n  return 0; /* a\nb */ x\n}")
        positions = [(token.lexeme, token.line, token.column) for token in tokens]
        expected = [
            ("int", 1, 1), ("main", 1, 5), ("(", 1, 9), (")", 1, 10), ("{", 2, 1), ("return", 3, 3), ("0", 3, 10),
            (";", 3, 11), ("x", 4, 6), ("}", 5, 1), ("", 5, 2),
        ]
        self.assertEqual(expected, positions)

    def test_token_end(self):
        cases = {
            Token(TokenKind.IDENTIFIER, "main", 1, 5): (1, 9),
            Token(TokenKind.STRING, '"a\nbc"', 1, 14): (2, 4),
            Token(TokenKind.STRING, '"\n\n"', 3, 2): (5, 2),
            Token(TokenKind.EOF, "", 4, 7): (4, 7),
        }
        for token, end in cases.items():
            self.assertEqual(end, token.end, token)

        tokens = tokenize('x = "a\nbc" y')
        self.assertEqual((tokens[3].line, tokens[3].column - 1), tokens[2].end)

    def test_eof_is_repeated(self):
        lexer = Lexer("x")
        self.assertEqual(TokenKind.IDENTIFIER, lexer.next_token().kind)
        for __ in range(3):
            self.assertEqual(TokenKind.EOF, lexer.next_token().kind)

    def test_tokens_are_immutable(self):
        token = Token(TokenKind.NUMBER, "1", 1, 1)
        with self.assertRaises(AttributeError):
            token.lexeme = "2"


if __name__ == '__main__':
    unittest.main()
