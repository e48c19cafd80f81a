import io
import unittest

from glox.lexer import LexicalError, Scanner, print_tokens, scan
from glox.tokens import KEYWORDS, Token, TokenType


class ScannerTestCase(unittest.TestCase):

    def test_single_tokens(self):
        cases = {
            "(": TokenType.LEFT_PAREN,
            ")": TokenType.RIGHT_PAREN,
            "{": TokenType.LEFT_BRACE,
            "}": TokenType.RIGHT_BRACE,
            ",": TokenType.COMMA,
            ".": TokenType.DOT,
            "-": TokenType.MINUS,
            "+": TokenType.PLUS,
            ";": TokenType.SEMICOLON,
            "*": TokenType.STAR,
            "/": TokenType.SLASH,
            "!": TokenType.BANG,
            "=": TokenType.EQUAL,
            "<": TokenType.LESS,
            ">": TokenType.GREATER,
            "!=": TokenType.BANG_EQUAL,
            "==": TokenType.EQUAL_EQUAL,
            "<=": TokenType.LESS_EQUAL,
            ">=": TokenType.GREATER_EQUAL,
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                tokens = scan(source)
                self.assertEqual(2, len(tokens))
                self.assertEqual(expected, tokens[0].type)
                self.assertEqual(source, tokens[0].lexeme)
                self.assertIsNone(tokens[0].literal)
                self.assertEqual(TokenType.EOF, tokens[-1].type)

    def test_only_eof(self):
        for source in ["", "\t\n\r\f ", "// this is a comment", "   // comment\n\n"]:
            with self.subTest(source=source):
                tokens = scan(source)
                self.assertEqual([TokenType.EOF], [t.type for t in tokens])

    def test_comment_runs_to_end_of_line(self):
        tokens = scan("1 // two + three\n4")
        self.assertEqual([TokenType.NUMBER, TokenType.NUMBER, TokenType.EOF], [t.type for t in tokens])
        self.assertEqual(1, tokens[0].line)
        self.assertEqual(2, tokens[1].line)

    def test_slash_is_not_comment(self):
        tokens = scan("6 / 3")
        self.assertEqual([TokenType.NUMBER, TokenType.SLASH, TokenType.NUMBER, TokenType.EOF],
                         [t.type for t in tokens])

    def test_maximal_munch(self):
        cases = {
            "!==": [TokenType.BANG_EQUAL, TokenType.EQUAL],
            "===": [TokenType.EQUAL_EQUAL, TokenType.EQUAL],
            "<>=": [TokenType.LESS, TokenType.GREATER_EQUAL],
            "! =": [TokenType.BANG, TokenType.EQUAL],
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(expected + [TokenType.EOF], [t.type for t in scan(source)])

    def test_strings(self):
        tokens = scan('"abc"')
        self.assertEqual(2, len(tokens))
        self.assertEqual(Token(TokenType.STRING, '"abc"', "abc", 1), tokens[0])

        tokens = scan('"test-string-1" "test-string-2"\n   "test-string-3"')
        self.assertEqual(4, len(tokens))
        self.assertEqual(["test-string-1", "test-string-2", "test-string-3"], [t.literal for t in tokens[:3]])
        self.assertEqual([1, 1, 2], [t.line for t in tokens[:3]])

    def test_string_without_escapes(self):
        tokens = scan(r'"a\nb"')
        self.assertEqual(r"a\nb", tokens[0].literal)

    def test_multiline_string_counts_lines(self):
        tokens = scan('"one\ntwo"\n3')
        self.assertEqual("one\ntwo", tokens[0].literal)
        self.assertEqual(2, tokens[0].line)
        self.assertEqual(3, tokens[1].line)
        self.assertEqual(3, tokens[-1].line)

    def test_unterminated_string(self):
        should_raise = ['"abc', '"', '1 + "abc\ndef']
        for case in should_raise:
            with self.subTest(source=case):
                self.assertRaises(LexicalError, scan, case)

        with self.assertRaises(LexicalError) as ctx:
            scan('1\n"abc')
        self.assertEqual("Unterminated string.", ctx.exception.message)
        self.assertEqual(2, ctx.exception.line)
        self.assertEqual('"abc', ctx.exception.where)

    def test_numbers(self):
        tokens = scan("123.456")
        self.assertEqual(2, len(tokens))
        self.assertEqual(Token(TokenType.NUMBER, "123.456", 123.456, 1), tokens[0])

        tokens = scan("123 456.12\n666.77")
        self.assertEqual(4, len(tokens))
        self.assertEqual([123.0, 456.12, 666.77], [t.literal for t in tokens[:3]])
        self.assertTrue(all(isinstance(t.literal, float) for t in tokens[:3]))

    def test_number_dot_needs_digit(self):
        cases = {
            "123.": [TokenType.NUMBER, TokenType.DOT],
            ".5": [TokenType.DOT, TokenType.NUMBER],
            "1.2.3": [TokenType.NUMBER, TokenType.DOT, TokenType.NUMBER],
        }
        for source, expected in cases.items():
            with self.subTest(source=source):
                self.assertEqual(expected + [TokenType.EOF], [t.type for t in scan(source)])
        self.assertEqual(123.0, scan("123.")[0].literal)

    def test_keywords(self):
        for word, ttype in KEYWORDS.items():
            with self.subTest(word=word):
                tokens = scan(word)
                self.assertEqual(2, len(tokens))
                self.assertEqual(ttype, tokens[0].type)
                self.assertIsNone(tokens[0].literal)
        self.assertEqual(16, len(KEYWORDS))

    def test_identifiers(self):
        should_pass = ["x", "_", "orchid", "class_", "_while", "Print", "a1b2"]
        for case in should_pass:
            with self.subTest(source=case):
                tokens = scan(case)
                self.assertEqual(Token(TokenType.IDENTIFIER, case, case, 1), tokens[0])

    def test_unexpected_character(self):
        should_raise = ["@", "#", "1 + $", "é", "a & b"]
        for case in should_raise:
            with self.subTest(source=case):
                self.assertRaises(LexicalError, scan, case)

        with self.assertRaises(LexicalError) as ctx:
            scan("1 +\n\n  @")
        self.assertEqual(3, ctx.exception.line)
        self.assertEqual("@", ctx.exception.where)
        self.assertEqual("Error: Unexpected character '@'.\n\n\t3 | @", str(ctx.exception))

    def test_line_numbers(self):
        tokens = scan("1\n2\n\n4")
        self.assertEqual([1, 2, 4, 4], [t.line for t in tokens])

    def test_scanner_is_reusable(self):
        scanner = Scanner("1\n2")
        first = scanner.scan_tokens()
        self.assertEqual(first, scanner.scan_tokens())

    def test_exactly_one_eof(self):
        for source in ["", "1 + 2", "print \"x\";\n// end"]:
            with self.subTest(source=source):
                types = [t.type for t in scan(source)]
                self.assertEqual(1, types.count(TokenType.EOF))
                self.assertEqual(TokenType.EOF, types[-1])

    def test_print_tokens(self):
        out = io.StringIO()
        print_tokens(scan('print "hi";'), file=out)
        lines = out.getvalue().splitlines()
        self.assertEqual(6, len(lines))
        self.assertIn("PRINT", lines[2])
        self.assertIn("STRING", lines[3])
        self.assertIn("hi", lines[3])
        self.assertIn("EOF", lines[5])

    def test_token_repr(self):
        tok = scan("1")[0]
        self.assertEqual("Token(type=<TokenType.NUMBER: 'number'>, lexeme='1', literal=1.0, line=1)", str(tok))


if __name__ == '__main__':
    unittest.main()
