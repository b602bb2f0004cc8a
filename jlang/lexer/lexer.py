"""
Jlang Lexer - turns a character stream into tokens, one at a time.

The lexer pulls characters from the input lazily and keeps exactly one
character of lookahead (`last_char`) between calls, so it works the same
on an in-memory string and on an interactive stdin.

Author: xwest
"""

import re
from io import StringIO
from typing import Iterator, List, TextIO, Union

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, LINE_TERMINATORS


# Longest prefix a C strtod() would accept for a run of digits and dots
NUMBER_PREFIX_PATTERN = re.compile(r'\d+\.?\d*|\.\d+')


def _is_alpha(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _is_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def _is_digit(char: str) -> bool:
    return char.isascii() and char.isdigit()


def parse_number_prefix(text: str) -> float:
    """
    Parse the leading numeric part of `text`.

    Malformed numerals degrade instead of failing: "1.2.3" is 1.2 and
    a lone "." is 0.0.
    """
    match = NUMBER_PREFIX_PATTERN.match(text)
    if not match:
        return 0.0
    return float(match.group(0))


class Lexer:
    """
    Jlang lexical analyzer.

    Call `next_token()` repeatedly, or iterate `tokens()`. End of input
    is reported as an EOF token on every call once it has been reached.
    """

    def __init__(self, source: Union[str, TextIO], filename: str = "<stdin>"):
        """
        Initialize the lexer.

        Args:
            source: Source text, or a text stream read one character at a time
            filename: Name of the source for error reporting
        """
        self.stream = StringIO(source) if isinstance(source, str) else source
        self.filename = filename

        # Position of `last_char`; the initial blank is virtual
        self.line = 1
        self.column = 0
        self.offset = -1
        self.last_char = ' '

    def next_token(self) -> Token:
        """Read and return the next token."""
        while True:
            while self.last_char.isspace():
                self._advance()

            location = self._location()

            if _is_alpha(self.last_char):
                return self._tokenize_identifier_or_keyword(location)

            if _is_digit(self.last_char) or self.last_char == '.':
                return self._tokenize_number(location)

            if self.last_char == '#':
                self._skip_comment()
                continue

            if self.last_char == '':
                return Token(TokenType.EOF, '', None, location)

            char = self.last_char
            self._advance()
            return Token(TokenType.CHAR, char, None, location)

    def tokens(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _tokenize_identifier_or_keyword(self, location: SourceLocation) -> Token:
        chars = [self.last_char]
        self._advance()
        while _is_alnum(self.last_char):
            chars.append(self.last_char)
            self._advance()

        lexeme = ''.join(chars)
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None
        return Token(token_type, lexeme, value, location)

    def _tokenize_number(self, location: SourceLocation) -> Token:
        chars = []
        while _is_digit(self.last_char) or self.last_char == '.':
            chars.append(self.last_char)
            self._advance()

        lexeme = ''.join(chars)
        return Token(TokenType.NUMBER, lexeme, parse_number_prefix(lexeme), location)

    def _skip_comment(self):
        """Discard a comment up to (not including) the line terminator."""
        while self.last_char != '' and self.last_char not in LINE_TERMINATORS:
            self._advance()

    def _advance(self):
        """Read the next character into `last_char`; '' once input ends."""
        if self.last_char == '':
            return
        if self.last_char == '\n':
            self.line += 1
            self.column = 0
        self.last_char = self.stream.read(1)
        self.column += 1
        self.offset += 1

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.line, self.column, self.offset)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Returns:
        List of tokens ending with a single EOF token
    """
    return list(Lexer(source, filename).tokens())


def tokenize_file(filepath: str) -> List[Token]:
    """Convenience function to tokenize a source file."""
    with open(filepath, 'r', encoding='utf-8') as f:
        return list(Lexer(f, filepath).tokens())
