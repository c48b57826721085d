"""
Tokenizer for TF-IDF text processing.

Tokenization rules (maximal munch, one term per step):
1. Skip whitespace
2. Letter first: take letters and digits, emit the run upper-cased
3. Digit first: take digits only, emit the run as is
4. Anything else: emit that single character as is

No stopwords, no stemming, no filtering: punctuation characters are terms too.
"""

from typing import Iterator, List


class Lexer:
    """
    Lazy term iterator over a single input string.

    The cursor only moves forward, so a Lexer cannot be restarted.
    Create a new one to tokenize the same text again.

    Example:
        >>> list(Lexer("abc123 (x)"))
        ['ABC123', '(', 'X', ')']
    """

    def __init__(self, content: str):
        self.content = content
        self.pos = 0

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        term = self.next_token()
        if term is None:
            raise StopIteration
        return term

    def _trim_left(self):
        while self.pos < len(self.content) and self.content[self.pos].isspace():
            self.pos += 1

    def _chop(self, size: int) -> str:
        token = self.content[self.pos:self.pos + size]
        self.pos += size
        return token

    def _chop_while(self, predicate) -> str:
        end = self.pos
        while end < len(self.content) and predicate(self.content[end]):
            end += 1
        return self._chop(end - self.pos)

    def next_token(self):
        """
        Consume and return the next term, or None once input is exhausted.
        """
        self._trim_left()
        if self.pos >= len(self.content):
            return None

        first = self.content[self.pos]
        if first.isalpha():
            return self._chop_while(str.isalnum).upper()
        if first.isnumeric():
            return self._chop_while(str.isnumeric)

        return self._chop(1)


def tokenize(text: str) -> List[str]:
    """
    Tokenize text into a list of terms.

    Args:
        text: Input text (any string, including empty)

    Returns:
        Terms in input order, duplicates kept

    Examples:
        >>> tokenize("the cat sat")
        ['THE', 'CAT', 'SAT']

        >>> tokenize("123abc")
        ['123', 'ABC']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    return list(Lexer(text))
