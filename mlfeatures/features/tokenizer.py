"""
Tokenizers turning a text column into a column of term lists.

- `Tokenizer` lowercases the text and splits it on whitespace.
- `RegexTokenizer` splits on (or extracts matches of) a regular
  expression, optionally lowercasing and dropping short tokens.

The term lists are the input format of `HashingTF`.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional

from mlfeatures.features.base import ColumnTransformerBase


def _require_text(value: Any, column: Optional[str]) -> str:
    if not isinstance(value, str):
        raise ValueError(
            f"Column '{column}' must contain strings, got {type(value).__name__} ({value!r})."
        )
    return value


def _split_on(regex: "re.Pattern[str]", text: str) -> List[str]:
    """
    Text between successive matches of `regex`. Unlike re.split, the
    separators are never returned, even if the pattern has groups.
    Empty pieces (around leading/trailing separators) are kept; the
    caller filters them through min_token_length.
    """
    pieces = []
    start = 0
    for m in regex.finditer(text):
        pieces.append(text[start:m.start()])
        start = m.end()
    pieces.append(text[start:])
    return pieces


class Tokenizer(ColumnTransformerBase):
    """
    Lowercase a string column and split it into words on whitespace.

    Parameters
    ----------
    input_col : str
        Column holding the raw text.
    output_col : str
        Column receiving the list of tokens.
    """

    def __init__(self, input_col: Optional[str] = None, output_col: Optional[str] = None):
        self.input_col = input_col
        self.output_col = output_col

    def tokenize(self, text: str) -> List[str]:
        """Tokenize a single string."""
        return _require_text(text, self.input_col).lower().split()

    def _transform_cell(self, value: Any) -> List[str]:
        return self.tokenize(value)


class RegexTokenizer(ColumnTransformerBase):
    """
    Tokenizer driven by a regular expression.

    With `gaps=True` (default) the pattern describes the separators and
    the text is split on it. With `gaps=False` the pattern describes the
    tokens themselves and every match is returned.

    Parameters
    ----------
    input_col : str
        Column holding the raw text.
    output_col : str
        Column receiving the list of tokens.
    pattern : str
        Regular expression, default whitespace runs.
    gaps : bool
        Whether the pattern matches separators (True) or tokens (False).
    min_token_length : int
        Tokens shorter than this are dropped. Must be >= 0. With 0, split
        mode keeps the empty pieces around leading or trailing separators.
    to_lowercase : bool
        Lowercase the text before tokenizing.
    """

    def __init__(
        self,
        input_col: Optional[str] = None,
        output_col: Optional[str] = None,
        pattern: str = r"\s+",
        gaps: bool = True,
        min_token_length: int = 1,
        to_lowercase: bool = True,
    ):
        self.input_col = input_col
        self.output_col = output_col
        self.pattern = pattern
        self.gaps = gaps
        self.min_token_length = min_token_length
        self.to_lowercase = to_lowercase

    def _compiled(self) -> "re.Pattern[str]":
        if int(self.min_token_length) < 0:
            raise ValueError(
                f"min_token_length must be >= 0, got {self.min_token_length}."
            )
        return re.compile(self.pattern)

    def tokenize(self, text: str) -> List[str]:
        """Tokenize a single string."""
        return self._tokenize(text, self._compiled())

    def _tokenize(self, text: Any, regex: "re.Pattern[str]") -> List[str]:
        text = _require_text(text, self.input_col)
        if self.to_lowercase:
            text = text.lower()
        if self.gaps:
            tokens = _split_on(regex, text)
        else:
            # group(0): findall() would return the capturing groups instead
            tokens = [m.group(0) for m in regex.finditer(text)]
        return [t for t in tokens if len(t) >= int(self.min_token_length)]

    def transform(self, X):
        regex = self._compiled()
        self._check_frame(X, self.input_col)
        return self._with_column(X, [self._tokenize(v, regex) for v in X[self.input_col]])
