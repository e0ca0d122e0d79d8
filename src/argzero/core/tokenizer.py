"""
Argument tokenizer.

Turns the tokens that follow the command keyword into positional values and
flag descriptors. Flag names are not validated here.
"""

from typing import List, Optional, Sequence

from .types import ArgumentInfo, ParsedArguments


class ArgumentTokenizer:
    """Splits tokens into positional values and ``/name[:value]`` flags."""

    def __init__(self, flag_marker: str = "/", value_delimiter: str = ":", reserved_leading_tokens: int = 0):
        self.flag_marker = flag_marker
        self.value_delimiter = value_delimiter
        self.reserved_leading_tokens = reserved_leading_tokens

    @classmethod
    def from_config(cls, config) -> 'ArgumentTokenizer':
        dispatch = config.dispatch
        return cls(dispatch.flag_marker, dispatch.value_delimiter, dispatch.reserved_leading_tokens)

    def tokenize(self, tokens: Sequence[str]) -> ParsedArguments:
        """Parse the tokens after the keyword, skipping the reserved leading ones."""
        remaining = list(tokens[self.reserved_leading_tokens:])
        flags = []
        for token in remaining:
            flag = self.parse_flag(token)
            if flag is not None:
                flags.append(flag)
        return ParsedArguments(positional=remaining, flags=flags)

    def parse_flag(self, token: str) -> Optional[ArgumentInfo]:
        """Parse a single token; None when it is not a flag."""
        if not token.startswith(self.flag_marker):
            return None

        body = token[len(self.flag_marker):]
        name, delimiter, value = body.partition(self.value_delimiter)
        return ArgumentInfo(name, value if delimiter else None)

    def is_flag(self, token: str) -> bool:
        return token.startswith(self.flag_marker)

    def positional_values(self, tokens: Sequence[str]) -> List[str]:
        """Tokens that are not flags, after the reserved leading ones."""
        return [t for t in tokens[self.reserved_leading_tokens:] if not self.is_flag(t)]
