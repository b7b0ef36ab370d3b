"""Extractors for pulling session short codes out of server logs."""

import re
from typing import List, Optional

SHORT_CODE_MARKER = "LogAbiotic: Warning: Session short code: "


class ShortCodeExtractor:
    """Extracts session short codes from log text using a regular expression.

    Matches lines such as:
    [2025.11.04-10.17.29:161][  1]LogAbiotic: Warning: Session short code: 78B37
    """

    def __init__(self, short_code_regex: Optional[str] = None):
        if short_code_regex is None:
            short_code_regex = re.escape(SHORT_CODE_MARKER) + r"(\w+)"
        self.short_code_pattern = re.compile(short_code_regex)

    def extract(self, text: str) -> List[str]:
        """Return every short code in the text, in the order they appear."""
        return [match.group(1) for match in self.short_code_pattern.finditer(text)]
