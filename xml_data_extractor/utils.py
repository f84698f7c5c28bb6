"""
Utility functions for common string and number coercions used by built-in modifiers.
"""

import re
from typing import Any


class StringUtils:
    """Utility methods for string validation and processing."""

    # Cached regex patterns for performance
    _regex_cache = {
        'numbers_only': re.compile(r'[^0-9]'),
        'leading_integer': re.compile(r'[+-]?\d+'),
        'leading_decimal': re.compile(r'[+-]?(?:\d+(?:\.\d+)?|\.\d+)'),
        'whitespace': re.compile(r'\s+')
    }

    @staticmethod
    def is_blank(value: Any) -> bool:
        """
        True if value is None or a string that is empty after stripping whitespace.

        Args:
            value: Value to check
        """
        return value is None or str(value).strip() == ''

    @staticmethod
    def extract_numbers_only(value: Any) -> str:
        """
        Extract only numeric characters from value.

        Examples:
            '(555) 555-5555' -> '5555555555'

        Args:
            value: Input value

        Returns:
            String containing only numeric characters
        """
        if value is None:
            return ''
        return StringUtils._regex_cache['numbers_only'].sub('', str(value))

    @staticmethod
    def normalize_whitespace(value: Any) -> str:
        """
        Collapse internal whitespace runs to single spaces and strip the ends.

        Args:
            value: Input value

        Returns:
            String with normalized whitespace
        """
        if value is None:
            return ''
        return StringUtils._regex_cache['whitespace'].sub(' ', str(value).strip())


class NumberUtils:
    """Lenient numeric coercion: parse the leading number, fall back to zero."""

    @staticmethod
    def leading_int(value: Any) -> int:
        """
        Convert the leading integer of a value, ignoring anything after it.

        Examples:
            '2001' -> 2001
            ' 42 minutes' -> 42
            'n/a' -> 0
            '3.9' -> 3
        """
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            return int(value)
        if value is None:
            return 0
        match = StringUtils._regex_cache['leading_integer'].match(str(value).strip())
        return int(match.group()) if match else 0

    @staticmethod
    def leading_float(value: Any) -> float:
        """
        Convert the leading decimal number of a value, ignoring anything after it.

        Examples:
            '36.50' -> 36.5
            '12 kg' -> 12.0
            '' -> 0.0
        """
        if isinstance(value, (int, float)):
            return float(value)
        if value is None:
            return 0.0
        match = StringUtils._regex_cache['leading_decimal'].match(str(value).strip())
        return float(match.group()) if match else 0.0
