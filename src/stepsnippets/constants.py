"""
Shared constants for stepsnippets.
"""

FALLBACK_METHOD_NAME = "stepDefinition1"
DEFAULT_SUFFIX_NUMBER = 2
DEFAULT_KEYWORD_TYPE = "Given"
TURNIP_PATTERN_TYPE = "turnip"
REGEX_PATTERN_TYPE = "regex"
BLOCK_TEXT_ARGUMENT_DECLARATION = "PyStringNode $string"
TABLE_ARGUMENT_DECLARATION = "TableNode $table"
