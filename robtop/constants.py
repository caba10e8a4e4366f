"""Constants of RobTop's data formats shared by the decoder and the encoders."""

# Boolean tokens. False is also produced by an empty token or EOF.
BOOL_FALSE_TOKENS = frozenset({"0", ""})
BOOL_TRUE_TOKENS = frozenset({"1", "2", "10"})
BOOL_TRUE = "1"
BOOL_FALSE = "0"
# Some fields (glow, elder mod) write true as "2"
TWO_BOOL_TRUE = "2"

# Request-form grammar
FORM_PAIR_SEPARATOR = "&"
FORM_KEY_VALUE_SEPARATOR = "="
FORM_SEQUENCE_SEPARATOR = ","
FORM_EMPTY_SEQUENCE = "-"

# Sequence fields the servers expect wrapped in parentheses
PARENTHESIZED_FIELDS = frozenset({"completedLevels"})

# Characters RobTop percent-encodes besides control characters and non-ASCII
PERCENT_ENCODED_CHARS = " :/?~"

# Printable ASCII left untouched by RobTop's percent encoding
PERCENT_SAFE_CHARS = "".join(
    chr(c) for c in range(0x20, 0x7F) if chr(c) not in PERCENT_ENCODED_CHARS
)
