"""
Decoder configuration: bit widths, strategy profiles and CLI defaults.
"""

# Mask / address width in bits. Addresses and masks never exceed this.
MASK_WIDTH = 36
MASK_ALL = (1 << MASK_WIDTH) - 1

# Stored values are unsigned 64-bit.
VALUE_WIDTH = 64
VALUE_MAX = (1 << VALUE_WIDTH) - 1

MASK_ALPHABET = frozenset("01X")

# Keyword / assignment tokens of the program syntax
MASK_KEYWORD = "mask"
MEM_KEYWORD = "mem"
ASSIGN_TOKEN = " = "


# ──────────────────────────────────────────────
# Strategy profiles (selected by --strategy)
# ──────────────────────────────────────────────

STRATEGY_PROFILES = {
    "value": {
        "part": 1,
        "strategy": "VALUE_MASKING",
        "description": "Mask each written value; one address per write",
    },
    "address": {
        "part": 2,
        "strategy": "ADDRESS_FLOATING",
        "description": "Mask the address; floating bits expand to every combination",
    },
}

DEFAULT_STRATEGY = "both"

# Logging defaults for the CLI
DEFAULT_LOG_LEVEL = "WARNING"
LOGGER_NAME = "mask_decoder"
