from .validator import validate_dictionary, pretty_summary
from .io import (
    BUNDLED_TABLE,
    load_bundled_table,
    read_idioms,
    read_lines,
    read_syllable_table,
    write_syllable_table,
)

__all__ = [
    "validate_dictionary", "pretty_summary",
    "BUNDLED_TABLE", "load_bundled_table", "read_idioms", "read_lines",
    "read_syllable_table", "write_syllable_table",
]
