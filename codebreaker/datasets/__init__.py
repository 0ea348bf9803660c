from .validator import validate_secrets, pretty_summary
from .io import read_lines, write_lines, load_secrets, generate_secrets

__all__ = ["validate_secrets", "pretty_summary", "read_lines", "write_lines",
           "load_secrets", "generate_secrets"]
