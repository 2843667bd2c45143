from .literals import LiteralParser, normalize_to_pair, parse_literal

__all__ = ["LiteralParser", "normalize_to_pair", "parse_literal"]
