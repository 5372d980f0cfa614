from .text_format import parse_features, parse_label, parse_line, read_examples, read_file

__all__ = ["parse_features", "parse_label", "parse_line", "read_examples", "read_file"]
