"""Shell command-line tokenizer with quoting, expansion and a prompt loop."""

__version__ = "0.1.0"

__all__ = ["parser", "shell", "textutils", "tokens"]