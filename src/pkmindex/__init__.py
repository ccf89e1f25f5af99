"""pkmindex — wikilink and label index for Typst note collections."""

__version__ = "0.1.0"
