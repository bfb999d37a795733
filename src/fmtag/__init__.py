"""fmtag - frontmatter and inline tag reconciliation for markdown notes."""

__version__ = "0.1.0"
