"""Command-line interface for fmtag."""
