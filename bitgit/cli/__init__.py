"""Command-line interface for BitGit."""
