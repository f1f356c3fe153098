"""Branch Diff - compare two git branches: changed files and commit history."""

__version__ = "0.1.0"
