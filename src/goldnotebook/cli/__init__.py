"""Command-line interface for goldnotebook."""
