"""Command line interface for projtrack."""
