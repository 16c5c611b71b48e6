"""CLI subcommand implementations for lockdiff."""
