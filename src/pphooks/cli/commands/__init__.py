"""pphooks subcommand implementations."""
