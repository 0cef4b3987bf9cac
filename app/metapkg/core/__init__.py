"""Core services for metapkg: errors, settings, process invocation and backend selection."""
