"""Command handlers: parse arguments, call the session, report results."""
