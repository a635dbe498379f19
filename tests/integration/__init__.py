"""Integration tests: real SQLite databases, real sockets."""
