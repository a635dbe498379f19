"""Unit tests: one module at a time, fakes at the database and network edges."""
