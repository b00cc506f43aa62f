"""Fuzzy and exact line matchers, ANSI colour extraction, chunked item storage and query history."""

__version__ = "0.55.0"