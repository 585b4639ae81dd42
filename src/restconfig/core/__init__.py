"""Core primitives: logging, errors, and the layered configuration engine."""
