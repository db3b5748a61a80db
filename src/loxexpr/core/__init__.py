"""Core of loxexpr: IR, expression pipeline, errors, and configuration."""
