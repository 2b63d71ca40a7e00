"""Core building blocks: path validation, errors, configuration and locations."""
