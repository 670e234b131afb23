"""Core building blocks: configuration, logging and the hook system."""
