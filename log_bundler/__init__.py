"""log_bundler: compile log message bundle declarations into implementation classes."""

__version__ = "0.1.0"
