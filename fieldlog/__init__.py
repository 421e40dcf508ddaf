"""Typed structured-logging fields, array and error fields, an encoder registry and pooled buffers."""

__version__ = "0.1.0"