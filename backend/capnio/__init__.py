"""Capnio industrial monitoring backend."""

__version__ = "0.1.0"
