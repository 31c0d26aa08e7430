"""Fuzz testing suite for Quill."""

from .fuzz import Fuzzer, FuzzReport, FuzzRunner

__all__ = ["Fuzzer", "FuzzReport", "FuzzRunner"]
