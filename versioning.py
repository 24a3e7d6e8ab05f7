"""Centralised version and naming information for SymbolCycler.

This module is the single source of truth for application version,
executable name, and human-readable metadata. The CLI and packaging both
read from here so the strings are not duplicated.
"""
from __future__ import annotations


APP_NAME: str = "SymbolCycler"
APP_EXE_NAME: str = "symbolcycler"
APP_VERSION: str = "0.3.0"
APP_DESCRIPTION: str = "SymbolCycler - cycles a fixed set of symbols through fade-in, stable and fade-out phases."


__all__ = [
    "APP_NAME",
    "APP_EXE_NAME",
    "APP_VERSION",
    "APP_DESCRIPTION",
]
