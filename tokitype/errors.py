from __future__ import annotations


class TokitypeError(Exception):
    """Base class for errors that stop a session from starting."""


class CorpusError(TokitypeError, ValueError):
    """The corpus is corrupted, incomplete or incompatible."""


class NoWordsAvailableError(CorpusError):
    """No corpus record carries a word that could go into a phrase."""


class SettingsError(TokitypeError, ValueError):
    """A selection setting is out of range."""
