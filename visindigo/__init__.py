"""Application toolkit: console styling, commands, translations, RIFF, diffs, behaviours and ARCP."""

__version__ = "1.2.0"