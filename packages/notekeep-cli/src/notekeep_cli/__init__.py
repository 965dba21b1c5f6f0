"""Notekeep CLI: command-line access to the note store."""
from __future__ import annotations
