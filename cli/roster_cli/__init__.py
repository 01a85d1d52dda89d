"""Roster CLI — terminal front end for the student records engine."""

__version__ = "0.1.0"
