"""Ticklist - a keyboard-driven terminal to-do list."""
