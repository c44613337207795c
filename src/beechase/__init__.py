"""Bee Chase: a side-scrolling arcade game."""

__version__ = "0.1.0"
