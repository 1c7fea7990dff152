"""Falling Blocks: a 10x20 falling-block puzzle with a pygame front end and a gymnasium environment."""

__version__ = "0.1.0"
