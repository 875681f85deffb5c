"""Generational genetic algorithm for block-grid vehicle genomes."""

__version__ = "0.1.0"
