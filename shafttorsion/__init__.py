"""Torsion calculator for stepped shafts (circle, rectangle and tube sections)."""

__version__ = "0.1.0"
