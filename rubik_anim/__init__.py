"""Cubo Rubik 3x3x3 con giros de capa animados."""

__version__ = "0.1.0"
