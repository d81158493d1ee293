"""
cryptmarks — an ordered bookmark collection kept in one encrypted file.

The file is meant to live in a version-controlled dotfiles repository;
only ciphertext ever touches disk.
"""

__version__ = "0.1.0"
