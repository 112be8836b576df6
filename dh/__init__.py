"""Toy Diffie–Hellman exchange built on the hex engine."""
