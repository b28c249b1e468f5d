"""tap-validator core package.

Syntax and structural validation for collections of package definitions
("taps"), callable from the bundled CLI and from CI scripts alike.
"""

__all__ = [
    "core",
]
