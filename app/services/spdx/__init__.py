"""
Package `app.services.spdx`

Normalization of free-form license tokens into valid SPDX license expressions.

Public API:
- normalize(token) -> Optional[str]
- normalize_identifier(token) -> Optional[str]
- join_expressions(expressions, operator="AND") -> Optional[str]
"""

from .normalizer import NOASSERTION, join_expressions, normalize, normalize_identifier

__all__ = ["NOASSERTION", "join_expressions", "normalize", "normalize_identifier"]
