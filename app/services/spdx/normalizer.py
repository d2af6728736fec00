"""
Module `normalizer` — SPDX normalization of free-form license tokens.

Main functions:
- normalize(token) -> Optional[str]
    Turns a license token harvested from a registry, a manifest or a license
    detector into a valid SPDX license expression, or None when the token
    carries no usable signal. Slash separated tokens ("MIT/Apache-2.0") are
    read as a dual license and become an OR disjunction.

- normalize_identifier(token) -> Optional[str]
    Same lookup restricted to a single license identifier (no dual license
    heuristic, no expression parsing).

- join_expressions(expressions, operator) -> Optional[str]
    Combines already normalized expressions with AND/OR, dropping duplicates.

The SPDX license list comes from the `license_expression` library, so the set
of recognized identifiers follows the library release installed.
"""

import logging
from typing import Dict, Iterable, Optional

from license_expression import ExpressionError, get_spdx_licensing

logger = logging.getLogger(__name__)

NOASSERTION = "NOASSERTION"

licensing = get_spdx_licensing()


def _build_identifier_index() -> Dict[str, str]:
    """
    Builds the case-insensitive lookup {lowercased key or alias: canonical key}.

    Exception identifiers (the right hand side of WITH) are left out: on their
    own they do not declare a license.
    """
    index: Dict[str, str] = {}
    for key, symbol in licensing.known_symbols.items():
        if getattr(symbol, "is_exception", False):
            continue
        index.setdefault(key.lower(), symbol.key)
        for alias in getattr(symbol, "aliases", ()) or ():
            index.setdefault(alias.lower(), symbol.key)
    # canonical keys win over aliases that happen to collide
    for key, symbol in licensing.known_symbols.items():
        if not getattr(symbol, "is_exception", False):
            index[symbol.key.lower()] = symbol.key
    return index


_IDENTIFIERS = _build_identifier_index()


def _is_noassertion(token: str) -> bool:
    return token.strip().upper() == NOASSERTION


def normalize_identifier(token) -> Optional[str]:
    """
    Returns the canonically cased SPDX identifier for `token`, or None.

    Only a single identifier is recognized: "mit" -> "MIT", "apache-2.0" ->
    "Apache-2.0". NOASSERTION, empty strings and non strings give None.
    """
    if not isinstance(token, str):
        return None
    s = token.strip()
    if not s or _is_noassertion(s):
        return None
    return _IDENTIFIERS.get(s.lower())


def _normalize_expression(token: str) -> Optional[str]:
    """
    Parses a composite expression ("MIT OR apache-2.0") and renders it with
    canonical keys. Unknown symbols or bad syntax give None.
    """
    try:
        # strict: licenses only as WITH left operand, exceptions only as right one
        parsed = licensing.parse(token, validate=True, strict=True)
    except ExpressionError:
        logger.debug("Unparsable license expression: %r", token)
        return None
    if parsed is None:
        return None
    return _without_repeated_terms(parsed).render()


def _without_repeated_terms(expression):
    """
    Drops repeated operands of AND/OR nodes, keeping first occurrences in
    order: "MIT AND MIT" -> "MIT". Nested nodes of the same operator are
    flattened first so repetitions across them are caught too.
    """
    if not isinstance(expression, (licensing.AND, licensing.OR)):
        return expression

    operands = []
    for arg in expression.args:
        arg = _without_repeated_terms(arg)
        if isinstance(arg, expression.__class__):
            operands.extend(arg.args)
        else:
            operands.append(arg)

    unique = []
    for operand in operands:
        if operand not in unique:
            unique.append(operand)
    if len(unique) == 1:
        return unique[0]
    return expression.__class__(*unique)


def normalize(token, split_dual: bool = True) -> Optional[str]:
    """
    Normalizes a free-form license token into an SPDX expression.

    Rules:
      - a known identifier (any case) -> its canonical form
      - NOASSERTION (any case) -> None
      - "A/B[/C...]" -> "A OR B [OR C...]" when every segment is a known
        identifier, None as soon as one segment is not. With
        `split_dual=False` a slash separated token is simply unrecognized.
      - a well formed expression whose symbols are all known -> rendered
        with canonical keys
      - anything else -> None

    Never raises.
    """
    if not isinstance(token, str):
        return None
    s = token.strip()
    if not s or _is_noassertion(s):
        return None

    if "/" in s:
        if not split_dual:
            logger.debug("Slash separated license token left unsplit: %r", token)
            return None
        segments = [normalize_identifier(part) for part in s.split("/")]
        if all(segments):
            return " OR ".join(segments)
        logger.debug("Dropping dual license token with unknown segment: %r", token)
        return None

    identifier = normalize_identifier(s)
    if identifier:
        return identifier

    if any(ch.isspace() for ch in s) or "(" in s:
        return _normalize_expression(s)

    logger.debug("Unrecognized license token: %r", token)
    return None


def _is_compound(expression: str) -> bool:
    upper = f" {expression.upper()} "
    return " AND " in upper or " OR " in upper


def join_expressions(expressions: Iterable[str], operator: str = "AND") -> Optional[str]:
    """
    Joins normalized expressions with `operator`, keeping the first occurrence
    of each term in encounter order.

    Compound terms are wrapped in parentheses when combined with others, so
    ["MIT OR Apache-2.0", "0BSD"] gives "(MIT OR Apache-2.0) AND 0BSD".
    Returns None when there is nothing to join.
    """
    operator = operator.strip().upper()
    if operator not in {"AND", "OR"}:
        raise ValueError(f"Unsupported SPDX operator: {operator}")

    terms = []
    for expression in expressions:
        if expression and expression not in terms:
            terms.append(expression)

    if not terms:
        return None
    if len(terms) == 1:
        return terms[0]
    return f" {operator} ".join(
        f"({term})" if _is_compound(term) else term
        for term in terms
    )
