"""
compass.hashing — Deterministic result hashing.

Provides canonical float formatting and a per-result hash. All hash inputs
are human-readable text, inspectable for debugging.

Design contract:
    - canonical_float() produces identical output across CPython versions.
    - compute_result_hash() is deterministic for identical inputs.
    - Hash inputs include EVERY value that appears in the profile.
"""

from __future__ import annotations

import hashlib

from compass.analysis import IdeologyProfile
from compass.constants import RESULTS_VERSION, ROUND_PRECISION


def canonical_float(value: float) -> str:
    """Fixed-point rendering with exactly ROUND_PRECISION decimals.

    Examples (ROUND_PRECISION=8):
        canonical_float(-8.0)  → "-8.00000000"
        canonical_float(0.0)   → "0.00000000"
        canonical_float(-0.0)  → "0.00000000"
    """
    rounded = round(value, ROUND_PRECISION)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:.{ROUND_PRECISION}f}"


def compute_result_hash(
    economic: float,
    social: float,
    profile: IdeologyProfile,
) -> str:
    """SHA-256 hex digest of one classification.

    Properties:
        - One field per line, final newline included.
        - List fields keep their order (order is part of the output).
        - Encoding: UTF-8, explicitly specified.
    """
    parts = [
        f"version={RESULTS_VERSION}",
        f"economic={canonical_float(economic)}",
        f"social={canonical_float(social)}",
        f"primary={profile.primary_ideology}",
        f"color={profile.color}",
    ]
    for label in profile.secondary_ideologies:
        parts.append(f"secondary={label}")
    for item in profile.characteristics:
        parts.append(f"characteristic={item}")
    for figure in profile.notable_figures:
        parts.append(f"figure={figure.name}|{figure.role}")
    parts.append(f"description={profile.description}")
    parts.append(f"modern_context={profile.modern_context}")

    hash_input = "\n".join(parts) + "\n"
    return hashlib.sha256(hash_input.encode("utf-8")).hexdigest()
