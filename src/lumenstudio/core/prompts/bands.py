"""Threshold banding: map a slider value to a qualitative phrase.

A band table is an ordered tuple of ``(predicate, template)`` pairs.  The
first predicate that matches wins; the template may reference the value as
``{value}``.  The last entry of every table is a catch-all so a phrase is
always produced.

Tables
------
==========================  ==============================================
Table                       Bands
==========================  ==============================================
``SHADOW_SOFTNESS``         ``< 30`` hard, ``> 70`` soft, else balanced
``HARMONIZATION_STRENGTH``  ``0`` preserve, ``100`` full relight, else N%
``REALISM``                 ``> 95`` photo, ``> 75`` high, ``< 40``
                            stylized, else balanced
==========================  ==============================================
"""

from __future__ import annotations

from collections.abc import Callable

Predicate = Callable[[float], bool]
BandTable = tuple[tuple[Predicate, str], ...]


def _always(_value: float) -> bool:
    return True


def pick_band(table: BandTable, value: float) -> str:
    """Return the first template whose predicate matches ``value``.

    Args:
        table: Ordered ``(predicate, template)`` pairs ending in a catch-all.
        value: The slider value.

    Returns:
        The template with ``{value}`` substituted.
    """
    for predicate, template in table:
        if predicate(value):
            return template.format(value=value)
    raise ValueError(f"Band table has no catch-all entry for value {value}")


SHADOW_SOFTNESS: BandTable = (
    (lambda v: v < 30, "with sharp, defined edges (hard lighting)."),
    (lambda v: v > 70, "with very diffuse, soft edges (soft lighting)."),
    (_always, "with a balanced mix of hard and soft edges."),
)

HARMONIZATION_STRENGTH: BandTable = (
    (
        lambda v: v == 0,
        "Preserve the subject's original lighting and color grading completely.",
    ),
    (
        lambda v: v == 100,
        "Fully relight the subject and harmonize its colors to perfectly match the "
        "background scene.",
    ),
    (
        _always,
        "Apply color and lighting harmonization at {value}% strength. Blend the "
        "subject's original look with the background's environment, with the final "
        "result being closer to the background's characteristics.",
    ),
)

REALISM: BandTable = (
    (
        lambda v: v > 95,
        "The final image must be indistinguishable from a real photograph "
        "(absolute photorealism).",
    ),
    (
        lambda v: v > 75,
        "Aim for a high degree of photorealism, with subtle artistic touches.",
    ),
    (
        lambda v: v < 40,
        "Produce a more stylized, artistic render rather than a purely photorealistic "
        "one. Emphasize mood over accuracy.",
    ),
    (_always, "Create a balanced, realistic image with a clean, commercial look."),
)
