"""WCAG 2.1 success criteria catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ..types import Principle, WCAGCriterion, WCAGLevel

_CRITERIA = [
    # Level A
    WCAGCriterion(
        id="1.1.1",
        name="Non-text Content",
        level=WCAGLevel.A,
        principle=Principle.PERCEIVABLE,
        guideline="1.1 Text Alternatives",
        techniques=("H37", "H36", "H35", "H53", "ARIA6", "ARIA10"),
        common_failures=("F3", "F13", "F20", "F30", "F38", "F39", "F65"),
    ),
    WCAGCriterion(
        id="1.2.1",
        name="Audio-only and Video-only (Prerecorded)",
        level=WCAGLevel.A,
        principle=Principle.PERCEIVABLE,
        guideline="1.2 Time-based Media",
        techniques=("G158", "G159", "G166"),
    ),
    WCAGCriterion(
        id="1.3.1",
        name="Info and Relationships",
        level=WCAGLevel.A,
        principle=Principle.PERCEIVABLE,
        guideline="1.3 Adaptable",
        techniques=(
            "ARIA11", "ARIA12", "ARIA13", "ARIA16", "ARIA17",
            "G115", "H39", "H42", "H43", "H44", "H48",
        ),
        common_failures=("F2", "F33", "F34", "F42", "F43", "F46"),
    ),
    WCAGCriterion(
        id="1.4.1",
        name="Use of Color",
        level=WCAGLevel.A,
        principle=Principle.PERCEIVABLE,
        guideline="1.4 Distinguishable",
        techniques=("G14", "G111", "G182", "G183"),
        common_failures=("F13", "F73", "F81"),
    ),
    WCAGCriterion(
        id="2.1.1",
        name="Keyboard",
        level=WCAGLevel.A,
        principle=Principle.OPERABLE,
        guideline="2.1 Keyboard Accessible",
        techniques=("G202", "H91", "SCR20", "SCR35"),
        common_failures=("F10", "F42", "F54", "F55"),
    ),
    WCAGCriterion(
        id="2.4.1",
        name="Bypass Blocks",
        level=WCAGLevel.A,
        principle=Principle.OPERABLE,
        guideline="2.4 Navigable",
        techniques=("G1", "G123", "G124", "H69", "H70", "H64", "SCR28"),
    ),
    WCAGCriterion(
        id="3.1.1",
        name="Language of Page",
        level=WCAGLevel.A,
        principle=Principle.UNDERSTANDABLE,
        guideline="3.1 Readable",
        techniques=("H57",),
    ),
    WCAGCriterion(
        id="4.1.1",
        name="Parsing",
        level=WCAGLevel.A,
        principle=Principle.ROBUST,
        guideline="4.1 Compatible",
        techniques=("G134", "G192", "H88", "H74", "H75", "H93", "H94"),
        common_failures=("F70", "F77"),
    ),
    # Level AA
    WCAGCriterion(
        id="1.4.3",
        name="Contrast (Minimum)",
        level=WCAGLevel.AA,
        principle=Principle.PERCEIVABLE,
        guideline="1.4 Distinguishable",
        techniques=("G18", "G148", "G174", "G145"),
        common_failures=("F24", "F83"),
    ),
    WCAGCriterion(
        id="1.4.5",
        name="Images of Text",
        level=WCAGLevel.AA,
        principle=Principle.PERCEIVABLE,
        guideline="1.4 Distinguishable",
        techniques=("C22", "C30", "G140"),
    ),
    WCAGCriterion(
        id="2.4.6",
        name="Headings and Labels",
        level=WCAGLevel.AA,
        principle=Principle.OPERABLE,
        guideline="2.4 Navigable",
        techniques=("G130", "G131"),
    ),
    WCAGCriterion(
        id="3.3.3",
        name="Error Suggestion",
        level=WCAGLevel.AA,
        principle=Principle.UNDERSTANDABLE,
        guideline="3.3 Input Assistance",
        techniques=("G83", "G84", "G85", "G177", "SCR18", "SCR32"),
    ),
    # Level AAA
    WCAGCriterion(
        id="1.4.6",
        name="Contrast (Enhanced)",
        level=WCAGLevel.AAA,
        principle=Principle.PERCEIVABLE,
        guideline="1.4 Distinguishable",
        techniques=("G17", "G18", "G148", "G174"),
        common_failures=("F24", "F83"),
    ),
    WCAGCriterion(
        id="2.4.9",
        name="Link Purpose (Link Only)",
        level=WCAGLevel.AAA,
        principle=Principle.OPERABLE,
        guideline="2.4 Navigable",
        techniques=("ARIA7", "ARIA8", "H30", "H24"),
    ),
    WCAGCriterion(
        id="3.1.5",
        name="Reading Level",
        level=WCAGLevel.AAA,
        principle=Principle.UNDERSTANDABLE,
        guideline="3.1 Readable",
        techniques=("G86", "G103", "G79", "G153", "G160"),
    ),
]

WCAG_CRITERIA: Mapping[str, WCAGCriterion] = MappingProxyType(
    {criterion.id: criterion for criterion in _CRITERIA}
)


def merge_criteria(
    base: Mapping[str, WCAGCriterion], custom: Iterable[WCAGCriterion]
) -> Mapping[str, WCAGCriterion]:
    """Catalog with ``custom`` appended; a custom criterion replaces one with the same id."""
    merged = dict(base)
    merged.update((criterion.id, criterion) for criterion in custom)
    return MappingProxyType(merged)
