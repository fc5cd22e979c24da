"""Kernel phone – number normalization and the current-country capability."""
from blocked_numbers.kernel.phone.country import (
    CountryDetector,
    FallbackCountryDetector,
    FixedCountryDetector,
    LocaleCountryDetector,
)
from blocked_numbers.kernel.phone.normalizer import (
    Normalizer,
    NumberKeys,
    canonical_e164,
    format_e164,
    normalize,
    strip_number,
)

__all__ = [
    "CountryDetector",
    "FallbackCountryDetector",
    "FixedCountryDetector",
    "LocaleCountryDetector",
    "Normalizer",
    "NumberKeys",
    "canonical_e164",
    "format_e164",
    "normalize",
    "strip_number",
]
