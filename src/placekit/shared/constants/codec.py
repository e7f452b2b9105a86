"""
Identifier Codec Constants

Protocol constants of the placekey identifier format. They are shared with
every other implementation of the format and must not be re-derived.
"""

from typing import ClassVar


class PlacekeyFormat:
    """Encoding constants for the ``[what@]where`` identifier."""

    RESOLUTION = 10
    BASE_RESOLUTION = 12
    MAX_RESOLUTION = 15

    ALPHABET = "23456789bcdfghjkmnpqrstvwxyz"
    ALPHABET_LENGTH = len(ALPHABET)
    PADDING_CHAR = "a"
    # Characters the substitutions introduce into encoded output
    REPLACEMENT_CHARS = "eu"
    CODE_LENGTH = 9
    TUPLE_LENGTH = 3
    TUPLE_SEPARATOR = "-"
    WHAT_SEPARATOR = "@"

    # Applied in order when encoding, in reverse order when decoding
    REPLACEMENT_MAP: ClassVar[tuple[tuple[str, str], ...]] = (
        ("prn", "pre"),
        ("f4nny", "f4nne"),
        ("tw4t", "tw4e"),
        ("ngr", "ngu"),
        ("dck", "dce"),
        ("vjn", "vju"),
        ("fck", "fce"),
        ("pns", "pne"),
        ("sht", "she"),
        ("kkk", "kke"),
        ("fgt", "fgu"),
        ("dyk", "dye"),
        ("bch", "bce"),
    )


class ShorteningConfig:
    """Bit layout of the cell shortening transform."""

    CELL_BITS = 64
    HEADER_BITS = 12
    MODULUS_BITS = 52
    BASE_CELL_SHIFT = 2 ** (3 * PlacekeyFormat.MAX_RESOLUTION)
    UNUSED_RESOLUTION_BITS = 3 * (PlacekeyFormat.MAX_RESOLUTION - PlacekeyFormat.BASE_RESOLUTION)
    UNUSED_RESOLUTION_FILLER = 2**UNUSED_RESOLUTION_BITS - 1


class ValidationPatterns:
    """Regular expressions for identifier validation."""

    _CHARS = PlacekeyFormat.ALPHABET
    _WHERE_CHARS = PlacekeyFormat.ALPHABET + PlacekeyFormat.REPLACEMENT_CHARS
    _PADDED = PlacekeyFormat.PADDING_CHAR + _WHERE_CHARS

    WHERE = rf"^[{_PADDED}]{{3}}-[{_WHERE_CHARS}]{{3}}-[{_WHERE_CHARS}]{{3}}$"
    WHAT_V1 = rf"^[{_CHARS}]{{3,}}(-[{_CHARS}]{{3,}})?$"
    WHAT_V2 = r"^[01][abcdefghijklmnopqrstuvwxyz234567]{9}$"

    # Prefixes emitted by the resolution API that normalization repairs
    DISCARDED_SUFFIXED_PREFIX = r"^\d+[a-z]$"
    DISCARDED_NUMERIC_PREFIX = r"^\d+$"
    REPAIRABLE_WHAT = rf"^[{_CHARS}]{{3}}$|^[{_CHARS}]{{6}}$"
