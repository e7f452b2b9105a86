"""Placekey identifier codec.

This module converts between grid cells and the compact ``[what@]where``
identifier. The ``where`` part is produced in four steps:

1. Shorten: drop the constant header and the unused fine-resolution bits of
   the 64-bit cell index.
2. Encode the shortened integer in base 28 (the alphabet length) over a
   consonant-heavy alphabet.
3. Substitute character sequences that could spell objectionable words.
4. Left pad to nine characters and format as three dash-joined triplets.

Decoding runs the steps backwards. The constants live in
``placekit.shared.constants.codec`` and are shared with every other
implementation of the format, so the transform is bit-exact.

Example:
    >>> codec = PlacekeyCodec()
    >>> codec.encode(37.7371, -122.44283)
    '@5vg-82n-kzz'
    >>> codec.placekey_to_h3("@5vg-82n-kzz")
    '8a2830953157fff'
"""

from __future__ import annotations

import logging
import threading

from placekit.core.grid_adapter import H3GridAdapter
from placekit.shared.constants import PlacekeyFormat, ShorteningConfig
from placekit.shared.errors import ErrorCode, ErrorContext, FormatError, create_format_error
from placekit.shared.models import GeoPoint
from placekit.shared.protocols import GridAdapterProtocol

logger = logging.getLogger(__name__)

_ALPHABET_INDEX = {char: i for i, char in enumerate(PlacekeyFormat.ALPHABET)}


class PlacekeyCodec:
    """Bidirectional transform between grid cells and placekey identifiers.

    Args:
        grid: Grid engine used for coordinate and cell-string conversion.
            Defaults to ``H3GridAdapter``.
    """

    def __init__(self, grid: GridAdapterProtocol | None = None) -> None:
        self.grid: GridAdapterProtocol = grid or H3GridAdapter()
        self._header_int: int | None = None
        self._header_lock = threading.Lock()

    # Public API

    def encode(self, lat: float, lng: float) -> str:
        """Encode a coordinate as the identifier of its resolution 10 cell."""
        point = GeoPoint(lat, lng)
        cell = self.grid.coordinate_to_cell(
            point.latitude, point.longitude, PlacekeyFormat.RESOLUTION
        )
        return self.encode_cell(cell)

    def encode_cell(self, cell: int) -> str:
        """Encode a 64-bit cell index."""
        short_int = shorten_cell(cell)
        encoded = encode_short_int(short_int)
        clean = clean_string(encoded)
        if len(clean) <= PlacekeyFormat.CODE_LENGTH:
            clean = clean.rjust(PlacekeyFormat.CODE_LENGTH, PlacekeyFormat.PADDING_CHAR)

        size = PlacekeyFormat.TUPLE_LENGTH
        triplets = [clean[i : i + size] for i in range(0, len(clean), size)]
        return PlacekeyFormat.WHAT_SEPARATOR + PlacekeyFormat.TUPLE_SEPARATOR.join(triplets)

    # Alias kept for symmetry with ``to_cell``
    from_cell = encode_cell

    def decode(self, placekey: str) -> GeoPoint:
        """Return the center of the cell an identifier addresses."""
        lat, lng = self.grid.cell_to_coordinate(self.to_cell(placekey))
        return GeoPoint(lat, lng)

    def to_cell(self, placekey: str) -> int:
        """Decode the ``where`` part of an identifier to a 64-bit cell index."""
        _, where = self.parse(placekey)
        code = strip_encoding(where)
        if not code:
            raise create_format_error(
                "Identifier has an empty where part",
                placekey=placekey,
                operation="to_cell",
            )
        short_int = decode_string(dirty_string(code), placekey)
        return self._unshorten_cell(short_int)

    def parse(self, placekey: str) -> tuple[str | None, str]:
        """Split an identifier into ``(what, where)`` on the first ``@``.

        ``what`` is None when there is no ``@`` or the identifier starts with it.
        """
        if not isinstance(placekey, str):
            raise create_format_error(
                f"Identifier must be a string, got {type(placekey).__name__}",
                operation="parse",
            )
        what, separator, where = placekey.partition(PlacekeyFormat.WHAT_SEPARATOR)
        if not separator:
            return None, placekey
        return (what or None), where

    def h3_to_placekey(self, h3_string: str) -> str:
        """Encode a hexadecimal H3 cell string."""
        return self.encode_cell(self.grid.string_to_cell(h3_string))

    def placekey_to_h3(self, placekey: str) -> str:
        """Decode an identifier to its hexadecimal H3 cell string."""
        return self.grid.cell_to_string(self.to_cell(placekey))

    # Shortening

    @property
    def header_int(self) -> int:
        """Top 12 bits of the resolution 10 cell at (0, 0), shifted into place."""
        if self._header_int is None:
            with self._header_lock:
                if self._header_int is None:
                    origin = self.grid.coordinate_to_cell(0.0, 0.0, PlacekeyFormat.RESOLUTION)
                    shift = ShorteningConfig.CELL_BITS - ShorteningConfig.HEADER_BITS
                    self._header_int = (origin >> shift) << ShorteningConfig.MODULUS_BITS
        return self._header_int

    def _unshorten_cell(self, short_int: int) -> int:
        unshifted = short_int << ShorteningConfig.UNUSED_RESOLUTION_BITS
        return (
            self.header_int
            + ShorteningConfig.UNUSED_RESOLUTION_FILLER
            - ShorteningConfig.BASE_CELL_SHIFT
            + unshifted
        )


def shorten_cell(cell: int) -> int:
    """Drop header and unused resolution bits from a cell index."""
    out = (cell + ShorteningConfig.BASE_CELL_SHIFT) % (2**ShorteningConfig.MODULUS_BITS)
    return out >> ShorteningConfig.UNUSED_RESOLUTION_BITS


def encode_short_int(value: int) -> str:
    """Base-28 (alphabet length) encode, most significant digit first."""
    if value == 0:
        return PlacekeyFormat.ALPHABET[0]

    digits = []
    while value > 0:
        value, remainder = divmod(value, PlacekeyFormat.ALPHABET_LENGTH)
        digits.append(PlacekeyFormat.ALPHABET[remainder])
    return "".join(reversed(digits))


def decode_string(code: str, placekey: str | None = None) -> int:
    """Base-28 (alphabet length) decode, last character least significant."""
    value = 0
    for char in code:
        digit = _ALPHABET_INDEX.get(char)
        if digit is None:
            raise FormatError(
                ErrorCode.INVALID_PLACEKEY,
                f"Character {char!r} is not part of the placekey alphabet",
                ErrorContext(operation="decode_string", placekey=placekey),
            )
        value = value * PlacekeyFormat.ALPHABET_LENGTH + digit
    return value


def strip_encoding(where: str) -> str:
    """Remove the ``@`` marker, separators and padding."""
    for char in (
        PlacekeyFormat.WHAT_SEPARATOR,
        PlacekeyFormat.TUPLE_SEPARATOR,
        PlacekeyFormat.PADDING_CHAR,
    ):
        where = where.replace(char, "")
    return where


def clean_string(code: str) -> str:
    """Apply the substitution list in order."""
    for dirty, clean in PlacekeyFormat.REPLACEMENT_MAP:
        code = code.replace(dirty, clean)
    return code


def dirty_string(code: str) -> str:
    """Undo ``clean_string``: reverse order, value back to key."""
    for dirty, clean in reversed(PlacekeyFormat.REPLACEMENT_MAP):
        code = code.replace(clean, dirty)
    return code
