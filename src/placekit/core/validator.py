"""Identifier validation and normalization."""

from __future__ import annotations

import logging
import re
from typing import Any

from placekit.core.codec import PlacekeyCodec
from placekit.shared.constants import PlacekeyFormat, ValidationPatterns
from placekit.shared.errors import PlacekitError

logger = logging.getLogger(__name__)

_WHERE_RE = re.compile(ValidationPatterns.WHERE)
_WHAT_V1_RE = re.compile(ValidationPatterns.WHAT_V1)
_WHAT_V2_RE = re.compile(ValidationPatterns.WHAT_V2)
_SUFFIXED_PREFIX_RE = re.compile(ValidationPatterns.DISCARDED_SUFFIXED_PREFIX)
_NUMERIC_PREFIX_RE = re.compile(ValidationPatterns.DISCARDED_NUMERIC_PREFIX)
_REPAIRABLE_WHAT_RE = re.compile(ValidationPatterns.REPAIRABLE_WHAT)


class PlacekeyValidator:
    """Structural and semantic checks over ``[what@]where`` identifiers.

    Args:
        codec: Codec used to decode the ``where`` part. Defaults to a new
            ``PlacekeyCodec``.
    """

    def __init__(self, codec: PlacekeyCodec | None = None) -> None:
        self.codec = codec or PlacekeyCodec()

    def is_valid_format(self, placekey: Any) -> bool:
        """Check whether ``placekey`` is a well formed identifier.

        Never raises. ``None``, non-strings and the empty string are invalid.
        """
        if not isinstance(placekey, str) or not placekey:
            return False

        what, where = self.codec.parse(placekey)
        if what is not None and not (_WHAT_V1_RE.match(what) or _WHAT_V2_RE.match(what)):
            return False
        return self.where_part_is_valid(where)

    def where_part_is_valid(self, where: str) -> bool:
        """Check the pattern of ``where`` and that it decodes to a real cell."""
        if not isinstance(where, str) or not _WHERE_RE.match(where):
            return False
        try:
            cell = self.codec.to_cell(where)
        except PlacekitError as e:
            logger.debug("Where part %r failed to decode: %s", where, e)
            return False
        return self.codec.grid.is_valid_cell(cell)

    def normalize(self, placekey: Any) -> Any:
        """Repair the identifier variants the resolution API is known to emit.

        * ``None`` and non-strings are returned untouched.
        * A bare well formed ``where`` gains its ``@`` marker.
        * Numeric prefixes such as ``222`` or ``23b`` are discarded.
        * A 3 or 6 character ``what`` without dashes is regrouped as
          ``xxx-`` or ``xxx-yyy``.

        Anything else is returned unchanged.

        Example:
            >>> PlacekeyValidator().normalize("5vg7gq")
            '5vg7gq'
            >>> PlacekeyValidator().normalize("5vg7gq@5vg-7gq-tvz")
            '5vg-7gq@5vg-7gq-tvz'
        """
        if not isinstance(placekey, str) or not placekey:
            return placekey

        what, separator, where = placekey.partition(PlacekeyFormat.WHAT_SEPARATOR)
        if not separator:
            if _WHERE_RE.match(placekey):
                return PlacekeyFormat.WHAT_SEPARATOR + placekey
            return placekey

        if not what:
            return placekey

        bare = PlacekeyFormat.WHAT_SEPARATOR + where
        if _SUFFIXED_PREFIX_RE.match(what):
            return bare
        if _REPAIRABLE_WHAT_RE.match(what):
            size = PlacekeyFormat.TUPLE_LENGTH
            return f"{what[:size]}{PlacekeyFormat.TUPLE_SEPARATOR}{what[size:]}{bare}"
        if _NUMERIC_PREFIX_RE.match(what):
            return bare
        return placekey


_default_validator: PlacekeyValidator | None = None


def _get_default() -> PlacekeyValidator:
    global _default_validator  # noqa: PLW0603
    if _default_validator is None:
        _default_validator = PlacekeyValidator()
    return _default_validator


def is_valid_format(placekey: Any) -> bool:
    """Module-level shortcut for ``PlacekeyValidator().is_valid_format``."""
    return _get_default().is_valid_format(placekey)


def where_part_is_valid(where: str) -> bool:
    return _get_default().where_part_is_valid(where)


def normalize(placekey: Any) -> Any:
    return _get_default().normalize(placekey)
