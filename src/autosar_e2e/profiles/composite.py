"""Message-oriented profiles (4M, 7M) built on top of a basic profile.

A composite profile adds a 4-byte extension word directly after the base
profile's header. The word is covered by the base profile's CRC::

    bits 31-30  message type    (e.g. 0 = request, 1 = response)
    bits 29-28  message result  (e.g. 0 = OK, 1 = error)
    bits 27-0   source id

protect() writes the extension word and then lets the base engine protect the
buffer. check() runs the base engine first; the extension word is compared
only when the base engine accepts the buffer.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

from ..common.field_ops import (
    ReadableBuffer,
    WritableBuffer,
    offset_bytes,
    read_u32_be,
    write_u32_be,
)
from ..common.validation import validate_header_fits, validate_header_in_buffer
from ..config import ProfileConfig
from ..exceptions import ConfigurationError
from ..status import ProtectionStatus
from .base import BaseProfile, E2EProfile

logger = logging.getLogger(__name__)

EXTENSION_LENGTH = 4
SOURCE_ID_MASK = 0x0FFFFFFF
MAX_MESSAGE_FIELD = 0x03

_TYPE_SHIFT = 30
_RESULT_SHIFT = 28


def pack_extension(message_type: int, message_result: int, source_id: int) -> int:
    """Build the extension word; upper source id bits are dropped.

    Example:
        >>> hex(pack_extension(1, 1, 0x123456))
        '0x50123456'
    """
    return (
        (message_type & MAX_MESSAGE_FIELD) << _TYPE_SHIFT
        | (message_result & MAX_MESSAGE_FIELD) << _RESULT_SHIFT
        | (source_id & SOURCE_ID_MASK)
    )


def unpack_extension(word: int) -> tuple[int, int, int]:
    """Split an extension word into (message_type, message_result, source_id)."""
    return (
        (word >> _TYPE_SHIFT) & MAX_MESSAGE_FIELD,
        (word >> _RESULT_SHIFT) & MAX_MESSAGE_FIELD,
        word & SOURCE_ID_MASK,
    )


def _check_message_field(name: str, value: int) -> int:
    if not 0 <= value <= MAX_MESSAGE_FIELD:
        raise ConfigurationError(f"{name} must be between 0 and {MAX_MESSAGE_FIELD}, got {value}")
    return value


class CompositeProfile(E2EProfile):
    """Basic profile engine plus message type, result and source id.

    Subclasses set ``base_class`` and ``extension_offset`` (the base header
    length in bytes).

    ``message_type``, ``message_result`` and ``source_id`` may be changed
    between calls, e.g. a server switching between response and error.
    """

    base_class: ClassVar[type[BaseProfile]]
    extension_offset: ClassVar[int]

    def __init__(
        self,
        config: Optional[ProfileConfig] = None,
        *,
        message_type: int = 0,
        message_result: int = 0,
        source_id: int = 0x0A0B0C0D,
    ) -> None:
        """Build a composite engine.

        Args:
            config: Configuration of the base profile, or None for its defaults
            message_type: 2-bit message type
            message_result: 2-bit message result
            source_id: Source id (only the low 28 bits are transmitted)

        Raises:
            ConfigurationError: If the configuration is invalid or the
                extended header does not fit in max_data_length
        """
        self._base = self.base_class(config)
        base_config = self._base.config
        validate_header_fits(
            base_config.offset,  # type: ignore[attr-defined]
            self.extension_offset + EXTENSION_LENGTH,
            base_config.max_data_length,  # type: ignore[attr-defined]
        )

        self.message_type = message_type
        self.message_result = message_result
        self.source_id = source_id

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(counter={self.counter}, initialized={self.initialized}, "
            f"message_type={self.message_type}, message_result={self.message_result}, "
            f"source_id=0x{self.source_id:X})"
        )

    @property
    def message_type(self) -> int:
        return self._message_type

    @message_type.setter
    def message_type(self, value: int) -> None:
        self._message_type = _check_message_field("message_type", value)

    @property
    def message_result(self) -> int:
        return self._message_result

    @message_result.setter
    def message_result(self, value: int) -> None:
        self._message_result = _check_message_field("message_result", value)

    @property
    def source_id(self) -> int:
        return self._source_id

    @source_id.setter
    def source_id(self, value: int) -> None:
        if value < 0:
            raise ConfigurationError(f"source_id must not be negative, got {value}")
        self._source_id = value

    @property
    def config(self) -> ProfileConfig:
        return self._base.config

    @property
    def counter(self) -> int:
        return self._base.counter

    @property
    def initialized(self) -> bool:
        return self._base.initialized

    @property
    def _extension_pos(self) -> int:
        return offset_bytes(self._base.config.offset) + self.extension_offset  # type: ignore[attr-defined]

    def _validate_length(self, data: ReadableBuffer) -> None:
        self._base._validate_length(data)  # type: ignore[attr-defined]
        validate_header_in_buffer(len(data), self._extension_pos, EXTENSION_LENGTH)

    def protect(self, data: WritableBuffer) -> None:
        self._require_writable(data)
        self._validate_length(data)

        write_u32_be(
            data,
            self._extension_pos,
            pack_extension(self.message_type, self.message_result, self.source_id),
        )
        self._base.protect(data)

    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        self._validate_length(data)

        status = self._base.check(data)
        if not status.is_ok:
            return status

        rx_type, rx_result, rx_source_id = unpack_extension(
            read_u32_be(data, self._extension_pos)
        )
        name = type(self).__name__
        if rx_source_id != self.source_id & SOURCE_ID_MASK:
            logger.debug(
                "%s: source id mismatch (received 0x%X, expected 0x%X)",
                name,
                rx_source_id,
                self.source_id & SOURCE_ID_MASK,
            )
            return ProtectionStatus.SOURCE_ID_ERROR
        if rx_result != self.message_result:
            logger.debug(
                "%s: message result mismatch (received %d, expected %d)",
                name,
                rx_result,
                self.message_result,
            )
            return ProtectionStatus.MESSAGE_RESULT_ERROR
        if rx_type != self.message_type:
            logger.debug(
                "%s: message type mismatch (received %d, expected %d)",
                name,
                rx_type,
                self.message_type,
            )
            return ProtectionStatus.MESSAGE_TYPE_ERROR
        return status
