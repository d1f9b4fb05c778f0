"""Result of an E2E check."""

from __future__ import annotations

import enum


class ProtectionStatus(enum.Enum):
    """Outcome of checking one received buffer.

    Every value is a normal operating result; the application decides how to
    react (discard the sample, count errors, enter a safe state, ...).
    """

    OK = "ok"
    CRC_ERROR = "crc_error"
    DATA_ID_ERROR = "data_id_error"
    REPEATED = "repeated"
    OK_SOME_LOST = "ok_some_lost"
    WRONG_SEQUENCE = "wrong_sequence"
    DATA_LENGTH_ERROR = "data_length_error"
    SOURCE_ID_ERROR = "source_id_error"
    MESSAGE_TYPE_ERROR = "message_type_error"
    MESSAGE_RESULT_ERROR = "message_result_error"

    @property
    def is_ok(self) -> bool:
        """True if the data may be used (OK or OK_SOME_LOST)."""
        return self in (ProtectionStatus.OK, ProtectionStatus.OK_SOME_LOST)
