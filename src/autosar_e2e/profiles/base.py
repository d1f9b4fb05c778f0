"""Abstract interface and shared check logic for E2E profile engines.

Design:
- E2EProfile: interface every engine implements (protect/check + state)
- BaseProfile: counter state and the common receive-side check sequence,
  used by the seven basic profiles
- Composite profiles (4M, 7M) implement E2EProfile by wrapping a basic engine

An engine instance holds the sequence state for exactly one sender or one
receiver on one logical channel. It is not thread-safe.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Generic, Optional, TypeVar

from ..common.counter import CounterDomain
from ..common.field_ops import ReadableBuffer, WritableBuffer
from ..config import ProfileConfig
from ..exceptions import ConfigurationError
from ..status import ProtectionStatus

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT", bound=ProfileConfig)


@dataclass(frozen=True)
class CheckItems:
    """Values read from (and recomputed over) one received buffer.

    Optional pairs are left as None by profiles that do not transmit the
    corresponding field.
    """

    rx_crc: int
    computed_crc: int
    rx_counter: int
    rx_data_id: Optional[int] = None
    expected_data_id: Optional[int] = None
    rx_data_length: Optional[int] = None
    data_length: Optional[int] = None


class E2EProfile(ABC):
    """Interface of an E2E protection engine.

    Examples:
        ```python
        from autosar_e2e import Profile4, ProtectionStatus

        sender = Profile4()
        receiver = Profile4()

        data = bytearray(16)
        sender.protect(data)
        assert receiver.check(data) is ProtectionStatus.OK
        ```
    """

    @property
    @abstractmethod
    def config(self) -> ProfileConfig:
        """Configuration the engine was built with."""

    @property
    @abstractmethod
    def counter(self) -> int:
        """Current sequence counter value."""

    @property
    @abstractmethod
    def initialized(self) -> bool:
        """True once a check() returned OK or OK_SOME_LOST."""

    @abstractmethod
    def protect(self, data: WritableBuffer) -> None:
        """Write the E2E header into ``data`` in place and advance the counter.

        Args:
            data: Buffer to protect; only the header bytes are modified

        Raises:
            DataFormatError: If the buffer size violates the profile's length
                contract. The engine state is unchanged.
            TypeError: If ``data`` is not writable
        """

    @abstractmethod
    def check(self, data: ReadableBuffer) -> ProtectionStatus:
        """Verify the E2E header of a received buffer.

        Args:
            data: Received buffer; never modified

        Returns:
            Outcome of the check

        Raises:
            DataFormatError: If the buffer size violates the profile's length
                contract. The engine state is unchanged.
        """

    @staticmethod
    def _require_writable(data: WritableBuffer) -> None:
        if isinstance(data, bytes) or (isinstance(data, memoryview) and data.readonly):
            raise TypeError(
                f"protect() needs a writable buffer such as bytearray, got {type(data).__name__}"
            )


class BaseProfile(E2EProfile, Generic[ConfigT]):
    """Counter state and check sequence shared by the basic profiles.

    Subclasses set ``domain`` and ``config_class``, validate their
    configuration in ``_validate_config()`` and implement protect()/check().
    check() implementations read the header into a CheckItems and hand it to
    ``_evaluate()``.
    """

    domain: ClassVar[CounterDomain]
    config_class: ClassVar[type[ProfileConfig]]

    def __init__(self, config: Optional[ConfigT] = None) -> None:
        """Build an engine with fresh state (counter 0, not initialized).

        Args:
            config: Profile configuration, or None for the profile defaults

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        if config is None:
            config = self.config_class()  # type: ignore[assignment]
        if not isinstance(config, self.config_class):
            raise ConfigurationError(
                f"{type(self).__name__} requires a {self.config_class.__name__}, "
                f"got {type(config).__name__}"
            )
        # model_copy(update=...) bypasses field validation
        self.config_class(**config.model_dump())
        self._validate_config(config)  # type: ignore[arg-type]

        self._config: ConfigT = config  # type: ignore[assignment]
        self._counter = 0
        self._initialized = False

        logger.debug("Created %s with %r", type(self).__name__, config)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(counter={self._counter}, "
            f"initialized={self._initialized})"
        )

    @property
    def config(self) -> ConfigT:
        return self._config

    @property
    def counter(self) -> int:
        return self._counter

    @property
    def initialized(self) -> bool:
        return self._initialized

    @abstractmethod
    def _validate_config(self, config: ConfigT) -> None:
        """Raise ConfigurationError if ``config`` is unusable."""

    def _advance_counter(self) -> None:
        self._counter = self.domain.increment(self._counter)

    def _evaluate(self, items: CheckItems) -> ProtectionStatus:
        """Run the receive-side checks in order and update the state.

        CRC, Data ID and length failures leave the state untouched. Once they
        pass, the counter is classified and the engine resynchronizes to the
        received counter, whatever the classification.
        """
        name = type(self).__name__

        if items.computed_crc != items.rx_crc:
            logger.debug(
                "%s: CRC mismatch (received 0x%X, computed 0x%X)",
                name,
                items.rx_crc,
                items.computed_crc,
            )
            return ProtectionStatus.CRC_ERROR

        if items.expected_data_id is not None and items.rx_data_id != items.expected_data_id:
            logger.debug(
                "%s: Data ID mismatch (received 0x%X, expected 0x%X)",
                name,
                items.rx_data_id,
                items.expected_data_id,
            )
            return ProtectionStatus.DATA_ID_ERROR

        if items.data_length is not None and items.rx_data_length != items.data_length:
            logger.debug(
                "%s: length mismatch (header says %d bytes, buffer has %d)",
                name,
                items.rx_data_length,
                items.data_length,
            )
            return ProtectionStatus.DATA_LENGTH_ERROR

        # A counter outside the domain cannot come from a conforming sender
        if not self.domain.contains(items.rx_counter):
            logger.debug("%s: invalid counter value %d", name, items.rx_counter)
            return ProtectionStatus.WRONG_SEQUENCE

        status = self.domain.classify(
            self._counter,
            items.rx_counter,
            self._config.max_delta_counter,  # type: ignore[attr-defined]
            self._initialized,
        )
        if status is not ProtectionStatus.OK:
            logger.debug(
                "%s: counter %d after %d -> %s",
                name,
                items.rx_counter,
                self._counter,
                status.name,
            )

        self._counter = items.rx_counter
        if status.is_ok:
            self._initialized = True
        return status
