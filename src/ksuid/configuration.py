"""
configuration.py - Source of random payloads.

Every generated KSUID needs 16 bytes of payload. The bytes come from a
Configuration's random generator, which is validated when it is assigned
so a bad generator fails at startup instead of on the hot path.

A process-wide default Configuration backs the module-level helpers.
Callers that want isolation (tests, multi-tenant services) pass their own
Configuration, or any object with a generate_payload() method, through
the config= argument of the generation functions.
"""

import logging
import secrets
import threading
from typing import Callable, Protocol, runtime_checkable

from ksuid.config import PAYLOAD_BYTES
from ksuid.errors import ConfigurationError

logger = logging.getLogger(__name__)

RandomGenerator = Callable[[], bytes]


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can produce a 16-byte payload."""

    def generate_payload(self) -> bytes:
        ...


def default_generator() -> bytes:
    """Generate a payload from the operating system CSPRNG."""
    return secrets.token_bytes(PAYLOAD_BYTES)


class Configuration:
    """
    Holds the random generator used for payloads.

    Assignment validates the generator and swaps the reference under a
    lock, so readers always see either the old or the new generator.
    """

    def __init__(self, random_generator: RandomGenerator | None = None) -> None:
        self._lock = threading.Lock()
        self._random_generator: RandomGenerator = default_generator
        if random_generator is not None:
            self.random_generator = random_generator

    @staticmethod
    def default_generator() -> RandomGenerator:
        """Return the default, cryptographically secure generator."""
        return default_generator

    @property
    def random_generator(self) -> RandomGenerator:
        """The callable currently used to generate payloads."""
        with self._lock:
            return self._random_generator

    @random_generator.setter
    def random_generator(self, generator: RandomGenerator) -> None:
        self._assert_generator_is_callable(generator)
        self._assert_payload_size(generator)

        with self._lock:
            self._random_generator = generator
        logger.debug("Installed random generator %r", generator)

    def reset(self) -> None:
        """Restore the default generator."""
        with self._lock:
            self._random_generator = default_generator

    def generate_payload(self) -> bytes:
        """
        Generate one payload with the active generator.

        Returns:
            16 bytes of payload

        Raises:
            ConfigurationError: If the generator stops producing 16 bytes
        """
        payload = self.random_generator()
        self._check_length(payload)
        return bytes(payload)

    @staticmethod
    def _assert_generator_is_callable(generator: object) -> None:
        if not callable(generator):
            raise ConfigurationError(f"Random generator {generator!r} is not callable")

    @classmethod
    def _assert_payload_size(cls, generator: RandomGenerator) -> None:
        cls._check_length(generator())

    @staticmethod
    def _check_length(payload: bytes) -> None:
        try:
            length = len(payload)
        except TypeError as e:
            raise ConfigurationError(
                f"Random generator returned {type(payload).__name__}, not bytes"
            ) from e

        if length != PAYLOAD_BYTES:
            raise ConfigurationError(
                "Random generator generates the wrong number of bytes "
                f"({length} generated, {PAYLOAD_BYTES} expected)",
                generated=length,
                expected=PAYLOAD_BYTES,
            )


_default_config = Configuration()


def get_config() -> Configuration:
    """Return the process-wide default configuration."""
    return _default_config


def configure(generator: RandomGenerator | None = None) -> Configuration:
    """
    Install a generator on the process-wide configuration.

    Args:
        generator: Zero-argument callable returning 16 bytes, or None to
            leave the current generator in place

    Returns:
        The process-wide configuration

    Raises:
        ConfigurationError: If the generator is invalid
    """
    if generator is not None:
        _default_config.random_generator = generator
    return _default_config


def reset_config() -> None:
    """Restore the default generator on the process-wide configuration."""
    _default_config.reset()


def payload_from(config: "Configuration | RandomSource | None" = None) -> bytes:
    """
    Generate a payload from an injected source or the process-wide default.

    Raises:
        ConfigurationError: If the source does not produce 16 bytes
    """
    source = config if config is not None else _default_config
    if isinstance(source, Configuration):
        return source.generate_payload()
    if not isinstance(source, RandomSource):
        raise ConfigurationError(f"Random source {source!r} has no generate_payload()")

    payload = source.generate_payload()
    Configuration._check_length(payload)
    return bytes(payload)
