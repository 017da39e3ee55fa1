"""Parameters: stored, lazily fetched and notifying values addressed by ID."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

_UINT64_MASK = (1 << 64) - 1


class ParameterReadOnlyError(Exception):
    """Raised when a value is written to a parameter that cannot be written."""


class ParameterValueMissingError(Exception):
    """Raised when a parameter has no way to produce its current value.

    The fallback value that would have been reported is kept in ``fallback``.
    """

    def __init__(self, fallback: Any) -> None:
        super().__init__(f"parameter value missing, fallback is {fallback!r}")
        self.fallback = fallback


def _is_arithmetic(value: Any) -> bool:
    return isinstance(value, (int, float))


def _as_float(value: Any) -> float:
    return float(value) if _is_arithmetic(value) else 0.0


def _as_uint64(value: Any) -> int:
    return int(value) & _UINT64_MASK if _is_arithmetic(value) else 0


class ParameterBase(ABC):
    """Common interface of every parameter handled by the parameter service."""

    @abstractmethod
    def value_as_float(self) -> float:
        """Return the value as a float, or 0.0 if it is not numeric."""

    @abstractmethod
    def value_as_uint64(self) -> int:
        """Return the value as an unsigned 64-bit integer, or 0 if it is not numeric."""

    @abstractmethod
    def report_value(self) -> Any:
        """Return the value to be placed in a parameter report."""

    @abstractmethod
    def write(self, value: Any) -> None:
        """Set the value as received in a parameter update request."""


class Parameter(ParameterBase):
    """A parameter that keeps its current value in memory."""

    def __init__(self, initial_value: Any) -> None:
        self.value = initial_value

    def value_as_float(self) -> float:
        return _as_float(self.value)

    def value_as_uint64(self) -> int:
        return _as_uint64(self.value)

    def report_value(self) -> Any:
        return self.value

    def write(self, value: Any) -> None:
        self.value = value


class LazyParameter(ParameterBase):
    """A read-only parameter whose value is fetched by calling a getter on demand."""

    def __init__(self, getter: Callable[[], Any] | None = None, fallback: Any = 0) -> None:
        self._getter = getter
        self.fallback = fallback

    def set_getter(self, getter: Callable[[], Any]) -> None:
        """Use ``getter`` to fetch the value from now on."""
        self._getter = getter

    def unset_getter(self) -> None:
        """Remove the getter, so that no value can be fetched."""
        self._getter = None

    def fetch(self) -> Any | None:
        """Call the getter and return its value, or None when there is no getter."""
        if self._getter is None:
            return None
        return self._getter()

    def _value_or_fallback(self) -> Any:
        value = self.fetch()
        return self.fallback if value is None else value

    def value_as_float(self) -> float:
        return _as_float(self._value_or_fallback())

    def value_as_uint64(self) -> int:
        return _as_uint64(self._value_or_fallback())

    def report_value(self) -> Any:
        """Return the fetched value; raise ParameterValueMissingError without a getter."""
        if self._getter is None:
            raise ParameterValueMissingError(self.fallback)
        return self._getter()

    def write(self, value: Any) -> None:
        """Always raises ParameterReadOnlyError: lazy parameters are read-only."""
        raise ParameterReadOnlyError("lazy parameters cannot be written")


class NotifyParameter(Parameter):
    """A parameter that calls a notifier function when it is written to.

    Assigning ``value`` directly does not call the notifier; use
    ``set_value_loudly`` for that.
    """

    def __init__(
        self, initial_value: Any, notifier: Callable[[Any], None] | None = None
    ) -> None:
        super().__init__(initial_value)
        self._notifier = notifier

    def set_value_loudly(self, value: Any) -> None:
        """Set the value and call the notifier, if there is one."""
        self.value = value
        self.notify()

    def notify(self) -> None:
        """Call the notifier with the current value, without changing it."""
        if self._notifier is not None:
            self._notifier(self.value)

    def write(self, value: Any) -> None:
        super().write(value)
        self.notify()

    def set_notifier(self, notifier: Callable[[Any], None], call: bool = True) -> None:
        """Install ``notifier``; when ``call`` is true, call it right away."""
        self._notifier = notifier
        if call:
            notifier(self.value)

    def unset_notifier(self) -> None:
        """Remove the notifier so that writes no longer call anything."""
        self._notifier = None