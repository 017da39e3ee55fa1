"""The parameter management service: reading and writing parameters by ID."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ecsspus.definitions import ECSS_PARAMETER_COUNT, ParameterId
from ecsspus.parameters import (
    ParameterBase,
    ParameterReadOnlyError,
    ParameterValueMissingError,
)


class ParameterService:
    """Keeps parameters by ID and answers report and update requests.

    Unknown parameter IDs in a request are ignored.
    """

    SERVICE_TYPE = 20

    def __init__(self, parameters: Mapping[ParameterId, ParameterBase] | None = None) -> None:
        self._parameters: dict[ParameterId, ParameterBase] = {}
        for parameter_id, parameter in (parameters or {}).items():
            self.add_parameter(parameter_id, parameter)

    def __len__(self) -> int:
        return len(self._parameters)

    def add_parameter(self, parameter_id: ParameterId, parameter: ParameterBase) -> None:
        """Register ``parameter`` under ``parameter_id``; an existing one is kept."""
        if parameter_id in self._parameters:
            return
        if len(self._parameters) >= ECSS_PARAMETER_COUNT:
            raise OverflowError(f"at most {ECSS_PARAMETER_COUNT} parameters are supported")
        self._parameters[parameter_id] = parameter

    def parameter_exists(self, parameter_id: ParameterId) -> bool:
        return parameter_id in self._parameters

    def get_parameter(self, parameter_id: ParameterId) -> ParameterBase | None:
        """Return the parameter with ``parameter_id``, or None if there is none."""
        return self._parameters.get(parameter_id)

    def report_parameters(self, parameter_ids: Iterable[ParameterId]) -> list[tuple[ParameterId, Any]]:
        """Return ``(id, value)`` for each known ID, in request order.

        A parameter that cannot produce its value is reported with its fallback.
        """
        report = []
        for parameter_id in parameter_ids:
            parameter = self._parameters.get(parameter_id)
            if parameter is None:
                continue
            try:
                value = parameter.report_value()
            except ParameterValueMissingError as missing:
                value = missing.fallback
            report.append((parameter_id, value))
        return report

    def set_parameters(
        self,
        new_values: Mapping[ParameterId, Any] | Iterable[tuple[ParameterId, Any]],
    ) -> list[ParameterId]:
        """Write each value to its parameter; return the IDs that were not set.

        IDs are left unset when they are unknown or their parameter is read-only.
        """
        pairs = new_values.items() if isinstance(new_values, Mapping) else new_values
        not_set = []
        for parameter_id, value in pairs:
            parameter = self._parameters.get(parameter_id)
            if parameter is None:
                not_set.append(parameter_id)
                continue
            try:
                parameter.write(value)
            except ParameterReadOnlyError:
                not_set.append(parameter_id)
        return not_set