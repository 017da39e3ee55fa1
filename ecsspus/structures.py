"""Housekeeping structures and the forwarding configuration of application processes."""

from __future__ import annotations

from dataclasses import dataclass, field

from ecsspus.definitions import (
    ECSS_MAX_APPLICATIONS_SERVICES_COMBINATIONS,
    ECSS_MAX_REPORT_TYPE_DEFINITIONS,
    ECSS_MAX_SIMPLY_COMMUTATED_PARAMETERS,
    ApplicationProcessId,
    CollectionInterval,
    MessageTypeNum,
    ParameterId,
    ParameterReportStructureId,
    ServiceTypeNum,
)


@dataclass
class HousekeepingStructure:
    """A housekeeping report structure holding simply commutated parameters.

    ``collection_interval`` is expressed in multiples of the minimum sampling
    interval.
    """

    structure_id: ParameterReportStructureId = 0
    collection_interval: CollectionInterval = 0
    periodic_generation_action_status: bool = False
    simply_commutated_parameter_ids: list[ParameterId] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.simply_commutated_parameter_ids) > ECSS_MAX_SIMPLY_COMMUTATED_PARAMETERS:
            raise OverflowError(
                f"a housekeeping structure holds at most "
                f"{ECSS_MAX_SIMPLY_COMMUTATED_PARAMETERS} parameters"
            )

    def add_parameter(self, parameter_id: ParameterId) -> None:
        """Append ``parameter_id``; raise OverflowError when the structure is full."""
        if len(self.simply_commutated_parameter_ids) >= ECSS_MAX_SIMPLY_COMMUTATED_PARAMETERS:
            raise OverflowError(
                f"a housekeeping structure holds at most "
                f"{ECSS_MAX_SIMPLY_COMMUTATED_PARAMETERS} parameters"
            )
        self.simply_commutated_parameter_ids.append(parameter_id)


AppServiceKey = tuple[ApplicationProcessId, ServiceTypeNum]


@dataclass
class ApplicationProcessConfiguration:
    """Which report types of each (application, service) pair are forwarded.

    A report is forwarded only if its application and service pair has an entry
    in ``definitions`` and its message type is listed in that entry.
    """

    definitions: dict[AppServiceKey, list[MessageTypeNum]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if len(self.definitions) > ECSS_MAX_APPLICATIONS_SERVICES_COMBINATIONS:
            raise OverflowError(
                f"at most {ECSS_MAX_APPLICATIONS_SERVICES_COMBINATIONS} "
                "application and service pairs are supported"
            )
        for key, report_types in self.definitions.items():
            if len(report_types) > ECSS_MAX_REPORT_TYPE_DEFINITIONS:
                raise OverflowError(
                    f"{key} has more than {ECSS_MAX_REPORT_TYPE_DEFINITIONS} report types"
                )

    def is_forwarded(
        self,
        application_id: ApplicationProcessId,
        service_type: ServiceTypeNum,
        message_type: MessageTypeNum,
    ) -> bool:
        """Return True if the given report type is to be forwarded."""
        report_types = self.definitions.get((application_id, service_type))
        return report_types is not None and message_type in report_types