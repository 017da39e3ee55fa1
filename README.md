# ecsspus

Building blocks for packet utilisation services in spacecraft on-board
software, in plain Python with no third-party dependencies. Requests and
reports are handled as Python values: services take arguments and return
lists and dataclasses, and record what went wrong in an `ErrorLog`.

## Modules

- `ecsspus.definitions`: sizes and limits shared by the services
  (for example `ECSS_MAX_PACKET_STORES`, `ECSS_TIME_MARGIN_FOR_ACTIVATION`,
  `APPLICATION_ID`), numeric type aliases, and `ChannelLimits`; the valid
  virtual channels are `VIRTUAL_CHANNEL_LIMITS` (1 to 10, inclusive, tested
  with `in`).
- `ecsspus.reporting`: the `InternalErrorType` and `ExecutionStartErrorType`
  enums, the `InternalError` exception, `assert_internal(condition, error)`
  and `ErrorLog` (`report`, `clear`, `count`, `errors`, `len()`, iteration).
- `ecsspus.crc`: `calculate_crc(data)` computes CRC-16/CCITT (polynomial
  0x1021, initial value 0xFFFF); `validate_crc(data)` returns 0 for data that
  ends with its own big-endian CRC.
- `ecsspus.clock`: `current_time_utc()` returns a `UTCTimestamp`;
  `current_time_cuc()` returns seconds since the UNIX epoch as a float.
- `ecsspus.utc_timestamp`: `UTCTimestamp`, a comparable date and time from
  1970 on. Invalid fields raise `InternalError`; a second value of 60 is
  accepted for leap seconds. `days_of_month()`, `repair()` (carries one
  overflow per field) and `str()` in the form `hour-minute-second -- day/month/year`.
- `ecsspus.parameters`: `Parameter` (holds a value), `LazyParameter` (calls a
  getter when read, read-only, with a fallback value) and `NotifyParameter`
  (calls a notifier on `write` or `set_value_loudly`). Errors:
  `ParameterReadOnlyError`, `ParameterValueMissingError`.
- `ecsspus.pmon`: parameter monitoring with `PMONExpectedValueCheck`,
  `PMONLimitCheck` and `PMONDeltaCheck`; each `perform_check()` updates
  `checking_status` (a `CheckingStatus`) and `repetition_counter`.
  `PMONDeltaCheck` takes a `clock` callable for its timestamps.
- `ecsspus.packet_store`: `PacketStore`, an in-memory store of
  `(timestamp, packet)` pairs holding at most 10 packets, with
  `add_packet`, `delete_until`, `packets_between`, `packets_after`,
  `packets_before` and `content_summary()` (a `ContentSummary`).
- `ecsspus.storage`: `StorageAndRetrievalService`, which creates, deletes,
  resizes and reconfigures packet stores (at most 4), copies packets between
  them by `TimeWindowType`, runs open and by-time-range retrieval state
  changes, and produces status, configuration and content summary reports.
- `ecsspus.test_service`: `TestService` answers `are_you_alive()` and
  `on_board_connection(application_id)` with report objects, kept in
  `reports` and passed to an optional sink.
- `ecsspus.scheduling`: `TimeBasedSchedulingService` keeps up to 10
  `ScheduledActivity` entries in release-time order, releases due requests
  to an `executor` callable, and supports time shifts, deletion and reports
  by `RequestID`.
- `ecsspus.structures`: `HousekeepingStructure` (up to 30 parameter IDs) and
  `ApplicationProcessConfiguration.is_forwarded(...)`.
- `ecsspus.parameter_service`: `ParameterService`, which registers up to 500
  parameters by ID, reports their values and writes new ones.

## Installation

```
pip install .
```

## Examples

Parameters and checksums:

```python
from ecsspus.crc import calculate_crc, validate_crc
from ecsspus.parameters import Parameter
from ecsspus.parameter_service import ParameterService

service = ParameterService()
service.add_parameter(7, Parameter(42))
print(service.report_parameters([7]))   # [(7, 42)]
print(service.set_parameters({7: 5, 99: 1}))  # [99]: unknown IDs are not set

checksum = calculate_crc(b"123456789")
print(validate_crc(b"123456789" + checksum.to_bytes(2, "big")))  # 0
```

Packet stores:

```python
from ecsspus.packet_store import PacketStoreType
from ecsspus.reporting import ExecutionStartErrorType
from ecsspus.storage import PacketStoreDefinition, StorageAndRetrievalService

storage = StorageAndRetrievalService()
storage.create_packet_stores([PacketStoreDefinition("ps1", 500, PacketStoreType.BOUNDED, 2)])
storage.add_telemetry("ps1", 10.0, "housekeeping")
print(storage.status_report())

storage.delete_packet_stores(["missing"])
print(storage.errors.count(ExecutionStartErrorType.NON_EXISTING_PACKET_STORE))  # 1
```

Time-based scheduling:

```python
from ecsspus.scheduling import RequestID, TimeBasedSchedulingService

scheduler = TimeBasedSchedulingService(executor=print, clock=lambda: 0.0)
scheduler.insert_activities(RequestID(application_id=1), [(100.0, "switch heater on")])
print(scheduler.execute_scheduled_activity(100.0))  # prints the request, then inf
```

## What the package does not do

- It does not encode or decode telecommand and telemetry packets: requests
  and reports are Python values, and `crc` is the only byte-level part.
- Packet stores and schedules live in memory only; nothing is saved to disk.
- There is no command-line tool and no network interface; released
  scheduled requests and test reports go to the callables you pass in.

## Running the tests

```
pip install .[test]
pytest
```