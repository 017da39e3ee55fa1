"""Packet utilisation services for spacecraft on-board software.

Parameters and parameter monitoring, packet stores, time-based scheduling,
a connection test service and CRC-16 checksums.
"""

__version__ = "0.1.0"