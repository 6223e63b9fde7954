"""
Shared fixtures: a fake serial device that stands in for pyserial.

The device is called like ``opener(config)`` and hands out FakePort
handles. Behaviour is scripted per baud rate so negotiation scenarios can
be described declaratively.
"""

import pytest
import serial


# =============================================================================
# FIXTURES AND MOCKS
# =============================================================================

class FakePort:
    """Mock serial handle for testing without hardware."""

    def __init__(self, device, config):
        self.device = device
        self.config = config
        self.written = []
        self.reads = []
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def write(self, data: bytes) -> int:
        baud = self.config.baud_rate
        if baud in self.device.write_errors:
            raise serial.SerialTimeoutException("Write timeout")
        self.written.append(bytes(data))
        if baud in self.device.short_writes:
            return len(data) - 1
        return len(data)

    def read(self, size: int = 1) -> bytes:
        baud = self.config.baud_rate
        self.reads.append(size)
        if baud in self.device.read_errors:
            raise serial.SerialException(
                "device reports readiness to read but returned no data"
            )
        return self.device.responses.get(baud, self.device.default_response)[:size]

    def close(self):
        self.close_calls += 1
        if self.device.close_error is not None:
            raise self.device.close_error


class FakeDevice:
    """
    Scripted device behind one or more port names.

    Args:
        responses: baud -> bytes returned by read
        default_response: returned for bauds not in ``responses`` (b"" = timeout)
        open_fails: bauds at which open raises
        write_errors / read_errors / short_writes: bauds with that failure
        ports: port names that exist (None = every name opens)
    """

    def __init__(self, responses=None, default_response=b"", open_fails=(),
                 write_errors=(), read_errors=(), short_writes=(), ports=None,
                 close_error=None):
        self.responses = dict(responses or {})
        self.default_response = default_response
        self.open_fails = set(open_fails)
        self.write_errors = set(write_errors)
        self.read_errors = set(read_errors)
        self.short_writes = set(short_writes)
        self.ports = None if ports is None else set(ports)
        self.close_error = close_error
        self.attempts = []
        self.handles = []

    def __call__(self, config):
        self.attempts.append(config)
        if self.ports is not None and config.port not in self.ports:
            raise serial.SerialException(
                f"could not open port {config.port}: [Errno 2] No such file or directory"
            )
        if config.baud_rate in self.open_fails:
            raise serial.SerialException(f"could not open port {config.port}")
        handle = FakePort(self, config)
        self.handles.append(handle)
        return handle

    @property
    def attempted_bauds(self):
        return [config.baud_rate for config in self.attempts]

    @property
    def open_count(self) -> int:
        return len(self.handles)

    @property
    def close_count(self) -> int:
        return sum(handle.close_calls for handle in self.handles)

    @property
    def written(self):
        return [data for handle in self.handles for data in handle.written]


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def device():
    """Device that opens everywhere and answers OK at every rate."""
    return FakeDevice(default_response=b"OK\r\n")


@pytest.fixture
def silent_device():
    """Device that opens everywhere but never answers."""
    return FakeDevice()
