# halmock

Mocked peripheral devices for testing hardware drivers on the host,
with no hardware attached.

You load each mock with a list of expected transactions. Your driver then
talks to the mock as it would to a real device, and each call is checked
against the next expectation in order. A mismatch raises
`halmock.common.ExpectationError`, which is a subclass of `AssertionError`.
Its message says what went wrong. When the test ends, call `done()` to
confirm that every expectation was consumed.

## Installation

```
pip install halmock
```

## What is included

| Module | Contents |
| --- | --- |
| `halmock.common` | `Generic` expectation queue, `ExpectationError`, `DoneCallDetector` |
| `halmock.eh0.error` | `MockError`, `ErrorKind`, `WouldBlock` |
| `halmock.eh0.digital` | input and output pins, toggling, PWM pins |
| `halmock.eh0.spi` | SPI write, write from an iterable, transfer, full-duplex send and read |
| `halmock.eh0.i2c` | I2C read, write, write-read and their iterable variants |
| `halmock.eh0.serial` | serial read, write and flush, plus blocking `bwrite_all` and `bflush` |
| `halmock.eh0.adc` | one-shot ADC reads on `MockChan0`, `MockChan1` and `MockChan2` |
| `halmock.eh0.delay` | `NoopDelay` and `StdSleep` with `delay_us` and `delay_ms` |
| `halmock.eh0.timer` | `MockClock` and `MockTimer` for simulated time |
| `halmock.eh1.delay` | `CheckedDelay` with expectations, plus `NoopDelay` and `StdSleep`; each has blocking `delay_ns/us/ms` and async `adelay_ns/us/ms` methods |

## Example: I2C

```python
from halmock.eh0.i2c import Mock, Transaction

i2c = Mock([
    Transaction.write(0xAA, [1, 2]),
    Transaction.read(0xBB, [3, 4]),
])

i2c.write(0xAA, [1, 2])
assert i2c.read(0xBB, 2) == bytes([3, 4])

i2c.done()
```

Reads and transfers return `bytes`. Pass the expected length to `read` and
`write_read`; a length that differs from the prepared response is an
`ExpectationError`.

## Testing error handling

You can attach an error to a transaction. The call still checks its mode,
its address and its data, and then raises the error:

```python
import pytest

from halmock.eh0.error import ErrorKind, MockError
from halmock.eh0.i2c import Mock, Transaction

i2c = Mock([Transaction.read(0xBB, [3, 4]).with_error(MockError(ErrorKind.OTHER))])

with pytest.raises(MockError):
    i2c.read(0xBB, 2)

i2c.done()
```

`MockError.from_os_error()` builds a `MockError` from the category of an
`OSError`.

## Digital pins

```python
from halmock.eh0.digital import Mock, State, Transaction

pin = Mock([
    Transaction.get(State.HIGH),
    Transaction.set(State.LOW),
    Transaction.toggle(),
    Transaction.set_duty(500),
])

assert pin.is_high()
pin.set_low()
pin.toggle()
pin.set_duty(500)
pin.done()
```

Errors can be attached only to get, set and toggle transactions. Calling
`with_error` on any other transaction raises `ExpectationError`.

## Serial

```python
from halmock.eh0.error import WouldBlock
from halmock.eh0.serial import Mock, Transaction

serial = Mock([
    Transaction.read_many(b"xy"),
    Transaction.read_error(WouldBlock()),
    Transaction.write_many([1, 2]),
    Transaction.flush(),
])

assert serial.read() == ord("x")
assert serial.read() == ord("y")
try:
    serial.read()
except WouldBlock:
    pass
serial.bwrite_all([1, 2])
serial.bflush()
serial.done()
```

`bwrite_all` and `bflush` call `write` and `flush` again for as long as
those raise `WouldBlock`.

## Delays

```python
from halmock.eh1.delay import CheckedDelay, NoopDelay, Transaction

delay = CheckedDelay([
    Transaction.delay_ms(50),
    Transaction.delay_us(60_000),
    Transaction.delay_ms(70).wait(),   # this one really sleeps
])
delay.delay_ms(50)
delay.delay_ms(60)   # compared in nanoseconds, so this matches delay_us(60_000)
delay.delay_ms(70)
delay.done()

NoopDelay().delay_ms(1000)   # returns at once
```

`Transaction.delay_*` expectations accept either a blocking or an async
call. `blocking_delay_*` accepts only the blocking methods, and
`async_delay_*` accepts only the async `adelay_*` methods. Delay values
must fit in an unsigned 32-bit integer.

## Simulated time

```python
from datetime import timedelta

from halmock.eh0.error import WouldBlock
from halmock.eh0.timer import MockClock

clock = MockClock()
timer = clock.get_timer()
timer.start(100)   # nanoseconds; a timedelta also works

clock.tick(50)
try:
    timer.wait()
except WouldBlock:
    pass

clock.tick(timedelta(microseconds=0) + timedelta(0))
clock.tick(50)
timer.wait()   # the period has run out; the next one starts now
assert clock.elapsed() == 100
```

`timer.cancel()` stops the timer. After that, `wait()` raises
`WouldBlock` until the timer is started again.

## Sharing a mock with a driver

`clone()` returns a handle that shares its expectations with the
original. Hand one handle to the driver and keep the other to call
`done()`. Call `done()` exactly once for each set of expectations;
a second call raises `ExpectationError`. `update_expectations()` first
checks that the current set has been consumed, then loads the new one.
`expect()` is a deprecated alias for `update_expectations()`.

If a mock is garbage-collected without `done()` having been called, a
`ResourceWarning` is emitted.

## What this package does not do

The mocks never touch real hardware. They only check calls against
expectations and return prepared values. `halmock.eh1` holds only the
delay mocks. The pin, SPI, I2C and serial mocks exist only in
`halmock.eh0`.