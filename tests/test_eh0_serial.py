import pytest

from halmock.common import ExpectationError
from halmock.eh0.error import ErrorKind, MockError, WouldBlock
from halmock.eh0.serial import Mock, Transaction


def test_serial_mock_read():
    ser = Mock([Transaction.read(0x54)])
    assert ser.read() == 0x54
    ser.done()


def test_serial_mock_write_single_value_nonblocking():
    ser = Mock([Transaction.write(0xAB)])
    ser.write(0xAB)
    ser.done()
    with pytest.raises(ExpectationError, match="called serial::write with no expectation"):
        ser.write(0xAB)


def test_serial_mock_write_many_values_nonblocking():
    ser = Mock([Transaction.write_many([0xAB, 0xCD, 0xEF])])
    ser.write(0xAB)
    ser.write(0xCD)
    ser.write(0xEF)
    ser.done()
    with pytest.raises(ExpectationError):
        ser.write(0x00)


def test_serial_mock_read_many_values_nonblocking():
    ser = Mock([Transaction.read_many([0xAB, 0xCD, 0xEF])])
    assert ser.read() == 0xAB
    assert ser.read() == 0xCD
    assert ser.read() == 0xEF
    ser.done()


def test_serial_mock_read_many_bytes():
    ser = Mock([Transaction.read(0x0A), Transaction.read_many(b"xy")])
    assert [ser.read(), ser.read(), ser.read()] == [0x0A, ord("x"), ord("y")]
    ser.done()


def test_serial_mock_blocking_write():
    ser = Mock([Transaction.write_many([0xAB, 0xCD, 0xEF])])
    ser.bwrite_all([0xAB, 0xCD, 0xEF])
    ser.done()
    with pytest.raises(ExpectationError, match="called twice"):
        ser.done()


def test_serial_mock_blocking_write_more_than_expected():
    ser = Mock([Transaction.write_many([0xAB, 0xCD])])
    with pytest.raises(ExpectationError, match="called serial::write with no expectation"):
        ser.bwrite_all([0xAB, 0xCD, 0xEF])


def test_serial_mock_blocking_write_not_enough():
    ser = Mock([Transaction.write_many([0xAB, 0xCD, 0xEF, 0x00])])
    ser.bwrite_all([0xAB, 0xCD, 0xEF])
    with pytest.raises(
        ExpectationError,
        match="serial mock has unsatisfied expectations after call to done",
    ):
        ser.done()


def test_serial_mock_wrong_write():
    ser = Mock([Transaction.write(0x12)])
    with pytest.raises(
        ExpectationError,
        match="serial::write expected to write 18 but actually wrote 20",
    ):
        ser.write(0x14)


def test_serial_mock_flush():
    ser = Mock([Transaction.flush()])
    ser.flush()
    ser.done()
    with pytest.raises(ExpectationError, match="called serial::flush with no expectation"):
        ser.flush()


def test_serial_mock_blocking_flush():
    ser = Mock([Transaction.flush()])
    ser.bflush()
    ser.done()
    with pytest.raises(ExpectationError):
        ser.bflush()


def test_serial_mock_blocking_flush_retries_would_block():
    ser = Mock([Transaction.flush_error(WouldBlock()), Transaction.flush()])
    ser.bflush()
    ser.done()
    with pytest.raises(ExpectationError):
        ser.flush()


def test_serial_mock_blocking_write_retries_would_block():
    ser = Mock([Transaction.write_error(1, WouldBlock()), Transaction.write(1)])
    ser.bwrite_all([1])
    ser.done()
    with pytest.raises(ExpectationError):
        ser.write(1)


def test_serial_mock_pending_transactions():
    ser = Mock([Transaction.read(0x54)])
    with pytest.raises(
        ExpectationError,
        match="serial mock has unsatisfied expectations after call to done",
    ):
        ser.done()


def test_serial_mock_reuse_pending_transactions():
    ts = [Transaction.read(0x54)]
    ser = Mock(ts)
    assert ser.read() == 0x54
    ser.done()
    ser.update_expectations(ts)
    with pytest.raises(
        ExpectationError,
        match="serial mock has unsatisfied expectations after call to done",
    ):
        ser.done()


def test_serial_mock_update_expectations_after_consumed():
    ser = Mock([Transaction.read(1)])
    assert ser.read() == 1
    ser.done()
    ser.update_expectations([Transaction.read(2)])
    assert ser.read() == 2
    ser.done()


def test_serial_mock_expected_read():
    ser = Mock([Transaction.read(0x54)])
    with pytest.raises(ExpectationError) as info:
        ser.bwrite_all([0x77])
    assert str(info.value) == (
        "expected to perform a serial transaction 'Read(84)' "
        "but instead did a write of 119"
    )


def test_serial_mock_expected_write():
    ser = Mock([Transaction.write(0x54)])
    with pytest.raises(ExpectationError) as info:
        ser.flush()
    assert str(info.value) == (
        "expected to perform a serial transaction 'Write(84)' "
        "but instead did a flush"
    )


def test_serial_mock_expected_flush():
    ser = Mock([Transaction.flush()])
    with pytest.raises(ExpectationError) as info:
        ser.read()
    assert str(info.value) == (
        "expected to perform a serial transaction 'Flush', but instead did a read"
    )


def test_serial_mock_read_error():
    error = WouldBlock()
    ser = Mock([Transaction.read_error(error)])
    with pytest.raises(WouldBlock) as info:
        ser.read()
    assert info.value == error
    ser.done()


def test_serial_mock_write_error():
    error = MockError(ErrorKind.NOT_CONNECTED)
    ser = Mock([Transaction.write_error(42, error)])
    with pytest.raises(MockError) as info:
        ser.write(42)
    assert info.value == error
    ser.done()


def test_serial_mock_write_error_wrong_data():
    error = MockError(ErrorKind.NOT_CONNECTED)
    ser = Mock([Transaction.write_error(42, error)])
    with pytest.raises(
        ExpectationError,
        match="serial::write expected to write 42 but actually wrote 23",
    ):
        ser.write(23)


def test_serial_mock_flush_error():
    error = MockError(ErrorKind.TIMED_OUT)
    ser = Mock([Transaction.flush_error(error)])
    with pytest.raises(MockError) as info:
        ser.flush()
    assert info.value.kind is ErrorKind.TIMED_OUT
    ser.done()


def test_error_sequence_from_usage():
    ser = Mock(
        [
            Transaction.read(42),
            Transaction.read_error(WouldBlock()),
            Transaction.write_error(23, MockError(ErrorKind.OTHER)),
            Transaction.flush_error(MockError(ErrorKind.INTERRUPTED)),
        ]
    )
    assert ser.read() == 42
    with pytest.raises(WouldBlock):
        ser.read()
    with pytest.raises(MockError) as write_info:
        ser.write(23)
    assert write_info.value == MockError(ErrorKind.OTHER)
    with pytest.raises(MockError) as flush_info:
        ser.flush()
    assert flush_info.value == MockError(ErrorKind.INTERRUPTED)
    ser.done()


def test_error_transactions_reject_other_types():
    with pytest.raises(TypeError):
        Transaction.read_error(ValueError("bad"))


def test_clone_shares_expectations():
    ser = Mock([Transaction.read(1), Transaction.write(2)])
    other = ser.clone()
    assert ser.read() == 1
    other.write(2)
    other.done()
    with pytest.raises(ExpectationError, match="called twice"):
        ser.done()


def test_expect_is_deprecated_alias():
    ser = Mock()
    with pytest.warns(DeprecationWarning):
        ser.expect([Transaction.read(7)])
    assert ser.read() == 7
    ser.done()


def test_read_without_expectation():
    ser = Mock()
    with pytest.raises(ExpectationError, match="called serial::read with no expectation"):
        ser.read()