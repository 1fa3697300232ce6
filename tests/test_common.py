import gc

import pytest

from halmock.common import DoneCallDetector, ExpectationError, Generic


def test_success():
    mock = Generic([0, 1])
    assert next(mock) == 0
    assert next(mock) == 1
    with pytest.raises(StopIteration):
        next(mock)
    with pytest.raises(StopIteration):
        next(mock)
    mock.done()


def test_warn_if_dropped_without_done():
    mock = Generic([0, 1])
    assert next(mock) == 0
    assert next(mock) == 1
    with pytest.warns(ResourceWarning, match="dropped without calling the `.done\\(\\)` method"):
        del mock
        gc.collect()


def test_done_called_twice():
    mock = Generic([0, 1])
    assert next(mock) == 0
    assert next(mock) == 1
    mock.done()
    with pytest.raises(ExpectationError, match="The `.done\\(\\)` method was called twice!"):
        mock.done()


def test_done_with_pending_expectations():
    mock = Generic([5])
    with pytest.raises(ExpectationError, match="Not all expectations consumed"):
        mock.done()


def test_update_expectations_requires_consumption():
    mock = Generic([1])
    with pytest.raises(ExpectationError, match="Not all expectations consumed"):
        mock.update_expectations([2])


def test_update_expectations_after_done():
    mock = Generic([1])
    assert next(mock) == 1
    mock.done()
    mock.update_expectations([2, 3])
    assert list(mock) == [2, 3]
    mock.done()


def test_expect_is_deprecated_alias():
    mock = Generic([])
    with pytest.warns(DeprecationWarning):
        mock.expect([7])
    assert next(mock) == 7
    mock.done()


def test_clone_shares_state():
    mock = Generic(["a", "b"])
    other = mock.clone()
    assert next(mock) == "a"
    assert next(other) == "b"
    with pytest.raises(StopIteration):
        next(mock)
    other.done()
    with pytest.raises(ExpectationError, match="called twice"):
        mock.done()


def test_expectations_are_copied():
    source = [1, 2]
    mock = Generic(source)
    source.append(3)
    assert list(mock) == [1, 2]
    mock.done()


def test_detector_reset():
    detector = DoneCallDetector()
    detector.mark_as_called(True)
    with pytest.raises(ExpectationError):
        detector.mark_as_called(True)
    detector.mark_as_called(False)
    detector.reset()
    detector.mark_as_called(True)
    assert detector.called is True