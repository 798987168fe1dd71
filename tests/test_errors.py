import pytest

from cubray.errors import MlxErrno, MlxError, strerror


def test_success_message():
    assert strerror(MlxErrno.SUCCESS) == "No Errors"


def test_dimension_message():
    assert strerror(MlxErrno.INVDIM) == (
        "The specified Width or Height dimensions are out of bounds"
    )


def test_invalid_image_message():
    assert strerror(MlxErrno.INVIMG) == (
        "The provided image is invalid, might indicate mismanagement of images"
    )


def test_last_code_message():
    assert strerror(MlxErrno.STRTOOBIG) == "String is too big to be drawn"


def test_plain_int_accepted():
    assert strerror(int(MlxErrno.MEMFAIL)) == "Failed to allocate memory"


@pytest.mark.parametrize("code", [-1, len(MlxErrno)])
def test_out_of_range_code(code):
    with pytest.raises(ValueError):
        strerror(code)


def test_every_code_has_distinct_message():
    messages = {strerror(code) for code in MlxErrno}
    assert len(messages) == len(MlxErrno)


def test_exception_carries_code_and_message():
    err = MlxError(MlxErrno.INVPOS)
    assert err.code is MlxErrno.INVPOS
    assert str(err) == strerror(MlxErrno.INVPOS)


def test_exception_converts_plain_int_code():
    err = MlxError(3)
    assert err.code is MlxErrno.INVPNG
    assert str(err) == "PNG file is invalid or corrupted"


def test_exception_rejects_unknown_code():
    with pytest.raises(ValueError):
        MlxError(99)