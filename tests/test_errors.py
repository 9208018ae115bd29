import pytest

from mpdclient.errors import ErrorCode, MpdError, MpdOSError, ServerError


@pytest.mark.parametrize(
    "code",
    [ErrorCode.OOM, ErrorCode.TIMEOUT, ErrorCode.SYSTEM, ErrorCode.RESOLVER,
     ErrorCode.MALFORMED, ErrorCode.CLOSED],
)
def test_fatal_codes(code):
    assert MpdError(code, "x").is_fatal() is True


@pytest.mark.parametrize(
    "code", [ErrorCode.SUCCESS, ErrorCode.ARGUMENT, ErrorCode.STATE, ErrorCode.SERVER]
)
def test_recoverable_codes(code):
    assert MpdError(code, "x").is_fatal() is False


def test_message_is_kept():
    err = MpdError(ErrorCode.MALFORMED, "Response line too large")
    assert err.message == "Response line too large"
    assert str(err) == "Response line too large"
    assert err.code is ErrorCode.MALFORMED


def test_code_accepts_int():
    err = MpdError(int(ErrorCode.CLOSED), "Connection closed by the server")
    assert err.code is ErrorCode.CLOSED


def test_server_error_fields():
    err = ServerError("No such song", 50, 3)
    assert err.code is ErrorCode.SERVER
    assert err.server_code == 50
    assert err.at == 3
    assert err.is_fatal() is False
    assert isinstance(err, MpdError)


def test_os_error_fields():
    err = MpdOSError(32, "Broken pipe")
    assert err.code is ErrorCode.SYSTEM
    assert err.errno == 32
    assert err.message == "Broken pipe"
    assert err.is_fatal() is True


def test_raised_and_caught_as_base():
    err = ServerError("denied", 4, 0)
    assert err.message == "denied"
    with pytest.raises(MpdError) as info:
        raise err
    assert info.value.code is ErrorCode.SERVER
    assert info.value.server_code == 4
    assert info.value.at == 0