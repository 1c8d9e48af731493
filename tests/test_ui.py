import logging

from core.ui import handle_backend_error, initials


def test_backend_error_logged_with_lazy_args(caplog):
    err = RuntimeError("backend down")
    with caplog.at_level(logging.ERROR, logger="core.ui"):
        handle_backend_error(err, "Could not load students.")
    record = caplog.records[-1]
    assert record.msg == "Backend error: %s"
    assert record.args == (err,)
    assert record.getMessage() == "Backend error: backend down"


def test_initials():
    assert initials("John", "Doe") == "JD"
    assert initials(None, "doe") == "D"
