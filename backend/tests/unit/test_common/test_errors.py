"""
Error Definitions Unit Tests
"""

from hyperlink.common.errors import (
    BackendError,
    MessageNotFoundError,
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedBackendError,
)


def test_message_not_found_hides_reason():
    err = MessageNotFoundError("abc")
    assert isinstance(err, NotFoundError)
    assert err.status_code == 404
    assert err.to_dict() == {
        "error": {
            "message": "Provided key was not found",
            "type": "not_found_error",
            "code": "message_not_found",
        }
    }


def test_backend_error_is_500():
    err = BackendError(details={"operation": "set_message"})
    assert err.status_code == 500
    assert err.to_dict()["error"]["details"] == {"operation": "set_message"}
    assert "details" not in err.to_dict(include_details=False)["error"]


def test_unsupported_backend_names_client():
    err = UnsupportedBackendError("sqlite")
    assert err.client == "sqlite"
    assert "sqlite" in err.message
    assert err.code == "unsupported_backend"


def test_payload_too_large_status():
    assert PayloadTooLargeError().status_code == 417
