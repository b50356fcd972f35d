from shopfloor.domain.shared.exceptions import (
    ErrorType,
    GatewayError,
    WriteRejectedError,
)


def test_gateway_error_records_status_code():
    error = GatewayError("login failed", 401)

    assert error.error_type == ErrorType.GATEWAY
    assert error.status_code == 401
    assert error.to_dict()["details"] == {"status_code": 401}


def test_gateway_error_leaves_caller_details_untouched():
    details = {"entity": "ATELIERATTN"}

    error = GatewayError("create failed", 500, details)

    assert details == {"entity": "ATELIERATTN"}
    assert error.details == {"entity": "ATELIERATTN", "status_code": 500}


def test_write_rejected_is_a_gateway_error():
    error = WriteRejectedError("unreachable")

    assert isinstance(error, GatewayError)
    assert error.message == "Activity write rejected: unreachable"
    assert error.details == {}
