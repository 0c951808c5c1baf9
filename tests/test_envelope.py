from desktop_ui_mcp.envelope import FAILED, FAULT, OK, Outcome, describe_error


def test_ok_is_not_error():
    result = Outcome.ok("done").to_result()

    assert result.isError is False
    assert result.content[0].type == "text"
    assert result.content[0].text == "done"


def test_failed_is_reported_as_text_not_error():
    outcome = Outcome.check(False, "yes", "no")

    assert outcome.tag == FAILED
    assert outcome.to_result().isError is False
    assert outcome.to_result().content[0].text == "no"


def test_check_success():
    outcome = Outcome.check(True, "yes", "no")

    assert outcome.tag == OK
    assert outcome.text == "yes"


def test_fault_from_exception():
    outcome = Outcome.fault(RuntimeError("access denied"))
    result = outcome.to_result()

    assert outcome.tag == FAULT
    assert result.isError is True
    assert result.content[0].text == "Error: access denied"


def test_describe_error():
    assert describe_error(PermissionError("denied")) == "denied"
    # 메시지 없는 예외는 클래스 이름
    assert describe_error(TimeoutError()) == "TimeoutError"
    assert describe_error("plain") == "plain"
    assert describe_error(42) == "42"
