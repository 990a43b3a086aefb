from minirt.errors import DivisorError, MiniRTError, SceneError


def test_scene_error_keeps_message_without_newline():
    err = SceneError("Invalid element name.\n")
    assert err.message == "Invalid element name."
    assert str(err) == "Invalid element name."


def test_scene_error_is_minirt_error():
    err = SceneError("The number of arguments must be one.\n")
    assert isinstance(err, MiniRTError)
    assert err.message == "The number of arguments must be one."
    assert str(err) == "The number of arguments must be one."


def test_divisor_error_is_zero_division():
    err = DivisorError()
    assert isinstance(err, ZeroDivisionError)
    assert isinstance(err, MiniRTError)
    assert "Divider is 0" in str(err)


def test_divisor_error_custom_message():
    err = DivisorError("bad divisor")
    assert str(err) == "bad divisor"