import pytest

from stvalidator import STValidator

# 无错误、无警告、无建议的标准样例
CLEAN_PROGRAM = """PROGRAM Main
(* Motor control with emergency stop *)
VAR
    start_button : BOOL;
    emergency_stop : BOOL;
    motor_run : BOOL;
END_VAR

IF emergency_stop THEN
    motor_run := FALSE;
ELSIF start_button THEN
    motor_run := TRUE;
END_IF;

start_button := FALSE;
emergency_stop := NOT start_button;
END_PROGRAM"""


@pytest.fixture
def validator():
    return STValidator()


@pytest.fixture
def clean_program():
    return CLEAN_PROGRAM
