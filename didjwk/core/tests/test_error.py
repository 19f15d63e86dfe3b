from unittest import TestCase

from ..error import BaseError


class TestBaseError(TestCase):
    def test_base_error(self):
        err = BaseError()
        assert err.error_code is None
        assert err.message == ""
        assert err.roll_up == "BaseError."

        err = BaseError("Not enough keys", error_code="E1")
        assert err.error_code == "E1"
        assert err.message == "Not enough keys"

    def test_roll_up(self):
        try:
            try:
                raise ValueError("Inner\n  detail")
            except ValueError as inner:
                raise BaseError("Outer") from inner
        except BaseError as err:
            assert err.roll_up == "Outer. Inner. detail."
