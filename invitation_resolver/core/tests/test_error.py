from unittest import TestCase

from ..error import BaseError, InvitationError


class TestBaseError(TestCase):
    def test_base_error(self):
        err = BaseError()
        assert err.error_code is None
        assert err.message == ""
        assert err.roll_up == "BaseError."

        err = BaseError("Oops ", error_code="E1")
        assert err.error_code == "E1"
        assert err.message == "Oops"

    def test_roll_up(self):
        try:
            try:
                raise ValueError("inner\nproblem")
            except ValueError as inner:
                raise InvitationError("Invitation was empty") from inner
        except InvitationError as err:
            assert err.roll_up == "Invitation was empty. inner. problem."
