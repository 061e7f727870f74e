from __future__ import annotations

import unittest

from pxq_client.errors import ErrorAction, ErrorKind, PXQError, map_error_to_action


class ErrorHandlingTests(unittest.TestCase):
    def test_map_error_to_action(self) -> None:
        self.assertEqual(map_error_to_action(ErrorKind.AUTHORIZATION_REQUIRED), ErrorAction.RELOGIN)
        self.assertEqual(map_error_to_action(ErrorKind.SESSION_EXPIRED), ErrorAction.RELOGIN)
        self.assertEqual(map_error_to_action(ErrorKind.TRANSPORT_FAILURE), ErrorAction.RETRY)
        self.assertEqual(map_error_to_action(ErrorKind.DECODE_FAILURE), ErrorAction.INTERNAL)
        self.assertEqual(map_error_to_action(ErrorKind.STORE_FAILURE), ErrorAction.INTERNAL)
        self.assertEqual(map_error_to_action(ErrorKind.SEARCH_SHOW_FAILURE), ErrorAction.NOOP)
        self.assertEqual(map_error_to_action(ErrorKind.LOGIN_FAILURE), ErrorAction.NOOP)

    def test_every_kind_has_an_action(self) -> None:
        for kind in ErrorKind:
            self.assertIsInstance(map_error_to_action(kind), ErrorAction)

    def test_operation_kinds_are_distinct(self) -> None:
        values = [k.value for k in ErrorKind]
        self.assertEqual(len(values), len(set(values)))
        self.assertNotEqual(ErrorKind.SEARCH_SHOW_FAILURE, ErrorKind.QUERY_SHOW_SESSIONS_FAILURE)

    def test_error_carries_kind_and_comments(self) -> None:
        exc = PXQError(ErrorKind.GET_SEAT_PLANS_FAILURE, "not found")
        self.assertEqual(exc.to_dict(), {"kind": "GetSeatPlansFailure", "comments": "not found"})
        self.assertEqual(str(exc), "not found")
        self.assertEqual(str(PXQError(ErrorKind.DECODE_FAILURE)), "DecodeFailure")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
