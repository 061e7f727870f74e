from __future__ import annotations

import json
import os
import unittest
from tempfile import TemporaryDirectory

from pxq_client.errors import ErrorKind, PXQError
from pxq_client.session_store import SessionStore


class SessionStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "pxq", ".settings.dat")
        self.store = SessionStore(self.path)

    def tearDown(self) -> None:  # noqa: D401
        self.tmpdir.cleanup()

    def _raw(self) -> dict:
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def test_missing_file_reads_as_empty(self):
        self.assertIsNone(self.store.get("access_token"))
        self.assertFalse(os.path.exists(self.path))

    def test_set_and_get(self):
        self.store.set("A1", "R1")
        self.assertEqual(self.store.get("access_token"), "A1")
        self.assertEqual(self.store.get("refresh_token"), "R1")
        self.assertEqual(self._raw(), {"access_token": "A1", "refresh_token": "R1"})

    def test_set_replaces_both_tokens(self):
        self.store.set("A1", "R1")
        self.store.set("A2", "R2")
        self.assertEqual(self._raw(), {"access_token": "A2", "refresh_token": "R2"})

    def test_other_keys_are_preserved(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"theme": "dark", "access_token": "OLD"}, f)

        self.store.set("A1", "R1")
        self.assertEqual(self._raw(), {"theme": "dark", "access_token": "A1", "refresh_token": "R1"})

        self.store.clear()
        self.assertEqual(self._raw(), {"theme": "dark"})

    def test_clear_removes_tokens(self):
        self.store.set("A1", "R1")
        self.store.clear()
        self.assertIsNone(self.store.get("access_token"))
        self.assertIsNone(self.store.get("refresh_token"))

    def test_clear_without_file_is_noop(self):
        self.store.clear()
        self.assertFalse(os.path.exists(self.path))

    def test_no_temp_files_left_behind(self):
        self.store.set("A1", "R1")
        self.store.set("A2", "R2")
        self.assertEqual(os.listdir(os.path.dirname(self.path)), [".settings.dat"])

    def test_corrupted_file_raises_store_failure(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")

        with self.assertRaises(PXQError) as ctx:
            self.store.get("access_token")
        self.assertEqual(ctx.exception.kind, ErrorKind.STORE_FAILURE)

        # 损坏的文件不会被写入覆盖
        with self.assertRaises(PXQError):
            self.store.set("A1", "R1")
        with open(self.path, "r", encoding="utf-8") as f:
            self.assertEqual(f.read(), "{not json")

    def test_non_utf8_file_raises_store_failure(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "wb") as f:
            f.write(b"\xff\xfe\x00garbage")

        for call in (lambda: self.store.get("access_token"), lambda: self.store.set("A1", "R1"), self.store.clear):
            with self.assertRaises(PXQError) as ctx:
                call()
            self.assertEqual(ctx.exception.kind, ErrorKind.STORE_FAILURE)

    def test_non_object_record_raises_store_failure(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("[1, 2]")
        with self.assertRaises(PXQError) as ctx:
            self.store.get("refresh_token")
        self.assertEqual(ctx.exception.kind, ErrorKind.STORE_FAILURE)

    def test_non_string_token_raises_store_failure(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"access_token": 42}, f)
        with self.assertRaises(PXQError) as ctx:
            self.store.get("access_token")
        self.assertEqual(ctx.exception.kind, ErrorKind.STORE_FAILURE)

    def test_unreadable_path_raises_store_failure(self):
        store = SessionStore(self.tmpdir.name)  # 目录而不是文件
        with self.assertRaises(PXQError) as ctx:
            store.get("access_token")
        self.assertEqual(ctx.exception.kind, ErrorKind.STORE_FAILURE)

    def test_encoder_decoder_roundtrip(self):
        def enc(s: str) -> str:
            return s[::-1]

        def dec(s: str) -> str:
            return s[::-1]

        store = SessionStore(os.path.join(self.tmpdir.name, "enc.dat"), encoder=enc, decoder=dec)
        store.set("A1", "R1")
        self.assertEqual(store.get("access_token"), "A1")
        with open(store.path, "r", encoding="utf-8") as f:
            self.assertTrue(f.read().startswith("}"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
