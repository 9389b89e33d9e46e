"""Tests for the avsize command-line interface."""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from avsize import __version__
from avsize._cli import main

ITEM = {
    "key": {"M": {"firstName": {"S": "Harry"}, "lastName": {"S": "Mason"}}},
    "key4": {"NULL": True},
}


class _FakeStdin:
    def __init__(self, data: bytes) -> None:
        self.buffer = io.BytesIO(data)

    def isatty(self) -> bool:
        return False


def _run(argv, stdin: bytes = b""):
    out, err = io.StringIO(), io.StringIO()
    code = 0
    with mock.patch.object(sys, "stdin", _FakeStdin(stdin)), \
            redirect_stdout(out), redirect_stderr(err):
        try:
            main(argv)
        except SystemExit as e:
            code = e.code
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def test_size_from_stdin(self):
        code, out, _ = _run(["size"], json.dumps(ITEM).encode("utf-8"))
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "40")

    def test_size_from_file(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "item.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump(ITEM, f)
            code, out, _ = _run(["size", "--input", path])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "40")

    def test_attrs(self):
        code, out, _ = _run(["attrs"], json.dumps(ITEM).encode("utf-8"))
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out), {"key": 35, "key4": 5})

    def test_missing_type_exit_code(self):
        code, out, err = _run(["size"], b'{"x": {"asdaafa": "io3hj89y"}}')
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("[ERR_MISSING_TYPE]", err)

    def test_bad_json(self):
        code, _, err = _run(["size"], b"{not json")
        self.assertEqual(code, 2)
        self.assertIn("[ERR_JSON]", err)

    def test_max_depth(self):
        code, _, err = _run(["size", "--max-depth", "1"], b'{"k": {"L": [{"L": []}]}}')
        self.assertEqual(code, 2)
        self.assertIn("[ERR_LIMIT_DEPTH]", err)

    def test_missing_file(self):
        code, _, err = _run(["size", "--input", "/nonexistent/item.json"])
        self.assertEqual(code, 2)
        self.assertIn("cannot read input", err)

    def test_version(self):
        code, out, _ = _run(["version"])
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "avsize {}".format(__version__))

    def test_no_command(self):
        code, out, _ = _run([])
        self.assertEqual(code, 1)
        self.assertIn("usage", out)


if __name__ == "__main__":
    unittest.main()
