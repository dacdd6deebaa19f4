"""Shared fixtures: fake qpdf executables and archive builders."""

import io
import stat
import sys
import textwrap
import zipfile
from pathlib import Path

import pytest

from src.api.main import app
from src.unlock.decryptor import get_decryptor


# Accepts "secret" (or any password starting with "pw-"), copies input to
# output and appends the password so callers can tell results apart.
FAKE_QPDF = """
import sys
args = sys.argv[1:]
password = args[0].split("=", 1)[1]
assert args[1] == "--decrypt"
src, dst = args[2], args[3]
if password != "secret" and not password.startswith("pw-"):
    sys.stderr.write("qpdf: invalid password\\n")
    sys.exit(2)
with open(src, "rb") as f:
    data = f.read()
with open(dst, "wb") as f:
    f.write(data + b"|" + password.encode())
"""

SILENT_QPDF = """
import sys
sys.exit(0)
"""

SLOW_QPDF = """
import time
time.sleep(30)
"""


def _write_executable(path: Path, body: str) -> str:
    path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def fake_qpdf(tmp_path) -> str:
    """qpdf stand-in that succeeds for known passwords."""
    return _write_executable(tmp_path / "fake-qpdf", FAKE_QPDF)


@pytest.fixture
def silent_qpdf(tmp_path) -> str:
    """qpdf stand-in that exits 0 without writing output."""
    return _write_executable(tmp_path / "silent-qpdf", SILENT_QPDF)


@pytest.fixture
def slow_qpdf(tmp_path) -> str:
    """qpdf stand-in that never finishes in time."""
    return _write_executable(tmp_path / "slow-qpdf", SLOW_QPDF)


@pytest.fixture
def workdir(tmp_path) -> Path:
    """Parent directory for decryptor temp dirs, checked for leftovers."""
    path = tmp_path / "work"
    path.mkdir()
    return path


def _build_zip(members: list[tuple[str, bytes]], compression=zipfile.ZIP_DEFLATED) -> bytes:
    """ZIP bytes holding ``members`` in the given order.

    A name ending in ``/`` becomes a directory entry.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compression) as zf:
        for name, content in members:
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def build_zip():
    """ZIP archive builder."""
    return _build_zip


class FakeDecryptor:
    """In-memory Decryptor that records its calls."""

    def __init__(self, result: bytes = b"%PDF-1.7 unlocked", error: Exception = None):
        self.result = result
        self.error = error
        self.calls: list[tuple[bytes, str]] = []

    async def decrypt(self, content: bytes, password: str) -> bytes:
        self.calls.append((content, password))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_decryptor():
    """Install a FakeDecryptor for the duration of a test."""
    decryptor = FakeDecryptor()
    app.dependency_overrides[get_decryptor] = lambda: decryptor
    yield decryptor
    app.dependency_overrides.pop(get_decryptor, None)
