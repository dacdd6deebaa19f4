"""
PDF decryption through the external qpdf utility.

Provides:
- ``Decryptor``: the narrow capability the HTTP layer depends on
- ``QpdfDecryptor``: runs ``qpdf --decrypt`` once per call inside a private
  temporary directory that is removed on every exit path
- ``get_decryptor()``: lazily built process-wide instance
"""

import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from src.config import get_settings
from src.errors import (
    DecryptionFailedError,
    DecryptorUnavailableError,
    OutputMissingError,
)

logger = logging.getLogger(__name__)


class Decryptor(Protocol):
    """Removes password protection from a PDF."""

    async def decrypt(self, content: bytes, password: str) -> bytes:
        ...


class QpdfDecryptor:
    """
    Decrypts PDFs by shelling out to qpdf.

    Each call gets its own work directory, so concurrent calls never share
    file paths. qpdf runs as an asyncio subprocess and only suspends the
    calling request.
    """

    INPUT_NAME = "input.pdf"
    OUTPUT_NAME = "output.pdf"

    def __init__(
        self,
        binary: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        temp_dir: Optional[str] = None,
    ):
        settings = get_settings()
        self.binary = binary or settings.qpdf_binary
        self.timeout_seconds = timeout_seconds or settings.qpdf_timeout_seconds
        self.temp_dir = temp_dir if temp_dir is not None else settings.temp_dir

    def build_command(self, password: str, input_path: Path, output_path: Path) -> list[str]:
        """Argument vector for one qpdf run."""
        return [
            self.binary,
            f"--password={password}",
            "--decrypt",
            str(input_path),
            str(output_path),
        ]

    async def decrypt(self, content: bytes, password: str) -> bytes:
        """
        Decrypt ``content`` with ``password``.

        Args:
            content: Encrypted PDF bytes
            password: User or owner password

        Returns:
            Decrypted PDF bytes

        Raises:
            DecryptionFailedError: qpdf exited non-zero or timed out
            OutputMissingError: qpdf exited zero but wrote nothing
            DecryptorUnavailableError: qpdf could not be started
        """
        workdir = tempfile.mkdtemp(prefix="unlock-", dir=self.temp_dir)
        try:
            input_path = Path(workdir) / self.INPUT_NAME
            output_path = Path(workdir) / self.OUTPUT_NAME
            await asyncio.to_thread(input_path.write_bytes, content)

            try:
                returncode, stderr = await self._run(
                    self.build_command(password, input_path, output_path)
                )
            finally:
                await asyncio.to_thread(input_path.unlink, missing_ok=True)

            if returncode != 0:
                logger.warning("qpdf exited with code %s", returncode)
                raise DecryptionFailedError("Failed to decrypt PDF", details=stderr)

            if not output_path.exists():
                raise OutputMissingError("Decrypted file not found after qpdf")

            decrypted = await asyncio.to_thread(output_path.read_bytes)
            await asyncio.to_thread(output_path.unlink)
            logger.info("Decrypted PDF: %d -> %d bytes", len(content), len(decrypted))
            return decrypted
        finally:
            await asyncio.to_thread(shutil.rmtree, workdir, ignore_errors=True)

    async def _run(self, command: list[str]) -> tuple[int, str]:
        """Run qpdf and return its exit code and stderr text."""
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError) as exc:
            logger.error("Cannot start %s: %s", self.binary, exc)
            raise DecryptorUnavailableError(
                "PDF decryption tool is not available",
                details=str(exc),
            ) from exc

        try:
            _, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            logger.warning("qpdf timed out after %.1fs", self.timeout_seconds)
            raise DecryptionFailedError(
                "Failed to decrypt PDF",
                details=f"qpdf did not finish within {self.timeout_seconds:g} seconds",
            )
        finally:
            # Covers timeout and request cancellation alike.
            if process.returncode is None:
                process.kill()
                await process.wait()

        return process.returncode, stderr.decode("utf-8", errors="replace")


_decryptor: Optional[QpdfDecryptor] = None


def get_decryptor() -> Decryptor:
    """Get or create the qpdf decryptor."""
    global _decryptor
    if _decryptor is None:
        _decryptor = QpdfDecryptor()
    return _decryptor
