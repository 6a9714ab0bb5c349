from __future__ import annotations

import logging
import subprocess

from .config import PandocConfig
from .errors import ConversionError
from .models import AssembledBook
from .workspace import Workspace

logger = logging.getLogger(__name__)


class PandocConverter:
    """Runs pandoc over an assembled book inside a workspace."""

    def __init__(self, config: PandocConfig) -> None:
        self._config = config

    def build_command(self, workspace: Workspace) -> list[str]:
        command = [
            self._config.binary,
            str(workspace.source_file),
            "-o",
            str(workspace.output_file),
        ]
        if self._config.toc:
            command.append("--toc")
        command.append(f"--pdf-engine={self._config.pdf_engine}")
        command.extend(["-V", f"mainfont={self._config.main_font}"])
        return command

    def convert(self, book: AssembledBook, workspace: Workspace) -> bytes:
        workspace.source_file.write_text(book.body, encoding="utf-8")
        command = self.build_command(workspace)
        logger.debug("Running %s", " ".join(command))
        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self._config.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ConversionError(f"Pandoc executable not found: {self._config.binary}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ConversionError(
                f"Pandoc did not finish within {self._config.timeout_s:g}s"
            ) from exc

        stderr = completed.stderr.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            raise ConversionError(f"Pandoc failed: {stderr}")
        if stderr.strip():
            logger.info("pandoc: %s", stderr.strip())
        if not workspace.output_file.exists():
            raise ConversionError("Pandoc exited successfully but produced no output file.")
        return workspace.output_file.read_bytes()


__all__ = ["PandocConverter"]
