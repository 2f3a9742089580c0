"""Run GNU xgettext over source files and load its template with polib."""
from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

import polib

from catalog import TranslationCatalog
from utils.logging import get_logger

from ..errors import ExtractionToolError, TemporaryResourceError
from ..keywords import Keyword

LOGGER = get_logger(__name__)


class XgettextRunner:
    """Extract marker calls with xgettext.

    The file list and the generated template live in temporary files that are
    removed on every exit path. xgettext runs with ``root`` as its working
    directory, so the references it writes are relative to ``root``.
    """

    def __init__(
        self,
        keywords: Iterable[Keyword],
        command: str = "xgettext",
        language: str = "PHP",
        comment_tag: Optional[str] = "i18n",
        temp_dir: Optional[Path] = None,
    ) -> None:
        self.keywords = list(keywords)
        self.command = command
        self.language = language
        self.comment_tag = comment_tag
        self.temp_dir = temp_dir

    def build_command(self, files_from: str, output: str) -> List[str]:
        command = [
            self.command,
            "--default-domain=messages",
            f"--output={os.path.basename(output)}",
            f"--output-dir={os.path.dirname(output)}",
            f"--language={self.language}",
            "--from-code=UTF-8",
        ]
        if self.comment_tag:
            command.append(f"--add-comments={self.comment_tag}")
        command.append("--keyword")
        command.extend(f"--keyword={keyword.as_xgettext()}" for keyword in self.keywords)
        command.extend(["--no-escape", "--add-location", f"--files-from={files_from}"])
        return command

    def run(self, root: str, files: Sequence[str]) -> TranslationCatalog:
        temp_paths: List[str] = []
        try:
            list_path = self._new_temp_file(".lst", temp_paths)
            try:
                Path(list_path).write_text("\n".join(files) + "\n", encoding="utf-8")
            except OSError as exc:
                raise TemporaryResourceError(f"Error writing a temporary file: {exc}") from exc
            output_path = self._new_temp_file(".pot", temp_paths)
            output = self._invoke(self.build_command(list_path, output_path), root)
            return self._read_template(output_path, output)
        finally:
            for path in temp_paths:
                try:
                    os.unlink(path)
                except FileNotFoundError:
                    pass
                except OSError as exc:
                    LOGGER.warning("Unable to remove temporary file %s: %s", path, exc)

    def _new_temp_file(self, suffix: str, temp_paths: List[str]) -> str:
        try:
            handle, path = tempfile.mkstemp(prefix="c5tl-", suffix=suffix, dir=self.temp_dir)
        except OSError as exc:
            raise TemporaryResourceError(f"Unable to create a temporary file: {exc}") from exc
        os.close(handle)
        temp_paths.append(path)
        return path

    def _invoke(self, command: List[str], root: str) -> str:
        LOGGER.debug("Running %s in %s", shlex.join(command), root)
        try:
            completed = subprocess.run(
                command,
                cwd=root,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ExtractionToolError(f"Unable to run {self.command}", str(exc)) from exc
        output = completed.stdout or ""
        if completed.returncode != 0:
            LOGGER.warning("%s exited with code %d", self.command, completed.returncode)
            raise ExtractionToolError(f"{self.command} failed", output)
        return output

    def _read_template(self, path: str, output: str) -> TranslationCatalog:
        if not os.path.isfile(path):
            raise ExtractionToolError(f"{self.command} did not produce {path}", output)
        if os.path.getsize(path) == 0:
            # xgettext leaves the output untouched when no message is found
            return TranslationCatalog()
        try:
            return TranslationCatalog(polib.pofile(path))
        except (OSError, ValueError) as exc:
            raise ExtractionToolError(f"Unable to parse the output of {self.command}", f"{output}\n{exc}") from exc
