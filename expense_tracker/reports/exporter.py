"""
Report Export

The print/export step is an external collaborator: it receives the
rendered HTML and a title and returns where the document ended up.

HtmlFileExporter is the bundled implementation. It writes one file
per export into a directory, so a report can be opened in a browser
and printed from there.
"""

import re
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union


class ReportExportError(Exception):
    """Base exception for export failures."""
    pass


class ReportExporter(ABC):
    """Hands a rendered report to whatever prints or shares it."""

    @abstractmethod
    async def export(self, html: str, title: str) -> str:
        """
        Export one document.

        Returns:
            A human-readable location (path, URL, job id)

        Raises:
            ReportExportError: If the document could not be exported
        """
        pass


def slugify(title: str) -> str:
    """'March 2024 Monthly Expense Summary' -> 'march-2024-monthly-expense-summary'"""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "report"


class HtmlFileExporter(ReportExporter):
    """Writes each report to `<output_dir>/<slug>-<timestamp>.html`."""

    def __init__(
        self,
        output_dir: Union[str, Path],
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._output_dir = Path(output_dir)
        self._clock = clock or datetime.now

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    async def export(self, html: str, title: str) -> str:
        stamp = self._clock().strftime("%Y%m%d-%H%M%S")
        path = self._output_dir / f"{slugify(title)}-{stamp}.html"
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(html, encoding="utf-8")
        except OSError as e:
            raise ReportExportError(f"Could not write report to {path}: {e}") from e
        return str(path)
