"""
Base emitter interface for code generation.

Emitters turn one captured exchange into source lines for a single
calling convention. They are pure: the output depends only on the entry
and the exclude list, so re-running an emitter yields identical text.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from harkit.core.models import Dialect
from harkit.core.source_schemas.har import HarEntry


class BaseEmitter(ABC):
    """
    Abstract base class for code emitters.

    Methods
    -------
    emit(entry, exclude_list)
        Generate the artifact as a list of source lines
    render(entry, exclude_list)
        Generate the artifact as a single string
    """

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        """
        Calling convention produced by this emitter.

        Returns
        -------
        Dialect
            One of curl, curl-oneline, fetch, axios
        """

    @abstractmethod
    def emit(
        self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None
    ) -> List[str]:
        """
        Generate code for ``entry``.

        Parameters
        ----------
        entry : HarEntry
            Captured exchange
        exclude_list : Iterable[str], optional
            User-configured header names to leave out

        Returns
        -------
        List[str]
            Source lines, in order
        """

    def render(self, entry: HarEntry, exclude_list: Optional[Iterable[str]] = None) -> str:
        return "\n".join(self.emit(entry, exclude_list))


def join_options(options: List[List[str]]) -> List[str]:
    """
    Flatten option blocks into lines, comma-separating the blocks.

    Each block is the lines of one ``key: value`` entry of an object
    literal; every block but the last gets a trailing comma.
    """
    lines: List[str] = []
    for idx, block in enumerate(options):
        block = list(block)
        if idx < len(options) - 1:
            block[-1] += ","
        lines.extend(block)
    return lines
