"""
Path resolution over an element tree.

A path is a sequence of tag names. Resolution descends one segment at a time,
always taking the first matching child in document order. In scalar context the
final element's text is returned; in array context every sibling matching the
final segment is returned.

Works with any element exposing ``tag``, ordered child iteration, ``text`` and
``tail``: lxml elements and ``xml.etree.ElementTree`` elements both qualify.
"""

import logging
from typing import Any, List, Sequence, Tuple, Union

from ..exceptions import PathNotFound
from ..models import Path


PathLike = Union[Path, str]


def _as_path(path: PathLike) -> Path:
    return path if isinstance(path, Path) else Path.parse(path)


def _is_element(node: Any) -> bool:
    # Comments and processing instructions carry a callable as tag in both
    # lxml and ElementTree; they never take part in path matching.
    return isinstance(node.tag, str)


def element_text(node: Any) -> str:
    """
    Trimmed concatenation of a node's direct text children.

    Text sitting between child elements (their ``tail``) is included, text
    inside child elements and comments is not.
    """
    parts = [node.text or '']
    for child in node:
        parts.append(child.tail or '')
    return ''.join(parts).strip()


class PathResolver:
    """Locates descendant elements and their text by tag-name path."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def _first_child(self, node: Any, segment: str) -> Any:
        for child in node:
            if _is_element(child) and child.tag == segment:
                return child
        return None

    def _descend(self, node: Any, path: Path, segments: Tuple[str, ...]) -> Any:
        current = node
        for segment in segments:
            current = self._first_child(current, segment)
            if current is None:
                raise PathNotFound(str(path), segment)
        return current

    def resolve_node(self, node: Any, path: PathLike) -> Any:
        """
        Return the element reached by following ``path`` from ``node``.

        Raises:
            PathNotFound: If any segment has no matching child
        """
        path = _as_path(path)
        return self._descend(node, path, path.segments)

    def resolve_text(self, node: Any, path: PathLike) -> str:
        """
        Resolve ``path`` in scalar context and return the element's trimmed text.

        Raises:
            PathNotFound: If any segment has no matching child
        """
        target = self.resolve_node(node, path)
        text = element_text(target)
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Resolved '{path}' -> {text!r}")
        return text

    def resolve_nodes(self, node: Any, path: PathLike) -> List[Any]:
        """
        Resolve ``path`` in array context.

        Descends through all but the last segment taking the first match, then
        returns every child of that parent whose tag matches the last segment,
        in document order. No match for the last segment yields an empty list.

        Raises:
            PathNotFound: If an intermediate segment has no matching child
        """
        path = _as_path(path)
        parent = self._descend(node, path, path.parent)
        matches = [child for child in parent if _is_element(child) and child.tag == path.terminal]
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Resolved array path '{path}' -> {len(matches)} node(s)")
        return matches

    def resolve_texts(self, node: Any, paths: Sequence[PathLike]) -> List[str]:
        """
        Resolve each path independently in scalar context.

        Returns:
            Text values in the order the paths were given

        Raises:
            PathNotFound: If any of the paths cannot be resolved
        """
        return [self.resolve_text(node, path) for path in paths]
