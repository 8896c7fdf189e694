"""Compiled router with trie-based path matching.

Mounts are registered during setup and compiled into an immutable
lookup structure when the router starts serving.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from sluice._internal.types import EventHandler
from sluice.errors import ConfigurationError, InvalidPathPattern, NotFound
from sluice.routing.route import ANY_METHOD, Mount, PathSegment, RouteMatch, SegmentKind

logger = logging.getLogger("sluice.router")

_PARAM_NAME = re.compile(r"^[A-Za-z0-9._-]+$")
_METHOD_TOKEN = re.compile(r"^[a-z]+$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a declared API path into segments.

    Examples::

        "/users"            -> [PathSegment("users")]
        "/users/{id}"       -> [PathSegment("users"), PathSegment("{id}", NAMED, "id")]
        "/proxy/{proxy+}"   -> [PathSegment("proxy"), PathSegment("{proxy+}", GREEDY, "proxy")]

    Raises ``InvalidPathPattern`` for paths the gateway would reject.
    """
    if not path.startswith("/"):
        raise InvalidPathPattern(path, "path must start with '/'")

    parts = [part for part in path.split("/") if part]
    greedy_count = sum(1 for part in parts if part.startswith("{") and part.endswith("+}"))
    if greedy_count > 1:
        raise InvalidPathPattern(path, "at most one greedy capture {name+} is allowed")

    segments: list[PathSegment] = []
    seen: set[str] = set()
    for index, part in enumerate(parts):
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            greedy = inner.endswith("+")
            name = inner[:-1] if greedy else inner
            if not _PARAM_NAME.match(name):
                raise InvalidPathPattern(path, f"invalid capture name in segment {part!r}")
            if name in seen:
                raise InvalidPathPattern(path, f"capture {{{name}}} appears more than once")
            if greedy and index != len(parts) - 1:
                raise InvalidPathPattern(path, f"greedy capture {part} must be the final segment")
            seen.add(name)
            segments.append(
                PathSegment(
                    value=part,
                    kind=SegmentKind.GREEDY if greedy else SegmentKind.NAMED,
                    param_name=name,
                )
            )
        elif "{" in part or "}" in part:
            raise InvalidPathPattern(path, f"unbalanced or embedded braces in segment {part!r}")
        else:
            segments.append(PathSegment(value=part))
    return segments


@dataclass(frozen=True, slots=True)
class _Target:
    mount: Mount
    handler: EventHandler


class _TrieNode:
    """A node in the mount trie. Mutable during registration only."""

    __slots__ = ("children", "greedy_edge", "named_edge", "targets_by_method")

    def __init__(self) -> None:
        # Literal segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single named child; sibling captures must share a name
        self.named_edge: _NamedEdge | None = None
        # Greedy capture, consumes the rest of the path
        self.greedy_edge: _GreedyEdge | None = None
        # Mounts ending at this node, keyed by lower-case method
        self.targets_by_method: dict[str, _Target] = {}


@dataclass(slots=True)
class _NamedEdge:
    param_name: str
    node: _TrieNode


@dataclass(slots=True)
class _GreedyEdge:
    param_name: str
    targets_by_method: dict[str, _Target] = field(default_factory=dict)


def _select(targets: dict[str, _Target], verb: str) -> _Target | None:
    """Pick the target for *verb*; a specific verb beats ``any``."""
    return targets.get(verb) or targets.get(ANY_METHOD)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Mount("GetUser", "/users/{id}", "get"), handler)
        router.compile()
        match = router.match("GET", "/users/42")

    ``prefix_mode`` is recorded for the lifetime of the router. A declared
    path still matches only requests equal to it, so ``/any`` answers
    ``/any`` and not ``/any/foo``, and a greedy capture still needs at
    least one trailing segment.
    """

    __slots__ = ("_compiled", "_mounts", "_prefix_mode", "_root")

    def __init__(self, *, prefix_mode: bool = False) -> None:
        self._root = _TrieNode()
        self._mounts: list[Mount] = []
        self._prefix_mode = prefix_mode
        self._compiled = False

    @property
    def prefix_mode(self) -> bool:
        return self._prefix_mode

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def mounts(self) -> tuple[Mount, ...]:
        """All registered mounts, in registration order."""
        return tuple(self._mounts)

    def add(self, mount: Mount, handler: EventHandler) -> None:
        """Add one mount. Must be called before compile()."""
        self.add_all([(mount, handler)])

    def add_all(self, entries: Sequence[tuple[Mount, EventHandler]]) -> None:
        """Add several mounts at once.

        Every path and method is validated before the trie is touched, so
        a malformed entry leaves the router unchanged.
        """
        if self._compiled:
            msg = "Cannot add mounts after compilation."
            raise ConfigurationError(msg)

        compiled: list[tuple[Mount, EventHandler, list[PathSegment]]] = []
        pending: dict[tuple[str, ...], str] = {}
        for mount, handler in entries:
            if not _METHOD_TOKEN.match(mount.method):
                msg = f"Invalid HTTP method {mount.method!r} for {mount.name!r}"
                raise ConfigurationError(msg)
            segments = parse_path(mount.path)
            self._check_siblings(mount.path, segments, pending)
            compiled.append((mount, handler, segments))

        for mount, handler, segments in compiled:
            self._insert(mount, handler, segments)
            self._mounts.append(mount)

    def _check_siblings(
        self,
        path: str,
        segments: list[PathSegment],
        pending: dict[tuple[str, ...], str],
    ) -> None:
        """Reject captures whose name differs from a sibling capture."""
        node: _TrieNode | None = self._root
        key: tuple[str, ...] = ()

        for seg in segments:
            if seg.kind is SegmentKind.LITERAL:
                key = (*key, seg.value)
                node = node.children.get(seg.value) if node is not None else None
                continue

            greedy = seg.kind is SegmentKind.GREEDY
            key = (*key, "{+}" if greedy else "{}")
            existing: str | None = None
            next_node: _TrieNode | None = None
            if node is not None:
                if greedy and node.greedy_edge is not None:
                    existing = node.greedy_edge.param_name
                elif not greedy and node.named_edge is not None:
                    existing = node.named_edge.param_name
                    next_node = node.named_edge.node
            if existing is None:
                existing = pending.get(key)

            if existing is not None and existing != seg.param_name:
                reason = f"capture {seg.value} conflicts with sibling capture named {existing!r}"
                raise InvalidPathPattern(path, reason)
            pending[key] = seg.param_name or ""
            node = next_node

    def _insert(self, mount: Mount, handler: EventHandler, segments: list[PathSegment]) -> None:
        node = self._root
        targets: dict[str, _Target] | None = None

        for seg in segments:
            if seg.kind is SegmentKind.GREEDY:
                if node.greedy_edge is None:
                    node.greedy_edge = _GreedyEdge(param_name=seg.param_name or "proxy")
                targets = node.greedy_edge.targets_by_method
                break

            if seg.kind is SegmentKind.NAMED:
                if node.named_edge is None:
                    node.named_edge = _NamedEdge(param_name=seg.param_name or "", node=_TrieNode())
                node = node.named_edge.node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        if targets is None:
            targets = node.targets_by_method

        existing = targets.get(mount.method)
        if existing is not None:
            logger.warning(
                "Mount %r (%s %s) is shadowed by %r, registered first",
                mount.name,
                mount.method.upper(),
                mount.path,
                existing.mount.name,
            )
            return
        targets[mount.method] = _Target(mount=mount, handler=handler)

    def compile(self) -> None:
        """Freeze the router. No more mounts can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the registered mounts.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no mount accepts this path and method.

        Segments must align exactly: an empty segment from a trailing or
        repeated slash (``/users/``, ``//users``) matches nothing.
        """
        parts = path.split("/")[1:] if path != "/" else []
        result = None
        if path.startswith("/") and "" not in parts:
            result = self._match_node(self._root, parts, 0, {}, method.lower())

        if result is None:
            raise NotFound(f"No mount matches {method} {path!r}")

        target, params = result
        return RouteMatch(mount=target.mount, handler=target.handler, path_params=params)

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
        verb: str,
    ) -> tuple[_Target, dict[str, str]] | None:
        """Recursively match path parts: literal, then named, then greedy."""
        # All parts consumed
        if index == len(parts):
            target = _select(node.targets_by_method, verb)
            if target is not None:
                return target, params
            return None

        part = parts[index]

        # 1. Literal child
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params, verb)
            if result is not None:
                return result

        # 2. Named capture, exactly one segment
        if node.named_edge is not None:
            edge = node.named_edge
            new_params = {**params, edge.param_name: part}
            result = self._match_node(edge.node, parts, index + 1, new_params, verb)
            if result is not None:
                return result

        # 3. Greedy capture, one or more remaining segments
        if node.greedy_edge is not None:
            target = _select(node.greedy_edge.targets_by_method, verb)
            if target is not None:
                remaining = "/".join(parts[index:])
                return target, {**params, node.greedy_edge.param_name: remaining}

        return None
