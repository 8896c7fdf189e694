"""Mount, PathSegment, and RouteMatch frozen dataclasses."""

from dataclasses import dataclass
from enum import Enum

from sluice._internal.types import EventHandler

ANY_METHOD = "any"


class SegmentKind(Enum):
    LITERAL = "literal"
    NAMED = "named"
    GREEDY = "greedy"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a declared API path.

    Literal: ``/users``     (kind=LITERAL)
    Named:   ``/{id}``      (kind=NAMED, param_name="id")
    Greedy:  ``/{proxy+}``  (kind=GREEDY, param_name="proxy")
    """

    value: str
    kind: SegmentKind = SegmentKind.LITERAL
    param_name: str | None = None

    @property
    def is_param(self) -> bool:
        return self.kind is not SegmentKind.LITERAL


@dataclass(frozen=True, slots=True)
class Mount:
    """A resolved, routable API event.

    ``path`` is kept as declared; ``method`` is lower-cased, with ``"any"``
    standing for every HTTP verb.
    """

    name: str
    path: str
    method: str
    function: str = ""


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match."""

    mount: Mount
    handler: EventHandler
    path_params: dict[str, str]
