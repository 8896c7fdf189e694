"""Function descriptors and event-source extraction.

A function declares a map of named event sources. Only ``Api`` sources
are routable; every other kind is skipped without error.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from sluice.errors import NoEventsFound


class EventKind(StrEnum):
    """Event-source type tags understood by the extractor."""

    API = "Api"
    S3 = "S3"
    SNS = "SNS"
    KINESIS = "Kinesis"
    DYNAMODB = "DynamoDB"
    SQS = "SQS"
    SCHEDULE = "Schedule"
    CLOUDWATCH_EVENT = "CloudWatchEvent"
    CLOUDWATCH_LOGS = "CloudWatchLogs"
    IOT_RULE = "IoTRule"
    ALEXA_SKILL = "AlexaSkill"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> "EventKind":
        """Resolve a type tag, falling back to ``UNKNOWN``."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class ApiEvent:
    """Properties of an ``Api`` event source."""

    path: str
    method: str
    rest_api_id: str | None = None


@dataclass(frozen=True, slots=True)
class EventSource:
    """One declared trigger of a function."""

    type: str
    properties: ApiEvent | Mapping[str, Any] | None = None

    @property
    def kind(self) -> EventKind:
        return EventKind.parse(self.type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EventSource":
        """Build from a ``{"Type": ..., "Properties": {...}}`` mapping."""
        event_type = str(data.get("Type", ""))
        props = data.get("Properties")
        if EventKind.parse(event_type) is EventKind.API and isinstance(props, Mapping):
            return cls(
                type=event_type,
                properties=ApiEvent(
                    path=str(props.get("Path", "")),
                    method=str(props.get("Method", "")),
                    rest_api_id=props.get("RestApiId"),
                ),
            )
        return cls(type=event_type, properties=props)


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    """A compute unit and the event sources that trigger it."""

    name: str
    events: Mapping[str, EventSource] = field(default_factory=dict)
    handler: str = ""
    runtime: str = ""

    @classmethod
    def from_dict(cls, name: str, properties: Mapping[str, Any]) -> "FunctionDescriptor":
        """Build from SAM-style function properties.

        Expects the already-structured shape::

            {
                "Handler": "index.handler",
                "Runtime": "python3.12",
                "Events": {
                    "GetItems": {"Type": "Api", "Properties": {"Path": "/items", "Method": "get"}},
                },
            }
        """
        raw_events = properties.get("Events") or {}
        return cls(
            name=name,
            events={key: EventSource.from_dict(value) for key, value in raw_events.items()},
            handler=str(properties.get("Handler", "")),
            runtime=str(properties.get("Runtime", "")),
        )


def api_events(descriptor: FunctionDescriptor) -> list[tuple[str, ApiEvent]]:
    """Return the ``(name, ApiEvent)`` pairs of *descriptor*, in declaration order.

    Raises ``NoEventsFound`` if the descriptor has none.
    """
    found: list[tuple[str, ApiEvent]] = []
    for name, source in descriptor.events.items():
        if source.kind is not EventKind.API:
            continue
        if not isinstance(source.properties, ApiEvent):
            continue
        found.append((name, source.properties))

    if not found:
        raise NoEventsFound(descriptor.name)
    return found
