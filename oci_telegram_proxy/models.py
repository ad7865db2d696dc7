from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .utils import first_item, get_field, text_field


@dataclass
class Dimension:
    resource_name: Optional[str] = None
    instance_shape: Optional[str] = None
    region: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "Dimension":
        return cls(
            resource_name=text_field(data, 'resourceDisplayName'),
            instance_shape=text_field(data, 'shape'),
            region=text_field(data, 'region'),
        )


@dataclass
class MetaEntry:
    summary: Optional[str] = None
    console_url: Optional[str] = None
    dimensions: List[Dimension] = field(default_factory=list)
    metric_values: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any) -> "MetaEntry":
        dimensions = _as_list(get_field(data, 'dimensions'))
        metric_values = _as_list(get_field(data, 'metricValues'))
        return cls(
            summary=text_field(data, 'alarmSummary'),
            console_url=text_field(data, 'alarmUrl'),
            dimensions=[Dimension.from_payload(d) for d in dimensions],
            # Entradas que não são objeto ficam vazias para manter a posição
            metric_values=[dict(m) if isinstance(m, dict) else {} for m in metric_values],
        )

    @property
    def first_dimension(self) -> Optional[Dimension]:
        return first_item(self.dimensions)

    @property
    def first_metrics(self) -> Optional[Dict[str, Any]]:
        return first_item(self.metric_values)


@dataclass
class AlarmRecord:
    """Alarme do OCI já extraído do JSON; todo campo é opcional."""

    kind: Optional[str] = None
    severity: Optional[str] = None
    timestamp: Optional[str] = None
    title: Optional[str] = None
    metadata: List[MetaEntry] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Any) -> "AlarmRecord":
        """Constrói o registro a partir de qualquer valor JSON (dict ou não)."""
        return cls(
            kind=text_field(data, 'type'),
            severity=text_field(data, 'severity'),
            timestamp=text_field(data, 'timestamp'),
            title=text_field(data, 'title'),
            metadata=[MetaEntry.from_payload(m) for m in _as_list(get_field(data, 'alarmMetaData'))],
        )

    @property
    def first_meta(self) -> Optional[MetaEntry]:
        return first_item(self.metadata)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []
