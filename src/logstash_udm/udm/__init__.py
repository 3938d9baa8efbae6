from logstash_udm.udm.mapper import UDMFieldMapper, map_to_event
from logstash_udm.udm.rules import classify_status, infer_event_type
from logstash_udm.udm.sanitize import prune
from logstash_udm.udm.schema import UDMEvent

__all__ = [
    "UDMEvent",
    "UDMFieldMapper",
    "classify_status",
    "infer_event_type",
    "map_to_event",
    "prune",
]
