"""InfoTrace SDK: InfoCodes, session events, object ids and the Session object."""

from .events import EventType, InfoCodePrefix, SessionEvent
from .infocode import (
    ParsedInfoCode,
    generate_info_code,
    is_valid_info_code,
    parse_info_code,
    short_id_from_info_code,
)
from .object_ids import (
    ObjectId,
    extract_object_ids,
    object_id_components,
    parse_object_id,
    validate_object_id,
)
from .session import Session

__all__ = [
    "EventType",
    "InfoCodePrefix",
    "SessionEvent",
    "ParsedInfoCode",
    "generate_info_code",
    "is_valid_info_code",
    "parse_info_code",
    "short_id_from_info_code",
    "ObjectId",
    "extract_object_ids",
    "object_id_components",
    "parse_object_id",
    "validate_object_id",
    "Session",
]
