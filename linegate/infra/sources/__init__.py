from linegate.infra.sources.offset_index import ByteOffsetIndex, preserved_position
from linegate.infra.sources.record_decoder import RecordDecoder, UNNAMED_PREFIX
from linegate.infra.sources.record_cursor import RecordCursor
from linegate.infra.sources.file_source import FileRecordSource

__all__ = [
    "ByteOffsetIndex",
    "preserved_position",
    "RecordDecoder",
    "UNNAMED_PREFIX",
    "RecordCursor",
    "FileRecordSource",
]
