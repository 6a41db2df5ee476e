"""UUID Id Generator — random v4 identifiers for new entries."""

import uuid

from app.core.domain_types import EntryId


class UuidIdGenerator:
    """Uniqueness rests on uuid4 entropy; collisions are caught by the service."""

    def next_id(self) -> EntryId:
        return EntryId(str(uuid.uuid4()))
