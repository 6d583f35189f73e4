"""
IndexLoader - Rebuild the Index by replaying the log.
"""

import logging

from logkv.models.exceptions import ProcessRecordError
from logkv.models.index import Index
from logkv.models.log import Log
from logkv.models.record import CleanEndOfStream, CorruptRecord, decode


class IndexLoader:
    """
    Reconstructs an Index from a Log.

    Used on every open: the index is never persisted, so the whole log is
    scanned from offset 0 and each record's key is pointed at the offset
    where that record starts.
    """

    def load(self, log: Log, index: Index) -> int:
        """
        Replay all records in the log into the index.

        Args:
            log: Open log to scan.
            index: Index to populate. Existing entries are overwritten
                by keys found in the log, never removed.

        Returns:
            Number of records replayed.

        Raises:
            ProcessRecordError: If the log ends partway through a record.
                Entries for records before that point remain in the index.
        """
        source = log.read_from(0)
        count = 0

        while True:
            position = source.tell()
            result = decode(source)

            if isinstance(result, CleanEndOfStream):
                break

            if isinstance(result, CorruptRecord):
                logging.warning(
                    f"Replay of {log.file_path} stopped at offset {position}: {result.reason}"
                )
                raise ProcessRecordError(position, result.reason)

            index.set(result.record.key, position)
            count += 1

        return count
