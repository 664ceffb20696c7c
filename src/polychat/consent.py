"""
Consent gate: versioned user permission to send text to the translation provider.

Validity needs a stored record with granted == True and a version equal to
the gate's current version. Bump CONSENT_VERSION when the privacy terms change.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from polychat.errors import ConsentRequired, PersistenceError
from polychat.models.consent import ConsentRecord
from polychat.storage import KeyValueStore

logger = logging.getLogger("polychat.consent")

CONSENT_KEY = "translation_consent"
CONSENT_VERSION = "1.0"
DEFAULT_PROVIDER = "Google Translate API"


class ConsentGate:
    def __init__(
        self,
        store: KeyValueStore,
        version: str = CONSENT_VERSION,
        provider: str = DEFAULT_PROVIDER,
    ):
        self._store = store
        self._version = version
        self._provider = provider

    @property
    def version(self) -> str:
        return self._version

    @property
    def provider(self) -> str:
        return self._provider

    def has_consent(self) -> bool:
        record = self.details()
        return record is not None and record.granted is True and record.version == self._version

    def require(self) -> None:
        if not self.has_consent():
            raise ConsentRequired()

    def grant(self) -> ConsentRecord:
        record = ConsentRecord(
            granted=True,
            version=self._version,
            granted_at=datetime.now(timezone.utc),
            provider=self._provider,
        )
        self._write(record)
        logger.info("Translation consent granted (version %s)", self._version)
        return record

    def revoke(self) -> None:
        self._store.remove(CONSENT_KEY)
        logger.info("Translation consent revoked")

    def details(self) -> Optional[ConsentRecord]:
        """Stored consent record, or None when missing or unreadable. Never raises."""
        try:
            raw = self._store.get(CONSENT_KEY)
            if not raw:
                return None
            return ConsentRecord.model_validate_json(raw)
        except (PersistenceError, PydanticValidationError, ValueError) as e:
            logger.warning("Ignoring unreadable consent record: %s", e)
            return None

    def needs_update(self) -> bool:
        record = self.details()
        return record is None or record.version != self._version

    def update_version(self) -> Optional[ConsentRecord]:
        """Re-stamp an existing record with the current version after a terms change."""
        record = self.details()
        if record is None:
            return None
        updated = record.model_copy(update={"version": self._version, "updated_at": datetime.now(timezone.utc)})
        self._write(updated)
        return updated

    def _write(self, record: ConsentRecord) -> None:
        self._store.set(CONSENT_KEY, record.model_dump_json(by_alias=True, exclude_none=True))
