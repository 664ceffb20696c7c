"""
Draft session: compose-time translation state, folded into a message on send.

States:
    IDLE -> TRANSLATING -> PREVIEW_READY -> IDLE | SENT
SENT resets the session and lands back in IDLE.

Rules:
- One translate at a time: a translate or send arriving while TRANSLATING
  raises TranslationInProgress.
- Each gateway request carries the session generation. cancel() and every
  send bump the generation, so a response that lands afterwards is dropped.
- Receiver and back-translation variants fetched at send time are best-effort:
  a failure becomes a notice and the message is sent without them.
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol

from polychat import ledger
from polychat.config import Settings
from polychat.consent import ConsentGate
from polychat.errors import ConsentRequired, PolychatError, TranslationInProgress, ValidationError
from polychat.languages import (
    ORIGINAL,
    ORIGINAL_LABEL,
    UNKNOWN,
    back_translation_code,
    back_translation_label,
    language_name,
    receiver_code,
    receiver_label,
)
from polychat.models.message import LanguageVariant, Message
from polychat.models.translation import TranslationResult
from polychat.storage import KeyValueStore
from polychat.store import MessageStore

logger = logging.getLogger("polychat.draft")

PENDING_DRAFT_KEY = "pendingDraft"

ConsentPrompt = Callable[[], Awaitable[bool]]
Notifier = Callable[[str], None]


class Translator(Protocol):
    async def translate(
        self, text: str, target_lang: Optional[str], source_lang: Optional[str] = None,
    ) -> TranslationResult: ...


class DraftState(str, Enum):
    IDLE = "idle"
    TRANSLATING = "translating"
    PREVIEW_READY = "preview_ready"
    SENT = "sent"


class DraftSession:
    def __init__(
        self,
        gateway: Translator,
        consent: ConsentGate,
        messages: MessageStore,
        settings: Optional[Settings] = None,
        *,
        store: Optional[KeyValueStore] = None,
        consent_prompt: Optional[ConsentPrompt] = None,
        on_notice: Optional[Notifier] = None,
    ):
        self._gateway = gateway
        self._consent = consent
        self._messages = messages
        self._settings = settings or Settings()
        self._store = store
        self._consent_prompt = consent_prompt
        self._on_notice = on_notice
        self._generation = 0
        self._reset()

    def _reset(self) -> None:
        self.state = DraftState.IDLE
        self.typed_text = ""
        self.original_snapshot = ""
        self.pending_preview_text = ""
        self.preview_active = False
        self.session_history: list[LanguageVariant] = []
        self.target_lang_of_preview = ""
        self.preview_label = ""

    def _clear_labels(self) -> None:
        # session_history and original_snapshot survive until send or cancel
        self.preview_label = ""
        self.target_lang_of_preview = ""

    def _notify(self, text: str) -> None:
        logger.info("notice: %s", text)
        if self._on_notice:
            self._on_notice(text)

    @property
    def generation(self) -> int:
        return self._generation

    # --- compose ---

    def type(self, text: str) -> None:
        self.typed_text = text
        if self.state is DraftState.SENT:
            self.state = DraftState.IDLE

    def cancel(self) -> None:
        self._generation += 1
        self._reset()

    async def _ensure_consent(self) -> None:
        if self._consent.has_consent():
            return
        if self._consent_prompt is not None and await self._consent_prompt():
            self._consent.grant()
            return
        raise ConsentRequired()

    async def translate(self, target_lang: str, source_lang: Optional[str] = None) -> Optional[LanguageVariant]:
        """Translate the session's original text and make the result the editable preview.

        Returns the new variant, or None when the session was cancelled or sent
        while the request was in flight.
        """
        if self.state is DraftState.TRANSLATING:
            raise TranslationInProgress()
        if not self.typed_text.strip():
            raise ValidationError("Please enter text to translate.")
        if not self.original_snapshot:
            self.original_snapshot = self.typed_text

        await self._ensure_consent()

        generation = self._generation
        self.state = DraftState.TRANSLATING
        self.preview_active = False
        self.target_lang_of_preview = target_lang
        try:
            result = await self._gateway.translate(
                self.original_snapshot, target_lang, source_lang or self._settings.source_language,
            )
        except PolychatError:
            if generation == self._generation:
                self.state = DraftState.IDLE
                self._clear_labels()
            raise

        if generation != self._generation:
            logger.info("Dropping stale translation for generation %d (now %d)", generation, self._generation)
            return None

        code = result.resolved_to or target_lang or UNKNOWN
        variant = LanguageVariant(code=code, label=language_name(code), text=result.translated_text)
        self.session_history.append(variant)
        self.pending_preview_text = variant.text
        self.preview_label = variant.label
        self.preview_active = True
        self.state = DraftState.PREVIEW_READY
        return variant

    async def translate_to_receiver(self) -> Optional[LanguageVariant]:
        return await self.translate(self._settings.receiver_language)

    async def translate_to_my_language(self) -> Optional[LanguageVariant]:
        return await self.translate(self._settings.app_language)

    # --- preview ---

    def _fold_preview(self) -> LanguageVariant:
        last = self.session_history[-1].model_copy(update={"text": self.pending_preview_text})
        self.session_history[-1] = last
        return last

    def save_preview_edits(self, text: Optional[str] = None) -> bool:
        """Write the (optionally replaced) preview text into the latest history entry."""
        if text is not None:
            self.pending_preview_text = text
        if not self.session_history:
            self._notify("Nothing to save.")
            return False
        self._fold_preview()
        self._notify("Edited translation saved for sending.")
        return True

    def revert_preview_to_original(self) -> None:
        if not self.original_snapshot:
            self.clear_preview_and_translation()
            return
        self.pending_preview_text = self.original_snapshot
        self.preview_label = language_name(self._settings.reference_language)
        self.preview_active = False
        self.state = DraftState.IDLE

    def clear_preview_and_translation(self) -> None:
        self.pending_preview_text = ""
        self.preview_active = False
        self.state = DraftState.IDLE
        self._clear_labels()

    # --- send ---

    async def _fetch_variant(
        self, text: str, target_lang: str, code: str, label: str, source_lang: Optional[str] = None,
    ) -> Optional[LanguageVariant]:
        if not self._consent.has_consent():
            self._notify(f"Skipped {label}: translation consent required.")
            return None
        try:
            result = await self._gateway.translate(text, target_lang, source_lang or self._settings.source_language)
        except PolychatError as e:
            logger.warning("Best-effort %s translation failed: %s", code, e)
            self._notify(f"Could not add {label}; sending without it.")
            return None
        return LanguageVariant(code=code, label=label, text=result.translated_text)

    def _finish(self, message: Message, generation: int) -> Message:
        self._messages.append(message)
        if generation == self._generation:
            self._generation += 1
            self._reset()
            self.state = DraftState.SENT
        return message

    async def send_translated(self) -> Message:
        """Send the edited preview together with the session's translation history."""
        if self.state is DraftState.TRANSLATING:
            raise TranslationInProgress()
        if not self.preview_active or not self.pending_preview_text.strip() or not self.session_history:
            raise ValidationError("No translated text to send.")

        generation = self._generation
        preview = self._fold_preview()
        original = self.original_snapshot or self.typed_text
        settings = self._settings

        variants = [LanguageVariant(code=ORIGINAL, label=ORIGINAL_LABEL, text=original)]
        variants.extend(self.session_history[:-1])

        self.state = DraftState.TRANSLATING
        try:
            reference = settings.reference_language
            if settings.auto_reference_variant and preview.code != reference:
                back = await self._fetch_variant(
                    preview.text, reference,
                    back_translation_code(reference), back_translation_label(reference),
                    source_lang=preview.code if preview.code != UNKNOWN else None,
                )
                if back:
                    variants.append(back)

            receiver = settings.receiver_language
            if settings.auto_receiver_variant and preview.code != receiver:
                recv = await self._fetch_variant(original, receiver, receiver_code(receiver), receiver_label(receiver))
                if recv:
                    variants.append(recv)
        finally:
            if generation == self._generation:
                self.state = DraftState.PREVIEW_READY

        variants.append(preview)
        variants = ledger.collapse_by_code(variants)
        cursor = ledger.index_of(variants, preview.code)
        message = ledger.build_message(
            variants,
            len(variants) - 1 if cursor is None else cursor,
            reference_text=original,
            sender=settings.sender,
            was_translated=bool(self.session_history),
        )
        return self._finish(message, generation)

    async def send_original(self) -> Message:
        """Send the untranslated text. The message shows the original even if a receiver variant was added."""
        if self.state is DraftState.TRANSLATING:
            raise TranslationInProgress()
        original = self.original_snapshot or self.typed_text
        if not original.strip():
            raise ValidationError("Nothing to send.")

        generation = self._generation
        previous = self.state
        settings = self._settings
        variants = [LanguageVariant(code=ORIGINAL, label=ORIGINAL_LABEL, text=original)]

        if settings.auto_receiver_variant:
            self.state = DraftState.TRANSLATING
            try:
                receiver = settings.receiver_language
                recv = await self._fetch_variant(original, receiver, receiver_code(receiver), receiver_label(receiver))
                if recv:
                    variants.append(recv)
            finally:
                if generation == self._generation:
                    self.state = previous

        message = ledger.build_message(
            variants, 0, reference_text=original, sender=settings.sender, was_translated=False,
        )
        return self._finish(message, generation)

    # --- pending-draft handoff ---

    def stash_pending(self) -> bool:
        """Park the typed draft so it survives a restart (e.g. right after granting consent)."""
        if self._store is None or not self.typed_text:
            return False
        self._store.set(PENDING_DRAFT_KEY, self.typed_text)
        return True

    def restore_pending(self) -> bool:
        if self._store is None:
            return False
        text = self._store.get(PENDING_DRAFT_KEY)
        self._store.remove(PENDING_DRAFT_KEY)
        if not text:
            return False
        self.typed_text = text
        return True
