"""Meal capture from photos, barcodes and voice."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.domain.recognition import MealGuess
from calorie_tracker.services.meals import MealLogService

_logger = logging.getLogger(__name__)


class MealRecognizer(Protocol):
    """Interface for recognising a meal in a photo."""

    async def recognize(self, image_bytes: bytes) -> MealGuess:
        """Return a nutrition estimate for the pictured meal."""


class Transcriber(Protocol):
    """Interface for speech-to-text."""

    async def transcribe(self, audio_bytes: bytes) -> str:
        """Return the transcript of a voice note."""


class BarcodeLookup(Protocol):
    """Interface for packaged food lookups."""

    async def lookup(self, barcode: str) -> MealGuess | None:
        """Return the product's nutrition, or None when unknown."""


@dataclass
class MealCaptureService:
    """Turns captured input into meal log entries."""

    recognizer: MealRecognizer
    transcriber: Transcriber
    barcode_lookup: BarcodeLookup
    meal_log_service: MealLogService

    async def log_scanned_meal(
        self, user_id: UUID, image_bytes: bytes, image_url: str | None = None
    ) -> MealEntry:
        """Recognise a photographed meal and log it."""
        guess = await self.recognizer.recognize(image_bytes)
        _logger.info("Recognised meal %s for user %s", guess.name, user_id)
        return self._log_guess(user_id, guess, image_url)

    async def lookup_barcode(self, barcode: str) -> MealGuess | None:
        """Look up a scanned barcode."""
        return await self.barcode_lookup.lookup(barcode.strip())

    async def log_barcode_meal(self, user_id: UUID, barcode: str) -> MealEntry | None:
        """Look up a barcode and log the product when found."""
        guess = await self.lookup_barcode(barcode)
        if guess is None:
            return None
        return self._log_guess(user_id, guess, None)

    async def transcribe(self, audio_bytes: bytes) -> str:
        """Transcribe a voice note."""
        return await self.transcriber.transcribe(audio_bytes)

    def _log_guess(
        self, user_id: UUID, guess: MealGuess, image_url: str | None
    ) -> MealEntry:
        return self.meal_log_service.log_meal(
            user_id=user_id,
            name=guess.name,
            macros=MacroProfile(
                calories=guess.calories,
                protein_g=guess.protein_g,
                fat_g=guess.fat_g,
                carbs_g=guess.carbs_g,
            ),
            meal_type="scanned",
            image_url=image_url,
        )
