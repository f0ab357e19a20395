"""Fixed-sample recognizers used until real providers are wired in."""

from dataclasses import dataclass, field

from calorie_tracker.domain.recognition import MealGuess
from calorie_tracker.services.recognition import (
    BarcodeLookup,
    MealRecognizer,
    Transcriber,
)


@dataclass
class MockMealRecognizer(MealRecognizer):
    """Recognises every photo as the same sample meal."""

    sample: MealGuess = field(
        default_factory=lambda: MealGuess(
            name="Chicken Salad",
            calories=350,
            protein_g=25,
            carbs_g=15,
            fat_g=20,
        )
    )

    async def recognize(self, image_bytes: bytes) -> MealGuess:
        if not image_bytes:
            raise ValueError("Image is empty")
        return self.sample


@dataclass
class MockBarcodeLookup(BarcodeLookup):
    """Resolves every barcode to the same sample product."""

    sample: MealGuess = field(
        default_factory=lambda: MealGuess(
            name="Granola Bar",
            calories=150,
            protein_g=3,
            carbs_g=25,
            fat_g=5,
        )
    )

    async def lookup(self, barcode: str) -> MealGuess | None:
        if not barcode:
            raise ValueError("Barcode is empty")
        return self.sample


@dataclass
class MockTranscriber(Transcriber):
    """Returns a sample transcript for any recording."""

    transcript: str = "Two scrambled eggs with a slice of whole wheat toast"

    async def transcribe(self, audio_bytes: bytes) -> str:
        if not audio_bytes:
            raise ValueError("Recording is empty")
        return self.transcript
