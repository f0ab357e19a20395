"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from openai import AsyncOpenAI
from supabase import create_client

from calorie_tracker.adapters.mock_recognition import (
    MockBarcodeLookup,
    MockMealRecognizer,
    MockTranscriber,
)
from calorie_tracker.adapters.openai_chat_client import OpenAIChatClient
from calorie_tracker.adapters.openai_embedding_client import OpenAIEmbeddingClient
from calorie_tracker.adapters.qdrant_vector_index import QdrantVectorIndex
from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.ingestion import IngestionService
from calorie_tracker.services.meal_plans import MealPlanService
from calorie_tracker.services.meals import MealLogService
from calorie_tracker.services.profile import ProfileService
from calorie_tracker.services.rag import RagService
from calorie_tracker.services.recognition import MealCaptureService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    rag_service: RagService
    ingestion_service: IngestionService
    meal_log_service: MealLogService
    profile_service: ProfileService
    meal_plan_service: MealPlanService
    meal_capture_service: MealCaptureService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    openai_client = AsyncOpenAI(api_key=resolved_settings.openai_api_key)
    embedding_client = OpenAIEmbeddingClient(
        client=openai_client, model=resolved_settings.openai_embedding_model
    )
    chat_client = OpenAIChatClient(
        client=openai_client, model=resolved_settings.openai_chat_model
    )
    vector_index = QdrantVectorIndex.create(
        url=resolved_settings.qdrant_url,
        api_key=resolved_settings.qdrant_api_key,
        collection_name=resolved_settings.qdrant_collection,
    )
    rag_service = RagService(
        embedding_client=embedding_client,
        vector_index=vector_index,
        chat_client=chat_client,
        top_k=resolved_settings.rag_top_k,
        temperature=resolved_settings.openai_temperature,
    )
    ingestion_service = IngestionService(
        embedding_client=embedding_client,
        vector_index=vector_index,
        batch_size=resolved_settings.ingest_batch_size,
    )
    meal_log_service = MealLogService(SupabaseMealRepository(supabase_client))
    profile_service = ProfileService(
        repository=SupabaseProfileRepository(supabase_client),
        default_goal_calories=resolved_settings.default_goal_calories,
    )
    meal_plan_service = MealPlanService(
        profile_service=profile_service,
        meal_log_service=meal_log_service,
    )
    meal_capture_service = MealCaptureService(
        recognizer=MockMealRecognizer(),
        transcriber=MockTranscriber(),
        barcode_lookup=MockBarcodeLookup(),
        meal_log_service=meal_log_service,
    )

    async def close_resources() -> None:
        await openai_client.close()
        vector_index.close()

    return AppContainer(
        settings=resolved_settings,
        rag_service=rag_service,
        ingestion_service=ingestion_service,
        meal_log_service=meal_log_service,
        profile_service=profile_service,
        meal_plan_service=meal_plan_service,
        meal_capture_service=meal_capture_service,
        close_resources=close_resources,
    )
