"""Qdrant-backed vector index with payload namespaces."""

from dataclasses import dataclass
from uuid import NAMESPACE_URL, uuid5

from qdrant_client import QdrantClient, models

from calorie_tracker.domain.rag import VectorMatch, VectorRecord
from calorie_tracker.services.rag import VectorIndex

_NAMESPACE_KEY = "namespace"
_RECORD_ID_KEY = "record_id"


@dataclass
class QdrantVectorIndex(VectorIndex):
    """Stores every namespace in one collection, partitioned by payload."""

    client: QdrantClient
    collection_name: str

    @classmethod
    def create(
        cls, url: str, api_key: str | None, collection_name: str
    ) -> "QdrantVectorIndex":
        """Create an index bound to a Qdrant collection."""
        return cls(
            client=QdrantClient(url=url, api_key=api_key, timeout=10.0),
            collection_name=collection_name,
        )

    def ensure_collection(self, dimension: int) -> None:
        """Create the collection and namespace index when missing."""
        if self.client.collection_exists(self.collection_name):
            return
        self.client.create_collection(
            collection_name=self.collection_name,
            vectors_config=models.VectorParams(
                size=dimension, distance=models.Distance.COSINE
            ),
        )
        self.client.create_payload_index(
            collection_name=self.collection_name,
            field_name=_NAMESPACE_KEY,
            field_schema=models.PayloadSchemaType.KEYWORD,
        )

    def upsert(self, vectors: list[VectorRecord], namespace: str) -> None:
        """Insert or overwrite vectors in a namespace."""
        points = [
            models.PointStruct(
                id=point_id(namespace, vector.id),
                vector=list(vector.values),
                payload={
                    **vector.metadata,
                    _NAMESPACE_KEY: namespace,
                    _RECORD_ID_KEY: vector.id,
                },
            )
            for vector in vectors
        ]
        self.client.upsert(
            collection_name=self.collection_name, points=points, wait=True
        )

    def query(
        self,
        vector: list[float],
        namespace: str,
        top_k: int,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        """Return the nearest matches within a namespace."""
        response = self.client.query_points(
            collection_name=self.collection_name,
            query=vector,
            query_filter=models.Filter(
                must=[
                    models.FieldCondition(
                        key=_NAMESPACE_KEY,
                        match=models.MatchValue(value=namespace),
                    )
                ]
            ),
            limit=top_k,
            with_payload=include_metadata,
        )
        return [_to_match(point) for point in response.points]

    def close(self) -> None:
        """Close the underlying client."""
        self.client.close()


def point_id(namespace: str, record_id: str) -> str:
    """Stable Qdrant point id for a record within a namespace."""
    return str(uuid5(NAMESPACE_URL, f"{namespace}/{record_id}"))


def _to_match(point: models.ScoredPoint) -> VectorMatch:
    payload = dict(point.payload or {})
    payload.pop(_NAMESPACE_KEY, None)
    record_id = payload.pop(_RECORD_ID_KEY, None)
    return VectorMatch(
        id=str(record_id if record_id is not None else point.id),
        score=float(point.score),
        metadata=payload,
    )
