"""Google Cloud Vision client for object localization."""

from dataclasses import dataclass

from google.api_core.client_options import ClientOptions
from google.cloud import vision

from cat_gallery.services.detection import ObjectLocalizationClient


@dataclass
class GoogleVisionClient(ObjectLocalizationClient):
    """Object localization backed by the Cloud Vision annotate API."""

    api_key: str | None = None
    client: vision.ImageAnnotatorAsyncClient | None = None

    @classmethod
    def create(cls, api_key: str | None = None) -> "GoogleVisionClient":
        """Create a Vision client from an API key or default credentials.

        The gRPC channel is opened on first use so the client can be built
        outside a running event loop.
        """
        return cls(api_key=api_key)

    async def localize_objects(
        self, image_bytes: bytes, max_results: int
    ) -> list[dict[str, object]]:
        """Send one image in one batch request and return its objects."""
        request = vision.BatchAnnotateImagesRequest(
            requests=[
                vision.AnnotateImageRequest(
                    image=vision.Image(content=image_bytes),
                    features=[
                        vision.Feature(
                            type_=vision.Feature.Type.OBJECT_LOCALIZATION,
                            max_results=max_results,
                        )
                    ],
                )
            ]
        )
        response = await self._annotator().batch_annotate_images(request=request)
        if not response.responses:
            return []
        annotation = response.responses[0]
        if annotation.error.message:
            raise RuntimeError(f"Vision API error: {annotation.error.message}")
        return [
            {
                "name": obj.name,
                "score": obj.score,
                "vertices": [
                    (vertex.x, vertex.y)
                    for vertex in obj.bounding_poly.normalized_vertices
                ],
            }
            for obj in annotation.localized_object_annotations
        ]

    async def close(self) -> None:
        """Close the underlying gRPC channel if it was opened."""
        if self.client is not None:
            await self.client.transport.close()
            self.client = None

    def _annotator(self) -> vision.ImageAnnotatorAsyncClient:
        if self.client is None:
            if self.api_key:
                self.client = vision.ImageAnnotatorAsyncClient(
                    client_options=ClientOptions(api_key=self.api_key)
                )
            else:
                self.client = vision.ImageAnnotatorAsyncClient()
        return self.client
