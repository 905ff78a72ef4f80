"""
Integration with Replicate for story illustration generation.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Iterable as IterableABC
from dataclasses import dataclass
from typing import Any, Callable

import replicate
import requests

from chronicle.common import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_IDENTIFIER = "google/imagen-4"
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_OUTPUT_FORMAT = "jpg"
DOWNLOAD_TIMEOUT_SECONDS = 60

_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
}


@dataclass(frozen=True)
class GeneratedImage:
    """Raw image bytes returned by the image model."""

    data: bytes
    mime_type: str

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def _build_imagen_input(
    *,
    prompt: str,
    number_of_images: int,
    output_format: str,
    aspect_ratio: str,
) -> dict[str, Any]:
    # Imagen on Replicate always renders a single image per prediction.
    return {
        "prompt": prompt,
        "aspect_ratio": aspect_ratio,
        "output_format": output_format,
        "safety_filter_level": "block_only_high",
    }


def _build_flux_schnell_input(
    *,
    prompt: str,
    number_of_images: int,
    output_format: str,
    aspect_ratio: str,
) -> dict[str, Any]:
    return {
        "prompt": prompt,
        "aspect_ratio": aspect_ratio,
        "output_format": output_format,
        "num_outputs": number_of_images,
    }


_MODEL_INPUT_BUILDERS: dict[str, Callable[..., dict[str, Any]]] = {
    "google/imagen-4": _build_imagen_input,
    "google/imagen-4-fast": _build_imagen_input,
    "black-forest-labs/flux-schnell": _build_flux_schnell_input,
}


def _build_replicate_input_payload(
    *,
    model_identifier: str,
    prompt: str,
    number_of_images: int,
    output_format: str,
    aspect_ratio: str,
) -> dict[str, Any]:
    normalized_identifier = model_identifier.strip().lower()
    builder = _MODEL_INPUT_BUILDERS.get(normalized_identifier)
    if builder is None and ":" in normalized_identifier:
        base_identifier = normalized_identifier.split(":", maxsplit=1)[0]
        builder = _MODEL_INPUT_BUILDERS.get(base_identifier)
    if builder is None:
        supported_models = ", ".join(sorted(set(_MODEL_INPUT_BUILDERS)))
        raise ValueError(
            "Model identifier "
            f"'{model_identifier}' is not configured with a default input payload. "
            f"Supported models: {supported_models}."
        )

    return builder(
        prompt=prompt,
        number_of_images=number_of_images,
        output_format=output_format,
        aspect_ratio=aspect_ratio,
    )


class ReplicateImageGenerator:
    """
    Convenience wrapper around the Replicate client for story illustrations.

    Parameters
    ----------
    api_token:
        Replicate API token. Required unless ``client`` is provided.
    model_identifier:
        Model string in the ``owner/model`` or ``owner/model:version`` format.
    client:
        Optional pre-configured :class:`replicate.Client`, reused for every call. Its
        async transport is bound to the first event loop it runs on, so only inject
        one when all calls share a loop (mainly useful for testing).
    client_factory:
        Optional callable returning a fresh client. By default a new
        :class:`replicate.Client` is built for each :meth:`generate_images` call so
        the generator can be driven by successive ``asyncio.run`` invocations.
    """

    def __init__(
        self,
        *,
        api_token: str | None = None,
        model_identifier: str = DEFAULT_MODEL_IDENTIFIER,
        client: replicate.Client | None = None,
        client_factory: Callable[[], replicate.Client] | None = None,
    ) -> None:
        if not api_token and not client and not client_factory:
            raise ConfigurationError(
                "Replicate API token is required. Set REPLICATE_API_TOKEN or pass api_token."
            )
        if not model_identifier:
            raise ConfigurationError("Replicate model identifier is required.")

        self._model_identifier = model_identifier
        if client is not None:
            self._client_factory = lambda: client
        elif client_factory is not None:
            self._client_factory = client_factory
        else:
            self._client_factory = lambda: replicate.Client(api_token=api_token)

    @property
    def model_identifier(self) -> str:
        """Return the model identifier currently used."""
        return self._model_identifier

    async def generate_images(
        self,
        prompt: str,
        *,
        number_of_images: int = 1,
        output_format: str = DEFAULT_OUTPUT_FORMAT,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
        **model_kwargs: Any,
    ) -> list[GeneratedImage]:
        """
        Generate images from Replicate using the configured model.

        Parameters
        ----------
        prompt:
            Full text prompt, style included.
        number_of_images:
            Upper bound on the number of images returned.
        output_format:
            Encoding requested from the model (``jpg``, ``png`` or ``webp``).
        aspect_ratio:
            Aspect ratio string understood by the model, e.g. ``16:9``.
        **model_kwargs:
            Additional keyword arguments forwarded directly to the Replicate model input.

        Returns
        -------
        list[GeneratedImage]
            Possibly empty when the model refused the prompt.
        """
        if number_of_images < 1:
            raise ValueError("number_of_images must be at least 1.")

        mime_type = _MIME_TYPES.get(output_format.lower())
        if mime_type is None:
            raise ValueError(f"Unsupported output format '{output_format}'.")

        replicate_input = _build_replicate_input_payload(
            model_identifier=self._model_identifier,
            prompt=prompt,
            number_of_images=number_of_images,
            output_format=output_format,
            aspect_ratio=aspect_ratio,
        )
        replicate_input.update(model_kwargs)

        client = self._client_factory()
        output = await client.async_run(self._model_identifier, input=replicate_input)

        images: list[GeneratedImage] = []
        for item in normalize_image_outputs(output)[:number_of_images]:
            data = await _read_image_output(item)
            if data:
                images.append(GeneratedImage(data=data, mime_type=mime_type))

        logger.debug("Replicate model %s returned %d image(s)", self._model_identifier, len(images))
        return images


def normalize_image_outputs(raw: Any) -> list[Any]:
    """
    Flatten whatever Replicate returned into a list of individual image outputs.
    """
    if raw is None:
        return []

    if isinstance(raw, (str, bytes, bytearray)) or _is_file_output(raw):
        return [raw]

    if isinstance(raw, IterableABC):
        normalized: list[Any] = []
        for item in raw:
            normalized.extend(normalize_image_outputs(item))
        return normalized

    return [raw]


def _is_file_output(item: Any) -> bool:
    return hasattr(item, "aread") or hasattr(item, "read")


async def _read_image_output(item: Any) -> bytes:
    if isinstance(item, (bytes, bytearray)):
        return bytes(item)

    if hasattr(item, "aread"):
        return await item.aread()

    if hasattr(item, "read"):
        return await asyncio.to_thread(item.read)

    url = str(item)
    if url.lower().startswith(("http://", "https://")):
        return await asyncio.to_thread(_download, url)

    if url.lower().startswith("data:") and "," in url:
        return base64.b64decode(url.split(",", 1)[1])

    raise ValueError(f"Unrecognized image output from Replicate: {url[:80]!r}")


def _download(url: str) -> bytes:
    response = requests.get(url, timeout=DOWNLOAD_TIMEOUT_SECONDS)
    response.raise_for_status()
    return response.content
