"""
Shared fixtures and fake service clients for the creativebuilder tests.
"""

import json
import threading
from types import SimpleNamespace

import pytest

from creativebuilder.clients.base import (
    GeneratedImage,
    ImageGenerationClient,
    TextGenerationClient,
    VideoGenerationClient
)
from creativebuilder.models import AdCopy

SAMPLE_COPIES = [
    {"headline": "Sip Sustainably", "primaryText": "Your coffee, zero waste.", "cta": "Shop Now"},
    {"headline": "Coffee To Go", "primaryText": "Reuse it every morning.", "cta": "Learn More"},
    {"headline": "Keep It Warm", "primaryText": "Double-walled and leak-proof.", "cta": "Buy Now"},
]


class FakeTextClient(TextGenerationClient):
    """
    Text client that answers schema-constrained calls with ``copies_json``
    and every other call with ``text``, recording each prompt.
    """

    def __init__(self, text="Corrected text", copies_json=None, proofread_json=None, error=None):
        self.text = text
        self.copies_json = copies_json if copies_json is not None else json.dumps(SAMPLE_COPIES)
        self.proofread_json = proofread_json
        self.error = error
        self.calls = []

    def generate_text(self, prompt, response_schema=None, schema_name=None):
        self.calls.append({"prompt": prompt, "schema": response_schema})
        if self.error:
            raise self.error
        if response_schema is None:
            return self.text
        if self.proofread_json is not None and prompt.startswith("You are an expert copy editor"):
            return self.proofread_json
        return self.copies_json


class FakeImageClient(ImageGenerationClient):
    """
    Image client that returns one image per call. ``results`` overrides the
    outcome per call in order: a list of images, or an exception to raise.
    """

    def __init__(self, results=None):
        self.results = list(results) if results is not None else None
        self.calls = []
        self._lock = threading.Lock()

    def _next(self, prompt):
        with self._lock:
            index = len(self.calls)
            self.calls.append(prompt)
        if self.results is None:
            return [GeneratedImage(data="aW1hZ2U=", mime_type="image/png")]
        result = self.results[index]
        if isinstance(result, Exception):
            raise result
        return result

    def generate_images(self, prompt, aspect_ratio, num_images=1, output_mime_type="image/jpeg"):
        self.last_aspect_ratio = aspect_ratio
        return self._next(prompt)

    def edit_image(self, prompt, image):
        return self._next(prompt)


class FakeVideoClient(VideoGenerationClient):
    """
    Video client whose operation reports done on poll ``done_after``.
    ``done_after=None`` never finishes.
    """

    def __init__(self, done_after=0, uri="https://example.com/video.mp4", content=b"mp4-bytes"):
        self.done_after = done_after
        self.uri = uri
        self.content = content
        self.started = []
        self.polls = 0

    def start_generation(self, prompt, image=None):
        self.started.append({"prompt": prompt, "image": image})
        return SimpleNamespace(done=self.done_after == 0)

    def get_operation(self, operation):
        self.polls += 1
        return SimpleNamespace(done=self.done_after is not None and self.polls >= self.done_after)

    def is_done(self, operation):
        return operation.done

    def video_uri(self, operation):
        return self.uri

    def download(self, uri):
        return self.content


@pytest.fixture
def sample_copies():
    return [AdCopy.from_dict(item) for item in SAMPLE_COPIES]


@pytest.fixture
def text_client():
    return FakeTextClient()


@pytest.fixture
def image_client():
    return FakeImageClient()
