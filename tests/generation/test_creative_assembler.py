"""
Tests for creative assembly and product image loading.
"""

import io
import os
import tempfile
import pytest
from PIL import Image

from creativebuilder.core.error_handler import GenerationError, ValidationError
from creativebuilder.generation.creative_assembler import CreativeAssembler
from creativebuilder.generation.product_image import load_product_image
from creativebuilder.models import CreativeType


class TestCreativeAssembler:

    def test_images_pair_with_copy_in_rotation(self, sample_copies):
        assets = [f"data:image/png;base64,{i}" for i in range(4)]

        creatives = CreativeAssembler().assemble(CreativeType.IMAGE, assets, sample_copies)

        assert [c.variation for c in creatives] == [
            "Variation 1: Minimalist",
            "Variation 2: Lifestyle",
            "Variation 3: Dynamic",
            "Variation 4: Minimalist",
        ]
        assert creatives[3].copy == sample_copies[0]
        assert [c.url for c in creatives] == assets
        assert len({c.id for c in creatives}) == 4

    def test_single_copy_is_reused(self, sample_copies):
        creatives = CreativeAssembler().assemble(CreativeType.IMAGE, ["a", "b", "c"], sample_copies[:1])

        assert all(c.copy == sample_copies[0] for c in creatives)

    def test_video_uses_first_copy(self, sample_copies):
        creatives = CreativeAssembler().assemble(CreativeType.VIDEO, ["/tmp/video.mp4"], sample_copies)

        assert len(creatives) == 1
        assert creatives[0].variation == "Video Creative"
        assert creatives[0].copy == sample_copies[0]
        assert creatives[0].to_dict()["type"] == "Video"

    def test_video_without_asset_is_empty(self, sample_copies):
        assert CreativeAssembler().assemble(CreativeType.VIDEO, [], sample_copies) == []

    def test_no_images_fails(self, sample_copies):
        with pytest.raises(GenerationError) as excinfo:
            CreativeAssembler().assemble(CreativeType.IMAGE, [], sample_copies)

        assert excinfo.value.message == "Failed to generate images."

    def test_no_copy_fails(self):
        with pytest.raises(GenerationError):
            CreativeAssembler().assemble(CreativeType.IMAGE, ["a"], [])


class TestLoadProductImage:

    def setup_method(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def teardown_method(self):
        self.temp_dir.cleanup()

    def test_large_png_is_scaled_and_converted(self):
        path = os.path.join(self.temp_dir.name, "cup.png")
        Image.new("RGBA", (2048, 1024), (255, 0, 0, 128)).save(path)

        product_image = load_product_image(path)

        assert product_image.mime_type == "image/jpeg"
        with Image.open(io.BytesIO(product_image.to_bytes())) as image:
            assert image.format == "JPEG"
            assert image.size == (1024, 512)

    def test_small_image_is_not_enlarged(self):
        path = os.path.join(self.temp_dir.name, "cup.jpg")
        Image.new("RGB", (300, 200), (0, 128, 0)).save(path)

        with Image.open(io.BytesIO(load_product_image(path).to_bytes())) as image:
            assert image.size == (300, 200)

    def test_non_image_file(self):
        path = os.path.join(self.temp_dir.name, "cup.png")
        with open(path, "w") as f:
            f.write("not an image")

        with pytest.raises(ValidationError) as excinfo:
            load_product_image(path)

        assert excinfo.value.field == "product_image"

    def test_missing_file(self):
        with pytest.raises(ValidationError):
            load_product_image(os.path.join(self.temp_dir.name, "missing.png"))
