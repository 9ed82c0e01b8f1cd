"""
Tests for the CLI module.
"""

import os
import json
import tempfile
import pytest
from unittest.mock import patch, MagicMock
from click.testing import CliRunner
from PIL import Image

from creativebuilder.cli import main
from creativebuilder.core import config
from creativebuilder.core.config import get_config
from creativebuilder.core.error_handler import GenerationError
from creativebuilder.models import AdCopy, AdCreative, CreativeFormat, CreativeType, FontStyle

COPY = AdCopy(headline="Sip Sustainably", primary_text="Your coffee, zero waste.", cta="Shop Now")


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("creativebuilder.cli.configure_logging") as mock_configure:
        yield mock_configure


class TestCLI:
    """
    Tests for the CLI module.
    """

    @pytest.fixture
    def runner(self):
        """
        Click CLI test runner.
        """
        return CliRunner()

    @pytest.fixture
    def output_dir(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            yield temp_dir

    @pytest.fixture
    def mock_orchestrator(self):
        with patch("creativebuilder.pipeline.orchestrator.CreativeOrchestrator") as mock_class:
            orchestrator = MagicMock()
            orchestrator.generate.return_value = [
                AdCreative(url="data:image/png;base64,aW1n", type=CreativeType.IMAGE, copy=COPY,
                           variation="Variation 1: Minimalist")
            ]
            mock_class.return_value = orchestrator
            yield orchestrator

    def test_generate(self, runner, output_dir, mock_orchestrator):
        result = runner.invoke(main, [
            "--no-log-file", "generate",
            "-d", "Reusable coffee cup",
            "-f", "vertical",
            "--hook", "Sip sustainably",
            "--font", "bold",
            "-o", output_dir
        ])

        assert result.exit_code == 0, result.output
        assert "Variation 1: Minimalist" in result.output
        assert "Headline: Sip Sustainably" in result.output

        inputs = mock_orchestrator.generate.call_args[0][0]
        assert inputs.product_description == "Reusable coffee cup"
        assert inputs.creative_format is CreativeFormat.VERTICAL
        assert inputs.creative_type is CreativeType.IMAGE
        assert inputs.hook_text == "Sip sustainably"
        assert inputs.font_style is FontStyle.BOLD

        run_dirs = os.listdir(output_dir)
        assert len(run_dirs) == 1
        run_files = os.listdir(os.path.join(output_dir, run_dirs[0]))
        assert "creatives.json" in run_files
        assert "metrics.json" in run_files
        assert "creative_1_minimalist.png" in run_files

    def test_generate_json_output(self, runner, output_dir, mock_orchestrator):
        result = runner.invoke(main, ["--no-log-file", "generate", "-u", "https://example.com/cup",
                                      "-t", "image", "-o", output_dir, "--json"])

        assert result.exit_code == 0, result.output
        summary = json.loads(result.stdout)
        assert summary["creatives"][0]["copy"]["cta"] == "Shop Now"
        assert mock_orchestrator.generate.call_args[0][0].product_url == "https://example.com/cup"

    def test_generate_with_image(self, runner, output_dir, mock_orchestrator):
        image_path = os.path.join(output_dir, "cup.png")
        Image.new("RGB", (64, 64), (255, 255, 255)).save(image_path)

        result = runner.invoke(main, ["--no-log-file", "generate", "-i", image_path, "-t", "video",
                                      "-o", os.path.join(output_dir, "out")])

        assert result.exit_code == 0, result.output
        inputs = mock_orchestrator.generate.call_args[0][0]
        assert inputs.product_image.mime_type == "image/jpeg"
        assert inputs.creative_type is CreativeType.VIDEO

    def test_generate_failure(self, runner, output_dir, mock_orchestrator):
        mock_orchestrator.generate.side_effect = GenerationError("Failed to generate images.")

        result = runner.invoke(main, ["--no-log-file", "generate", "-d", "cup", "-o", output_dir])

        assert result.exit_code == 1
        assert "Error: Failed to generate images." in result.output

    def test_generate_invalid_format(self, runner):
        result = runner.invoke(main, ["--no-log-file", "generate", "-f", "portrait"])

        assert result.exit_code == 2


class TestConfigCommands:
    """
    Tests for the config command group.
    """

    def setup_method(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.patcher = patch.object(config, "USER_CONFIG_PATH", os.path.join(self.temp_dir.name, "config.json"))
        self.patcher.start()
        get_config(reload=True)

    def teardown_method(self):
        self.patcher.stop()
        self.temp_dir.cleanup()
        get_config(reload=True)

    def test_get(self):
        result = CliRunner().invoke(main, ["--no-log-file", "config", "get", "video_generation.max_polls"])

        assert result.exit_code == 0
        assert result.output.strip() == "60"

    def test_get_missing(self):
        result = CliRunner().invoke(main, ["--no-log-file", "config", "get", "nope.nothing"])

        assert result.exit_code == 1

    def test_set_parses_json(self):
        runner = CliRunner()

        result = runner.invoke(main, ["--no-log-file", "config", "set", "image_generation.partial_text_to_image",
                                      "true"])
        assert result.exit_code == 0

        result = runner.invoke(main, ["--no-log-file", "config", "get", "image_generation.partial_text_to_image"])
        assert result.output.strip() == "true"

    def test_set_string(self):
        runner = CliRunner()

        runner.invoke(main, ["--no-log-file", "config", "set", "text_generation.model", "openai/gpt-4o"])
        result = runner.invoke(main, ["--no-log-file", "config", "get", "text_generation.model"])

        assert result.output.strip() == "openai/gpt-4o"
