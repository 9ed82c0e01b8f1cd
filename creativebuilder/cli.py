"""
Command-line interface for the creativebuilder package.

This module provides the CLI commands for the creativebuilder package:
- generate: Generate ad creatives for a product
- config: Read and change user configuration values
"""

import sys
import json
import click
from typing import Optional

from creativebuilder import __version__
from creativebuilder.core.config import get_config_value, set_config_value
from creativebuilder.core.constants import DEFAULT_OUTPUT_DIR
from creativebuilder.core.error_handler import ConfigurationError, GenerationError, ValidationError
from creativebuilder.core.logging_config import get_logger, configure_logging
from creativebuilder.models import CreativeFormat, CreativeType, FontStyle, UserInputs

logger = get_logger(__name__)

FORMAT_CHOICES = [fmt.key for fmt in CreativeFormat]
TYPE_CHOICES = [creative_type.key for creative_type in CreativeType]
FONT_CHOICES = [font.value for font in FontStyle]


@click.group()
@click.version_option(version=__version__)
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
              help='Logging level (default: from configuration)')
@click.option('--no-log-file', is_flag=True, default=False, help='Do not write a log file')
def main(log_level: Optional[str] = None, no_log_file: bool = False):
    """
    Ad Creative Builder - generate policy-compliant Meta ad creatives with AI.
    """
    configure_logging(level=log_level, log_to_file=not no_log_file)


@main.command()
@click.option('-d', '--description', type=str, default="", help='Product description')
@click.option('-u', '--url', 'product_url', type=str, help='Product page URL (used instead of the description)')
@click.option('-i', '--image', 'image_path', type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
              help='Product image to edit (images) or animate (video)')
@click.option('-f', '--format', 'creative_format', type=click.Choice(FORMAT_CHOICES), default='square',
              show_default=True, help='Creative format')
@click.option('-t', '--type', 'creative_type', type=click.Choice(TYPE_CHOICES), default='image',
              show_default=True, help='Creative type')
@click.option('--hook', 'hook_text', type=str, help='Hook text to overlay on the creative')
@click.option('--font', 'font_style', type=click.Choice(FONT_CHOICES, case_sensitive=False), default='Modern',
              show_default=True, help='Font style for the hook text')
@click.option('-o', '--output-dir', type=click.Path(file_okay=False, dir_okay=True),
              help='Base output directory (default: from configuration)')
@click.option('--json', 'as_json', is_flag=True, default=False, help='Print the result summary as JSON')
def generate(description: str, product_url: Optional[str], image_path: Optional[str], creative_format: str,
             creative_type: str, hook_text: Optional[str], font_style: str, output_dir: Optional[str],
             as_json: bool):
    """
    Generate ad creatives for a product.

    Three ad copy variants are written for the product. For images, three
    style variations (Minimalist, Lifestyle, Dynamic) are generated, or edited
    from --image when given. For video, one short looping clip is generated.

    Examples:
      creativebuilder generate -d "Reusable coffee cup"
      creativebuilder generate -u https://example.com/product -f vertical
      creativebuilder generate -i cup.jpg --hook "Sip sustainably" --font Bold
      creativebuilder generate -d "Reusable coffee cup" -t video
    """
    from creativebuilder.generation.product_image import load_product_image
    from creativebuilder.pipeline.orchestrator import CreativeOrchestrator
    from creativebuilder.pipeline.output_manager import OutputManager

    try:
        product_image = load_product_image(image_path) if image_path else None
    except ValidationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    inputs = UserInputs(
        product_description=description,
        product_image=product_image,
        product_url=product_url or None,
        creative_format=CreativeFormat.from_key(creative_format),
        creative_type=CreativeType.from_key(creative_type),
        hook_text=hook_text or None,
        font_style=FontStyle(font_style.capitalize())
    )

    output_manager = OutputManager(output_dir or get_config_value("output.directory", DEFAULT_OUTPUT_DIR))
    run_dir = output_manager.create_run_dir()

    def show_status(status):
        # Failures are reported once, below
        if not as_json and status.error is None:
            click.echo(f"[{status.state.value}] {status.message}", err=True)

    try:
        orchestrator = CreativeOrchestrator(output_manager=output_manager, work_dir=run_dir)
        creatives = orchestrator.generate(inputs, on_status=show_status)
    except (GenerationError, ConfigurationError) as e:
        output_manager.save_metrics(output_manager.get_metrics(), run_dir)
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    summary = output_manager.save_creatives(creatives, run_dir)
    output_manager.save_metrics(output_manager.get_metrics(), run_dir)

    if as_json:
        click.echo(json.dumps(summary, indent=2, ensure_ascii=False))
        return

    click.echo(f"\nGenerated {len(creatives)} creative(s) in {run_dir}\n")
    for entry in summary["creatives"]:
        click.echo(f"{entry['variation']}")
        click.echo(f"  Asset:    {entry['url']}")
        click.echo(f"  Headline: {entry['copy']['headline']}")
        click.echo(f"  Text:     {entry['copy']['primaryText']}")
        click.echo(f"  CTA:      {entry['copy']['cta']}\n")


@main.group()
def config():
    """
    Read and change user configuration (~/.creativebuilder/config.json).
    """
    pass


@config.command('get')
@click.argument('key', type=str)
def config_get(key: str):
    """
    Print a configuration value. KEY uses dot notation, e.g. video_generation.poll_interval.
    """
    value = get_config_value(key)
    if value is None:
        click.echo(f"Error: {key} is not set", err=True)
        sys.exit(1)
    click.echo(json.dumps(value) if isinstance(value, (dict, list, bool)) else str(value))


@config.command('set')
@click.argument('key', type=str)
@click.argument('value', type=str)
def config_set(key: str, value: str):
    """
    Set a configuration value in the user configuration file.

    VALUE is parsed as JSON when possible, so numbers and booleans keep their type.
    """
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        parsed = value

    set_config_value(key, parsed)
    logger.info(f"Set {key} = {parsed!r}")
    click.echo(f"{key} = {json.dumps(parsed)}")


if __name__ == '__main__':
    main()
