"""
Creative generation components.

This module provides the steps of a generation run: product info resolution,
proofreading, ad copy generation, asset generation and creative assembly.
"""

from creativebuilder.generation.product_info import ProductInfoResolver
from creativebuilder.generation.proofreader import Proofreader
from creativebuilder.generation.copy_generator import CopyGenerator
from creativebuilder.generation.asset_generator import CreativeAssetGenerator
from creativebuilder.generation.creative_assembler import CreativeAssembler
from creativebuilder.generation.product_image import load_product_image
