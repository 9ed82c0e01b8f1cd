"""
Creative assembly.

Pairs generated assets with ad copy to build the final list of creatives.
"""

from typing import List

from creativebuilder.core.constants import VARIATION_NAMES, VIDEO_VARIATION_LABEL
from creativebuilder.core.error_handler import GenerationError
from creativebuilder.core.logging_config import get_logger
from creativebuilder.models import AdCopy, AdCreative, CreativeType

logger = get_logger(__name__)


class CreativeAssembler:
    """
    Builds ``AdCreative`` records from asset references and ad copy.

    Images get one creative each, labelled by variation and paired with ad
    copy in rotation, so fewer copies than images is fine. A video gets a
    single creative with the first copy.
    """

    def assemble(
        self,
        creative_type: CreativeType,
        assets: List[str],
        copies: List[AdCopy]
    ) -> List[AdCreative]:
        if not copies:
            raise GenerationError("Failed to generate ad copy.")

        if creative_type is CreativeType.VIDEO:
            return self.assemble_video(assets, copies)
        return self.assemble_images(assets, copies)

    def assemble_video(self, assets: List[str], copies: List[AdCopy]) -> List[AdCreative]:
        if not assets:
            return []

        creative = AdCreative(
            url=assets[0],
            type=CreativeType.VIDEO,
            copy=copies[0],
            variation=VIDEO_VARIATION_LABEL
        )
        logger.info(f"Assembled video creative {creative.id}")
        return [creative]

    def assemble_images(self, assets: List[str], copies: List[AdCopy]) -> List[AdCreative]:
        if not assets:
            raise GenerationError("Failed to generate images.")

        creatives = [
            AdCreative(
                url=url,
                type=CreativeType.IMAGE,
                copy=copies[index % len(copies)],
                variation=f"Variation {index + 1}: {VARIATION_NAMES[index % len(VARIATION_NAMES)]}"
            )
            for index, url in enumerate(assets)
        ]
        logger.info(f"Assembled {len(creatives)} image creatives from {len(copies)} ad copies")
        return creatives
