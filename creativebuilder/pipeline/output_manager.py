"""
Output manager module.

This module writes the results of a run to disk: asset files, a JSON summary
of the creatives and timing metrics.
"""

import os
import json
import shutil
import logging
import time
import datetime
from typing import Dict, Any, List, Optional

from creativebuilder.core.utils import (
    decode_data_url,
    ensure_dir,
    extension_for_mime_type,
    generate_unique_id,
    sanitize_filename
)
from creativebuilder.models import AdCreative, CreativeType

logger = logging.getLogger(__name__)


class OutputManager:
    """
    Class for managing output files and run metrics.
    """

    def __init__(self, base_output_dir: Optional[str] = None):
        """
        Initialize the OutputManager.

        Args:
            base_output_dir: Base directory for outputs. If not provided,
                            ``output`` under the current working directory is used.
        """
        self.base_output_dir = base_output_dir or os.path.join(os.getcwd(), "output")

        # Performance metrics
        self.start_time = None
        self.metrics = {}

    def create_run_dir(self, run_id: Optional[str] = None) -> str:
        """
        Create the directory for one run.

        Args:
            run_id: Name of the run directory. Defaults to a timestamp.

        Returns:
            Path to the created directory.
        """
        run_id = sanitize_filename(run_id or generate_unique_id("run_"))
        output_dir = ensure_dir(os.path.join(self.base_output_dir, run_id))
        logger.info(f"Created output directory: {output_dir}")
        return output_dir

    def save_creatives(
        self,
        creatives: List[AdCreative],
        output_dir: str,
        filename: str = "creatives.json"
    ) -> Dict[str, Any]:
        """
        Save creative assets and a JSON summary.

        Image data URLs are decoded into files; video files are copied into
        ``output_dir``. In the summary each ``url`` is replaced with the path
        of the saved asset.

        Args:
            creatives: Creatives from a finished run.
            output_dir: Directory to write to.
            filename: Name of the summary file.

        Returns:
            The summary that was written, with its own path under ``summary_path``.
        """
        ensure_dir(output_dir)

        entries = []
        for index, creative in enumerate(creatives, start=1):
            asset_path = self.save_asset(creative, output_dir, index)
            entry = creative.to_dict()
            entry["url"] = asset_path
            entries.append(entry)

        summary = {
            "generated_at": datetime.datetime.now().isoformat(),
            "creatives": entries
        }

        summary_path = os.path.join(output_dir, filename)
        with open(summary_path, "w") as f:
            json.dump(summary, f, indent=2, ensure_ascii=False)

        logger.info(f"Saved {len(entries)} creatives to {summary_path}")
        summary["summary_path"] = summary_path
        return summary

    def save_asset(self, creative: AdCreative, output_dir: str, index: int) -> str:
        """
        Write the asset of one creative into ``output_dir``.

        Args:
            creative: Creative whose asset to save.
            output_dir: Directory to write to.
            index: 1-based position of the creative, used in the filename.

        Returns:
            Path to the saved asset.

        Raises:
            FileNotFoundError: If a video asset does not exist.
        """
        if creative.type is CreativeType.VIDEO:
            if not os.path.isfile(creative.url):
                raise FileNotFoundError(f"Asset not found: {creative.url}")
            output_path = os.path.join(output_dir, f"creative_{index}_video.mp4")
            if os.path.abspath(creative.url) != os.path.abspath(output_path):
                shutil.copy2(creative.url, output_path)
        else:
            mime_type, content = decode_data_url(creative.url)
            name = creative.variation.split(":")[-1].strip().lower()
            output_path = os.path.join(
                output_dir,
                sanitize_filename(f"creative_{index}_{name}.{extension_for_mime_type(mime_type)}")
            )
            with open(output_path, "wb") as f:
                f.write(content)

        logger.info(f"Saved asset to {output_path}")
        return output_path

    def save_metrics(
        self,
        metrics: Dict[str, Any],
        output_dir: str,
        filename: str = "metrics.json"
    ) -> str:
        """
        Save performance metrics to a file.

        Args:
            metrics: Performance metrics.
            output_dir: Directory to save the metrics to.
            filename: Name of the metrics file.

        Returns:
            Path to the saved metrics file.
        """
        ensure_dir(output_dir)

        metrics_path = os.path.join(output_dir, filename)
        with open(metrics_path, "w") as f:
            json.dump(metrics, f, indent=2)

        logger.info(f"Saved metrics to {metrics_path}")

        return metrics_path

    def start_timing(self, label: str = "total") -> None:
        """
        Start timing a process.

        Args:
            label: Label for the timing.
        """
        if label == "total" and self.start_time is None:
            self.start_time = time.time()

        self.metrics.setdefault("timings", {}).setdefault(label, {})["start"] = time.time()

    def end_timing(self, label: str = "total") -> float:
        """
        End timing a process and return the elapsed time.

        Args:
            label: Label for the timing.

        Returns:
            Elapsed time in seconds.
        """
        timing = self.metrics.get("timings", {}).get(label)
        if label == "total" and self.start_time is not None:
            elapsed = time.time() - self.start_time
            self.start_time = None
        elif timing and "start" in timing:
            elapsed = time.time() - timing["start"]
        else:
            logger.warning(f"No timing started for {label}")
            return 0.0

        timing = self.metrics.setdefault("timings", {}).setdefault(label, {})
        timing["end"] = time.time()
        timing["elapsed"] = elapsed

        logger.info(f"Timing for {label}: {elapsed:.2f} seconds")

        return elapsed

    def record_error(
        self,
        error_type: str,
        message: str,
        component: str,
        recoverable: bool
    ) -> None:
        """
        Record an error for metrics tracking.

        Args:
            error_type: Type of error.
            message: Error message.
            component: Component where the error occurred.
            recoverable: Whether the error is recoverable.
        """
        self.metrics.setdefault("errors", []).append({
            "error_type": error_type,
            "message": message,
            "component": component,
            "recoverable": recoverable,
            "timestamp": datetime.datetime.now().isoformat()
        })

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get the current metrics.

        Returns:
            Current metrics.
        """
        return self.metrics

    def clear_metrics(self) -> None:
        """
        Clear the current metrics.
        """
        self.metrics = {}
        self.start_time = None
