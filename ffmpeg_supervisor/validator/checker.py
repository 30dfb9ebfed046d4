"""
Outcome classification for finished transcodes.

Entered only when validation was requested and the process exited cleanly.
The output file is checked for existence first, then its metadata is
fetched once and cached on the run state.
"""

from pathlib import Path
from typing import Optional

from ..executor.state import RunState
from ..inspector import MetadataService
from ..models import MediaMetadata, NoOutput, Outcome, Succeeded, ValidationFailed
from ..utils import get_logger

logger = get_logger(__name__)

NO_OUTPUT_NOTE = "no output file created"
INVALID_OUTPUT_NOTE = "encoded file is invalid"


class OutcomeClassifier:
    """
    Classifier deciding between Succeeded, NoOutput and ValidationFailed.

    Expected failures are returned as outcomes and recorded as notes on the
    run state. Faults raised by the metadata service propagate unchanged.
    """

    def __init__(self, metadata_service: MetadataService):
        """
        Initialize classifier.

        Args:
            metadata_service: Service used to check and inspect the output
        """
        self.metadata_service = metadata_service

    async def classify(self, output_path: Optional[Path], state: RunState) -> Outcome:
        """
        Classify a cleanly exited run.

        Args:
            output_path: Expected output file
            state: Run state holding output text, notes and the artifact cache

        Returns:
            Succeeded, NoOutput or ValidationFailed
        """
        if output_path is None or not self.metadata_service.exists(output_path):
            state.add_error(NO_OUTPUT_NOTE)
            return NoOutput(
                command=state.command,
                output=state.output,
                diagnostic=", ".join(state.errors),
            )

        artifact = await self.encoded(output_path, state)
        if not artifact.valid:
            state.add_error(INVALID_OUTPUT_NOTE)
            return ValidationFailed(
                command=state.command,
                output=state.output,
                reasons=tuple(state.errors),
            )

        return Succeeded(command=state.command, output=state.output, artifact=artifact)

    async def encoded(self, output_path: Path, state: RunState) -> MediaMetadata:
        """
        Get metadata of the output file, querying the service at most once per run.

        Args:
            output_path: Output file
            state: Run state owning the cache

        Returns:
            Cached or freshly probed MediaMetadata
        """
        if state.artifact is None:
            logger.debug(f"Inspecting output file {output_path}")
            state.artifact = await self.metadata_service.probe(output_path)
        return state.artifact
