"""Note consolidation - Merge runs of identical pitch samples."""

from dataclasses import replace
from typing import List, Sequence

from ..core import ConsolidatedNote, PitchSample
from ..core.constants import DEFAULT_GAP_TOLERANCE


class NoteConsolidator:
    """Merge temporally adjacent samples that resolve to the same note."""

    def __init__(self, gap_tolerance: float = DEFAULT_GAP_TOLERANCE):
        """
        Initialize NoteConsolidator.

        Args:
            gap_tolerance: Maximum distance in seconds between a sample's
                start and the running note's end for the two to merge
        """
        self.gap_tolerance = gap_tolerance

    def should_merge(self, running: PitchSample, sample: PitchSample) -> bool:
        """True if sample continues the running note."""
        return (
            running.note.same_pitch(sample.note)
            and abs(sample.start_time - running.end_time) < self.gap_tolerance
        )

    def consolidate(self, samples: Sequence[PitchSample]) -> List[ConsolidatedNote]:
        """
        Walk samples in order, extending the running note while they match.

        Only end_time of the running note changes on a merge; frequency and
        note stay those of the first sample. Running this on its own output
        returns the same notes.

        Args:
            samples: Pitch samples ordered by start_time

        Returns:
            Consolidated notes
        """
        if not samples:
            return []

        consolidated = []
        running = samples[0]

        for sample in samples[1:]:
            if self.should_merge(running, sample):
                running = replace(running, end_time=sample.end_time)
            else:
                consolidated.append(running)
                running = sample

        consolidated.append(running)
        return consolidated
