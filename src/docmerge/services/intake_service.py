from __future__ import annotations

import logging
from typing import Iterable

from docmerge.domain.models import AcceptedFile, CandidateFile, IntakeResult
from docmerge.domain.selection import SelectionStore
from docmerge.domain.validation import partition_candidates

logger = logging.getLogger(__name__)


class IntakeService:
    def __init__(self, selection: SelectionStore) -> None:
        self._selection = selection

    def accept(self, candidates: Iterable[CandidateFile]) -> IntakeResult:
        """Append the Word documents among ``candidates`` to the selection.

        Anything else is dropped without an error; it is only reported back
        through ``IntakeResult.rejected``.
        """
        accepted_candidates, rejected = partition_candidates(candidates)
        for candidate in rejected:
            logger.debug("Ignoring %s (%s): not a Word document", candidate.name, candidate.mime_type)
        accepted = [AcceptedFile.from_candidate(candidate) for candidate in accepted_candidates]
        if accepted:
            self._selection.append(accepted)
        return IntakeResult(accepted=accepted, rejected=rejected)
