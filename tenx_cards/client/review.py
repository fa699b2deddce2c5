"""
Review of generated flashcards before they are saved.

``ReviewSession`` owns the candidate list of one generation and applies the
user's decisions to it. It performs no I/O; ``ReviewController`` pairs it with
the HTTP API.

Allowed transitions::

    accept:      pending | rejected            -> accepted
    reject:      pending | accepted | edited   -> rejected
    commit_edit: any status                    -> edited

Nothing ever returns to ``pending``.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import StrEnum

from tenx_cards.domain.common.value_objects import CandidateId, utf16_length
from tenx_cards.domain.learning.entities.flashcard import (
    MAX_BACK_LENGTH,
    MAX_FRONT_LENGTH,
    FlashcardSource,
)


class CandidateStatus(StrEnum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    EDITED = "edited"
    REJECTED = "rejected"


SAVEABLE_STATUSES = frozenset({CandidateStatus.ACCEPTED, CandidateStatus.EDITED})

_ACCEPT_FROM = frozenset({CandidateStatus.PENDING, CandidateStatus.REJECTED})
_REJECT_FROM = frozenset(
    {CandidateStatus.PENDING, CandidateStatus.ACCEPTED, CandidateStatus.EDITED}
)


class ReviewError(Exception):
    """Base class for review session errors."""


class CandidateNotFoundError(ReviewError):
    def __init__(self, candidate_id: CandidateId) -> None:
        self.candidate_id = candidate_id
        super().__init__(f"Candidate {candidate_id.value} is not part of this review")


class InvalidTransitionError(ReviewError):
    def __init__(self, action: str, status: CandidateStatus) -> None:
        self.action = action
        self.status = status
        super().__init__(f"Cannot {action} a candidate that is {status.value}")


class EditInProgressError(ReviewError):
    """Another candidate's edit draft is still open."""


class NoActiveEditError(ReviewError):
    """A draft operation was called while no edit is open."""


class EditValidationError(ReviewError):
    """The edit draft is invalid; ``errors`` maps field name to message."""

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors.values()))


@dataclass(frozen=True)
class ReviewCandidate:
    """
    One generated card and the user's decision about it.

    ``front`` and ``back`` are what the model produced and never change;
    edits live in ``edited_front``/``edited_back``.
    """

    id: CandidateId
    front: str
    back: str
    source: FlashcardSource = FlashcardSource.AI_FULL
    status: CandidateStatus = CandidateStatus.PENDING
    is_edited: bool = False
    edited_front: str | None = None
    edited_back: str | None = None

    @property
    def effective_front(self) -> str:
        if self.is_edited and self.edited_front is not None:
            return self.edited_front
        return self.front

    @property
    def effective_back(self) -> str:
        if self.is_edited and self.edited_back is not None:
            return self.edited_back
        return self.back

    @property
    def save_source(self) -> FlashcardSource:
        return FlashcardSource.AI_EDITED if self.is_edited else FlashcardSource.AI_FULL


@dataclass(frozen=True)
class NewFlashcard:
    """A reviewed card ready to be sent to ``POST /flashcards``."""

    front: str
    back: str
    source: FlashcardSource
    generation_id: int | None

    def to_payload(self) -> dict[str, object]:
        return {
            "front": self.front,
            "back": self.back,
            "source": self.source.value,
            "generation_id": self.generation_id,
        }


def accept(candidate: ReviewCandidate) -> ReviewCandidate:
    if candidate.status not in _ACCEPT_FROM:
        raise InvalidTransitionError("accept", candidate.status)
    return replace(candidate, status=CandidateStatus.ACCEPTED)


def reject(candidate: ReviewCandidate) -> ReviewCandidate:
    if candidate.status not in _REJECT_FROM:
        raise InvalidTransitionError("reject", candidate.status)
    return replace(candidate, status=CandidateStatus.REJECTED)


def apply_edit(candidate: ReviewCandidate, front: str, back: str) -> ReviewCandidate:
    return replace(
        candidate,
        status=CandidateStatus.EDITED,
        is_edited=True,
        edited_front=front,
        edited_back=back,
    )


def validate_edit(front: str, back: str) -> dict[str, str]:
    """Field errors for an edit draft; empty when the draft can be saved."""
    errors: dict[str, str] = {}

    front = front.strip()
    if not front:
        errors["front"] = 'Pole "Przód" jest wymagane'
    elif utf16_length(front) > MAX_FRONT_LENGTH:
        errors["front"] = f"Przód nie może przekraczać {MAX_FRONT_LENGTH} znaków"

    back = back.strip()
    if not back:
        errors["back"] = 'Pole "Tył" jest wymagane'
    elif utf16_length(back) > MAX_BACK_LENGTH:
        errors["back"] = f"Tył nie może przekraczać {MAX_BACK_LENGTH} znaków"

    return errors


@dataclass
class EditDraft:
    """Working copy of a candidate while its edit dialog is open."""

    candidate_id: CandidateId
    front: str
    back: str
    initial_front: str
    initial_back: str

    @property
    def has_changes(self) -> bool:
        return self.front != self.initial_front or self.back != self.initial_back


class ReviewSession:
    """Candidate cards of a single generation and the decisions made on them."""

    def __init__(
        self,
        candidates: Iterable[ReviewCandidate] = (),
        generation_id: int | None = None,
    ) -> None:
        self._candidates: list[ReviewCandidate] = list(candidates)
        self.generation_id = generation_id
        self._draft: EditDraft | None = None

    @classmethod
    def from_generation(
        cls, generation_id: int, flashcards: Iterable[tuple[str, str]]
    ) -> "ReviewSession":
        """Start a review with candidates numbered from 1 in the given order."""
        candidates = [
            ReviewCandidate(id=CandidateId(position), front=front, back=back)
            for position, (front, back) in enumerate(flashcards, start=1)
        ]
        return cls(candidates, generation_id=generation_id)

    @property
    def candidates(self) -> tuple[ReviewCandidate, ...]:
        return tuple(self._candidates)

    @property
    def draft(self) -> EditDraft | None:
        return self._draft

    def get(self, candidate_id: CandidateId) -> ReviewCandidate:
        return self._candidates[self._index(candidate_id)]

    def accept(self, candidate_id: CandidateId) -> ReviewCandidate:
        return self._apply(candidate_id, accept)

    def reject(self, candidate_id: CandidateId) -> ReviewCandidate:
        return self._apply(candidate_id, reject)

    def begin_edit(self, candidate_id: CandidateId) -> EditDraft:
        """
        Open an edit draft seeded with the candidate's current content.

        Reopening the candidate that is already being edited returns the open
        draft with its unsaved changes.

        Raises:
            CandidateNotFoundError: If the id is not part of this review
            EditInProgressError: If a draft for another candidate is open
        """
        candidate = self.get(candidate_id)
        if self._draft is not None:
            if self._draft.candidate_id != candidate_id:
                raise EditInProgressError("Finish or cancel the open edit first")
            return self._draft

        self._draft = EditDraft(
            candidate_id=candidate_id,
            front=candidate.effective_front,
            back=candidate.effective_back,
            initial_front=candidate.effective_front,
            initial_back=candidate.effective_back,
        )
        return self._draft

    def update_draft(self, front: str | None = None, back: str | None = None) -> EditDraft:
        draft = self._require_draft()
        if front is not None:
            draft.front = front
        if back is not None:
            draft.back = back
        return draft

    def commit_edit(self) -> ReviewCandidate:
        """
        Validate the open draft and store it on the candidate.

        A draft without changes just closes and leaves the candidate as it was.

        Raises:
            NoActiveEditError: If no draft is open
            EditValidationError: If front or back is empty or too long; the
                draft stays open
        """
        draft = self._require_draft()
        errors = validate_edit(draft.front, draft.back)
        if errors:
            raise EditValidationError(errors)

        self._draft = None
        if not draft.has_changes:
            return self.get(draft.candidate_id)

        return self._apply(
            draft.candidate_id,
            lambda c: apply_edit(c, draft.front.strip(), draft.back.strip()),
        )

    def cancel_edit(self, confirm: Callable[[], bool] | None = None) -> bool:
        """
        Close the open draft without saving it.

        With unsaved changes ``confirm`` is asked first; a missing or negative
        confirmation keeps the draft open. Returns whether the draft was closed.
        """
        draft = self._require_draft()
        if draft.has_changes and (confirm is None or not confirm()):
            return False
        self._draft = None
        return True

    def saveable(self) -> list[ReviewCandidate]:
        return [c for c in self._candidates if c.status in SAVEABLE_STATUSES]

    def build_save_commands(self) -> list[NewFlashcard]:
        return [
            NewFlashcard(
                front=c.effective_front,
                back=c.effective_back,
                source=c.save_source,
                generation_id=self.generation_id,
            )
            for c in self.saveable()
        ]

    def _index(self, candidate_id: CandidateId) -> int:
        for index, candidate in enumerate(self._candidates):
            if candidate.id == candidate_id:
                return index
        raise CandidateNotFoundError(candidate_id)

    def _apply(
        self,
        candidate_id: CandidateId,
        transition: Callable[[ReviewCandidate], ReviewCandidate],
    ) -> ReviewCandidate:
        index = self._index(candidate_id)
        updated = transition(self._candidates[index])
        self._candidates[index] = updated
        return updated

    def _require_draft(self) -> EditDraft:
        if self._draft is None:
            raise NoActiveEditError("No edit is in progress")
        return self._draft
