"""Filename suffix filtering for dropped or selected files.

Each task kind admits a fixed set of filename suffixes. Candidates that do not
match are dropped without raising; :func:`partition` additionally reports the
rejected candidates so a caller can tell the user why nothing happened.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from pdfstudio.core.logging_utils import get_logger
from pdfstudio.domain import FileCandidate, TaskKind

logger = get_logger()


def _normalise_suffix(suffix: str) -> str:
    cleaned = suffix.strip().lower()
    if cleaned.startswith("."):
        cleaned = cleaned[1:]
    return cleaned


@dataclass(frozen=True, slots=True)
class AcceptancePolicy:
    """Ordered, case-insensitive suffix allow-list for one task kind."""

    kind: TaskKind
    suffixes: tuple[str, ...]

    @classmethod
    def parse(cls, kind: TaskKind, accept: str) -> "AcceptancePolicy":
        """Build a policy from an HTML style ``accept`` string like ``".png,.jpg"``."""

        suffixes = tuple(part.strip() for part in accept.split(",") if part.strip())
        return cls(kind=kind, suffixes=suffixes)

    @property
    def accept_string(self) -> str:
        return ",".join(self.suffixes)

    def matches(self, filename: str) -> bool:
        lowered = filename.lower()
        for suffix in self.suffixes:
            normalised = _normalise_suffix(suffix)
            if normalised and lowered.endswith(normalised):
                return True
        return False


@dataclass(frozen=True, slots=True)
class AcceptanceResult:
    accepted: list[FileCandidate] = field(default_factory=list)
    rejected: list[FileCandidate] = field(default_factory=list)

    @property
    def has_rejections(self) -> bool:
        return bool(self.rejected)


DEFAULT_POLICIES: dict[TaskKind, AcceptancePolicy] = {
    TaskKind.MERGE: AcceptancePolicy.parse(TaskKind.MERGE, ".pdf"),
    TaskKind.SPLIT: AcceptancePolicy.parse(TaskKind.SPLIT, ".pdf"),
    TaskKind.IMAGES_TO_PDF: AcceptancePolicy.parse(
        TaskKind.IMAGES_TO_PDF, ".png,.jpg,.jpeg,.webp,.bmp"
    ),
}


def policy_for(kind: TaskKind) -> AcceptancePolicy:
    return DEFAULT_POLICIES[TaskKind(kind)]


def partition(candidates: Iterable[FileCandidate], policy: AcceptancePolicy) -> AcceptanceResult:
    """Split ``candidates`` into accepted and rejected, preserving order."""

    accepted: list[FileCandidate] = []
    rejected: list[FileCandidate] = []
    for candidate in candidates:
        if policy.matches(candidate.name):
            accepted.append(candidate)
        else:
            rejected.append(candidate)
    if rejected:
        logger.debug(
            "dropped %d file(s) not accepted for %s: %s",
            len(rejected),
            policy.kind.value,
            ", ".join(item.name for item in rejected),
        )
    return AcceptanceResult(accepted=accepted, rejected=rejected)


def accept(candidates: Iterable[FileCandidate], policy: AcceptancePolicy) -> list[FileCandidate]:
    """Return the candidates whose name ends with one of the policy's suffixes."""

    return partition(candidates, policy).accepted
