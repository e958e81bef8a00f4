"""The closed set of submission kinds and the spellings clients use for them."""

from __future__ import annotations

from dataclasses import dataclass

from django.db import models
from django.utils.translation import gettext_lazy as _

from .exceptions import UnknownVariantError


class SubmissionVariant(models.TextChoices):
    INTERNSHIP = "internship", _("Internship")
    PLACEMENT = "placement", _("Placement")
    SKILL = "skill", _("Skill")
    CURRICULAR = "curriculam", _("Curricular activity")
    EXTRACURRICULAR = "extracurriculam", _("Extracurricular activity")


# Historical spellings sent by the dashboards, keyed lower-case.
VARIANT_ALIASES: dict[str, SubmissionVariant] = {
    "intern": SubmissionVariant.INTERNSHIP,
    "inters": SubmissionVariant.INTERNSHIP,
    "interned": SubmissionVariant.INTERNSHIP,
    "internship": SubmissionVariant.INTERNSHIP,
    "internships": SubmissionVariant.INTERNSHIP,
    "placed": SubmissionVariant.PLACEMENT,
    "company": SubmissionVariant.PLACEMENT,
    "placement": SubmissionVariant.PLACEMENT,
    "placements": SubmissionVariant.PLACEMENT,
    "skill": SubmissionVariant.SKILL,
    "skills": SubmissionVariant.SKILL,
    "curricular": SubmissionVariant.CURRICULAR,
    "curriculam": SubmissionVariant.CURRICULAR,
    "curriculum": SubmissionVariant.CURRICULAR,
    "activities": SubmissionVariant.CURRICULAR,
    "extracurricular": SubmissionVariant.EXTRACURRICULAR,
    "extracurriculam": SubmissionVariant.EXTRACURRICULAR,
    "extracurriculum": SubmissionVariant.EXTRACURRICULAR,
}


@dataclass(frozen=True)
class VariantInfo:
    # URL segment of the student list and stream endpoints
    collection: str
    # key in the admin ``breakdown`` object
    breakdown_key: str
    # prefix of the "... documents retrieved successfully" message
    label: str

    @property
    def event(self) -> str:
        return f"{self.collection}-update"


VARIANT_INFO: dict[SubmissionVariant, VariantInfo] = {
    SubmissionVariant.CURRICULAR: VariantInfo("curricular", "curriculam", "Curricular"),
    SubmissionVariant.EXTRACURRICULAR: VariantInfo(
        "extracurricular", "extracurriculam", "Extracurricular"
    ),
    SubmissionVariant.INTERNSHIP: VariantInfo("internships", "internships", "Internship"),
    SubmissionVariant.PLACEMENT: VariantInfo("placements", "placements", "Placement"),
    SubmissionVariant.SKILL: VariantInfo("skills", "skills", "Skills"),
}

COLLECTIONS: dict[str, SubmissionVariant] = {
    info.collection: variant for variant, info in VARIANT_INFO.items()
}


def resolve_variant(tag) -> SubmissionVariant:
    """Map a client-supplied tag (any known spelling, any case) to a variant."""

    key = str(tag or "").strip().lower()
    try:
        return VARIANT_ALIASES[key]
    except KeyError:
        raise UnknownVariantError(tag) from None


def variant_for_collection(collection: str) -> SubmissionVariant:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise UnknownVariantError(collection) from None
