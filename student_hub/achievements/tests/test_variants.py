import pytest

from student_hub.achievements.exceptions import UnknownVariantError
from student_hub.achievements.locations import normalize_document_location
from student_hub.achievements.locations import stored_document_name
from student_hub.achievements.variants import VARIANT_INFO
from student_hub.achievements.variants import SubmissionVariant
from student_hub.achievements.variants import resolve_variant
from student_hub.achievements.variants import variant_for_collection


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("skill", SubmissionVariant.SKILL),
        ("Skills", SubmissionVariant.SKILL),
        ("internships", SubmissionVariant.INTERNSHIP),
        ("placed", SubmissionVariant.PLACEMENT),
        ("curriculum", SubmissionVariant.CURRICULAR),
        ("curriculam", SubmissionVariant.CURRICULAR),
        (" extracurricular ", SubmissionVariant.EXTRACURRICULAR),
    ],
)
def test_resolve_variant_accepts_known_spellings(tag, expected):
    assert resolve_variant(tag) is expected


@pytest.mark.parametrize("tag", ["", None, "sports", "skillz"])
def test_resolve_variant_rejects_unknown(tag):
    with pytest.raises(UnknownVariantError) as excinfo:
        resolve_variant(tag)
    assert excinfo.value.tag == tag


def test_exactly_five_variants_with_collections():
    assert len(SubmissionVariant) == 5
    assert set(VARIANT_INFO) == set(SubmissionVariant)
    for variant, info in VARIANT_INFO.items():
        assert variant_for_collection(info.collection) is variant
        assert info.event == f"{info.collection}-update"


def test_unknown_collection():
    with pytest.raises(UnknownVariantError):
        variant_for_collection("awards")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("http://localhost:5000/uploads/1700-cert.pdf", "/uploads/1700-cert.pdf"),
        ("/uploads/1700-cert.pdf", "/uploads/1700-cert.pdf"),
        ("uploads/1700-cert.pdf", "/uploads/1700-cert.pdf"),
        ("http://host/uploads/1700-my%20cert.pdf?download=1", "/uploads/1700-my cert.pdf"),
        ("", ""),
    ],
)
def test_normalize_document_location(value, expected):
    assert normalize_document_location(value) == expected


def test_stored_document_name_strips_media_url():
    assert stored_document_name("http://testserver/uploads/1700-cert.pdf") == "1700-cert.pdf"
    assert stored_document_name("/elsewhere/x.pdf") == "elsewhere/x.pdf"
