"""
Integration tests for ATS keyword embedding.
Tests: job description → hidden text layer → extractable but not visible.
"""

import pytest

from vitae.contexts.rendering import export_resume
from vitae.contexts.rendering.config import load_layout_config
from vitae.utils.pdf_processing import PDFDocument, extract_stream_text, normalize_for_matching

JOB_DESCRIPTION = (
    "We are hiring a platform engineer with Kubernetes, Terraform and Prometheus "
    "experience to run our infrastructure across regions. " * 8
)


@pytest.mark.integration
def test_job_keywords_are_extractable(minimal_document):
    result = export_resume(minimal_document, job_description=JOB_DESCRIPTION)

    assert result.ats_characters == len(JOB_DESCRIPTION.strip())
    assert result.page_count == 1
    # Embedding does not count as a section
    assert result.sections == ["header"]

    stream_text = normalize_for_matching(extract_stream_text(result.pdf_bytes))
    for keyword in ("kubernetes", "terraform", "prometheus", "regions"):
        assert keyword in stream_text


@pytest.mark.integration
def test_job_keywords_are_not_visible(minimal_document):
    result = export_resume(minimal_document, job_description=JOB_DESCRIPTION)

    visible = PDFDocument(result.pdf_bytes, min_font_size=1.0).full_text()
    assert "Kubernetes" not in visible
    assert "Jane Doe" in visible

    everything = PDFDocument(result.pdf_bytes, min_font_size=0).full_text()
    assert "kubernetes" in normalize_for_matching(everything)


@pytest.mark.integration
@pytest.mark.parametrize("job_description", [None, "", "   "])
def test_blank_job_description_embeds_nothing(minimal_document, job_description):
    result = export_resume(minimal_document, job_description=job_description)
    assert result.ats_characters == 0


@pytest.mark.integration
def test_dense_preset(minimal_document):
    config = load_layout_config(presets=["ats_dense"])
    result = export_resume(minimal_document, job_description=JOB_DESCRIPTION, config=config)

    assert config.ats.chunk_size == 250
    assert result.ats_characters == len(JOB_DESCRIPTION.strip())
