"""
Integration tests for PDF export.
Tests: ResumeDocument → export_resume → PDF text read back with pdfplumber.
"""

from io import BytesIO

import pdfplumber
import pytest

from vitae.contexts.editing.resume_data_structure import Experience
from vitae.contexts.rendering import export_resume
from vitae.contexts.rendering.config import load_layout_config
from vitae.utils.pdf_processing import PDFDocument, find_section_header, page_count


@pytest.mark.integration
def test_name_only_resume(minimal_document):
    """Only the header is drawn when nothing else is filled in."""
    result = export_resume(minimal_document)

    assert result.sections == ["header"]
    assert result.page_count == 1
    assert result.filename == "Jane_Doe_Resume.pdf"
    assert result.pdf_bytes.startswith(b"%PDF")
    assert result.pdf_path is None

    pdf = PDFDocument(result.pdf_bytes)
    assert pdf.page_count == 1
    assert pdf.full_text().strip() == "Jane Doe"


@pytest.mark.integration
def test_full_resume_sections(full_document, tmp_path):
    """Every filled section is drawn in display order and written to disk."""
    result = export_resume(full_document, output_path=tmp_path)

    assert result.sections == [
        "header",
        "summary",
        "experience",
        "education",
        "skills",
        "projects",
        "certifications",
        "languages",
        "interests",
        "references",
    ]
    assert result.pdf_path == tmp_path / "Jane_Doe_Resume.pdf"
    assert result.pdf_path.read_bytes() == result.pdf_bytes
    assert page_count(result.pdf_path) == result.page_count

    pdf = PDFDocument(result.pdf_path)
    text = pdf.full_text()
    lines = text.split("\n")

    # Headers are upper-cased
    assert find_section_header("PROFESSIONAL EXPERIENCE", lines) is not None
    assert find_section_header("CORE COMPETENCIES & TECHNICAL SKILLS", lines) is not None
    assert find_section_header("Relevant Coursework", lines) is not None

    assert "Jan 2020 – Present" in text
    assert "Built streaming ingestion for 40 sources" in text
    assert "Pipeline Monitor" in text
    assert "Unnamed draft project" not in text
    assert pdf.find("Spanish (Fluent)") is not None
    assert pdf.find("Dr. Alan Smith") is not None

    # Five sorted skills fill two columns: AI/Kafka/Leadership | Python/SQL
    assert any("AI" in line and "Python" in line for line in lines)
    assert any("Kafka" in line and "SQL" in line for line in lines)


@pytest.mark.integration
def test_explicit_output_file(minimal_document, tmp_path):
    output = tmp_path / "nested" / "cv.pdf"
    result = export_resume(minimal_document, output_path=output)
    assert result.pdf_path == output
    assert output.exists()


@pytest.mark.integration
def test_long_resume_paginates(minimal_document):
    minimal_document.experience = [
        Experience(
            id=i + 1,
            company=f"Company {i}",
            position="Engineer",
            start_date="2015-01",
            end_date="2016-01",
            description="\n".join(f"Delivered project {j} for client {i}" for j in range(8)),
        )
        for i in range(12)
    ]

    result = export_resume(minimal_document)

    assert result.page_count > 1
    pdf = PDFDocument(result.pdf_bytes)
    assert pdf.page_count == result.page_count
    assert pdf.find("Company 11") is not None


@pytest.mark.integration
def test_letter_preset_page_size(minimal_document):
    config = load_layout_config(presets=["page_letter"])
    result = export_resume(minimal_document, config=config)

    with pdfplumber.open(BytesIO(result.pdf_bytes)) as opened:
        page = opened.pages[0]
        assert page.width == pytest.approx(612, abs=0.5)
        assert page.height == pytest.approx(792, abs=0.5)
