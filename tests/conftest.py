"""Shared fixtures: sample resume documents, layout settings and a fake LLM provider."""

import pytest

from vitae.contexts.editing.resume_data_structure import (
    Certification,
    Education,
    Experience,
    Language,
    PersonalInfo,
    Project,
    Reference,
    ResumeDocument,
    Skill,
    SkillSet,
)
from vitae.contexts.rendering.config import LayoutConfig
from vitae.contexts.rendering.layout import LayoutState
from vitae.utils.llm import LLMProvider, LLMResponse


class FakeProvider(LLMProvider):
    """Provider returning canned replies and recording prompts."""

    _provider_prefix = "fake"

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []
        self.update_model("test-model")

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.prompts.append(user_prompt)
        if self.error:
            raise self.error
        content = self.replies.pop(0) if self.replies else ""
        return LLMResponse(content=content, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture
def fake_provider():
    return FakeProvider


@pytest.fixture
def layout_config():
    return LayoutConfig()


@pytest.fixture
def layout_state(layout_config):
    return LayoutState(layout_config)


@pytest.fixture
def minimal_document():
    return ResumeDocument(personal=PersonalInfo(full_name="Jane Doe"))


@pytest.fixture
def full_document():
    return ResumeDocument(
        personal=PersonalInfo(
            full_name="Jane Doe",
            email="jane.doe@example.com",
            phone="555 0100",
            location="Boston, MA",
            summary=(
                "Data engineer with eight years of experience building reliable batch and "
                "streaming pipelines for analytics teams."
            ),
        ),
        experience=[
            Experience(
                id=1,
                company="Acme Analytics",
                position="Senior Data Engineer",
                location="Boston, MA",
                start_date="2020-01",
                end_date="",
                description="• Built streaming ingestion for 40 sources\n- Cut warehouse costs by 30%",
            ),
            Experience(
                id=2,
                company="Globex",
                position="Data Engineer",
                start_date="2016-06",
                end_date="2019-12",
                description="Maintained nightly ETL jobs",
            ),
        ],
        education=[
            Education(
                id=1,
                school="State University",
                degree="BSc Computer Science",
                location="Springfield",
                start_date="2012-09",
                end_date="2016-05",
                gpa="3.8",
                honors="Cum Laude",
                description="Focus on distributed systems and databases.",
                courses="Databases, Algorithms, Operating Systems, Statistics, Compilers",
            )
        ],
        skills=SkillSet.enhanced(
            [
                Skill(name="Python", level="Expert", category="Technical"),
                Skill(name="SQL", level="Advanced", category="Technical"),
                Skill(name="Kafka", level="Advanced", category="Tool"),
                Skill(name="Leadership", level="Intermediate", category="Soft"),
                Skill(name="AI", level="Intermediate", category="Technical"),
            ]
        ),
        projects=[
            Project(
                id=1,
                name="Pipeline Monitor",
                description="Dashboard for job health",
                technologies="Python, Grafana",
                link="https://example.com/monitor",
                start_date="2021-03",
                end_date="2021-09",
            ),
            Project(id=2, name="", description="Unnamed draft project"),
        ],
        certifications=[
            Certification(
                id=1,
                name="Cloud Data Engineer",
                issuer="Example Cloud",
                date="2022-04",
                expiration="2025-04",
                credential_id="ABC123",
                verification_link="https://example.com/verify/ABC123",
            )
        ],
        languages=[
            Language(id=1, language="Spanish", proficiency="Fluent"),
            Language(id=2, language="English", proficiency="Native"),
        ],
        interests=["Rock Climbing", "Chess", "Photography"],
        references=[
            Reference(
                id=1,
                name="Dr. Alan Smith",
                title="Director of Data",
                company="Acme Analytics",
                relationship="Manager",
                email="alan.smith@example.com",
                phone="555 0199",
            )
        ],
    )
