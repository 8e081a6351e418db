"""
Prompt templates for AI-assisted drafting.

Each builder returns the complete prompt text sent to the text-generation
service. The prompt wording is the only domain logic of the AI integration;
responses are consumed as plain text (or a JSON array for skills).
"""

from typing import Iterable

from vitae.contexts.editing.resume_data_structure import (
    SKILL_CATEGORIES,
    SKILL_LEVELS,
    Education,
)

SUMMARY_FOR_JOB_TEMPLATE = """You are an expert resume writer and career coach. Create a compelling professional summary for a resume that targets this specific job opportunity:

JOB DESCRIPTION:
{job_description}

REQUIREMENTS:
- Write 2-3 powerful sentences (40-60 words total)
- Use active voice and strong action verbs
- Include relevant keywords from the job description for ATS optimization
- Highlight the most valuable skills and experiences that match the role
- Quantify achievements when possible (use placeholder numbers if specific data unavailable)
- Write in third person without using "I" or the person's name
- Make it results-oriented and value-focused
- Ensure it passes ATS keyword scanning
- Use industry-specific terminology appropriately

TONE: Professional, confident, and compelling
FORMAT: 2-3 sentences, no bullet points

Example structure: "[Years] of experience in [field/industry] with proven expertise in [key skills]. Successfully [major achievement with impact]. Skilled in [relevant technologies/methods] with a track record of [measurable results]."

Generate the professional summary now:"""

SUMMARY_GENERAL_TEMPLATE = """You are an expert resume writer. Create a versatile professional summary for {name}.

REQUIREMENTS:
- Write 2-3 powerful sentences (40-60 words total)
- Use active voice and strong action verbs
- Make it adaptable to various roles and industries
- Focus on transferable skills and universal professional strengths
- Include soft skills and leadership qualities
- Write in third person without using "I" or the person's name
- Be results-oriented and achievement-focused
- Use professional, polished language

TONE: Professional, confident, and versatile
FORMAT: 2-3 sentences, no bullet points

Focus on: Leadership abilities, problem-solving skills, communication strengths, adaptability, and drive for results.

Generate the professional summary now:"""

ENHANCE_SUMMARY_TEMPLATE = """You are an expert resume writer and ATS optimization specialist. Enhance and improve this professional summary to make it more compelling and effective:

CURRENT SUMMARY:
"{summary}"

ENHANCEMENT REQUIREMENTS:
- Rewrite to be 2-3 powerful sentences (40-60 words total)
- Use stronger action verbs and more impactful language
- Make it more ATS-friendly by incorporating relevant keywords
- Improve the flow and readability
- Add more specific, results-oriented language
- Ensure it sounds professional and polished
- Remove any redundant or weak phrases
- Make every word count and add value
- Use active voice throughout
- Include quantifiable achievements where possible

IMPROVEMENTS TO FOCUS ON:
1. Replace weak verbs with strong action verbs
2. Add industry-relevant keywords
3. Make achievements more specific and measurable
4. Improve sentence structure and flow
5. Enhance professional tone
6. Optimize for both human readers and ATS systems

TONE: Professional, confident, and compelling
FORMAT: 2-3 sentences, no bullet points

Provide only the enhanced summary, no explanations or additional text:"""

EDUCATION_DESCRIPTION_TEMPLATE = """Generate a professional education description for a resume based on this degree: "{degree}".
{details}
Requirements:
- Write ONLY the description text (no headers, options, or formatting)
- Keep it to 2-3 concise sentences maximum
- Focus on skills gained, relevant coursework, and career value
- Use action words and quantifiable achievements where possible
- Make it ATS-friendly with relevant keywords
- Write in past tense for completed degrees
- Be specific about technical skills and competencies developed

Generate a single, polished description that can be directly copied into a resume."""

COURSES_TEMPLATE = """Generate relevant courses for this degree: "{degree}".
{details}
Requirements:
- Generate 8-12 specific course names that are core to this degree
- Focus on courses that demonstrate valuable technical skills
- Use modern, industry-relevant course titles
- Format as a clean comma-separated list
- No introductory text or explanations
- Course names should be concise but descriptive
- Prioritize courses that employers would recognize and value

Generate only the comma-separated course list."""

SKILLS_TEMPLATE = """Based on the following information, suggest 8-12 relevant skills that would be valuable for this professional profile:

{context}

Current skills already listed: {existing}

Please suggest NEW skills (not already in the current list) and format your response as a JSON array with objects containing:
- name: the skill name
- level: one of {levels} (be realistic based on typical requirements)
- category: one of {categories}

Focus on skills that are:
1. Relevant to the role/industry
2. In-demand in the current market
3. Not already in the existing skills list
4. A mix of technical and soft skills

Return only the JSON array, no additional text."""

INTERESTS_TEMPLATE = """Generate exactly {count} professional and impactful interests/hobbies that would enhance a resume and demonstrate valuable soft skills. Focus on activities that showcase:

- Leadership and initiative (volunteering, organizing events, mentoring)
- Creativity and innovation (photography, writing, design, music)
- Physical and mental wellness (sports, fitness, meditation, hiking)
- Technical skills (coding projects, robotics, digital art)
- Cultural awareness (travel, languages, cooking, reading)
- Community involvement (environmental causes, social work, teaching)

Requirements:
- Each interest should be 1-3 words maximum
- Make them specific but professional
- Ensure they appeal to diverse industries
- Focus on activities that show personal growth and discipline
- Return ONLY the {count} interests separated by commas, no additional text or explanations{avoid}

Example format: Photography, Rock Climbing, Volunteer Tutoring, Creative Writing, Marathon Running, Language Learning"""


def _quoted_choices(choices: Iterable[str]) -> str:
    return ", ".join(f'"{choice}"' for choice in choices)


def summary_prompt(full_name: str = "", job_description: str = "") -> str:
    """Targeted summary when a job description is given, versatile otherwise."""
    if job_description.strip():
        return SUMMARY_FOR_JOB_TEMPLATE.format(job_description=job_description)
    return SUMMARY_GENERAL_TEMPLATE.format(name=full_name or "a professional")


def enhance_summary_prompt(summary: str) -> str:
    return ENHANCE_SUMMARY_TEMPLATE.format(summary=summary)


def _education_details(education: Education, include_grades: bool) -> str:
    lines = []
    if education.school:
        lines.append(f"School: {education.school}")
    if include_grades and education.gpa:
        lines.append(f"GPA: {education.gpa}")
    if include_grades and education.honors:
        lines.append(f"Honors: {education.honors}")
    return "\n".join(lines) + "\n" if lines else ""


def education_description_prompt(education: Education) -> str:
    return EDUCATION_DESCRIPTION_TEMPLATE.format(
        degree=education.degree, details=_education_details(education, include_grades=True)
    )


def courses_prompt(education: Education) -> str:
    return COURSES_TEMPLATE.format(
        degree=education.degree, details=_education_details(education, include_grades=False)
    )


def skills_prompt(existing: Iterable[str], current_role: str = "", job_description: str = "") -> str:
    context = []
    if current_role:
        context.append(f"Current Role: {current_role}")
    if job_description:
        context.append(f"Job Description/Target Role: {job_description}")

    return SKILLS_TEMPLATE.format(
        context="\n".join(context),
        existing=", ".join(existing),
        levels=_quoted_choices(SKILL_LEVELS),
        categories=_quoted_choices(SKILL_CATEGORIES),
    )


def interests_prompt(existing: Iterable[str], count: int = 6) -> str:
    existing = list(existing)
    avoid = f"\n\nAvoid suggesting these existing interests: {', '.join(existing)}" if existing else ""
    return INTERESTS_TEMPLATE.format(count=count, avoid=avoid)
