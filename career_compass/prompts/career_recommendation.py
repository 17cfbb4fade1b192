"""Career recommendation prompt templates.

Contains the counselor system prompt, the static career-taxonomy context,
the JSON output template, and the builder that assembles them with a
formatted answer transcript into one completion request.
"""

from collections.abc import Sequence

from career_compass.providers.llm.base import CompletionRequest, LLMMessage, TaskType
from career_compass.services.answer_formatter import FormattedAnswer

RECOMMENDATION_TEMPERATURE = 0.7
RECOMMENDATION_MAX_TOKENS = 4000

MIN_CAREERS = 3
MAX_CAREERS = 5

CAREER_COUNSELOR_SYSTEM_PROMPT = (
    "You are an expert career counselor with deep knowledge of various "
    "professions, required skills, and career paths. Provide detailed, "
    "accurate, and practical career recommendations based on user assessment "
    "answers. Always respond with valid JSON."
)

# Category → (specialization, one-line summary)
CAREER_CATEGORIES: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Technology and Innovation",
        (
            ("Software Development", "Creating applications and systems"),
            ("Data Science", "Analyzing and interpreting complex data"),
            ("Cybersecurity", "Protecting digital systems and data"),
            ("AI/ML Engineering", "Developing intelligent systems"),
            ("Cloud Computing", "Managing and deploying cloud services"),
        ),
    ),
    (
        "Business and Finance",
        (
            ("Financial Analysis", "Evaluating investments and markets"),
            ("Business Consulting", "Advising companies on strategy"),
            ("Project Management", "Leading and organizing projects"),
            ("Marketing", "Promoting products and services"),
            ("Entrepreneurship", "Starting and managing businesses"),
        ),
    ),
    (
        "Healthcare and Medicine",
        (
            ("Medical Practice", "Diagnosing and treating patients"),
            ("Nursing", "Providing patient care and support"),
            ("Medical Research", "Conducting health studies"),
            ("Healthcare Administration", "Managing medical facilities"),
            ("Public Health", "Improving community health"),
        ),
    ),
    (
        "Arts and Creativity",
        (
            ("Graphic Design", "Creating visual content"),
            ("Writing/Editing", "Producing written content"),
            ("Music/Performing Arts", "Entertaining and creating art"),
            ("Architecture", "Designing buildings and spaces"),
            ("Film/Media Production", "Creating visual media"),
        ),
    ),
    (
        "Science and Research",
        (
            ("Scientific Research", "Conducting experiments"),
            ("Environmental Science", "Studying ecosystems"),
            ("Physics/Chemistry", "Exploring natural phenomena"),
            ("Biology", "Studying living organisms"),
            ("Astronomy", "Exploring space"),
        ),
    ),
    (
        "Education and Training",
        (
            ("Teaching", "Educating students"),
            ("Educational Administration", "Managing schools"),
            ("Curriculum Development", "Creating educational content"),
            ("Training", "Developing professional skills"),
            ("Educational Technology", "Implementing tech in education"),
        ),
    ),
    (
        "Social Services",
        (
            ("Social Work", "Supporting individuals and communities"),
            ("Counseling", "Providing mental health support"),
            ("Non-profit Management", "Leading charitable organizations"),
            ("Community Development", "Improving neighborhoods"),
            ("Human Services", "Assisting vulnerable populations"),
        ),
    ),
    (
        "Engineering and Construction",
        (
            ("Civil Engineering", "Designing infrastructure"),
            ("Mechanical Engineering", "Creating mechanical systems"),
            ("Electrical Engineering", "Working with electrical systems"),
            ("Construction Management", "Overseeing building projects"),
            ("Architecture", "Designing structures"),
        ),
    ),
)

RESPONSE_JSON_TEMPLATE = """{
  "analysis": "Detailed analysis of the user's profile, interests, and potential career paths",
  "careers": [
    {
      "title": "Career Title",
      "industry": "Industry Sector",
      "description": "Detailed description of the career",
      "skills": ["Required skill 1", "Required skill 2"],
      "qualifications": ["Required qualification 1", "Required qualification 2"],
      "salaryRange": {
        "entry": "Entry level salary range",
        "mid": "Mid-career salary range",
        "senior": "Senior level salary range"
      },
      "growth": "Career growth opportunities and progression paths",
      "matchReason": "Why this career matches their profile",
      "nextSteps": ["Step 1", "Step 2", "Step 3"],
      "challenges": "Potential challenges and solutions",
      "relatedCareers": ["Related career 1", "Related career 2"]
    }
  ],
  "recommendations": {
    "skills": ["Skill 1 to develop", "Skill 2 to develop"],
    "certifications": ["Certification 1", "Certification 2"],
    "networking": "Networking opportunities and strategies",
    "organizations": ["Organization 1", "Organization 2"],
    "resources": ["Resource 1", "Resource 2"]
  }
}"""

_USER_PROMPT_TEMPLATE = """\
You are an expert career counselor with deep knowledge of various professions, \
required skills, and career paths. Analyze the following assessment answers and \
provide detailed career recommendations.

Assessment Answers:
{transcript}

Career Context:
{career_context}

Please provide:
1. A comprehensive analysis of the user's profile based on their answers, focusing on:
   - Their primary interests and skills
   - Work environment preferences
   - Educational aspirations
   - Schedule preferences
   - Potential career paths that align with their profile

2. {min_careers}-{max_careers} career recommendations that match their interests, \
skills, and preferences, including for each:
   - Career title and industry
   - Detailed description of the role
   - Required skills and qualifications
   - Typical salary range (entry to senior level)
   - Career growth opportunities and progression paths
   - Why this career matches their profile
   - Specific next steps to pursue this career
   - Potential challenges and how to overcome them
   - Related career options to consider

3. Additional recommendations:
   - Skills to develop
   - Certifications or courses to consider
   - Networking opportunities
   - Professional organizations to join
   - Resources for further exploration

Format your response as a JSON object with this structure:
{json_template}"""


def build_transcript(formatted_answers: Sequence[FormattedAnswer]) -> str:
    """Render question/answer pairs as a ``Q:``/``A:`` transcript.

    Pairs are separated by a blank line, in the order given.
    """
    return "\n\n".join(
        f"Q: {qa.question_text}\nA: {qa.answer_text}" for qa in formatted_answers
    )


def build_career_context() -> str:
    """Render the static career taxonomy as a numbered outline."""
    sections = []
    for number, (category, specializations) in enumerate(CAREER_CATEGORIES, start=1):
        lines = [f"{number}. {category}:"]
        lines.extend(f"   - {name}: {summary}" for name, summary in specializations)
        sections.append("\n".join(lines))
    return "\n\n".join(sections)


def build_recommendation_prompt(formatted_answers: Sequence[FormattedAnswer]) -> str:
    """Build the user prompt for career recommendation.

    Args:
        formatted_answers: Question/answer pairs from the answer formatter.

    Returns:
        Formatted user prompt string.
    """
    return _USER_PROMPT_TEMPLATE.format(
        transcript=build_transcript(formatted_answers),
        career_context=build_career_context(),
        min_careers=MIN_CAREERS,
        max_careers=MAX_CAREERS,
        json_template=RESPONSE_JSON_TEMPLATE,
    )


def build_recommendation_request(
    formatted_answers: Sequence[FormattedAnswer],
) -> CompletionRequest:
    """Build the completion request for career recommendation.

    Pure and deterministic: identical answers always yield an identical
    request. Sampling parameters are fixed constants.

    Args:
        formatted_answers: Question/answer pairs from the answer formatter.

    Returns:
        CompletionRequest with one system and one user message.
    """
    return CompletionRequest(
        messages=(
            LLMMessage(role="system", content=CAREER_COUNSELOR_SYSTEM_PROMPT),
            LLMMessage(
                role="user", content=build_recommendation_prompt(formatted_answers)
            ),
        ),
        task=TaskType.CAREER_RECOMMENDATION,
        temperature=RECOMMENDATION_TEMPERATURE,
        max_tokens=RECOMMENDATION_MAX_TOKENS,
    )
