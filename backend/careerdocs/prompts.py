"""
Prompt templates for the career-document tools.

Every builder is a pure function of its input: the same request always
produces byte-identical prompts.
"""
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel

from .errors import UnsupportedRequestKind
from .schemas import (
    AnalyzeResumeData, CoverLetterData, PhotoStyle, PromptPair, RequestKind, ResumeProfile,
)

NOT_PROVIDED = "Not provided"

RESUME_SYSTEM_PROMPT = """You are an expert resume writer who creates ATS-optimized, professional resumes.
Generate a well-structured resume in plain text format that can be easily parsed by ATS systems.
Use clear section headers: PROFESSIONAL SUMMARY, EXPERIENCE, EDUCATION, SKILLS.
Use action verbs and quantify achievements where possible.
Keep formatting clean and professional."""

ANALYSIS_SYSTEM_PROMPT = """You are an expert ATS (Applicant Tracking System) analyst and resume coach.
Analyze resumes and provide detailed, actionable feedback in JSON format.
Be specific and helpful in your suggestions."""

ANALYSIS_SCHEMA = """{
  "atsScore": <number 0-100>,
  "keywords": {
    "score": <number 0-100>,
    "found": [<array of strong keywords found>],
    "missing": [<array of important keywords that should be added>]
  },
  "grammar": {
    "score": <number 0-100>,
    "issues": [<array of specific grammar/clarity improvement suggestions>]
  },
  "formatting": {
    "score": <number 0-100>,
    "suggestions": [<array of formatting improvement tips>]
  }
}"""

COVER_LETTER_SYSTEM_PROMPT = """You are an expert cover letter writer who creates compelling, personalized cover letters.
Write in a professional yet personable tone.
Highlight relevant skills and experience.
Show enthusiasm for the role and company."""

PHOTO_INSTRUCTION = """Transform this photo into a {description}.
Make it suitable for a professional resume or LinkedIn profile.
Ensure good lighting, clean background, and professional appearance.
Keep the person's likeness accurate while enhancing the professional quality."""


def _or_placeholder(value: Optional[str], placeholder: str = NOT_PROVIDED) -> str:
    if value is None or not value.strip():
        return placeholder
    return value


def build_resume_prompt(profile: ResumeProfile) -> PromptPair:
    summary = _or_placeholder(
        profile.summary,
        "Create a compelling 2-3 sentence professional summary based on the experience below.",
    )
    if profile.experiences:
        experience = "\n".join(
            f"- {exp.title} at {exp.company} ({exp.duration})\n  {exp.description}"
            for exp in profile.experiences
        )
    else:
        experience = "No experience provided"
    if profile.education:
        education = "\n".join(
            f"- {edu.degree} from {edu.school} ({edu.year})" for edu in profile.education
        )
    else:
        education = "No education provided"

    user = f"""Create a professional resume for:
Name: {profile.full_name or ''}
Email: {profile.email or ''}
Phone: {_or_placeholder(profile.phone)}
Location: {_or_placeholder(profile.location)}

Professional Summary: {summary}

Experience:
{experience}

Education:
{education}

Skills: {_or_placeholder(profile.skills)}

Style: {profile.style.value}

Generate a complete, polished resume ready for job applications."""
    return PromptPair(system=RESUME_SYSTEM_PROMPT, user=user)


def build_analysis_prompt(data: AnalyzeResumeData) -> PromptPair:
    if data.resume_text and data.resume_text.strip():
        resume = data.resume_text
    elif data.file_name:
        # Text extraction produced nothing; let the model know what was uploaded
        resume = f"Resume file: {data.file_name}. Please analyze and provide feedback."
    else:
        resume = "No resume text provided"

    user = f"""Analyze this resume text and provide feedback in the following JSON format:
{ANALYSIS_SCHEMA}

Resume content:
{resume}

Provide only valid JSON in your response."""
    return PromptPair(system=ANALYSIS_SYSTEM_PROMPT, user=user)


def build_cover_letter_prompt(data: CoverLetterData) -> PromptPair:
    lines = [
        "Write a professional cover letter for:",
        f"Name: {data.full_name}",
    ]
    if data.email:
        lines.append(f"Email: {data.email}")
    lines += [
        f"Job Title: {data.job_title}",
        f"Company: {data.company_name}",
        f"Key Skills: {_or_placeholder(data.skills)}",
        f"Relevant Experience: {_or_placeholder(data.experience)}",
        f"Why interested in this role: {_or_placeholder(data.why_interested)}",
        "",
        "Create a compelling cover letter that would make the hiring manager want to interview this candidate.",
    ]
    return PromptPair(system=COVER_LETTER_SYSTEM_PROMPT, user="\n".join(lines))


def build_photo_instruction(style: Any) -> str:
    return PHOTO_INSTRUCTION.format(description=PhotoStyle.parse(style).description)


_TEXT_BUILDERS = {
    RequestKind.GENERATE_RESUME: (ResumeProfile, build_resume_prompt),
    RequestKind.ANALYZE_RESUME: (AnalyzeResumeData, build_analysis_prompt),
    RequestKind.GENERATE_COVER_LETTER: (CoverLetterData, build_cover_letter_prompt),
}


def parse_kind(kind: Any) -> RequestKind:
    try:
        return RequestKind(kind)
    except ValueError:
        raise UnsupportedRequestKind(kind)


def build_prompt(kind: Any, payload: Union[Mapping[str, Any], BaseModel, None] = None) -> Union[PromptPair, str]:
    """Build the prompt(s) for one request.

    Text kinds return a system/user ``PromptPair``; ``generate-photo`` returns
    the image-edit instruction string. Raises ``UnsupportedRequestKind`` for
    anything else.
    """
    kind = parse_kind(kind)
    if kind is RequestKind.GENERATE_PHOTO:
        style = payload.get("style") if isinstance(payload, Mapping) else getattr(payload, "style", None)
        return build_photo_instruction(style)

    model_cls, builder = _TEXT_BUILDERS[kind]
    if not isinstance(payload, model_cls):
        payload = model_cls.model_validate(dict(payload or {}))
    return builder(payload)


def to_messages(prompt: PromptPair) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": prompt.system},
        {"role": "user", "content": prompt.user},
    ]


def to_photo_messages(instruction: str, image_data_url: str) -> List[Dict[str, Any]]:
    # The data-URL is forwarded by reference, never decoded here
    return [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": instruction},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        }
    ]
