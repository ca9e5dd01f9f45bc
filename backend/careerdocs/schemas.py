from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class RequestKind(str, Enum):
    GENERATE_RESUME = "generate-resume"
    ANALYZE_RESUME = "analyze-resume"
    GENERATE_COVER_LETTER = "generate-cover-letter"
    GENERATE_PHOTO = "generate-photo"


class ResumeStyle(str, Enum):
    MODERN = "modern"
    MINIMAL = "minimal"
    PROFESSIONAL = "professional"


class PhotoStyle(str, Enum):
    PROFESSIONAL = "professional"
    MODERN = "modern"
    CLASSIC = "classic"

    @classmethod
    def parse(cls, key: Any) -> "PhotoStyle":
        """Unrecognized keys fall back to the professional look."""
        try:
            return cls(key)
        except ValueError:
            return cls.PROFESSIONAL

    @property
    def description(self) -> str:
        return PHOTO_STYLE_DESCRIPTIONS[self]


PHOTO_STYLE_DESCRIPTIONS: Dict[PhotoStyle, str] = {
    PhotoStyle.PROFESSIONAL: (
        "corporate professional headshot with clean plain background, formal business attire, "
        "soft studio lighting, neutral expression, LinkedIn profile style"
    ),
    PhotoStyle.MODERN: (
        "contemporary professional portrait with subtle gradient background, confident expression, "
        "modern business casual look, clean and polished"
    ),
    PhotoStyle.CLASSIC: (
        "traditional formal headshot with solid neutral background, classic business attire, "
        "timeless professional appearance, passport photo quality"
    ),
}


class _Payload(BaseModel):
    # Assembled once per submit; never mutated afterwards
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _lenient_input(cls, data: Any) -> Any:
        # Form fields arrive as null or bare numbers; null means unset
        if not isinstance(data, dict):
            return data
        return {
            key: str(value) if isinstance(value, (int, float)) and not isinstance(value, bool) else value
            for key, value in data.items()
            if value is not None
        }


class Experience(_Payload):
    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""


class Education(_Payload):
    degree: str = ""
    school: str = ""
    year: str = ""


class ResumeProfile(_Payload):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    skills: Optional[str] = None
    experiences: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    style: ResumeStyle = ResumeStyle.PROFESSIONAL

    @field_validator("style", mode="before")
    @classmethod
    def _default_style(cls, value: Any) -> Any:
        if isinstance(value, ResumeStyle):
            return value
        if isinstance(value, str) and value in {s.value for s in ResumeStyle}:
            return value
        return ResumeStyle.PROFESSIONAL


class AnalyzeResumeData(_Payload):
    resume_text: Optional[str] = None
    file_name: Optional[str] = None


class CoverLetterData(_Payload):
    full_name: str = ""
    email: Optional[str] = None
    job_title: str = ""
    company_name: str = ""
    skills: Optional[str] = None
    experience: Optional[str] = None
    why_interested: Optional[str] = None


class PhotoRequest(_Payload):
    image_base64: Optional[str] = None
    style: Optional[str] = None


# Entry point A envelope. ``type`` stays a plain string so an unknown kind
# reaches the prompt builder and fails there, not in request validation.
class ResumeAIRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


class PromptPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    system: str
    user: str


# ----- Analysis result -----
Score = Annotated[int, Field(ge=0, le=100)]


class KeywordsSection(BaseModel):
    score: Score
    found: List[str]
    missing: List[str]


class GrammarSection(BaseModel):
    score: Score
    issues: List[str]


class FormattingSection(BaseModel):
    score: Score
    suggestions: List[str]


class AnalysisResult(BaseModel):
    atsScore: Score
    keywords: KeywordsSection
    grammar: GrammarSection
    formatting: FormattingSection


class ParsedAnalysis(BaseModel):
    analysis: AnalysisResult


class RawAnalysis(BaseModel):
    text: str


AnalysisOutcome = Union[ParsedAnalysis, RawAnalysis]


# ----- Responses -----
class ResultOut(BaseModel):
    result: Union[AnalysisResult, str]


class PhotoOut(BaseModel):
    image: str
    message: Optional[str] = None


class ErrorOut(BaseModel):
    error: str


class PhotoStyleOut(BaseModel):
    id: str
    description: str
