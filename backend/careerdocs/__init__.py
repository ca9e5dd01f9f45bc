"""Backend for the AI career-document tools (resume, analysis, cover letter, headshot)."""

__version__ = "0.1.0"
