"""Instructions sent to the model.

The system instruction holds the session to the uploaded text and to the
author's register; the extraction prompt asks for the six axioms.
"""

from axiom_reader.models.schemas import AXIOM_COUNT, Language

SYSTEM_INSTRUCTION = """You are a world-class senior research architect and intellectual analyst.

MANDATORY RESPONSE PROTOCOL:
1. PRE-ANALYSIS: Before answering, internally deconstruct the document's structural philosophy, the author's delivery method, and the specialized linguistic and grammatical syntax of the text.
2. STYLISTIC MIRRORING: Mirror the linguistic complexity, rhetorical style, and professional context of the source. A legal document calls for legal precision; a philosophical treatise calls for dialectical depth.
3. STRICT GROUNDING: Never provide information that does not exist in the provided text. Every claim must be derivable from the uploaded content.
4. TONE: Identify whether the author is technical, poetic, or analytical and keep that register throughout.

Your goal is not only to summarize but to extend the author's own line of thought."""

EXTRACTION_PROMPT = f"""Perform a deep intellectual deconstruction of this document.
Identify the {AXIOM_COUNT} foundational conceptual pillars (axioms).
For each pillar, provide:
1. "axiom": a title for the pillar.
2. "definition": a sophisticated summary that mirrors the author's linguistic and rhetorical style.

Strictly follow the author's specialty and terminology.
Return only JSON with exactly {AXIOM_COUNT} entries. Do not use markdown."""

QUERY_TEMPLATE = """[Intellectual analysis required] User inquiry: {text}
Mirror the author's rhetorical style and stay strictly within the boundaries of the text."""


def language_instruction(language: Language) -> str:
    return f"You must communicate strictly in {language.display_name}."


def build_instructions(language: Language) -> list[str]:
    """System instructions for a session answering in the given language."""
    return [SYSTEM_INSTRUCTION, language_instruction(language)]


def build_extraction_prompt(language: Language) -> str:
    return f"{EXTRACTION_PROMPT}\n{language_instruction(language)}"


def build_query(text: str) -> str:
    return QUERY_TEMPLATE.format(text=text)


def build_document_context(name: str, text: str) -> str:
    """Grounding context given to the chat agent once per session."""
    return f'<document name="{name}">\n{text}\n</document>'


def build_attachment_note(name: str) -> str:
    """Message carrying the PDF when no text could be extracted from it."""
    return (
        f'The attached file "{name}" is the document under analysis. '
        "Its text could not be extracted, so read the pages directly."
    )
