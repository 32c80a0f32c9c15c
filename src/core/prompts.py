"""Prompt builders for the five generation operations.

Por qué aquí:
- Los textos de prompt son contrato con el modelo (estructura JSON pedida);
  viven juntos para que el orquestador solo componga y llame.
"""

from __future__ import annotations

from typing import Sequence

from core.domain.models import UserProfile
from core.domain.professions import profession_context

_INCLUDE_CODE = "Include relevant code examples and technical snippets where appropriate."
_OMIT_CODE = (
    "IMPORTANT: Do NOT include code examples or technical snippets. Focus on conceptual explanations, "
    "real-world applications, and business/practical perspectives."
)


def personalize_prompt(base_prompt: str, profile: UserProfile | None) -> str:
    """Append profession, code-preference and focus text for `profile`."""

    if profile is None:
        return base_prompt

    parts = [base_prompt]
    if profile.profession:
        context = profession_context(profile.profession)
        parts.append(f"IMPORTANT: Tailor content for a {context.title}. {context.guidance}")

    prefs = profile.learning_preferences
    parts.append(_INCLUDE_CODE if prefs.include_code else _OMIT_CODE)

    if prefs.preferred_example_types:
        parts.append(f"Preferred example types: {', '.join(prefs.preferred_example_types)}.")
    if prefs.focus_areas:
        parts.append(f"Focus on: {', '.join(prefs.focus_areas)}.")

    return "\n\n".join(parts)


def learning_plan_prompt(*, topic: str, duration_days: int, level: str, daily_time: str) -> str:
    return (
        f'Create a {duration_days}-day learning plan for "{topic}" for a {level} learner who can study '
        f"{daily_time} daily.\n\n"
        "IMPORTANT: Provide only brief overviews (1-2 sentences) for each subtopic explanation. The detailed "
        "content will be fetched separately when needed.\n\n"
        "Return ONLY a JSON object with this exact structure:\n"
        "{\n"
        '  "days": [\n'
        "    {\n"
        '      "day": 1,\n'
        '      "title": "Day title",\n'
        '      "subtopics": ["subtopic1", "subtopic2", "subtopic3"],\n'
        '      "explanations": ["Brief overview of subtopic1", "Brief overview of subtopic2", '
        '"Brief overview of subtopic3"]\n'
        "    }\n"
        "  ]\n"
        "}\n\n"
        "Each day should have 3-5 subtopics with brief explanations (1-2 sentences each). Keep explanations "
        "concise as detailed content will be loaded on-demand."
    )


def detailed_content_prompt(*, topic: str, day_title: str, subtopic: str, level: str) -> str:
    return (
        "Create comprehensive educational content for this subtopic. Focus on clear, well-structured "
        "explanations.\n\n"
        f"Main Topic: {topic}\n"
        f"Day: {day_title}\n"
        f"Subtopic: {subtopic}\n"
        f"Level: {level}\n\n"
        "Create detailed content with:\n"
        "- Clear explanations using proper formatting\n"
        "- Use **bold** for important concepts\n"
        "- Use `code` for inline code snippets\n"
        "- Use ```language\\ncode here\\n``` for multi-line code\n"
        "- Include practical examples and real-world applications\n"
        "- Structure content with headers (# ## ###) where appropriate\n\n"
        "CRITICAL: Return ONLY valid JSON with proper double quotes (no backticks). Use this exact structure:\n"
        "{\n"
        '  "content": "Detailed explanation with proper formatting and structure",\n'
        '  "keyPoints": ["Key concept 1", "Key concept 2", "Key concept 3"],\n'
        '  "examples": ["Practical example 1", "Practical example 2"],\n'
        '  "practicalApplications": ["Real-world application 1", "Real-world application 2"]\n'
        "}\n\n"
        "Make the content comprehensive, educational, and well-formatted. Ensure all strings use double "
        "quotes and escape any internal quotes properly."
    )


def lesson_context(day_title: str, subtopics: Sequence[str], explanations: Sequence[str]) -> str:
    """Plain-text lesson summary used as quiz content and tutor context."""

    return f"Day: {day_title}\nSubtopics: {', '.join(subtopics)}\nExplanations: " + "\n\n".join(explanations)


def quiz_prompt(*, day_title: str, subtopics: Sequence[str], explanations: Sequence[str]) -> str:
    content = lesson_context(day_title, subtopics, explanations)
    return (
        "Based on this lesson content, create exactly 3 multiple choice questions and 2 theory questions.\n\n"
        f"Lesson Content:\n{content}\n\n"
        "IMPORTANT: Create questions that test actual understanding, not just memorization. Include detailed "
        "explanations for correct answers.\n\n"
        "Return ONLY a JSON object with this exact structure (use double quotes only):\n"
        "{\n"
        '  "mcq": [\n'
        "    {\n"
        '      "question": "Specific, detailed question text",\n'
        '      "options": ["Option A", "Option B", "Option C", "Option D"],\n'
        '      "correct_answer": "Option A",\n'
        '      "explanation": "Detailed explanation of why this is correct and why others are wrong"\n'
        "    }\n"
        "  ],\n"
        '  "theory": [\n'
        "    {\n"
        '      "question": "Theory question requiring detailed explanation",\n'
        '      "correct_answer": "Comprehensive ideal answer with key concepts",\n'
        '      "key_points": ["Key point 1", "Key point 2", "Key point 3"]\n'
        "    }\n"
        "  ]\n"
        "}\n\n"
        "Make questions challenging and test deep understanding of the concepts taught."
    )


def grading_prompt(*, question: str, user_answer: str, correct_answer: str, key_points: Sequence[str]) -> str:
    return (
        "Grade this theory answer on a scale of 0-10 based on accuracy, completeness, and understanding.\n\n"
        f"Question: {question}\n"
        f"Correct Answer: {correct_answer}\n"
        f"Key Points to Cover: {', '.join(key_points)}\n"
        f"User Answer: {user_answer}\n\n"
        "Provide detailed, constructive feedback. Check if the user's answer covers the key concepts and "
        "demonstrates understanding.\n\n"
        "Return ONLY a JSON object (use double quotes only):\n"
        "{\n"
        '  "score": 8,\n'
        '  "feedback": "Detailed feedback explaining the score",\n'
        '  "strengths": ["What the user did well"],\n'
        '  "improvements": ["Areas for improvement"]\n'
        "}\n\n"
        "Be fair, thorough, and educational in your assessment."
    )


def tutor_prompt(*, context: str, question: str) -> str:
    return (
        "You are an AI tutor helping a student learn. Based on today's lesson context, answer their question "
        "clearly and helpfully.\n\n"
        f"Lesson Context:\n{context}\n\n"
        f"Student Question: {question}\n\n"
        "Provide a comprehensive answer with:\n"
        "- Clear explanation of the concept\n"
        "- Code examples if relevant (use proper formatting)\n"
        "- Related concepts they should know\n"
        "- Suggestions for further learning\n\n"
        "Format your response with proper structure including **bold** for emphasis, `code` for inline code, "
        "and ```language\ncode\n``` for code blocks.\n\n"
        "Return ONLY a JSON object (use double quotes only):\n"
        "{\n"
        '  "answer": "Detailed formatted answer with proper markdown formatting",\n'
        '  "codeExamples": ["example1", "example2"],\n'
        '  "relatedConcepts": ["concept1", "concept2"],\n'
        '  "furtherReading": ["resource1", "resource2"]\n'
        "}\n\n"
        "Make the response educational and engaging."
    )
