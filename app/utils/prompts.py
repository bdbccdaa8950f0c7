"""
Prompt templates for the species chat assistant.
All prompt strings live here — no hardcoded prompts elsewhere in the codebase.
"""

from __future__ import annotations

from typing import Sequence

from app.schemas.chat import ChatMessage

SPECIES_SYSTEM_PROMPT = (
    "You are a quirky, enthusiastic species and animal expert who gets genuinely "
    "excited about cool animal facts. Sprinkle in fun tidbits and share your passion, "
    "but keep things concise. Only answer questions about animals, species, habitats, "
    "diets, conservation status, and related biological topics. If someone asks about "
    "something unrelated, playfully steer them back to the animal kingdom. Respond in "
    "plain text paragraphs only. Do not use markdown, bullet points, numbered lists, "
    "tables, or any special formatting."
)


def build_chat_messages(
    system_prompt: str,
    history: Sequence[ChatMessage],
    message: str,
) -> list[dict[str, str]]:
    """
    Compose the outbound conversation: system instruction, prior turns in
    order, then the new user message.
    """
    messages = [{"role": "system", "content": system_prompt}]
    messages.extend({"role": turn.role, "content": turn.content} for turn in history)
    messages.append({"role": "user", "content": message})
    return messages
