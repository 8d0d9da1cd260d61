"""Prompt bundle models.

This module defines the prompt data structures that are passed to LLM providers,
providing a unified interface for different provider formats.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class Message(BaseModel):
    """Single message in LLM conversation."""

    role: str = Field(
        ..., description="Message role: 'system', 'user', or 'assistant'"
    )
    content: str = Field(..., description="Message content")


class PromptBundle(BaseModel):
    """Complete prompt package ready for LLM.

    This is the output of a PromptStrategy and input to LLMGateway.
    Contains all information needed to make an LLM API call.
    """

    messages: List[Message] = Field(..., description="Conversation messages")

    # Model configuration
    temperature: float = Field(
        default=0.1, ge=0.0, le=2.0, description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=1024, gt=0, description="Maximum tokens in response"
    )

    # Response format (for JSON mode)
    response_format: Optional[Dict[str, Any]] = Field(
        default=None, description="Response format specification"
    )

    # Metadata for logging
    mode: str = Field(default="visa-strict", description="Translation mode used")

    @property
    def system_prompt(self) -> Optional[str]:
        """Extract system prompt from messages."""
        for msg in self.messages:
            if msg.role == "system":
                return msg.content
        return None

    @property
    def user_prompt(self) -> Optional[str]:
        """Extract user prompt from messages."""
        for msg in self.messages:
            if msg.role == "user":
                return msg.content
        return None

    def to_openai_format(self) -> List[Dict[str, str]]:
        """Convert to OpenAI API message format.

        Returns:
            List of message dicts with 'role' and 'content' keys
        """
        return [{"role": m.role, "content": m.content} for m in self.messages]
