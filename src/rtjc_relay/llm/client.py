"""OpenAI client wrapper for article summaries.

The summarizer sees a single text blob ("title - body") and returns
free-form prose.
"""

from typing import Optional
from openai import OpenAI, OpenAIError
from ..errors import SummaryError
from ..log import get_logger
from .prompts import DEFAULT_SUMMARY_PROMPT, load_prompt

logger = get_logger("llm")

class OpenAISummary:
    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        max_tokens: int = 1024,
        prompt: Optional[str] = None,
        client: Optional[OpenAI] = None,
    ):
        self.client = client or OpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.prompt = prompt or load_prompt("summary", default=DEFAULT_SUMMARY_PROMPT)

    def summary(self, text: str) -> str:
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": self.prompt},
                    {"role": "user", "content": text},
                ],
            )
        except OpenAIError as e:
            raise SummaryError(self.model, f"openai request failed: {e}") from e

        if not completion.choices:
            raise SummaryError(self.model, "openai returned no choices")
        content = completion.choices[0].message.content or ""
        logger.debug(f"summary of {len(text)} chars -> {len(content)} chars")
        return content.strip()
