import json
import os
import re
from typing import Any, Optional

from dotenv import load_dotenv
from langchain_core.language_models import BaseLanguageModel
from langchain_openai import ChatOpenAI

from exceptions.custom_errors import AINotConfiguredError, AIResponseError
from utils.constants import AI_MODEL, AI_TIMEOUT_SECONDS
from utils.logger import logger

load_dotenv()

FENCED_BLOCK = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def extract_json_text(text: str) -> str:
    """Strip a ```json fenced block if the model wrapped its answer in one."""
    match = FENCED_BLOCK.search(text)
    if match:
        return match.group(1)
    return text.strip()


def ai_configured() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


class LLMClient:
    """
    Thin prompt-in, text-out wrapper around a langchain model.

    Without a model every call raises AINotConfiguredError, which the copilot
    handlers turn into their fallback replies.
    """

    def __init__(self, llm: Optional[BaseLanguageModel] = None):
        self.llm = llm

    @classmethod
    def from_env(cls) -> "LLMClient":
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            return cls()
        timeout = os.getenv("OPENAI_TIMEOUT")
        llm = ChatOpenAI(
            model=os.getenv("OPENAI_MODEL", AI_MODEL),
            api_key=api_key,
            timeout=float(timeout) if timeout else AI_TIMEOUT_SECONDS,
            temperature=0,
        )
        return cls(llm)

    @property
    def configured(self) -> bool:
        return self.llm is not None

    def generate_text(self, prompt: str) -> str:
        if self.llm is None:
            raise AINotConfiguredError("OPENAI_API_KEY not found in environment variables.")

        try:
            result = self.llm.invoke(prompt)
        except Exception as e:
            # provider and transport errors differ per backend
            logger.error("LLM request failed: %s", e)
            raise AIResponseError(f"AI request failed: {e}") from e

        # chat models answer with a message, completion models with a str
        text = getattr(result, "content", result)
        if not isinstance(text, str) or not text.strip():
            raise AIResponseError("AI did not return any content.")
        return text

    def generate_json(self, prompt: str) -> Any:
        cleaned = extract_json_text(self.generate_text(prompt))
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.error("Cleaned AI output that failed to parse: %r", cleaned)
            raise AIResponseError("AI response was not valid JSON.") from e
