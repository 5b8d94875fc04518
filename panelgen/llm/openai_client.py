import logging

from pydantic import ValidationError
from openai import AsyncOpenAI

from panelgen.core.config import settings
from panelgen.schemas.panel_schema import PanelLLMResponse

logger = logging.getLogger(__name__)


class OpenAIClient:
    def __init__(self, model_name="gpt-4o-mini"):
        self.client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        self.model_name = model_name


    async def generate(self, prompt: dict) -> PanelLLMResponse | None:
        """ Generates panel (structured output)"""
        logger.info("Requesting panel from %s", self.model_name)

        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "system", "content": prompt.get("system_prompt")},
                      {"role": "user", "content": prompt.get("user_prompt")}],
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content
        logger.debug("Raw JSON:\n%s", content)

        panel = None

        # ---------- VALIDATION ----------
        try:
            panel = PanelLLMResponse.model_validate_json(content or "")
        except ValidationError as e:
            logger.warning("Validation of %s response failed: %s", self.model_name, e)

        # ---------- TOKEN USAGE ----------
        if response.usage:
            usage = response.usage
            logger.info(
                "Token usage: prompt %s, completion %s, total %s",
                usage.prompt_tokens, usage.completion_tokens, usage.total_tokens,
            )

        return panel
